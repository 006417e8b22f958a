"""
Void's Laboratory backend: registration, email verification, JWT login, category-scoped challenges.
"""
