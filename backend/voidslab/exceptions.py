"""
Domain errors raised by the services and the auth guard.
Each carries the HTTP status and the plain message the client sees; the handler
registered in voidslab.main renders them as {"message": ...}.
"""
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateUser(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidToken(AppError):
    """Unknown/consumed verification token, or a JWT that fails validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid token"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class UnverifiedAccount(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Please verify your email first"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Please authenticate"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Admin access required"


class ServerError(AppError):
    pass
