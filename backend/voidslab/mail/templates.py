"""
Email bodies (jinja2, autoescaped).
"""
from urllib.parse import quote

from jinja2 import Environment, select_autoescape

_env = Environment(autoescape=select_autoescape(default_for_string=True))

VERIFICATION_SUBJECT = "Verify Your Email - Void's Laboratory"

VERIFICATION_TEMPLATE = _env.from_string(
    """<h2>Welcome to Void's Laboratory{% if full_name %}, {{ full_name }}{% endif %}!</h2>
<p>Please verify your email by clicking the link below:</p>
<a href="{{ verify_url }}">Verify Email</a>
"""
)


def verification_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/verify?token={quote(token, safe='')}"


def render_verification_email(base_url: str, token: str, full_name: str | None = None) -> str:
    return VERIFICATION_TEMPLATE.render(verify_url=verification_url(base_url, token), full_name=full_name)
