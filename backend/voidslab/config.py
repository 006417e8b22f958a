"""
Application configuration from environment variables.
Loads .env from the backend directory so secrets are found regardless of cwd.
"""
import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env next to backend/ (parent of voidslab/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)
else:
    # Fallback: backend/.env relative to cwd (e.g. when running from repo root)
    _cwd_env = Path(os.getcwd()) / "backend" / ".env"
    if _cwd_env.exists():
        from dotenv import load_dotenv
        load_dotenv(_cwd_env, override=False)

DEFAULT_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database: sqlite for local runs and tests, postgresql for production
    database_url: str = "sqlite:///./voidslab_dev.db"

    # Environment: set ENV=production in production; used to enforce SECRET_KEY.
    env: str = ""

    # JWT. Tokens are self-contained and cannot be revoked before exp.
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Registration with this code creates an admin. Empty disables admin sign-up.
    admin_code: str = ""

    bcrypt_rounds: int = 12

    # Mail (Resend). Without an API key mails are only logged.
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"
    mail_from: str = "Void's Laboratory <onboarding@resend.dev>"
    mail_timeout_seconds: float = 10.0

    # Public URL of the site; the verification link points at {app_base_url}/verify
    app_base_url: str = "http://localhost:5000"

    # Static front-end (index.html + assets). Missing directory disables serving.
    frontend_dir: Path = Path("./frontend")

    # CORS: comma-separated origins
    cors_origins: str = "*"

    port: int = 5000

    debug: bool = False

    @property
    def is_production(self) -> bool:
        return (self.env or "").strip().lower() == "production"

    @property
    def mail_configured(self) -> bool:
        return bool((self.resend_api_key or "").strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
