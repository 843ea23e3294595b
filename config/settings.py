import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Always load .env from the project root
load_dotenv(dotenv_path=os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


class ConfigurationError(RuntimeError):
    """Raised when a required process-wide setting is missing."""


def _required(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(
            f"{name} must be set. Refusing to start without it."
        )
    return value


class Settings:
    def __init__(self):
        self.database_url: str = _required("DATABASE_URL")
        self.secret_key: str = _required("SECRET_KEY")
        self.access_token_expire_minutes: int = int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7))
        )

        self.resend_api_key: Optional[str] = os.getenv("RESEND_API_KEY") or None
        self.quotes_from_email: str = os.getenv("QUOTES_FROM_EMAIL", "quotes@driptech.co.ke")

        origins = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins: List[str] = [o.strip() for o in origins.split(",") if o.strip()]

        self.admin_email: Optional[str] = os.getenv("ADMIN_EMAIL") or None
        self.admin_password: Optional[str] = os.getenv("ADMIN_PASSWORD") or None

        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process. Raises ConfigurationError when incomplete."""
    return Settings()
