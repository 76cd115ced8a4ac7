"""
Environment configuration via pydantic_settings.

This is the SINGLE SOURCE OF TRUTH for all environment variables.
Django settings files import from here; they never read os.environ directly.

Usage:
    from src.config.env import env
    env.SECRET_KEY
    env.settings_module

Environment switching:
    - DJANGO_ENV is read ONCE here to determine the environment.
    - env.settings_module names the matching settings file; manage.py,
      wsgi.py and asgi.py export it as DJANGO_SETTINGS_MODULE.
    - The .env file is loaded automatically (defaults to .env.backend).
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent.parent  # project root (above src/)

SETTINGS_MODULES = {
    "development": "src.config.django.base",
    "production": "src.config.django.prod",
    "test": "src.config.django.test",
}


class AppSettings(BaseSettings):
    """
    All environment variables in one place.
    Fields have sensible dev defaults; production overrides via .env.backend.
    """

    model_config = SettingsConfigDict(
        env_file=".env.backend",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore env vars not declared here
        case_sensitive=False,
    )

    # ── Environment switch ──────────────────────────────────────────────
    # "development" | "production" | "test"
    DJANGO_ENV: str = Field(default="development")

    # ── Django core ─────────────────────────────────────────────────────
    SECRET_KEY: str = "insecure-dev-key-change-in-production"
    DEBUG: bool = True
    ALLOWED_HOSTS: list[str] = ["localhost", "127.0.0.1"]

    # ── Database ────────────────────────────────────────────────────────
    POSTGRES_USER: str = "orghub"
    POSTGRES_PASSWORD: str = "changeme_postgres"
    POSTGRES_DB: str = "orghub"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    @property
    def DATABASE_URL(self) -> str:
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # ── JWT ─────────────────────────────────────────────────────────────

    JWT_ACCESS_TOKEN_LIFETIME_MINUTES: int = 30
    JWT_REFRESH_TOKEN_LIFETIME_DAYS: int = 7
    JWT_SIGNING_KEY: str = ""

    @property
    def jwt_signing_key(self) -> str:
        return self.JWT_SIGNING_KEY or self.SECRET_KEY

    # ── Platform ────────────────────────────────────────────────────────
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""
    ADMIN_NAME: str = ""

    # Fee used when an organization's collection data omits one.
    DEFAULT_STUDENT_FEE: int = 150

    # Default page size for post and comment listings.
    PAGE_SIZE: int = 20

    # Upper bound for JSON request bodies carrying data URIs.
    MAX_REQUEST_BODY_MB: int = 10

    # ── Logging ─────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── CORS ────────────────────────────────────────────────────────────
    CORS_ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # ── Gunicorn ────────────────────────────────────────────────────────
    GUNICORN_WORKERS: int = 4
    GUNICORN_BIND: str = "0.0.0.0:8899"

    @field_validator("DJANGO_ENV")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "production", "test"}
        if v not in allowed:
            msg = f"DJANGO_ENV must be one of {allowed}, got '{v}'"
            raise ValueError(msg)
        return v

    @property
    def is_production(self) -> bool:
        return self.DJANGO_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.DJANGO_ENV == "development"

    @property
    def is_test(self) -> bool:
        return self.DJANGO_ENV == "test"

    @property
    def settings_module(self) -> str:
        return SETTINGS_MODULES[self.DJANGO_ENV]


# ── Singleton ───────────────────────────────────────────────────────────
# Instantiated once at import time. All Django settings files use this.
env = AppSettings()
