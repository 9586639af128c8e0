from typing import List, Optional
from urllib.parse import urlsplit

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Known insecure default values that must be changed in production
_INSECURE_JWT_SECRETS = {
    "your-secret-key",
    "your-refresh-secret-key",
    "changeme",
    "secret",
}
_INSECURE_DB_PASSWORDS = {
    "postgres",
    "password",
    "changeme",
}

_INSECURE_ALLOWED_ORIGINS_DEFAULTS = {
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
}

_ASYNC_DRIVER_SCHEME = "postgresql+asyncpg://"


def _extract_password_from_database_url(database_url: str | None) -> str | None:
    if not database_url:
        return None
    try:
        parts = urlsplit(database_url)
        return parts.password
    except ValueError:
        return None


def normalize_database_url(database_url: str) -> str:
    """Point plain PostgreSQL URLs at the asyncpg driver."""
    for scheme in ("postgres://", "postgresql://"):
        if database_url.startswith(scheme):
            return _ASYNC_DRIVER_SCHEME + database_url[len(scheme):]
    return database_url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    PROJECT_NAME: str = "Payroll API"
    API_PREFIX: str = ""
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: Optional[str] = None

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS
    # NOTE: Pydantic Settings treats list fields as "complex" env values (expects JSON).
    # We accept either a JSON array or a comma-separated string by allowing `str` here
    # and normalizing via the field validator below.
    ALLOWED_ORIGINS: List[str] | str = Field(
        default_factory=lambda: ["http://localhost:5173"],
        validation_alias=AliasChoices("ALLOWED_ORIGINS", "CORS_ORIGIN", "BACKEND_CORS_ORIGINS"),
    )

    # Database settings
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_SERVER: str = Field(
        default="localhost",
        validation_alias=AliasChoices("POSTGRES_SERVER", "POSTGRES_HOST", "POSTGRES_HOSTNAME"),
    )
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "payroll"

    # Database connection pooling
    DB_POOL_SIZE: int = Field(default=10, description="Number of persistent DB connections")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Max additional connections under load")

    # Full DB URL (preferred in CI/containers). If not provided, we build it from POSTGRES_*.
    DATABASE_URL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "SQLALCHEMY_DATABASE_URI"),
    )

    SQLALCHEMY_ECHO: bool = False

    # Token secrets handed to the process; token issuing lives outside this service
    JWT_SECRET: str = "your-secret-key"
    JWT_REFRESH_SECRET: str = "your-refresh-secret-key"

    @computed_field
    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def model_post_init(self, __context):
        """
        Validate configuration on startup. In production, fail hard if insecure defaults are detected.
        """
        # Fill DATABASE_URL if it wasn't provided explicitly
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"{_ASYNC_DRIVER_SCHEME}{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )
        else:
            self.DATABASE_URL = normalize_database_url(self.DATABASE_URL)

        if not self.IS_PRODUCTION:
            return

        errors = []

        for name in ("JWT_SECRET", "JWT_REFRESH_SECRET"):
            value = getattr(self, name)
            if value in _INSECURE_JWT_SECRETS or len(value) < 32:
                errors.append(
                    f"{name} is insecure. Generate a new key with: "
                    "python -c \"import secrets; print(secrets.token_urlsafe(32))\""
                )

        if self.JWT_SECRET == self.JWT_REFRESH_SECRET:
            errors.append("JWT_SECRET and JWT_REFRESH_SECRET must differ.")

        db_url_password = _extract_password_from_database_url(self.DATABASE_URL)
        if db_url_password is None and self.POSTGRES_PASSWORD in _INSECURE_DB_PASSWORDS:
            errors.append(
                "POSTGRES_PASSWORD is insecure. "
                "Set a strong password in your environment (or provide DATABASE_URL with a strong password)."
            )
        if db_url_password and db_url_password in _INSECURE_DB_PASSWORDS:
            errors.append("DATABASE_URL contains an insecure password.")

        # Require explicit ALLOWED_ORIGINS in production (avoid accidental localhost defaults)
        if not self.ALLOWED_ORIGINS or set(self.ALLOWED_ORIGINS).issubset(_INSECURE_ALLOWED_ORIGINS_DEFAULTS):
            errors.append(
                "ALLOWED_ORIGINS must be set to your domain(s) in production (not localhost defaults)."
            )

        if self.DEBUG:
            errors.append("DEBUG must be False in production.")

        # Fail hard with all errors at once for easier debugging
        if errors:
            error_msg = "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ValueError(error_msg)

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("ENVIRONMENT")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        if value.lower() not in {"development", "production", "test"}:
            raise ValueError("ENVIRONMENT must be one of: development, production, test")
        return value


settings = Settings()
