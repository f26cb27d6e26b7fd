"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

# Only HMAC signing is accepted for access/refresh tokens.
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")

DEFAULT_JWT_SECRET = "change-me-access-token-signing-secret"
DEFAULT_REFRESH_SECRET = "change-me-refresh-token-signing-secret"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # Postgres: either a full DATABASE_URL or the individual DB_* parts.
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: SecretStr | None = None
    DB_NAME: str = "socialsh"

    # JWT: access and refresh tokens are signed with distinct secrets.
    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    REFRESH_SECRET: SecretStr = SecretStr(DEFAULT_REFRESH_SECRET)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    BCRYPT_ROUNDS: int = 12

    # Uploaded images are stored here and served under /uploads.
    UPLOAD_DIR: str = "uploads"
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024

    # Telegram bot (optional; order notifications are skipped when unset)
    TELEGRAM_BOT_TOKEN: SecretStr | None = None
    TELEGRAM_CHAT_ID: str | None = None
    TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
    TELEGRAM_REQUEST_TIMEOUT_SEC: float = 10.0

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

    @field_validator("DB_PORT")
    @classmethod
    def validate_db_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("DB_PORT must be between 1 and 65535")
        return v

    @field_validator("JWT_SECRET", "REFRESH_SECRET")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET and REFRESH_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in HMAC_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}")
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def validate_access_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 1440:
            raise ValueError(
                "ACCESS_TOKEN_EXPIRE_MINUTES must be between 1 and 1440 (1 min to 1 day)"
            )
        return v

    @field_validator("REFRESH_TOKEN_EXPIRE_DAYS")
    @classmethod
    def validate_refresh_expire_days(cls, v: int) -> int:
        if v < 1 or v > 90:
            raise ValueError("REFRESH_TOKEN_EXPIRE_DAYS must be between 1 and 90")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("UPLOAD_MAX_BYTES")
    @classmethod
    def validate_upload_max_bytes(cls, v: int) -> int:
        if v < 1 or v > 100 * 1024 * 1024:
            raise ValueError("UPLOAD_MAX_BYTES must be between 1 byte and 100 MB")
        return v

    @field_validator("TELEGRAM_API_BASE_URL")
    @classmethod
    def validate_telegram_base_url(cls, v: str) -> str:
        s = (v or "").strip().rstrip("/")
        if not (s.lower().startswith("http://") or s.lower().startswith("https://")):
            raise ValueError(
                "TELEGRAM_API_BASE_URL must use http or https (e.g. https://api.telegram.org)"
            )
        return s

    @field_validator("TELEGRAM_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_telegram_timeout(cls, v: float) -> float:
        if v <= 0 or v > 60:
            raise ValueError(
                "TELEGRAM_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 60"
            )
        return v

    @model_validator(mode="after")
    def validate_token_secrets(self) -> "Settings":
        access = self.JWT_SECRET.get_secret_value()
        refresh = self.REFRESH_SECRET.get_secret_value()
        if access == refresh:
            raise ValueError("JWT_SECRET and REFRESH_SECRET must be different")
        if self.APP_ENV == "prod" and (
            access == DEFAULT_JWT_SECRET or refresh == DEFAULT_REFRESH_SECRET
        ):
            raise ValueError("Default JWT secrets are not allowed when APP_ENV=prod")
        return self

    @property
    def database_url(self) -> str | URL:
        """DATABASE_URL if set, otherwise a psycopg2 URL built from the DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD.get_secret_value() if self.DB_PASSWORD else None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )

    @property
    def telegram_configured(self) -> bool:
        if self.TELEGRAM_BOT_TOKEN is None or not self.TELEGRAM_CHAT_ID:
            return False
        return bool(self.TELEGRAM_BOT_TOKEN.get_secret_value().strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
