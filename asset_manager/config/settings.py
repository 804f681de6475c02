"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables only, never from files.
Every field has a default, so the service starts even with an empty
environment (using placeholder values that are fine for local work and
useless in production).

Parsing is lenient on purpose:
- Empty variables count as unset
- Malformed numbers and durations fall back to the default
- Comma-separated lists are trimmed and empty items dropped

The loaded snapshot is installed once per process by initialize() and is
read-only afterwards. Components that can take it as an argument should;
the module-level accessors exist for code that cannot.
"""

import logging
from datetime import timedelta
from typing import Annotated, Any, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigNotInitializedError
from .parsing import parse_duration, parse_duration_or_default, parse_int, split_csv

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT_DURATION = "60s"

# Fields whose defaults are duration strings
_DURATION_DEFAULTS = {
    "rate_limit_duration": DEFAULT_RATE_LIMIT_DURATION,
}

StringList = Annotated[list[str], NoDecode]


class Settings(BaseSettings):
    """
    Process configuration snapshot.

    Each field reads one environment variable, named by its alias, and
    nothing else: the field name itself is never looked up. Keyword
    arguments use the same alias names (Settings(HOST="example.com")),
    which is how tests build isolated snapshots without touching os.environ.
    """

    # Server
    server_port: str = Field(
        default="8080",
        validation_alias="PORT",
        description="Listen port. Kept as text so service names work too.",
    )
    server_host: str = Field(default="localhost", validation_alias="HOST")

    # Security
    api_keys: str = Field(
        default="your-api-keys",
        validation_alias="API_KEY",
        description="API key material. Comma-separate several keys to rotate without downtime.",
    )
    allowed_origins: StringList = Field(
        default=["http://localhost:3000"],
        validation_alias="ALLOWED_ORIGINS",
    )
    rate_limit_attempts: int = Field(default=100, validation_alias="RATE_LIMIT_ATTEMPTS")
    rate_limit_duration: timedelta = Field(
        default=parse_duration(DEFAULT_RATE_LIMIT_DURATION),
        validation_alias="RATE_LIMIT_DURATION",
        description='Rate limit window, e.g. "60s" or "1m30s".',
    )
    skipped_api_endpoints: StringList = Field(
        default=["/health"],
        validation_alias="SKIPPED_API_ENDPOINTS",
        description="Paths that do not require an API key.",
    )
    trusted_proxies: StringList = Field(
        default=["localhost"],
        validation_alias="TRUSTED_PROXIES",
    )
    cookie_domain: str = Field(default="localhost", validation_alias="COOKIE_DOMAIN")

    # Database
    database_root_url: str = Field(default="your-db-root-url", validation_alias="DB_ROOT_URL")
    database_name: str = Field(default="your-db-name", validation_alias="DB_NAME")
    database_url: str = Field(default="your-db-url", validation_alias="DB_URL")

    # Redis
    redis_address: str = Field(default="localhost:6379", validation_alias="REDIS_ADDRESS")
    redis_password: str = Field(default="", validation_alias="REDIS_PASSWORD")

    # JWT
    access_token_secret: str = Field(default="your-secret-key", validation_alias="ACCESS_TOKEN_SECRET")
    refresh_token_secret: str = Field(
        default="your-refresh-token-secret",
        validation_alias="REFRESH_TOKEN_SECRET",
    )

    # Mailer
    smtp_host: str = Field(default="", validation_alias="SMTP_HOST")
    smtp_port: int = Field(default=587, validation_alias="SMTP_PORT")
    smtp_email: str = Field(default="", validation_alias="SMTP_EMAIL")
    smtp_password: str = Field(default="", validation_alias="SMTP_PASSWORD")

    # App
    app_name: str = Field(default="Asset Management System", validation_alias="APP_NAME")
    app_env: str = Field(
        default="development",
        validation_alias="APP_ENV",
        description='"development", "production", or any other label.',
    )
    frontend_url: str = Field(default="http://localhost:5173", validation_alias="FRONTEND_URL")

    # Cloudinary
    cloud_name: str = Field(default="your-cloudinary-cloud-name", validation_alias="CLOUDINARY_CLOUD_NAME")
    cloud_secret: str = Field(default="your-cloudinary-api-secret", validation_alias="CLOUDINARY_API_SECRET")
    cloud_api_key: str = Field(default="your-cloudinary-api-key", validation_alias="CLOUDINARY_API_KEY")
    cloud_folder: str = Field(default="asset_management_app", validation_alias="CLOUDINARY_FOLDER")

    # Google OAuth
    google_client_id: str = Field(default="your-google-client-id", validation_alias="GOOGLE_CLIENT_ID")
    google_client_secret: str = Field(
        default="your-google-client-secret",
        validation_alias="GOOGLE_CLIENT_SECRET",
    )
    google_redirect_url: str = Field(
        default="http://localhost:5005/api/v1/users/google/callback",
        validation_alias="GOOGLE_REDIRECT_URL",
    )
    frontend_redirect_url: str = Field(
        default="http://localhost:5173",
        validation_alias="FRONTEND_REDIRECT_URL",
    )

    # Stripe
    stripe_webhook_secret: str = Field(
        default="your-stripe-webhook-secret",
        validation_alias="STRIPE_WEBHOOK_SECRET",
    )
    stripe_cancel_url_dev: str = Field(
        default="http://localhost:5173/checkout/cancel",
        validation_alias="STRIPE_CANCEL_URL_DEV",
    )
    stripe_success_url_dev: str = Field(
        default="http://localhost:5173/checkout/success",
        validation_alias="STRIPE_SUCCESS_URL_DEV",
    )
    stripe_cancel_url_prod: str = Field(
        default="https://your-production-url/checkout/cancel",
        validation_alias="STRIPE_CANCEL_URL_PROD",
    )
    stripe_success_url_prod: str = Field(
        default="https://your-production-url/checkout/success",
        validation_alias="STRIPE_SUCCESS_URL_PROD",
    )
    stripe_secret_key: str = Field(default="your-stripe-secret-key", validation_alias="STRIPE_SECRET_KEY")
    stripe_publishable_key: str = Field(
        default="your-stripe-publishable-key",
        validation_alias="STRIPE_PUBLISHABLE_KEY",
    )

    # Upload policy
    allowed_image_types: StringList = Field(
        default=["image/jpeg", "image/png"],
        validation_alias="ALLOWED_IMAGE_TYPES",
    )
    allowed_video_types: StringList = Field(
        default=["video/mp4"],
        validation_alias="ALLOWED_VIDEO_TYPES",
    )
    allowed_document_types: StringList = Field(
        default=["application/pdf"],
        validation_alias="ALLOWED_DOCUMENT_TYPES",
    )
    max_image_size: int = Field(default=2 << 20, validation_alias="MAX_IMAGE_SIZE")
    max_video_size: int = Field(default=100 << 20, validation_alias="MAX_VIDEO_SIZE")
    max_document_size: int = Field(default=10 << 20, validation_alias="MAX_DOCUMENT_SIZE")

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_ignore_empty=True,
        frozen=True,
    )

    @field_validator(
        "rate_limit_attempts",
        "smtp_port",
        "max_image_size",
        "max_video_size",
        "max_document_size",
        mode="before",
    )
    @classmethod
    def _parse_integer(cls, value: Any, info: ValidationInfo) -> int:
        if isinstance(value, int):
            return value

        default = cls.model_fields[info.field_name].default
        if value is None or value == "":
            return default

        parsed = parse_int(str(value), None)
        if parsed is None:
            _log_fallback(cls, info.field_name)
            return default
        return parsed

    @field_validator("rate_limit_duration", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any, info: ValidationInfo) -> timedelta:
        if isinstance(value, timedelta):
            return value

        default = _DURATION_DEFAULTS[info.field_name]
        if value is None or value == "":
            return parse_duration_or_default(None, default)
        try:
            return parse_duration(str(value))
        except ValueError:
            _log_fallback(cls, info.field_name)
            return parse_duration_or_default(None, default)

    @field_validator(
        "allowed_origins",
        "skipped_api_endpoints",
        "trusted_proxies",
        "allowed_image_types",
        "allowed_video_types",
        "allowed_document_types",
        mode="before",
    )
    @classmethod
    def _parse_string_list(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) or value is None:
            return split_csv(value, cls.model_fields[info.field_name].default)
        return value

    @property
    def api_keys_list(self) -> list[str]:
        """Parse comma-separated API keys into a list."""
        return [key.strip() for key in self.api_keys.split(",") if key.strip()]

    @property
    def max_file_size(self) -> dict[str, int]:
        """Maximum upload size in bytes, keyed by media category."""
        return {
            "images": self.max_image_size,
            "videos": self.max_video_size,
            "documents": self.max_document_size,
        }

    @property
    def server_address(self) -> str:
        return f"{self.server_host}:{self.server_port}"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


def _log_fallback(settings_cls: type[Settings], field_name: str) -> None:
    # The raw value may be a secret, so only the variable name is logged
    alias = settings_cls.model_fields[field_name].validation_alias
    logger.warning(
        "Ignoring malformed configuration value, using default",
        extra={"variable": alias, "field": field_name},
    )


# ---------------------------------------------------------------------------
# Process-wide snapshot
# ---------------------------------------------------------------------------

_settings: Optional[Settings] = None


def initialize() -> None:
    """
    Load configuration from the environment and install it process-wide.

    Call once at process start, before anything reads configuration.
    Calling again replaces the whole snapshot; nothing is carried over
    from the previous load.
    """
    global _settings

    _settings = Settings()

    print("Global configuration load complete")
    logger.info(
        "Configuration loaded",
        extra={
            "app_name": _settings.app_name,
            "app_env": _settings.app_env,
        },
    )


def is_initialized() -> bool:
    return _settings is not None


def get_settings() -> Settings:
    """
    Get the installed settings snapshot.

    Raises ConfigNotInitializedError if initialize() has not run yet.
    """
    if _settings is None:
        raise ConfigNotInitializedError()
    return _settings


def get_server_address() -> str:
    """Host and port joined as "host:port"."""
    return get_settings().server_address


def is_production() -> bool:
    return get_settings().is_production


def is_development() -> bool:
    return get_settings().is_development
