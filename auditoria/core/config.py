"""Application configuration.

Settings are plain dataclasses filled by ``EnvironmentLoader`` from the
process environment and an optional ``.env`` file. Every variable is prefixed
with ``AUDITORIA_``. Values already present in the environment win over the
file.

Usage Example:
    settings = get_settings()
    engine = create_engine_from_config(settings.database)
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache

from auditoria.core.errors import ConfigurationError, ValidationError
from auditoria.core.validation import (
    validate_boolean,
    validate_enum,
    validate_integer,
    validate_list,
    validate_string,
)

ENV_PREFIX = "AUDITORIA_"


class Environment(Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogFormat(Enum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


# =====================================================================================
# CONFIGURATION SECTIONS
# =====================================================================================


@dataclass
class DatabaseConfig:
    """Database connection settings."""

    url: str = "sqlite+aiosqlite:///./auditoria.db"
    echo: bool = False

    def __post_init__(self) -> None:
        if "+" not in self.url.split("://", 1)[0]:
            raise ConfigurationError(
                "Database URL must name an async driver (e.g. postgresql+asyncpg)",
                config_key="DATABASE_URL",
            )


@dataclass
class LoginPolicyConfig:
    """Failed-login lockout thresholds."""

    max_attempts: int = 3
    lock_duration_minutes: int = 30

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError(
                "Login policy max attempts must be at least 1",
                config_key="LOGIN_MAX_ATTEMPTS",
            )
        if self.lock_duration_minutes < 1:
            raise ConfigurationError(
                "Login policy lock duration must be at least 1 minute",
                config_key="LOGIN_LOCK_MINUTES",
            )


DEVELOPMENT_ACCESS_SECRET = "development-access-secret-change-me-0001"
DEVELOPMENT_REFRESH_SECRET = "development-refresh-secret-change-me-0002"


@dataclass
class SecurityConfig:
    """Password hashing, token signing and login policy settings."""

    bcrypt_rounds: int = 10
    login_policy: LoginPolicyConfig = field(default_factory=LoginPolicyConfig)
    access_token_secret: str = DEVELOPMENT_ACCESS_SECRET
    refresh_token_secret: str = DEVELOPMENT_REFRESH_SECRET
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "auditoria"
    jwt_audience: str = "auditoria-api"
    jwt_clock_skew_seconds: int = 10
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    def __post_init__(self) -> None:
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigurationError(
                "bcrypt rounds must be between 4 and 31", config_key="BCRYPT_ROUNDS"
            )
        if self.jwt_algorithm not in {"HS256", "HS384", "HS512"}:
            raise ConfigurationError(
                f"Unsupported JWT algorithm: {self.jwt_algorithm}", config_key="JWT_ALGORITHM"
            )
        if self.access_token_expire_minutes < 1:
            raise ConfigurationError(
                "Access tokens must live at least 1 minute", config_key="ACCESS_TOKEN_MINUTES"
            )
        if self.refresh_token_expire_days < 1:
            raise ConfigurationError(
                "Refresh tokens must live at least 1 day", config_key="REFRESH_TOKEN_DAYS"
            )

    @property
    def uses_development_secrets(self) -> bool:
        return (
            self.access_token_secret == DEVELOPMENT_ACCESS_SECRET
            or self.refresh_token_secret == DEVELOPMENT_REFRESH_SECRET
        )


@dataclass
class StorageConfig:
    """Local file storage for uploaded images."""

    upload_dir: str = "./uploads"
    public_base_url: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_content_types: list[str] = field(
        default_factory=lambda: ["image/jpeg", "image/png", "image/gif", "image/webp"]
    )


@dataclass
class LogConfig:
    """Logging settings."""

    level: str = "INFO"
    format: LogFormat = LogFormat.JSON

    def __post_init__(self) -> None:
        if self.level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigurationError(
                f"Invalid log level: {self.level}", config_key="LOG_LEVEL"
            )
        self.level = self.level.upper()


# =====================================================================================
# ENVIRONMENT LOADING
# =====================================================================================


class EnvironmentLoader:
    """
    Environment variable loader with type conversion and validation.

    Uses the validators from ``auditoria.core.validation`` and turns their
    ``ValidationError`` into ``ConfigurationError`` naming the variable.
    """

    def __init__(self, env_file: str | None = ".env", prefix: str = ENV_PREFIX):
        self.env_file = env_file
        self.prefix = prefix
        self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if not self.env_file or not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                        value = value[1:-1]

                    if key not in os.environ:
                        os.environ[key] = value
        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def _raw(self, key: str, default: object) -> object:
        return os.environ.get(f"{self.prefix}{key}", default)

    def _convert(self, key: str, validator, *args, **kwargs):
        try:
            return validator(*args, **kwargs)
        except ValidationError as e:
            raise ConfigurationError(e.message, config_key=f"{self.prefix}{key}") from e

    def get_string(
        self, key: str, default: str | None = None, required: bool = False
    ) -> str | None:
        return self._convert(key, validate_string, self._raw(key, default), key, required)

    def get_integer(
        self, key: str, default: int | None = None, required: bool = False
    ) -> int | None:
        return self._convert(key, validate_integer, self._raw(key, default), key, required)

    def get_boolean(
        self, key: str, default: bool | None = None, required: bool = False
    ) -> bool | None:
        return self._convert(key, validate_boolean, self._raw(key, default), key, required)

    def get_enum(
        self, key: str, enum_class: type[Enum], default: Enum | None = None
    ) -> Enum | None:
        return self._convert(key, validate_enum, self._raw(key, default), key, enum_class, False)

    def get_list(self, key: str, default: list[str] | None = None) -> list[str] | None:
        return self._convert(key, validate_list, self._raw(key, default), key, False)


# =====================================================================================
# SETTINGS
# =====================================================================================


@dataclass
class Settings:
    """Aggregated application settings."""

    app_name: str = "Auditoria"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LogConfig = field(default_factory=LogConfig)

    def __post_init__(self) -> None:
        if self.is_production and self.security.uses_development_secrets:
            raise ConfigurationError(
                "Token secrets must be set in production", config_key="AUDITORIA_JWT_SECRET"
            )

    @classmethod
    def from_environment(cls, env_file: str | None = ".env") -> "Settings":
        """Build settings from environment variables (and ``env_file``)."""
        loader = EnvironmentLoader(env_file)
        defaults = cls()

        return cls(
            app_name=loader.get_string("APP_NAME", defaults.app_name),
            app_version=loader.get_string("APP_VERSION", defaults.app_version),
            environment=loader.get_enum("ENVIRONMENT", Environment, defaults.environment),
            debug=loader.get_boolean("DEBUG", defaults.debug),
            database=DatabaseConfig(
                url=loader.get_string("DATABASE_URL", defaults.database.url),
                echo=loader.get_boolean("DATABASE_ECHO", defaults.database.echo),
            ),
            security=SecurityConfig(
                bcrypt_rounds=loader.get_integer(
                    "BCRYPT_ROUNDS", defaults.security.bcrypt_rounds
                ),
                login_policy=LoginPolicyConfig(
                    max_attempts=loader.get_integer(
                        "LOGIN_MAX_ATTEMPTS", defaults.security.login_policy.max_attempts
                    ),
                    lock_duration_minutes=loader.get_integer(
                        "LOGIN_LOCK_MINUTES",
                        defaults.security.login_policy.lock_duration_minutes,
                    ),
                ),
                access_token_secret=loader.get_string(
                    "JWT_SECRET", defaults.security.access_token_secret
                ),
                refresh_token_secret=loader.get_string(
                    "JWT_REFRESH_SECRET", defaults.security.refresh_token_secret
                ),
                jwt_algorithm=loader.get_string("JWT_ALGORITHM", defaults.security.jwt_algorithm),
                jwt_issuer=loader.get_string("JWT_ISSUER", defaults.security.jwt_issuer),
                jwt_audience=loader.get_string("JWT_AUDIENCE", defaults.security.jwt_audience),
                access_token_expire_minutes=loader.get_integer(
                    "ACCESS_TOKEN_MINUTES", defaults.security.access_token_expire_minutes
                ),
                refresh_token_expire_days=loader.get_integer(
                    "REFRESH_TOKEN_DAYS", defaults.security.refresh_token_expire_days
                ),
            ),
            storage=StorageConfig(
                upload_dir=loader.get_string("UPLOAD_DIR", defaults.storage.upload_dir),
                public_base_url=loader.get_string(
                    "UPLOAD_PUBLIC_URL", defaults.storage.public_base_url
                ),
                max_upload_bytes=loader.get_integer(
                    "UPLOAD_MAX_BYTES", defaults.storage.max_upload_bytes
                ),
                allowed_content_types=loader.get_list(
                    "UPLOAD_CONTENT_TYPES", defaults.storage.allowed_content_types
                ),
            ),
            logging=LogConfig(
                level=loader.get_string("LOG_LEVEL", defaults.logging.level),
                format=loader.get_enum("LOG_FORMAT", LogFormat, defaults.logging.format),
            ),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings(env_file: str | None = ".env") -> Settings:
    """
    Get cached settings instance.

    Args:
        env_file: Environment file to load

    Returns:
        Settings: Application settings
    """
    return Settings.from_environment(env_file)


__all__ = [
    "DatabaseConfig",
    "Environment",
    "EnvironmentLoader",
    "LogConfig",
    "LogFormat",
    "LoginPolicyConfig",
    "SecurityConfig",
    "Settings",
    "StorageConfig",
    "get_settings",
]
