"""Unit tests for settings loading from the environment."""

import pytest

from auditoria.core.config import (
    DatabaseConfig,
    Environment,
    LogFormat,
    SecurityConfig,
    Settings,
)
from auditoria.core.errors import ConfigurationError


@pytest.mark.unit
class TestSettings:
    """Test suite for Settings.from_environment."""

    def test_defaults(self, monkeypatch):
        """Test defaults apply when nothing is set."""
        for key in ("AUDITORIA_ENVIRONMENT", "AUDITORIA_DATABASE_URL", "AUDITORIA_LOG_FORMAT"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings.from_environment(env_file=None)

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.security.login_policy.max_attempts == 3
        assert settings.logging.format == LogFormat.JSON

    def test_environment_overrides(self, monkeypatch):
        """Test prefixed variables override defaults."""
        monkeypatch.setenv("AUDITORIA_ENVIRONMENT", "production")
        monkeypatch.setenv("AUDITORIA_LOGIN_MAX_ATTEMPTS", "5")
        monkeypatch.setenv("AUDITORIA_UPLOAD_CONTENT_TYPES", "image/png,image/webp")
        monkeypatch.setenv("AUDITORIA_JWT_SECRET", "p" * 40)
        monkeypatch.setenv("AUDITORIA_JWT_REFRESH_SECRET", "q" * 40)
        monkeypatch.setenv("AUDITORIA_ACCESS_TOKEN_MINUTES", "5")

        settings = Settings.from_environment(env_file=None)

        assert settings.is_production
        assert settings.security.login_policy.max_attempts == 5
        assert settings.storage.allowed_content_types == ["image/png", "image/webp"]
        assert settings.security.access_token_secret == "p" * 40
        assert settings.security.access_token_expire_minutes == 5

    def test_production_requires_token_secrets(self, monkeypatch):
        """Test production refuses the development token secrets."""
        monkeypatch.setenv("AUDITORIA_ENVIRONMENT", "production")
        monkeypatch.delenv("AUDITORIA_JWT_SECRET", raising=False)
        monkeypatch.delenv("AUDITORIA_JWT_REFRESH_SECRET", raising=False)

        with pytest.raises(ConfigurationError):
            Settings.from_environment(env_file=None)

    def test_env_file_does_not_override_process_environment(self, monkeypatch, tmp_path):
        """Test values from .env only fill gaps."""
        env_file = tmp_path / ".env"
        env_file.write_text('AUDITORIA_APP_NAME="From File"\nAUDITORIA_DEBUG=true\n')
        monkeypatch.setenv("AUDITORIA_APP_NAME", "From Env")
        monkeypatch.delenv("AUDITORIA_DEBUG", raising=False)

        settings = Settings.from_environment(env_file=str(env_file))

        assert settings.app_name == "From Env"
        assert settings.debug is True

    def test_invalid_integer_names_variable(self, monkeypatch):
        """Test conversion errors point at the offending variable."""
        monkeypatch.setenv("AUDITORIA_BCRYPT_ROUNDS", "many")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_environment(env_file=None)

        assert exc_info.value.details["config_key"] == "AUDITORIA_BCRYPT_ROUNDS"

    def test_section_validation(self):
        """Test sections reject impossible values."""
        with pytest.raises(ConfigurationError):
            DatabaseConfig(url="sqlite:///plain.db")
        with pytest.raises(ConfigurationError):
            SecurityConfig(bcrypt_rounds=2)
        with pytest.raises(ConfigurationError):
            SecurityConfig(jwt_algorithm="none")
