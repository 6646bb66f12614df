#!/usr/bin/env python3
"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from txsummary.core import config as config_module
from txsummary.core.config import (
    DEFAULT_ACCOUNT_EMAIL,
    Config,
    Environment,
    get_config,
    is_development,
    is_production,
    reload_config,
)


class TestConfigFromEnvironment:
    """Test loading settings from environment variables."""

    def test_test_environment_defaults(self):
        """Test values set by the autouse fixture."""
        config = Config.from_environment()

        assert config.environment == Environment.TEST
        assert config.smtp.host == "localhost"
        assert config.smtp.port == 2525
        assert config.database.url is None
        assert not config.database.enabled
        assert config.database.default_account_email == DEFAULT_ACCOUNT_EMAIL
        assert config.recipient_email is None
        assert config.watch.pattern == "*.csv"
        assert config.watch.include_existing is False

    def test_development_recipient_fallback(self, monkeypatch):
        """Test development mode supplies a demo recipient."""
        monkeypatch.setenv("TXSUMMARY_ENV", "development")
        assert Config.from_environment().recipient_email == "demo@txsummary.local"

    def test_explicit_values(self, monkeypatch):
        """Test every override is picked up."""
        monkeypatch.setenv("DATABASE_URL", "sqlite:///tx.db")
        monkeypatch.setenv("RECIPIENT_EMAIL", "someone@example.com")
        monkeypatch.setenv("WATCH_DIRECTORY", "/tmp/incoming")
        monkeypatch.setenv("WATCH_POLL_SECONDS", "0.5")
        monkeypatch.setenv("WATCH_INCLUDE_EXISTING", "yes")
        monkeypatch.setenv("SMTP_USE_TLS", "false")

        config = Config.from_environment()

        assert config.database.enabled
        assert config.recipient_email == "someone@example.com"
        assert config.watch.directory == Path("/tmp/incoming")
        assert config.watch.poll_seconds == 0.5
        assert config.watch.include_existing is True
        assert config.smtp.use_tls is False

    def test_invalid_environment_name(self, monkeypatch):
        """Test unknown environment names are rejected."""
        monkeypatch.setenv("TXSUMMARY_ENV", "staging")
        with pytest.raises(ValueError):
            Config.from_environment()


class TestConfigValidation:
    """Test validate() error collection."""

    def test_valid_by_default(self):
        """Test the test environment validates cleanly."""
        assert Config.from_environment().validate() == []

    def test_production_requires_credentials(self, monkeypatch):
        """Test production insists on SMTP credentials."""
        monkeypatch.setenv("TXSUMMARY_ENV", "production")
        errors = Config.from_environment().validate()
        assert any("SMTP_USERNAME" in e for e in errors)
        assert any("SMTP_PASSWORD" in e for e in errors)

    def test_username_without_password(self, monkeypatch):
        """Test a username alone is an error."""
        monkeypatch.setenv("SMTP_USERNAME", "user")
        errors = Config.from_environment().validate()
        assert errors == ["SMTP_PASSWORD is required when SMTP_USERNAME is provided"]

    @pytest.mark.parametrize(
        "name,value",
        [("SMTP_PORT", "70000"), ("SMTP_TIMEOUT", "0"), ("WATCH_POLL_SECONDS", "-1"), ("LOG_LEVEL", "chatty")],
    )
    def test_out_of_range_values(self, monkeypatch, name, value):
        """Test each range check reports one error."""
        monkeypatch.setenv(name, value)
        assert len(Config.from_environment().validate()) == 1

    def test_get_config_raises_on_errors(self, monkeypatch):
        """Test get_config refuses an invalid configuration."""
        monkeypatch.setenv("SMTP_PORT", "0")
        with pytest.raises(ValueError, match="Configuration validation failed"):
            get_config()


class TestConfigGlobals:
    """Test the cached global configuration."""

    def test_get_config_is_cached(self):
        """Test repeated calls return the same instance."""
        assert get_config() is get_config()

    def test_reload_config(self, monkeypatch):
        """Test reload picks up environment changes."""
        first = get_config()
        monkeypatch.setenv("SMTP_HOST", "mail.example.com")

        second = reload_config()

        assert second is not first
        assert second.smtp.host == "mail.example.com"
        assert config_module._config is second

    def test_environment_helpers(self):
        """Test environment predicates."""
        assert not is_development()
        assert not is_production()


class TestConfigToDict:
    """Test configuration export."""

    def test_sensitive_fields_redacted(self, monkeypatch):
        """Test credentials and database URL are hidden by default."""
        monkeypatch.setenv("SMTP_USERNAME", "user")
        monkeypatch.setenv("SMTP_PASSWORD", "secret")
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/tx")

        data = Config.from_environment().to_dict()

        assert data["smtp"]["password"] == "***REDACTED***"
        assert data["smtp"]["username"] == "***REDACTED***"
        assert data["database"]["url"] == "***REDACTED***"
        assert data["environment"] == "test"
        assert isinstance(data["watch"]["directory"], str)

    def test_include_sensitive(self, monkeypatch):
        """Test secrets are exported when asked for."""
        monkeypatch.setenv("SMTP_USERNAME", "user")
        monkeypatch.setenv("SMTP_PASSWORD", "secret")

        data = Config.from_environment().to_dict(include_sensitive=True)

        assert data["smtp"]["password"] == "secret"

    def test_unset_secret_shows_none(self):
        """Test unset secrets export as None rather than a redaction marker."""
        assert Config.from_environment().to_dict()["smtp"]["password"] is None
