#!/usr/bin/env python3
"""
Configuration Management for txsummary

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production) with stricter
requirements in production.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_ACCOUNT_EMAIL = "default@txsummary.local"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class SmtpConfig:
    """Outgoing mail settings for summary delivery."""

    host: str = "smtp.gmail.com"
    port: int = 587
    username: str | None = None
    password: str | None = None
    from_address: str = "noreply@txsummary.local"
    use_tls: bool = True
    timeout: int = 30
    subject: str = "Your Account Summary"


@dataclass
class DatabaseConfig:
    """Database settings. Persistence is disabled when url is unset."""

    url: str | None = None
    default_account_email: str = DEFAULT_ACCOUNT_EMAIL

    @property
    def enabled(self) -> bool:
        return bool(self.url)


@dataclass
class WatchConfig:
    """Directory watch settings for continuous mode."""

    directory: Path
    poll_seconds: float = 1.0
    pattern: str = "*.csv"
    include_existing: bool = False


@dataclass
class Config:
    """
    Main configuration class for txsummary.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    # Component configurations
    smtp: SmtpConfig
    database: DatabaseConfig
    watch: WatchConfig

    # Delivery
    recipient_email: str | None = None

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("TXSUMMARY_ENV", "development"))

        smtp = SmtpConfig(
            host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USERNAME") or None,
            password=os.getenv("SMTP_PASSWORD") or None,
            from_address=os.getenv("SMTP_FROM", "noreply@txsummary.local"),
            use_tls=_parse_bool(os.getenv("SMTP_USE_TLS", "true")),
            timeout=int(os.getenv("SMTP_TIMEOUT", "30")),
            subject=os.getenv("EMAIL_SUBJECT", "Your Account Summary"),
        )

        database = DatabaseConfig(
            url=os.getenv("DATABASE_URL") or None,
            default_account_email=os.getenv("DEFAULT_ACCOUNT_EMAIL", DEFAULT_ACCOUNT_EMAIL),
        )

        watch = WatchConfig(
            directory=Path(os.getenv("WATCH_DIRECTORY", "./data/incoming")).expanduser(),
            poll_seconds=float(os.getenv("WATCH_POLL_SECONDS", "1.0")),
            pattern=os.getenv("WATCH_PATTERN", "*.csv"),
            include_existing=_parse_bool(os.getenv("WATCH_INCLUDE_EXISTING", "false")),
        )

        recipient = os.getenv("RECIPIENT_EMAIL") or None
        if recipient is None and env == Environment.DEVELOPMENT:
            recipient = "demo@txsummary.local"

        return cls(
            environment=env,
            smtp=smtp,
            database=database,
            watch=watch,
            recipient_email=recipient,
            debug=_parse_bool(os.getenv("DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.environment == Environment.PRODUCTION:
            if not self.smtp.username:
                errors.append("SMTP_USERNAME is required in production")
            if not self.smtp.password:
                errors.append("SMTP_PASSWORD is required in production")

        if self.smtp.username and not self.smtp.password:
            errors.append("SMTP_PASSWORD is required when SMTP_USERNAME is provided")

        if self.smtp.port <= 0 or self.smtp.port > 65535:
            errors.append("SMTP port must be 1-65535")
        if self.smtp.timeout <= 0:
            errors.append("SMTP timeout must be positive")
        if self.watch.poll_seconds <= 0:
            errors.append("Watch poll interval must be positive")
        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "smtp.password",
            "smtp.username",
            "database.url",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, (Path, Enum)):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***" if nested_value else None
                    elif isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
