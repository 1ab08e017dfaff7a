#!/usr/bin/env python3
"""
Configuration Management for moneyboard

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

SUPPORTED_LOCALES = ("en", "pt-BR")


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ApiConfig:
    """Remote API configuration."""

    base_url: str = "http://localhost:5000"
    timeout: float = 30.0
    api_token: str | None = None


@dataclass
class ReportConfig:
    """Report export and chart configuration."""

    output_dir: Path
    locale: str = "en"
    default_period_days: int = 30
    chart_width: int = 18
    chart_height: int = 6


@dataclass
class Config:
    """
    Main configuration class for moneyboard.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    api: ApiConfig
    reports: ReportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("MONEYBOARD_ENV", "development"))

        if env == Environment.TEST:
            default_output = Path(tempfile.gettempdir()) / "test_moneyboard" / "reports"
        else:
            default_output = Path("./data/reports")
        output_dir = Path(os.getenv("MONEYBOARD_OUTPUT_DIR", str(default_output))).expanduser()

        api = ApiConfig(
            base_url=os.getenv("MONEYBOARD_API_BASE_URL", "http://localhost:5000").rstrip("/"),
            timeout=float(os.getenv("MONEYBOARD_API_TIMEOUT", "30")),
            api_token=os.getenv("MONEYBOARD_API_TOKEN") or None,
        )

        reports = ReportConfig(
            output_dir=output_dir,
            locale=os.getenv("MONEYBOARD_LOCALE", "en"),
            default_period_days=int(os.getenv("MONEYBOARD_REPORT_DAYS", "30")),
        )

        return cls(
            environment=env,
            api=api,
            reports=reports,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.api.base_url.startswith(("http://", "https://")):
            errors.append(f"MONEYBOARD_API_BASE_URL must be an http(s) URL: {self.api.base_url}")

        if self.environment == Environment.PRODUCTION and not self.api.base_url.startswith("https://"):
            errors.append("MONEYBOARD_API_BASE_URL must use https in production")

        if self.api.timeout <= 0:
            errors.append("API timeout must be positive")

        if self.reports.locale not in SUPPORTED_LOCALES:
            errors.append(
                f"Unsupported locale {self.reports.locale!r}; expected one of {', '.join(SUPPORTED_LOCALES)}"
            )

        if self.reports.default_period_days <= 0:
            errors.append("Report period must be a positive number of days")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Request lines from the HTTP stack are noise outside development
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return ["api.api_token"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
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
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_output_dir() -> Path:
    """Get the report output directory path."""
    return get_config().reports.output_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
