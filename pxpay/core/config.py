"""
PxPay Client - Configuration Management

Configuration for the PxPay client, loaded from environment variables or
a YAML file.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from pxpay.core.exceptions import ConfigurationException
from pxpay.protocol.pxpay_codes import KEY_MAX_LENGTH, PXPAY_ENDPOINT, USER_ID_MAX_LENGTH

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_log_level(value: Any, config_key: str) -> LogLevel:
    try:
        return LogLevel(str(value).strip().upper())
    except ValueError:
        raise ConfigurationException(f"Invalid log level: {value}", config_key=config_key)


@dataclass
class PxPayConfig:
    """Gateway credentials and client settings."""

    user_id: str = ""
    key: str = ""  # MUST be set via environment variable or secrets file
    endpoint: str = PXPAY_ENDPOINT
    verify_ssl: bool = True
    timeout: float = 30.0

    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "PxPayConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationException(f"Configuration file must contain a mapping: {config_path}")

        return cls._from_dict(config_data.get("pxpay", config_data))

    @classmethod
    def load_from_env(cls, prefix: str = "PXPAY_") -> "PxPayConfig":
        """Load configuration from environment variables."""
        config = cls()

        config.user_id = os.getenv(f"{prefix}USER_ID", config.user_id)
        config.key = os.getenv(f"{prefix}KEY", config.key)
        config.endpoint = os.getenv(f"{prefix}ENDPOINT", config.endpoint)

        if os.getenv(f"{prefix}VERIFY_SSL") is not None:
            config.verify_ssl = _parse_bool(os.environ[f"{prefix}VERIFY_SSL"])
        if os.getenv(f"{prefix}JSON_LOGS") is not None:
            config.json_logs = _parse_bool(os.environ[f"{prefix}JSON_LOGS"])

        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError:
                raise ConfigurationException(f"Invalid timeout: {timeout}", config_key=f"{prefix}TIMEOUT")

        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            config.log_level = _parse_log_level(log_level, f"{prefix}LOG_LEVEL")

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PxPayConfig":
        """Create configuration from dictionary."""
        config = cls()

        for key in ["user_id", "key", "endpoint", "verify_ssl", "json_logs"]:
            if key in data:
                setattr(config, key, data[key])
        if "timeout" in data:
            try:
                config.timeout = float(data["timeout"])
            except (TypeError, ValueError):
                raise ConfigurationException(f"Invalid timeout: {data['timeout']}", config_key="timeout")
        if "log_level" in data:
            config.log_level = _parse_log_level(data["log_level"], "log_level")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "user_id": self.user_id,
            # Don't include key in serialization
            "endpoint": self.endpoint,
            "verify_ssl": self.verify_ssl,
            "timeout": self.timeout,
            "log_level": self.log_level.value,
            "json_logs": self.json_logs,
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        if not self.user_id:
            errors.append("PxPay user id is required")
        elif len(self.user_id) > USER_ID_MAX_LENGTH:
            errors.append(f"PxPay user id must not exceed {USER_ID_MAX_LENGTH} characters")

        if not self.key:
            errors.append("PxPay key is required")
        elif len(self.key) > KEY_MAX_LENGTH:
            errors.append(f"PxPay key must not exceed {KEY_MAX_LENGTH} characters")

        if self.timeout <= 0:
            errors.append("Timeout must be positive")

        if not self.endpoint.startswith(("https://", "http://")):
            errors.append("Endpoint must be an http(s) URL")

        if not self.verify_ssl:
            logger.warning("TLS certificate verification is disabled for the PxPay endpoint")

        if errors:
            raise ConfigurationException(f"Configuration validation failed: {'; '.join(errors)}")


# Global configuration instance
_config: Optional[PxPayConfig] = None


def get_config() -> PxPayConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = PxPayConfig.load_from_env()
    return _config


def set_config(config: PxPayConfig) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config


def load_config(config_path: Union[str, Path]) -> PxPayConfig:
    """Load and set configuration from file."""
    config = PxPayConfig.load_from_file(config_path)
    set_config(config)
    return config
