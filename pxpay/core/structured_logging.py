"""
PxPay Client - Structured Logging

JSON log formatting and logging setup for the pxpay logger hierarchy.
Modules log through logging.getLogger(__name__); this module only decides
how those records are rendered.
"""

import json
import logging
import logging.config
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# LogRecord attributes that are not user supplied context
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Shorten a credential or token for logging."""
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return f"{value[:visible]}...{value[-visible:]}"


@dataclass
class LogEvent:
    """Structured log event."""

    timestamp: str
    level: str
    logger: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[str] = None

    def to_json(self) -> str:
        data = asdict(self)
        if not self.context:
            data.pop("context")
        if self.exception is None:
            data.pop("exception")
        return json.dumps(data, default=str)


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        context = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        event = LogEvent(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
            context=context,
            exception=self.formatException(record.exc_info) if record.exc_info else None,
        )
        return event.to_json()


def build_logging_config(level: str = "INFO", json_output: bool = False) -> Dict[str, Any]:
    """dictConfig for the pxpay logger hierarchy."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"()": StructuredFormatter},
            "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "structured" if json_output else "simple",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pxpay": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure logging for the pxpay package."""
    logging.config.dictConfig(build_logging_config(level.upper(), json_output))
