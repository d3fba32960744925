"""
Shared Logger

Centralized logging configuration for the API and the queue workers,
plus the PII masking helpers every log line goes through.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

INSURED_ID_LENGTH = 5
MASKED_VALUE = "***"

# Correlation id of the request or queue message being handled
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Keys whose values are insured ids wherever they appear in structured extras
_INSURED_ID_KEYS = frozenset({"insuredId", "insured_id"})


def mask_insured_id(insured_id: str | None) -> str:
    """
    Mask an insured id for logging.

    Keeps the first two digits of a well-formed five digit id.

    Example:
        mask_insured_id("12345") -> "12***"
        mask_insured_id("123")   -> "***"
    """
    if not insured_id or len(insured_id) != INSURED_ID_LENGTH:
        return MASKED_VALUE
    return f"{insured_id[:2]}{MASKED_VALUE}"


def mask_pii(data: Any) -> Any:
    """Return a copy of ``data`` with every insured id value masked."""
    if isinstance(data, dict):
        return {
            key: mask_insured_id(str(value)) if key in _INSURED_ID_KEYS else mask_pii(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_pii(item) for item in data]
    return data


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = correlation_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def __init__(self, service_name: str = "medical-appointment-scheduling", environment: str = "development"):
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "environment": self.environment,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            log_data["extra"] = mask_pii(extra_data)

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored console log formatter for local development."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        # Copy so other handlers still see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    service_name: str = "medical-appointment-scheduling",
    environment: str = "development",
) -> None:
    """
    Configure root logging for the API process or a worker.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit one JSON object per line instead of colored text
        service_name: Value of the ``service`` field in JSON logs
        environment: Value of the ``environment`` field in JSON logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.addFilter(CorrelationIdFilter())

    if json_format:
        console_handler.setFormatter(JSONFormatter(service_name=service_name, environment=environment))
    else:
        console_handler.setFormatter(
            ColoredFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger.addHandler(console_handler)

    # Quiet noisy libraries
    for noisy in ("sqlalchemy.engine", "asyncio", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
