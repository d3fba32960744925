"""
Shared utilities module

Domain-agnostic helpers used by the API and the queue workers.
"""

from .logger import (
    ColoredFormatter,
    CorrelationIdFilter,
    JSONFormatter,
    configure_logging,
    correlation_id_var,
    mask_insured_id,
    mask_pii,
)
from .sentry import init_sentry

__all__ = [
    "ColoredFormatter",
    "CorrelationIdFilter",
    "JSONFormatter",
    "configure_logging",
    "correlation_id_var",
    "init_sentry",
    "mask_insured_id",
    "mask_pii",
]
