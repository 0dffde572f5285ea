"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from curriculum.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from curriculum.observability.logger import CorrelationIdFilter, configure_logging

__all__ = [
    "configure_logging",
    "CorrelationIdFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
