"""
Application services: structured logging and retry helpers.
"""

from .cross_cutting import ApplicationLogger, AuditEvent, LogLevel, configure_logging
from .error_handler import RetryConfig, RetryExhaustedError, retry_with_backoff

__all__ = [
    "ApplicationLogger",
    "AuditEvent",
    "LogLevel",
    "configure_logging",
    "RetryConfig",
    "RetryExhaustedError",
    "retry_with_backoff",
]
