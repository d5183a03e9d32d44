"""
Cross-cutting concern services for the campaign wizard.

Provides structured operation, audit and performance logging used by the
application layer.
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from campaign_wizard.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the log format and set the package log level (defaults to LOG_LEVEL)."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("campaign_wizard").setLevel((level or get_settings().LOG_LEVEL).upper())


class LogLevel(str, Enum):
    """Application log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class AuditEvent(str, Enum):
    """Types of audit events."""
    DRAFT_SAVED = "draft_saved"
    DRAFT_SAVE_FAILED = "draft_save_failed"
    CAMPAIGN_PUBLISHED = "campaign_published"
    PUBLISH_FAILED = "publish_failed"
    VALIDATION_FAILED = "validation_failed"
    WIZARD_CLOSED = "wizard_closed"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApplicationLogger:
    """
    Structured logging service for wizard operations.

    Provides a consistent message format with an audit trail and
    performance reporting.
    """

    SLOW_OPERATION_MS = 1000

    def __init__(self, logger_name: str = "campaign_wizard"):
        self.logger = logging.getLogger(logger_name)

    def log_operation(
        self,
        operation: str,
        campaign_id: Optional[str] = None,
        level: LogLevel = LogLevel.INFO,
        **kwargs
    ) -> None:
        """
        Log an application operation with structured data.

        Args:
            operation: Operation being performed
            campaign_id: Bound campaign identity, if any
            level: Log level
            **kwargs: Additional structured data
        """
        message = f"Operation: {operation} | Campaign: {campaign_id or '-'}"
        if kwargs:
            message += f" | Data: {json.dumps(kwargs, default=str)}"

        getattr(self.logger, level.lower())(message)

    def log_performance(
        self,
        operation: str,
        duration_ms: float,
        success: bool = True,
        **kwargs
    ) -> None:
        """Log timing for persistence round trips."""
        level = LogLevel.INFO if success else LogLevel.WARNING
        message = f"Performance: {operation} | Duration: {round(duration_ms, 2)}ms | Success: {success}"

        if duration_ms > self.SLOW_OPERATION_MS:
            level = LogLevel.WARNING
            message += " | SLOW_OPERATION"
        if kwargs:
            message += f" | Data: {json.dumps(kwargs, default=str)}"

        getattr(self.logger, level.lower())(message)

    def log_audit_event(
        self,
        event: AuditEvent,
        campaign_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Log an audit event and return the structured record.

        Args:
            event: Type of audit event
            campaign_id: Campaign acted upon
            details: Additional audit details
        """
        audit_data = {
            "audit_event": event.value,
            "campaign_id": campaign_id,
            "timestamp": _now(),
            "details": details or {},
        }

        message = f"AUDIT: {event.value}"
        if campaign_id:
            message += f" | Campaign: {campaign_id}"
        if details:
            message += f" | Details: {json.dumps(details, default=str)}"

        self.logger.info(message)
        return audit_data

    def log_error(
        self,
        error: Exception,
        operation: str,
        campaign_id: Optional[str] = None,
        **kwargs
    ) -> None:
        """Log application errors with context."""
        message = f"ERROR: {operation} | {type(error).__name__}: {error}"
        if campaign_id:
            message += f" | Campaign: {campaign_id}"
        if kwargs:
            message += f" | Data: {json.dumps(kwargs, default=str)}"
        self.logger.error(message)
