"""
Domain Exceptions

Custom exceptions for the campaign wizard domain layer.
Field validation problems are not exceptions: they are returned as
FieldValidationError values in batches by the step validator.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base exception for all domain-related errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class PersistenceError(DomainError):
    """Raised by persistence adapters when a campaign cannot be stored."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        campaign_id: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details = {
            "operation": operation,
            "campaign_id": campaign_id,
            "status_code": status_code,
        }
        super().__init__(
            message=message, error_code="PERSISTENCE_FAILED", details=details
        )


class IdentityConflictError(DomainError):
    """Raised when an update has no bound identity or the identity would change."""

    def __init__(
        self,
        message: str,
        bound_id: Optional[str] = None,
        received_id: Optional[str] = None,
    ):
        details = {"bound_id": bound_id, "received_id": received_id}
        super().__init__(
            message=message, error_code="IDENTITY_CONFLICT", details=details
        )


class WizardStateError(DomainError):
    """Raised when a wizard operation is not allowed in the current state."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        details = {"current_state": current_state, "operation": operation}
        super().__init__(
            message=message, error_code="INVALID_WIZARD_STATE", details=details
        )


class InvalidCommandError(DomainError):
    """Raised when an update command cannot be applied to the draft."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        item_id: Optional[str] = None,
    ):
        details = {"command": command, "item_id": item_id}
        super().__init__(
            message=message, error_code="INVALID_COMMAND", details=details
        )
