"""
Domain Events

Events that represent something significant that happened in the wizard.
The controller delivers them to subscribers so that hosts can render
notifications, navigate, or record analytics without coupling to it.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Sequence
from uuid import uuid4

from .value_objects import FieldValidationError, WizardState


class DomainEvent:
    """
    Base class for all domain events.

    Contains common properties and behavior for domain events.
    """

    def __init__(
        self,
        event_id: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.event_id = event_id or str(uuid4())
        self.occurred_at = occurred_at or datetime.now()
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a dictionary representation."""
        return {
            "event_id": self.event_id,
            "event_type": self.__class__.__name__,
            "occurred_at": self.occurred_at.isoformat(),
            "metadata": self.metadata,
            **self._event_data(),
        }

    def _event_data(self) -> Dict[str, Any]:
        """Override this method to provide event-specific data."""
        return {}

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(event_id={self.event_id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()})"


class ValidationFailedEvent(DomainEvent):
    """
    Event fired once per rejected step transition or publish attempt.

    Carries the whole error batch so hosts render one itemized list.
    """

    def __init__(
        self,
        step: Optional[int],
        errors: Sequence[FieldValidationError],
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.step = step
        self.errors = tuple(errors)

    def _event_data(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "errors": [error.to_dict() for error in self.errors],
        }


class WizardStepChangedEvent(DomainEvent):
    """Event fired when the wizard moves between steps."""

    def __init__(self, old_state: WizardState, new_state: WizardState, **kwargs):
        super().__init__(**kwargs)
        self.old_state = old_state
        self.new_state = new_state

    def _event_data(self) -> Dict[str, Any]:
        return {"old_state": self.old_state.value, "new_state": self.new_state.value}


class DraftSavedEvent(DomainEvent):
    """Event fired when a draft save succeeds."""

    def __init__(self, campaign_id: str, created: bool, **kwargs):
        super().__init__(**kwargs)
        self.campaign_id = campaign_id
        self.created = created

    def _event_data(self) -> Dict[str, Any]:
        return {"campaign_id": self.campaign_id, "created": self.created}


class DraftSaveFailedEvent(DomainEvent):
    """
    Event fired when a draft could not be saved.

    ``during_close`` marks the best-effort save on close, which does not
    block the flow; hosts should surface it as a non-blocking warning.
    """

    def __init__(
        self,
        error: Exception,
        campaign_id: Optional[str] = None,
        during_close: bool = False,
        attempts: int = 1,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.error = error
        self.campaign_id = campaign_id
        self.during_close = during_close
        self.attempts = attempts

    def _event_data(self) -> Dict[str, Any]:
        return {
            "campaign_id": self.campaign_id,
            "error": str(self.error),
            "during_close": self.during_close,
            "attempts": self.attempts,
        }


class CampaignPublishedEvent(DomainEvent):
    """Event fired exactly once when a campaign is published."""

    def __init__(self, campaign_id: str, created: bool, **kwargs):
        super().__init__(**kwargs)
        self.campaign_id = campaign_id
        self.created = created

    def _event_data(self) -> Dict[str, Any]:
        return {"campaign_id": self.campaign_id, "created": self.created}


class PublishFailedEvent(DomainEvent):
    """Event fired when publishing failed in persistence; the user may retry."""

    def __init__(self, error: Exception, campaign_id: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.error = error
        self.campaign_id = campaign_id

    def _event_data(self) -> Dict[str, Any]:
        return {"campaign_id": self.campaign_id, "error": str(self.error)}


class WizardClosedEvent(DomainEvent):
    """Event fired when the wizard is closed."""

    def __init__(self, campaign_id: Optional[str], saved: bool, **kwargs):
        super().__init__(**kwargs)
        self.campaign_id = campaign_id
        self.saved = saved

    def _event_data(self) -> Dict[str, Any]:
        return {"campaign_id": self.campaign_id, "saved": self.saved}
