"""
Domain Value Objects

Immutable value objects shared by the draft model, the validator and the
wizard controller. Value objects are compared by their value, not identity.
"""

import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


OTHER_CHANNEL = "Other"

CONTENT_CREATION_GOAL = "Content Creation"
CONTENT_DISTRIBUTION_GOAL = "Content Distribution"

_NON_NUMERIC = re.compile(r"[^0-9.]")
_WHOLE_NUMBER = re.compile(r"\s*\+?[0-9]+\s*")


class BudgetType(str, Enum):
    """Compensation models a campaign can offer."""

    PAID = "paid"
    GIFTED = "gifted"
    AFFILIATE = "affiliate"


class CampaignStatus(str, Enum):
    """Status markers sent to the persistence adapter."""

    DRAFT = "draft"
    ACTIVE = "active"


class WizardState(str, Enum):
    """States of the campaign authoring flow."""

    STEP1 = "step1"
    STEP2 = "step2"
    STEP3 = "step3"
    STEP4 = "step4"
    SAVING = "saving"
    PUBLISHED = "published"
    CLOSED = "closed"

    @classmethod
    def for_step(cls, step: int) -> "WizardState":
        """Get the state for a 1-based step number."""
        try:
            return _STEP_STATES[step - 1]
        except (IndexError, TypeError):
            raise ValueError(f"No wizard step {step}")

    @property
    def step_number(self) -> Optional[int]:
        """1-based step number, or None for non-step states."""
        if self in _STEP_STATES:
            return _STEP_STATES.index(self) + 1
        return None

    def is_step(self) -> bool:
        return self in _STEP_STATES

    def is_terminal(self) -> bool:
        return self in {WizardState.PUBLISHED, WizardState.CLOSED}

    def can_transition_to(self, new_state: "WizardState") -> bool:
        """Check if transition to new state is valid."""
        return new_state in VALID_TRANSITIONS.get(self, frozenset())


_STEP_STATES: Tuple[WizardState, ...] = (
    WizardState.STEP1,
    WizardState.STEP2,
    WizardState.STEP3,
    WizardState.STEP4,
)

# Valid wizard transitions
VALID_TRANSITIONS: Dict[WizardState, FrozenSet[WizardState]] = {
    WizardState.STEP1: frozenset({WizardState.STEP2, WizardState.CLOSED}),
    WizardState.STEP2: frozenset({WizardState.STEP1, WizardState.STEP3, WizardState.CLOSED}),
    WizardState.STEP3: frozenset({WizardState.STEP2, WizardState.STEP4, WizardState.CLOSED}),
    WizardState.STEP4: frozenset({WizardState.STEP3, WizardState.SAVING, WizardState.CLOSED}),
    WizardState.SAVING: frozenset({WizardState.PUBLISHED, WizardState.STEP4}),
    WizardState.PUBLISHED: frozenset(),
    WizardState.CLOSED: frozenset(),
}


class FieldValidationError:
    """
    A single validation failure for one field key.

    Recoverable and purely local: returned in batches, never raised.
    """

    def __init__(self, field: str, message: str):
        self._field = field
        self._message = message

    @property
    def field(self) -> str:
        return self._field

    @property
    def message(self) -> str:
        return self._message

    def to_dict(self) -> Dict[str, str]:
        return {"field": self._field, "message": self._message}

    def __eq__(self, other) -> bool:
        if not isinstance(other, FieldValidationError):
            return False
        return self._field == other._field and self._message == other._message

    def __hash__(self) -> int:
        return hash((self._field, self._message))

    def __str__(self) -> str:
        return f"{self._field}: {self._message}"

    def __repr__(self) -> str:
        return f"FieldValidationError(field='{self._field}', message='{self._message}')"


class StepValidation:
    """
    Immutable result of validating one step (or all of them).

    Valid exactly when there are no errors.
    """

    def __init__(self, errors: Iterable[FieldValidationError] = ()):
        self._errors = tuple(errors)

    @classmethod
    def valid(cls) -> "StepValidation":
        return cls(())

    @classmethod
    def merge(cls, *results: "StepValidation") -> "StepValidation":
        """Concatenate the errors of several results, preserving order."""
        errors: List[FieldValidationError] = []
        for result in results:
            errors.extend(result.errors)
        return cls(errors)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> Tuple[FieldValidationError, ...]:
        return self._errors

    @property
    def fields(self) -> Tuple[str, ...]:
        """Field keys with at least one error, in order of first appearance."""
        return tuple(dict.fromkeys(error.field for error in self._errors))

    def to_dict(self) -> Dict:
        return {
            "isValid": self.is_valid,
            "errors": [error.to_dict() for error in self._errors],
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, StepValidation):
            return False
        return self._errors == other._errors

    def __hash__(self) -> int:
        return hash(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"StepValidation(is_valid={self.is_valid}, errors={list(self._errors)!r})"


def strip_amount_formatting(text: str) -> str:
    """Remove everything but digits and decimal points ("$1,500" -> "1500")."""
    return _NON_NUMERIC.sub("", text or "")


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a currency-formatted amount.

    Returns None when nothing numeric remains or the remainder is not a
    number (e.g. "1.2.3").
    """
    cleaned = strip_amount_formatting(text)
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_count(text: str) -> Optional[int]:
    """Parse a text-encoded whole number, or None if it is not one."""
    if text is None or not _WHOLE_NUMBER.fullmatch(text):
        return None
    return int(text)
