"""
Domain Layer

The campaign draft model, conditional field rules and step validation.
It has no knowledge of persistence transports or the host UI.
"""

# Value Objects
from .value_objects import (
    BudgetType,
    CampaignStatus,
    WizardState,
    FieldValidationError,
    StepValidation,
)

# Entities
from .entities import (
    CampaignDraft,
    ContentItem,
    CustomContentItem,
    StandardContentItem,
    TargetAudience,
)

# Normalization
from .normalization import (
    draft_from_record,
    draft_to_record,
    budget_display_value,
)

# Conditional fields
from .conditional_fields import (
    required_fields,
    active_fields,
    is_required,
    timeline_hints,
    TimelineHints,
)

# Validation
from .validation import (
    StepValidator,
    validate_step1,
    validate_step2,
    validate_step3,
    validate_step4,
    validate_all,
    get_step_validation,
)

# Interfaces
from .interfaces import (
    DraftPersistenceAdapter,
    MediaResolver,
    PersistedCampaign,
)

# Domain Events
from .events import (
    DomainEvent,
    ValidationFailedEvent,
    WizardStepChangedEvent,
    DraftSavedEvent,
    DraftSaveFailedEvent,
    CampaignPublishedEvent,
    PublishFailedEvent,
    WizardClosedEvent,
)

# Domain Exceptions
from .exceptions import (
    DomainError,
    PersistenceError,
    IdentityConflictError,
    WizardStateError,
    InvalidCommandError,
)

__all__ = [
    # Value Objects
    "BudgetType",
    "CampaignStatus",
    "WizardState",
    "FieldValidationError",
    "StepValidation",
    # Entities
    "CampaignDraft",
    "ContentItem",
    "CustomContentItem",
    "StandardContentItem",
    "TargetAudience",
    # Normalization
    "draft_from_record",
    "draft_to_record",
    "budget_display_value",
    # Conditional fields
    "required_fields",
    "active_fields",
    "is_required",
    "timeline_hints",
    "TimelineHints",
    # Validation
    "StepValidator",
    "validate_step1",
    "validate_step2",
    "validate_step3",
    "validate_step4",
    "validate_all",
    "get_step_validation",
    # Interfaces
    "DraftPersistenceAdapter",
    "MediaResolver",
    "PersistedCampaign",
    # Events
    "DomainEvent",
    "ValidationFailedEvent",
    "WizardStepChangedEvent",
    "DraftSavedEvent",
    "DraftSaveFailedEvent",
    "CampaignPublishedEvent",
    "PublishFailedEvent",
    "WizardClosedEvent",
    # Exceptions
    "DomainError",
    "PersistenceError",
    "IdentityConflictError",
    "WizardStateError",
    "InvalidCommandError",
]
