"""
Wizard use case for campaign authoring.

The WizardController owns the draft and the step state machine. It gates
step transitions on validation, persists drafts and publishes campaigns
through a DraftPersistenceAdapter, and reports what happened to
subscribers as domain events.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from campaign_wizard.core.config import Settings, get_settings
from campaign_wizard.domain.conditional_fields import TimelineHints, timeline_hints
from campaign_wizard.domain.entities import CampaignDraft
from campaign_wizard.domain.events import (
    CampaignPublishedEvent,
    DomainEvent,
    DraftSavedEvent,
    DraftSaveFailedEvent,
    PublishFailedEvent,
    ValidationFailedEvent,
    WizardClosedEvent,
    WizardStepChangedEvent,
)
from campaign_wizard.domain.exceptions import (
    IdentityConflictError,
    PersistenceError,
    WizardStateError,
)
from campaign_wizard.domain.interfaces import DraftPersistenceAdapter, MediaResolver
from campaign_wizard.domain.normalization import draft_from_record
from campaign_wizard.domain.validation import STEP_COUNT, StepValidator
from campaign_wizard.domain.value_objects import CampaignStatus, StepValidation, WizardState

from ..commands.dto import DraftCommand
from ..commands.handlers import DraftUpdateHandler
from ..services.cross_cutting import ApplicationLogger, AuditEvent, LogLevel
from ..services.error_handler import RetryConfig, RetryExhaustedError, retry_with_backoff

logger = logging.getLogger(__name__)

Listener = Callable[[DomainEvent], Any]


@dataclass(frozen=True)
class PersistenceResult:
    """Outcome of a draft save."""

    ok: bool
    campaign_id: Optional[str] = None
    error: Optional[Exception] = None


class PublishOutcome(str, Enum):
    """How a publish attempt ended."""

    PUBLISHED = "published"
    INVALID = "invalid"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a publish attempt."""

    outcome: PublishOutcome
    campaign_id: Optional[str] = None
    validation: Optional[StepValidation] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is PublishOutcome.PUBLISHED


class WizardController:
    """
    Use case driving the four-step campaign wizard.

    Edits and navigation are synchronous. Persistence is async and
    serialized by a lock, so the identity returned by the first
    successful call is bound before any later call is issued.
    """

    def __init__(
        self,
        adapter: DraftPersistenceAdapter,
        draft: Optional[CampaignDraft] = None,
        *,
        settings: Optional[Settings] = None,
        media_resolver: Optional[MediaResolver] = None,
        on_success: Optional[Callable[[str], Any]] = None,
        today: Optional[Callable[[], date]] = None,
        validator: Optional[StepValidator] = None,
        app_logger: Optional[ApplicationLogger] = None,
    ):
        self.settings = settings or get_settings()
        self.adapter = adapter
        self.media_resolver = media_resolver
        self.on_success = on_success
        self.validator = validator or StepValidator(
            min_description_length=self.settings.MIN_DESCRIPTION_LENGTH,
            today=today,
        )
        self.update_handler = DraftUpdateHandler(
            autofill_completion_date=self.settings.AUTOFILL_COMPLETION_DATE,
            recommended_months=self.settings.RECOMMENDED_CAMPAIGN_DURATION_MONTHS,
        )
        self.app_logger = app_logger or ApplicationLogger()

        self._draft = draft if draft is not None else CampaignDraft()
        self._campaign_id = self._draft.campaign_id
        self._state = WizardState.STEP1
        self._listeners: List[Listener] = []
        self._lock = asyncio.Lock()
        self._revision = 0
        self._saved_revision = 0

    @classmethod
    def from_record(
        cls,
        record: Union[Mapping[str, Any], CampaignDraft],
        adapter: DraftPersistenceAdapter,
        **kwargs,
    ) -> "WizardController":
        """Open an existing campaign for editing, bound to its identity."""
        draft = record if isinstance(record, CampaignDraft) else draft_from_record(record)
        return cls(adapter, draft, **kwargs)

    @classmethod
    def from_duplicate(
        cls,
        record: Union[Mapping[str, Any], CampaignDraft],
        adapter: DraftPersistenceAdapter,
        **kwargs,
    ) -> "WizardController":
        """Start a new, unsaved campaign copied from an existing one."""
        source = record if isinstance(record, CampaignDraft) else draft_from_record(record)
        controller = cls(adapter, source.duplicate(), **kwargs)
        controller._revision += 1
        return controller

    # Read-only state

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def step(self) -> Optional[int]:
        return self._state.step_number

    @property
    def draft(self) -> CampaignDraft:
        return self._draft

    @property
    def campaign_id(self) -> Optional[str]:
        return self._campaign_id

    @property
    def has_unsaved_changes(self) -> bool:
        return self._revision != self._saved_revision

    def timeline_hints(self) -> TimelineHints:
        return timeline_hints(
            self._draft,
            min_duration_days=self.settings.MIN_CAMPAIGN_DURATION_DAYS,
            recommended_months=self.settings.RECOMMENDED_CAMPAIGN_DURATION_MONTHS,
        )

    # Events

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an event listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: DomainEvent) -> None:
        logger.debug(f"Emitting {event}")
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # A failing subscriber must not leave the wizard mid-transition
                logger.exception(f"Event listener failed for {event}")

    def _transition(self, new_state: WizardState) -> None:
        if not self._state.can_transition_to(new_state):
            raise WizardStateError(
                f"Cannot move from {self._state.value} to {new_state.value}",
                current_state=self._state.value,
                operation="transition",
            )
        old_state = self._state
        self._state = new_state
        self._emit(WizardStepChangedEvent(old_state=old_state, new_state=new_state))

    def _require_step(self, operation: str) -> None:
        if not self._state.is_step():
            raise WizardStateError(
                f"Cannot {operation} while the wizard is {self._state.value}",
                current_state=self._state.value,
                operation=operation,
            )

    # Editing and navigation

    def apply(self, command: DraftCommand) -> CampaignDraft:
        """Apply an update command to the draft and mark it dirty."""
        self._require_step("edit the draft")
        self._draft = self.update_handler.handle(self._draft, command)
        self._revision += 1
        return self._draft

    def next(self) -> StepValidation:
        """Validate the current step and advance when it passes."""
        step = self._state.step_number
        if step is None or step >= STEP_COUNT:
            raise WizardStateError(
                f"Cannot advance from {self._state.value}",
                current_state=self._state.value,
                operation="next",
            )

        validation = self.validator.get_step_validation(step, self._draft)
        if not validation.is_valid:
            self._report_invalid(step, validation)
            return validation

        self._transition(WizardState.for_step(step + 1))
        return validation

    def back(self) -> None:
        """Return to the previous step without validating."""
        step = self._state.step_number
        if step is None or step <= 1:
            raise WizardStateError(
                f"Cannot go back from {self._state.value}",
                current_state=self._state.value,
                operation="back",
            )
        self._transition(WizardState.for_step(step - 1))

    def _report_invalid(self, step: Optional[int], validation: StepValidation) -> None:
        self.app_logger.log_audit_event(
            AuditEvent.VALIDATION_FAILED,
            self._campaign_id,
            details={"step": step, "fields": list(validation.fields)},
        )
        self._emit(ValidationFailedEvent(step=step, errors=validation.errors))

    # Persistence

    def _bind_identity(self, campaign_id: str) -> None:
        if self._campaign_id is None:
            self._campaign_id = campaign_id
            self._draft = self._draft.replace(campaign_id=campaign_id)
            logger.info(f"Bound wizard to campaign {campaign_id}")
        elif campaign_id != self._campaign_id:
            raise IdentityConflictError(
                f"Persistence returned campaign {campaign_id}, wizard is bound to {self._campaign_id}",
                bound_id=self._campaign_id,
                received_id=campaign_id,
            )

    async def _resolve_media(self, draft: CampaignDraft) -> CampaignDraft:
        if self.media_resolver is None or not draft.image:
            return draft

        reference = draft.image
        url = await self.media_resolver.resolve(reference)
        if url == reference:
            return draft

        # Keep the uploaded URL unless the image was changed meanwhile
        if self._draft.image == reference:
            self._draft = self._draft.replace(image=url)
        return draft.replace(image=url)

    async def _save_once(self) -> Tuple[str, bool]:
        async with self._lock:
            revision = self._revision
            draft = await self._resolve_media(self._draft)
            created = self._campaign_id is None

            start = time.perf_counter()
            try:
                persisted = await self.adapter.save_draft(draft, self._campaign_id)
            finally:
                self.app_logger.log_performance(
                    "save_draft", (time.perf_counter() - start) * 1000, campaign_id=self._campaign_id
                )

            self._bind_identity(persisted.campaign_id)
            self._saved_revision = max(self._saved_revision, revision)
            return persisted.campaign_id, created

    def _report_saved(self, campaign_id: str, created: bool) -> None:
        self.app_logger.log_audit_event(
            AuditEvent.DRAFT_SAVED, campaign_id, details={"created": created}
        )
        self._emit(DraftSavedEvent(campaign_id=campaign_id, created=created))

    def _report_save_failed(self, error: Exception, during_close: bool, attempts: int = 1) -> None:
        self.app_logger.log_error(error, "save_draft", self._campaign_id, attempts=attempts)
        self.app_logger.log_audit_event(
            AuditEvent.DRAFT_SAVE_FAILED,
            self._campaign_id,
            details={"during_close": during_close, "attempts": attempts},
        )
        self._emit(
            DraftSaveFailedEvent(
                error=error,
                campaign_id=self._campaign_id,
                during_close=during_close,
                attempts=attempts,
            )
        )

    async def save_draft(self) -> PersistenceResult:
        """Persist the draft without validating and stay on the current step."""
        self._require_step("save a draft")
        self.app_logger.log_operation("save_draft", self._campaign_id, step=self.step)

        try:
            campaign_id, created = await self._save_once()
        except (PersistenceError, IdentityConflictError) as e:
            self._report_save_failed(e, during_close=False)
            return PersistenceResult(ok=False, campaign_id=self._campaign_id, error=e)

        self._report_saved(campaign_id, created)
        return PersistenceResult(ok=True, campaign_id=campaign_id)

    def _close_retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.settings.CLOSE_SAVE_MAX_ATTEMPTS,
            base_delay=self.settings.CLOSE_SAVE_BASE_DELAY,
            max_delay=self.settings.CLOSE_SAVE_MAX_DELAY,
            retry_on=[PersistenceError],
            dont_retry_on=[IdentityConflictError],
        )

    async def close(self) -> Optional[PersistenceResult]:
        """
        Close the wizard, saving unsaved changes on a best-effort basis.

        A save that still fails after the configured retries, or fails
        with an unexpected error, is reported as a DraftSaveFailedEvent
        with ``during_close`` set and does not keep the wizard open.
        """
        if self._state.is_terminal():
            return None
        if self._state is WizardState.SAVING:
            raise WizardStateError(
                "Cannot close while publishing",
                current_state=self._state.value,
                operation="close",
            )

        result = None
        if self.has_unsaved_changes:
            self.app_logger.log_operation("close_save", self._campaign_id)
            try:
                (campaign_id, created), attempts = await retry_with_backoff(
                    self._save_once, self._close_retry_config()
                )
            except RetryExhaustedError as e:
                logger.warning(f"Draft not saved on close: {e}")
                self._report_save_failed(e.last_error, during_close=True, attempts=e.attempts)
                result = PersistenceResult(ok=False, campaign_id=self._campaign_id, error=e.last_error)
            except IdentityConflictError as e:
                logger.warning(f"Draft not saved on close: {e}")
                self._report_save_failed(e, during_close=True)
                result = PersistenceResult(ok=False, campaign_id=self._campaign_id, error=e)
            except Exception as e:
                logger.exception(f"Unexpected error saving draft on close: {e}")
                self._report_save_failed(e, during_close=True)
                result = PersistenceResult(ok=False, campaign_id=self._campaign_id, error=e)
            else:
                if attempts > 1:
                    logger.info(f"Draft saved on close after {attempts} attempts")
                self._report_saved(campaign_id, created)
                result = PersistenceResult(ok=True, campaign_id=campaign_id)

        self._transition(WizardState.CLOSED)
        saved = result is not None and result.ok
        self.app_logger.log_audit_event(
            AuditEvent.WIZARD_CLOSED, self._campaign_id, details={"saved": saved}
        )
        self._emit(WizardClosedEvent(campaign_id=self._campaign_id, saved=saved))
        return result

    async def publish(self) -> PublishResult:
        """
        Validate all steps and publish the campaign as active.

        Only allowed from the last step. Persistence failures return the
        wizard to the last step so the user can retry.
        """
        if self._state is not WizardState.STEP4:
            self.app_logger.log_operation(
                "publish_rejected", self._campaign_id, level=LogLevel.WARNING, state=self._state.value
            )
            return PublishResult(outcome=PublishOutcome.REJECTED, campaign_id=self._campaign_id)

        validation = self.validator.validate_all(self._draft)
        if not validation.is_valid:
            self._report_invalid(None, validation)
            return PublishResult(
                outcome=PublishOutcome.INVALID,
                campaign_id=self._campaign_id,
                validation=validation,
            )

        self._transition(WizardState.SAVING)
        self.app_logger.log_operation("publish", self._campaign_id)
        try:
            campaign_id, created = await self._publish_once()
        except (PersistenceError, IdentityConflictError) as e:
            self._transition(WizardState.STEP4)
            self.app_logger.log_error(e, "publish", self._campaign_id)
            self.app_logger.log_audit_event(AuditEvent.PUBLISH_FAILED, self._campaign_id)
            self._emit(PublishFailedEvent(error=e, campaign_id=self._campaign_id))
            return PublishResult(
                outcome=PublishOutcome.FAILED,
                campaign_id=self._campaign_id,
                validation=validation,
                error=e,
            )
        except Exception:
            self._transition(WizardState.STEP4)
            raise

        self._transition(WizardState.PUBLISHED)
        self.app_logger.log_audit_event(
            AuditEvent.CAMPAIGN_PUBLISHED, campaign_id, details={"created": created}
        )
        self._emit(CampaignPublishedEvent(campaign_id=campaign_id, created=created))
        if self.on_success is not None:
            self.on_success(campaign_id)

        return PublishResult(
            outcome=PublishOutcome.PUBLISHED,
            campaign_id=campaign_id,
            validation=validation,
        )

    async def _publish_once(self) -> Tuple[str, bool]:
        async with self._lock:
            revision = self._revision
            draft = await self._resolve_media(self._draft)
            created = self._campaign_id is None

            start = time.perf_counter()
            try:
                if created:
                    persisted = await self.adapter.create_campaign(draft)
                else:
                    persisted = await self.adapter.update_campaign(
                        self._campaign_id, draft, CampaignStatus.ACTIVE
                    )
            finally:
                self.app_logger.log_performance(
                    "publish", (time.perf_counter() - start) * 1000, campaign_id=self._campaign_id
                )

            self._bind_identity(persisted.campaign_id)
            self._saved_revision = max(self._saved_revision, revision)
            return persisted.campaign_id, created
