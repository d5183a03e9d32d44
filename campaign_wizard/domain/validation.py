"""
Step validation rules for the campaign wizard.

Each step validator is pure: it never raises and returns every error of
the step in one StepValidation batch. Conditional requirements come from
conditional_fields.required_fields.
"""

import logging
from datetime import date
from typing import Callable, List, Optional

from .conditional_fields import (
    AUDIENCE_SIZE,
    AUDIENCE_SOCIAL_CHANNEL,
    BUDGET,
    BUDGET_TYPE,
    CAMPAIGN_GOAL,
    COMPLETION_DATE,
    CONTENT_ITEMS,
    CREATOR_COUNT,
    DESCRIPTION,
    PRODUCT_SERVICE_DESCRIPTION,
    START_DATE,
    TITLE,
    content_item_key,
    required_fields,
)
from .entities import CampaignDraft
from .value_objects import (
    BudgetType,
    FieldValidationError,
    StepValidation,
    parse_amount,
    parse_count,
)

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 10

STEP_COUNT = 4


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


class StepValidator:
    """
    Validation rules for the four wizard steps.

    ``today`` is consulted at validation time for the start-date rule.
    """

    def __init__(
        self,
        min_description_length: int = MIN_DESCRIPTION_LENGTH,
        today: Optional[Callable[[], date]] = None,
    ):
        self.min_description_length = min_description_length
        self._today = today or date.today

    def validate_step1(self, draft: CampaignDraft) -> StepValidation:
        """Campaign basics: title, description and goals."""
        errors: List[FieldValidationError] = []

        if _blank(draft.title):
            errors.append(FieldValidationError(TITLE, "Campaign title is required"))

        if _blank(draft.description):
            errors.append(FieldValidationError(DESCRIPTION, "Campaign description is required"))
        elif len(draft.description.strip()) < self.min_description_length:
            errors.append(FieldValidationError(
                DESCRIPTION,
                f"Description must be at least {self.min_description_length} characters",
            ))

        if not draft.campaign_goal:
            errors.append(FieldValidationError(CAMPAIGN_GOAL, "Please select at least one campaign goal"))

        return StepValidation(errors)

    def validate_step2(self, draft: CampaignDraft) -> StepValidation:
        """Content requirements: at least one item, each fully described."""
        errors: List[FieldValidationError] = []

        if not draft.content_items:
            errors.append(FieldValidationError(CONTENT_ITEMS, "Please add at least one content requirement"))
            return StepValidation(errors)

        required = required_fields(draft)
        for index, item in enumerate(draft.content_items):
            position = index + 1

            channel_key = content_item_key(index, "socialChannel")
            if channel_key in required and _blank(item.social_channel):
                errors.append(FieldValidationError(
                    channel_key, f"Content item {position}: Social channel is required"
                ))

            if item.is_custom:
                title_key = content_item_key(index, "customTitle")
                if title_key in required and _blank(item.custom_title):
                    errors.append(FieldValidationError(
                        title_key, f"Content item {position}: Task title is required for Other"
                    ))
            else:
                type_key = content_item_key(index, "contentType")
                if type_key in required and _blank(item.content_type):
                    errors.append(FieldValidationError(
                        type_key, f"Content item {position}: Content type is required"
                    ))

            quantity_key = content_item_key(index, "quantity")
            if quantity_key in required and (item.quantity is None or item.quantity < 1):
                errors.append(FieldValidationError(
                    quantity_key, f"Content item {position}: Quantity must be at least 1"
                ))

        return StepValidation(errors)

    def validate_step3(self, draft: CampaignDraft) -> StepValidation:
        """Budget and timeline."""
        errors: List[FieldValidationError] = []
        required = required_fields(draft)

        if not draft.budget_type:
            errors.append(FieldValidationError(BUDGET_TYPE, "Please select at least one budget type"))

        if _blank(draft.budget):
            errors.append(FieldValidationError(BUDGET, "Budget amount is required"))
        elif draft.has_budget_type(BudgetType.PAID):
            amount = parse_amount(draft.budget)
            if amount is None or amount <= 0:
                errors.append(FieldValidationError(BUDGET, "Please enter a valid budget amount"))

        if PRODUCT_SERVICE_DESCRIPTION in required and _blank(draft.product_service_description):
            errors.append(FieldValidationError(
                PRODUCT_SERVICE_DESCRIPTION, "Product description is required for gifted campaigns"
            ))

        if draft.start_date is None:
            errors.append(FieldValidationError(START_DATE, "Start date is required"))

        if draft.completion_date is None:
            errors.append(FieldValidationError(COMPLETION_DATE, "Completion date is required"))

        if draft.start_date is not None and draft.completion_date is not None:
            if draft.start_date < self._today():
                errors.append(FieldValidationError(START_DATE, "Start date cannot be in the past"))

            if draft.completion_date <= draft.start_date:
                errors.append(FieldValidationError(
                    COMPLETION_DATE, "Completion date must be after start date"
                ))

        return StepValidation(errors)

    def validate_step4(self, draft: CampaignDraft) -> StepValidation:
        """Creators needed and, for distribution campaigns, the target audience."""
        errors: List[FieldValidationError] = []
        required = required_fields(draft)

        if _blank(draft.creator_count):
            errors.append(FieldValidationError(CREATOR_COUNT, "Number of creators is required"))
        else:
            count = parse_count(draft.creator_count)
            if count is None or count < 1:
                errors.append(FieldValidationError(
                    CREATOR_COUNT, "Please enter a valid number of creators (minimum 1)"
                ))

        audience = draft.target_audience
        if AUDIENCE_SOCIAL_CHANNEL in required and _blank(audience.social_channel):
            errors.append(FieldValidationError(
                AUDIENCE_SOCIAL_CHANNEL,
                "Primary social channel is required for content distribution campaigns",
            ))

        if AUDIENCE_SIZE in required and not audience.audience_size:
            errors.append(FieldValidationError(
                AUDIENCE_SIZE, "Audience size is required for content distribution campaigns"
            ))

        return StepValidation(errors)

    def validate_all(self, draft: CampaignDraft) -> StepValidation:
        """Aggregate validation across all steps, required before publish."""
        return StepValidation.merge(
            self.validate_step1(draft),
            self.validate_step2(draft),
            self.validate_step3(draft),
            self.validate_step4(draft),
        )

    def get_step_validation(self, step: int, draft: CampaignDraft) -> StepValidation:
        """
        Validate one step by number.

        Steps outside 1-4 have no rules and always pass.
        """
        validators = {
            1: self.validate_step1,
            2: self.validate_step2,
            3: self.validate_step3,
            4: self.validate_step4,
        }
        validator = validators.get(step)
        if validator is None:
            logger.debug(f"No validation rules for step {step}; treating as valid")
            return StepValidation.valid()
        return validator(draft)


def _validator(today: Optional[date]) -> StepValidator:
    if today is None:
        return StepValidator()
    return StepValidator(today=lambda: today)


def validate_step1(draft: CampaignDraft) -> StepValidation:
    return StepValidator().validate_step1(draft)


def validate_step2(draft: CampaignDraft) -> StepValidation:
    return StepValidator().validate_step2(draft)


def validate_step3(draft: CampaignDraft, today: Optional[date] = None) -> StepValidation:
    return _validator(today).validate_step3(draft)


def validate_step4(draft: CampaignDraft) -> StepValidation:
    return StepValidator().validate_step4(draft)


def validate_all(draft: CampaignDraft, today: Optional[date] = None) -> StepValidation:
    return _validator(today).validate_all(draft)


def get_step_validation(
    step: int, draft: CampaignDraft, today: Optional[date] = None
) -> StepValidation:
    return _validator(today).get_step_validation(step, draft)
