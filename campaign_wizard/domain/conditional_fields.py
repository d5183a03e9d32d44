"""
Conditional field resolution

Maps the current selections of a draft to the fields that are currently
required (for validation) and currently active (for presentation). All
"is this field required/visible" decisions live here.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import FrozenSet, Optional, Tuple, Union

from .constants import CONTENT_TYPES_BY_CHANNEL
from .entities import CampaignDraft, CustomContentItem, StandardContentItem
from .value_objects import BudgetType

# Field keys
TITLE = "title"
DESCRIPTION = "description"
IMAGE = "image"
CAMPAIGN_GOAL = "campaignGoal"
CONTENT_ITEMS = "contentItems"
BUDGET_TYPE = "budgetType"
BUDGET = "budget"
PRODUCT_SERVICE_DESCRIPTION = "productServiceDescription"
AFFILIATE_PROGRAM = "affiliateProgram"
CREATOR_PURCHASE_REQUIRED = "creatorPurchaseRequired"
PRODUCT_SHIP_REQUIRED = "productShipRequired"
START_DATE = "startDate"
COMPLETION_DATE = "completionDate"
CREATOR_COUNT = "creatorCount"
REQUIREMENTS = "requirements"
AUDIENCE_SOCIAL_CHANNEL = "targetAudience.socialChannel"
AUDIENCE_SIZE = "targetAudience.audienceSize"
AUDIENCE_AGE_RANGE = "targetAudience.ageRange"
AUDIENCE_GENDER = "targetAudience.gender"
AUDIENCE_LOCATION = "targetAudience.location"
AUDIENCE_ETHNICITY = "targetAudience.ethnicity"
AUDIENCE_INTERESTS = "targetAudience.interests"

ALWAYS_REQUIRED: FrozenSet[str] = frozenset({
    TITLE,
    DESCRIPTION,
    CAMPAIGN_GOAL,
    CONTENT_ITEMS,
    BUDGET_TYPE,
    BUDGET,
    START_DATE,
    COMPLETION_DATE,
    CREATOR_COUNT,
})

ALWAYS_ACTIVE: FrozenSet[str] = ALWAYS_REQUIRED | {IMAGE, REQUIREMENTS}

GIFTED_REQUIRED: FrozenSet[str] = frozenset({PRODUCT_SERVICE_DESCRIPTION})
GIFTED_ACTIVE: FrozenSet[str] = GIFTED_REQUIRED | {CREATOR_PURCHASE_REQUIRED, PRODUCT_SHIP_REQUIRED}

# Affiliate fields are shown but never block a step
AFFILIATE_ACTIVE: FrozenSet[str] = frozenset({AFFILIATE_PROGRAM, PRODUCT_SERVICE_DESCRIPTION})

DISTRIBUTION_REQUIRED: FrozenSet[str] = frozenset({AUDIENCE_SOCIAL_CHANNEL, AUDIENCE_SIZE})
DISTRIBUTION_ACTIVE: FrozenSet[str] = DISTRIBUTION_REQUIRED | {
    AUDIENCE_AGE_RANGE,
    AUDIENCE_GENDER,
    AUDIENCE_LOCATION,
    AUDIENCE_ETHNICITY,
    AUDIENCE_INTERESTS,
}


def content_item_key(index: int, field: str) -> str:
    """Field key of one attribute of the content item at ``index``."""
    return f"{CONTENT_ITEMS}[{index}].{field}"


def content_item_fields(
    item: Union[StandardContentItem, CustomContentItem], index: int
) -> Tuple[str, ...]:
    """Required keys of one content item; "Other" swaps content type for a custom title."""
    title_field = "customTitle" if item.is_custom else "contentType"
    return (
        content_item_key(index, "socialChannel"),
        content_item_key(index, title_field),
        content_item_key(index, "quantity"),
    )


def required_fields(draft: CampaignDraft) -> FrozenSet[str]:
    """Field keys that must be filled for the draft to publish."""
    fields = set(ALWAYS_REQUIRED)

    if draft.has_budget_type(BudgetType.GIFTED):
        fields |= GIFTED_REQUIRED

    if draft.is_distribution_campaign():
        fields |= DISTRIBUTION_REQUIRED

    for index, item in enumerate(draft.content_items):
        fields.update(content_item_fields(item, index))

    return frozenset(fields)


def active_fields(draft: CampaignDraft) -> FrozenSet[str]:
    """Field keys the presentation layer should currently show."""
    fields = set(ALWAYS_ACTIVE) | required_fields(draft)

    if draft.has_budget_type(BudgetType.GIFTED):
        fields |= GIFTED_ACTIVE

    if draft.has_budget_type(BudgetType.AFFILIATE):
        fields |= AFFILIATE_ACTIVE

    if draft.is_distribution_campaign():
        fields |= DISTRIBUTION_ACTIVE

    for index, item in enumerate(draft.content_items):
        fields.add(content_item_key(index, "description"))

    return frozenset(fields)


def is_required(draft: CampaignDraft, field: str) -> bool:
    return field in required_fields(draft)


def content_type_options(channel: str) -> Tuple[str, ...]:
    """Content types offered for a channel (empty for "Other" or unknown channels)."""
    return CONTENT_TYPES_BY_CHANNEL.get(channel, ())


def add_months(start: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class TimelineHints:
    """Non-blocking timeline guidance for the budget & timeline step."""

    minimum_completion_date: Optional[date] = None
    recommended_completion_date: Optional[date] = None
    below_recommended_minimum: bool = False


def timeline_hints(
    draft: CampaignDraft,
    min_duration_days: int = 14,
    recommended_months: int = 1,
) -> TimelineHints:
    """
    Suggested completion dates for the current start date.

    These are hints only: the step validator accepts any completion date
    strictly after the start date.
    """
    if draft.start_date is None:
        return TimelineHints()

    minimum = draft.start_date + timedelta(days=min_duration_days)
    below = draft.completion_date is not None and draft.completion_date < minimum
    return TimelineHints(
        minimum_completion_date=minimum,
        recommended_completion_date=add_months(draft.start_date, recommended_months),
        below_recommended_minimum=below,
    )
