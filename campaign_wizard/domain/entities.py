"""
Domain Entities

The canonical in-memory representation of a campaign being authored.
Drafts are immutable values: every edit produces a new CampaignDraft
through an update command (see application.commands).
"""

from datetime import date
from typing import Annotated, Any, Literal, Optional, Tuple, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel

from .value_objects import (
    CONTENT_DISTRIBUTION_GOAL,
    OTHER_CHANNEL,
    BudgetType,
)


def new_item_id() -> str:
    return uuid4().hex


def _ordered_unique(values: Tuple) -> Tuple:
    return tuple(dict.fromkeys(values))


class DraftValue(BaseModel):
    """Base for draft values: frozen, camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def replace(self, **changes: Any):
        """Validated copy of this value with some fields changed."""
        data = dict(self)
        data.update(changes)
        return type(self).model_validate(data)


class StandardContentItem(DraftValue):
    """A deliverable on a catalogued channel, described by its content type."""

    id: str = Field(default_factory=new_item_id)
    social_channel: str = ""
    content_type: str = ""
    quantity: int = 1
    description: str = ""

    @field_validator("social_channel")
    @classmethod
    def reject_other_channel(cls, v: str) -> str:
        if v == OTHER_CHANNEL:
            raise ValueError("Items on the 'Other' channel must be CustomContentItem")
        return v

    @property
    def is_custom(self) -> bool:
        return False


class CustomContentItem(DraftValue):
    """A deliverable on the "Other" channel, described by a free-form title."""

    id: str = Field(default_factory=new_item_id)
    social_channel: Literal["Other"] = OTHER_CHANNEL
    custom_title: str = ""
    quantity: int = 1
    description: str = ""

    @property
    def is_custom(self) -> bool:
        return True


def _content_item_tag(value: Any) -> str:
    if isinstance(value, dict):
        channel = value.get("social_channel", value.get("socialChannel"))
    else:
        channel = getattr(value, "social_channel", None)
    return "custom" if channel == OTHER_CHANNEL else "standard"


ContentItem = Annotated[
    Union[
        Annotated[StandardContentItem, Tag("standard")],
        Annotated[CustomContentItem, Tag("custom")],
    ],
    Discriminator(_content_item_tag),
]


class TargetAudience(DraftValue):
    """Demographic and targeting sub-record of a campaign."""

    social_channel: str = ""
    audience_size: Tuple[str, ...] = ()
    age_range: Tuple[str, ...] = ()
    gender: str = ""
    location: Tuple[str, ...] = ()
    ethnicity: str = ""
    interests: Tuple[str, ...] = ()

    @field_validator("audience_size", "age_range", "location", "interests")
    @classmethod
    def dedupe(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _ordered_unique(v)


class CampaignDraft(DraftValue):
    """
    Campaign definition being authored in the wizard.

    Set-valued fields are ordered tuples without duplicates so that a
    draft serializes deterministically. Business rules are checked by the
    step validator rather than on construction, so incomplete drafts can
    always be represented.
    """

    campaign_id: Optional[str] = Field(default=None, alias="id")
    title: str = ""
    description: str = ""
    image: Optional[str] = None
    campaign_goal: Tuple[str, ...] = ()
    budget_type: Tuple[BudgetType, ...] = (BudgetType.PAID,)
    budget: str = ""
    product_service_description: str = ""
    affiliate_program: str = ""
    requirements: str = ""
    creator_count: str = ""
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    content_items: Tuple[ContentItem, ...] = ()
    target_audience: TargetAudience = Field(default_factory=TargetAudience)
    creator_purchase_required: bool = False
    product_ship_required: bool = False

    @field_validator("campaign_goal", "budget_type")
    @classmethod
    def dedupe(cls, v: Tuple) -> Tuple:
        return _ordered_unique(v)

    def has_budget_type(self, budget_type: BudgetType) -> bool:
        return budget_type in self.budget_type

    def is_distribution_campaign(self) -> bool:
        """Check if the distribution goal is selected."""
        return CONTENT_DISTRIBUTION_GOAL in self.campaign_goal

    def find_content_item(self, item_id: str) -> Optional[Union[StandardContentItem, CustomContentItem]]:
        for item in self.content_items:
            if item.id == item_id:
                return item
        return None

    def duplicate(self) -> "CampaignDraft":
        """Copy of this campaign as a new, unsaved draft."""
        return self.replace(campaign_id=None, title=f"{self.title} (Copy)")

    def __str__(self) -> str:
        return f"CampaignDraft {self.title or '(untitled)'}"
