"""
Update command DTOs for the campaign wizard.

Each logical field edit is its own command type, tagged by ``kind``.
UpdateCommand is the closed union of all of them; step components issue
these instead of setting fields by path.
"""

from datetime import date
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from campaign_wizard.domain.value_objects import BudgetType


class DraftCommand(BaseModel):
    """Base for draft update commands."""

    model_config = ConfigDict(frozen=True)


# Step 1: campaign basics

class SetTitle(DraftCommand):
    kind: Literal["set_title"] = "set_title"
    value: str = Field(..., description="Campaign title")


class SetDescription(DraftCommand):
    kind: Literal["set_description"] = "set_description"
    value: str = Field(..., description="Campaign description")


class SetImage(DraftCommand):
    kind: Literal["set_image"] = "set_image"
    value: Optional[str] = Field(None, description="Opaque image reference (local handle or URL)")


class ToggleCampaignGoal(DraftCommand):
    kind: Literal["toggle_campaign_goal"] = "toggle_campaign_goal"
    goal: str


class SetCampaignGoals(DraftCommand):
    kind: Literal["set_campaign_goals"] = "set_campaign_goals"
    goals: Tuple[str, ...] = ()


# Step 2: content requirements

class AddContentItem(DraftCommand):
    kind: Literal["add_content_item"] = "add_content_item"
    item_id: Optional[str] = Field(None, description="Explicit id; generated when omitted")
    social_channel: str = ""


class RemoveContentItem(DraftCommand):
    kind: Literal["remove_content_item"] = "remove_content_item"
    item_id: str


class SetContentItemChannel(DraftCommand):
    kind: Literal["set_content_item_channel"] = "set_content_item_channel"
    item_id: str
    social_channel: str


class SetContentItemType(DraftCommand):
    kind: Literal["set_content_item_type"] = "set_content_item_type"
    item_id: str
    content_type: str


class SetContentItemCustomTitle(DraftCommand):
    kind: Literal["set_content_item_custom_title"] = "set_content_item_custom_title"
    item_id: str
    custom_title: str


class SetContentItemQuantity(DraftCommand):
    kind: Literal["set_content_item_quantity"] = "set_content_item_quantity"
    item_id: str
    quantity: int


class SetContentItemDescription(DraftCommand):
    kind: Literal["set_content_item_description"] = "set_content_item_description"
    item_id: str
    description: str


# Step 3: budget & timeline

class ToggleBudgetType(DraftCommand):
    kind: Literal["toggle_budget_type"] = "toggle_budget_type"
    budget_type: BudgetType


class SetBudgetTypes(DraftCommand):
    kind: Literal["set_budget_types"] = "set_budget_types"
    budget_types: Tuple[BudgetType, ...]


class SetBudget(DraftCommand):
    kind: Literal["set_budget"] = "set_budget"
    value: str = Field(..., description="Amount or rate as entered, e.g. '$500'")


class SetProductServiceDescription(DraftCommand):
    kind: Literal["set_product_service_description"] = "set_product_service_description"
    value: str


class SetAffiliateProgram(DraftCommand):
    kind: Literal["set_affiliate_program"] = "set_affiliate_program"
    value: str


class SetCreatorPurchaseRequired(DraftCommand):
    kind: Literal["set_creator_purchase_required"] = "set_creator_purchase_required"
    value: bool


class SetProductShipRequired(DraftCommand):
    kind: Literal["set_product_ship_required"] = "set_product_ship_required"
    value: bool


class SetStartDate(DraftCommand):
    kind: Literal["set_start_date"] = "set_start_date"
    value: Optional[date] = None


class SetCompletionDate(DraftCommand):
    kind: Literal["set_completion_date"] = "set_completion_date"
    value: Optional[date] = None


# Step 4: creators & target audience

class SetCreatorCount(DraftCommand):
    kind: Literal["set_creator_count"] = "set_creator_count"
    value: str


class SetRequirements(DraftCommand):
    kind: Literal["set_requirements"] = "set_requirements"
    value: str


class SetAudienceSocialChannel(DraftCommand):
    kind: Literal["set_audience_social_channel"] = "set_audience_social_channel"
    value: str


class SetAudienceSizes(DraftCommand):
    kind: Literal["set_audience_sizes"] = "set_audience_sizes"
    values: Tuple[str, ...] = ()


class SetAudienceAgeRanges(DraftCommand):
    kind: Literal["set_audience_age_ranges"] = "set_audience_age_ranges"
    values: Tuple[str, ...] = ()


class SetAudienceGender(DraftCommand):
    kind: Literal["set_audience_gender"] = "set_audience_gender"
    value: str


class SetAudienceLocations(DraftCommand):
    kind: Literal["set_audience_locations"] = "set_audience_locations"
    values: Tuple[str, ...] = ()


class SetAudienceEthnicity(DraftCommand):
    kind: Literal["set_audience_ethnicity"] = "set_audience_ethnicity"
    value: str


class ToggleAudienceInterest(DraftCommand):
    kind: Literal["toggle_audience_interest"] = "toggle_audience_interest"
    interest: str


class SetAudienceInterests(DraftCommand):
    kind: Literal["set_audience_interests"] = "set_audience_interests"
    values: Tuple[str, ...] = ()


UpdateCommand = Annotated[
    Union[
        SetTitle,
        SetDescription,
        SetImage,
        ToggleCampaignGoal,
        SetCampaignGoals,
        AddContentItem,
        RemoveContentItem,
        SetContentItemChannel,
        SetContentItemType,
        SetContentItemCustomTitle,
        SetContentItemQuantity,
        SetContentItemDescription,
        ToggleBudgetType,
        SetBudgetTypes,
        SetBudget,
        SetProductServiceDescription,
        SetAffiliateProgram,
        SetCreatorPurchaseRequired,
        SetProductShipRequired,
        SetStartDate,
        SetCompletionDate,
        SetCreatorCount,
        SetRequirements,
        SetAudienceSocialChannel,
        SetAudienceSizes,
        SetAudienceAgeRanges,
        SetAudienceGender,
        SetAudienceLocations,
        SetAudienceEthnicity,
        ToggleAudienceInterest,
        SetAudienceInterests,
    ],
    Field(discriminator="kind"),
]
