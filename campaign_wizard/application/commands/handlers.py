"""
Command handlers for draft updates.

Applies one UpdateCommand to a CampaignDraft and returns the new draft.
Drafts are never mutated in place.
"""

import logging
from typing import Callable, Dict, Tuple, Type

from campaign_wizard.domain.conditional_fields import add_months, content_type_options
from campaign_wizard.domain.entities import (
    CampaignDraft,
    CustomContentItem,
    StandardContentItem,
    new_item_id,
)
from campaign_wizard.domain.exceptions import InvalidCommandError
from campaign_wizard.domain.value_objects import OTHER_CHANNEL

from .dto import (
    AddContentItem,
    DraftCommand,
    RemoveContentItem,
    SetAffiliateProgram,
    SetAudienceAgeRanges,
    SetAudienceEthnicity,
    SetAudienceGender,
    SetAudienceInterests,
    SetAudienceLocations,
    SetAudienceSizes,
    SetAudienceSocialChannel,
    SetBudget,
    SetBudgetTypes,
    SetCampaignGoals,
    SetCompletionDate,
    SetContentItemChannel,
    SetContentItemCustomTitle,
    SetContentItemDescription,
    SetContentItemQuantity,
    SetContentItemType,
    SetCreatorCount,
    SetCreatorPurchaseRequired,
    SetDescription,
    SetImage,
    SetProductServiceDescription,
    SetProductShipRequired,
    SetRequirements,
    SetStartDate,
    SetTitle,
    ToggleAudienceInterest,
    ToggleBudgetType,
    ToggleCampaignGoal,
)

logger = logging.getLogger(__name__)

# Commands that overwrite one top-level draft field with ``command.value``
FIELD_COMMANDS: Dict[Type[DraftCommand], str] = {
    SetTitle: "title",
    SetDescription: "description",
    SetImage: "image",
    SetBudget: "budget",
    SetProductServiceDescription: "product_service_description",
    SetAffiliateProgram: "affiliate_program",
    SetCreatorPurchaseRequired: "creator_purchase_required",
    SetProductShipRequired: "product_ship_required",
    SetCompletionDate: "completion_date",
    SetCreatorCount: "creator_count",
    SetRequirements: "requirements",
}

# Commands that overwrite one target-audience field: (audience field, command attribute)
AUDIENCE_COMMANDS: Dict[Type[DraftCommand], Tuple[str, str]] = {
    SetAudienceSocialChannel: ("social_channel", "value"),
    SetAudienceSizes: ("audience_size", "values"),
    SetAudienceAgeRanges: ("age_range", "values"),
    SetAudienceGender: ("gender", "value"),
    SetAudienceLocations: ("location", "values"),
    SetAudienceEthnicity: ("ethnicity", "value"),
    SetAudienceInterests: ("interests", "values"),
}


def _toggle(values: Tuple, value) -> Tuple:
    if value in values:
        return tuple(v for v in values if v != value)
    return values + (value,)


class DraftUpdateHandler:
    """Handler applying update commands to drafts (copy-on-write)."""

    def __init__(self, autofill_completion_date: bool = True, recommended_months: int = 1):
        self.autofill_completion_date = autofill_completion_date
        self.recommended_months = recommended_months
        self._handlers: Dict[Type[DraftCommand], Callable] = {
            ToggleCampaignGoal: self._toggle_campaign_goal,
            SetCampaignGoals: self._set_campaign_goals,
            AddContentItem: self._add_content_item,
            RemoveContentItem: self._remove_content_item,
            SetContentItemChannel: self._set_content_item_channel,
            SetContentItemType: self._set_content_item_type,
            SetContentItemCustomTitle: self._set_content_item_custom_title,
            SetContentItemQuantity: self._set_content_item_quantity,
            SetContentItemDescription: self._set_content_item_description,
            ToggleBudgetType: self._toggle_budget_type,
            SetBudgetTypes: self._set_budget_types,
            SetStartDate: self._set_start_date,
            ToggleAudienceInterest: self._toggle_audience_interest,
        }

    def supports(self, command_type: Type[DraftCommand]) -> bool:
        return (
            command_type in FIELD_COMMANDS
            or command_type in AUDIENCE_COMMANDS
            or command_type in self._handlers
        )

    def handle(self, draft: CampaignDraft, command: DraftCommand) -> CampaignDraft:
        """Apply ``command`` and return the updated draft."""
        command_type = type(command)

        if command_type in FIELD_COMMANDS:
            return draft.replace(**{FIELD_COMMANDS[command_type]: command.value})

        if command_type in AUDIENCE_COMMANDS:
            field, attribute = AUDIENCE_COMMANDS[command_type]
            audience = draft.target_audience.replace(**{field: getattr(command, attribute)})
            return draft.replace(target_audience=audience)

        handler = self._handlers.get(command_type)
        if handler is None:
            raise InvalidCommandError(
                f"Unsupported command: {command_type.__name__}",
                command=command_type.__name__,
            )
        return handler(draft, command)

    # Campaign goals

    def _toggle_campaign_goal(self, draft: CampaignDraft, command: ToggleCampaignGoal) -> CampaignDraft:
        return draft.replace(campaign_goal=_toggle(draft.campaign_goal, command.goal))

    def _set_campaign_goals(self, draft: CampaignDraft, command: SetCampaignGoals) -> CampaignDraft:
        return draft.replace(campaign_goal=command.goals)

    # Content items

    def _replace_item(self, draft: CampaignDraft, item_id: str, command: DraftCommand, build) -> CampaignDraft:
        item = draft.find_content_item(item_id)
        if item is None:
            raise InvalidCommandError(
                f"No content item with id {item_id}",
                command=type(command).__name__,
                item_id=item_id,
            )
        new_item = build(item)
        items = tuple(new_item if existing.id == item_id else existing for existing in draft.content_items)
        return draft.replace(content_items=items)

    def _add_content_item(self, draft: CampaignDraft, command: AddContentItem) -> CampaignDraft:
        item_id = command.item_id or new_item_id()
        if draft.find_content_item(item_id) is not None:
            raise InvalidCommandError(
                f"Content item {item_id} already exists",
                command="AddContentItem",
                item_id=item_id,
            )

        if command.social_channel == OTHER_CHANNEL:
            item = CustomContentItem(id=item_id)
        else:
            item = StandardContentItem(id=item_id, social_channel=command.social_channel)
        return draft.replace(content_items=draft.content_items + (item,))

    def _remove_content_item(self, draft: CampaignDraft, command: RemoveContentItem) -> CampaignDraft:
        if draft.find_content_item(command.item_id) is None:
            raise InvalidCommandError(
                f"No content item with id {command.item_id}",
                command="RemoveContentItem",
                item_id=command.item_id,
            )
        items = tuple(item for item in draft.content_items if item.id != command.item_id)
        return draft.replace(content_items=items)

    def _set_content_item_channel(self, draft: CampaignDraft, command: SetContentItemChannel) -> CampaignDraft:
        channel = command.social_channel

        def build(item):
            shared = {"id": item.id, "quantity": item.quantity, "description": item.description}
            if channel == OTHER_CHANNEL:
                if item.is_custom:
                    return item
                return CustomContentItem(**shared)

            content_type = "" if item.is_custom else item.content_type
            if content_type not in content_type_options(channel):
                content_type = ""
            return StandardContentItem(social_channel=channel, content_type=content_type, **shared)

        return self._replace_item(draft, command.item_id, command, build)

    def _set_content_item_type(self, draft: CampaignDraft, command: SetContentItemType) -> CampaignDraft:
        def build(item):
            if item.is_custom:
                raise InvalidCommandError(
                    "Items on the Other channel take a custom title, not a content type",
                    command="SetContentItemType",
                    item_id=item.id,
                )
            return item.replace(content_type=command.content_type)

        return self._replace_item(draft, command.item_id, command, build)

    def _set_content_item_custom_title(
        self, draft: CampaignDraft, command: SetContentItemCustomTitle
    ) -> CampaignDraft:
        def build(item):
            if not item.is_custom:
                raise InvalidCommandError(
                    "Only items on the Other channel take a custom title",
                    command="SetContentItemCustomTitle",
                    item_id=item.id,
                )
            return item.replace(custom_title=command.custom_title)

        return self._replace_item(draft, command.item_id, command, build)

    def _set_content_item_quantity(self, draft: CampaignDraft, command: SetContentItemQuantity) -> CampaignDraft:
        return self._replace_item(
            draft, command.item_id, command, lambda item: item.replace(quantity=command.quantity)
        )

    def _set_content_item_description(
        self, draft: CampaignDraft, command: SetContentItemDescription
    ) -> CampaignDraft:
        return self._replace_item(
            draft, command.item_id, command, lambda item: item.replace(description=command.description)
        )

    # Budget

    def _toggle_budget_type(self, draft: CampaignDraft, command: ToggleBudgetType) -> CampaignDraft:
        budget_types = _toggle(draft.budget_type, command.budget_type)
        if not budget_types:
            logger.debug(f"Keeping {command.budget_type.value}: a campaign needs one budget type")
            return draft
        return draft.replace(budget_type=budget_types)

    def _set_budget_types(self, draft: CampaignDraft, command: SetBudgetTypes) -> CampaignDraft:
        if not command.budget_types:
            raise InvalidCommandError(
                "At least one budget type is required",
                command="SetBudgetTypes",
            )
        return draft.replace(budget_type=command.budget_types)

    # Timeline

    def _set_start_date(self, draft: CampaignDraft, command: SetStartDate) -> CampaignDraft:
        changes = {"start_date": command.value}
        if (
            self.autofill_completion_date
            and command.value is not None
            and draft.completion_date is None
        ):
            changes["completion_date"] = add_months(command.value, self.recommended_months)
        return draft.replace(**changes)

    # Target audience

    def _toggle_audience_interest(self, draft: CampaignDraft, command: ToggleAudienceInterest) -> CampaignDraft:
        audience = draft.target_audience
        return draft.replace(
            target_audience=audience.replace(interests=_toggle(audience.interests, command.interest))
        )
