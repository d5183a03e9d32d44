"""
Draft update commands and their handler.
"""

from .dto import *  # noqa: F401,F403
from .dto import UpdateCommand
from .handlers import DraftUpdateHandler

__all__ = [
    "UpdateCommand",
    "DraftUpdateHandler",
    "SetTitle",
    "SetDescription",
    "SetImage",
    "ToggleCampaignGoal",
    "SetCampaignGoals",
    "AddContentItem",
    "RemoveContentItem",
    "SetContentItemChannel",
    "SetContentItemType",
    "SetContentItemCustomTitle",
    "SetContentItemQuantity",
    "SetContentItemDescription",
    "ToggleBudgetType",
    "SetBudgetTypes",
    "SetBudget",
    "SetProductServiceDescription",
    "SetAffiliateProgram",
    "SetCreatorPurchaseRequired",
    "SetProductShipRequired",
    "SetStartDate",
    "SetCompletionDate",
    "SetCreatorCount",
    "SetRequirements",
    "SetAudienceSocialChannel",
    "SetAudienceSizes",
    "SetAudienceAgeRanges",
    "SetAudienceGender",
    "SetAudienceLocations",
    "SetAudienceEthnicity",
    "ToggleAudienceInterest",
    "SetAudienceInterests",
]
