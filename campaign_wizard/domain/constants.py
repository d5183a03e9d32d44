"""
Option catalogs offered by the campaign wizard.
"""

from typing import Dict, Tuple

from .value_objects import CONTENT_CREATION_GOAL, CONTENT_DISTRIBUTION_GOAL, OTHER_CHANNEL

CAMPAIGN_GOALS: Tuple[str, ...] = (CONTENT_CREATION_GOAL, CONTENT_DISTRIBUTION_GOAL)

SOCIAL_CHANNELS: Tuple[str, ...] = (
    "Instagram",
    "TikTok",
    "YouTube",
    "Twitter",
    "Facebook",
    "LinkedIn",
)

# Channels selectable for a content item ("Other" takes a custom title)
CONTENT_ITEM_CHANNELS: Tuple[str, ...] = SOCIAL_CHANNELS + (OTHER_CHANNEL,)

CONTENT_TYPES_BY_CHANNEL: Dict[str, Tuple[str, ...]] = {
    "Instagram": ("Posts", "Reels", "Stories", "IGTV"),
    "TikTok": ("Videos", "Live Streams"),
    "YouTube": ("Videos", "Shorts", "Live Streams"),
    "Twitter": ("Tweets", "Threads", "Spaces"),
    "Facebook": ("Posts", "Videos", "Stories", "Live Videos"),
    "LinkedIn": ("Posts", "Articles", "Videos"),
}

AUDIENCE_SIZE_OPTIONS: Tuple[str, ...] = (
    "1K - 10K followers",
    "10K - 50K followers",
    "50K - 100K followers",
    "100K - 500K followers",
    "500K - 1M followers",
    "1M+ followers",
)

AGE_RANGE_OPTIONS: Tuple[str, ...] = ("18-24", "25-34", "35-44", "45-54", "55-64", "65+")

GENDER_OPTIONS: Tuple[str, ...] = ("Any", "Female", "Male")

ETHNICITY_OPTIONS: Tuple[str, ...] = (
    "Any",
    "Asian",
    "Black/African American",
    "Hispanic/Latino",
    "White/Caucasian",
    "Middle Eastern",
    "Pacific Islander",
    "Mixed/Other",
)

# Historical values found in stored campaigns
LEGACY_BUDGET_TYPES: Dict[str, str] = {
    "cash": "paid",
    "product": "gifted",
    "service": "gifted",
}

LEGACY_CAMPAIGN_GOALS: Dict[str, str] = {
    "Distribution": CONTENT_DISTRIBUTION_GOAL,
}
