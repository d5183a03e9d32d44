"""
Shared fixtures for the campaign wizard test suite.
"""

import asyncio
from datetime import date, timedelta

import pytest

from campaign_wizard.application.use_cases.wizard import WizardController
from campaign_wizard.core.config import Settings
from campaign_wizard.domain.entities import (
    CampaignDraft,
    CustomContentItem,
    StandardContentItem,
    TargetAudience,
)
from campaign_wizard.domain.validation import StepValidator
from campaign_wizard.domain.value_objects import BudgetType
from campaign_wizard.infrastructure.memory_adapter import InMemoryCampaignStore

FIXED_TODAY = date(2024, 5, 20)


class GatedCampaignStore(InMemoryCampaignStore):
    """In-memory store whose create and draft-save calls wait for ``gate``."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.gate = asyncio.Event()

    async def create_campaign(self, draft):
        await self.gate.wait()
        return await super().create_campaign(draft)

    async def save_draft(self, draft, campaign_id=None):
        await self.gate.wait()
        return await super().save_draft(draft, campaign_id)


@pytest.fixture
def today():
    """Fixed reference date for date rules."""
    return FIXED_TODAY


@pytest.fixture
def validator(today):
    return StepValidator(today=lambda: today)


@pytest.fixture
def test_settings():
    """Settings with instant close-time retries."""
    return Settings(
        CLOSE_SAVE_MAX_ATTEMPTS=3,
        CLOSE_SAVE_BASE_DELAY=0.0,
        CLOSE_SAVE_MAX_DELAY=0.0,
    )


@pytest.fixture
def valid_draft(today):
    """A draft that passes every step."""
    return CampaignDraft(
        title="Summer Launch",
        description="Promote the new summer collection with short videos",
        campaign_goal=("Content Creation",),
        content_items=(
            StandardContentItem(
                id="item-1", social_channel="Instagram", content_type="Reels", quantity=2
            ),
        ),
        budget_type=(BudgetType.PAID,),
        budget="$1,500",
        start_date=today + timedelta(days=7),
        completion_date=today + timedelta(days=37),
        creator_count="5",
    )


@pytest.fixture
def distribution_draft(valid_draft):
    """A valid draft for a content distribution campaign."""
    return valid_draft.replace(
        campaign_goal=("Content Creation", "Content Distribution"),
        target_audience=TargetAudience(
            social_channel="TikTok",
            audience_size=("10K - 50K followers",),
        ),
    )


@pytest.fixture
def custom_item():
    return CustomContentItem(id="item-other", custom_title="Podcast mention", quantity=1)


@pytest.fixture
def store():
    return InMemoryCampaignStore()


@pytest.fixture
def gated_store():
    return GatedCampaignStore()


@pytest.fixture
def make_controller(test_settings, today):
    """Factory for controllers with fixed settings and date."""

    def _make(adapter, draft=None, **kwargs):
        kwargs.setdefault("settings", test_settings)
        kwargs.setdefault("today", lambda: today)
        return WizardController(adapter, draft, **kwargs)

    return _make


@pytest.fixture
def events():
    """Collects events emitted by a controller."""
    return []


@pytest.fixture
def advance_to_step4():
    """Walks a controller with a valid draft to the last step."""

    def _advance(controller):
        for _ in range(3):
            result = controller.next()
            assert result.is_valid, result.errors
        return controller

    return _advance
