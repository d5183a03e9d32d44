"""
Tests for the campaign draft model and its value objects.
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from campaign_wizard.domain.entities import (
    CampaignDraft,
    ContentItem,
    CustomContentItem,
    StandardContentItem,
    TargetAudience,
)
from campaign_wizard.domain.value_objects import (
    BudgetType,
    FieldValidationError,
    StepValidation,
    WizardState,
    parse_amount,
    parse_count,
)


class TestCampaignDraft:
    """Test suite for CampaignDraft."""

    def test_defaults(self):
        draft = CampaignDraft()

        assert draft.campaign_id is None
        assert draft.budget_type == (BudgetType.PAID,)
        assert draft.content_items == ()
        assert draft.target_audience == TargetAudience()
        assert draft.start_date is None

    def test_draft_is_immutable(self):
        draft = CampaignDraft(title="Launch")

        with pytest.raises(ValidationError):
            draft.title = "Changed"

    def test_replace_returns_new_value(self):
        draft = CampaignDraft(title="Launch")
        updated = draft.replace(title="Relaunch")

        assert draft.title == "Launch"
        assert updated.title == "Relaunch"

    def test_replace_revalidates(self):
        draft = CampaignDraft()

        with pytest.raises(ValidationError):
            draft.replace(budget_type=("barter",))

    def test_sets_are_deduplicated_in_order(self):
        draft = CampaignDraft(
            campaign_goal=("Content Distribution", "Content Creation", "Content Distribution"),
            budget_type=(BudgetType.GIFTED, BudgetType.PAID, BudgetType.GIFTED),
        )

        assert draft.campaign_goal == ("Content Distribution", "Content Creation")
        assert draft.budget_type == (BudgetType.GIFTED, BudgetType.PAID)

    def test_accepts_camel_case_keys(self):
        draft = CampaignDraft.model_validate({
            "id": "cmp-1",
            "campaignGoal": ["Content Creation"],
            "creatorCount": "3",
            "targetAudience": {"socialChannel": "TikTok", "audienceSize": ["1M+ followers"]},
        })

        assert draft.campaign_id == "cmp-1"
        assert draft.creator_count == "3"
        assert draft.target_audience.social_channel == "TikTok"

    def test_is_distribution_campaign(self):
        assert CampaignDraft(campaign_goal=("Content Distribution",)).is_distribution_campaign()
        assert not CampaignDraft(campaign_goal=("Content Creation",)).is_distribution_campaign()

    def test_find_content_item(self, valid_draft):
        assert valid_draft.find_content_item("item-1").content_type == "Reels"
        assert valid_draft.find_content_item("missing") is None

    def test_duplicate_clears_identity(self, valid_draft):
        original = valid_draft.replace(campaign_id="cmp-1")
        copy = original.duplicate()

        assert copy.campaign_id is None
        assert copy.title == "Summer Launch (Copy)"
        assert copy.content_items == original.content_items


class TestContentItems:
    """Test suite for the content item variants."""

    def test_standard_item_rejects_other_channel(self):
        with pytest.raises(ValidationError):
            StandardContentItem(social_channel="Other")

    def test_custom_item_is_pinned_to_other(self, custom_item):
        assert custom_item.social_channel == "Other"
        assert custom_item.is_custom

        with pytest.raises(ValidationError):
            CustomContentItem(social_channel="Instagram")

    def test_union_picks_variant_by_channel(self):
        adapter = TypeAdapter(ContentItem)

        standard = adapter.validate_python({"socialChannel": "YouTube", "contentType": "Shorts"})
        custom = adapter.validate_python({"socialChannel": "Other", "customTitle": "Newsletter"})

        assert isinstance(standard, StandardContentItem)
        assert isinstance(custom, CustomContentItem)
        assert custom.custom_title == "Newsletter"

    def test_items_get_generated_ids(self):
        first, second = StandardContentItem(), StandardContentItem()

        assert first.id and second.id
        assert first.id != second.id


class TestStepValidation:
    """Test suite for validation result values."""

    def test_valid_result(self):
        result = StepValidation.valid()

        assert result.is_valid
        assert result.to_dict() == {"isValid": True, "errors": []}

    def test_merge_concatenates_in_order(self):
        a = StepValidation([FieldValidationError("title", "Campaign title is required")])
        b = StepValidation([FieldValidationError("budget", "Budget amount is required")])

        merged = StepValidation.merge(a, StepValidation.valid(), b)

        assert not merged.is_valid
        assert merged.fields == ("title", "budget")
        assert len(merged) == 2

    def test_field_errors_compare_by_value(self):
        assert FieldValidationError("title", "x") == FieldValidationError("title", "x")
        assert FieldValidationError("title", "x") != FieldValidationError("title", "y")


class TestWizardState:
    """Test suite for wizard state transitions."""

    def test_step_numbers(self):
        assert WizardState.for_step(3) is WizardState.STEP3
        assert WizardState.STEP2.step_number == 2
        assert WizardState.SAVING.step_number is None

    def test_for_step_out_of_range(self):
        with pytest.raises(ValueError):
            WizardState.for_step(5)

    def test_transitions(self):
        assert WizardState.STEP1.can_transition_to(WizardState.STEP2)
        assert not WizardState.STEP1.can_transition_to(WizardState.STEP3)
        assert WizardState.STEP4.can_transition_to(WizardState.SAVING)
        assert WizardState.SAVING.can_transition_to(WizardState.STEP4)
        assert not WizardState.PUBLISHED.can_transition_to(WizardState.STEP4)

    def test_terminal_states(self):
        assert WizardState.PUBLISHED.is_terminal()
        assert WizardState.CLOSED.is_terminal()
        assert not WizardState.SAVING.is_terminal()


class TestAmountParsing:
    """Test suite for budget and count parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("$1,500", "1500"),
        ("€250.50", "250.50"),
        ("0", "0"),
    ])
    def test_parse_amount(self, text, expected):
        assert str(parse_amount(text)) == expected

    @pytest.mark.parametrize("text", ["", "free", "1.2.3"])
    def test_parse_amount_invalid(self, text):
        assert parse_amount(text) is None

    def test_parse_count(self):
        assert parse_count(" 5 ") == 5
        assert parse_count("2.5") is None
        assert parse_count("five") is None
        assert parse_count("+3") == 3
        assert parse_count("1_0") is None
        assert parse_count("\u0663") is None
        assert parse_count("") is None
