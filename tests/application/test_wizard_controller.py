"""
Tests for the WizardController use case.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from campaign_wizard.application.commands import SetCreatorCount, SetImage, SetTitle
from campaign_wizard.application.use_cases import PublishOutcome, WizardController
from campaign_wizard.domain.entities import CampaignDraft
from campaign_wizard.domain.events import (
    CampaignPublishedEvent,
    DraftSavedEvent,
    DraftSaveFailedEvent,
    PublishFailedEvent,
    ValidationFailedEvent,
    WizardClosedEvent,
    WizardStepChangedEvent,
)
from campaign_wizard.domain.exceptions import IdentityConflictError, WizardStateError
from campaign_wizard.domain.interfaces import DraftPersistenceAdapter, MediaResolver, PersistedCampaign
from campaign_wizard.domain.normalization import draft_to_record
from campaign_wizard.domain.value_objects import CampaignStatus, WizardState


def of_type(events, event_type):
    return [event for event in events if isinstance(event, event_type)]


class TestNavigation:
    """Test suite for step navigation."""

    def test_starts_on_first_step(self, make_controller, store):
        controller = make_controller(store)

        assert controller.state is WizardState.STEP1
        assert controller.step == 1
        assert controller.campaign_id is None
        assert not controller.has_unsaved_changes

    def test_invalid_step_blocks_with_one_event(self, make_controller, store, events):
        controller = make_controller(store)
        controller.subscribe(events.append)

        result = controller.next()

        assert not result.is_valid
        assert controller.state is WizardState.STEP1
        failures = of_type(events, ValidationFailedEvent)
        assert len(failures) == 1
        assert failures[0].step == 1
        assert [error.field for error in failures[0].errors] == ["title", "description", "campaignGoal"]

    def test_walks_forward_and_back(self, make_controller, store, valid_draft, events):
        controller = make_controller(store, valid_draft)
        controller.subscribe(events.append)

        for expected in (WizardState.STEP2, WizardState.STEP3, WizardState.STEP4):
            assert controller.next().is_valid
            assert controller.state is expected

        controller.back()
        assert controller.state is WizardState.STEP3

        changes = of_type(events, WizardStepChangedEvent)
        assert [event.new_state for event in changes] == [
            WizardState.STEP2, WizardState.STEP3, WizardState.STEP4, WizardState.STEP3,
        ]

    def test_back_skips_validation(self, make_controller, store, valid_draft):
        controller = make_controller(store, valid_draft)
        controller.next()
        controller.apply(SetTitle(value=""))

        controller.back()

        assert controller.state is WizardState.STEP1

    def test_out_of_range_navigation(self, make_controller, store, valid_draft, advance_to_step4):
        controller = make_controller(store, valid_draft)

        with pytest.raises(WizardStateError):
            controller.back()

        advance_to_step4(controller)
        with pytest.raises(WizardStateError):
            controller.next()

    def test_unsubscribe(self, make_controller, store, events):
        controller = make_controller(store)
        unsubscribe = controller.subscribe(events.append)

        unsubscribe()
        controller.next()

        assert events == []

    def test_failing_listener_does_not_block_navigation(self, make_controller, store, valid_draft, events):
        controller = make_controller(store, valid_draft)
        controller.subscribe(Mock(side_effect=RuntimeError("listener bug")))
        controller.subscribe(events.append)

        result = controller.next()

        assert result.is_valid
        assert controller.state is WizardState.STEP2
        assert len(of_type(events, WizardStepChangedEvent)) == 1


class TestEditing:
    """Test suite for draft edits through the controller."""

    def test_apply_marks_dirty(self, make_controller, store):
        controller = make_controller(store)

        draft = controller.apply(SetTitle(value="Spring"))

        assert draft.title == "Spring"
        assert controller.draft is draft
        assert controller.has_unsaved_changes

    def test_timeline_hints_use_settings(self, make_controller, store, valid_draft):
        controller = make_controller(store, valid_draft)

        hints = controller.timeline_hints()

        assert hints.recommended_completion_date is not None
        assert not hints.below_recommended_minimum


class TestSaveDraft:
    """Test suite for saving drafts."""

    @pytest.mark.asyncio
    async def test_first_save_binds_identity(self, make_controller, store, events):
        controller = make_controller(store)
        controller.subscribe(events.append)
        controller.apply(SetTitle(value="Half done"))

        result = await controller.save_draft()

        assert result.ok
        assert controller.campaign_id == result.campaign_id
        assert controller.draft.campaign_id == result.campaign_id
        assert store.records[result.campaign_id]["status"] == "draft"
        assert not controller.has_unsaved_changes
        assert controller.state is WizardState.STEP1
        saved = of_type(events, DraftSavedEvent)
        assert len(saved) == 1 and saved[0].created

    @pytest.mark.asyncio
    async def test_later_saves_reuse_identity(self, make_controller, store):
        controller = make_controller(store)
        first = await controller.save_draft()
        controller.apply(SetTitle(value="Second pass"))

        second = await controller.save_draft()

        assert second.campaign_id == first.campaign_id
        assert len(store.records) == 1
        assert store.calls == [("save_draft", None), ("save_draft", first.campaign_id)]

    @pytest.mark.asyncio
    async def test_save_does_not_validate(self, make_controller, store):
        controller = make_controller(store, CampaignDraft())

        result = await controller.save_draft()

        assert result.ok

    @pytest.mark.asyncio
    async def test_failure_is_returned(self, make_controller, store, events):
        controller = make_controller(store)
        controller.subscribe(events.append)
        controller.apply(SetTitle(value="x"))
        store.fail_next()

        result = await controller.save_draft()

        assert not result.ok
        assert result.error is not None
        assert controller.has_unsaved_changes
        failed = of_type(events, DraftSaveFailedEvent)
        assert len(failed) == 1 and not failed[0].during_close

    @pytest.mark.asyncio
    async def test_changed_identity_is_a_conflict(self, make_controller):
        adapter = AsyncMock(spec=DraftPersistenceAdapter)
        adapter.save_draft.side_effect = [PersistedCampaign("cmp-a"), PersistedCampaign("cmp-b")]
        controller = make_controller(adapter)

        await controller.save_draft()
        result = await controller.save_draft()

        assert not result.ok
        assert isinstance(result.error, IdentityConflictError)
        assert controller.campaign_id == "cmp-a"

    @pytest.mark.asyncio
    async def test_edits_during_save_stay_dirty(self, make_controller, gated_store):
        controller = make_controller(gated_store)
        controller.apply(SetTitle(value="Before"))

        save = asyncio.create_task(controller.save_draft())
        await asyncio.sleep(0)
        controller.apply(SetTitle(value="During"))
        gated_store.gate.set()
        result = await save

        assert result.ok
        assert controller.draft.title == "During"
        assert controller.has_unsaved_changes

    @pytest.mark.asyncio
    async def test_media_is_resolved_before_persisting(self, make_controller, store):
        resolver = AsyncMock(spec=MediaResolver)
        resolver.resolve.return_value = "https://cdn.example.com/cover.png"
        controller = make_controller(store, media_resolver=resolver)
        controller.apply(SetImage(value="file:///tmp/cover.png"))

        result = await controller.save_draft()

        resolver.resolve.assert_awaited_once_with("file:///tmp/cover.png")
        assert store.records[result.campaign_id]["image"] == "https://cdn.example.com/cover.png"
        assert controller.draft.image == "https://cdn.example.com/cover.png"


class TestClose:
    """Test suite for closing the wizard."""

    @pytest.mark.asyncio
    async def test_close_without_changes(self, make_controller, store, events):
        controller = make_controller(store)
        controller.subscribe(events.append)

        result = await controller.close()

        assert result is None
        assert controller.state is WizardState.CLOSED
        assert store.calls == []
        closed = of_type(events, WizardClosedEvent)
        assert len(closed) == 1 and not closed[0].saved

    @pytest.mark.asyncio
    async def test_close_saves_changes(self, make_controller, store):
        controller = make_controller(store)
        controller.apply(SetTitle(value="Keep me"))

        result = await controller.close()

        assert result.ok
        assert store.get(result.campaign_id).title == "Keep me"

    @pytest.mark.asyncio
    async def test_close_retries_transient_failures(self, make_controller, store):
        controller = make_controller(store)
        controller.apply(SetTitle(value="Keep me"))
        store.fail_next(2)

        result = await controller.close()

        assert result.ok
        assert len(store.calls) == 3
        assert controller.state is WizardState.CLOSED

    @pytest.mark.asyncio
    async def test_close_warns_when_save_fails(self, make_controller, store, events):
        controller = make_controller(store)
        controller.subscribe(events.append)
        controller.apply(SetTitle(value="Lost"))
        store.fail_next(10)

        result = await controller.close()

        assert not result.ok
        assert controller.state is WizardState.CLOSED
        failed = of_type(events, DraftSaveFailedEvent)
        assert len(failed) == 1
        assert failed[0].during_close
        assert failed[0].attempts == 3

    @pytest.mark.asyncio
    async def test_close_survives_unexpected_save_error(self, make_controller, events):
        adapter = AsyncMock(spec=DraftPersistenceAdapter)
        adapter.save_draft.side_effect = ConnectionError("socket closed")
        controller = make_controller(adapter)
        controller.subscribe(events.append)
        controller.apply(SetTitle(value="x"))

        result = await controller.close()

        assert not result.ok
        assert isinstance(result.error, ConnectionError)
        assert controller.state is WizardState.CLOSED
        failed = of_type(events, DraftSaveFailedEvent)
        assert len(failed) == 1
        assert failed[0].during_close
        closed = of_type(events, WizardClosedEvent)
        assert len(closed) == 1
        assert not closed[0].saved

    @pytest.mark.asyncio
    async def test_closed_wizard_is_inert(self, make_controller, store):
        controller = make_controller(store)
        await controller.close()

        assert await controller.close() is None
        with pytest.raises(WizardStateError):
            controller.apply(SetTitle(value="late"))
        with pytest.raises(WizardStateError):
            await controller.save_draft()
        assert (await controller.publish()).outcome is PublishOutcome.REJECTED


class TestPublish:
    """Test suite for publishing."""

    @pytest.mark.asyncio
    async def test_publish_new_campaign(self, make_controller, store, valid_draft, events, advance_to_step4):
        on_success = Mock()
        controller = advance_to_step4(make_controller(store, valid_draft, on_success=on_success))
        controller.subscribe(events.append)

        result = await controller.publish()

        assert result.outcome is PublishOutcome.PUBLISHED
        assert controller.state is WizardState.PUBLISHED
        assert store.records[result.campaign_id]["status"] == "active"
        assert len(of_type(events, CampaignPublishedEvent)) == 1
        on_success.assert_called_once_with(result.campaign_id)

    @pytest.mark.asyncio
    async def test_publish_outside_last_step(self, make_controller, store, valid_draft):
        controller = make_controller(store, valid_draft)

        result = await controller.publish()

        assert result.outcome is PublishOutcome.REJECTED
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_publish_invalid_draft(self, make_controller, store, valid_draft, events, advance_to_step4):
        controller = advance_to_step4(make_controller(store, valid_draft))
        controller.subscribe(events.append)
        controller.apply(SetTitle(value=""))
        controller.apply(SetCreatorCount(value="0"))

        result = await controller.publish()

        assert result.outcome is PublishOutcome.INVALID
        assert result.validation.fields == ("title", "creatorCount")
        assert controller.state is WizardState.STEP4
        failures = of_type(events, ValidationFailedEvent)
        assert len(failures) == 1
        assert failures[0].step is None
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_publish_failure_returns_to_last_step(
        self, make_controller, store, valid_draft, events, advance_to_step4
    ):
        on_success = Mock()
        controller = advance_to_step4(make_controller(store, valid_draft, on_success=on_success))
        controller.subscribe(events.append)
        store.fail_next()

        failed = await controller.publish()

        assert failed.outcome is PublishOutcome.FAILED
        assert controller.state is WizardState.STEP4
        assert len(of_type(events, PublishFailedEvent)) == 1
        on_success.assert_not_called()

        retried = await controller.publish()

        assert retried.outcome is PublishOutcome.PUBLISHED
        on_success.assert_called_once()

    @pytest.mark.asyncio
    async def test_concurrent_publish_is_rejected(self, make_controller, gated_store, valid_draft, advance_to_step4):
        controller = advance_to_step4(make_controller(gated_store, valid_draft))

        first = asyncio.create_task(controller.publish())
        await asyncio.sleep(0)
        assert controller.state is WizardState.SAVING

        second = await controller.publish()
        assert second.outcome is PublishOutcome.REJECTED
        with pytest.raises(WizardStateError):
            controller.apply(SetTitle(value="mid-flight"))
        with pytest.raises(WizardStateError):
            await controller.close()

        gated_store.gate.set()
        result = await first

        assert result.outcome is PublishOutcome.PUBLISHED
        assert len(gated_store.records) == 1

    @pytest.mark.asyncio
    async def test_publish_after_pending_save_updates_same_record(
        self, make_controller, gated_store, valid_draft, advance_to_step4
    ):
        controller = advance_to_step4(make_controller(gated_store, valid_draft))

        save = asyncio.create_task(controller.save_draft())
        await asyncio.sleep(0)
        publish = asyncio.create_task(controller.publish())
        await asyncio.sleep(0)
        gated_store.gate.set()

        saved = await save
        published = await publish

        assert published.outcome is PublishOutcome.PUBLISHED
        assert published.campaign_id == saved.campaign_id
        assert gated_store.calls == [("save_draft", None), ("update_campaign", saved.campaign_id)]
        assert len(gated_store.records) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_restores_last_step(self, make_controller, valid_draft, advance_to_step4):
        adapter = AsyncMock(spec=DraftPersistenceAdapter)
        adapter.create_campaign.side_effect = RuntimeError("bug")
        controller = advance_to_step4(make_controller(adapter, valid_draft))

        with pytest.raises(RuntimeError):
            await controller.publish()

        assert controller.state is WizardState.STEP4

    @pytest.mark.asyncio
    async def test_listener_failing_on_saving_does_not_strand_publish(
        self, make_controller, store, valid_draft, advance_to_step4
    ):
        def fail_on_saving(event):
            if isinstance(event, WizardStepChangedEvent) and event.new_state is WizardState.SAVING:
                raise RuntimeError("listener bug")

        controller = advance_to_step4(make_controller(store, valid_draft))
        controller.subscribe(fail_on_saving)

        result = await controller.publish()

        assert result.outcome is PublishOutcome.PUBLISHED
        assert controller.state is WizardState.PUBLISHED
        assert store.records[result.campaign_id]["status"] == "active"


class TestEditMode:
    """Test suite for editing and duplicating stored campaigns."""

    @pytest.mark.asyncio
    async def test_edit_existing_campaign(self, test_settings, today, store, valid_draft, advance_to_step4):
        store.records["cmp-1"] = draft_to_record(valid_draft.replace(campaign_id="cmp-1"), CampaignStatus.DRAFT)
        controller = WizardController.from_record(
            store.records["cmp-1"], store, settings=test_settings, today=lambda: today
        )

        assert controller.campaign_id == "cmp-1"
        assert controller.state is WizardState.STEP1
        assert not controller.has_unsaved_changes

        advance_to_step4(controller)
        result = await controller.publish()

        assert result.campaign_id == "cmp-1"
        assert store.calls == [("update_campaign", "cmp-1")]
        assert store.records["cmp-1"]["status"] == "active"

    @pytest.mark.asyncio
    async def test_duplicate_creates_new_record(self, test_settings, store, valid_draft):
        store.records["cmp-1"] = draft_to_record(valid_draft.replace(campaign_id="cmp-1"), CampaignStatus.ACTIVE)
        controller = WizardController.from_duplicate(store.records["cmp-1"], store, settings=test_settings)

        assert controller.campaign_id is None
        assert controller.draft.title == "Summer Launch (Copy)"
        assert controller.has_unsaved_changes

        result = await controller.save_draft()

        assert result.campaign_id != "cmp-1"
        assert len(store.records) == 2
