"""
In-memory campaign store.

Implements DraftPersistenceAdapter over a dict of serialized records.
Used for local runs and tests; failures can be scheduled to exercise the
wizard's error paths.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from campaign_wizard.domain.entities import CampaignDraft, new_item_id
from campaign_wizard.domain.exceptions import IdentityConflictError, PersistenceError
from campaign_wizard.domain.interfaces import (
    DraftPersistenceAdapter,
    PersistedCampaign,
    ensure_identity,
)
from campaign_wizard.domain.normalization import draft_from_record, draft_to_record
from campaign_wizard.domain.value_objects import CampaignStatus

logger = logging.getLogger(__name__)


class InMemoryCampaignStore(DraftPersistenceAdapter):
    """Dict-backed persistence adapter."""

    def __init__(self, records: Optional[Dict[str, Dict[str, Any]]] = None):
        self.records: Dict[str, Dict[str, Any]] = dict(records or {})
        self.calls: List[Tuple[str, Optional[str]]] = []
        self.failures = 0

    def fail_next(self, count: int = 1) -> None:
        """Make the next ``count`` calls raise PersistenceError."""
        self.failures = count

    def get(self, campaign_id: str) -> CampaignDraft:
        """Load a stored campaign as a draft."""
        if campaign_id not in self.records:
            raise PersistenceError(
                f"Campaign {campaign_id} not found", operation="get", campaign_id=campaign_id
            )
        return draft_from_record(self.records[campaign_id])

    def _check_failure(self, operation: str, campaign_id: Optional[str]) -> None:
        self.calls.append((operation, campaign_id))
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError(
                f"Simulated {operation} failure", operation=operation, campaign_id=campaign_id
            )

    def _store(self, campaign_id: str, draft: CampaignDraft, status: CampaignStatus) -> PersistedCampaign:
        record = draft_to_record(draft.replace(campaign_id=campaign_id), status=status)
        self.records[campaign_id] = record
        logger.debug(f"Stored campaign {campaign_id} with status {status.value}")
        return PersistedCampaign(campaign_id=campaign_id)

    def _require_existing(self, campaign_id: Optional[str], operation: str) -> str:
        campaign_id = ensure_identity(campaign_id, operation)
        if campaign_id not in self.records:
            raise IdentityConflictError(
                f"Cannot {operation} unknown campaign {campaign_id}",
                received_id=campaign_id,
            )
        return campaign_id

    async def create_campaign(self, draft: CampaignDraft) -> PersistedCampaign:
        self._check_failure("create_campaign", None)
        return self._store(new_item_id(), draft, CampaignStatus.ACTIVE)

    async def update_campaign(
        self, campaign_id: str, draft: CampaignDraft, status: CampaignStatus
    ) -> PersistedCampaign:
        self._check_failure("update_campaign", campaign_id)
        campaign_id = self._require_existing(campaign_id, "update")
        return self._store(campaign_id, draft, CampaignStatus(status))

    async def save_draft(
        self, draft: CampaignDraft, campaign_id: Optional[str] = None
    ) -> PersistedCampaign:
        self._check_failure("save_draft", campaign_id)
        if campaign_id is None:
            return self._store(new_item_id(), draft, CampaignStatus.DRAFT)
        campaign_id = self._require_existing(campaign_id, "save")
        return self._store(campaign_id, draft, CampaignStatus.DRAFT)
