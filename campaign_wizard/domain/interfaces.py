"""
Domain Interfaces

Abstract contracts for the collaborators the wizard depends on.
These interfaces are implemented by the infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .entities import CampaignDraft
from .exceptions import IdentityConflictError
from .value_objects import CampaignStatus


@dataclass(frozen=True)
class PersistedCampaign:
    """Response of a successful persistence call."""

    campaign_id: str


def ensure_identity(campaign_id: Optional[str], operation: str = "update") -> str:
    """Guard for operations that must target an existing campaign."""
    if not campaign_id:
        raise IdentityConflictError(
            f"Cannot {operation} a campaign without a bound identity",
            bound_id=campaign_id,
        )
    return campaign_id


class DraftPersistenceAdapter(ABC):
    """
    Persistence contract for campaign drafts.

    Implementations raise PersistenceError when the backing store fails.
    """

    @abstractmethod
    async def create_campaign(self, draft: CampaignDraft) -> PersistedCampaign:
        """Create a new published (active) campaign."""
        pass

    @abstractmethod
    async def update_campaign(
        self, campaign_id: str, draft: CampaignDraft, status: CampaignStatus
    ) -> PersistedCampaign:
        """Overwrite an existing campaign and set its status."""
        pass

    @abstractmethod
    async def save_draft(
        self, draft: CampaignDraft, campaign_id: Optional[str] = None
    ) -> PersistedCampaign:
        """Store the draft, creating the record when no identity is given."""
        pass


class MediaResolver(ABC):
    """Turns an opaque image reference into an uploaded URL."""

    @abstractmethod
    async def resolve(self, reference: str) -> str:
        """Upload the referenced media if needed and return its URL."""
        pass
