"""
Infrastructure Layer

Persistence adapters for campaign drafts.
"""

from .http_adapter import HttpCampaignPersistenceAdapter
from .memory_adapter import InMemoryCampaignStore

__all__ = ["HttpCampaignPersistenceAdapter", "InMemoryCampaignStore"]
