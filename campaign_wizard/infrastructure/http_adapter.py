"""
HTTP persistence adapter for the campaigns API.

Creates campaigns with POST /api/campaigns and overwrites them with
PUT /api/campaigns/{id}. Responses carry {"campaign": {"id": ...}}.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from campaign_wizard.core.config import get_settings
from campaign_wizard.domain.entities import CampaignDraft
from campaign_wizard.domain.exceptions import PersistenceError
from campaign_wizard.domain.interfaces import (
    DraftPersistenceAdapter,
    PersistedCampaign,
    ensure_identity,
)
from campaign_wizard.domain.normalization import draft_to_record
from campaign_wizard.domain.value_objects import CampaignStatus

logger = logging.getLogger(__name__)

CAMPAIGNS_PATH = "/api/campaigns"


class HttpCampaignPersistenceAdapter(DraftPersistenceAdapter):
    """
    Persistence adapter backed by the campaigns REST API.

    Transport failures and non-2xx responses are raised as PersistenceError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the adapter.

        Args:
            base_url: Base URL of the campaigns API (defaults to settings)
            api_key: API key sent as X-API-Key (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            client: Preconfigured client; takes precedence over the other options
            transport: Transport for the internally created client
        """
        self.settings = get_settings()
        self.base_url = base_url or self.settings.CAMPAIGNS_API_URL
        self.api_key = api_key if api_key is not None else self.settings.CAMPAIGNS_API_KEY

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key

        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout or self.settings.CAMPAIGNS_API_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        payload: Dict[str, Any],
        operation: str,
        campaign_id: Optional[str] = None,
    ) -> PersistedCampaign:
        try:
            response = await self.client.request(method, path, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{operation} failed with {e.response.status_code}: {e.response.text}")
            raise PersistenceError(
                f"Campaign {operation} failed: {e.response.status_code}",
                operation=operation,
                campaign_id=campaign_id,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"{operation} request error: {e}")
            raise PersistenceError(
                f"Campaign {operation} request failed: {e}",
                operation=operation,
                campaign_id=campaign_id,
            ) from e
        except ValueError as e:
            raise PersistenceError(
                f"Campaign {operation} returned invalid JSON",
                operation=operation,
                campaign_id=campaign_id,
                status_code=response.status_code,
            ) from e

        returned_id = (body.get("campaign") or {}).get("id") if isinstance(body, dict) else None
        if not returned_id:
            raise PersistenceError(
                f"Campaign {operation} response has no campaign id",
                operation=operation,
                campaign_id=campaign_id,
                status_code=response.status_code,
            )

        logger.info(f"Campaign {operation} succeeded for {returned_id}")
        return PersistedCampaign(campaign_id=str(returned_id))

    async def create_campaign(self, draft: CampaignDraft) -> PersistedCampaign:
        payload = draft_to_record(draft.replace(campaign_id=None), status=CampaignStatus.ACTIVE)
        return await self._send("POST", CAMPAIGNS_PATH, payload, "create")

    async def update_campaign(
        self, campaign_id: str, draft: CampaignDraft, status: CampaignStatus
    ) -> PersistedCampaign:
        campaign_id = ensure_identity(campaign_id, "update")
        payload = draft_to_record(draft.replace(campaign_id=campaign_id), status=status)
        return await self._send(
            "PUT", f"{CAMPAIGNS_PATH}/{campaign_id}", payload, "update", campaign_id
        )

    async def save_draft(
        self, draft: CampaignDraft, campaign_id: Optional[str] = None
    ) -> PersistedCampaign:
        if campaign_id is None:
            payload = draft_to_record(draft.replace(campaign_id=None), status=CampaignStatus.DRAFT)
            return await self._send("POST", CAMPAIGNS_PATH, payload, "save_draft")
        return await self.update_campaign(campaign_id, draft, CampaignStatus.DRAFT)
