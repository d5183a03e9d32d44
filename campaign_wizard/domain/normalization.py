"""
Draft normalization

Reconciles persisted campaign records (including historical shapes) into
CampaignDraft values, and serializes drafts back into records.

Historical records may hold scalars where sets are now expected, absent
sub-objects, snake_case column names, empty-string dates and retired
budget-type or goal labels. The stored budget text is never rewritten;
currency symbols are stripped only for display re-population.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic.alias_generators import to_camel

from .constants import LEGACY_BUDGET_TYPES, LEGACY_CAMPAIGN_GOALS
from .entities import (
    CampaignDraft,
    CustomContentItem,
    StandardContentItem,
    TargetAudience,
    new_item_id,
)
from .value_objects import OTHER_CHANNEL, BudgetType, CampaignStatus

logger = logging.getLogger(__name__)

_DISPLAY_SYMBOLS = re.compile(r"[$€£¥,\s]")

_AUDIENCE_SET_FIELDS = ("audience_size", "age_range", "location", "interests")
_AUDIENCE_TEXT_FIELDS = ("social_channel", "gender", "ethnicity")


def _pick(record: Mapping[str, Any], name: str, *fallbacks: str) -> Any:
    """Read a field by camelCase key, snake_case key, or an explicit fallback."""
    for key in (to_camel(name), name, *fallbacks):
        if key in record:
            return record[key]
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_set(value: Any) -> Tuple[str, ...]:
    """Coerce a legacy scalar or a sequence into an ordered set of strings."""
    if value is None or value == "":
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(dict.fromkeys(str(v) for v in value if v not in (None, "")))
    return (str(value),)


def _as_date(value: Any, field: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning(f"Discarding unparseable {field} value: {value!r}")
        return None


def _as_quantity(value: Any) -> int:
    if value is None or value == "":
        return 1
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Unparseable content item quantity: {value!r}")
        return 0


def _budget_types(value: Any) -> Tuple[BudgetType, ...]:
    if value is None or value == "":
        return (BudgetType.PAID,)

    budget_types: List[BudgetType] = []
    for raw in _as_set(value):
        label = LEGACY_BUDGET_TYPES.get(raw.lower(), raw.lower())
        try:
            budget_types.append(BudgetType(label))
        except ValueError:
            logger.warning(f"Dropping unknown budget type: {raw!r}")
    if not budget_types:
        logger.warning(f"No known budget type in {value!r}, defaulting to paid")
        return (BudgetType.PAID,)
    return tuple(dict.fromkeys(budget_types))


def _campaign_goals(value: Any) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(LEGACY_CAMPAIGN_GOALS.get(goal, goal) for goal in _as_set(value)))


def content_item_from_record(record: Mapping[str, Any]):
    """Build the right content item variant for a stored item."""
    item_id = _as_text(_pick(record, "id")) or new_item_id()
    channel = _as_text(_pick(record, "social_channel"))
    quantity = _as_quantity(_pick(record, "quantity"))
    description = _as_text(_pick(record, "description"))

    if channel == OTHER_CHANNEL:
        return CustomContentItem(
            id=item_id,
            custom_title=_as_text(_pick(record, "custom_title")),
            quantity=quantity,
            description=description,
        )
    return StandardContentItem(
        id=item_id,
        social_channel=channel,
        content_type=_as_text(_pick(record, "content_type")),
        quantity=quantity,
        description=description,
    )


def target_audience_from_record(record: Optional[Mapping[str, Any]]) -> TargetAudience:
    if not record:
        return TargetAudience()

    data: Dict[str, Any] = {}
    for name in _AUDIENCE_TEXT_FIELDS:
        data[name] = _as_text(_pick(record, name))
    for name in _AUDIENCE_SET_FIELDS:
        data[name] = _as_set(_pick(record, name))
    return TargetAudience(**data)


def draft_from_record(record: Mapping[str, Any]) -> CampaignDraft:
    """
    Normalize a persisted (or partially filled) campaign record into a draft.

    Accepts camelCase or snake_case keys and ignores keys the draft does not
    model (status, owner, timestamps).
    """
    campaign_id = _pick(record, "campaign_id", "id")
    items = _pick(record, "content_items") or []

    return CampaignDraft(
        campaign_id=_as_text(campaign_id) or None,
        title=_as_text(_pick(record, "title")),
        description=_as_text(_pick(record, "description")),
        image=_pick(record, "image", "imageUrl", "image_url") or None,
        campaign_goal=_campaign_goals(_pick(record, "campaign_goal")),
        budget_type=_budget_types(_pick(record, "budget_type")),
        budget=_as_text(_pick(record, "budget")),
        product_service_description=_as_text(_pick(record, "product_service_description")),
        affiliate_program=_as_text(_pick(record, "affiliate_program")),
        requirements=_as_text(_pick(record, "requirements")),
        creator_count=_as_text(_pick(record, "creator_count")),
        start_date=_as_date(_pick(record, "start_date"), "startDate"),
        completion_date=_as_date(_pick(record, "completion_date"), "completionDate"),
        content_items=tuple(content_item_from_record(item) for item in items),
        target_audience=target_audience_from_record(_pick(record, "target_audience")),
        creator_purchase_required=bool(_pick(record, "creator_purchase_required")),
        product_ship_required=bool(_pick(record, "product_ship_required")),
    )


def draft_to_record(
    draft: CampaignDraft, status: Optional[CampaignStatus] = None
) -> Dict[str, Any]:
    """Serialize a draft into a JSON-ready camelCase record."""
    record = draft.model_dump(mode="json", by_alias=True)
    if record.get("id") is None:
        record.pop("id", None)
    if status is not None:
        record["status"] = CampaignStatus(status).value
    return record


def budget_display_value(budget: str) -> str:
    """Budget text with currency symbols and separators removed, for display only."""
    return _DISPLAY_SYMBOLS.sub("", budget or "")
