"""Convert already-fetched image listings into :class:`ImageRecord` objects."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from dateutil.parser import isoparse

from ..errors import ListingInvalidError
from ..models.types import ImageRecord
from ..schemas import validate_listing
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

# Keys consumed into dedicated record fields; everything else is kept in
# ``ImageRecord.extra`` for the renderer.
_CONSUMED_KEYS = frozenset(
    {
        "asset_id",
        "public_id",
        "width",
        "height",
        "aspect_ratio",
        "url",
        "secure_url",
        "alt",
        "created_at",
    }
)


def _parse_timestamp(value: Optional[str], record_id: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = isoparse(value)
    except (ValueError, OverflowError) as exc:
        raise ListingInvalidError(f"Invalid created_at for {record_id}: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _alt_text(resource: Mapping[str, Any]) -> Optional[str]:
    alt = resource.get("alt")
    if isinstance(alt, str) and alt:
        return alt
    # Upload APIs nest caption metadata under ``context``; some return it
    # flat and some below ``custom``.
    context = resource.get("context")
    if isinstance(context, Mapping):
        for scope in (context, context.get("custom")):
            if isinstance(scope, Mapping):
                value = scope.get("alt") or scope.get("caption")
                if isinstance(value, str) and value:
                    return value
    return None


def record_from_resource(resource: Mapping[str, Any]) -> ImageRecord:
    """Build an :class:`ImageRecord` from a single listing resource."""

    record_id = resource.get("asset_id") or resource.get("public_id")
    if not record_id:
        raise ListingInvalidError("Resource is missing both asset_id and public_id")
    record_id = str(record_id)
    extra: Dict[str, Any] = {key: value for key, value in resource.items() if key not in _CONSUMED_KEYS}
    return ImageRecord(
        id=record_id,
        width=resource.get("width"),
        height=resource.get("height"),
        aspect_ratio=resource.get("aspect_ratio"),
        alt=_alt_text(resource),
        url=resource.get("secure_url") or resource.get("url"),
        public_id=resource.get("public_id"),
        created_at=_parse_timestamp(resource.get("created_at"), record_id),
        extra=extra,
    )


def records_from_listing(payload: Mapping[str, Any], *, folder: Optional[str] = None) -> List[ImageRecord]:
    """Validate *payload* and return its resources as records, in order.

    When *folder* is given only resources stored in that folder are kept.
    Dimension problems are not checked here; the row packer reports them.
    """

    validate_listing(payload)
    resources = payload["resources"]
    if folder is not None:
        resources = [resource for resource in resources if resource.get("folder") == folder]
    records = [record_from_resource(resource) for resource in resources]
    LOGGER.info("Loaded %d image records from listing", len(records))
    return records
