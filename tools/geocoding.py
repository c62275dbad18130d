"""
Geocoding tool: async client for OSM Nominatim. Returns the raw first hit;
deciding whether the hit actually matches the query is the resolver's job.
"""
import logging
import re
from typing import Any, Optional

from app.config import get_settings
from tools.base import GeocodeHit, ProviderError
from tools.http_client import request_json

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 200


def _sanitize_location(text: Optional[str]) -> str:
    """Collapse whitespace; max length 200."""
    if not text or not isinstance(text, str):
        return ""
    return re.sub(r"\s+", " ", text.strip())[:MAX_QUERY_LENGTH].strip()


def _hit_from_nominatim(item: dict[str, Any]) -> GeocodeHit:
    try:
        return GeocodeHit(
            lat=float(item["lat"]),
            lon=float(item["lon"]),
            display_name=str(item.get("display_name") or ""),
            importance=float(item.get("importance") or 0),
            type=str(item.get("type") or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ProviderError("Nominatim returned a malformed result") from e


async def geocode_location(location: str) -> Optional[GeocodeHit]:
    """
    Look up a free-text place name. None when Nominatim has no result.
    Raises ProviderError on network/provider failure.
    """
    q = _sanitize_location(location)
    if not q:
        return None

    settings = get_settings()
    data = await request_json(
        "GET",
        settings.nominatim_url,
        provider="Nominatim",
        params={"q": q, "format": "json", "limit": 1},
        headers={"User-Agent": settings.nominatim_user_agent},
    )
    if not data:
        return None
    if not isinstance(data, list):
        raise ProviderError("Nominatim returned an unexpected payload")

    hit = _hit_from_nominatim(data[0])
    logger.debug("Nominatim hit for %r: %s (importance %.3f)", q, hit.display_name, hit.importance)
    return hit
