"""
Places tool: tourist attractions around a point via the Overpass API (OSM).
Nodes tagged tourism, historic or leisure=park; only named ones are kept.
"""
import logging
from typing import Any, Optional

from app.config import get_settings
from tools.base import Place, ProviderError
from tools.http_client import request_json

logger = logging.getLogger(__name__)

_SELECTORS = (
    'node["tourism"](around:{r},{lat},{lon});',
    'node["historic"](around:{r},{lat},{lon});',
    'node["leisure"="park"](around:{r},{lat},{lon});',
)


def _build_query(lat: float, lon: float, radius_m: int) -> str:
    parts = "\n  ".join(s.format(r=radius_m, lat=lat, lon=lon) for s in _SELECTORS)
    return f"[out:json];\n(\n  {parts}\n);\nout body;"


def _places_from_overpass(data: dict[str, Any], limit: int) -> list[Place]:
    """Named elements only, deduplicated by name, first `limit` kept."""
    places: list[Place] = []
    seen = set()
    for el in data.get("elements") or []:
        tags = el.get("tags") or {}
        name = tags.get("name")
        if not name:
            continue
        key = name.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        category = tags.get("tourism") or tags.get("historic") or tags.get("leisure") or "attraction"
        places.append(Place(name=str(name), category=str(category)))
        if len(places) >= limit:
            break
    return places


async def fetch_places(lat: float, lon: float, limit: Optional[int] = None) -> list[Place]:
    """Up to `limit` attractions near (lat, lon); may be empty. Raises ProviderError on failure."""
    settings = get_settings()
    limit = limit or settings.places_limit
    query = _build_query(lat, lon, settings.places_radius_m)
    data = await request_json("POST", settings.overpass_url, provider="Overpass", data={"data": query})
    if not isinstance(data, dict):
        raise ProviderError("Overpass returned an unexpected payload")
    places = _places_from_overpass(data, limit)
    logger.debug("Overpass: %d places near %s,%s", len(places), lat, lon)
    return places
