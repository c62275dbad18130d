"""
Geocode resolution: try candidates one by one (never in parallel) and keep the
first hit the matcher accepts. A provider failure skips that candidate only.
"""
import time
from typing import Awaitable, Callable, Iterable, Optional

import structlog

from graph.extractor import MIN_CANDIDATE_LENGTH
from graph.matcher import canonical_name, location_matches
from graph.state import ResolvedLocation
from tools.base import GeocodeHit, ProviderError

log = structlog.get_logger()

GeocodeFn = Callable[[str], Awaitable[Optional[GeocodeHit]]]

VARIANT_WORDS = 3


def build_variants(candidate: str) -> list[str]:
    """Full candidate, part before the first comma, first 3 words. Deduplicated, short ones dropped."""
    candidate = (candidate or "").strip()
    variants = [
        candidate,
        candidate.split(",")[0].strip(),
        " ".join(candidate.split()[:VARIANT_WORDS]),
    ]
    out: list[str] = []
    for v in variants:
        if len(v) >= MIN_CANDIDATE_LENGTH and v not in out:
            out.append(v)
    return out


class GeocodeResolver:
    """Sequential, short-circuiting candidate cascade over a geocode callable."""

    def __init__(self, geocode: GeocodeFn):
        self._geocode = geocode

    async def resolve(self, candidates: Iterable[str]) -> Optional[ResolvedLocation]:
        for candidate in candidates:
            candidate = (candidate or "").strip()
            if len(candidate) < MIN_CANDIDATE_LENGTH:
                continue

            start = time.perf_counter()
            try:
                hit = await self._geocode(candidate)
            except ProviderError as e:
                log.warning("geocode_candidate_failed", candidate=candidate, error=str(e))
                continue
            duration = round(time.perf_counter() - start, 3)

            if hit is None:
                log.info("geocode_no_result", candidate=candidate, duration_sec=duration)
                continue
            if not location_matches(candidate, hit.display_name, hit.importance):
                log.info(
                    "geocode_rejected",
                    candidate=candidate,
                    display_name=hit.display_name,
                    importance=hit.importance,
                    duration_sec=duration,
                )
                continue

            location = ResolvedLocation(
                latitude=hit.lat,
                longitude=hit.lon,
                canonical_name=canonical_name(hit.display_name),
            )
            log.info("geocode_accepted", candidate=candidate, location=location.canonical_name, duration_sec=duration)
            return location
        return None
