"""
Location matching: does a geocoder's display name plausibly name the candidate?
Edit-distance similarity plus containment, with a stricter tier for short inputs
and a minimum provider importance per tier. Thresholds live in Settings.
"""
from rapidfuzz.distance import Levenshtein

from app.config import get_settings


def canonical_name(display_name: str) -> str:
    """First comma-delimited segment of a provider display name."""
    return (display_name or "").split(",")[0].strip()


def similarity(a: str, b: str) -> float:
    """(max_len - edit_distance) / max_len in [0, 1]. Symmetric; two empty strings score 1.0."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - Levenshtein.distance(a, b)) / longest


def _contains_either(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


def location_matches(candidate: str, display_name: str, importance: float) -> bool:
    """
    Accept a geocoding hit for `candidate`.
    Short candidates need high similarity AND containment AND a prominent place;
    longer ones need containment OR moderate similarity, and a non-obscure place.
    """
    settings = get_settings()
    needle = (candidate or "").lower().strip()
    main = canonical_name(display_name).lower()

    score = similarity(needle, main)
    contained = _contains_either(needle, main)

    if len(needle) < settings.short_candidate_length:
        return (
            score >= settings.short_min_similarity
            and contained
            and importance >= settings.short_min_importance
        )
    return (contained or score >= settings.long_min_similarity) and importance >= settings.long_min_importance
