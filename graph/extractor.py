"""
Location extraction from free text. An ordered cascade of rules; earlier rules
are higher confidence. Every rule drops punctuation and stop words from what it
captured, falling back to the raw capture when filtering leaves nothing usable.
"""
import re
from typing import Optional

MIN_CANDIDATE_LENGTH = 2
MAX_SCAN_WORDS = 5

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "what", "where", "when", "how", "is", "are",
    "was", "were", "there", "here", "this", "that", "go", "going", "to", "in",
    "at", "near", "around", "visit", "visiting", "tell", "me", "about", "i",
    "am", "i'm", "im",
})

LOCATION_INDICATORS = ("to", "in", "at", "near", "around", "visit", "visiting")

_PUNCTUATION = re.compile(r"[.,!?;:]")


def _strip_punctuation(text: str) -> str:
    return _PUNCTUATION.sub("", text).strip()


def _clean_capture(raw: str) -> str:
    """Stop-word-filtered capture, or the raw capture if filtering empties it."""
    words = [_strip_punctuation(w) for w in raw.split()]
    kept = " ".join(w for w in words if w and w.lower() not in STOP_WORDS)
    if len(kept) < MIN_CANDIDATE_LENGTH:
        return " ".join(w for w in words if w)
    return kept


def _usable(candidate: Optional[str]) -> bool:
    return bool(candidate) and len(candidate) >= MIN_CANDIDATE_LENGTH


class ExtractionRule:
    """Returns a candidate for the query, or None when the rule does not apply."""
    name = "rule"

    def apply(self, query: str) -> Optional[str]:
        raise NotImplementedError


class PhraseRule(ExtractionRule):
    """Capture after a lead phrase, up to the next , ? ! . or end of text."""

    def __init__(self, name: str, lead: str, skip_if: Optional[str] = None):
        self.name = name
        self.pattern = re.compile(lead + r"([^,?!.]+?)(?:[,?!.]|$)", re.IGNORECASE)
        self.skip_if = skip_if

    def apply(self, query: str) -> Optional[str]:
        if self.skip_if and self.skip_if in query.lower():
            return None
        match = self.pattern.search(query)
        if not match:
            return None
        return _clean_capture(match.group(1))


class IndicatorScanRule(ExtractionRule):
    """Words after the first location indicator ('to' after 'going' does not count)."""
    name = "indicator_scan"

    def apply(self, query: str) -> Optional[str]:
        words = query.split()
        for i, word in enumerate(words):
            clean = _strip_punctuation(word).lower()
            if clean not in LOCATION_INDICATORS:
                continue
            if clean == "to" and (i == 0 or words[i - 1].lower() == "going"):
                continue
            following = words[i + 1:i + 1 + MAX_SCAN_WORDS]
            if not following:
                continue
            candidate = _clean_capture(" ".join(following))
            if _usable(candidate):
                return candidate
        return None


class TrailingWordsRule(ExtractionRule):
    """Last few words, e.g. 'tell me about Paris'."""
    name = "trailing_words"

    def apply(self, query: str) -> Optional[str]:
        words = query.split()[-MAX_SCAN_WORDS:]
        if not words:
            return None
        return _clean_capture(" ".join(words))


class WholeQueryRule(ExtractionRule):
    """The query might be just a place name."""
    name = "whole_query"

    def apply(self, query: str) -> Optional[str]:
        return _strip_punctuation(query.strip())


RULES: tuple[ExtractionRule, ...] = (
    PhraseRule("going_to_go_to", r"\bgoing\s+to\s+go\s+to\s+"),
    PhraseRule("going_to", r"\bgoing\s+to\s+"),
    PhraseRule("in_at", r"\b(?:in|at)\s+"),
    PhraseRule("to", r"(?:^|\s)to\s+", skip_if="going to"),
    IndicatorScanRule(),
    TrailingWordsRule(),
    WholeQueryRule(),
)


def extract_candidates(query: str) -> list[str]:
    """
    Distinct candidates in rule-priority order. Never empty: the whole query
    (punctuation stripped, possibly "") is always the last entry.
    """
    text = query or ""
    candidates: list[str] = []
    for rule in RULES[:-1]:
        candidate = rule.apply(text)
        if _usable(candidate) and candidate not in candidates:
            candidates.append(candidate)
    whole = RULES[-1].apply(text)
    if whole not in candidates:
        candidates.append(whole)
    return candidates


def extract_location(query: str) -> str:
    """Highest-priority candidate; stops at the first rule that yields one."""
    text = query or ""
    for rule in RULES[:-1]:
        candidate = rule.apply(text)
        if _usable(candidate):
            return candidate
    return RULES[-1].apply(text)
