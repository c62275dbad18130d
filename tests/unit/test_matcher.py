"""Unit tests for location matching: similarity, containment and the length tiers."""
import pytest

from graph.matcher import canonical_name, location_matches, similarity


class TestSimilarity:
    def test_identical(self):
        assert similarity("paris", "paris") == 1.0

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_one_edit(self):
        # one substitution over 5 chars
        assert similarity("paris", "parts") == pytest.approx(0.8)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize("a,b", [
        ("bangalore", "bengaluru"),
        ("nyc", "new york"),
        ("", "rome"),
        ("san francisco", "san fran"),
    ])
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)


class TestCanonicalName:
    def test_first_segment(self):
        assert canonical_name("Bengaluru, Bangalore North, Karnataka, India") == "Bengaluru"

    def test_no_comma(self):
        assert canonical_name("  Paris ") == "Paris"

    def test_empty(self):
        assert canonical_name("") == ""


class TestShortCandidates:
    """Candidates under 4 chars: similarity >= 0.8 AND containment AND importance >= 0.4."""

    def test_rejects_low_importance_even_on_exact_match(self):
        assert not location_matches("Rio", "Rio, Brazil", 0.39)

    @pytest.mark.parametrize("importance", [0.0, 0.1, 0.2, 0.399])
    def test_importance_floor(self, importance):
        assert not location_matches("Ulm", "Ulm, Baden-Württemberg, Germany", importance)

    def test_accepts_exact_prominent_match(self):
        assert location_matches("Ulm", "Ulm, Baden-Württemberg, Germany", 0.6)

    def test_rejects_containment_without_similarity(self):
        # "la" is contained in "la paz" but similarity is far below 0.8
        assert not location_matches("LA", "La Paz, Bolivia", 0.9)

    def test_rejects_prefix_of_longer_name(self):
        assert not location_matches("xyr", "Xyris, Somewhere", 0.9)


class TestLongCandidates:
    """Candidates of 4+ chars: containment OR similarity >= 0.65, and importance >= 0.2."""

    def test_accepts_containment(self):
        assert location_matches("Bangalore", "Bangalore Palace, Bengaluru, India", 0.3)

    def test_accepts_reverse_containment(self):
        assert location_matches("New York City", "New York, United States", 0.8)

    def test_accepts_close_spelling(self):
        assert location_matches("Pariz", "Paris, France", 0.9)

    def test_rejects_low_similarity(self):
        assert not location_matches("Xyz12345", "Xylophone Street, Nowhere", 0.5)

    def test_rejects_low_importance(self):
        assert not location_matches("Paris", "Paris, Lamar County, Texas", 0.19)

    def test_case_and_whitespace_insensitive(self):
        assert location_matches("  bangalore ", "BANGALORE, India", 0.5)

    def test_empty_display_name_rejected(self):
        assert not location_matches("Bangalore", "", 0.9)


class TestThresholdsFromSettings:
    def test_uses_configured_importance(self, monkeypatch):
        from app.config import get_settings

        settings = get_settings()
        monkeypatch.setattr(settings, "long_min_importance", 0.5)
        assert not location_matches("Paris", "Paris, France", 0.4)
        assert location_matches("Paris", "Paris, France", 0.5)
