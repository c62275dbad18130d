"""
Keyword-based intent classification (no LLM). Case-insensitive substring match,
no stemming, so 'temperature' also hits 'temp'.
"""
from graph.state import IntentFlags

WEATHER_KEYWORDS = (
    "weather", "temperature", "temp", "rain", "raining", "precipitation",
    "sunny", "cloudy", "cold", "hot", "warm", "cool", "forecast", "climate",
)

PLACES_KEYWORDS = (
    "place", "places", "visit", "visiting", "attraction", "attractions",
    "tourist", "tourism", "sightseeing", "sights", "see", "explore",
    "plan", "planning", "trip", "travel", "destination", "landmark",
    "monument", "museum", "park", "beach", "temple", "church", "palace",
)


def classify_intent(query: str) -> IntentFlags:
    query_lower = (query or "").lower()
    return IntentFlags(
        needs_weather=any(keyword in query_lower for keyword in WEATHER_KEYWORDS),
        needs_places=any(keyword in query_lower for keyword in PLACES_KEYWORDS),
    )


def with_default_action(intent: IntentFlags) -> IntentFlags:
    """A query always triggers at least one agent; places is the default."""
    if intent.needs_weather or intent.needs_places:
        return intent
    return IntentFlags(needs_weather=False, needs_places=True)
