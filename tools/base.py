"""Shared types for provider clients: raw results and the common failure type."""

from dataclasses import dataclass


class ProviderError(Exception):
    """A collaborator (geocoder, weather, places, LLM) failed or answered garbage."""


@dataclass
class GeocodeHit:
    """First Nominatim result for a search text."""
    lat: float
    lon: float
    display_name: str
    importance: float = 0.0
    type: str = ""


@dataclass
class WeatherReading:
    """Current conditions at a point, rounded for display."""
    temperature_celsius: int
    precipitation_probability_percent: int


@dataclass
class Place:
    """Named point of interest near a location."""
    name: str
    category: str
