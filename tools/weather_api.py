"""
Weather tool: async client for Open-Meteo (no API key). Input: coordinates of an
already-resolved location. Returns current temperature and chance of rain.
"""
import logging
from typing import Any

from app.config import get_settings
from tools.base import ProviderError, WeatherReading
from tools.http_client import request_json

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,precipitation_probability"


def _reading_from_current(current: dict[str, Any]) -> WeatherReading:
    temp = current.get("temperature_2m")
    if temp is None:
        raise ProviderError("Invalid weather data received")
    precip = current.get("precipitation_probability") or 0
    return WeatherReading(
        temperature_celsius=round(float(temp)),
        precipitation_probability_percent=round(float(precip)),
    )


async def fetch_weather(lat: float, lon: float) -> WeatherReading:
    """Current conditions at (lat, lon). Raises ProviderError on failure."""
    settings = get_settings()
    params = {
        "latitude": lat,
        "longitude": lon,
        "current": CURRENT_FIELDS,
        "timezone": "auto",
    }
    data = await request_json("GET", settings.open_meteo_url, provider="Open-Meteo", params=params)

    current = data.get("current") if isinstance(data, dict) else None
    if not current:
        logger.warning("Open-Meteo response without current block for %s,%s", lat, lon)
        raise ProviderError("Invalid weather data received")
    return _reading_from_current(current)
