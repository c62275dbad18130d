"""
Child agents: weather and tourist places for an already-resolved location.
Neither agent geocodes; both work on the coordinates they are given and report
their own failure instead of raising, so a sibling agent is never affected.
"""
import time

import structlog

from graph.state import ResolvedLocation, SubroutineResult
from tools.base import ProviderError
from tools.places import fetch_places
from tools.weather_api import fetch_weather

log = structlog.get_logger()


def _failure(what: str, location: ResolvedLocation, error: str) -> SubroutineResult:
    return SubroutineResult(
        success=False,
        message=f"Sorry, I couldn't fetch the {what} for {location.canonical_name} right now.",
        error=error,
    )


async def weather_agent(location: ResolvedLocation) -> SubroutineResult:
    start = time.perf_counter()
    city = location.canonical_name
    try:
        reading = await fetch_weather(location.latitude, location.longitude)
    except ProviderError as e:
        log.warning("weather_agent", city=city, error=str(e))
        return _failure("weather", location, str(e))
    except Exception:
        log.exception("weather_agent_unexpected", city=city)
        return _failure("weather", location, "Failed to fetch weather information")

    log.info("weather_agent", city=city, duration_sec=round(time.perf_counter() - start, 3))
    return SubroutineResult(
        success=True,
        message=(
            f"In {city} it's currently {reading.temperature_celsius}°C "
            f"with a chance of {reading.precipitation_probability_percent}% to rain"
        ),
        data={
            "city": city,
            "temperature": reading.temperature_celsius,
            "precipitation_probability": reading.precipitation_probability_percent,
        },
    )


async def places_agent(location: ResolvedLocation) -> SubroutineResult:
    start = time.perf_counter()
    city = location.canonical_name
    try:
        places = await fetch_places(location.latitude, location.longitude)
    except ProviderError as e:
        log.warning("places_agent", city=city, error=str(e))
        return _failure("tourist attractions", location, str(e))
    except Exception:
        log.exception("places_agent_unexpected", city=city)
        return _failure("tourist attractions", location, "Failed to fetch tourist places")

    log.info("places_agent", city=city, count=len(places), duration_sec=round(time.perf_counter() - start, 3))
    data = {"places": [{"name": p.name, "category": p.category} for p in places]}
    if not places:
        return SubroutineResult(success=True, message=f"No tourist attractions found near {city}", data=data)

    names = ", ".join(p.name for p in places)
    return SubroutineResult(
        success=True,
        message=f"Here are some tourist attractions in {city}: {names}",
        data=data,
    )
