"""Unit tests for the weather and places agents: formatting and captured failures."""
import asyncio
from unittest.mock import AsyncMock, patch

from graph.agents import places_agent, weather_agent
from graph.state import ResolvedLocation
from tools.base import Place, ProviderError, WeatherReading

BENGALURU = ResolvedLocation(latitude=12.9767, longitude=77.5901, canonical_name="Bengaluru")


class TestWeatherAgent:
    @patch("graph.agents.fetch_weather", new_callable=AsyncMock)
    def test_success(self, mock_weather):
        mock_weather.return_value = WeatherReading(temperature_celsius=24, precipitation_probability_percent=35)
        result = asyncio.run(weather_agent(BENGALURU))

        mock_weather.assert_awaited_once_with(12.9767, 77.5901)
        assert result.success is True
        assert result.message == "In Bengaluru it's currently 24°C with a chance of 35% to rain"
        assert result.data == {"city": "Bengaluru", "temperature": 24, "precipitation_probability": 35}
        assert result.error is None

    @patch("graph.agents.fetch_weather", new_callable=AsyncMock)
    def test_provider_failure_is_captured(self, mock_weather):
        mock_weather.side_effect = ProviderError("Open-Meteo request timed out")
        result = asyncio.run(weather_agent(BENGALURU))

        assert result.success is False
        assert "Bengaluru" in result.message
        assert result.error == "Open-Meteo request timed out"

    @patch("graph.agents.fetch_weather", new_callable=AsyncMock)
    def test_unexpected_failure_is_captured(self, mock_weather):
        mock_weather.side_effect = KeyError("current")
        result = asyncio.run(weather_agent(BENGALURU))

        assert result.success is False
        assert result.error == "Failed to fetch weather information"


class TestPlacesAgent:
    @patch("graph.agents.fetch_places", new_callable=AsyncMock)
    def test_success(self, mock_places):
        mock_places.return_value = [
            Place(name="Lalbagh", category="park"),
            Place(name="Bangalore Palace", category="attraction"),
        ]
        result = asyncio.run(places_agent(BENGALURU))

        mock_places.assert_awaited_once_with(12.9767, 77.5901)
        assert result.success is True
        assert result.message == "Here are some tourist attractions in Bengaluru: Lalbagh, Bangalore Palace"
        assert result.data["places"] == [
            {"name": "Lalbagh", "category": "park"},
            {"name": "Bangalore Palace", "category": "attraction"},
        ]

    @patch("graph.agents.fetch_places", new_callable=AsyncMock)
    def test_empty_is_success(self, mock_places):
        mock_places.return_value = []
        result = asyncio.run(places_agent(BENGALURU))

        assert result.success is True
        assert result.message == "No tourist attractions found near Bengaluru"
        assert result.data == {"places": []}

    @patch("graph.agents.fetch_places", new_callable=AsyncMock)
    def test_failure_is_captured(self, mock_places):
        mock_places.side_effect = ProviderError("Overpass request failed (HTTP 504)")
        result = asyncio.run(places_agent(BENGALURU))

        assert result.success is False
        assert "tourist attractions" in result.message
        assert "504" in result.error
