"""
Load settings from .env. Never log or expose secret values.
All values come from environment variables (populated via .env file).
Matcher thresholds are empirical and tunable; change them here, not in code.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM (optional; a per-request key takes precedence)
    openai_api_key: Optional[str] = Field(default=None, description="Server-side OpenAI API key")
    llm_models: list[str] = Field(
        default=["gpt-4o-mini", "gpt-4o"],
        description="Chat models tried in order for query analysis",
    )
    llm_max_tokens: int = Field(default=1000, description="Max tokens for the analysis reply")
    llm_timeout_sec: float = Field(default=20.0, description="Upper bound for one LLM call")

    # Providers
    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/search", description="Nominatim search endpoint"
    )
    nominatim_user_agent: str = Field(default="TourismApp/1.0", description="User-Agent required by Nominatim")
    open_meteo_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast", description="Open-Meteo forecast endpoint"
    )
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter", description="Overpass interpreter endpoint"
    )
    places_radius_m: int = Field(default=10000, description="Search radius for tourist places")
    places_limit: int = Field(default=5, description="Max places returned")

    # HTTP
    http_timeout_sec: float = Field(default=10.0, description="Timeout per provider request")
    http_max_retries: int = Field(default=3, description="Attempts on HTTP 429")
    http_backoff_sec: float = Field(default=1.0, description="Linear backoff step on HTTP 429")

    # Location matching (tunable)
    short_candidate_length: int = Field(default=4, description="Candidates shorter than this use the strict tier")
    short_min_similarity: float = Field(default=0.8)
    short_min_importance: float = Field(default=0.4)
    long_min_similarity: float = Field(default=0.65)
    long_min_importance: float = Field(default=0.2)
    revalidate_input_length: int = Field(default=3, description="Inputs shorter than this are re-checked after geocoding")
    revalidate_min_similarity: float = Field(default=0.7)

    # App
    log_level: str = Field(default="INFO", description="Log level")
    api_host: str = Field(default="0.0.0.0", description="FastAPI bind host")
    api_port: int = Field(default=8000, description="FastAPI port")


@lru_cache
def get_settings() -> Settings:
    return Settings()
