"""
LangGraph state for one query, plus the result records handed back to callers.
The resolved location is set once and read by every agent node.
"""
from typing import Any, Optional, TypedDict

from pydantic import BaseModel, ConfigDict


class IntentFlags(BaseModel):
    needs_weather: bool = False
    needs_places: bool = False


class ResolvedLocation(BaseModel):
    """A geocoding hit accepted by the matcher."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    canonical_name: str


class SubroutineResult(BaseModel):
    """Outcome of one agent. On failure message is still user-facing; error is a short reason."""
    success: bool
    message: str
    data: Optional[dict[str, Any]] = None
    error: Optional[str] = None


class AgentResults(BaseModel):
    weather: Optional[SubroutineResult] = None
    places: Optional[SubroutineResult] = None


class OrchestrationResult(BaseModel):
    success: bool
    location: str = ""
    message: Optional[str] = None
    error: Optional[str] = None
    intent: Optional[IntentFlags] = None
    results: Optional[AgentResults] = None

    @classmethod
    def failure(cls, error: str, location: str = "") -> "OrchestrationResult":
        return cls(success=False, error=error, location=location)


class GraphState(TypedDict):
    """State passed between nodes. intent_source is 'llm' or 'heuristic'; result is set on terminal nodes."""
    query: str
    credential: Optional[str]
    intent: Optional[IntentFlags]
    intent_source: Optional[str]
    candidate: Optional[str]
    location: Optional[ResolvedLocation]
    weather_result: Optional[SubroutineResult]
    places_result: Optional[SubroutineResult]
    result: Optional[OrchestrationResult]
