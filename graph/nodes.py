"""
LangGraph nodes: LLMNode, HeuristicNode, IntentNode, WeatherNode, PlacesNode and MergeNode.
The location is resolved once (LLM suggestion first, then the heuristic cascade)
and every agent node reads that same ResolvedLocation from state.
"""
import time
from typing import Any

import structlog

from app.config import get_settings
from graph.agents import places_agent, weather_agent
from graph.extractor import MIN_CANDIDATE_LENGTH, extract_location
from graph.intent import classify_intent, with_default_action
from graph.matcher import similarity
from graph.resolver import GeocodeResolver, build_variants
from graph.state import AgentResults, GraphState, IntentFlags, OrchestrationResult
from tools.base import ProviderError
from tools.geocoding import geocode_location
from tools.llm_analyzer import analyze_query

log = structlog.get_logger()

NO_LOCATION_MESSAGE = "I couldn't find a location in your query. Please include a city or place name."

UNRECOGNIZED_LOCATION_MESSAGE = (
    "I'm sorry, but I don't recognize \"{location}\" as a valid location. "
    "It's possible this place doesn't exist in my database, or there might be a spelling error. "
    "Could you please double-check the location name and try again? "
    "You might want to try using the city's official name or a more common spelling."
)


def _resolver() -> GeocodeResolver:
    return GeocodeResolver(geocode_location)


async def llm_node(state: GraphState) -> dict[str, Any]:
    """
    LLMNode: Only when the caller supplied a key. Any failure discards the LLM
    answer entirely; a rejected location keeps the LLM's intent flags.
    """
    credential = (state.get("credential") or "").strip()
    if not credential:
        return {}

    start = time.perf_counter()
    try:
        analysis = await analyze_query(state["query"], credential)
    except ProviderError as e:
        log.warning("llm_node", fallback=True, error=str(e), duration_sec=round(time.perf_counter() - start, 3))
        return {}

    update: dict[str, Any] = {
        "intent": IntentFlags(needs_weather=analysis.needs_weather, needs_places=analysis.needs_places),
        "intent_source": "llm",
    }
    suggested = (analysis.location or "").strip()
    if suggested:
        location = await _resolver().resolve([suggested])
        if location is not None:
            update["candidate"] = suggested
            update["location"] = location
    log.info(
        "llm_node",
        suggested=suggested or None,
        resolved=update.get("location") is not None,
        duration_sec=round(time.perf_counter() - start, 3),
    )
    return update


def route_after_llm(state: GraphState) -> str:
    return "intent" if state.get("location") else "heuristic"


async def heuristic_node(state: GraphState) -> dict[str, Any]:
    """
    HeuristicNode: Extract a candidate and resolve it through its variants.
    Terminal failures are written to `result`.
    """
    settings = get_settings()
    start = time.perf_counter()
    candidate = extract_location(state.get("query") or "")

    if len(candidate) < MIN_CANDIDATE_LENGTH:
        log.info("heuristic_node", candidate=candidate, error="no_location_found")
        return {"candidate": candidate, "result": OrchestrationResult.failure(NO_LOCATION_MESSAGE)}

    unrecognized = OrchestrationResult.failure(
        UNRECOGNIZED_LOCATION_MESSAGE.format(location=candidate), location=candidate
    )
    location = await _resolver().resolve(build_variants(candidate))
    if location is None:
        log.info("heuristic_node", candidate=candidate, error="location_not_recognized",
                 duration_sec=round(time.perf_counter() - start, 3))
        return {"candidate": candidate, "result": unrecognized}

    # Only rejects anything once short_min_similarity is tuned below revalidate_min_similarity.
    needle = candidate.lower().strip()
    if len(needle) < settings.revalidate_input_length:
        score = similarity(needle, location.canonical_name.lower())
        if score < settings.revalidate_min_similarity:
            log.info("heuristic_node", candidate=candidate, error="short_input_mismatch", similarity=round(score, 3))
            return {"candidate": candidate, "result": unrecognized}

    log.info("heuristic_node", candidate=candidate, location=location.canonical_name,
             duration_sec=round(time.perf_counter() - start, 3))
    return {"candidate": candidate, "location": location}


def route_after_heuristic(state: GraphState) -> str:
    return "end" if state.get("result") else "intent"


def intent_node(state: GraphState) -> dict[str, Any]:
    """IntentNode: keyword classification unless the LLM already decided; never zero actions."""
    intent = state.get("intent")
    source = state.get("intent_source")
    if intent is None:
        intent = classify_intent(state.get("query") or "")
        source = "heuristic"
    intent = with_default_action(intent)
    log.info("intent_node", source=source, needs_weather=intent.needs_weather, needs_places=intent.needs_places)
    return {"intent": intent, "intent_source": source}


def route_to_agents(state: GraphState) -> list[str]:
    """Fan-out: weather and places run as parallel branches when both are wanted."""
    intent = state["intent"]
    targets = []
    if intent.needs_weather:
        targets.append("weather")
    if intent.needs_places:
        targets.append("places")
    return targets or ["places"]


async def weather_node(state: GraphState) -> dict[str, Any]:
    return {"weather_result": await weather_agent(state["location"])}


async def places_node(state: GraphState) -> dict[str, Any]:
    return {"places_result": await places_agent(state["location"])}


def merge_node(state: GraphState) -> dict[str, Any]:
    """MergeNode: weather message first, then places; structured results alongside."""
    location = state["location"]
    weather = state.get("weather_result")
    places = state.get("places_result")
    parts = [r.message for r in (weather, places) if r is not None and r.message]
    result = OrchestrationResult(
        success=True,
        location=location.canonical_name,
        message="\n\n".join(parts),
        intent=state.get("intent"),
        results=AgentResults(weather=weather, places=places),
    )
    return {"result": result}
