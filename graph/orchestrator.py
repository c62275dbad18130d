"""
Orchestrator entry point. Runs the compiled graph for one query and guarantees a
structured result: no exception ever escapes to the caller.
"""
import time
from typing import Optional

import structlog

from graph.graph import get_graph
from graph.state import OrchestrationResult

log = structlog.get_logger()

GENERIC_FAILURE_MESSAGE = "Sorry, something went wrong while processing your request. Please try again."


async def run_query(query: str, credential: Optional[str] = None) -> OrchestrationResult:
    """Answer a tourism query. `credential` enables the optional LLM analysis; it is never logged."""
    start = time.perf_counter()
    initial = {"query": (query or "").strip(), "credential": credential}
    try:
        final_state = await get_graph().ainvoke(initial)
    except Exception:
        log.exception("run_query_failed", duration_sec=round(time.perf_counter() - start, 3))
        return OrchestrationResult.failure(GENERIC_FAILURE_MESSAGE)

    result = (final_state or {}).get("result")
    if result is None:
        log.error("run_query_no_result", duration_sec=round(time.perf_counter() - start, 3))
        return OrchestrationResult.failure(GENERIC_FAILURE_MESSAGE)

    log.info(
        "run_query",
        success=result.success,
        location=result.location,
        llm=bool(credential),
        duration_sec=round(time.perf_counter() - start, 3),
    )
    return result
