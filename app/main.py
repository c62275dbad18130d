"""
FastAPI backend: tourism queries, health check, graph initialization.
Logs carry request_id and duration; the caller's API key is never logged.
"""
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.config import get_settings
from graph.graph import get_graph
from graph.orchestrator import run_query
from graph.state import OrchestrationResult

log = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Compile the graph once on startup."""
    get_graph()
    yield


app = FastAPI(title="Tourism Query Orchestrator", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=2000)
    api_key: Optional[str] = Field(default=None, description="Optional LLM key for enhanced analysis")


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


@app.post("/query", response_model=OrchestrationResult)
async def ask(req: QueryRequest, request: Request):
    """
    Answer one query. Handled failures come back as HTTP 200 with only
    {success: false, error, location}; successes keep null sub-results.
    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    start = time.perf_counter()
    log.info("query_start", extra={"request_id": request_id, "llm": bool(req.api_key)})

    credential = (req.api_key or "").strip() or get_settings().openai_api_key
    result = await run_query(req.query, credential)

    duration = time.perf_counter() - start
    log.info(
        "query_done",
        extra={"request_id": request_id, "success": result.success, "duration_sec": round(duration, 3)},
    )
    if not result.success:
        return JSONResponse(content=result.model_dump(mode="json", exclude_none=True))
    return result


@app.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok"}
