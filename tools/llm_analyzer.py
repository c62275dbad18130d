"""
LLM analysis tool: asks a chat model for intent flags and the location name.
Best-effort only. The key comes from the caller; models are tried in order and
the first JSON object in the reply is validated with pydantic.
"""
import asyncio
import json
import logging
import re
from typing import Any, Optional

from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ConfigDict, Field

from app.config import get_settings
from tools.base import ProviderError

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

ANALYSIS_PROMPT = """Analyze this tourism query and respond with JSON only: "{query}"

Determine:
1. Does the user want weather information? (true/false)
2. Does the user want places/attractions information? (true/false)
3. What is the location name? (extract the city/location name)

Respond ONLY with valid JSON in this exact format:
{{
  "needsWeather": true/false,
  "needsPlaces": true/false,
  "location": "location name"
}}"""


class LLMAnalysis(BaseModel):
    """Validated model reply. Aliases follow the JSON keys requested in the prompt."""
    model_config = ConfigDict(populate_by_name=True)

    needs_weather: bool = Field(alias="needsWeather")
    needs_places: bool = Field(alias="needsPlaces")
    location: Optional[str] = None


def _get_llm(api_key: str, model: str):
    """Chat model bound to the caller's key."""
    settings = get_settings()
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        temperature=0,
        max_tokens=settings.llm_max_tokens,
        max_retries=0,
    )


def _content_text(content: Any) -> str:
    """AIMessage.content may be a string or a list of content blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block) for block in content
        )
    return str(content or "")


def _extract_json(text: str) -> dict[str, Any]:
    """First {...} span in free-form model output."""
    match = _JSON_OBJECT.search(text or "")
    if not match:
        raise ProviderError("Invalid response format from LLM")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ProviderError("LLM returned invalid JSON") from e
    if not isinstance(data, dict):
        raise ProviderError("LLM returned a non-object JSON value")
    return data


async def analyze_query(query: str, api_key: str) -> LLMAnalysis:
    """Intent flags + location for a query. Raises ProviderError when every model fails."""
    settings = get_settings()
    prompt = ANALYSIS_PROMPT.format(query=query)
    last_error: Optional[Exception] = None

    for model in settings.llm_models:
        try:
            llm = _get_llm(api_key, model)
            out = await asyncio.wait_for(
                llm.ainvoke([HumanMessage(content=prompt)]),
                timeout=settings.llm_timeout_sec,
            )
            return LLMAnalysis.model_validate(_extract_json(_content_text(out.content)))
        except Exception as e:
            last_error = e
            logger.warning("llm_analysis_error model=%s: %s", model, type(e).__name__)

    raise ProviderError("Failed to analyze query with the LLM") from last_error
