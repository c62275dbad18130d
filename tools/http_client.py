"""
Async HTTP helper shared by provider clients. One bounded timeout per request;
retry/backoff only on rate-limit. Everything else becomes ProviderError.
"""
import asyncio
import logging
from typing import Any, Optional

import httpx

from app.config import get_settings
from tools.base import ProviderError

logger = logging.getLogger(__name__)


async def request_json(
    method: str,
    url: str,
    *,
    provider: str,
    params: Optional[dict] = None,
    data: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> Any:
    """Send a request and return parsed JSON. Raises ProviderError on any failure."""
    settings = get_settings()
    for attempt in range(settings.http_max_retries):
        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout_sec) as client:
                r = await client.request(method, url, params=params, data=data, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("%s timeout: %s", provider, e)
            raise ProviderError(f"{provider} request timed out") from e
        except httpx.HTTPError as e:
            logger.warning("%s request error: %s", provider, e)
            raise ProviderError(f"{provider} network error") from e

        if r.status_code == 429:
            await asyncio.sleep(settings.http_backoff_sec * (attempt + 1))
            continue
        if r.status_code != 200:
            logger.warning("%s %s error: HTTP %s", provider, url, r.status_code)
            raise ProviderError(f"{provider} request failed (HTTP {r.status_code})")
        try:
            return r.json()
        except ValueError as e:
            logger.warning("%s returned invalid JSON", provider)
            raise ProviderError(f"{provider} returned invalid JSON") from e

    logger.error("%s exhausted retries: rate limit reached", provider)
    raise ProviderError(f"{provider} rate limit reached")
