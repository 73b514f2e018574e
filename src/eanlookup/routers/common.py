"""Helpers shared by the lookup routers."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx
from fastapi import HTTPException

import eanlookup.app as _app
from eanlookup.services.ean_search import DecodeError, LookupClient

logger = logging.getLogger(__name__)


def get_client() -> LookupClient:
    """Return the configured lookup client or fail with 503."""
    if _app.lookup_client is None:
        raise HTTPException(status_code=503, detail="EAN-Search token not configured")
    return _app.lookup_client


async def call_upstream(func: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking client call in a worker thread.

    Upstream timeouts become 504, every other upstream failure becomes 502.
    """
    try:
        return await asyncio.to_thread(func, *args)
    except httpx.TimeoutException as e:
        logger.warning("EAN-Search timed out: %s", e)
        raise HTTPException(status_code=504, detail="Upstream lookup timed out") from e
    except httpx.HTTPError as e:
        logger.warning("EAN-Search request failed: %s", e)
        raise HTTPException(status_code=502, detail="Upstream lookup failed") from e
    except DecodeError as e:
        logger.warning("EAN-Search returned an unexpected response: %s", e)
        raise HTTPException(status_code=502, detail="Upstream returned an unexpected response") from e
