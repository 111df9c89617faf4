from __future__ import annotations

"""Async HTTP JSON client with retry.

Every failure is mapped onto the NetworkError taxonomy below so callers can
recover with a single ``except NetworkError``.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from unitconv.core.config import Settings

logger = logging.getLogger("unitconv.http")


class NetworkError(Exception):
    description = "Network request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.description)


class InvalidURL(NetworkError):
    description = "Invalid URL provided"


class NoData(NetworkError):
    description = "No data received from server"


class DecodingError(NetworkError):
    description = "Failed to decode server response"


class InvalidResponse(NetworkError):
    description = "Invalid response from server"


class NetworkUnavailable(NetworkError):
    description = "Network connection unavailable"


class Timeout(NetworkError):
    description = "Request timed out"


def build_async_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"Accept": "application/json"},
    )


def _check_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidURL(f"Invalid URL provided: {url!r}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise InvalidURL(f"Invalid URL provided: {url!r}")


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    retries: int = 1,
    backoff: float = 0.5,
) -> Dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    Transport failures, timeouts and 5xx answers are retried; 4xx answers,
    empty bodies and undecodable bodies are not.
    """
    _check_url(url)
    last_err: NetworkError = NetworkUnavailable()
    for attempt in range(retries + 1):
        try:
            resp = await client.get(url)
        except httpx.TimeoutException as e:
            last_err = Timeout(f"Request timed out: {e}")
        except httpx.HTTPError as e:
            last_err = NetworkUnavailable(f"Network connection unavailable: {e}")
        else:
            if not resp.is_success:
                last_err = InvalidResponse(f"HTTP {resp.status_code} for {url}")
                if resp.status_code < 500:
                    raise last_err
            elif not resp.content:
                raise NoData()
            else:
                try:
                    data = resp.json()
                except ValueError as e:
                    raise DecodingError(f"Failed to decode server response: {e}") from e
                if not isinstance(data, dict):
                    raise DecodingError("Expected a JSON object")
                return data
        logger.debug(
            "GET failed", extra={"url": url, "attempt": attempt, "error": str(last_err)}
        )
        if attempt == retries:
            break
        await asyncio.sleep(backoff * (2**attempt))
    raise last_err
