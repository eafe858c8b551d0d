"""Shared HTTP helpers used by the release catalog client and the artifact cache.

Encapsulates request/timeout error handling so callers avoid duplicating
try/except blocks. Transport failures surface as ``HttpError``; HTTP status
codes are returned to the caller, which decides what they mean.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, BinaryIO, Dict, Optional, Tuple

import requests

from collider.constants import Constants
from collider.errors import HttpError
from collider.common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform a GET request with timeout and retries on transport errors.

    Retries back off exponentially from ``HTTP_RETRY_BASE_DELAY_SEC``.

    Returns:
        Tuple of (status_code, headers_dict, body_text)

    Raises:
        HttpError: If every attempt failed before a response arrived.
    """
    safe_target = safe_url(url)
    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )
                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=headers,
                    **kwargs
                )
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP response",
                        extra=extra_context(
                            event="http_response",
                            component="http_client",
                            action="GET",
                            status_code=response.status_code,
                            duration_ms=t.duration_ms(),
                            target=safe_target
                        )
                    )
                return response.status_code, dict(response.headers), response.text
            except requests.Timeout:
                last_exception = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
            logger.debug("GET %s failed (attempt %d): %s", safe_target, attempt + 1, last_exception)
        if attempt + 1 < Constants.HTTP_RETRY_MAX:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** attempt))

    raise HttpError(
        f"Request to {safe_target} failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"
    )


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse the JSON body.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none). Error
        responses are parsed too, since API error bodies carry the message.
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)
    if not text:
        return status_code, response_headers, None
    try:
        return status_code, response_headers, json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Response from %s is not JSON (status %s)", safe_url(url), status_code)
        return status_code, response_headers, None


def download_to(
    url: str,
    fileobj: BinaryIO,
    *,
    headers: Optional[Dict[str, str]] = None,
    chunk_size: int = Constants.DOWNLOAD_CHUNK_SIZE,
) -> int:
    """Stream ``url`` into ``fileobj`` chunk by chunk.

    Memory use is bounded by ``chunk_size`` regardless of the body size.

    Returns:
        Number of bytes written.

    Raises:
        HttpError: On transport failure or a non-2xx response.
    """
    safe_target = safe_url(url)
    written = 0
    with Timer() as t:
        try:
            with requests.get(
                url,
                headers=headers,
                stream=True,
                timeout=Constants.REQUEST_TIMEOUT,
            ) as response:
                if response.status_code >= 400:
                    raise HttpError(f"GET {safe_target} returned HTTP {response.status_code}")
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        fileobj.write(chunk)
                        written += len(chunk)
        except requests.Timeout as exc:
            raise HttpError(
                f"Download of {safe_target} timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:
            raise HttpError(f"Download of {safe_target} failed: {exc}") from exc
    if is_debug_enabled(logger):
        logger.debug(
            "Download complete",
            extra=extra_context(
                event="download",
                component="http_client",
                action="GET",
                outcome="success",
                duration_ms=t.duration_ms(),
                target=safe_target,
                bytes=written
            )
        )
    return written
