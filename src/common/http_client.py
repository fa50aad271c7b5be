"""Shared HTTP helpers used by the metadata fetch and the installer download.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Every helper performs exactly one attempt;
failures surface as TransportError (or the subclass requested by the caller).
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple, Type

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import TransportError

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    timeout: Optional[float] = None,
    error_cls: Type[TransportError] = TransportError,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "metadata").
        timeout: Socket timeout in seconds; defaults to Constants.REQUEST_TIMEOUT.
        error_cls: TransportError subclass raised on failure.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object (any status code).
    """
    safe_target = safe_url(url)
    timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.get(url, timeout=timeout, **kwargs)
        except requests.Timeout as exc:
            logger.error("%s request timed out after %s seconds", context, timeout)
            raise error_cls(f"{context} request timed out: {safe_target}", url=url) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise error_cls(f"{context} connection error: {exc}", url=url) from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return res


def get_json(
    url: str,
    *,
    context: str = "http",
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Tuple[int, Dict[str, str], Any]:
    """Perform a GET request and parse a JSON body.

    Args:
        url: Target URL.
        context: Log tag.
        timeout: Socket timeout in seconds.
        **kwargs: Additional requests.get parameters.

    Returns:
        Tuple of (status_code, headers_dict, parsed_json).

    Raises:
        TransportError: On transport failure, non-200 status or undecodable body.
    """
    res = safe_get(url, context=context, timeout=timeout, **kwargs)
    if res.status_code != 200:
        raise TransportError(
            f"{context} request returned status {res.status_code}: {safe_url(url)}",
            url=url,
            status_code=res.status_code,
        )
    try:
        parsed = json.loads(res.text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    status_code=res.status_code,
                    target=safe_url(url),
                ),
            )
        raise TransportError(f"{context} response is not valid JSON: {exc}", url=url) from exc
    return res.status_code, dict(res.headers), parsed


def download_file(
    url: str,
    dest_path: str,
    *,
    context: str = "download",
    timeout: Optional[float] = None,
    error_cls: Type[TransportError] = TransportError,
) -> str:
    """Stream url into dest_path.

    A partially written file is removed when the transfer fails.

    Returns:
        The destination path.
    """
    res = safe_get(url, context=context, timeout=timeout, error_cls=error_cls, stream=True)
    try:
        if res.status_code != 200:
            raise error_cls(
                f"{context} received status code {res.status_code}: {safe_url(url)}",
                url=url,
                status_code=res.status_code,
            )
        written = 0
        try:
            with open(dest_path, "wb") as fh:
                for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
                        written += len(chunk)
        except (requests.RequestException, OSError) as exc:
            _discard(dest_path)
            raise error_cls(f"{context} failed while saving {dest_path}: {exc}", url=url) from exc
    finally:
        res.close()

    logger.info("Downloaded %s (%d bytes) to %s", safe_url(url), written, dest_path)
    return dest_path


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError:
        logger.debug("Could not remove partial download: %s", path)
