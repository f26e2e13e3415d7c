"""
Web fetching for recipe pages.

This module downloads a page and reports the URL it was finally served
from, after redirects. It is the network-facing edge of the package; the
extraction core never performs I/O itself.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import cloudscraper
import requests

from ..const import (
    ALLOWED_CONTENT_TYPES,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from ..exceptions import FetchCancelled

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedDocument:
    """Raw page content and the URL it was served from."""

    content: bytes
    final_url: str


def _check_cancelled(cancel_event: threading.Event | None, url: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        _LOGGER.info("Fetch of %s cancelled", url)
        raise FetchCancelled(f"Fetch of {url} was cancelled")


def _fetch_with_retry(
    session: requests.Session,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    cancel_event: threading.Event | None = None,
) -> FetchedDocument:
    """Fetch URL with exponential backoff retry logic.

    Args:
        session: Requests session to use
        url: URL to fetch
        timeout: Seconds to wait for the server
        max_retries: Maximum number of attempts
        cancel_event: When set, the transfer is abandoned between chunks

    Returns:
        The response body and the final URL after redirects

    Raises:
        requests.exceptions.RequestException: If all retries fail
        ValueError: If response is too large or has an unsupported content type
        FetchCancelled: If cancel_event was set
    """
    for attempt in range(max_retries):
        _check_cancelled(cancel_event, url)
        try:
            _LOGGER.debug("Fetching %s (attempt %d/%d)", url, attempt + 1, max_retries)
            # Use stream=True to check headers before downloading
            with session.get(url, timeout=timeout, allow_redirects=True,
                             stream=True) as response:
                response.raise_for_status()

                content_type = response.headers.get("content-type", "").lower()
                if not any(allowed in content_type for allowed in ALLOWED_CONTENT_TYPES):
                    _LOGGER.warning("Invalid content type for %s: %s", url, content_type)
                    raise ValueError(
                        f"Invalid content type: {content_type}. "
                        "Only HTML/XHTML content is allowed.")

                content_length = response.headers.get("content-length")
                if content_length and int(content_length) > DEFAULT_MAX_RESPONSE_SIZE:
                    _LOGGER.warning("Response too large for %s: %s bytes", url, content_length)
                    raise ValueError(
                        f"Response size ({content_length} bytes) exceeds maximum allowed "
                        f"size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

                chunks = []
                size = 0
                for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                    _check_cancelled(cancel_event, url)
                    chunks.append(chunk)
                    size += len(chunk)
                    if size > DEFAULT_MAX_RESPONSE_SIZE:
                        _LOGGER.warning(
                            "Response exceeded size limit while downloading from %s", url)
                        raise ValueError(
                            f"Response size exceeds maximum allowed size "
                            f"({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

                return FetchedDocument(b"".join(chunks), response.url or url)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 403 and attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Got 403 for %s, retrying after %ds", url, wait_time)
                time.sleep(wait_time)
                continue
            raise
        except requests.exceptions.RequestException as e:
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning("Error fetching %s: %s, retrying after %ds", url, e, wait_time)
                time.sleep(wait_time)
                continue
            raise

    raise requests.exceptions.RequestException(
        f"Failed to fetch {url} after {max_retries} attempts")


def fetch_document(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> FetchedDocument:
    """Download a recipe page.

    Args:
        url: The URL of the recipe website
        timeout: Seconds to wait for the server
        user_agent: User-Agent header to send
        cancel_event: Set it from another thread to abort the transfer

    Returns:
        The page content and the final URL after redirects

    Raises:
        requests.exceptions.RequestException: If fetching fails
        ValueError: If URL is empty or the response is unacceptable
        FetchCancelled: If the caller aborted the transfer
    """
    if not url or not url.strip():
        raise ValueError("URL cannot be empty")

    _LOGGER.info("Fetching recipe page %s", url)

    session = cloudscraper.create_scraper(
        browser={
            "browser": "chrome",
            "platform": "windows",
            "desktop": True,
        }
    )
    session.max_redirects = DEFAULT_MAX_REDIRECTS
    session.headers["User-Agent"] = user_agent

    try:
        document = _fetch_with_retry(session, url, timeout=timeout, cancel_event=cancel_event)
    except requests.exceptions.RequestException as e:
        _LOGGER.error("Failed to fetch %s: %s", url, e)
        raise

    _LOGGER.info("Fetched %d bytes from %s", len(document.content), document.final_url)
    return document
