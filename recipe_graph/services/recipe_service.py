"""
Recipe Extraction Service.

This module wires the pieces together: fetch a page, harvest its JSON-LD
into a completed graph, and extract canonical recipes from it.
"""
from __future__ import annotations

import logging
import threading

from ..const import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..extractors import fetch_document, load_document, parse_recipes
from ..graph import LoadedDocument
from ..models.recipe import JsonRecipe

_LOGGER = logging.getLogger(__name__)


def extract_document_from_url(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> LoadedDocument:
    """Fetch a page and load its structured data into a completed graph.

    Raises:
        requests.exceptions.RequestException: If fetching fails
        ValueError: If URL is empty or the response is unacceptable
        FetchCancelled: If the caller aborted the transfer
    """
    document = fetch_document(url, timeout=timeout, user_agent=user_agent,
                              cancel_event=cancel_event)
    return load_document(document.content, document.final_url)


def parse_recipes_from_html(html: str | bytes, final_url: str) -> list[JsonRecipe]:
    """Extract recipes from page markup that has already been downloaded."""
    loaded = load_document(html, final_url)
    return parse_recipes(loaded.store, loaded.final_url, loaded.document_order)


def parse_recipes_from_url(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    cancel_event: threading.Event | None = None,
) -> list[JsonRecipe]:
    """Fetch a page and extract every recipe it marks up.

    A page without structured data yields an empty list, the same as a page
    whose structured data holds no recipe.

    Args:
        url: Recipe website URL
        timeout: Seconds to wait for the server
        user_agent: User-Agent header to send
        cancel_event: Set it from another thread to abort the download

    Returns:
        The recipes found on the page

    Raises:
        requests.exceptions.RequestException: If fetching fails
        ValueError: If URL is empty or the response is unacceptable
        FetchCancelled: If the caller aborted the transfer
    """
    _LOGGER.debug("Starting recipe extraction from %s", url)
    loaded = extract_document_from_url(url, timeout=timeout, user_agent=user_agent,
                                       cancel_event=cancel_event)
    if not len(loaded.store):
        _LOGGER.info("No structured data found at %s", loaded.final_url)
        return []
    return parse_recipes(loaded.store, loaded.final_url, loaded.document_order)
