"""Fetch HTML source documents over HTTP."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from sectionhtml.config import (
    SECTIONHTML_FETCH_BACKOFF_S,
    SECTIONHTML_FETCH_MAX_RETRIES,
    SECTIONHTML_FETCH_TIMEOUT_S,
    SECTIONHTML_USER_AGENT,
)
from sectionhtml.exceptions import FetchError, SourceNotAvailableError
from sectionhtml.html_parser import parse_document_html
from sectionhtml.model import Page

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


async def fetch_source_html(url: str, *, client: httpx.AsyncClient | None = None) -> str:
    """Fetch a source document, retrying transient failures with backoff.

    Args:
        url: The URL to fetch.
        client: Optional shared client. A new one is created when omitted.

    Raises:
        SourceNotAvailableError: If the server answers 404.
        FetchError: If the fetch still fails after all retries.
    """

    async def do_fetch(http_client: httpx.AsyncClient) -> str:
        last_exc: Exception | None = None
        for attempt in range(SECTIONHTML_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)
                if response.status_code == 404:
                    raise SourceNotAvailableError(f"No source document at {url}")
                if response.status_code not in RETRY_STATUS_CODES:
                    response.raise_for_status()
                    return response.text
                last_exc = FetchError(f"HTTP {response.status_code} from {url}")
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                last_exc = exc

            if attempt < SECTIONHTML_FETCH_MAX_RETRIES:
                backoff = SECTIONHTML_FETCH_BACKOFF_S * (2**attempt)
                logger.debug("Retrying %s in %.2fs after: %s", url, backoff, last_exc)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(SECTIONHTML_FETCH_TIMEOUT_S),
        headers={"User-Agent": SECTIONHTML_USER_AGENT},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)


async def fetch_document(url: str, *, client: httpx.AsyncClient | None = None) -> Page:
    """Fetch and parse a source document; the URL becomes the page path."""
    html = await fetch_source_html(url, client=client)
    return parse_document_html(html, path=url)
