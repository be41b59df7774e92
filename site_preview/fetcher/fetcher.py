# site_preview/fetcher/fetcher.py
"""
Fetcher module: downloads a page over HTTP and parses it into a Document.
"""
from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientError, ClientSession

from site_preview.config import PreviewConfig
from site_preview.errors import FetchError
from site_preview.fetcher.models import Document
from site_preview.logger import LOGGER_NAME
from site_preview.parser.html_parser import parse_html

_MARKUP_TYPES = ("html", "xml")


def _is_markup(ctype: str) -> bool:
    return ctype.startswith("text/") or any(t in ctype for t in _MARKUP_TYPES)


class DocumentFetcher:
    """Performs one GET per call and parses the body. No caching, no retries."""

    def __init__(self, session: ClientSession, config: PreviewConfig) -> None:
        self.session = session
        self.config = config
        self.fetch_count = 0
        self.logger = logging.getLogger(LOGGER_NAME)

    async def fetch(self, url: str) -> Document:
        """
        Fetch *url* and return the parsed Document.

        Raises FetchError on transport failure, timeout, non-2xx status,
        a non-markup body or a parse failure.
        """
        self.fetch_count += 1
        self.logger.debug("GET page %s", url)
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                ctype = resp.headers.get("Content-Type", "").lower()
                if ctype and not _is_markup(ctype):
                    raise FetchError(url, f"unsupported content type {ctype!r}", status=resp.status)
                text = await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, f"request failed: {exc}") from exc

        try:
            return parse_html(text, url)
        except Exception as exc:
            raise FetchError(url, f"parse failed: {exc}") from exc
