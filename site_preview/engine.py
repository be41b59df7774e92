# File: site_preview/engine.py
"""site_preview.engine: facade exposing the title, hero image and favicon lookups."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, TypeVar

from aiohttp import ClientSession, ClientTimeout

from site_preview.config import PreviewConfig
from site_preview.fetcher.cache import DocumentCache
from site_preview.fetcher.fetcher import DocumentFetcher
from site_preview.fetcher.models import ERROR, ImageHandle, PagePreview, Resolution
from site_preview.fetcher.retriever import ImageRetriever
from site_preview.logger import LOGGER_NAME
from site_preview.resolvers import FaviconResolver, HeroImageResolver, TitleResolver

__all__ = ["PreviewEngine", "preview_urls"]

T = TypeVar("T")


class PreviewEngine:
    """Resolves page metadata for a bookmark catalog.

    Use as an async context manager so the HTTP session is opened and closed
    with the engine::

        async with PreviewEngine(config) as engine:
            title = await engine.resolve_title("https://example.com/")

    A caller-owned ``aiohttp.ClientSession`` may be passed in; it is then
    left open on exit. The document cache lives as long as the engine.
    """

    def __init__(self, config: Optional[PreviewConfig] = None, session: Optional[ClientSession] = None) -> None:
        self.config = config or PreviewConfig()
        self.session: Optional[ClientSession] = session
        self._owns_session = session is None
        self.logger = logging.getLogger(LOGGER_NAME)
        self.fetcher: Optional[DocumentFetcher] = None
        self.cache: Optional[DocumentCache] = None
        self.retriever: Optional[ImageRetriever] = None
        self._title: Optional[TitleResolver] = None
        self._hero: Optional[HeroImageResolver] = None
        self._favicon: Optional[FaviconResolver] = None
        if session is not None:
            self._wire(session)

    async def __aenter__(self) -> PreviewEngine:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._wire(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _wire(self, session: ClientSession) -> None:
        self.fetcher = DocumentFetcher(session, self.config)
        self.retriever = ImageRetriever(session, self.config)
        self.cache = DocumentCache(
            self.fetcher,
            max_entries=self.config.cache_max_entries,
            ttl=self.config.cache_ttl,
        )
        self._title = TitleResolver(self.cache)
        self._hero = HeroImageResolver(self.cache, self.retriever, self.config)
        self._favicon = FaviconResolver(self.cache, self.retriever, self.config)

    def _require_session(self) -> None:
        if self.cache is None:
            raise RuntimeError("Session not initialized, use 'async with PreviewEngine(...)'")

    # ------------------------------------------------------------------ #
    # Entry points                                                       #
    # ------------------------------------------------------------------ #

    async def resolve_title(self, url: str) -> Optional[str]:
        """Page ``<title>`` text, or None when it cannot be obtained."""
        self._require_session()
        return await self._settle("title", url, self._title.resolve(url))

    async def resolve_hero_image(self, url: str) -> Optional[ImageHandle]:
        """Decoded ``og:image`` of the page, or None."""
        self._require_session()
        return await self._settle("image", url, self._hero.resolve(url))

    async def resolve_favicon(self, url: str) -> Optional[ImageHandle]:
        """Site favicon from ``/favicon.ico`` or the page's icon link, or None."""
        self._require_session()
        return await self._settle("favicon", url, self._favicon.resolve(url))

    async def preview(self, url: str) -> PagePreview:
        """Resolve all three values for *url* concurrently."""
        title, image, favicon = await asyncio.gather(
            self.resolve_title(url),
            self.resolve_hero_image(url),
            self.resolve_favicon(url),
        )
        return PagePreview(url=url, title=title, image=image, favicon=favicon)

    async def _settle(self, what: str, url: str, pending) -> Optional[T]:
        try:
            outcome: Resolution[T] = await pending
        except asyncio.CancelledError:
            raise
        except Exception:
            self.logger.exception("Unexpected failure resolving %s for %s", what, url)
            return None
        if outcome.ok:
            self.logger.debug("Resolved %s for %s", what, url)
        elif outcome.status == ERROR:
            kind = getattr(outcome.error, "kind", type(outcome.error).__name__)
            self.logger.info("No %s for %s (%s error: %s)", what, url, kind, outcome.reason)
        else:
            self.logger.debug("No %s for %s: %s", what, url, outcome.reason)
        return outcome.unwrap()


async def preview_urls(config: PreviewConfig, urls: Iterable[str]) -> List[PagePreview]:
    """Open an engine, preview every URL concurrently and return results in input order."""
    async with PreviewEngine(config) as engine:
        return list(await asyncio.gather(*(engine.preview(u) for u in urls)))
