# File: site_preview/resolvers.py
"""site_preview.resolvers: title, hero image and favicon resolution strategies.

Every resolver returns a :class:`~site_preview.fetcher.models.Resolution`
instead of raising, so the engine can tell "nothing there" from "request
failed" in its logs before handing ``None`` to the caller.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, Sequence, TypeVar
from urllib.parse import urlsplit, urlunsplit

from site_preview.config import PreviewConfig
from site_preview.errors import PreviewError, RetrievalError
from site_preview.fetcher.cache import DocumentCache
from site_preview.fetcher.models import ImageHandle, Resolution
from site_preview.fetcher.retriever import ImageRetriever
from site_preview.parser.html_parser import absolutize, find_icon_href, find_og_image, page_title

__all__ = [
    "Strategy",
    "first_success",
    "conventional_favicon_url",
    "TitleResolver",
    "HeroImageResolver",
    "FaviconResolver",
]

T = TypeVar("T")
Strategy = Callable[[str], Awaitable[Resolution[T]]]


async def first_success(strategies: Sequence[Strategy], url: str) -> Resolution:
    """Run *strategies* in order and return the first found result.

    When none succeeds, the outcome of the last strategy is returned.
    """
    outcome: Resolution = Resolution.not_found("no strategies configured")
    for strategy in strategies:
        outcome = await strategy(url)
        if outcome.ok:
            return outcome
    return outcome


def conventional_favicon_url(url: str, path: str = "/favicon.ico") -> Optional[str]:
    """``{scheme}://{host}/favicon.ico`` for *url*; path, query and credentials dropped."""
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    if not parts.scheme or not host:
        return None
    return urlunsplit((parts.scheme, host, path, "", ""))


class TitleResolver:
    """Reads the ``<title>`` of the page."""

    def __init__(self, cache: DocumentCache) -> None:
        self.cache = cache

    async def resolve(self, url: str) -> Resolution[str]:
        try:
            document = await self.cache.get_or_fetch(url)
        except PreviewError as exc:
            return Resolution.failed(exc)
        title = page_title(document)
        if title is None:
            return Resolution.not_found("no <title> element")
        return Resolution.found(title)


class HeroImageResolver:
    """Locates the ``og:image`` URL of a page, then retrieves the image."""

    def __init__(self, cache: DocumentCache, retriever: ImageRetriever, config: PreviewConfig) -> None:
        self.cache = cache
        self.retriever = retriever
        self.config = config

    async def locate(self, url: str) -> Resolution[str]:
        try:
            document = await self.cache.get_or_fetch(url)
        except PreviewError as exc:
            return Resolution.failed(exc)
        candidate = find_og_image(document)
        if not candidate:
            return Resolution.not_found("no og:image meta tag")
        if self.config.resolve_relative_urls:
            candidate = absolutize(document.url, candidate)
        return Resolution.found(candidate)

    async def resolve(self, url: str) -> Resolution[ImageHandle]:
        located = await self.locate(url)
        if not located.ok:
            return located  # type: ignore[return-value]
        return await _retrieve(self.retriever, located.value)


class FaviconResolver:
    """Conventional ``/favicon.ico`` first, then ``<link rel="icon">`` discovery."""

    def __init__(self, cache: DocumentCache, retriever: ImageRetriever, config: PreviewConfig) -> None:
        self.cache = cache
        self.retriever = retriever
        self.config = config
        self.strategies: list[Strategy] = [self.from_conventional_path, self.from_link_tags]

    async def resolve(self, url: str) -> Resolution[ImageHandle]:
        return await first_success(self.strategies, url)

    async def from_conventional_path(self, url: str) -> Resolution[ImageHandle]:
        icon_url = conventional_favicon_url(url, self.config.favicon_path)
        if icon_url is None:
            return Resolution.failed(RetrievalError(url, "no scheme or host to build favicon URL"))
        return await _retrieve(self.retriever, icon_url)

    async def from_link_tags(self, url: str) -> Resolution[ImageHandle]:
        try:
            document = await self.cache.get_or_fetch(url)
        except PreviewError as exc:
            return Resolution.failed(exc)
        href = find_icon_href(document)
        if not href:
            return Resolution.not_found("no icon link tag")
        if self.config.resolve_relative_urls:
            href = absolutize(document.url, href)
        return await _retrieve(self.retriever, href)


async def _retrieve(retriever: ImageRetriever, image_url: str) -> Resolution[ImageHandle]:
    try:
        return Resolution.found(await retriever.retrieve(image_url))
    except PreviewError as exc:
        return Resolution.failed(exc)
