# site_preview/fetcher/cache.py
"""
Document cache: memoizes parsed pages per URL string so that the title,
hero image and favicon lookups for one page share a single fetch and parse.

Entries are evicted least-recently-used first once ``max_entries`` is reached
and expire ``ttl`` seconds after insertion. Concurrent requests for a URL
that is not cached yet wait on one shared fetch task instead of each issuing
their own request.

All bookkeeping runs on the event loop thread without an ``await`` between
check and update, which is what keeps the maps consistent.
"""
from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from site_preview.fetcher.fetcher import DocumentFetcher
from site_preview.fetcher.models import Document
from site_preview.logger import LOGGER_NAME

__all__ = ["DocumentCache", "cache_key"]


def cache_key(url: object) -> str:
    """Key for *url*: its string form, byte for byte. No canonicalization."""
    return str(url)


@dataclass(slots=True)
class _Entry:
    document: Document
    stored_at: float


@dataclass(slots=True)
class _Pending:
    task: asyncio.Task
    waiters: int = 0


class DocumentCache:
    """Bounded LRU/TTL cache of Documents with in-flight fetch sharing."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        max_entries: int = 256,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._fetcher = fetcher
        self._max_entries = max_entries
        self._ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._pending: Dict[str, _Pending] = {}
        self.hits = 0
        self.misses = 0
        self.logger = logging.getLogger(LOGGER_NAME)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return self._lookup(cache_key(url), touch=False) is not None

    async def get_or_fetch(self, url: object) -> Document:
        """
        Return the cached Document for *url*, fetching and storing it on a miss.

        Raises FetchError when the page cannot be fetched or parsed; nothing is
        stored in that case.
        """
        key = cache_key(url)
        document = self._lookup(key)
        if document is not None:
            self.hits += 1
            self.logger.debug("cache hit %s", key)
            return document

        pending = self._pending.get(key)
        if pending is None:
            self.misses += 1
            self.logger.debug("cache miss %s", key)
            pending = _Pending(asyncio.create_task(self._load(key)))
            self._pending[key] = pending
        else:
            self.logger.debug("joining in-flight fetch %s", key)
        pending.waiters += 1

        try:
            return await asyncio.shield(pending.task)
        finally:
            pending.waiters -= 1
            # last interested caller went away before the fetch finished;
            # unpublish the task now so later callers start a fresh fetch
            if pending.waiters == 0 and not pending.task.done():
                if self._pending.get(key) is pending:
                    del self._pending[key]
                pending.task.cancel()

    def invalidate(self, url: object) -> bool:
        """Drop the entry for *url*. Returns True if one was present."""
        return self._entries.pop(cache_key(url), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    async def _load(self, key: str) -> Document:
        try:
            document = await self._fetcher.fetch(key)
        finally:
            current = self._pending.get(key)
            if current is not None and current.task is asyncio.current_task():
                del self._pending[key]
        self._store(key, document)
        return document

    def _lookup(self, key: str, touch: bool = True) -> Optional[Document]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._ttl is not None and self._clock() - entry.stored_at >= self._ttl:
            del self._entries[key]
            self.logger.debug("cache entry expired %s", key)
            return None
        if touch:
            self._entries.move_to_end(key)
        return entry.document

    def _store(self, key: str, document: Document) -> None:
        self._entries[key] = _Entry(document, self._clock())
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self.logger.debug("cache evicted %s", evicted)
