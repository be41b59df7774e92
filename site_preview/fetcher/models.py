# site_preview/fetcher/models.py
"""
Data models for the site_preview resolution engine.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Generic, NamedTuple, Optional, Tuple, TypeVar

from bs4 import BeautifulSoup
from PIL import Image

T = TypeVar("T")

FOUND = "found"
NOT_FOUND = "not_found"
ERROR = "error"


@dataclass(frozen=True, eq=False)
class Document:
    """Parsed HTML page. Shared read-only between resolvers once cached."""

    url: str
    soup: BeautifulSoup


class MetaTagRecord(NamedTuple):
    """``(property, content)`` pair read from a ``<meta>`` element."""

    property: str
    content: str


class LinkTagRecord(NamedTuple):
    """``(rel, href)`` pair read from a ``<link>`` element."""

    rel: str
    href: str


@dataclass(frozen=True, slots=True)
class ImageHandle:
    """Decoded image payload handed to the caller."""

    url: str
    data: bytes = field(repr=False)
    content_type: str
    format: Optional[str]
    size: Tuple[int, int]
    mode: str

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    def to_image(self) -> Image.Image:
        """Return a fresh, fully loaded Pillow image built from the raw bytes."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def summary(self) -> dict:
        return {
            "url": self.url,
            "format": self.format,
            "width": self.width,
            "height": self.height,
            "content_type": self.content_type,
            "bytes": len(self.data),
        }


@dataclass(frozen=True, slots=True)
class Resolution(Generic[T]):
    """Tagged outcome of one resolution: found, not found, or failed."""

    status: str
    value: Optional[T] = None
    reason: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def found(cls, value: T) -> Resolution[T]:
        return cls(FOUND, value=value)

    @classmethod
    def not_found(cls, reason: str) -> Resolution[T]:
        return cls(NOT_FOUND, reason=reason)

    @classmethod
    def failed(cls, error: BaseException) -> Resolution[T]:
        return cls(ERROR, reason=str(error), error=error)

    @property
    def ok(self) -> bool:
        return self.status == FOUND

    def unwrap(self) -> Optional[T]:
        return self.value if self.ok else None


@dataclass(slots=True)
class PagePreview:
    """Title, hero image and favicon resolved for one page."""

    url: str
    title: Optional[str] = None
    image: Optional[ImageHandle] = None
    favicon: Optional[ImageHandle] = None

    def as_dict(self) -> dict:
        return {
            "url": self.url,
            "title": self.title,
            "image": self.image.summary() if self.image else None,
            "favicon": self.favicon.summary() if self.favicon else None,
        }
