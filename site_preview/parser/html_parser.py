# === FILE: site_preview/parser/html_parser.py ===
"""HTML parsing utilities for site_preview.

Turns raw markup into a :class:`~site_preview.fetcher.models.Document` and
reads the few things the resolvers care about out of it:

* title — document ``<title>`` text, ``None`` when the tag is missing.
* meta  — ``(property, content)`` records from ``<meta>`` tags.
* links — ``(rel, href)`` records from ``<link>`` tags.

None of the helpers modify the tree: a parsed Document is shared between
concurrent resolvers through the cache, so it must stay exactly as parsed.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_preview.fetcher.models import Document, LinkTagRecord, MetaTagRecord

__all__: Sequence[str] = (
    "ICON_RELS",
    "parse_html",
    "page_title",
    "meta_tags",
    "link_tags",
    "find_og_image",
    "find_icon_href",
    "absolutize",
)

OG_PREFIX = "og:"
OG_IMAGE = "og:image"
ICON_RELS = ("shortcut icon", "icon")


def parse_html(markup: Union[str, bytes], url: str) -> Document:
    """Parse *markup* fetched from *url* into a Document."""
    # attribute values are kept exactly as written; rel is not split into tokens
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    return Document(url=url, soup=soup)


def _attr_text(tag: Tag, name: str) -> str:
    value = tag.get(name)
    return "" if value is None else str(value)


def page_title(document: Document) -> Optional[str]:
    """Return the ``<title>`` text, ``""`` for an empty tag, ``None`` if absent."""
    title_tag = document.soup.find("title")
    if not isinstance(title_tag, Tag):
        return None
    return " ".join(title_tag.get_text().split())


def meta_tags(document: Document) -> List[MetaTagRecord]:
    records: List[MetaTagRecord] = []
    for tag in document.soup.find_all("meta"):
        if isinstance(tag, Tag):
            records.append(MetaTagRecord(_attr_text(tag, "property"), _attr_text(tag, "content")))
    return records


def link_tags(document: Document) -> List[LinkTagRecord]:
    records: List[LinkTagRecord] = []
    for tag in document.soup.find_all("link"):
        if isinstance(tag, Tag):
            records.append(LinkTagRecord(_attr_text(tag, "rel"), _attr_text(tag, "href")))
    return records


def find_og_image(document: Document) -> Optional[str]:
    """Return the ``content`` of the first ``og:image`` meta tag, if any."""
    open_graph = [m for m in meta_tags(document) if OG_PREFIX in m.property]
    for record in open_graph:
        if record.property == OG_IMAGE:
            return record.content
    return None


def find_icon_href(document: Document) -> Optional[str]:
    """Return the ``href`` of the first ``icon``/``shortcut icon`` link in document order."""
    icons = [link for link in link_tags(document) if link.rel in ICON_RELS]
    if not icons:
        return None
    return icons[0].href


def absolutize(base_url: str, candidate: str) -> str:
    """Resolve *candidate* against *base_url*; absolute URLs come back unchanged."""
    return urljoin(base_url, candidate.strip())
