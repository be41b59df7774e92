# File: site_preview/errors.py
"""site_preview.errors: exception hierarchy for the resolution engine."""

from __future__ import annotations

from typing import Optional

__all__ = ["PreviewError", "FetchError", "RetrievalError"]


class PreviewError(Exception):
    """Base class for every error raised inside the engine."""

    kind = "error"

    def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status = status


class FetchError(PreviewError):
    """Network or HTML parse failure while obtaining a Document."""

    kind = "fetch"


class RetrievalError(PreviewError):
    """Network or decode failure while obtaining an ImageHandle."""

    kind = "retrieval"
