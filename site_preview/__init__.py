# site_preview/__init__.py
"""
site_preview package initializer.
Defines package version and exposes the engine facade.
"""
__version__ = "0.1.0"

from site_preview.engine import PreviewEngine, preview_urls
from site_preview.errors import FetchError, PreviewError, RetrievalError
from site_preview.fetcher.models import ImageHandle, PagePreview

__all__ = [
    "__version__",
    "PreviewEngine",
    "preview_urls",
    "PreviewError",
    "FetchError",
    "RetrievalError",
    "ImageHandle",
    "PagePreview",
]
