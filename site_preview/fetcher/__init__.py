# site_preview/fetcher/__init__.py
"""Network side of the engine: page fetcher, document cache and image retriever."""
from site_preview.fetcher.cache import DocumentCache
from site_preview.fetcher.fetcher import DocumentFetcher
from site_preview.fetcher.retriever import ImageRetriever

__all__ = ["DocumentCache", "DocumentFetcher", "ImageRetriever"]
