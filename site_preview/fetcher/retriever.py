# site_preview/fetcher/retriever.py
"""
Image retriever: downloads image bytes and decodes them with Pillow.
"""
from __future__ import annotations

import asyncio
import io
import logging

from aiohttp import ClientError, ClientSession
from PIL import Image, UnidentifiedImageError

from site_preview.config import PreviewConfig
from site_preview.errors import RetrievalError
from site_preview.fetcher.models import ImageHandle
from site_preview.logger import LOGGER_NAME

_CHUNK_SIZE = 64 * 1024


def decode_image(url: str, data: bytes, content_type: str = "") -> ImageHandle:
    """Decode *data* into an ImageHandle or raise RetrievalError."""
    if not data:
        raise RetrievalError(url, "empty image body")
    try:
        with Image.open(io.BytesIO(data)) as candidate:
            candidate.verify()
        # verify() leaves the image unusable, reopen to read the pixels
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return ImageHandle(
                url=url,
                data=data,
                content_type=content_type,
                format=img.format,
                size=img.size,
                mode=img.mode,
            )
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise RetrievalError(url, f"cannot decode image: {exc}") from exc


class ImageRetriever:
    """GETs an absolute image URL and returns the decoded image. No retries."""

    def __init__(self, session: ClientSession, config: PreviewConfig) -> None:
        self.session = session
        self.config = config
        self.retrieval_count = 0
        self.logger = logging.getLogger(LOGGER_NAME)

    async def retrieve(self, image_url: str) -> ImageHandle:
        self.retrieval_count += 1
        self.logger.debug("GET image %s", image_url)
        try:
            async with self.session.get(image_url) as resp:
                if resp.status >= 400:
                    raise RetrievalError(image_url, f"HTTP {resp.status}", status=resp.status)
                if resp.content_length is not None and resp.content_length > self.config.max_image_bytes:
                    raise RetrievalError(image_url, "image too large", status=resp.status)
                content_type = resp.headers.get("Content-Type", "")
                chunks = []
                received = 0
                async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
                    received += len(chunk)
                    if received > self.config.max_image_bytes:
                        raise RetrievalError(image_url, "image too large", status=resp.status)
                    chunks.append(chunk)
        except asyncio.TimeoutError as exc:
            raise RetrievalError(image_url, "timed out") from exc
        except (ClientError, ValueError) as exc:
            raise RetrievalError(image_url, f"request failed: {exc}") from exc

        data = b"".join(chunks)
        return await asyncio.to_thread(decode_image, image_url, data, content_type)
