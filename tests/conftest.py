# File: tests/conftest.py
import asyncio
import io
from collections import Counter
from collections.abc import AsyncIterator
from typing import Dict, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from PIL import Image

from site_preview.config import PreviewConfig
from site_preview.engine import PreviewEngine


def png_bytes(size: Tuple[int, int] = (4, 4), color: str = "red") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, "PNG")
    return buf.getvalue()


def ico_bytes(size: Tuple[int, int] = (16, 16)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", size, (0, 128, 255, 255)).save(buf, "ICO", sizes=[size])
    return buf.getvalue()


class StubSite:
    """Tiny HTTP site whose routes can be changed while it is running.

    Every request is counted in :attr:`hits` by path, which is how the tests
    observe how many network round trips the engine made.
    """

    def __init__(self) -> None:
        self.base = ""
        self.routes: Dict[str, Tuple[int, bytes, str]] = {}
        self.delays: Dict[str, float] = {}
        self.hits: Counter = Counter()

    def url(self, path: str = "/") -> str:
        return f"{self.base}{path}"

    def page(self, path: str, html: str, status: int = 200, content_type: str = "text/html; charset=utf-8") -> None:
        self.routes[path] = (status, html.encode("utf-8"), content_type)

    def image(self, path: str, data: bytes, content_type: str = "image/png") -> None:
        self.routes[path] = (200, data, content_type)

    async def handle(self, request: web.Request) -> web.Response:
        path = request.path
        self.hits[path] += 1
        delay = self.delays.get(path)
        if delay:
            await asyncio.sleep(delay)
        if path not in self.routes:
            return web.Response(status=404, text="not found")
        status, body, ctype = self.routes[path]
        return web.Response(status=status, body=body, headers={"Content-Type": ctype})


@pytest_asyncio.fixture
async def stub_site(unused_tcp_port: int) -> AsyncIterator[StubSite]:
    site = StubSite()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", site.handle)
    runner = web.AppRunner(app)
    await runner.setup()
    tcp = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
    await tcp.start()
    site.base = f"http://127.0.0.1:{unused_tcp_port}"
    try:
        yield site
    finally:
        await runner.cleanup()


@pytest.fixture()
def basic_config() -> PreviewConfig:
    """Return a PreviewConfig with short timeouts for tests."""
    return PreviewConfig(timeout=5.0, user_agent="TestAgent/1.0")


@pytest_asyncio.fixture
async def engine(basic_config: PreviewConfig) -> AsyncIterator[PreviewEngine]:
    async with PreviewEngine(basic_config) as eng:
        yield eng
