"""
Shared fixtures: an isolated working directory and an in-memory stand-in
for :class:`web2pdf.browser.BrowserSession` so the orchestrator can be
exercised without a browser.
"""
import asyncio
import pathlib

import pytest

from web2pdf.mono import apply_mono
from web2pdf.models import LayoutMetrics


@pytest.fixture(autouse=True)
def tmp_cwd(tmp_path, monkeypatch):
    """Run each test in an isolated tmp dir."""
    monkeypatch.chdir(tmp_path)
    yield


class FakePage:
    def __init__(self, session, location):
        self.session = session
        self.location = location
        self.media: list[str] = []
        self.rendered_with = None
        self.closed = False

    async def set_media_emulation(self, kind):
        self.media.append(kind)

    async def measure_layout(self):
        return self.session.layout

    async def render_to_pdf(self, options, destination):
        await asyncio.sleep(0)
        if self.location in self.session.failing:
            raise RuntimeError(f"render failed for {self.location}")
        self.rendered_with = options
        pathlib.Path(destination).write_bytes(b"%PDF-1.4 fake")
        return b"%PDF-1.4 fake"

    async def save_pdf_mono(self, options, destination):
        return await self.render_to_pdf(
            apply_mono(options, await self.measure_layout()), destination
        )

    async def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, failing=(), layout=None):
        self.failing = set(failing)
        self.layout = layout or LayoutMetrics(960, 1200)
        self.pages: dict[str, FakePage] = {}
        self.closed = False

    async def new_page(self, location):
        await asyncio.sleep(0)
        if location.startswith("unreachable://"):
            raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        page = FakePage(self, location)
        self.pages[location] = page
        return page

    async def close_and_wait(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession
