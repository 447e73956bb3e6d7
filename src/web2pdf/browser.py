"""Playwright bootstrap utilities.

:class:`BrowserSession` owns one Playwright driver, one headless Chromium and
one browser context; :class:`RenderPage` wraps a single tab of it.  Only the
operations the converter needs are exposed, so the rest of the package never
touches Playwright objects directly.
"""

from __future__ import annotations

import pathlib
from typing import Iterable, Optional, Union

from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from web2pdf.constants import MEDIA_TYPES
from web2pdf.cookies import CookieRecord, load_cookie_file
from web2pdf.errors import BrowserLaunchError, CookieFileParseError
from web2pdf.logger import log
from web2pdf.mono import apply_mono
from web2pdf.models import LayoutMetrics
from web2pdf.options import PdfRenderOptions, ViewportConfig

NAVIGATION_TIMEOUT_MS = 90_000

PathLike = Union[str, pathlib.Path]


class RenderPage:
    """One browser tab, already navigated to its location."""

    def __init__(self, page: Page, location: str):
        self._page = page
        self.location = location

    async def set_media_emulation(self, kind: str) -> None:
        if kind not in MEDIA_TYPES:
            raise ValueError(f"Unknown media type: {kind!r}")
        await self._page.emulate_media(media=kind)

    async def measure_layout(self) -> LayoutMetrics:
        """Content size after layout, via CDP ``Page.getLayoutMetrics`` (Chromium only)."""
        cdp = await self._page.context.new_cdp_session(self._page)
        try:
            metrics = await cdp.send("Page.getLayoutMetrics")
        finally:
            await cdp.detach()
        size = metrics.get("cssContentSize") or metrics["contentSize"]
        layout = LayoutMetrics(
            content_width_px=float(size["width"]),
            content_height_px=float(size["height"]),
        )
        log.debug("Layout of %s: %s", self.location, layout)
        return layout

    async def render_to_pdf(
        self, options: PdfRenderOptions, destination: PathLike
    ) -> bytes:
        """Print the page to *destination* and return the PDF bytes."""
        out = pathlib.Path(destination)
        out.parent.mkdir(parents=True, exist_ok=True)
        return await self._page.pdf(path=str(out), **options.to_pdf_kwargs())

    async def save_pdf_mono(
        self, options: PdfRenderOptions, destination: PathLike
    ) -> bytes:
        """Measure, resize the paper to the content, then print a single page."""
        mono_opts = apply_mono(options, await self.measure_layout())
        log.debug("Mono options for %s: %s", self.location, mono_opts)
        return await self.render_to_pdf(mono_opts, destination)

    async def save_pdf_standard(self, destination: PathLike) -> bytes:
        return await self.render_to_pdf(PdfRenderOptions(), destination)

    async def save_pdf_mono_standard(self, destination: PathLike) -> bytes:
        return await self.save_pdf_mono(PdfRenderOptions(), destination)

    async def close(self) -> None:
        await self._page.close()


class BrowserSession:
    """A launched Chromium shared by every page of a batch."""

    def __init__(self, playwright, browser: Browser, context: BrowserContext):
        self._pw = playwright
        self._browser = browser
        self._context = context
        self._closed = False

    # ------------------------------------------------------------------ #
    # launch
    # ------------------------------------------------------------------ #
    @classmethod
    async def launch(
        cls,
        viewport: Optional[ViewportConfig] = None,
        *,
        executable_path: Optional[PathLike] = None,
    ) -> "BrowserSession":
        """
        Start Playwright, launch headless Chromium and open one context.

        Pass a :class:`ViewportConfig` built with ``ViewportConfig.for_options``
        so media queries see the paper size.
        """
        viewport = viewport or ViewportConfig()
        pw = None
        try:
            pw = await async_playwright().start()
            browser = await pw.chromium.launch(
                headless=True,
                executable_path=str(executable_path) if executable_path else None,
            )
            context = await browser.new_context(**viewport.to_playwright())
        except (PlaywrightError, OSError) as exc:
            if pw is not None:
                await pw.stop()
            raise BrowserLaunchError(f"could not start chromium: {exc}") from exc
        log.debug("web2pdf browser launched (viewport=%s)", viewport)
        return cls(pw, browser, context)

    @classmethod
    async def launch_default(cls) -> "BrowserSession":
        log.debug("web2pdf browser launching using standard config")
        return await cls.launch()

    @classmethod
    async def launch_from_executable_path(cls, path: PathLike) -> "BrowserSession":
        log.debug("web2pdf browser launching using executable path %s", path)
        return await cls.launch(executable_path=path)

    # ------------------------------------------------------------------ #
    # cookies
    # ------------------------------------------------------------------ #
    async def clear_cookies(self) -> None:
        await self._context.clear_cookies()

    async def install_cookies(self, records: Iterable[CookieRecord]) -> None:
        cookies = [r.to_playwright() for r in records]
        if cookies:
            try:
                await self._context.add_cookies(cookies)
            except PlaywrightError as exc:
                raise CookieFileParseError(f"browser rejected cookies: {exc}") from exc
        log.debug("Installed %d cookies", len(cookies))

    async def load_cookie_file(self, path: PathLike) -> None:
        await self.install_cookies(await load_cookie_file(path))

    # ------------------------------------------------------------------ #
    # pages
    # ------------------------------------------------------------------ #
    async def new_page(self, location: str) -> RenderPage:
        """Open a tab in print media mode and navigate it to *location*."""
        if self._closed:
            raise RuntimeError("Session closed – cannot open new pages")
        page = await self._context.new_page()
        await page.emulate_media(media="print")
        await page.goto(location, wait_until="load", timeout=NAVIGATION_TIMEOUT_MS)
        log.debug("web2pdf new page created for %s", location)
        return RenderPage(page, location)

    async def close_and_wait(self) -> None:
        """Close context and browser, then stop the Playwright driver."""
        if self._closed:
            return
        self._closed = True
        await self._context.close()
        await self._browser.close()
        await self._pw.stop()
        log.debug("Closed browser")
