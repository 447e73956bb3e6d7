from __future__ import annotations

from dataclasses import replace

from web2pdf.browser import BrowserSession
from web2pdf.errors import RenderFailure
from web2pdf.models import WorkItem
from web2pdf.options import PdfRenderOptions


async def render_work_item(
    session: BrowserSession,
    item: WorkItem,
    template: PdfRenderOptions,
    *,
    mono: bool = False,
    screen_media: bool = False,
) -> None:
    """Turn one work item into a PDF on disk.

    Args:
        session: Shared browser; a fresh tab is opened for this item.
        item: Location to load and destination to write.
        template: Print options shared by the batch; never modified.
        mono: Size a single page to the measured content.
        screen_media: Emulate ``screen`` instead of ``print`` CSS.

    The tab is closed after a successful render.  Any failure aborts the
    remaining steps and is raised as :class:`RenderFailure`; the tab is then
    left for the browser to reap when the session closes.
    """
    opts = replace(template)
    try:
        page = await session.new_page(item.location)
        if screen_media:
            await page.set_media_emulation("screen")
        if mono:
            await page.save_pdf_mono(opts, item.destination)
        else:
            await page.render_to_pdf(opts, item.destination)
        await page.close()
    except Exception as exc:  # noqa: BLE001 - any failure stays with this item
        raise RenderFailure(
            f"Could not render {item.location} to {item.destination}: {exc}"
        ) from exc
