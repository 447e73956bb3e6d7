"""
Fan-out / join over one shared browser: every work item becomes its own
asyncio task, failures are counted but never stop the siblings.
"""
from __future__ import annotations

import asyncio
import pathlib
from typing import Callable, List, Optional, Sequence

from web2pdf import renderer
from web2pdf.browser import BrowserSession
from web2pdf.errors import RenderFailure
from web2pdf.logger import log
from web2pdf.models import TaskOutcome, WorkItem
from web2pdf.options import PdfRenderOptions, ViewportConfig

OutcomeCallback = Callable[[TaskOutcome], None]


class _FailureCounter:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self.value = 0

    async def increment(self) -> None:
        async with self._lock:
            self.value += 1


async def run_batch(
    work_items: Sequence[WorkItem],
    session: BrowserSession,
    template: PdfRenderOptions,
    *,
    mono: bool = False,
    screen_media: bool = False,
    on_outcome: Optional[OutcomeCallback] = None,
) -> int:
    """
    Render every item concurrently and return how many failed.

    *on_outcome* is called once per item, in completion order.
    """
    failures = _FailureCounter()

    async def _task(index: int, item: WorkItem) -> TaskOutcome:
        try:
            await renderer.render_work_item(
                session, item, template, mono=mono, screen_media=screen_media
            )
        except RenderFailure as exc:
            log.error(
                'Error creating pdf from "%s" with reason: %s', item.location, exc
            )
            await failures.increment()
            outcome = TaskOutcome(index=index, item=item, success=False, error=str(exc))
        else:
            log.info("Created pdf from %s", item.location)
            outcome = TaskOutcome(index=index, item=item, success=True)
        if on_outcome is not None:
            on_outcome(outcome)
        return outcome

    outcomes: List[TaskOutcome] = await asyncio.gather(
        *(_task(i, it) for i, it in enumerate(work_items))
    )
    log.debug(
        "Batch finished: %d/%d succeeded",
        sum(o.success for o in outcomes),
        len(outcomes),
    )
    return failures.value


async def open_session(
    template: PdfRenderOptions,
    *,
    cookie_jar: Optional[pathlib.Path] = None,
    browser_path: Optional[pathlib.Path] = None,
) -> BrowserSession:
    """
    Launch the browser for a batch and prime its cookie store.

    Raises :class:`BrowserLaunchError` or :class:`CookieFileParseError`;
    both are fatal for the whole run.  The session is closed again when
    cookie loading fails.
    """
    viewport = ViewportConfig.for_options(template)
    session = await BrowserSession.launch(viewport, executable_path=browser_path)
    try:
        await session.clear_cookies()
        if cookie_jar is not None:
            log.debug("Loading cookies from %s", cookie_jar)
            await session.load_cookie_file(cookie_jar)
    except Exception:
        await session.close_and_wait()
        raise
    return session


async def convert(
    work_items: Sequence[WorkItem],
    template: PdfRenderOptions,
    *,
    mono: bool = False,
    screen_media: bool = False,
    cookie_jar: Optional[pathlib.Path] = None,
    browser_path: Optional[pathlib.Path] = None,
    on_outcome: Optional[OutcomeCallback] = None,
) -> int:
    """Bootstrap a session, run the batch, close the session; return failures."""
    session = await open_session(
        template, cookie_jar=cookie_jar, browser_path=browser_path
    )
    try:
        return await run_batch(
            work_items,
            session,
            template,
            mono=mono,
            screen_media=screen_media,
            on_outcome=on_outcome,
        )
    finally:
        await session.close_and_wait()
