"""
Orchestrator behaviour against the in-memory session from conftest - no
browser required.
"""
import asyncio
import logging
import pathlib
from unittest.mock import AsyncMock

import pytest

from web2pdf import batch_async
from web2pdf.batch_async import convert, open_session, run_batch
from web2pdf.errors import BrowserLaunchError, CookieFileParseError
from web2pdf.models import WorkItem
from web2pdf.options import PdfRenderOptions


def _items(*pairs):
    return [WorkItem(loc, pathlib.Path(dest)) for loc, dest in pairs]


@pytest.mark.asyncio
async def test_second_render_fails(fake_session, caplog):
    session = fake_session(failing={"https://b.test"})
    items = _items(("https://a.test", "a.pdf"), ("https://b.test", "b.pdf"))

    with caplog.at_level(logging.INFO, logger="web2pdf"):
        failures = await run_batch(items, session, PdfRenderOptions.build())

    assert failures == 1
    assert pathlib.Path("a.pdf").exists()
    assert not pathlib.Path("b.pdf").exists()
    assert "Created pdf from https://a.test" in caplog.text
    assert 'Error creating pdf from "https://b.test"' in caplog.text


@pytest.mark.asyncio
async def test_one_outcome_per_item(fake_session):
    session = fake_session(failing={"https://f1.test", "https://f3.test"})
    items = _items(*((f"https://{p}{i}.test", f"{p}{i}.pdf") for i in range(5) for p in "sf"))
    outcomes = []

    failures = await run_batch(items, session, PdfRenderOptions(), on_outcome=outcomes.append)

    assert len(outcomes) == len(items)
    assert sorted(o.index for o in outcomes) == list(range(len(items)))
    assert failures == sum(not o.success for o in outcomes) == 2
    failed = {o.item.location for o in outcomes if not o.success}
    assert failed == {"https://f1.test", "https://f3.test"}
    assert all("render failed" in o.error for o in outcomes if not o.success)


@pytest.mark.asyncio
async def test_navigation_failure_is_isolated(fake_session):
    session = fake_session()
    items = _items(("unreachable://x", "x.pdf"), ("https://ok.test", "ok.pdf"))
    outcomes = []

    failures = await run_batch(items, session, PdfRenderOptions(), on_outcome=outcomes.append)

    assert failures == 1
    bad = next(o for o in outcomes if not o.success)
    assert "unreachable://x" in bad.error and "x.pdf" in bad.error
    assert "ERR_NAME_NOT_RESOLVED" in bad.error
    assert session.pages["https://ok.test"].closed


@pytest.mark.asyncio
async def test_tasks_run_concurrently(monkeypatch):
    """Every task must be in flight before any of them may finish."""
    n = 4
    started = 0
    all_started = asyncio.Event()

    async def _render(session, item, template, *, mono, screen_media):
        nonlocal started
        started += 1
        if started == n:
            all_started.set()
        await asyncio.wait_for(all_started.wait(), timeout=2)

    monkeypatch.setattr("web2pdf.renderer.render_work_item", _render)
    items = _items(*((f"https://{i}.test", f"{i}.pdf") for i in range(n)))

    assert await run_batch(items, object(), PdfRenderOptions()) == 0
    assert started == n


@pytest.mark.asyncio
async def test_empty_batch(fake_session):
    assert await run_batch([], fake_session(), PdfRenderOptions()) == 0


@pytest.mark.asyncio
async def test_mono_and_screen_options(fake_session):
    session = fake_session()
    template = PdfRenderOptions.build(margin_left=0.4, margin_right=0.4,
                                      margin_top=0.4, margin_bottom=0.4,
                                      scale=1.2, landscape=True)
    items = _items(("https://a.test", "a.pdf"))

    assert await run_batch(items, session, template, mono=True, screen_media=True) == 0

    page = session.pages["https://a.test"]
    assert page.media == ["screen"]
    assert page.rendered_with.paper_width == pytest.approx(10.8)
    assert page.rendered_with.paper_height == pytest.approx(13.3)
    assert page.rendered_with.page_ranges == "1"
    assert page.rendered_with.scale is None
    assert page.rendered_with.landscape is False
    assert template.scale == 1.2


@pytest.mark.asyncio
async def test_standard_render_passes_template(fake_session):
    session = fake_session()
    template = PdfRenderOptions.build(paper_width=8.5, page_ranges="2")
    await run_batch(_items(("https://a.test", "a.pdf")), session, template)

    page = session.pages["https://a.test"]
    assert page.media == []
    assert page.rendered_with == template
    assert page.closed


# --------------------------------------------------------------------------- #
# bootstrap / teardown
# --------------------------------------------------------------------------- #
def _mock_session():
    session = AsyncMock()
    session.clear_cookies = AsyncMock()
    session.load_cookie_file = AsyncMock()
    session.close_and_wait = AsyncMock()
    return session


@pytest.mark.asyncio
async def test_open_session_viewport_and_cookies(monkeypatch):
    session = _mock_session()
    launch = AsyncMock(return_value=session)
    monkeypatch.setattr(batch_async.BrowserSession, "launch", launch)

    template = PdfRenderOptions.build(paper_width=10, scale=2.0)
    got = await open_session(template, cookie_jar=pathlib.Path("jar.txt"),
                             browser_path=pathlib.Path("/opt/chrome"))

    assert got is session
    viewport = launch.await_args.args[0]
    assert viewport.width == 960
    assert viewport.device_scale_factor == 2.0
    assert launch.await_args.kwargs["executable_path"] == pathlib.Path("/opt/chrome")
    session.clear_cookies.assert_awaited_once()
    session.load_cookie_file.assert_awaited_once_with(pathlib.Path("jar.txt"))


@pytest.mark.asyncio
async def test_open_session_cookie_failure_closes(monkeypatch):
    session = _mock_session()
    session.load_cookie_file.side_effect = CookieFileParseError("bad line")
    monkeypatch.setattr(batch_async.BrowserSession, "launch", AsyncMock(return_value=session))

    with pytest.raises(CookieFileParseError):
        await open_session(PdfRenderOptions(), cookie_jar=pathlib.Path("jar.txt"))
    session.close_and_wait.assert_awaited_once()


@pytest.mark.asyncio
async def test_convert_launch_failure_starts_nothing(monkeypatch):
    monkeypatch.setattr(
        batch_async.BrowserSession,
        "launch",
        AsyncMock(side_effect=BrowserLaunchError("no chromium")),
    )
    render = AsyncMock()
    monkeypatch.setattr("web2pdf.renderer.render_work_item", render)

    with pytest.raises(BrowserLaunchError):
        await convert(_items(("https://a.test", "a.pdf")), PdfRenderOptions())
    render.assert_not_awaited()


@pytest.mark.asyncio
async def test_convert_closes_after_join(monkeypatch, fake_session):
    session = fake_session(failing={"https://b.test"})
    monkeypatch.setattr(batch_async.BrowserSession, "launch", AsyncMock(return_value=session))
    session.clear_cookies = AsyncMock()

    failures = await convert(
        _items(("https://a.test", "a.pdf"), ("https://b.test", "b.pdf")),
        PdfRenderOptions(),
    )
    assert failures == 1
    assert session.closed
