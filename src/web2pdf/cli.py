"""
CLI entry-point.  Run ``web2pdf --help``.
"""

from __future__ import annotations

import asyncio
import pathlib
import sys
from typing import List, Optional

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from typer import Argument as Arg, Exit, Option as Opt, colors, secho

from web2pdf import __version__
from web2pdf.batch_async import convert
from web2pdf.constants import DEFAULT_MARGIN_IN, MAX_EXIT_CODE
from web2pdf.errors import BrowserLaunchError, CookieFileParseError, InvalidWorkItems
from web2pdf.logger import configure_logging, console, log
from web2pdf.models import TaskOutcome, WorkItem
from web2pdf.options import PdfRenderOptions
from web2pdf.utils import normalize_work_items, pair_work_items

app = typer.Typer(
    add_completion=False,
    help=(
        "A simple CLI tool to convert web pages to PDFs.\n\n"
        "Returns a non zero exit code equal to the amount of PDFs that "
        "couldn't be generated."
    ),
    no_args_is_help=True,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise Exit()


async def _run(
    items: List[WorkItem],
    template: PdfRenderOptions,
    *,
    mono: bool,
    screen_media: bool,
    cookie_jar: Optional[pathlib.Path],
    browser_path: Optional[pathlib.Path],
    show_progress: bool,
) -> int:
    if not show_progress:
        return await convert(
            items,
            template,
            mono=mono,
            screen_media=screen_media,
            cookie_jar=cookie_jar,
            browser_path=browser_path,
        )

    with Progress(
        SpinnerColumn(),
        TextColumn("Creating PDFs"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("pdfs", total=len(items))

        def _advance(_: TaskOutcome) -> None:
            progress.advance(task)

        return await convert(
            items,
            template,
            mono=mono,
            screen_media=screen_media,
            cookie_jar=cookie_jar,
            browser_path=browser_path,
            on_outcome=_advance,
        )


@app.command()
def main(
    pairs: List[str] = Arg(..., metavar="URL PATH...", help="URL-Path pairs to convert to PDFs. A URL may also be a local file."),
    mono_page: bool = Opt(
        False,
        "--mono",
        "-M",
        help=(
            "Create a single page PDF that fits the content, instead of a standard "
            "multi-page PDF. Overrides paper size, scale, orientation and page ranges; "
            "adding a header or footer may cut off the content."
        ),
    ),
    screen_media_type: bool = Opt(False, "--screen", "-S", help="Emulate the screen media type (use standard CSS instead of print CSS)."),
    # --- print parameters ------------------------------------------------- #
    landscape: bool = Opt(False, "--landscape", help="Set paper orientation to landscape."),
    disable_print_background: bool = Opt(False, "--disable-backgrounds", help="Disable printing of background graphics."),
    paper_width: Optional[float] = Opt(None, "--paper-width", help="Paper width in inches. Defaults to 8.5 inches."),
    paper_height: Optional[float] = Opt(
        None,
        "--paper-height",
        help="Paper height in inches. Defaults to 11 inches. Values below 6.5 inches may behave unexpectedly.",
    ),
    margin_top: float = Opt(DEFAULT_MARGIN_IN, "--margin-top", help="Top margin in inches. Defaults to 1cm."),
    margin_bottom: float = Opt(DEFAULT_MARGIN_IN, "--margin-bottom", help="Bottom margin in inches. Defaults to 1cm."),
    margin_left: float = Opt(DEFAULT_MARGIN_IN, "--margin-left", help="Left margin in inches. Defaults to 1cm."),
    margin_right: float = Opt(DEFAULT_MARGIN_IN, "--margin-right", help="Right margin in inches. Defaults to 1cm."),
    page_ranges: Optional[str] = Opt(
        None,
        "--page-ranges",
        help="One-based page ranges to print, e.g. '1-5, 8, 11-13'. Defaults to the entire document.",
    ),
    display_header_footer: bool = Opt(False, "--display-header-footer", help="Display header and footer."),
    header_template: Optional[str] = Opt(
        None,
        "--header-template",
        help=(
            "HTML template for the print header. Elements with the classes date, title, "
            "url, pageNumber and totalPages receive the printing values."
        ),
    ),
    footer_template: Optional[str] = Opt(None, "--footer-template", help="HTML template for the print footer, same format as --header-template."),
    disable_prefer_css_page_size: bool = Opt(
        False,
        "--disable-prefer-css-page-size",
        help="Ignore the page size defined by CSS and scale the content to the paper size instead.",
    ),
    generate_tagged_pdf: Optional[bool] = Opt(
        None,
        "--generate-tagged-pdf/--no-generate-tagged-pdf",
        help="Whether to generate a tagged (accessible) PDF. Defaults to the browser's choice.",
    ),
    scale: Optional[float] = Opt(
        None,
        "--scale",
        min=0.1,
        max=2.0,
        help="Scale of the webpage rendering, 0.1 to 2. Ignored with --mono, use --paper-width instead.",
    ),
    # --- session --------------------------------------------------------- #
    cookie_jar: Optional[pathlib.Path] = Opt(None, "--cookie-jar", help="Cookie jar file (Netscape format) to load into the browser."),
    browser_path: Optional[pathlib.Path] = Opt(None, "--browser-path", help="Path to a Chromium executable."),
    # --- output ---------------------------------------------------------- #
    ansi_only: bool = Opt(False, "--ansi-only", help="Plain log output without colours or progress bar."),
    verbose: int = Opt(0, "--verbose", "-v", count=True, help="Increase log verbosity."),
    version: Optional[bool] = Opt(
        None,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print version and exit.",
    ),
) -> None:
    """
    Convert web pages (or local HTML files) to PDFs with headless Chromium.

    Examples:

    - web2pdf https://example.com example.pdf

    - web2pdf -M https://a.test a.pdf ./page.html page.pdf
    """
    configure_logging(verbose, ansi_only=ansi_only)

    try:
        items = normalize_work_items(pair_work_items(pairs))
    except InvalidWorkItems as exc:
        secho(f"error: {exc}\n", fg=None if ansi_only else colors.RED, err=True)
        secho("For more information, try '--help'.", err=True)
        raise Exit(1)

    template = PdfRenderOptions.build(
        landscape=landscape,
        disable_print_background=disable_print_background,
        display_header_footer=display_header_footer,
        header_template=header_template,
        footer_template=footer_template,
        margin_top=margin_top,
        margin_bottom=margin_bottom,
        margin_left=margin_left,
        margin_right=margin_right,
        paper_width=paper_width,
        paper_height=paper_height,
        scale=scale,
        page_ranges=page_ranges,
        disable_prefer_css_page_size=disable_prefer_css_page_size,
        generate_tagged_pdf=generate_tagged_pdf,
    )
    log.debug("options=%s items=%s", template, items)

    try:
        failures = asyncio.run(
            _run(
                items,
                template,
                mono=mono_page,
                screen_media=screen_media_type,
                cookie_jar=cookie_jar,
                browser_path=browser_path,
                show_progress=not ansi_only and sys.stderr.isatty(),
            )
        )
    except BrowserLaunchError as exc:
        log.error("Failed to launch browser with reason: %s", exc)
        raise Exit(1)
    except CookieFileParseError as exc:
        log.error("Failed to load cookies from %s with reason: %s", cookie_jar, exc)
        raise Exit(1)

    if failures > MAX_EXIT_CODE:
        log.error("%d PDFs could not be generated", failures)
    raise Exit(code=min(failures, MAX_EXIT_CODE))
