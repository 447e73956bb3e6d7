"""
Single-page ("mono") sizing: one PDF page exactly as large as the content.

See https://developer.mozilla.org/en-US/docs/Web/CSS/length#absolute_length_units
for the 96px-per-inch conversion.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Tuple

from web2pdf.constants import CSS_DPI, MONO_DEFAULT_MARGIN_IN, MONO_PAGE_RANGES
from web2pdf.models import LayoutMetrics
from web2pdf.options import PdfRenderOptions


def _margin(value: Optional[float]) -> float:
    return MONO_DEFAULT_MARGIN_IN if value is None else value


def compute_mono_dimensions(
    content_width_px: float,
    content_height_px: float,
    margin_left: Optional[float] = None,
    margin_right: Optional[float] = None,
    margin_top: Optional[float] = None,
    margin_bottom: Optional[float] = None,
) -> Tuple[float, float]:
    """Return ``(paper_width_in, paper_height_in)`` fitting the content plus margins."""
    width = content_width_px / CSS_DPI + _margin(margin_left) + _margin(margin_right)
    height = content_height_px / CSS_DPI + _margin(margin_top) + _margin(margin_bottom)
    return width, height


def apply_mono(options: PdfRenderOptions, layout: LayoutMetrics) -> PdfRenderOptions:
    """
    Derive the print options for a mono render from measured *layout*.

    Scale is dropped, orientation forced to portrait and output truncated to
    the first page.
    """
    width, height = compute_mono_dimensions(
        layout.content_width_px,
        layout.content_height_px,
        margin_left=options.margin_left,
        margin_right=options.margin_right,
        margin_top=options.margin_top,
        margin_bottom=options.margin_bottom,
    )
    return replace(
        options,
        paper_width=width,
        paper_height=height,
        scale=None,
        landscape=False,
        page_ranges=MONO_PAGE_RANGES,
    )
