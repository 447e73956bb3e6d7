"""
Print parameters and browser viewport, built once from sparse user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from web2pdf.constants import (
    CSS_DPI,
    DEFAULT_DEVICE_SCALE,
    DEFAULT_MARGIN_IN,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
)


def _inches(value: float) -> str:
    return f"{value}in"


@dataclass(frozen=True)
class PdfRenderOptions:
    """
    Everything Chromium needs to print one page.

    Lengths are inches. ``None`` means "let the engine decide" and is left
    out of the ``page.pdf()`` call.
    """

    landscape: bool = False
    print_background: bool = True
    display_header_footer: bool = False
    header_template: Optional[str] = None
    footer_template: Optional[str] = None
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None
    margin_left: Optional[float] = None
    margin_right: Optional[float] = None
    paper_width: Optional[float] = None
    paper_height: Optional[float] = None
    scale: Optional[float] = None
    page_ranges: Optional[str] = None
    prefer_css_page_size: bool = True
    tagged: Optional[bool] = None

    @classmethod
    def build(
        cls,
        *,
        landscape: bool = False,
        disable_print_background: bool = False,
        display_header_footer: bool = False,
        header_template: Optional[str] = None,
        footer_template: Optional[str] = None,
        margin_top: Optional[float] = None,
        margin_bottom: Optional[float] = None,
        margin_left: Optional[float] = None,
        margin_right: Optional[float] = None,
        paper_width: Optional[float] = None,
        paper_height: Optional[float] = None,
        scale: Optional[float] = None,
        page_ranges: Optional[str] = None,
        disable_prefer_css_page_size: bool = False,
        generate_tagged_pdf: Optional[bool] = None,
    ) -> "PdfRenderOptions":
        """Apply the command-line defaults (1cm margins, backgrounds on)."""
        return cls(
            landscape=landscape,
            print_background=not disable_print_background,
            display_header_footer=display_header_footer,
            header_template=header_template,
            footer_template=footer_template,
            margin_top=DEFAULT_MARGIN_IN if margin_top is None else margin_top,
            margin_bottom=DEFAULT_MARGIN_IN if margin_bottom is None else margin_bottom,
            margin_left=DEFAULT_MARGIN_IN if margin_left is None else margin_left,
            margin_right=DEFAULT_MARGIN_IN if margin_right is None else margin_right,
            paper_width=paper_width,
            paper_height=paper_height,
            scale=scale,
            page_ranges=page_ranges,
            prefer_css_page_size=not disable_prefer_css_page_size,
            tagged=generate_tagged_pdf,
        )

    def to_pdf_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Playwright's ``Page.pdf``."""
        kwargs: Dict[str, Any] = {
            "landscape": self.landscape,
            "print_background": self.print_background,
            "display_header_footer": self.display_header_footer,
            "prefer_css_page_size": self.prefer_css_page_size,
        }
        margin = {
            side: _inches(value)
            for side, value in (
                ("top", self.margin_top),
                ("bottom", self.margin_bottom),
                ("left", self.margin_left),
                ("right", self.margin_right),
            )
            if value is not None
        }
        if margin:
            kwargs["margin"] = margin
        if self.paper_width is not None:
            kwargs["width"] = _inches(self.paper_width)
        if self.paper_height is not None:
            kwargs["height"] = _inches(self.paper_height)
        if self.scale is not None:
            kwargs["scale"] = self.scale
        if self.page_ranges is not None:
            kwargs["page_ranges"] = self.page_ranges
        if self.header_template is not None:
            kwargs["header_template"] = self.header_template
        if self.footer_template is not None:
            kwargs["footer_template"] = self.footer_template
        if self.tagged is not None:
            kwargs["tagged"] = self.tagged
        return kwargs


@dataclass(frozen=True)
class ViewportConfig:
    width: int = DEFAULT_VIEWPORT_WIDTH
    height: int = DEFAULT_VIEWPORT_HEIGHT
    device_scale_factor: float = DEFAULT_DEVICE_SCALE

    @classmethod
    def for_options(cls, options: PdfRenderOptions) -> "ViewportConfig":
        """
        Size the browser window after the paper so media queries match it.

        Fixed paper sizes are converted at 96 DPI; ``scale`` becomes the
        device scale factor.
        """
        return cls(
            width=int(options.paper_width * CSS_DPI)
            if options.paper_width is not None
            else DEFAULT_VIEWPORT_WIDTH,
            height=int(options.paper_height * CSS_DPI)
            if options.paper_height is not None
            else DEFAULT_VIEWPORT_HEIGHT,
            device_scale_factor=options.scale
            if options.scale is not None
            else DEFAULT_DEVICE_SCALE,
        )

    def to_playwright(self) -> Dict[str, Any]:
        """Keyword arguments for ``Browser.new_context``."""
        return {
            "viewport": {"width": self.width, "height": self.height},
            "device_scale_factor": self.device_scale_factor,
            "is_mobile": False,
            "has_touch": False,
        }
