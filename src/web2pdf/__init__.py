"""Public package API."""

__version__ = "0.1.0"

from .batch_async import convert, open_session, run_batch  # noqa: E402
from .browser import BrowserSession, RenderPage  # noqa: E402
from .cookies import CookieRecord, SameSite, parse_cookie_file  # noqa: E402
from .mono import apply_mono, compute_mono_dimensions  # noqa: E402
from .models import LayoutMetrics, TaskOutcome, WorkItem  # noqa: E402
from .options import PdfRenderOptions, ViewportConfig  # noqa: E402

__all__ = [
    "BrowserSession",
    "CookieRecord",
    "LayoutMetrics",
    "PdfRenderOptions",
    "RenderPage",
    "SameSite",
    "TaskOutcome",
    "ViewportConfig",
    "WorkItem",
    "apply_mono",
    "compute_mono_dimensions",
    "convert",
    "open_session",
    "parse_cookie_file",
    "run_batch",
]
