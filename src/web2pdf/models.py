"""Plain value types passed between the CLI, the orchestrator and the browser."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorkItem:
    """One page to convert: where to load it from and where to write the PDF."""

    location: str
    destination: pathlib.Path


@dataclass(frozen=True)
class LayoutMetrics:
    """Natural size of the rendered content, in CSS pixels."""

    content_width_px: float
    content_height_px: float


@dataclass(frozen=True)
class TaskOutcome:
    index: int
    item: WorkItem
    success: bool
    error: Optional[str] = None
