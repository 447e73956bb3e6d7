from __future__ import annotations

import pathlib
from typing import List, Sequence

from web2pdf.errors import InvalidWorkItems
from web2pdf.logger import log
from web2pdf.models import WorkItem


def pair_work_items(raw: Sequence[str]) -> List[WorkItem]:
    """
    Split a flat ``[URL, PATH, URL, PATH, ...]`` list into :class:`WorkItem`s.

    An odd length is a hard input error: the last URL has no destination.
    """
    if len(raw) % 2 != 0:
        raise InvalidWorkItems(
            "URL-Path pairs must be in pairs of two, "
            f"could not find a path for: {raw[-1]}"
        )
    return [
        WorkItem(location=str(raw[i]), destination=pathlib.Path(raw[i + 1]))
        for i in range(0, len(raw), 2)
    ]


def normalize_location(location: str) -> str:
    """Rewrite an existing local file to a ``file://`` URL, leave anything else."""
    path = pathlib.Path(location)
    if path.is_file():
        log.debug("Path %s is a file, converting to file:// URL", path)
        return path.resolve().as_uri()
    return location


def normalize_work_items(items: Sequence[WorkItem]) -> List[WorkItem]:
    return [
        WorkItem(location=normalize_location(it.location), destination=it.destination)
        for it in items
    ]
