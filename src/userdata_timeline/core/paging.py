"""Cursor paging over an already-materialized, newest-first snapshot list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from userdata_timeline.core.models import Snapshot

PAGE_SIZE = 10


@dataclass
class Page:
    """One window of entries plus the cursor for the next window, if any."""

    items: list[Snapshot] = field(default_factory=list)
    cursor: str | None = None


def paginate(
    entries: Sequence[Snapshot],
    cursor: str | None = None,
    page_size: int = PAGE_SIZE,
) -> Page:
    """Return the page starting at ``cursor`` (a decimal offset, default 0).

    The returned cursor is ``str(offset + page_size)`` and is only set when
    entries remain beyond that offset.

    Raises:
        ValueError: if ``cursor`` is not a non-negative integer.
    """
    start = int(cursor) if cursor else 0
    if start < 0:
        raise ValueError(f"Invalid cursor: {cursor!r}")

    end = start + page_size
    items = list(entries[start:end])
    return Page(items=items, cursor=str(end) if len(entries) > end else None)
