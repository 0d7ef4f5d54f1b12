"""HistoryProvider Protocol and the snapshot-listing helpers both providers share."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from userdata_timeline.core.models import Resource, Snapshot, is_snapshot_name

log = logging.getLogger(__name__)


@runtime_checkable
class HistoryProvider(Protocol):
    """Read contract shared by the local store and the sync-root resolver."""

    @property
    def name(self) -> str:
        """Unique provider ID: 'local', 'sync'."""
        ...

    @property
    def root(self) -> Path:
        """Directory holding one subfolder per resource."""
        ...

    def get_all_entries(self, resource: Resource) -> list[Snapshot]:
        """All snapshots of ``resource``, newest first. Never raises."""
        ...

    def resolve_content(self, resource: Resource, name: str) -> str:
        """Text of one snapshot."""
        ...


def list_entries(root: Path, resource: Resource) -> list[Snapshot]:
    """List ``<root>/<resource>`` newest first.

    Only names of the form ``YYYYMMDDTHHMMSS[.json]`` are kept. A missing or
    unreadable folder yields an empty list.
    """
    folder = root / resource.value
    try:
        children = [entry.name for entry in folder.iterdir()]
    except OSError as e:
        log.debug("No history for %s under %s: %s", resource.value, root, e)
        return []

    entries = []
    for name in sorted((n for n in children if is_snapshot_name(n)), reverse=True):
        try:
            entries.append(Snapshot.from_name(resource, name))
        except ValueError:
            # Matches the pattern but is not a real calendar date
            log.debug("Skipping snapshot with invalid date: %s", name)
    return entries


def read_snapshot(root: Path, resource: Resource, name: str) -> str | None:
    """Raw text of ``<root>/<resource>/<name>``, or None if it cannot be read."""
    # Names are plain filenames; anything with a path component is a miss
    if not name or Path(name).name != name or name in (".", ".."):
        log.debug("Rejected snapshot name: %r", name)
        return None

    path = root / resource.value / name
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        log.debug("Cannot read snapshot %s: %s", path, e)
        return None
