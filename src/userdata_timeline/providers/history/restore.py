"""Restore — write a snapshot's content back over the live configuration file."""

from __future__ import annotations

import logging
from pathlib import Path

from userdata_timeline.core.fileutil import atomic_write
from userdata_timeline.core.models import Resource
from userdata_timeline.providers.history.base import HistoryProvider

log = logging.getLogger(__name__)


class SnapshotNotFoundError(LookupError):
    """The requested snapshot resolved to no content."""


def restore(
    provider: HistoryProvider,
    resource: Resource,
    name: str,
    target: Path,
) -> int:
    """Replace ``target`` with the content of snapshot ``name``.

    Returns the number of bytes written.

    Raises:
        SnapshotNotFoundError: if the provider has no snapshot ``name``.
        SnapshotFormatError: propagated from a sync-root provider.
        OSError: if the target cannot be written.
    """
    if name not in {s.name for s in provider.get_all_entries(resource)}:
        raise SnapshotNotFoundError(
            f"No snapshot {resource.value}/{name} in {provider.name} history"
        )

    # An empty snapshot is valid content, restored as an empty file
    content = provider.resolve_content(resource, name)

    data = content.encode("utf-8")
    atomic_write(target, data)
    log.info("Restored %s/%s from %s into %s", resource.value, name, provider.name, target)
    return len(data)
