"""Sync-root resolver — read-only history written by a settings-sync service.

Each snapshot is a JSON envelope whose ``content`` field is itself a JSON
string, and the real file text sits in that inner document's ``settings``
field::

    {"content": "{\\"settings\\": \\"<settings.json text>\\"}"}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from userdata_timeline.core.models import Resource, Snapshot
from userdata_timeline.providers.history.base import list_entries, read_snapshot

log = logging.getLogger(__name__)


class SnapshotFormatError(ValueError):
    """A sync snapshot was readable but its envelope has the wrong shape."""


class SyncBackupResolver:
    """History over an externally populated root. Never writes."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root).expanduser()

    @property
    def name(self) -> str:
        return "sync"

    @property
    def root(self) -> Path:
        return self._root

    def get_all_entries(self, resource: Resource) -> list[Snapshot]:
        return list_entries(self._root, resource)

    def resolve_content(self, resource: Resource, name: str) -> str:
        """Unwrapped settings text of a sync snapshot.

        Returns '' when the snapshot cannot be read.

        Raises:
            SnapshotFormatError: if either JSON layer is malformed or lacks
                the expected string field.
        """
        raw = read_snapshot(self._root, resource, name)
        if raw is None:
            return ""

        envelope = _load_field(raw, "content", f"{resource.value}/{name}")
        return _load_field(envelope, "settings", f"{resource.value}/{name} content")


def _load_field(text: str, key: str, where: str) -> str:
    """Parse ``text`` as a JSON object and return its string field ``key``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"Malformed JSON in {where}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotFormatError(f"Expected a JSON object in {where}")

    value = data.get(key)
    if not isinstance(value, str):
        raise SnapshotFormatError(f"Missing string field {key!r} in {where}")
    return value
