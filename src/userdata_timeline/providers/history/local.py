"""Local history store — timestamped copies of the live configuration files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from userdata_timeline.core.events import ChangeNotifier
from userdata_timeline.core.fileutil import ensure_dir
from userdata_timeline.core.models import Resource, Snapshot, snapshot_name
from userdata_timeline.providers.history.base import list_entries, read_snapshot

log = logging.getLogger(__name__)


class BackupStore:
    """Append-only snapshot store under one writable root.

    Layout: ``<root>/<resource>/<YYYYMMDDTHHMMSS>.json``. The store owns its
    ChangeNotifier and closes it in close().
    """

    def __init__(
        self,
        root: Path,
        user_data_path: Path,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._root = Path(root).expanduser()
        self.user_data_path = Path(user_data_path).expanduser()
        self.changes = notifier or ChangeNotifier()

    @property
    def name(self) -> str:
        return "local"

    @property
    def root(self) -> Path:
        return self._root

    def live_path(self, resource: Resource) -> Path:
        return resource.live_path(self.user_data_path)

    def backup(self, resource: Resource, now: datetime | None = None) -> Snapshot:
        """Copy the live file for ``resource`` into a new snapshot.

        A snapshot taken in the same second as an existing one replaces it.

        Raises:
            OSError: if the live file cannot be read or the snapshot written.
        """
        folder = ensure_dir(self._root / resource.value)
        content = self.live_path(resource).read_bytes()

        name = snapshot_name(now)
        (folder / name).write_bytes(content)
        log.info("Snapshot %s/%s (%d bytes)", resource.value, name, len(content))

        self.changes.fire(resource)
        return Snapshot.from_name(resource, name)

    def get_all_entries(self, resource: Resource) -> list[Snapshot]:
        return list_entries(self._root, resource)

    def resolve_content(self, resource: Resource, name: str) -> str:
        """Raw snapshot text; '' when the snapshot cannot be read."""
        content = read_snapshot(self._root, resource, name)
        return content if content is not None else ""

    def close(self) -> None:
        self.changes.close()

    def __enter__(self) -> BackupStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
