"""Configuration watcher — snapshots settings/keybindings whenever they change."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from userdata_timeline.core.models import Resource
from userdata_timeline.providers.history.local import BackupStore

log = logging.getLogger(__name__)

# Default debounce in seconds
_DEFAULT_DEBOUNCE = 1.0

# watchdog also reports opened/closed; reading a file must not count as a change
_CHANGE_EVENTS = {"created", "modified", "moved"}


class ConfigWatcher:
    """Watch the user data directory and back up changed resource files.

    Uses watchdog for cross-platform file monitoring. Editors often write a
    file several times per save, so changes are debounced: every resource
    touched within the window is backed up once when the window closes.
    """

    def __init__(
        self,
        store: BackupStore,
        resources: set[Resource] | None = None,
        debounce_seconds: float = _DEFAULT_DEBOUNCE,
    ) -> None:
        self.store = store
        self.resources = resources or set(Resource)
        self.debounce = debounce_seconds
        self._observer = None
        self._pending: set[Resource] = set()
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._running = False

    @property
    def watch_dir(self) -> Path:
        return self.store.user_data_path

    def start(self) -> None:
        """Start watching the user data directory."""
        try:
            from watchdog.observers import Observer
        except ImportError as e:
            raise RuntimeError(
                f"watchdog not installed: {e}. Install with: pip install userdata-timeline[watch]"
            ) from e

        handler = _ChangeHandler(self)
        self._observer = Observer()
        self._observer.schedule(handler, str(self.watch_dir), recursive=False)
        self._observer.start()
        self._running = True
        log.info("ConfigWatcher started: %s", self.watch_dir)

    def stop(self) -> None:
        """Stop watching. Pending changes are dropped."""
        self._running = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None
        log.info("ConfigWatcher stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    def _resource_for(self, path: str) -> Resource | None:
        """Tracked resource whose live file is ``path``, if any."""
        p = Path(path)
        if p.parent != self.watch_dir:
            return None
        try:
            resource = Resource.from_filename(p.name)
        except ValueError:
            return None
        if not p.name.endswith(".json") or resource not in self.resources:
            return None
        return resource

    def _on_fs_event(self, event_type: str, src_path: str) -> None:
        """Called by the watchdog handler. Debounces and filters."""
        if event_type not in _CHANGE_EVENTS:
            return

        resource = self._resource_for(src_path)
        if resource is None:
            return

        with self._lock:
            self._pending.add(resource)

        # Reset debounce timer
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self.debounce, self._flush_pending)
        self._timer.daemon = True
        self._timer.start()

    def _flush_pending(self) -> None:
        """Back up every resource changed during the debounce period."""
        with self._lock:
            pending = sorted(self._pending, key=lambda r: r.value)
            self._pending.clear()

        for resource in pending:
            try:
                self.store.backup(resource)
            except Exception:
                log.warning("Backup of %s failed", resource.value, exc_info=True)


class _ChangeHandler:
    """Watchdog event handler that delegates to ConfigWatcher."""

    def __init__(self, watcher: ConfigWatcher) -> None:
        self._watcher = watcher

    def dispatch(self, event) -> None:
        """Dispatch all watchdog events."""
        if event.is_directory:
            return

        event_type = event.event_type  # created, modified, deleted, moved
        src_path = event.src_path

        if event_type == "moved":
            # Editors save via temp file + rename onto the live file
            src_path = getattr(event, "dest_path", event.src_path)

        if isinstance(src_path, bytes):
            src_path = src_path.decode()

        self._watcher._on_fs_event(event_type, src_path)
