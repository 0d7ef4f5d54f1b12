"""History providers: the writable local store and the read-only sync root."""

from userdata_timeline.providers.history.base import HistoryProvider, list_entries
from userdata_timeline.providers.history.local import BackupStore
from userdata_timeline.providers.history.sync import SnapshotFormatError, SyncBackupResolver

__all__ = [
    "BackupStore",
    "HistoryProvider",
    "SnapshotFormatError",
    "SyncBackupResolver",
    "list_entries",
]
