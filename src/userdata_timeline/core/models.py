"""Core data models for userdata-timeline."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

# --- Enums ---


class Resource(str, Enum):
    SETTINGS = "settings"
    KEYBINDINGS = "keybindings"

    @property
    def filename(self) -> str:
        """Name of the live configuration file, e.g. 'settings.json'."""
        return f"{self.value}.json"

    def live_path(self, user_data_path: Path) -> Path:
        return user_data_path / self.filename

    @classmethod
    def from_filename(cls, filename: str) -> Resource:
        """Map a live filename ('keybindings.json') back to its Resource.

        Raises:
            ValueError: if the filename does not belong to a tracked resource.
        """
        stem = filename[:-5] if filename.endswith(".json") else filename
        return cls(stem)


# --- Snapshot naming ---

# 8 digits, 'T', 6 digits; the '.json' suffix is optional for older snapshots
SNAPSHOT_NAME_RE = re.compile(r"^\d{8}T\d{6}(\.json)?$")

SNAPSHOT_SUFFIX = ".json"

_NAME_FORMAT = "%Y%m%dT%H%M%S"


def is_snapshot_name(name: str) -> bool:
    return SNAPSHOT_NAME_RE.match(name) is not None


def snapshot_name(when: datetime | None = None) -> str:
    """Format a local wall-clock time as a snapshot filename.

    Sub-second precision is discarded, so two snapshots taken within the
    same second share a name.
    """
    when = when or datetime.now()
    return when.strftime(_NAME_FORMAT) + SNAPSHOT_SUFFIX


def parse_snapshot_time(name: str) -> datetime:
    """Decode the creation time encoded in a snapshot name.

    The digits are read as local calendar fields; file metadata is never
    consulted.

    Raises:
        ValueError: if ``name`` is not a snapshot name.
    """
    if not is_snapshot_name(name):
        raise ValueError(f"Not a snapshot name: {name!r}")
    return datetime(
        int(name[0:4]),
        int(name[4:6]),
        int(name[6:8]),
        int(name[9:11]),
        int(name[11:13]),
        int(name[13:15]),
    )


# --- Core Models ---


@dataclass(frozen=True)
class Snapshot:
    """One captured version of a resource's content."""

    resource: Resource
    name: str
    created_at: datetime

    @classmethod
    def from_name(cls, resource: Resource, name: str) -> Snapshot:
        return cls(resource=resource, name=name, created_at=parse_snapshot_time(name))

    @property
    def location(self) -> str:
        """Root-relative locator used by resolvers: '<resource>/<name>'."""
        return f"{self.resource.value}/{self.name}"

    @property
    def label(self) -> str:
        """Display label: the timestamp token without its suffix."""
        if self.name.endswith(SNAPSHOT_SUFFIX):
            return self.name[: -len(SNAPSHOT_SUFFIX)]
        return self.name

    @property
    def timestamp(self) -> int:
        """Creation time as epoch milliseconds."""
        return int(self.created_at.timestamp() * 1000)
