"""File system utilities: directory creation and atomic writes."""

from __future__ import annotations

import contextlib
import logging
import os
import platform
import stat
import tempfile
from pathlib import Path

log = logging.getLogger(__name__)

DIR_MODE = 0o700

_IS_WINDOWS = platform.system() == "Windows"


def ensure_dir(path: Path) -> Path:
    """Create directory (and parents) if missing. Safe to call repeatedly."""
    created = not path.exists()
    path.mkdir(parents=True, exist_ok=True)
    if created and not _IS_WINDOWS:
        path.chmod(DIR_MODE)
    return path


def atomic_write(path: Path, content: str | bytes, encoding: str = "utf-8") -> None:
    """Write content to file atomically via temp file + rename.

    Ensures the file is never partially written on crash. The target's
    existing permission bits are kept.
    """
    ensure_dir(path.parent)
    data = content.encode(encoding) if isinstance(content, str) else content

    mode = None
    with contextlib.suppress(OSError):
        mode = path.stat().st_mode

    # Temp file in the same directory so the rename stays on one filesystem
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".tmp_",
        suffix=path.suffix,
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if mode is not None:
            os.chmod(tmp_path, stat.S_IMODE(mode))
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
