"""Configuration loader for userdata-timeline."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULTS: dict = {
    "home": "~/.userdata-timeline",
    # Directory holding the live settings.json / keybindings.json
    "user_data_path": "~/.config/Code/User",
    "log_level": "info",
    "backup": {
        "folder": "userdata-backup",
    },
    # Externally populated snapshot tree (read-only)
    "sync": {
        "enabled": False,
        "path": None,
    },
    "timeline": {
        "page_size": 10,
    },
    "watch": {
        "enabled": True,
        "debounce_seconds": 1.0,
        "resources": ["settings", "keybindings"],
    },
}


def resolve_home() -> Path:
    """Resolve UDT_HOME: env var > default ~/.userdata-timeline."""
    env_home = os.environ.get("UDT_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path(DEFAULTS["home"]).expanduser().resolve()


def config_path(home: Path | None = None) -> Path:
    """Return the path to config.yaml."""
    if home is None:
        home = resolve_home()
    return home / "config.yaml"


def load_config(path: Path | None = None) -> dict:
    """Load config.yaml and merge with defaults.

    Args:
        path: Explicit path to config.yaml. If None, uses default location.

    Returns:
        Merged configuration dict with ``home`` and ``user_data_path``
        resolved to absolute paths.
    """
    if path is None:
        path = config_path()

    user_config: dict = {}
    if path.exists():
        try:
            raw = path.read_text(encoding="utf-8")
            user_config = yaml.safe_load(raw) or {}
        except Exception:
            log.warning("Failed to read config at %s, using defaults", path, exc_info=True)

    if not isinstance(user_config, dict):
        log.warning("Config at %s is not a mapping, using defaults", path)
        user_config = {}

    merged = _deep_merge(DEFAULTS, user_config)

    home_str = os.environ.get("UDT_HOME") or merged.get("home", DEFAULTS["home"])
    merged["home"] = str(Path(home_str).expanduser().resolve())

    user_data = os.environ.get("UDT_USER_DATA") or merged.get("user_data_path")
    merged["user_data_path"] = str(Path(user_data).expanduser().resolve())

    return merged


def backup_root(config: dict) -> Path:
    """Writable snapshot root: <home>/<backup.folder> unless absolute."""
    folder = Path(config.get("backup", {}).get("folder", "userdata-backup")).expanduser()
    if folder.is_absolute():
        return folder
    return Path(config["home"]) / folder


def sync_root(config: dict) -> Path | None:
    """Sync-variant root, or None when sync history is disabled."""
    sync_cfg = config.get("sync", {})
    if not sync_cfg.get("enabled") or not sync_cfg.get("path"):
        return None
    return Path(sync_cfg["path"]).expanduser()


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
