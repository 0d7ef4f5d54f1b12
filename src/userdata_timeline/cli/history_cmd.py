"""CLI commands for settings history: udt backup/list/show/restore/watch."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import click

from userdata_timeline.core.config import backup_root, load_config, resolve_home, sync_root
from userdata_timeline.core.models import Resource
from userdata_timeline.core.paging import paginate
from userdata_timeline.providers.history.base import HistoryProvider
from userdata_timeline.providers.history.local import BackupStore
from userdata_timeline.providers.history.restore import SnapshotNotFoundError, restore
from userdata_timeline.providers.history.sync import SnapshotFormatError, SyncBackupResolver

_home_option = click.option(
    "--home",
    type=click.Path(path_type=Path),
    default=None,
    help="Override UDT_HOME path.",
)

_sync_option = click.option(
    "--sync", "use_sync", is_flag=True, help="Read from the sync history root instead."
)

_resource_arg = click.argument(
    "resource", type=click.Choice([r.value for r in Resource]), callback=lambda _c, _p, v: Resource(v)
)


def _load(home: Path | None) -> tuple[Path, dict]:
    home_path = (home or resolve_home()).expanduser()
    config = load_config(home_path / "config.yaml")
    # --home wins over UDT_HOME and the config default
    config["home"] = str(home_path)
    return home_path, config


def _open_store(config: dict) -> BackupStore:
    return BackupStore(backup_root(config), Path(config["user_data_path"]))


def _open_provider(config: dict, use_sync: bool) -> HistoryProvider:
    if not use_sync:
        return _open_store(config)
    root = sync_root(config)
    if root is None:
        raise click.ClickException("Sync history is not configured (sync.enabled / sync.path).")
    return SyncBackupResolver(root)


@click.command("backup")
@_resource_arg
@_home_option
def backup_cmd(resource: Resource, home: Path | None) -> None:
    """Snapshot the live RESOURCE file now."""
    _home, config = _load(home)
    with _open_store(config) as store:
        try:
            snap = store.backup(resource)
        except OSError as e:
            raise click.ClickException(f"Backup failed: {e}") from e
    click.echo(f"Saved {snap.location}")


@click.command("list")
@_resource_arg
@_home_option
@click.option("--cursor", default=None, help="Offset returned by a previous page.")
@_sync_option
def list_cmd(resource: Resource, home: Path | None, cursor: str | None, use_sync: bool) -> None:
    """List RESOURCE snapshots, newest first, one page at a time."""
    _home, config = _load(home)
    provider = _open_provider(config, use_sync)
    entries = provider.get_all_entries(resource)

    try:
        page = paginate(entries, cursor, config.get("timeline", {}).get("page_size", 10))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--cursor") from e

    if not page.items:
        click.echo("No snapshots found.")
        return

    for snap in page.items:
        click.echo(f"  {snap.label}  {snap.created_at:%Y-%m-%d %H:%M:%S}  ({snap.name})")
    if page.cursor:
        click.echo(f"More: --cursor {page.cursor}")


@click.command("show")
@_resource_arg
@click.argument("name")
@_home_option
@_sync_option
def show_cmd(resource: Resource, name: str, home: Path | None, use_sync: bool) -> None:
    """Print the content of snapshot NAME."""
    _home, config = _load(home)
    provider = _open_provider(config, use_sync)
    try:
        content = provider.resolve_content(resource, name)
    except SnapshotFormatError as e:
        raise click.ClickException(str(e)) from e
    click.echo(content, nl=False)


@click.command("restore")
@_resource_arg
@click.argument("name")
@_home_option
@_sync_option
def restore_cmd(resource: Resource, name: str, home: Path | None, use_sync: bool) -> None:
    """Replace the live RESOURCE file with snapshot NAME."""
    _home, config = _load(home)
    provider = _open_provider(config, use_sync)
    target = resource.live_path(Path(config["user_data_path"]))
    try:
        written = restore(provider, resource, name, target)
    except (SnapshotNotFoundError, SnapshotFormatError, OSError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Restored {resource.value} from {name} ({written} bytes)")


@click.command("watch")
@_home_option
def watch_cmd(home: Path | None) -> None:
    """Watch settings files and snapshot them on change (foreground)."""
    home_path, config = _load(home)
    watch_cfg = config.get("watch", {})

    if not watch_cfg.get("enabled", True):
        click.echo("Watching is disabled in config (watch.enabled).")
        return

    log_path = home_path / "timeline.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, str(config.get("log_level", "info")).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(str(log_path), encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
    log = logging.getLogger("userdata_timeline.watch")

    from userdata_timeline.daemon.watcher import ConfigWatcher

    try:
        resources = {Resource(r) for r in watch_cfg.get("resources", [])} or None
    except ValueError as e:
        raise click.ClickException(f"Invalid watch.resources: {e}") from e

    store = _open_store(config)
    store.changes.subscribe(lambda r: click.echo(f"  {r.value}: new snapshot"))
    watcher = ConfigWatcher(
        store,
        resources=resources,
        debounce_seconds=watch_cfg.get("debounce_seconds", 1.0),
    )
    try:
        watcher.start()
    except RuntimeError as e:
        store.close()
        raise click.ClickException(str(e)) from e

    log.info("Watching %s (backups in %s)", store.user_data_path, store.root)
    click.echo(f"Watching {store.user_data_path} (Ctrl+C to stop)")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        click.echo("Stopping...")
    finally:
        watcher.stop()
        store.close()
