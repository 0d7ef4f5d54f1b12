"""CLI entry point for userdata-timeline (udt command)."""

import click

from userdata_timeline import __version__
from userdata_timeline.cli.history_cmd import (
    backup_cmd,
    list_cmd,
    restore_cmd,
    show_cmd,
    watch_cmd,
)


@click.group()
@click.version_option(version=__version__, prog_name="userdata-timeline")
def cli() -> None:
    """userdata-timeline — local history for editor settings and keybindings."""


cli.add_command(backup_cmd)
cli.add_command(list_cmd)
cli.add_command(show_cmd)
cli.add_command(restore_cmd)
cli.add_command(watch_cmd)


if __name__ == "__main__":
    cli()
