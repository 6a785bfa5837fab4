"""Subcommand modules for todoctl.

register_commands() imports each command lazily so ``todoctl --help``
stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every todoctl subcommand to the root group."""
    from todoctl.commands.archive import archive
    from todoctl.commands.create import create
    from todoctl.commands.delete import delete
    from todoctl.commands.duplicates import duplicates
    from todoctl.commands.list_cmd import list_cmd
    from todoctl.commands.read import read
    from todoctl.commands.stats import stats
    from todoctl.commands.update import update

    cli.add_command(create)
    cli.add_command(read)
    cli.add_command(list_cmd)
    cli.add_command(update)
    cli.add_command(archive)
    cli.add_command(delete)
    cli.add_command(duplicates)
    cli.add_command(stats)
