"""Root CLI group for todoctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from todoctl import __version__
from todoctl.commands import register_commands
from todoctl.commands._base import TodoGroup
from todoctl.commands._context import AppContext
from todoctl.config.settings import TodoSettings


@click.group(
    cls=TodoGroup,
    invoke_without_command=True,
    examples="""\
  todoctl create "Fix login redirect" --priority high
  todoctl list --status in_progress
  todoctl --store /tmp/todos --json read fix-login-redirect""",
)
@click.version_option(version=__version__, prog_name="todoctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--store",
    "store_path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Todo store directory (overrides [store] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    store_path: Path | None,
) -> None:
    """todoctl: file-backed todo store."""
    flags: dict[str, object] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    if store_path is not None:
        flags["store"] = {"path": str(store_path.resolve())}
    settings = TodoSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
