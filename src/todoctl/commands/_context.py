"""AppContext: shared state handed to every subcommand.

Built once by the root group and passed down with ``@click.pass_obj``.
The manager is created on first use so ``--help`` and ``--version`` never
touch the store.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from todoctl.domain.errors import TodoError
from todoctl.output.formatters import OutputSettings, format_result
from todoctl.services.result import ServiceResult

if TYPE_CHECKING:
    from todoctl.adapters.manager import TodoManager
    from todoctl.config.settings import TodoSettings


class AppContext:
    """Settings, a lazily built :class:`TodoManager`, and result emission."""

    def __init__(self, settings: TodoSettings) -> None:
        self.settings = settings
        self._manager: TodoManager | None = None

        from todoctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def manager(self) -> TodoManager:
        if self._manager is None:
            from todoctl.adapters.manager import create_todo_manager

            self._manager = create_todo_manager(self.settings.base_path)
        return self._manager

    def run(self, op: str, fn: Callable[[], dict[str, Any]]) -> ServiceResult:
        """Call *fn* and turn its payload or TodoError into a ServiceResult."""
        try:
            data = fn()
        except TodoError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult.success(op, data)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit 1 on failure.

        Successful output goes to stdout and warnings to stderr, so piped
        output stays clean.  Failures go to stderr.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
