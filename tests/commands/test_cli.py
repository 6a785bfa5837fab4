"""Tests for the root CLI group and global flags."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from todoctl import __version__
from todoctl.cli import cli

COMMANDS = ["create", "read", "list", "update", "archive", "delete", "duplicates", "stats"]


@pytest.mark.usefixtures("_isolated_store")
class TestRootGroup:
    def test_no_args_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in COMMANDS:
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_store")
class TestExamples:
    @pytest.mark.parametrize("name", COMMANDS)
    def test_every_command_has_examples(self, cli_runner: CliRunner, name: str) -> None:
        result = cli_runner.invoke(cli, [name, "--examples"])
        assert result.exit_code == 0
        assert f"todoctl {name}" in result.output

    def test_root_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--examples"])
        assert result.exit_code == 0
        assert "todoctl create" in result.output
