# topmark:header:start
#
#   project      : RppChunk
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running RppChunk in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so that relative chunk paths and configuration
discovery (``rppchunk.toml``, ``pyproject.toml``) resolve against the
temporary test directory.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from rppchunk.cli.exit_codes import ExitCode
from rppchunk.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for
            the command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["get", "track.rpp", "-k", "MUTESOLO", "-p", "TRACK", "-d", "1", "-t", "1"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input,
            read when FILE is ``-``.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not touch the filesystem (``--help``,
    ``version``, chunks read from STDIN with ``--no-config``).
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def write_chunk(tmp_path: Path, text: str, name: str = "track.rpp") -> Path:
    """Write ``text`` to ``tmp_path / name`` byte for byte and return the path."""
    path: Path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return path


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_FAILURE(result: Result) -> None:
    """Assert that the command exited with FAILURE (code 1)."""
    assert result.exit_code == ExitCode.FAILURE, result.output


def assert_WOULD_CHANGE(result: Result) -> None:
    """Assert that the command exited with WOULD_CHANGE (code 2).

    Click's own usage errors also exit with 2; those raise, a dry run does not.
    """
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Usage:" not in result.stderr


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output
