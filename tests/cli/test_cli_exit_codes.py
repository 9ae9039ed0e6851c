# topmark:header:start
#
#   project      : RppChunk
#   file         : test_cli_exit_codes.py
#   file_relpath : tests/cli/test_cli_exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: exit codes for input, usage and data errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rppchunk.cli.exit_codes import ExitCode
from tests.chunks_rppchunk import SMALL_TRACK
from tests.cli.conftest import (
    assert_DATA_ERROR,
    assert_USAGE_ERROR,
    run_cli_in,
    write_chunk,
)

if TYPE_CHECKING:
    from pathlib import Path

COUNT_ARGS: list[str] = ["-k", "MUTESOLO", "-p", "TRACK", "-d", "1"]


def test_missing_file(tmp_path: Path) -> None:
    """A file that does not exist exits with FILE_NOT_FOUND."""
    result = run_cli_in(tmp_path, ["--no-color", "count", "missing.rpp", *COUNT_ARGS])

    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output
    assert "missing.rpp" in result.stderr


def test_directory_is_io_error(tmp_path: Path) -> None:
    """Reading a directory fails with an I/O error class exit code."""
    (tmp_path / "dir.rpp").mkdir()

    result = run_cli_in(tmp_path, ["--no-color", "count", "dir.rpp", *COUNT_ARGS])

    assert result.exit_code in (ExitCode.IO_ERROR, ExitCode.PERMISSION_DENIED), result.output


def test_empty_file(tmp_path: Path) -> None:
    """An empty file has no chunk."""
    write_chunk(tmp_path, "")

    result = run_cli_in(tmp_path, ["--no-color", "count", "track.rpp", *COUNT_ARGS])

    assert_DATA_ERROR(result)
    assert "No chunk" in result.stderr


def test_not_utf8(tmp_path: Path) -> None:
    """Undecodable content is a data error."""
    (tmp_path / "track.rpp").write_bytes(b"<TRACK\nNAME \xff\xfe\n>\n")

    result = run_cli_in(tmp_path, ["--no-color", "count", "track.rpp", *COUNT_ARGS])

    assert_DATA_ERROR(result)


@pytest.mark.parametrize(
    "text",
    [
        pytest.param("<TRACK\nMUTESOLO 0 0 0\n", id="unclosed"),
        pytest.param("<TRACK\nMUTESOLO 0 0 0\n>\n>\n", id="stray-close"),
    ],
)
def test_malformed_chunk(tmp_path: Path, text: str) -> None:
    """Unbalanced elements are reported as malformed."""
    write_chunk(tmp_path, text)

    result = run_cli_in(tmp_path, ["--no-color", "count", "track.rpp", *COUNT_ARGS])

    assert_DATA_ERROR(result)
    assert "Malformed" in result.stderr


def test_malformed_chunk_is_not_written(tmp_path: Path) -> None:
    """A patch on a malformed chunk leaves the file untouched."""
    text: str = "<TRACK\nMUTESOLO 0 0 0\n"
    path = write_chunk(tmp_path, text)

    result = run_cli_in(
        tmp_path,
        ["--no-color", "toggle", "track.rpp", *COUNT_ARGS, "-t", "1", "--apply"],
    )

    assert_DATA_ERROR(result)
    assert path.read_bytes().decode("utf-8") == text


def test_verbose_and_quiet_conflict(tmp_path: Path) -> None:
    """``-v`` and ``-q`` are mutually exclusive."""
    write_chunk(tmp_path, SMALL_TRACK)

    result = run_cli_in(tmp_path, ["-v", "-q", "count", "track.rpp", *COUNT_ARGS])

    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.stderr


def test_missing_required_option_is_click_usage_error(tmp_path: Path) -> None:
    """Missing options are Click usage errors (exit 2 with a usage line)."""
    write_chunk(tmp_path, SMALL_TRACK)

    result = run_cli_in(tmp_path, ["count", "track.rpp", "-k", "MUTESOLO"])

    assert result.exit_code == 2
    assert "Usage:" in result.stderr
