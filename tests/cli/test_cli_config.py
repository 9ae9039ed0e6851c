# topmark:header:start
#
#   project      : RppChunk
#   file         : test_cli_config.py
#   file_relpath : tests/cli/test_cli_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `config` command and configuration sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit

from rppchunk.cli.exit_codes import ExitCode
from tests.cli.conftest import assert_SUCCESS, run_cli_in

if TYPE_CHECKING:
    from pathlib import Path


def _parse(stdout: str) -> dict[str, Any]:
    return tomlkit.parse(stdout).unwrap()


def test_config_defaults(tmp_path: Path) -> None:
    """Without configuration files the defaults are printed."""
    result = run_cli_in(tmp_path, ["--no-color", "config"])

    assert_SUCCESS(result)
    data = _parse(result.stdout)
    assert data["parser"]["process_base64"] is False
    assert data["state"]["auto_commit"] is True


def test_config_discovers_local_file(tmp_path: Path) -> None:
    """``rppchunk.toml`` in the working directory is picked up."""
    (tmp_path / "rppchunk.toml").write_text("[parser]\nprocess_base64 = true\n")

    result = run_cli_in(tmp_path, ["--no-color", "config"])

    assert_SUCCESS(result)
    assert _parse(result.stdout)["parser"]["process_base64"] is True


def test_no_config_skips_discovery(tmp_path: Path) -> None:
    """``--no-config`` ignores files in the working directory."""
    (tmp_path / "rppchunk.toml").write_text("[parser]\nprocess_base64 = true\n")

    result = run_cli_in(tmp_path, ["--no-color", "--no-config", "config"])

    assert_SUCCESS(result)
    assert _parse(result.stdout)["parser"]["process_base64"] is False


def test_flag_overrides_config_file(tmp_path: Path) -> None:
    """Command-line flags win over configuration files."""
    extra = tmp_path / "extra.toml"
    extra.write_text("[parser]\nprocess_freeze = true\n")

    result = run_cli_in(
        tmp_path, ["--no-color", "--config", "extra.toml", "config", "--skip-freeze"]
    )

    assert_SUCCESS(result)
    assert _parse(result.stdout)["parser"]["process_freeze"] is False


def test_verbose_lists_sources(tmp_path: Path) -> None:
    """With -v the configuration sources are reported on stderr."""
    (tmp_path / "rppchunk.toml").write_text("[parser]\nprocess_base64 = true\n")

    result = run_cli_in(tmp_path, ["--no-color", "-v", "config"])

    assert_SUCCESS(result)
    assert "# sources:" in result.stderr
    assert "rppchunk.toml" in result.stderr


def test_invalid_value_warns(tmp_path: Path) -> None:
    """Values of the wrong type are reported and ignored."""
    (tmp_path / "rppchunk.toml").write_text('[parser]\nprocess_base64 = "yes"\n')

    result = run_cli_in(tmp_path, ["--no-color", "config"])

    assert_SUCCESS(result)
    assert "config:" in result.stderr
    assert _parse(result.stdout)["parser"]["process_base64"] is False


def test_missing_config_file_is_config_error(tmp_path: Path) -> None:
    """A ``--config`` file that does not exist exits with CONFIG_ERROR."""
    result = run_cli_in(tmp_path, ["--no-color", "--config", "nope.toml", "config"])

    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert "nope.toml" in result.stderr
