# topmark:header:start
#
#   project      : RppChunk
#   file         : test_config_io.py
#   file_relpath : tests/config/test_config_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML I/O helpers in `rppchunk.config.io`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit

from rppchunk.config.io import (
    get_bool_value_or_none_checked,
    get_positive_int_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from rppchunk.core.diagnostics import DiagnosticLevel, DiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path


def test_to_toml_round_trip() -> None:
    """Rendered defaults parse back to the same tables."""
    data = load_defaults_dict()
    parsed: Any = tomlkit.parse(to_toml(data)).unwrap()
    assert parsed == data


def test_to_toml_drops_none() -> None:
    """TOML has no null; ``None`` values are omitted."""
    assert "b" not in to_toml({"t": {"a": 1, "b": None}})


def test_load_pyproject_returns_tool_table(tmp_path: Path) -> None:
    """Only ``[tool.rppchunk]`` is read from ``pyproject.toml``."""
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n[tool.rppchunk.state]\nauto_commit = false\n')
    assert load_toml_dict(path) == {"state": {"auto_commit": False}}


def test_load_invalid_toml_is_empty(tmp_path: Path) -> None:
    """Unreadable or invalid files load as empty tables."""
    bad = tmp_path / "rppchunk.toml"
    bad.write_text("[parser\n")
    assert load_toml_dict(bad) == {}
    assert load_toml_dict(tmp_path / "missing.toml") == {}


def test_get_table_value() -> None:
    """Non-table values are ignored."""
    assert get_table_value({"a": {"b": 1}}, "a") == {"b": 1}
    assert get_table_value({"a": 3}, "a") == {}
    assert get_table_value({}, "a") == {}


def test_checked_getters_record_warnings() -> None:
    """Type problems are reported through the diagnostic log."""
    log = DiagnosticLog()
    table: dict[str, Any] = {"flag": 1, "size": True, "ok": False, "n": 12}
    assert get_bool_value_or_none_checked(table, "flag", where="t", diagnostics=log) is None
    assert get_bool_value_or_none_checked(table, "ok", where="t", diagnostics=log) is False
    assert get_positive_int_or_none_checked(table, "size", where="t", diagnostics=log) is None
    assert get_positive_int_or_none_checked(table, "n", where="t", diagnostics=log) == 12
    assert len(log) == 2
    assert log.count(DiagnosticLevel.WARNING) == 2
    assert log.count(DiagnosticLevel.ERROR) == 0
    assert str(log.items[0]).startswith("warning: Expected boolean in t.flag")
