# topmark:header:start
#
#   project      : RppChunk
#   file         : io.py
#   file_relpath : src/rppchunk/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and value getters for RppChunk configuration.

Parsing and rendering are done with `tomlkit`; parsed documents are returned as
plain `dict` structures. The *checked* getters validate the expected shape and
record warnings in a `DiagnosticLog` so that user mistakes surface without
aborting the load.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from rppchunk.config.keys import Toml
from rppchunk.config.logging import get_logger
from rppchunk.constants import MAX_CHUNK_LINE_LENGTH, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from pathlib import Path

    from rppchunk.config.logging import RppChunkLogger
    from rppchunk.core.diagnostics import DiagnosticLog

TomlTable = dict[str, Any]

logger: RppChunkLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return RppChunk's runtime defaults as a new dict (no I/O).

    Returns:
        TomlTable: Sections/keys aligned with `rppchunk.config.keys.Toml`.
    """
    return {
        Toml.SECTION_PARSER: {
            Toml.KEY_PROCESS_BASE64: False,
            Toml.KEY_PROCESS_IN_PROJECT_MIDI: False,
            Toml.KEY_PROCESS_FREEZE: False,
            Toml.KEY_MAX_LINE_LENGTH: MAX_CHUNK_LINE_LENGTH,
        },
        Toml.SECTION_STATE: {
            Toml.KEY_WANTS_MINIMAL_STATE: False,
            Toml.KEY_AUTO_COMMIT: True,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    For ``pyproject.toml`` only the ``[tool.rppchunk]`` table is returned.

    Args:
        path (Path): Path to ``rppchunk.toml`` or ``pyproject.toml``.

    Returns:
        TomlTable: The parsed content; empty on failure (errors are logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}

    data: TomlTable = cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    if path.name == PYPROJECT_TOML_NAME:
        tool: Any = data.get("tool", {})
        section: Any = tool.get(PYPROJECT_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
        return cast("TomlTable", section) if isinstance(section, dict) else {}
    return data


def to_toml(data: TomlTable) -> str:
    """Render a TOML-compatible dict as TOML text.

    ``None`` values are dropped since TOML has no null.
    """
    doc = tomlkit.document()
    for section, values in data.items():
        if isinstance(values, dict):
            table = tomlkit.table()
            for key, value in cast("TomlTable", values).items():
                if value is not None:
                    table.add(key, value)
            doc.add(section, table)
        elif values is not None:
            doc.add(section, values)
    return tomlkit.dumps(doc)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return a sub-table, or an empty dict when missing or not a table."""
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.debug("Expected table for key %s, got %r; ignoring", key, value)
    return {}


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> bool | None:
    """Return an optional boolean, recording a warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected boolean in %s, got %s: %r", loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected boolean in {loc}, got {type(value).__name__}: {value}")
    return None


def get_positive_int_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
) -> int | None:
    """Return an optional positive integer, warning on wrong type or range."""
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Expected integer in %s, got %s: %r", loc, type(value).__name__, value)
        diagnostics.add_warning(f"Expected integer in {loc}, got {type(value).__name__}: {value}")
        return None
    if value <= 0:
        logger.warning("Expected a positive integer in %s, got %d", loc, value)
        diagnostics.add_warning(f"Expected a positive integer in {loc}, got {value}")
        return None
    return value
