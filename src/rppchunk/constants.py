# topmark:header:start
#
#   project      : RppChunk
#   file         : constants.py
#   file_relpath : src/rppchunk/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    RPPCHUNK_VERSION: str = get_version("rppchunk")
except PackageNotFoundError:  # pragma: no cover - source checkout without metadata
    RPPCHUNK_VERSION = "0.0.0"

# Config discovery
DEFAULT_TOML_CONFIG_NAME: Final[str] = "rppchunk.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "rppchunk"

# Environment variable consulted for the internal log level
LOG_LEVEL_ENV_VAR: Final[str] = "RPPCHUNK_LOG_LEVEL"

# Lines longer than this are truncated for tokenization (raw bytes are kept)
MAX_CHUNK_LINE_LENGTH: Final[int] = 8192

# Address every occurrence / any depth
ALL_OCCURRENCES: Final[int] = -1
ANY_DEPTH: Final[int] = -1

# Structural markers
ELEMENT_OPEN: Final[str] = "<"
ELEMENT_CLOSE: Final[str] = ">"

# Opaque region markers
BASE64_TAIL: Final[str] = "=="
SOURCE_ELEMENT: Final[str] = "SOURCE"
MIDI_EVENT_PREFIXES: Final[tuple[str, ...]] = ("E ", "EM ")
MIDI_END_MARKER: Final[str] = "GUID {"
FREEZE_OPEN: Final[str] = "<FREEZE "
TRACK_OPENERS: Final[tuple[str, ...]] = ("<TRACK\n", "<TRACK ")
ITEM_OPENERS: Final[tuple[str, ...]] = ("<ITEM\n", "<ITEM ")

# Ids removed before writing a chunk back to a host object
ID_MARKER: Final[str] = "ID {"
ID_END_CHAR: Final[str] = "}"

# Host preference toggled around reads (bit 0: full plug-in state)
VST_FULL_STATE_PREF: Final[str] = "vstfullstate"
