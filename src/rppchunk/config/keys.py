# topmark:header:start
#
#   project      : RppChunk
#   file         : keys.py
#   file_relpath : src/rppchunk/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for RppChunk configuration.

Keys defined here are the external configuration API (``rppchunk.toml`` and
``[tool.rppchunk]`` in ``pyproject.toml``); renaming one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by RppChunk configuration."""

    # [parser]
    SECTION_PARSER: Final[str] = "parser"

    KEY_PROCESS_BASE64: Final[str] = "process_base64"
    KEY_PROCESS_IN_PROJECT_MIDI: Final[str] = "process_in_project_midi"
    KEY_PROCESS_FREEZE: Final[str] = "process_freeze"
    KEY_MAX_LINE_LENGTH: Final[str] = "max_line_length"

    # [state]
    SECTION_STATE: Final[str] = "state"

    KEY_WANTS_MINIMAL_STATE: Final[str] = "wants_minimal_state"
    KEY_AUTO_COMMIT: Final[str] = "auto_commit"
