# topmark:header:start
#
#   project      : RppChunk
#   file         : __init__.py
#   file_relpath : src/rppchunk/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk CLI subcommands."""

from __future__ import annotations
