# topmark:header:start
#
#   project      : RppChunk
#   file         : __init__.py
#   file_relpath : src/rppchunk/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command line front-end for RppChunk (Click)."""

from __future__ import annotations
