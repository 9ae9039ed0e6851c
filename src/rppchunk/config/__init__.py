# topmark:header:start
#
#   project      : RppChunk
#   file         : __init__.py
#   file_relpath : src/rppchunk/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for RppChunk.

Exposes the immutable `Config` snapshot and its `MutableConfig` builder.
Build configs with `MutableConfig` (``from_defaults()`` or ``load_merged()``),
then `freeze()` them before handing them to a `ChunkParserPatcher`.
"""

from __future__ import annotations

from rppchunk.config.model import ArgsLike, Config, MutableConfig

__all__ = [
    "ArgsLike",
    "Config",
    "MutableConfig",
]
