# topmark:header:start
#
#   project      : RppChunk
#   file         : __init__.py
#   file_relpath : src/rppchunk/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk package.

RppChunk reads and patches REAPER state chunks: the line-oriented, nested
``<ELEMENT ... >`` text format that describes tracks, items and their
sub-elements. It offers a single-pass scan engine driven by operation
variants, an attachable parser/patcher with commit semantics and a small CLI.
"""

from __future__ import annotations

from rppchunk.config import Config, MutableConfig
from rppchunk.constants import RPPCHUNK_VERSION
from rppchunk.core.errors import ChunkError, InvalidOperationError, MalformedChunkError
from rppchunk.core.lines import find_end_of_sub_chunk, remove_all_ids, remove_chunk_lines
from rppchunk.core.observer import BaseChunkObserver, ChunkObserver, LineEvent, RegionEvent
from rppchunk.core.operations import (
    CheckTokensExcept,
    CountKeyword,
    GetSubChunkOrLine,
    GetSubChunkOrLineEnd,
    GetToken,
    NotifyLines,
    Observe,
    Operation,
    ReplaceSubChunkOrLine,
    SetToken,
    SetTokensExcept,
    Target,
    ToggleToken,
    ToggleTokensExcept,
)
from rppchunk.core.regions import OpaqueRegion, RegionKind
from rppchunk.core.results import ResultKind, ScanResult, SubChunk
from rppchunk.core.stack import get_parent, is_child_of
from rppchunk.core.tokens import LineTokens, tokenize
from rppchunk.origins import ChunkOrigin, HostAPI, HostObjectOrigin, StringOrigin, read_mode
from rppchunk.patcher import ChunkParserPatcher, ChunkType

__version__ = RPPCHUNK_VERSION

__all__ = [
    "BaseChunkObserver",
    "CheckTokensExcept",
    "ChunkError",
    "ChunkObserver",
    "ChunkOrigin",
    "ChunkParserPatcher",
    "ChunkType",
    "Config",
    "CountKeyword",
    "GetSubChunkOrLine",
    "GetSubChunkOrLineEnd",
    "GetToken",
    "HostAPI",
    "HostObjectOrigin",
    "InvalidOperationError",
    "LineEvent",
    "LineTokens",
    "MalformedChunkError",
    "MutableConfig",
    "NotifyLines",
    "Observe",
    "OpaqueRegion",
    "Operation",
    "RegionEvent",
    "RegionKind",
    "ReplaceSubChunkOrLine",
    "ResultKind",
    "ScanResult",
    "SetToken",
    "SetTokensExcept",
    "StringOrigin",
    "SubChunk",
    "Target",
    "ToggleToken",
    "ToggleTokensExcept",
    "__version__",
    "find_end_of_sub_chunk",
    "get_parent",
    "is_child_of",
    "read_mode",
    "remove_all_ids",
    "remove_chunk_lines",
    "tokenize",
]
