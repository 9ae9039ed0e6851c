# topmark:header:start
#
#   project      : RppChunk
#   file         : errors.py
#   file_relpath : src/rppchunk/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the chunk API.

Scans report failures through `rppchunk.core.results.ScanResult`; exceptions
are reserved for helpers whose return type has no room for a failure kind.
"""

from __future__ import annotations


class ChunkError(Exception):
    """Base class for chunk API errors."""


class InvalidOperationError(ChunkError, ValueError):
    """An operation was requested with parameters it cannot work with."""


class MalformedChunkError(ChunkError):
    """The chunk has unbalanced element markers.

    Attributes:
        position (int | None): Offset of the offending line, when known.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position
