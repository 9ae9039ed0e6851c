# topmark:header:start
#
#   project      : RppChunk
#   file         : observer.py
#   file_relpath : src/rppchunk/core/observer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Observer protocol for scans.

An observer is notified of structure (element open/close), of the lines
selected by the operation and of skipped opaque regions. Boolean hooks return
``True`` to claim the line or region: during a patching scan the engine then
does not copy it into the rebuild buffer, and the observer is expected to have
written its replacement to ``event.new_chunk`` (or nothing, to delete it).

During a read-only scan ``event.new_chunk`` is ``None`` and return values only
matter for the update count, which is not used.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from io import StringIO

    from rppchunk.core.operations import Operation
    from rppchunk.core.regions import OpaqueRegion
    from rppchunk.core.tokens import LineTokens


@dataclass(frozen=True, slots=True)
class LineEvent:
    """A parsed line handed to an observer.

    Attributes:
        operation (Operation): The running operation.
        line (str): Raw line without its newline.
        newline (str): ``"\\n"``, or ``""`` for a final unterminated line.
        tokens (LineTokens): Tokens of the (possibly truncated) line.
        position (int): Offset of the line in the chunk.
        parents (tuple[str, ...]): Open element names, outermost first.
        occurrence (int): Zero-based occurrence of the current match
            (``-1`` for structural events).
        new_chunk (StringIO | None): Rebuild buffer of a patching scan.
        updates (int): Lines altered so far in this scan.
    """

    operation: Operation
    line: str
    newline: str
    tokens: LineTokens
    position: int
    parents: tuple[str, ...]
    occurrence: int
    new_chunk: StringIO | None
    updates: int

    @property
    def keyword(self) -> str | None:
        """First token of the line."""
        return self.tokens.keyword


@dataclass(frozen=True, slots=True)
class RegionEvent:
    """A skipped opaque region handed to an observer.

    Attributes:
        operation (Operation): The running operation.
        region (OpaqueRegion): Kind and bounds of the region.
        text (str): The region's lines, verbatim.
        parents (tuple[str, ...]): Open element names, outermost first.
        new_chunk (StringIO | None): Rebuild buffer of a patching scan.
        updates (int): Lines altered so far in this scan.
    """

    operation: Operation
    region: OpaqueRegion
    text: str
    parents: tuple[str, ...]
    new_chunk: StringIO | None
    updates: int


class ChunkObserver(Protocol):
    """Callbacks invoked by the scan engine."""

    def on_chunk_start(self, operation: Operation) -> None:
        """Called once before the first line."""
        ...

    def on_chunk_end(self, operation: Operation) -> None:
        """Called once after the scan, whatever its outcome."""
        ...

    def on_element_start(self, event: LineEvent) -> bool:
        """Called for every ``<NAME`` line, after the element is pushed."""
        ...

    def on_element_end(self, event: LineEvent) -> bool:
        """Called for every ``>`` line, before the element is popped."""
        ...

    def on_line(self, event: LineEvent) -> bool:
        """Called for every line selected by the operation."""
        ...

    def on_skipped_region(self, event: RegionEvent) -> bool:
        """Called for every opaque region copied without tokenizing."""
        ...


class BaseChunkObserver:
    """Observer whose hooks do nothing and never claim a line."""

    def on_chunk_start(self, operation: Operation) -> None:
        return None

    def on_chunk_end(self, operation: Operation) -> None:
        return None

    def on_element_start(self, event: LineEvent) -> bool:
        return False

    def on_element_end(self, event: LineEvent) -> bool:
        return False

    def on_line(self, event: LineEvent) -> bool:
        return False

    def on_skipped_region(self, event: RegionEvent) -> bool:
        return False
