# topmark:header:start
#
#   project      : RppChunk
#   file         : results.py
#   file_relpath : src/rppchunk/core/results.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scan results.

Every scan returns a `ScanResult`. The `ResultKind` discriminates the outcome;
offsets are plain 0-based positions in the scanned chunk and are only set for
the kinds that locate something.

| Kind        | Produced by                                  | Meaningful fields          |
|-------------|----------------------------------------------|----------------------------|
| FOUND       | token and sub-chunk/line fetches             | start, end, value          |
| NOT_FOUND   | fetches that did not match                   |                            |
| MATCHED     | token checks where every occurrence matched  |                            |
| MISMATCH    | token checks, first differing occurrence     | start, value               |
| COUNTED     | keyword counts                               | count                      |
| UPDATED     | mutating scans                               | count (altered lines)      |
| READ        | read-only notification scans                 | count (always 0)           |
| NO_CHUNK    | empty chunk or failed origin read            |                            |
| INVALID     | rejected operation/target combination        | reason                     |
| MALFORMED   | unbalanced element markers                   | start, reason              |
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import cast

from yachalk import chalk


class ResultKind(Enum):
    """Outcome of a scan."""

    FOUND = "found"
    NOT_FOUND = "not found"
    MATCHED = "matched"
    MISMATCH = "mismatch"
    COUNTED = "counted"
    UPDATED = "updated"
    READ = "read"
    NO_CHUNK = "no chunk"
    INVALID = "invalid operation"
    MALFORMED = "malformed chunk"

    @property
    def is_failure(self) -> bool:
        """Whether the scan could not run to a meaningful answer."""
        return self in (ResultKind.NO_CHUNK, ResultKind.INVALID, ResultKind.MALFORMED)

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function used to render this kind."""
        if self.is_failure:
            return cast("Callable[[str], str]", chalk.red_bright)
        if self in (ResultKind.NOT_FOUND, ResultKind.MISMATCH):
            return cast("Callable[[str], str]", chalk.yellow)
        if self is ResultKind.UPDATED:
            return cast("Callable[[str], str]", chalk.green)
        return cast("Callable[[str], str]", chalk.blue)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Result of one scan.

    Attributes:
        kind (ResultKind): Outcome discriminator.
        start (int | None): Offset of the matched keyword (or of the offending line).
        end (int | None): Offset just past the matched line or sub-chunk.
        value (str | None): Token text or collected lines.
        count (int): Occurrences counted or lines altered.
        reason (str | None): Explanation for INVALID and MALFORMED results.
    """

    kind: ResultKind
    start: int | None = None
    end: int | None = None
    value: str | None = None
    count: int = 0
    reason: str | None = None

    @property
    def ok(self) -> bool:
        """False for NO_CHUNK, INVALID and MALFORMED."""
        return not self.kind.is_failure

    @property
    def found(self) -> bool:
        """True when something was located."""
        return self.kind is ResultKind.FOUND

    def __str__(self) -> str:
        parts: list[str] = [self.kind.value]
        if self.start is not None:
            parts.append(f"start={self.start}")
        if self.end is not None:
            parts.append(f"end={self.end}")
        if self.kind in (ResultKind.COUNTED, ResultKind.UPDATED):
            parts.append(f"count={self.count}")
        if self.reason:
            parts.append(f"reason={self.reason!r}")
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class SubChunk:
    """A fetched sub-chunk (or line).

    Attributes:
        start (int): Offset of the ``<NAME`` keyword in the chunk.
        end (int): Offset just past its close marker line.
        text (str): The sub-chunk lines, verbatim.
    """

    start: int
    end: int
    text: str
