# topmark:header:start
#
#   project      : RppChunk
#   file         : operations.py
#   file_relpath : src/rppchunk/core/operations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scan targets and operation variants.

A scan is described by a `Target` (which lines are selected) and an
`Operation` (what happens to them). Operations are small frozen dataclasses;
the engine drives them through a fixed set of hooks:

- `Operation.on_hit`: a selected line whose occurrence is addressed by the target;
- `Operation.on_other`: a selected line whose occurrence is not addressed;
- `Operation.on_sub_chunk_line` / `on_sub_chunk_region` / `on_sub_chunk_end`:
  lines inside a sub-chunk the operation opened with `ScanState.open_sub_chunk`;
- `Operation.finish`: the result when the scan runs to its end.

A hook returns a `ScanResult` to stop the scan immediately, or ``None`` to go on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from rppchunk.constants import ALL_OCCURRENCES, ANY_DEPTH, ELEMENT_OPEN
from rppchunk.core.results import ResultKind, ScanResult

if TYPE_CHECKING:
    from rppchunk.core.engine import ParsedLine, ScanState


# --------------------------------- Target ---------------------------------


@dataclass(frozen=True, slots=True)
class Target:
    """Line selection filters.

    Attributes:
        depth (int): Required depth (``ANY_DEPTH`` for every depth).
        parent (str | None): Required innermost open element.
        keyword (str | None): Required first token (``"<NAME"`` selects a sub-chunk).
        occurrence (int): Zero-based occurrence to address, or ``ALL_OCCURRENCES``.
        break_keyword (str | None): Stop scanning at the first line starting
            with this token (only when ``keyword`` is set and no sub-chunk is open).
    """

    depth: int = ANY_DEPTH
    parent: str | None = None
    keyword: str | None = None
    occurrence: int = ALL_OCCURRENCES
    break_keyword: str | None = None

    @property
    def single(self) -> bool:
        """Whether one occurrence is addressed."""
        return self.occurrence != ALL_OCCURRENCES

    @property
    def selects_sub_chunk(self) -> bool:
        """Whether the keyword opens an element."""
        return self.keyword is not None and self.keyword.startswith(ELEMENT_OPEN)

    def addresses(self, occurrence: int) -> bool:
        """Return True if ``occurrence`` is addressed by this target."""
        return self.occurrence in (ALL_OCCURRENCES, occurrence)

    def match(self, depth: int, parent: str | None, keyword: str | None) -> tuple[bool, bool]:
        """Match a line against the filters.

        Args:
            depth (int): Depth of the line (number of open elements).
            parent (str | None): Innermost open element.
            keyword (str | None): First token of the line.

        Returns:
            tuple[bool, bool]: ``(tolerant, strict)``. A tolerant match only
            compares the filters that are set (in depth, parent, keyword
            order); a strict match requires all three to be set and equal.
        """
        if self.depth == ANY_DEPTH:
            return True, False
        if self.depth != depth:
            return False, False
        if self.parent is None:
            return True, False
        if self.parent != parent:
            return False, False
        if self.keyword is None:
            return True, False
        if self.keyword == keyword:
            return True, True
        return False, False


# ------------------------------- Operations -------------------------------


@dataclass(frozen=True)
class Operation:
    """Base class of operation variants.

    Class attributes:
        name (str): Short name used in logs.
        tolerant (bool): Select lines on tolerant matches and hand them to
            the observer (observer-driven variants). Built-in variants select
            strict matches.
    """

    name: ClassVar[str] = "operation"
    tolerant: ClassVar[bool] = False

    def validate(self, target: Target) -> str | None:
        """Return why this operation cannot run with ``target``, or None."""
        return None

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        return None

    def on_other(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        return None

    def on_sub_chunk_line(self, scan: ScanState, line: ParsedLine) -> None:
        return None

    def on_sub_chunk_region(self, scan: ScanState, text: str) -> bool:
        """Handle a skipped region inside an open sub-chunk; True drops it."""
        return False

    def on_sub_chunk_end(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        return None

    def finish(self, scan: ScanState) -> ScanResult:
        """Result of a scan that was not stopped by a hook."""
        if scan.write:
            return ScanResult(ResultKind.UPDATED, count=scan.updates)
        return ScanResult(ResultKind.READ, count=scan.updates)


def _check_token(token: int) -> str | None:
    if token < 0:
        return f"token index must be >= 0, got {token}"
    return None


def _check_value(value: object) -> str | None:
    if not isinstance(value, str):
        return f"value must be a string, got {type(value).__name__}"
    return None


@dataclass(frozen=True)
class NotifyLines(Operation):
    """Hand selected lines to the observer.

    With ``except_occurrence`` the addressed occurrence is skipped and every
    other selected line is notified.
    """

    except_occurrence: bool = False

    name: ClassVar[str] = "notify"

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if not self.except_occurrence:
            scan.mark_altered(scan.notify_line(line))
            if scan.target.single:
                scan.request_break()
        return None

    def on_other(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if self.except_occurrence:
            scan.mark_altered(scan.notify_line(line))
        return None


@dataclass(frozen=True)
class Observe(Operation):
    """Hand every tolerantly matched line to the observer.

    ``tag`` lets one observer serve several kinds of scans.
    """

    tag: str = "custom"

    name: ClassVar[str] = "observe"
    tolerant: ClassVar[bool] = True


@dataclass(frozen=True)
class GetToken(Operation):
    """Read a token of the addressed line."""

    token: int = 0

    name: ClassVar[str] = "get-token"

    def validate(self, target: Target) -> str | None:
        if target.occurrence < 0:
            return "get-token needs a single occurrence (>= 0)"
        return _check_token(self.token)

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        return ScanResult(
            ResultKind.FOUND,
            start=line.keyword_position,
            end=line.end,
            value=line.tokens.text(self.token),
        )

    def finish(self, scan: ScanState) -> ScanResult:
        return ScanResult(ResultKind.NOT_FOUND)


@dataclass(frozen=True)
class SetToken(Operation):
    """Write ``value`` into a token of the addressed line(s)."""

    token: int = 0
    value: str = ""

    name: ClassVar[str] = "set-token"

    def validate(self, target: Target) -> str | None:
        return _check_token(self.token) or _check_value(self.value)

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.mark_altered(scan.write_token(line, self.token, self.value))
        if scan.target.single:
            scan.request_break()
        return None


@dataclass(frozen=True)
class SetTokensExcept(Operation):
    """Write ``value`` into every other occurrence, ``value_except`` into the addressed one."""

    token: int = 0
    value: str = ""
    value_except: str | None = None

    name: ClassVar[str] = "set-tokens-except"

    def validate(self, target: Target) -> str | None:
        reason: str | None = _check_token(self.token) or _check_value(self.value)
        if reason is None and self.value_except is not None:
            reason = _check_value(self.value_except)
        return reason

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if self.value_except is not None:
            scan.mark_altered(scan.write_token(line, self.token, self.value_except))
        return None

    def on_other(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.mark_altered(scan.write_token(line, self.token, self.value))
        return None


@dataclass(frozen=True)
class CheckTokensExcept(Operation):
    """Check that every non-addressed occurrence holds ``value``."""

    token: int = 0
    value: str = ""

    name: ClassVar[str] = "check-tokens-except"

    def validate(self, target: Target) -> str | None:
        return _check_token(self.token) or _check_value(self.value)

    def on_other(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        actual: str = line.tokens.text(self.token)
        if actual != self.value:
            return ScanResult(
                ResultKind.MISMATCH,
                start=line.keyword_position,
                end=line.end,
                value=actual,
            )
        return None

    def finish(self, scan: ScanState) -> ScanResult:
        return ScanResult(ResultKind.MATCHED)


def _toggled(line: ParsedLine, token: int) -> str:
    return str(int(not line.tokens.int_value(token)))


@dataclass(frozen=True)
class ToggleToken(Operation):
    """Flip a 0/1 integer token of the addressed line(s)."""

    token: int = 0

    name: ClassVar[str] = "toggle-token"

    def validate(self, target: Target) -> str | None:
        return _check_token(self.token)

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.mark_altered(scan.write_token(line, self.token, _toggled(line, self.token)))
        if scan.target.single:
            scan.request_break()
        return None


@dataclass(frozen=True)
class ToggleTokensExcept(Operation):
    """Flip the token of every other occurrence; write ``value_except`` into the addressed one."""

    token: int = 0
    value_except: str | None = None

    name: ClassVar[str] = "toggle-tokens-except"

    def validate(self, target: Target) -> str | None:
        if self.value_except is not None:
            reason: str | None = _check_value(self.value_except)
            if reason:
                return reason
        return _check_token(self.token)

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if self.value_except is not None:
            scan.mark_altered(scan.write_token(line, self.token, self.value_except))
        return None

    def on_other(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.mark_altered(scan.write_token(line, self.token, _toggled(line, self.token)))
        return None


@dataclass(frozen=True)
class ReplaceSubChunkOrLine(Operation):
    """Replace the addressed line, or the whole sub-chunk it opens, with ``text``.

    ``text`` is written as is (include the trailing newline); ``""`` removes.
    """

    text: str = ""

    name: ClassVar[str] = "replace"

    def validate(self, target: Target) -> str | None:
        if target.depth <= 0:
            return f"replace needs a depth > 0, got {target.depth}"
        return _check_value(self.text)

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.emit(self.text)
        scan.mark_altered()
        if scan.target.selects_sub_chunk:
            scan.open_sub_chunk(line)
        elif scan.target.single:
            scan.request_break()
        return None

    def on_sub_chunk_line(self, scan: ScanState, line: ParsedLine) -> None:
        scan.mark_altered()

    def on_sub_chunk_region(self, scan: ScanState, text: str) -> bool:
        return True

    def on_sub_chunk_end(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        scan.mark_altered()
        if scan.target.single:
            scan.request_break()
        return None


@dataclass(frozen=True)
class GetSubChunkOrLine(Operation):
    """Fetch the addressed line, or the whole sub-chunk it opens.

    Without ``collect`` the scan stops on the matched line and only its
    position is reported.
    """

    collect: bool = True

    name: ClassVar[str] = "get-sub-chunk"

    def validate(self, target: Target) -> str | None:
        if target.occurrence < 0:
            return f"{self.name} needs a single occurrence (>= 0)"
        if target.depth <= 0:
            return f"{self.name} needs a depth > 0, got {target.depth}"
        return None

    def _waits_for_close(self, scan: ScanState) -> bool:
        return self.collect and scan.target.selects_sub_chunk

    def on_hit(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if self.collect:
            scan.collect(line.text)
        if self._waits_for_close(scan):
            scan.open_sub_chunk(line)
            return None
        return ScanResult(
            ResultKind.FOUND,
            start=line.keyword_position,
            end=line.end,
            value=scan.collected() if self.collect else None,
        )

    def on_sub_chunk_line(self, scan: ScanState, line: ParsedLine) -> None:
        if self.collect:
            scan.collect(line.text)

    def on_sub_chunk_region(self, scan: ScanState, text: str) -> bool:
        if self.collect:
            scan.collect(text)
        return False

    def on_sub_chunk_end(self, scan: ScanState, line: ParsedLine) -> ScanResult | None:
        if self.collect:
            scan.collect(line.text)
        return ScanResult(
            ResultKind.FOUND,
            start=scan.sub_chunk_start,
            end=line.end,
            value=scan.collected() if self.collect else None,
        )

    def finish(self, scan: ScanState) -> ScanResult:
        return ScanResult(ResultKind.NOT_FOUND)


@dataclass(frozen=True)
class GetSubChunkOrLineEnd(GetSubChunkOrLine):
    """Like `GetSubChunkOrLine`, but always locate the end of the sub-chunk.

    ``end`` is the offset just past the close marker line, even when nothing
    is collected.
    """

    name: ClassVar[str] = "get-sub-chunk-end"

    def _waits_for_close(self, scan: ScanState) -> bool:
        return scan.target.selects_sub_chunk


@dataclass(frozen=True)
class CountKeyword(Operation):
    """Count strictly matched lines."""

    name: ClassVar[str] = "count"

    def validate(self, target: Target) -> str | None:
        if target.occurrence != ALL_OCCURRENCES:
            return "count needs every occurrence to be addressed"
        return None

    def finish(self, scan: ScanState) -> ScanResult:
        return ScanResult(ResultKind.COUNTED, count=scan.occurrence)
