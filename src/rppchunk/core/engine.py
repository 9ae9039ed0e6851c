# topmark:header:start
#
#   project      : RppChunk
#   file         : engine.py
#   file_relpath : src/rppchunk/core/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-pass traversal and dispatch engine.

`ChunkScanner.scan` walks a chunk line by line, keeps the element stack,
matches each line against a `Target` and dispatches selected lines to the
`Operation`. A patching scan copies every line it does not alter into a
rebuild buffer; the buffer is returned only when at least one line was
altered, so unchanged chunks are never rebuilt.

Per line:

1. an opaque region starting at the line is copied (or claimed by the
   observer) and the scan resumes after it;
2. the line is tokenized (truncated to ``max_line_length``);
3. ``<NAME`` lines push an element, ``>`` lines close an open sub-chunk
   match and pop an element;
4. the line is matched and handed to the operation hooks;
5. the raw line is copied unless a hook altered it.

Once a break is requested the rest of the chunk is copied verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import TYPE_CHECKING

from rppchunk.config.logging import get_logger
from rppchunk.constants import ELEMENT_CLOSE, ELEMENT_OPEN, SOURCE_ELEMENT
from rppchunk.core.observer import BaseChunkObserver, LineEvent, RegionEvent
from rppchunk.core.regions import OpaqueRegionDetector
from rppchunk.core.results import ResultKind, ScanResult
from rppchunk.core.stack import ElementStack
from rppchunk.core.tokens import LineTokens

if TYPE_CHECKING:
    from rppchunk.config.logging import RppChunkLogger
    from rppchunk.config.model import Config
    from rppchunk.core.observer import ChunkObserver
    from rppchunk.core.operations import Operation, Target
    from rppchunk.core.regions import OpaqueRegion

logger: RppChunkLogger = get_logger(__name__)

# "<SOURCE MIDI" and similar two-token openers start in-project MIDI data
_SOURCE_OPENER_MIN_LENGTH: int = 10


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """One line of the chunk.

    Attributes:
        raw (str): Line content without the newline (never truncated).
        newline (str): ``"\\n"``, or ``""`` for a final unterminated line.
        position (int): Offset of the line in the chunk.
        tokens (LineTokens): Tokens of the possibly truncated line.
    """

    raw: str
    newline: str
    position: int
    tokens: LineTokens

    @property
    def text(self) -> str:
        """The line as it appears in the chunk (with its newline)."""
        return self.raw + self.newline

    @property
    def keyword_position(self) -> int:
        """Offset of the first token in the chunk (the line start for a blank line)."""
        if self.tokens:
            return self.position + self.tokens[0].start
        return self.position

    @property
    def end(self) -> int:
        """Offset of the next line."""
        return self.position + len(self.raw) + len(self.newline)


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """Result of a scan and, for a patching scan that altered lines, the new chunk.

    Attributes:
        result (ScanResult): What the operation reports.
        new_chunk (str | None): Rebuilt chunk, or None when nothing was altered.
        updates (int): Lines altered in the rebuilt chunk.
    """

    result: ScanResult
    new_chunk: str | None = None
    updates: int = 0


@dataclass
class ScanState:
    """Mutable state of one scan, shared with the operation hooks."""

    operation: Operation
    target: Target
    write: bool
    observer: ChunkObserver
    stack: ElementStack = field(default_factory=ElementStack)
    new_chunk: StringIO | None = None
    updates: int = 0
    occurrence: int = 0
    altered: bool = False
    break_requested: bool = False
    in_source: bool = False
    sub_chunk: str | None = None
    sub_chunk_start: int | None = None
    _collected: list[str] = field(default_factory=lambda: [])

    # ----------------------------- hook helpers -----------------------------
    def mark_altered(self, altered: bool = True) -> None:
        """Record that the current line must not be copied."""
        self.altered = self.altered or altered

    def emit(self, text: str) -> None:
        """Write ``text`` to the rebuild buffer (no-op when reading)."""
        if self.new_chunk is not None and text:
            self.new_chunk.write(text)

    def write_token(self, line: ParsedLine, index: int, value: str) -> bool:
        """Emit ``line`` with token ``index`` set to ``value``.

        Returns:
            bool: True if the line was emitted; False when the token does not
            exist or already holds ``value`` (the line is then copied as is).
        """
        if index >= len(line.tokens) or line.tokens.text(index) == value:
            return False
        self.emit(line.tokens.splice(line.raw, index, value) + line.newline)
        return True

    def notify_line(self, line: ParsedLine) -> bool:
        """Hand ``line`` to the observer; True if the observer claimed it."""
        return bool(self.observer.on_line(self.line_event(line, self.occurrence)))

    def request_break(self) -> None:
        """Copy the rest of the chunk verbatim after the current line."""
        self.break_requested = True

    def open_sub_chunk(self, line: ParsedLine) -> None:
        """Start tracking the sub-chunk opened by ``line``."""
        self.sub_chunk = self.stack.parent
        self.sub_chunk_start = line.keyword_position

    def collect(self, text: str) -> None:
        """Append text to the collected sub-chunk or line."""
        self._collected.append(text)

    def collected(self) -> str:
        """Return everything collected so far."""
        return "".join(self._collected)

    # ----------------------------- events -----------------------------
    def line_event(self, line: ParsedLine, occurrence: int) -> LineEvent:
        return LineEvent(
            operation=self.operation,
            line=line.raw,
            newline=line.newline,
            tokens=line.tokens,
            position=line.position,
            parents=self.stack.snapshot(),
            occurrence=occurrence,
            new_chunk=self.new_chunk,
            updates=self.updates,
        )


class ChunkScanner:
    """Runs operations over chunk text.

    Args:
        config (Config): Parser flags (opaque regions, line length).
        observer (ChunkObserver | None): Receives structural and line events.
        is_track (bool): Whether the chunk is a track (enables freeze skipping).
    """

    def __init__(
        self,
        config: Config,
        *,
        observer: ChunkObserver | None = None,
        is_track: bool = False,
    ) -> None:
        self.config = config
        self.observer: ChunkObserver = observer if observer is not None else BaseChunkObserver()
        self.detector = OpaqueRegionDetector.from_config(config, is_track=is_track)

    def scan(self, text: str, operation: Operation, target: Target, *, write: bool) -> ScanOutcome:
        """Run ``operation`` over ``text``.

        Args:
            text (str): The chunk.
            operation (Operation): What to do with the selected lines.
            target (Target): Which lines to select.
            write (bool): Build a rebuild buffer (patching scan).

        Returns:
            ScanOutcome: The result, plus the new chunk when lines were altered.
        """
        reason: str | None = operation.validate(target)
        if reason is not None:
            logger.error("Invalid %s operation (%s): %s", operation.name, target, reason)
            return ScanOutcome(ScanResult(ResultKind.INVALID, reason=reason))
        if not text:
            logger.debug("Nothing to scan for %s: empty chunk", operation.name)
            return ScanOutcome(ScanResult(ResultKind.NO_CHUNK))

        state = ScanState(
            operation=operation,
            target=target,
            write=write,
            observer=self.observer,
            new_chunk=StringIO() if write else None,
        )
        self.observer.on_chunk_start(operation)
        try:
            result: ScanResult = self._walk(text, state)
        finally:
            self.observer.on_chunk_end(operation)
            state.stack.clear()

        new_chunk: str | None = None
        if result.kind is ResultKind.MALFORMED:
            logger.warning("Malformed chunk, scan aborted: %s", result.reason)
        elif state.new_chunk is not None and state.updates > 0:
            new_chunk = state.new_chunk.getvalue()
        logger.debug(
            "%s scan (%s, write=%s): %s, %d update(s)",
            operation.name,
            target,
            write,
            result,
            state.updates,
        )
        return ScanOutcome(result, new_chunk, state.updates if new_chunk is not None else 0)

    # ----------------------------- traversal -----------------------------
    def _walk(self, text: str, state: ScanState) -> ScanResult:
        n: int = len(text)
        max_len: int = self.config.max_line_length
        detector: OpaqueRegionDetector = self.detector
        pos: int = 0

        while pos < n:
            if state.break_requested:
                if state.new_chunk is not None:
                    state.new_chunk.write(text[pos:])
                return state.operation.finish(state)

            eol: int = text.find("\n", pos)
            if eol < 0:
                eol = n
            nxt: int = eol + 1 if eol < n else n

            if detector.enabled:
                region: OpaqueRegion | None = detector.detect(
                    text, pos, eol, depth=len(state.stack), in_source=state.in_source
                )
                if region is not None:
                    self._skip_region(text, region, state)
                    pos = region.end
                    continue

            raw: str = text[pos:eol]
            line = ParsedLine(
                raw=raw,
                newline=text[eol:nxt],
                position=pos,
                tokens=LineTokens.parse(raw if len(raw) <= max_len else raw[:max_len]),
            )
            state.altered = False
            stop: ScanResult | None = self._process_line(line, state)

            if state.new_chunk is not None:
                if state.altered:
                    state.updates += 1
                else:
                    state.new_chunk.write(line.text)
                if stop is not None:
                    state.new_chunk.write(text[nxt:])
            if stop is not None:
                return stop
            pos = nxt

        if state.stack and not state.break_requested:
            return ScanResult(
                ResultKind.MALFORMED,
                start=n,
                reason=f"{len(state.stack)} element(s) left open: {'/'.join(state.stack)}",
            )
        return state.operation.finish(state)

    def _process_line(self, line: ParsedLine, state: ScanState) -> ScanResult | None:
        stack: ElementStack = state.stack
        target: Target = state.target
        operation: Operation = state.operation
        keyword: str | None = line.tokens.keyword

        if keyword is not None:
            if keyword.startswith(ELEMENT_OPEN):
                if (
                    len(line.tokens) == 2
                    and keyword[1:] == SOURCE_ELEMENT
                    and len(line.raw.strip()) >= _SOURCE_OPENER_MIN_LENGTH
                ):
                    state.in_source = True
                stack.push(keyword[1:])
                state.mark_altered(self.observer.on_element_start(state.line_event(line, -1)))
            elif keyword.startswith(ELEMENT_CLOSE):
                if not stack:
                    return ScanResult(
                        ResultKind.MALFORMED,
                        start=line.position,
                        reason=f"close marker without open element at offset {line.position}",
                    )
                if state.sub_chunk is not None and len(stack) == target.depth:
                    state.sub_chunk = None
                    stop: ScanResult | None = operation.on_sub_chunk_end(state, line)
                    if stop is not None:
                        return stop
                if state.in_source and stack.parent == SOURCE_ELEMENT:
                    state.in_source = False
                state.mark_altered(self.observer.on_element_end(state.line_event(line, -1)))
                stack.pop()

        if not stack:
            return None

        tolerant, strict = target.match(len(stack), stack.parent, keyword)
        if tolerant and operation.tolerant:
            if target.addresses(state.occurrence):
                logger.trace("%s: line %d selected (tolerant)", operation.name, line.position)
                state.mark_altered(state.notify_line(line))
            state.occurrence += 1
        elif strict and not operation.tolerant:
            logger.trace("%s: occurrence %d at %d", operation.name, state.occurrence, line.position)
            if target.addresses(state.occurrence):
                stop = operation.on_hit(state, line)
            else:
                stop = operation.on_other(state, line)
            state.occurrence += 1
            if stop is not None:
                return stop
        elif (
            state.sub_chunk is None
            and keyword is not None
            and target.keyword is not None
            and target.break_keyword is not None
            and keyword == target.break_keyword
        ):
            logger.trace("%s: break keyword %r at %d", operation.name, keyword, line.position)
            state.request_break()
        elif state.sub_chunk is not None:
            operation.on_sub_chunk_line(state, line)
        return None

    def _skip_region(self, text: str, region: OpaqueRegion, state: ScanState) -> None:
        chunk: str = text[region.start : region.end]
        logger.trace("Skipping %s region [%d, %d)", region.kind.value, region.start, region.end)
        claimed: bool = bool(
            self.observer.on_skipped_region(
                RegionEvent(
                    operation=state.operation,
                    region=region,
                    text=chunk,
                    parents=state.stack.snapshot(),
                    new_chunk=state.new_chunk,
                    updates=state.updates,
                )
            )
        )
        if state.sub_chunk is not None:
            claimed = state.operation.on_sub_chunk_region(state, chunk) or claimed
        if state.new_chunk is not None:
            if claimed:
                state.updates += 1
            else:
                state.new_chunk.write(chunk)
