# topmark:header:start
#
#   project      : RppChunk
#   file         : patcher.py
#   file_relpath : src/rppchunk/patcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Chunk cache, commit policy and convenience helpers.

`ChunkParserPatcher` is attached to a `rppchunk.origins.ChunkOrigin`. It
fetches the chunk once, runs scans over the cached copy and writes it back on
`ChunkParserPatcher.commit` (or automatically when closed).

Typical use:

```python
from rppchunk import ChunkParserPatcher, StringOrigin

origin = StringOrigin(track_chunk)
with ChunkParserPatcher(origin) as p:
    p.toggle_token("TRACK", "MUTESOLO", 1, 0, 1)
# origin.text now holds the patched chunk
```

The patcher is also a `rppchunk.core.observer.BaseChunkObserver`: subclasses
may override the observer hooks instead of passing a separate observer.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import TYPE_CHECKING

from rppchunk.config.logging import get_logger
from rppchunk.config.model import MutableConfig
from rppchunk.constants import ALL_OCCURRENCES, ELEMENT_OPEN, ITEM_OPENERS, TRACK_OPENERS
from rppchunk.core.engine import ChunkScanner
from rppchunk.core.errors import InvalidOperationError, MalformedChunkError
from rppchunk.core.lines import line_start, remove_all_ids, remove_chunk_lines
from rppchunk.core.observer import BaseChunkObserver
from rppchunk.core.operations import (
    CountKeyword,
    GetSubChunkOrLine,
    GetToken,
    ReplaceSubChunkOrLine,
    SetToken,
    Target,
    ToggleToken,
)
from rppchunk.core.results import ResultKind, SubChunk
from rppchunk.origins import StringOrigin

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from rppchunk.config.logging import RppChunkLogger
    from rppchunk.config.model import Config
    from rppchunk.core.engine import ScanOutcome
    from rppchunk.core.observer import ChunkObserver
    from rppchunk.core.operations import Operation
    from rppchunk.core.results import ScanResult
    from rppchunk.origins import ChunkOrigin

logger: RppChunkLogger = get_logger(__name__)


class ChunkType(Enum):
    """Kind of chunk, from its first line."""

    TRACK = "track"
    ITEM = "item"
    OTHER = "other"


def _element_name(keyword: str) -> str:
    return keyword[1:] if keyword.startswith(ELEMENT_OPEN) else keyword


def _sub_chunk_target(
    keyword: str, depth: int, occurrence: int, break_keyword: str | None
) -> Target:
    name: str = _element_name(keyword)
    return Target(
        depth=depth,
        parent=name,
        keyword=f"{ELEMENT_OPEN}{name}",
        occurrence=occurrence,
        break_keyword=break_keyword,
    )


def _checked(result: ScanResult) -> ScanResult:
    """Raise for results a convenience helper cannot express."""
    if result.kind is ResultKind.INVALID:
        raise InvalidOperationError(result.reason or "invalid operation")
    if result.kind is ResultKind.MALFORMED:
        raise MalformedChunkError(result.reason or "malformed chunk", result.start)
    return result


class ChunkParserPatcher(BaseChunkObserver):
    """Parser/patcher attached to one chunk origin.

    Args:
        origin (ChunkOrigin | str): Where the chunk comes from; a plain string
            is wrapped in a `StringOrigin`.
        config (Config | None): Parser and state settings (defaults when None).
        auto_commit (bool | None): Commit on `close`; defaults to ``config.auto_commit``.
        observer (ChunkObserver | None): Receives scan events; defaults to the
            patcher itself.
    """

    def __init__(
        self,
        origin: ChunkOrigin | str,
        *,
        config: Config | None = None,
        auto_commit: bool | None = None,
        observer: ChunkObserver | None = None,
    ) -> None:
        self.origin: ChunkOrigin = StringOrigin(origin) if isinstance(origin, str) else origin
        self.config: Config = config if config is not None else MutableConfig.from_defaults().freeze()
        self.auto_commit: bool = self.config.auto_commit if auto_commit is None else auto_commit
        self.observer: ChunkObserver = observer if observer is not None else self

        self._chunk: str | None = None
        self._minimal: bool = False
        self._updates: int = 0
        self._chunk_type: ChunkType | None = None

    def __repr__(self) -> str:
        return f"ChunkParserPatcher({self.origin!r}, updates={self._updates})"

    # ------------------------------ context ------------------------------
    def __enter__(self) -> ChunkParserPatcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            logger.debug("Leaving patcher on %s: pending updates not committed", exc_type.__name__)
            return
        self.close()

    def close(self) -> None:
        """Commit pending updates when auto-commit is enabled."""
        if self.auto_commit:
            self.commit()

    # ------------------------------ cache ------------------------------
    @property
    def chunk(self) -> str:
        """The cached chunk, fetched from the origin on first access.

        The origin is read at most once until the cache is released by a
        commit or `cancel_updates`. A failed read caches an empty chunk.
        """
        if self._chunk is None:
            minimal: bool = self.config.wants_minimal_state
            text: str | None = self.origin.read_state(minimal=minimal)
            if text is None:
                logger.warning("Could not read chunk from %r", self.origin)
            else:
                logger.debug("Fetched %d chars from %r", len(text), self.origin)
            self._chunk = text or ""
            self._minimal = minimal
            self._chunk_type = None
        return self._chunk

    def set_chunk(self, text: str, updates: int) -> None:
        """Replace the cached chunk and set the update counter."""
        self._chunk = text
        self._updates = updates
        self._chunk_type = None

    @property
    def updates(self) -> int:
        """Updates since the last commit."""
        return self._updates

    def inc_updates(self) -> int:
        """Count one more update; return the new count."""
        self._updates += 1
        return self._updates

    def set_updates(self, updates: int) -> int:
        """Set the update counter; return it."""
        self._updates = updates
        return self._updates

    def cancel_updates(self) -> None:
        """Drop the cached chunk and its updates (the next access re-reads the origin)."""
        self._chunk = None
        self._updates = 0
        self._chunk_type = None

    def commit(self, force: bool = False) -> bool:
        """Write the cached chunk back to the origin.

        Nothing is written when there are no updates (unless ``force``), when
        the chunk is empty, or when it was read as a minimal state. On success
        the cache and the counter are cleared; when the origin declines, both
        are kept so that a later commit can retry.

        Returns:
            bool: True if the origin accepted the chunk.
        """
        if not (self._updates or force):
            return False
        text: str = self.chunk
        if not text:
            return False
        if self._minimal:
            logger.warning("Not committing a chunk read as a minimal state")
            return False
        if not self.origin.write_state(text):
            logger.info("Origin %r declined the commit; %d update(s) kept", self.origin, self._updates)
            return False
        logger.debug("Committed %d update(s) to %r", self._updates, self.origin)
        self.cancel_updates()
        return True

    # ------------------------------ settings ------------------------------
    @property
    def chunk_type(self) -> ChunkType:
        """Kind of chunk, from its first line."""
        if self._chunk_type is None:
            text: str = self.chunk
            if text.startswith(TRACK_OPENERS):
                self._chunk_type = ChunkType.TRACK
            elif text.startswith(ITEM_OPENERS):
                self._chunk_type = ChunkType.ITEM
            else:
                self._chunk_type = ChunkType.OTHER
        return self._chunk_type

    def set_process_base64(self, enable: bool) -> None:
        """Tokenize base64 lines instead of skipping them."""
        self.config = replace(self.config, process_base64=enable)

    def set_process_in_project_midi(self, enable: bool) -> None:
        """Tokenize in-project MIDI events instead of skipping them."""
        self.config = replace(self.config, process_in_project_midi=enable)

    def set_process_freeze(self, enable: bool) -> None:
        """Tokenize frozen track subtrees instead of skipping them."""
        self.config = replace(self.config, process_freeze=enable)

    def set_wants_minimal_state(self, enable: bool) -> None:
        """Read minimal states from the origin (such chunks are never committed)."""
        self.config = replace(self.config, wants_minimal_state=enable)

    # ------------------------------ scans ------------------------------
    def _run(self, operation: Operation, target: Target | None, write: bool) -> ScanResult:
        text: str = self.chunk
        scanner = ChunkScanner(
            self.config,
            observer=self.observer,
            is_track=self.chunk_type is ChunkType.TRACK,
        )
        outcome: ScanOutcome = scanner.scan(text, operation, target or Target(), write=write)
        if outcome.new_chunk is not None:
            self._chunk = outcome.new_chunk
            self._updates += outcome.updates
            self._chunk_type = None
        return outcome.result

    def parse(self, operation: Operation, target: Target | None = None) -> ScanResult:
        """Run a read-only scan; the cache is never modified."""
        return self._run(operation, target, write=False)

    def parse_patch(self, operation: Operation, target: Target | None = None) -> ScanResult:
        """Run a patching scan; altered lines replace the cache."""
        return self._run(operation, target, write=True)

    # ------------------------------ sub-chunks ------------------------------
    def get_sub_chunk(
        self,
        keyword: str,
        depth: int,
        occurrence: int,
        break_keyword: str | None = None,
    ) -> SubChunk | None:
        """Return the ``occurrence``-th ``<keyword`` sub-chunk at ``depth``, or None."""
        result = _checked(
            self.parse(
                GetSubChunkOrLine(),
                _sub_chunk_target(keyword, depth, occurrence, break_keyword),
            )
        )
        if result.kind is not ResultKind.FOUND or result.start is None or result.end is None:
            return None
        return SubChunk(start=result.start, end=result.end, text=result.value or "")

    def replace_sub_chunk(
        self,
        keyword: str,
        depth: int,
        occurrence: int,
        text: str,
        break_keyword: str | None = None,
    ) -> bool:
        """Replace sub-chunk(s) with ``text``; False if nothing was replaced."""
        result = _checked(
            self.parse_patch(
                ReplaceSubChunkOrLine(text),
                _sub_chunk_target(keyword, depth, occurrence, break_keyword),
            )
        )
        return result.count > 0

    def remove_sub_chunk(
        self,
        keyword: str,
        depth: int,
        occurrence: int,
        break_keyword: str | None = None,
    ) -> bool:
        """Remove sub-chunk(s); False if nothing was removed."""
        return self.replace_sub_chunk(keyword, depth, occurrence, "", break_keyword)

    # ------------------------------ lines ------------------------------
    def replace_line_at(self, pos: int, text: str | None = None) -> bool:
        """Replace the characters from ``pos`` to the end of its line (newline included).

        ``text`` should carry its own newline; None removes.
        """
        chunk: str = self.chunk
        if not 0 <= pos < len(chunk):
            return False
        eol: int = chunk.find("\n", pos)
        end: int = len(chunk) if eol < 0 else eol + 1
        self._chunk = f"{chunk[:pos]}{text or ''}{chunk[end:]}"
        self._updates += 1
        return True

    def replace_line(
        self,
        parent: str,
        keyword: str,
        depth: int,
        occurrence: int,
        text: str = "",
        break_keyword: str | None = None,
    ) -> bool:
        """Replace line(s) starting with ``keyword``; False if nothing was replaced."""
        result = _checked(
            self.parse_patch(
                ReplaceSubChunkOrLine(text),
                Target(depth, parent, keyword, occurrence, break_keyword),
            )
        )
        return result.count > 0

    def remove_line(
        self,
        parent: str,
        keyword: str,
        depth: int,
        occurrence: int,
        break_keyword: str | None = None,
    ) -> bool:
        """Remove line(s) starting with ``keyword``."""
        return self.replace_line(parent, keyword, depth, occurrence, "", break_keyword)

    def remove_lines(
        self,
        keywords: str | Iterable[str],
        check_bol: bool = True,
        check_eol_char: str | None = None,
    ) -> int:
        """Blank every line containing one of ``keywords`` (no depth or parent check).

        Returns:
            int: Number of blanked records (added to the update counter).
        """
        text, count = remove_chunk_lines(self.chunk, keywords, check_bol, check_eol_char)
        if count:
            self._chunk = text
            self._updates += count
        return count

    def remove_ids(self) -> int:
        """Blank every id line; not counted as an update."""
        text, count = remove_all_ids(self.chunk)
        if count:
            self._chunk = text
        return count

    def get_line_pos(
        self,
        direction: int,
        parent: str,
        keyword: str,
        depth: int,
        occurrence: int,
        break_keyword: str | None = None,
    ) -> int | None:
        """Return the start of the line before (-1), of (0) or after (1) a matched line.

        Returns:
            int | None: The offset, or None when the line is not found or has
            no neighbour in that direction.

        Raises:
            InvalidOperationError: If ``direction`` is not -1, 0 or 1.
        """
        if direction not in (-1, 0, 1):
            raise InvalidOperationError(f"direction must be -1, 0 or 1, got {direction}")
        result = _checked(
            self.parse(GetToken(0), Target(depth, parent, keyword, occurrence, break_keyword))
        )
        if result.kind is not ResultKind.FOUND or result.start is None:
            return None
        chunk: str = self.chunk
        bol: int = line_start(chunk, result.start)
        if direction == 0:
            return bol
        if direction == 1:
            eol: int = chunk.find("\n", bol)
            return eol + 1 if 0 <= eol < len(chunk) - 1 else None
        return line_start(chunk, bol - 1) if bol > 0 else None

    def insert_after_before(
        self,
        direction: int,
        text: str,
        parent: str,
        keyword: str,
        depth: int,
        occurrence: int,
        break_keyword: str | None = None,
    ) -> bool:
        """Insert ``text`` after (1) or before (0) a matched line."""
        if not text:
            return False
        pos: int | None = self.get_line_pos(direction, parent, keyword, depth, occurrence, break_keyword)
        if pos is None:
            return False
        chunk: str = self.chunk
        self._chunk = f"{chunk[:pos]}{text}{chunk[pos:]}"
        self._updates += 1
        return True

    # ------------------------------ tokens ------------------------------
    def get_token(
        self, parent: str, keyword: str, depth: int, occurrence: int, token: int
    ) -> str | None:
        """Return a token of the ``occurrence``-th matched line, or None."""
        result = _checked(
            self.parse(GetToken(token), Target(depth, parent, keyword, occurrence))
        )
        return result.value if result.kind is ResultKind.FOUND else None

    def set_token(
        self,
        parent: str,
        keyword: str,
        depth: int,
        occurrence: int,
        token: int,
        value: str,
    ) -> int:
        """Set a token of the matched line(s); return the number of altered lines."""
        result = _checked(
            self.parse_patch(SetToken(token, value), Target(depth, parent, keyword, occurrence))
        )
        return result.count

    def toggle_token(
        self, parent: str, keyword: str, depth: int, occurrence: int, token: int
    ) -> int:
        """Flip a 0/1 token of the matched line(s); return the number of altered lines."""
        result = _checked(
            self.parse_patch(ToggleToken(token), Target(depth, parent, keyword, occurrence))
        )
        return result.count

    def count_keyword(self, parent: str, keyword: str, depth: int) -> int:
        """Count lines starting with ``keyword`` under ``parent`` at ``depth``."""
        result = _checked(
            self.parse(CountKeyword(), Target(depth, parent, keyword, ALL_OCCURRENCES))
        )
        return result.count
