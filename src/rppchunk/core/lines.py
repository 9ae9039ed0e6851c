# topmark:header:start
#
#   project      : RppChunk
#   file         : lines.py
#   file_relpath : src/rppchunk/core/lines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fast text helpers that work on a chunk without tokenizing it.

These helpers do not track depth or parents. They are meant for bulk edits
where the searched text is known to be unambiguous (ids, for instance); nested
data such as frozen track subtrees is not protected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rppchunk.config.logging import get_logger
from rppchunk.constants import ELEMENT_CLOSE, ELEMENT_OPEN, ID_END_CHAR, ID_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rppchunk.config.logging import RppChunkLogger

logger: RppChunkLogger = get_logger(__name__)

# Blank record left in place of a removed one (the chunk reader accepts blank lines)
BLANK_LINE: str = " "


def iter_line_spans(text: str, start: int = 0) -> Iterator[tuple[int, int, int]]:
    """Yield ``(start, eol, next_start)`` for every line from ``start``.

    ``eol`` is the offset of the newline (or ``len(text)`` for a final line
    without one); ``next_start`` is the offset of the following line.
    """
    n: int = len(text)
    pos: int = start
    while pos < n:
        eol: int = text.find("\n", pos)
        if eol < 0:
            yield pos, n, n
            return
        yield pos, eol, eol + 1
        pos = eol + 1


def line_start(text: str, pos: int) -> int:
    """Return the offset of the beginning of the line containing ``pos``."""
    return text.rfind("\n", 0, pos) + 1


def find_end_of_sub_chunk(text: str, start: int) -> int | None:
    """Return the offset just past the close marker balancing the element at ``start``.

    ``start`` must point at (or before, on the same line) the ``<NAME`` line.
    Nested ``<`` lines increase the depth and ``>`` lines decrease it.

    Returns:
        int | None: Offset after the newline of the balancing ``>`` line, or
        ``None`` if the element is never closed.
    """
    depth: int = 0
    for bol, eol, nxt in iter_line_spans(text, line_start(text, start)):
        head: str = text[bol:eol].lstrip()
        if head.startswith(ELEMENT_OPEN):
            depth += 1
        elif head.startswith(ELEMENT_CLOSE):
            depth -= 1
            if depth == 0:
                return nxt
            if depth < 0:
                break
    return None


def _record_end(text: str, eol: int, end_char: str) -> int | None:
    """Return the newline offset of the first line from ``eol`` ending with ``end_char``.

    The record never spans an element boundary: reaching a ``<`` or ``>``
    line before ``end_char`` rejects it.
    """
    while True:
        if text.endswith(end_char, 0, eol):
            return eol
        nxt: int = text.find("\n", eol + 1)
        if nxt < 0:
            return None
        if text[eol + 1 : nxt].lstrip().startswith((ELEMENT_OPEN, ELEMENT_CLOSE)):
            return None
        eol = nxt


def remove_chunk_lines(
    text: str,
    search: str | Iterable[str],
    check_bol: bool = False,
    check_eol_char: str | None = None,
) -> tuple[str, int]:
    """Blank every record containing one of the ``search`` strings.

    A record is the line containing the match, extended (when
    ``check_eol_char`` is given) down to the first line ending with that
    character; a record that never reaches such a line, or that would cross
    an element opener or closer line, is left alone. Each
    removed record is replaced by a single-space line.

    Args:
        text (str): Chunk text.
        search (str | Iterable[str]): String(s) to look for.
        check_bol (bool): Only accept matches that begin a line (after indentation).
        check_eol_char (str | None): Character that must end the record.

    Returns:
        tuple[str, int]: The new text and the number of blanked records.
    """
    needles: list[str] = [search] if isinstance(search, str) else list(search)
    total: int = 0
    for needle in needles:
        if not needle:
            continue
        text, count = _remove_records(text, needle, check_bol, check_eol_char)
        total += count
    return text, total


def _remove_records(
    text: str,
    needle: str,
    check_bol: bool,
    check_eol_char: str | None,
) -> tuple[str, int]:
    parts: list[str] = []
    count: int = 0
    copied: int = 0
    idx: int = text.find(needle)
    while idx >= 0:
        bol: int = line_start(text, idx)
        eol: int = text.find("\n", idx)
        if eol < 0:
            break
        if check_bol and text[bol:idx].strip():
            idx = text.find(needle, idx + 1)
            continue
        end: int | None = eol if check_eol_char is None else _record_end(text, eol, check_eol_char)
        if end is None:
            idx = text.find(needle, idx + 1)
            continue
        parts.append(text[copied:bol])
        parts.append(BLANK_LINE)
        copied = end
        count += 1
        idx = text.find(needle, end)
    if not count:
        return text, 0
    parts.append(text[copied:])
    logger.trace("Blanked %d record(s) matching %r", count, needle)
    return "".join(parts), count


def remove_all_ids(text: str) -> tuple[str, int]:
    """Blank every ``... ID {...}`` record (GUIDs, FXIDs, track ids).

    Returns:
        tuple[str, int]: The new text and the number of removed ids.
    """
    return remove_chunk_lines(text, ID_MARKER, check_bol=False, check_eol_char=ID_END_CHAR)
