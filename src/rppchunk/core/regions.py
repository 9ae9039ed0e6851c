# topmark:header:start
#
#   project      : RppChunk
#   file         : regions.py
#   file_relpath : src/rppchunk/core/regions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detection of opaque regions that the scan engine copies without tokenizing.

Three kinds of data are usually irrelevant to chunk edits and expensive to
tokenize:

- base64 blobs (plug-in states, embedded media): a line ending in ``==``
  starts a region that runs up to the next close-marker line;
- in-project MIDI event lines (``E``/``Em`` lines) inside a ``<SOURCE xxx``
  element: the region runs up to the ``GUID {`` line that follows the events;
- frozen track subtrees (``<FREEZE`` directly under a ``<TRACK`` root): the
  region is the whole balanced subtree.

Each rule is disabled when the matching ``process_*`` flag of the
configuration is set. A region whose end marker cannot be found is not
reported, so the lines are scanned normally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from rppchunk.constants import (
    BASE64_TAIL,
    FREEZE_OPEN,
    MIDI_END_MARKER,
    MIDI_EVENT_PREFIXES,
)
from rppchunk.core.lines import find_end_of_sub_chunk

if TYPE_CHECKING:
    from rppchunk.config.model import Config

_CLOSE_LINE_RE: Final[re.Pattern[str]] = re.compile(r"^[ \t]*>", re.MULTILINE)
_MIDI_END_RE: Final[re.Pattern[str]] = re.compile(
    r"^[ \t]*(?:" + re.escape(MIDI_END_MARKER) + r"|>)", re.MULTILINE
)


class RegionKind(Enum):
    """Kind of opaque region."""

    BASE64 = "base64"
    MIDI_EVENTS = "midi events"
    FREEZE = "freeze"


@dataclass(frozen=True, slots=True)
class OpaqueRegion:
    """A run of whole lines copied verbatim.

    Attributes:
        kind (RegionKind): What the region holds.
        start (int): Offset of the first line.
        end (int): Offset of the first line after the region.
    """

    kind: RegionKind
    start: int
    end: int


class OpaqueRegionDetector:
    """Decide, before a line is tokenized, whether it starts an opaque region."""

    __slots__ = ("skip_base64", "skip_midi", "skip_freeze", "is_track")

    def __init__(
        self,
        *,
        skip_base64: bool = True,
        skip_midi: bool = True,
        skip_freeze: bool = True,
        is_track: bool = False,
    ) -> None:
        self.skip_base64 = skip_base64
        self.skip_midi = skip_midi
        self.skip_freeze = skip_freeze
        self.is_track = is_track

    @classmethod
    def from_config(cls, config: Config, *, is_track: bool) -> OpaqueRegionDetector:
        """Build a detector honoring the ``process_*`` flags of ``config``."""
        return cls(
            skip_base64=not config.process_base64,
            skip_midi=not config.process_in_project_midi,
            skip_freeze=not config.process_freeze,
            is_track=is_track,
        )

    @property
    def enabled(self) -> bool:
        """Whether at least one rule is active."""
        return self.skip_base64 or self.skip_midi or self.skip_freeze

    def detect(
        self,
        text: str,
        start: int,
        eol: int,
        *,
        depth: int,
        in_source: bool,
    ) -> OpaqueRegion | None:
        """Return the region starting at the line ``text[start:eol]``, if any.

        Args:
            text (str): The whole chunk.
            start (int): Offset of the line.
            eol (int): Offset of the line's newline (or ``len(text)``).
            depth (int): Current element depth.
            in_source (bool): Whether the line is inside a ``<SOURCE xxx`` element.

        Returns:
            OpaqueRegion | None: The region, or ``None`` to tokenize the line.
        """
        if self.skip_base64 and eol - start > 2 and text.endswith(BASE64_TAIL, start, eol):
            m = _CLOSE_LINE_RE.search(text, eol)
            if m is not None:
                return OpaqueRegion(RegionKind.BASE64, start, m.start())

        if self.skip_midi and in_source:
            head: str = text[start : min(eol, start + 16)].lstrip(" \t").upper()
            if head.startswith(MIDI_EVENT_PREFIXES):
                m = _MIDI_END_RE.search(text, eol)
                if m is not None:
                    return OpaqueRegion(RegionKind.MIDI_EVENTS, start, m.start())

        if self.skip_freeze and self.is_track and depth == 1:
            head = text[start : min(eol, start + 64)].lstrip(" \t")
            if head.startswith(FREEZE_OPEN):
                end: int | None = find_end_of_sub_chunk(text, start)
                if end is not None:
                    return OpaqueRegion(RegionKind.FREEZE, start, end)

        return None
