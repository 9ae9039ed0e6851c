# topmark:header:start
#
#   project      : RppChunk
#   file         : origins.py
#   file_relpath : src/rppchunk/origins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Where chunks come from and go back to.

A `ChunkOrigin` supplies the chunk text to a `rppchunk.patcher.ChunkParserPatcher`
and receives it back on commit. Two origins are provided:

- `StringOrigin`: an in-memory text container (files, tests, pipelines);
- `HostObjectOrigin`: an object of a host application reached through the
  `HostAPI` protocol (a track or an item of a running session).

Host reads are wrapped in `read_mode`, which forces the host's plug-in state
preference to the requested level (full or minimal) and restores it afterwards.
Host writes strip ids first, so the host regenerates them, and are declined
while the host is recording.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol

from rppchunk.config.logging import get_logger
from rppchunk.constants import VST_FULL_STATE_PREF
from rppchunk.core.lines import remove_all_ids

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rppchunk.config.logging import RppChunkLogger

logger: RppChunkLogger = get_logger(__name__)

# Bit 0 of the plug-in state preference: 1 = full states, 0 = minimal states
FULL_STATE_BIT: int = 1


class ChunkOrigin(Protocol):
    """Source and destination of a chunk."""

    def read_state(self, *, minimal: bool = False) -> str | None:
        """Return the chunk text, or None if it cannot be read."""
        ...

    def write_state(self, text: str) -> bool:
        """Store ``text``; return False if the origin declined it."""
        ...


class HostAPI(Protocol):
    """Host application services used by `HostObjectOrigin`."""

    def get_object_state(self, obj: object) -> str | None:
        """Serialize ``obj`` to chunk text."""
        ...

    def set_object_state(self, obj: object, state: str) -> bool:
        """Apply chunk text to ``obj``; True on success."""
        ...

    def get_preference(self, name: str) -> int:
        """Read an integer preference."""
        ...

    def set_preference(self, name: str, value: int) -> None:
        """Write an integer preference."""
        ...

    def is_recording(self) -> bool:
        """Whether the host is currently recording."""
        ...


class StringOrigin:
    """In-memory chunk container.

    Attributes:
        text (str): The stored chunk; replaced on every successful commit.
    """

    def __init__(self, text: str = "") -> None:
        self.text = text

    def read_state(self, *, minimal: bool = False) -> str | None:
        return self.text

    def write_state(self, text: str) -> bool:
        self.text = text
        return True

    def __repr__(self) -> str:
        return f"StringOrigin({len(self.text)} chars)"


@contextmanager
def read_mode(host: HostAPI, want_minimal: bool) -> Iterator[None]:
    """Temporarily set the host's plug-in state preference.

    Bit 0 of the ``vstfullstate`` preference is cleared for minimal states and
    set for full states. The previous value is restored on exit, also when the
    body raises.

    Args:
        host (HostAPI): The host.
        want_minimal (bool): Request minimal (smaller, not writable) states.
    """
    saved: int = host.get_preference(VST_FULL_STATE_PREF)
    wanted: int = saved & ~FULL_STATE_BIT if want_minimal else saved | FULL_STATE_BIT
    if wanted != saved:
        logger.trace("Setting %s: %d -> %d", VST_FULL_STATE_PREF, saved, wanted)
        host.set_preference(VST_FULL_STATE_PREF, wanted)
    try:
        yield
    finally:
        if wanted != saved:
            host.set_preference(VST_FULL_STATE_PREF, saved)


class HostObjectOrigin:
    """Chunk of a host object (track, item, envelope...)."""

    def __init__(self, host: HostAPI, obj: object) -> None:
        self.host = host
        self.obj = obj

    def read_state(self, *, minimal: bool = False) -> str | None:
        with read_mode(self.host, minimal):
            state: str | None = self.host.get_object_state(self.obj)
        if state is None:
            logger.warning("Host returned no state for %r", self.obj)
        return state

    def write_state(self, text: str) -> bool:
        if self.host.is_recording():
            logger.info("Host is recording, not writing state of %r", self.obj)
            return False
        text, removed = remove_all_ids(text)
        logger.debug("Writing state of %r (%d id(s) removed)", self.obj, removed)
        with read_mode(self.host, False):
            return bool(self.host.set_object_state(self.obj, text))

    def __repr__(self) -> str:
        return f"HostObjectOrigin({self.obj!r})"
