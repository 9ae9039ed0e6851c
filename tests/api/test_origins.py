# topmark:header:start
#
#   project      : RppChunk
#   file         : test_origins.py
#   file_relpath : tests/api/test_origins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for chunk origins and the host read mode."""

from __future__ import annotations

import pytest

from rppchunk import ChunkParserPatcher, HostObjectOrigin, StringOrigin, read_mode
from rppchunk.origins import FULL_STATE_BIT
from tests.chunks_rppchunk import SMALL_TRACK, TRACK_CHUNK
from tests.conftest import make_config


class FakeHost:
    """In-memory host: objects map to chunk text, preferences to integers."""

    def __init__(self, states: dict[str, str], *, pref: int = 0) -> None:
        self.states = states
        self.prefs: dict[str, int] = {"vstfullstate": pref}
        self.recording = False
        self.pref_writes: list[int] = []
        self.pref_seen_on_read: list[int] = []
        self.pref_seen_on_write: list[int] = []

    def get_object_state(self, obj: object) -> str | None:
        self.pref_seen_on_read.append(self.prefs["vstfullstate"])
        return self.states.get(str(obj))

    def set_object_state(self, obj: object, state: str) -> bool:
        self.pref_seen_on_write.append(self.prefs["vstfullstate"])
        self.states[str(obj)] = state
        return True

    def get_preference(self, name: str) -> int:
        return self.prefs[name]

    def set_preference(self, name: str, value: int) -> None:
        self.pref_writes.append(value)
        self.prefs[name] = value

    def is_recording(self) -> bool:
        return self.recording


def test_string_origin_round_trip() -> None:
    """A string origin hands out and stores text."""
    origin = StringOrigin("a")
    assert origin.read_state() == "a"
    assert origin.write_state("b")
    assert origin.text == "b"


@pytest.mark.parametrize(
    ("initial", "want_minimal", "during"),
    [
        (0, False, 1),
        (1, True, 0),
        (3, True, 2),
        (2, False, 3),
    ],
)
def test_read_mode_sets_and_restores_bit(initial: int, want_minimal: bool, during: int) -> None:
    """Only bit 0 changes, and only for the duration of the block."""
    host = FakeHost({}, pref=initial)
    with read_mode(host, want_minimal):
        assert host.prefs["vstfullstate"] == during
    assert host.prefs["vstfullstate"] == initial


def test_read_mode_leaves_matching_preference_alone() -> None:
    """No preference write happens when the bit already has the wanted value."""
    host = FakeHost({}, pref=FULL_STATE_BIT)
    with read_mode(host, False):
        pass
    assert host.pref_writes == []


def test_read_mode_restores_on_error() -> None:
    """The preference is restored when the body raises."""
    host = FakeHost({}, pref=0)
    with pytest.raises(KeyError), read_mode(host, False):
        raise KeyError("x")
    assert host.prefs["vstfullstate"] == 0


def test_host_origin_reads_in_requested_mode() -> None:
    """Minimal reads clear the full-state bit while the host serializes."""
    host = FakeHost({"track1": TRACK_CHUNK}, pref=1)
    origin = HostObjectOrigin(host, "track1")
    assert origin.read_state(minimal=True) == TRACK_CHUNK
    assert origin.read_state() == TRACK_CHUNK
    assert host.pref_seen_on_read == [0, 1]
    assert host.prefs["vstfullstate"] == 1


def test_host_origin_missing_object() -> None:
    """A host without state for the object yields None."""
    assert HostObjectOrigin(FakeHost({}), "nope").read_state() is None


def test_host_origin_write_strips_ids_in_full_mode() -> None:
    """Ids are removed before the host receives the chunk."""
    host = FakeHost({"track1": TRACK_CHUNK}, pref=0)
    origin = HostObjectOrigin(host, "track1")
    assert origin.write_state(TRACK_CHUNK)
    assert "ID {" not in host.states["track1"]
    assert host.pref_seen_on_write == [1]
    assert host.prefs["vstfullstate"] == 0


def test_host_origin_declines_while_recording() -> None:
    """Nothing is written while the host records."""
    host = FakeHost({"track1": SMALL_TRACK})
    host.recording = True
    assert not HostObjectOrigin(host, "track1").write_state("<TRACK\n>\n")
    assert host.states["track1"] == SMALL_TRACK


def test_patcher_on_host_object() -> None:
    """Full cycle: read, patch, commit back to the host."""
    host = FakeHost({"track1": TRACK_CHUNK})
    with ChunkParserPatcher(HostObjectOrigin(host, "track1")) as p:
        assert p.toggle_token("TRACK", "MUTESOLO", 1, 0, 1) == 1
    state = host.states["track1"]
    assert "MUTESOLO 1 0 0" in state
    assert "TRACKID" not in state


def test_patcher_on_host_object_minimal_read_is_not_written() -> None:
    """A minimal-state chunk never reaches the host."""
    host = FakeHost({"track1": SMALL_TRACK}, pref=1)
    p = ChunkParserPatcher(
        HostObjectOrigin(host, "track1"), config=make_config(wants_minimal_state=True)
    )
    p.toggle_token("TRACK", "MUTESOLO", 1, 0, 1)
    p.close()
    assert host.states["track1"] == SMALL_TRACK
    assert host.pref_seen_on_read == [0]
