# topmark:header:start
#
#   project      : RppChunk
#   file         : test_regions.py
#   file_relpath : tests/core/test_regions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for opaque region detection."""

from __future__ import annotations

from rppchunk.core.regions import OpaqueRegion, OpaqueRegionDetector, RegionKind
from tests.chunks_rppchunk import FROZEN_TRACK_CHUNK, TRACK_CHUNK
from tests.conftest import make_config


def _detect_at(
    detector: OpaqueRegionDetector,
    text: str,
    needle: str,
    *,
    depth: int = 3,
    in_source: bool = False,
) -> OpaqueRegion | None:
    start = text.index(needle)
    eol = text.index("\n", start)
    return detector.detect(text, start, eol, depth=depth, in_source=in_source)


def test_base64_region_runs_to_close_line() -> None:
    """A line ending with ``==`` starts a region that stops before the next ``>``."""
    region = _detect_at(OpaqueRegionDetector(), TRACK_CHUNK, "AAAAAQAAAA==")
    assert region is not None
    assert region.kind is RegionKind.BASE64
    assert TRACK_CHUNK[region.start : region.end] == "AAAAAQAAAA==\n"


def test_short_base64_tail_is_not_a_region() -> None:
    """A bare ``==`` line is too short to be a blob line."""
    text = "<VST\n==\n>\n"
    assert _detect_at(OpaqueRegionDetector(), text, "==") is None


def test_plain_line_is_not_a_region() -> None:
    """Ordinary lines are tokenized."""
    assert _detect_at(OpaqueRegionDetector(), TRACK_CHUNK, "ZXE=") is None


def test_midi_events_only_inside_source() -> None:
    """Event lines are opaque only inside a source element."""
    detector = OpaqueRegionDetector()
    assert _detect_at(detector, TRACK_CHUNK, "E 0 90") is None

    region = _detect_at(detector, TRACK_CHUNK, "E 0 90", in_source=True)
    assert region is not None
    assert region.kind is RegionKind.MIDI_EVENTS
    assert TRACK_CHUNK[region.start : region.end] == "E 0 90 3c 60\nE 480 80 3c 00\n"


def test_midi_events_case_insensitive_and_indented() -> None:
    """``em`` lines count too, whatever the case and indentation."""
    text = "<SOURCE MIDI\n  em 0 b0 07 64\n>\n"
    region = _detect_at(OpaqueRegionDetector(), text, "  em", in_source=True)
    assert region is not None
    assert text[region.start : region.end] == "  em 0 b0 07 64\n"


def test_freeze_region_only_in_track_root() -> None:
    """Frozen data is opaque only directly under a track root."""
    track = OpaqueRegionDetector(is_track=True)
    region = _detect_at(track, FROZEN_TRACK_CHUNK, "<FREEZE", depth=1)
    assert region is not None
    assert region.kind is RegionKind.FREEZE
    assert FROZEN_TRACK_CHUNK[region.start : region.end] == (
        "<FREEZE 1\n<ITEM\nPOSITION 0\n>\n>\n"
    )

    assert _detect_at(track, FROZEN_TRACK_CHUNK, "<FREEZE", depth=2) is None
    assert _detect_at(OpaqueRegionDetector(), FROZEN_TRACK_CHUNK, "<FREEZE", depth=1) is None


def test_flags_disable_rules() -> None:
    """Processing flags turn the matching rule off."""
    detector = OpaqueRegionDetector.from_config(
        make_config(process_base64=True, process_in_project_midi=True, process_freeze=True),
        is_track=True,
    )
    assert not detector.enabled
    assert _detect_at(detector, TRACK_CHUNK, "AAAAAQAAAA==") is None
    assert _detect_at(detector, TRACK_CHUNK, "E 0 90", in_source=True) is None
