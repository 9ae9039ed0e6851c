# topmark:header:start
#
#   project      : RppChunk
#   file         : test_properties.py
#   file_relpath : tests/core/test_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests: scans agree with the chunk model and patches are reversible."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from rppchunk import (
    BaseChunkObserver,
    ChunkParserPatcher,
    CountKeyword,
    GetSubChunkOrLine,
    GetToken,
    Observe,
    Target,
)
from rppchunk.core.lines import iter_line_spans
from tests.strategies_rppchunk import ELEMENT_NAMES, LINE_KEYWORDS, Element, s_element

if TYPE_CHECKING:
    from rppchunk.core.observer import LineEvent

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=60,
)


class LineCollector(BaseChunkObserver):
    """Keeps the lines handed to it without claiming them."""

    def __init__(self) -> None:
        self.lines: list[LineEvent] = []

    def on_line(self, event: LineEvent) -> bool:
        self.lines.append(event)
        return False


@SETTINGS
@given(
    tree=s_element(),
    parent=st.sampled_from(("TRACK", *ELEMENT_NAMES)),
    keyword=st.sampled_from(LINE_KEYWORDS + tuple(f"<{n}" for n in ELEMENT_NAMES)),
    depth=st.integers(min_value=1, max_value=4),
)
def test_count_agrees_with_model(tree: Element, parent: str, keyword: str, depth: int) -> None:
    """Counting selects exactly the lines the model predicts."""
    p = ChunkParserPatcher(tree.render())
    assert p.count_keyword(parent, keyword, depth) == tree.count(parent, keyword, depth)


@SETTINGS
@given(
    tree=s_element(),
    parent=st.sampled_from(("TRACK", *ELEMENT_NAMES)),
    keyword=st.sampled_from(LINE_KEYWORDS),
    depth=st.integers(min_value=1, max_value=4),
)
def test_toggle_twice_is_identity(tree: Element, parent: str, keyword: str, depth: int) -> None:
    """Toggling the same 0/1 tokens twice restores the chunk."""
    text: str = tree.render()
    p = ChunkParserPatcher(text)
    first: int = p.toggle_token(parent, keyword, depth, -1, 1)
    second: int = p.toggle_token(parent, keyword, depth, -1, 1)
    assert first == second == tree.count(parent, keyword, depth)
    assert p.chunk == text


@SETTINGS
@given(
    tree=s_element(),
    parent=st.sampled_from(("TRACK", *ELEMENT_NAMES)),
    keyword=st.sampled_from(LINE_KEYWORDS),
    depth=st.integers(min_value=1, max_value=4),
)
def test_read_only_scans_never_modify(tree: Element, parent: str, keyword: str, depth: int) -> None:
    """Observing, reading and counting leave the cached chunk untouched."""
    text: str = tree.render()
    observer = LineCollector()
    p = ChunkParserPatcher(text, observer=observer)

    p.parse(Observe())
    # every line but the final close marker is seen with the root open
    starts: list[int] = [bol for bol, _, _ in iter_line_spans(text)]
    assert [event.position for event in observer.lines] == starts[:-1]

    p.parse(GetToken(1), Target(depth, parent, keyword, 0))
    p.parse(CountKeyword(), Target(depth, parent, keyword))
    p.parse(GetSubChunkOrLine(), Target(depth, parent, keyword, 0))
    p.count_keyword(parent, keyword, depth)
    assert p.chunk == text
    assert p.updates == 0


@SETTINGS
@given(tree=s_element(), data=st.data())
def test_sub_chunk_fetch_and_remove_agree(tree: Element, data: st.DataObject) -> None:
    """A fetched sub-chunk is exactly what its removal takes out."""
    nested: list[tuple[Element, int]] = [(e, d) for e, d in tree.walk() if d > 1]
    if not nested:
        return
    element, depth = data.draw(st.sampled_from(nested))
    same: list[Element] = [e for e, d in tree.walk() if d == depth and e.name == element.name]
    occurrence: int = next(i for i, e in enumerate(same) if e is element)

    text: str = tree.render()
    p = ChunkParserPatcher(text)
    sub = p.get_sub_chunk(element.name, depth, occurrence)
    assert sub is not None
    assert sub.text == element.render()
    assert text[sub.start : sub.end] == sub.text

    assert p.remove_sub_chunk(element.name, depth, occurrence)
    assert p.chunk == text[: sub.start] + text[sub.end :]


@SETTINGS
@given(tree=s_element(), data=st.data())
def test_sub_chunk_round_trip(tree: Element, data: st.DataObject) -> None:
    """Writing a fetched sub-chunk back in place leaves the chunk as it was."""
    plugin = Element("VST", ("AAAAAQAAAA==",))
    root = Element("TRACK", (Element("FXCHAIN", (plugin, *tree.children)),))
    nested: list[tuple[Element, int]] = [(e, d) for e, d in root.walk() if d > 1]
    element, depth = data.draw(st.sampled_from(nested))
    same: list[Element] = [e for e, d in root.walk() if d == depth and e.name == element.name]
    occurrence: int = next(i for i, e in enumerate(same) if e is element)

    text: str = root.render()
    p = ChunkParserPatcher(text)
    sub = p.get_sub_chunk(element.name, depth, occurrence)
    assert sub is not None
    assert sub.text == element.render()

    assert p.replace_sub_chunk(element.name, depth, occurrence, sub.text)
    assert p.chunk == text
