# topmark:header:start
#
#   project      : RppChunk
#   file         : stack.py
#   file_relpath : src/rppchunk/core/stack.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Element stack and ancestry helpers.

The stack holds the names of the currently open elements, outermost first.
Its length is the depth of the line being scanned: a line directly inside a
root ``<TRACK`` element has depth 1 and parent ``"TRACK"``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class ElementStack:
    """Names of open elements, outermost first."""

    __slots__ = ("_names",)

    def __init__(self) -> None:
        self._names: list[str] = []

    def push(self, name: str) -> None:
        """Open element ``name``."""
        self._names.append(name)

    def pop(self) -> str:
        """Close the innermost element and return its name."""
        return self._names.pop()

    def clear(self) -> None:
        """Forget every open element."""
        self._names.clear()

    @property
    def depth(self) -> int:
        """Number of open elements."""
        return len(self._names)

    @property
    def parent(self) -> str | None:
        """Innermost open element, or ``None`` outside any element."""
        return self._names[-1] if self._names else None

    def snapshot(self) -> tuple[str, ...]:
        """Return an immutable copy of the open names (outermost first)."""
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"ElementStack({self._names!r})"


def get_parent(parents: Sequence[str], ancestor: int = 1) -> str:
    """Return the name of an enclosing element.

    Args:
        parents (Sequence[str]): Open element names, outermost first.
        ancestor (int): 1 for the innermost element, 2 for its parent, and so on.

    Returns:
        str: The element name, or ``""`` when there is no such ancestor.
    """
    if 0 < ancestor <= len(parents):
        return parents[len(parents) - ancestor]
    return ""


def is_child_of(parents: Sequence[str], name: str) -> bool:
    """Return True if an open element called ``name`` encloses the current line."""
    return name in parents
