# topmark:header:start
#
#   project      : RppChunk
#   file         : diagnostics.py
#   file_relpath : src/rppchunk/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics collected while loading configuration.

Configuration problems never abort a load: wrongly typed values and unknown
sections are recorded in a `DiagnosticLog`, carried by the frozen `Config`,
and reported by the CLI.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from rppchunk.config.logging import get_logger

if TYPE_CHECKING:
    from rppchunk.config.logging import RppChunkLogger

logger: RppChunkLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity of a diagnostic."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """The `yachalk` color function used to print this severity."""
        if self is DiagnosticLevel.ERROR:
            return cast("Callable[[str], str]", chalk.red_bright)
        if self is DiagnosticLevel.WARNING:
            return cast("Callable[[str], str]", chalk.yellow)
        return cast("Callable[[str], str]", chalk.blue)


@dataclass(frozen=True)
class Diagnostic:
    """One message with its severity."""

    level: DiagnosticLevel
    message: str

    def __str__(self) -> str:
        return f"{self.level.value}: {self.message}"


@dataclass
class DiagnosticLog:
    """Ordered, appendable diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add(self, level: DiagnosticLevel, message: str) -> None:
        logger.trace("Diagnostic %s: %s", level.value, message)
        self.items.append(Diagnostic(level, message))

    def add_info(self, message: str) -> None:
        self.add(DiagnosticLevel.INFO, message)

    def add_warning(self, message: str) -> None:
        self.add(DiagnosticLevel.WARNING, message)

    def extend(self, other: Iterable[Diagnostic]) -> None:
        """Append diagnostics from another log or sequence, keeping their order."""
        self.items.extend(other)

    def count(self, level: DiagnosticLevel) -> int:
        """Number of diagnostics of ``level``."""
        return Counter(d.level for d in self.items)[level]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
