# topmark:header:start
#
#   project      : RppChunk
#   file         : console.py
#   file_relpath : src/rppchunk/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console for user-facing program output.

Chunk text goes to stdout; status lines, warnings and errors go to stderr so
that ``rppchunk set ... > patched.rpp`` stays usable. Internal diagnostics use
`logging` instead (see `rppchunk.config.logging`).
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any, TextIO

import click


class ClickConsole:
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): Emit ANSI colors.
        out (TextIO | None): Stream for program output (defaults to ``sys.stdout``).
        err (TextIO | None): Stream for messages (defaults to ``sys.stderr``).
    """

    enable_color: bool
    out: TextIO | None
    err: TextIO | None

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write program output to stdout."""
        click.echo(text, nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def info(self, text: str, *, nl: bool = True) -> None:
        """Write a status line to stderr."""
        click.echo(text, nl=nl, file=self.err or sys.stderr, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="yellow"
        )

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr."""
        click.secho(
            text, nl=nl, file=self.err or sys.stderr, color=self.enable_color, fg="bright_red"
        )

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style` (plain when colors are off)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)

    def paint(self, text: str, color: Callable[[str], str]) -> str:
        """Return ``text`` through a `yachalk` color function (plain when colors are off)."""
        return color(text) if self.enable_color else text
