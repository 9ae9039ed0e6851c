# topmark:header:start
#
#   project      : RppChunk
#   file         : version.py
#   file_relpath : src/rppchunk/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``version`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import get_console, get_effective_verbosity
from rppchunk.constants import RPPCHUNK_VERSION

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole


@click.command(name="version", help="Show the installed version of RppChunk.")
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the RppChunk version (with a heading when verbose)."""
    console: ClickConsole = get_console(ctx)
    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("RppChunk version:", bold=True, underline=True))
        console.print(f"    {console.styled(RPPCHUNK_VERSION, bold=True)}")
    else:
        console.print(console.styled(RPPCHUNK_VERSION, bold=True))
