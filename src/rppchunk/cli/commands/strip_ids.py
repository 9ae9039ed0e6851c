# topmark:header:start
#
#   project      : RppChunk
#   file         : strip_ids.py
#   file_relpath : src/rppchunk/cli/commands/strip_ids.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``strip-ids`` command.

Blanks every id line (``GUID {...}``, ``FXID {...}``, ``TRACKID {...}``...) so
that the host assigns fresh ids when the chunk is pasted or imported.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import build_config, emit_patched, get_console, open_patcher
from rppchunk.cli.errors import RppChunkDataError
from rppchunk.cli.options import CONTEXT_SETTINGS, apply_option

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config


@click.command(
    name="strip-ids",
    help="Blank every id line of a chunk.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("file", type=str)
@apply_option
@click.pass_context
def strip_ids_command(ctx: click.Context, *, file: str, apply_changes: bool) -> None:
    """Remove ids and emit the result."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(ctx)
    patcher, origin = open_patcher(file, config)
    if not patcher.chunk:
        raise RppChunkDataError("No chunk: the input is empty")
    removed: int = patcher.remove_ids()
    # id removal is not counted as an update; count it here so it gets emitted
    patcher.set_updates(removed)
    if removed:
        console.info(f"{file}: {removed} id(s) removed")
    emit_patched(ctx, file=file, patcher=patcher, origin=origin, apply_changes=apply_changes)
