# topmark:header:start
#
#   project      : RppChunk
#   file         : sub_chunk.py
#   file_relpath : src/rppchunk/cli/commands/sub_chunk.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``sub-chunk`` and ``remove-sub-chunk`` commands.

NAME is an element name (``FXCHAIN``); DEPTH is the depth of the element
itself, so a sub-chunk directly inside a root ``<TRACK`` has depth 2.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import (
    build_config,
    check_result,
    emit_patched,
    get_console,
    get_effective_verbosity,
    open_patcher,
)
from rppchunk.cli.errors import RppChunkError
from rppchunk.cli.options import CONTEXT_SETTINGS, apply_option, parser_flag_options
from rppchunk.constants import ELEMENT_OPEN
from rppchunk.core.operations import GetSubChunkOrLine, ReplaceSubChunkOrLine, Target
from rppchunk.core.results import ResultKind

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config
    from rppchunk.core.results import ScanResult


def _sub_chunk_target(name: str, depth: int, occurrence: int) -> Target:
    name = name.lstrip(ELEMENT_OPEN)
    return Target(depth=depth, parent=name, keyword=f"{ELEMENT_OPEN}{name}", occurrence=occurrence)


@click.command(
    name="sub-chunk",
    help="Print a sub-chunk (from its <NAME line to its closing >).",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # FX chain of a track chunk
  rppchunk sub-chunk track.rpp FXCHAIN -d 2
""",
)
@click.argument("file", type=str)
@click.argument("name", type=str)
@click.option("-d", "--depth", type=click.IntRange(min=1), required=True, help="Element depth.")
@click.option(
    "-o",
    "--occurrence",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Zero-based occurrence.",
)
@parser_flag_options
@click.pass_context
def sub_chunk_command(
    ctx: click.Context,
    *,
    file: str,
    name: str,
    depth: int,
    occurrence: int,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Print the sub-chunk verbatim (exit 1 if not found)."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, _ = open_patcher(file, config)
    result: ScanResult = check_result(
        patcher.parse(GetSubChunkOrLine(), _sub_chunk_target(name, depth, occurrence))
    )
    if result.kind is not ResultKind.FOUND:
        raise RppChunkError(f"Sub-chunk {name} (occurrence {occurrence}) not found at depth {depth}")
    console.print(result.value or "", nl=False)
    if get_effective_verbosity(ctx) > 1:
        console.info(f"{name}: offsets {result.start}..{result.end}")


@click.command(
    name="remove-sub-chunk",
    help="Remove sub-chunk(s) called NAME at DEPTH.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("file", type=str)
@click.argument("name", type=str)
@click.option("-d", "--depth", type=click.IntRange(min=1), required=True, help="Element depth.")
@click.option(
    "-o",
    "--occurrence",
    type=click.IntRange(min=-1),
    default=-1,
    show_default=True,
    help="Zero-based occurrence (-1 for all).",
)
@apply_option
@parser_flag_options
@click.pass_context
def remove_sub_chunk_command(
    ctx: click.Context,
    *,
    file: str,
    name: str,
    depth: int,
    occurrence: int,
    apply_changes: bool,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Remove the sub-chunk(s) and emit the result."""
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, origin = open_patcher(file, config)
    check_result(
        patcher.parse_patch(ReplaceSubChunkOrLine(""), _sub_chunk_target(name, depth, occurrence))
    )
    emit_patched(ctx, file=file, patcher=patcher, origin=origin, apply_changes=apply_changes)
