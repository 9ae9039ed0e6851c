# topmark:header:start
#
#   project      : RppChunk
#   file         : get.py
#   file_relpath : src/rppchunk/cli/commands/get.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``get`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import (
    build_config,
    check_result,
    get_console,
    get_effective_verbosity,
    open_patcher,
)
from rppchunk.cli.errors import RppChunkError
from rppchunk.cli.options import CONTEXT_SETTINGS, parser_flag_options, target_options, token_option
from rppchunk.core.operations import GetToken, Target
from rppchunk.core.results import ResultKind

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config
    from rppchunk.core.results import ScanResult


@click.command(
    name="get",
    help="Print a token of a matched line.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Bypass state of the second FX of a track
  rppchunk get track.rpp -k BYPASS -p FXCHAIN -d 2 -o 1 -t 1
""",
)
@click.argument("file", type=str)
@target_options(default_occurrence=0)
@token_option
@parser_flag_options
@click.pass_context
def get_command(
    ctx: click.Context,
    *,
    file: str,
    keyword: str,
    parent: str,
    depth: int,
    occurrence: int,
    token: int,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Print the token text (exit 1 if the line is not found)."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, _ = open_patcher(file, config)
    target = Target(depth=depth, parent=parent, keyword=keyword, occurrence=occurrence)
    result: ScanResult = check_result(patcher.parse(GetToken(token), target))
    if result.kind is not ResultKind.FOUND:
        raise RppChunkError(f"{keyword} (occurrence {occurrence}) not found under {parent}")
    console.print(result.value or "")
    if get_effective_verbosity(ctx) > 1:
        console.info(
            console.paint(f"{keyword} {result.kind.value} at offset {result.start}", result.kind.color)
        )
