# topmark:header:start
#
#   project      : RppChunk
#   file         : count.py
#   file_relpath : src/rppchunk/cli/commands/count.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``count`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import build_config, check_result, get_console, open_patcher
from rppchunk.cli.options import CONTEXT_SETTINGS, parser_flag_options
from rppchunk.core.operations import CountKeyword, Target

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config
    from rppchunk.core.results import ScanResult


@click.command(
    name="count",
    help="Count the lines starting with KEYWORD under PARENT at DEPTH.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Number of FX in a track's FX chain
  rppchunk count track.rpp -k FXID -p FXCHAIN -d 2
""",
)
@click.argument("file", type=str)
@click.option("-k", "--keyword", required=True, help="First token of the counted lines.")
@click.option("-p", "--parent", required=True, help="Innermost element enclosing them.")
@click.option("-d", "--depth", type=click.IntRange(min=1), required=True, help="Their depth.")
@parser_flag_options
@click.pass_context
def count_command(
    ctx: click.Context,
    *,
    file: str,
    keyword: str,
    parent: str,
    depth: int,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Print the number of matching lines."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, _ = open_patcher(file, config)
    result: ScanResult = check_result(
        patcher.parse(CountKeyword(), Target(depth=depth, parent=parent, keyword=keyword))
    )
    console.print(str(result.count))
