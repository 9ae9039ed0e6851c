# topmark:header:start
#
#   project      : RppChunk
#   file         : set.py
#   file_relpath : src/rppchunk/cli/commands/set.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``set`` command.

Writes VALUE into a token of the matched line(s). Lines already holding VALUE
are left alone. Performs a dry run by default: the patched chunk is printed
and the command exits with 2; ``--apply`` writes FILE in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import build_config, check_result, emit_patched, open_patcher
from rppchunk.cli.options import (
    CONTEXT_SETTINGS,
    apply_option,
    parser_flag_options,
    target_options,
    token_option,
)
from rppchunk.core.operations import SetToken, Target

if TYPE_CHECKING:
    from rppchunk.config.model import Config


@click.command(
    name="set",
    help="Set a token of the matched line(s) to VALUE.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Rename the first track of a chunk file (dry run)
  rppchunk set track.rpp -k NAME -p TRACK -d 1 -o 0 -t 1 "Lead vocals"

  # Bypass every FX, in place
  rppchunk set --apply track.rpp -k BYPASS -p FXCHAIN -d 2 -t 1 1
""",
)
@click.argument("file", type=str)
@click.argument("value", type=str)
@target_options(default_occurrence=-1)
@token_option
@apply_option
@parser_flag_options
@click.pass_context
def set_command(
    ctx: click.Context,
    *,
    file: str,
    value: str,
    keyword: str,
    parent: str,
    depth: int,
    occurrence: int,
    token: int,
    apply_changes: bool,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Patch the token and emit the result."""
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, origin = open_patcher(file, config)
    target = Target(depth=depth, parent=parent, keyword=keyword, occurrence=occurrence)
    check_result(patcher.parse_patch(SetToken(token, value), target))
    emit_patched(ctx, file=file, patcher=patcher, origin=origin, apply_changes=apply_changes)
