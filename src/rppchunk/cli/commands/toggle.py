# topmark:header:start
#
#   project      : RppChunk
#   file         : toggle.py
#   file_relpath : src/rppchunk/cli/commands/toggle.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``toggle`` command.

Flips a 0/1 token of the matched line(s) (any non-zero value becomes 0).
Dry run by default, ``--apply`` writes FILE in place.
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
from rppchunk.core.operations import Target, ToggleToken

if TYPE_CHECKING:
    from rppchunk.config.model import Config


@click.command(
    name="toggle",
    help="Toggle a 0/1 token of the matched line(s).",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Toggle the bypass state of the first FX
  rppchunk toggle --apply track.rpp -k BYPASS -p FXCHAIN -d 2 -o 0 -t 1
""",
)
@click.argument("file", type=str)
@target_options(default_occurrence=-1)
@token_option
@apply_option
@parser_flag_options
@click.pass_context
def toggle_command(
    ctx: click.Context,
    *,
    file: str,
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
    """Toggle the token and emit the result."""
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    patcher, origin = open_patcher(file, config)
    target = Target(depth=depth, parent=parent, keyword=keyword, occurrence=occurrence)
    check_result(patcher.parse_patch(ToggleToken(token), target))
    emit_patched(ctx, file=file, patcher=patcher, origin=origin, apply_changes=apply_changes)
