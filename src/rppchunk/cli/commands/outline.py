# topmark:header:start
#
#   project      : RppChunk
#   file         : outline.py
#   file_relpath : src/rppchunk/cli/commands/outline.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``outline`` command.

Prints the element tree of a chunk, one element per line, indented by depth.
Skipped opaque regions are listed with ``-v``; offsets are shown with ``-vv``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import (
    build_config,
    check_result,
    get_console,
    get_effective_verbosity,
    open_patcher,
)
from rppchunk.cli.options import CONTEXT_SETTINGS, parser_flag_options
from rppchunk.core.observer import BaseChunkObserver
from rppchunk.core.operations import NotifyLines

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config
    from rppchunk.core.observer import LineEvent, RegionEvent


@dataclass(frozen=True)
class OutlineEntry:
    """One element or skipped region of the outline."""

    depth: int
    label: str
    position: int
    region: bool = False


class OutlineObserver(BaseChunkObserver):
    """Collects element openers and skipped regions."""

    def __init__(self) -> None:
        self.entries: list[OutlineEntry] = []

    def on_element_start(self, event: LineEvent) -> bool:
        label: str = event.line.strip()
        self.entries.append(OutlineEntry(len(event.parents), label, event.position))
        return False

    def on_skipped_region(self, event: RegionEvent) -> bool:
        lines: int = event.text.count("\n")
        label = f"[{event.region.kind.value}: {lines} line(s)]"
        self.entries.append(
            OutlineEntry(len(event.parents) + 1, label, event.region.start, region=True)
        )
        return False


@click.command(
    name="outline",
    help="Print the element tree of a chunk.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("file", type=str)
@parser_flag_options
@click.pass_context
def outline_command(
    ctx: click.Context,
    *,
    file: str,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Print one line per element, indented by depth."""
    console: ClickConsole = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    observer = OutlineObserver()
    patcher, _ = open_patcher(file, config, observer=observer)
    check_result(patcher.parse(NotifyLines()))

    for entry in observer.entries:
        if entry.region and vlevel < 1:
            continue
        indent: str = "  " * (entry.depth - 1)
        label: str = console.styled(entry.label, dim=True) if entry.region else entry.label
        suffix: str = console.styled(f"  @{entry.position}", fg="cyan") if vlevel >= 2 else ""
        console.print(f"{indent}{label}{suffix}")
