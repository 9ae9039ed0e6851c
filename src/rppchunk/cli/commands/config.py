# topmark:header:start
#
#   project      : RppChunk
#   file         : config.py
#   file_relpath : src/rppchunk/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk ``config`` command.

Prints the effective configuration (defaults, discovered files, ``--config``
files and flags merged) as TOML, followed by its provenance when verbose.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rppchunk.cli.cmd_common import build_config, get_console, get_effective_verbosity
from rppchunk.cli.options import CONTEXT_SETTINGS, parser_flag_options
from rppchunk.config.io import to_toml

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config


@click.command(
    name="config",
    help="Show the effective configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@parser_flag_options
@click.pass_context
def config_command(
    ctx: click.Context,
    *,
    process_base64: bool | None,
    process_in_project_midi: bool | None,
    process_freeze: bool | None,
) -> None:
    """Dump the merged configuration."""
    console: ClickConsole = get_console(ctx)
    config: Config = build_config(
        ctx,
        process_base64=process_base64,
        process_in_project_midi=process_in_project_midi,
        process_freeze=process_freeze,
    )
    console.print(to_toml(config.to_toml_dict()), nl=False)
    if get_effective_verbosity(ctx) > 0:
        sources: str = ", ".join(str(p) for p in config.config_files) or "defaults only"
        console.info(f"# sources: {sources}")
