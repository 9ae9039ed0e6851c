# topmark:header:start
#
#   project      : RppChunk
#   file         : main.py
#   file_relpath : src/rppchunk/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk command-line entry point.

Group-level options (verbosity, color, configuration sources) are resolved once
and stored in ``ctx.obj``; subcommands read them through
`rppchunk.cli.cmd_common`. Internal logging is configured from the
``RPPCHUNK_LOG_LEVEL`` environment variable, independently from ``-v``/``-q``.
"""

from __future__ import annotations

import click

from rppchunk.cli.commands.config import config_command
from rppchunk.cli.commands.count import count_command
from rppchunk.cli.commands.get import get_command
from rppchunk.cli.commands.outline import outline_command
from rppchunk.cli.commands.set import set_command
from rppchunk.cli.commands.strip_ids import strip_ids_command
from rppchunk.cli.commands.sub_chunk import remove_sub_chunk_command, sub_chunk_command
from rppchunk.cli.commands.toggle import toggle_command
from rppchunk.cli.commands.version import version_command
from rppchunk.cli.console import ClickConsole
from rppchunk.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_verbosity,
)
from rppchunk.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_files: tuple[str, ...],
    no_config: bool,
) -> None:
    """Initialize shared state on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_files (tuple[str, ...]): Extra configuration files.
        no_config (bool): Skip configuration discovery.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity (raises if -v and -q are combined)
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity"] = verbose if verbose else -quiet

    # Internal logging via env
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)
    ctx.obj["config_files"] = tuple(config_files)
    ctx.obj["no_config"] = no_config


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="RppChunk: inspect and patch REAPER state chunks.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_files: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the RppChunk CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_files=config_files,
        no_config=no_config,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'rppchunk outline FILE' to see the structure of a chunk.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(outline_command)

cli.add_command(count_command)

cli.add_command(get_command)

cli.add_command(set_command)

cli.add_command(toggle_command)

cli.add_command(sub_chunk_command)

cli.add_command(remove_sub_chunk_command)

cli.add_command(strip_ids_command)

if __name__ == "__main__":
    cli()
