# topmark:header:start
#
#   project      : RppChunk
#   file         : cmd_common.py
#   file_relpath : src/rppchunk/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plumbing shared by the CLI commands.

The helpers here resolve the configuration, open a patcher on a file, turn
scan results into exit codes and emit patched chunks. Policy (what a command
prints) stays in the commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from rppchunk.cli.errors import RppChunkConfigError, RppChunkDataError, RppChunkUsageError
from rppchunk.cli.exit_codes import ExitCode
from rppchunk.cli.io import is_stdin, read_input, write_output
from rppchunk.config.logging import get_logger
from rppchunk.config.model import MutableConfig
from rppchunk.core.diagnostics import DiagnosticLevel
from rppchunk.core.results import ResultKind
from rppchunk.origins import StringOrigin
from rppchunk.patcher import ChunkParserPatcher

if TYPE_CHECKING:
    from rppchunk.cli.console import ClickConsole
    from rppchunk.config.model import Config
    from rppchunk.core.observer import ChunkObserver
    from rppchunk.core.results import ScanResult

logger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console created by the group callback."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the number of ``-v`` flags (negative for ``-q``)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity", 0))


def build_config(ctx: click.Context, **overrides: Any) -> Config:
    """Merge configuration layers for this invocation.

    Discovery happens in the working directory unless ``--no-config`` was
    given; ``--config`` files are applied on top, then ``overrides`` (unset
    values are ignored). Warnings collected while loading are printed.

    Raises:
        RppChunkConfigError: If a ``--config`` file does not exist.
    """
    ctx.ensure_object(dict)
    extra: list[Path] = [Path(p) for p in ctx.obj.get("config_files", ())]
    for path in extra:
        if not path.is_file():
            raise RppChunkConfigError(f"Config file not found: {path}")

    draft: MutableConfig = MutableConfig.load_merged(
        directory=None if ctx.obj.get("no_config") else Path.cwd(),
        extra_config_files=extra,
        overrides=overrides,
    )
    config: Config = draft.freeze()

    console: ClickConsole = get_console(ctx)
    for diag in config.diagnostics:
        if diag.level is DiagnosticLevel.INFO and get_effective_verbosity(ctx) <= 0:
            continue
        console.info(console.paint(f"config: {diag}", diag.level.color))
    return config


def open_patcher(
    file: str,
    config: Config,
    *,
    observer: ChunkObserver | None = None,
) -> tuple[ChunkParserPatcher, StringOrigin]:
    """Read ``file`` and attach a manual-commit patcher to its text."""
    origin = StringOrigin(read_input(file))
    patcher = ChunkParserPatcher(origin, config=config, auto_commit=False, observer=observer)
    return patcher, origin


def check_result(result: ScanResult) -> ScanResult:
    """Raise the CLI error matching a failed scan.

    Raises:
        RppChunkUsageError: For INVALID results.
        RppChunkDataError: For NO_CHUNK and MALFORMED results.
    """
    if result.kind is ResultKind.INVALID:
        raise RppChunkUsageError(f"Invalid operation: {result.reason}")
    if result.kind is ResultKind.NO_CHUNK:
        raise RppChunkDataError("No chunk: the input is empty")
    if result.kind is ResultKind.MALFORMED:
        raise RppChunkDataError(f"Malformed chunk: {result.reason}")
    return result


def emit_patched(
    ctx: click.Context,
    *,
    file: str,
    patcher: ChunkParserPatcher,
    origin: StringOrigin,
    apply_changes: bool,
) -> None:
    """Commit pending updates and emit the result.

    - Nothing pending: report it (with ``-v``) and exit 0.
    - Dry run: print the patched chunk to stdout and exit ``WOULD_CHANGE``.
    - ``--apply``: write ``file`` in place (stdout for ``-``) and exit 0.
    """
    console: ClickConsole = get_console(ctx)
    updates: int = patcher.updates
    if updates == 0:
        if get_effective_verbosity(ctx) > 0:
            console.info(f"{file}: unchanged")
        return

    patcher.commit()
    if apply_changes and not is_stdin(file):
        write_output(file, origin.text)
        if get_effective_verbosity(ctx) >= 0:
            console.info(f"{file}: {updates} update(s) written")
        return

    console.print(origin.text, nl=False)
    if not apply_changes:
        if get_effective_verbosity(ctx) > 0:
            console.info(f"{file}: {updates} update(s) pending (use --apply to write)")
        ctx.exit(ExitCode.WOULD_CHANGE)
