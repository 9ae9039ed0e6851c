# topmark:header:start
#
#   project      : RppChunk
#   file         : options.py
#   file_relpath : src/rppchunk/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click options and their resolution.

Commands stay thin by sharing the decorators defined here: verbosity, color,
configuration sources, parser flags, the target filters and ``--apply``.
"""

from __future__ import annotations

import logging
from typing import Callable, ParamSpec, TypeVar

import click

from rppchunk.cli.errors import RppChunkUsageError
from rppchunk.config.logging import TRACE_LEVEL
from rppchunk.constants import ALL_OCCURRENCES

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output level from ``-v``/``-q`` counts.

    ``-v`` gives INFO, ``-vv`` DEBUG and ``-vvv`` TRACE; ``-q`` gives ERROR;
    the default is WARNING.

    Raises:
        RppChunkUsageError: If both flags are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise RppChunkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-color``."""
    return click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` and ``--no-config``."""
    f = click.option(
        "--config",
        "config_files",
        type=click.Path(dir_okay=False),
        multiple=True,
        help="Extra TOML configuration file(s), applied after discovered ones.",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        default=False,
        help="Skip discovery of pyproject.toml and rppchunk.toml in the working directory.",
    )(f)
    return f


def parser_flag_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the tri-state opaque-region flags (unset means "use the configuration")."""
    f = click.option(
        "--process-base64/--skip-base64",
        "process_base64",
        default=None,
        help="Tokenize base64 blob lines instead of copying them untouched.",
    )(f)
    f = click.option(
        "--process-midi/--skip-midi",
        "process_in_project_midi",
        default=None,
        help="Tokenize in-project MIDI events instead of copying them untouched.",
    )(f)
    f = click.option(
        "--process-freeze/--skip-freeze",
        "process_freeze",
        default=None,
        help="Tokenize frozen track data instead of copying it untouched.",
    )(f)
    return f


def target_options(*, default_occurrence: int) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Add the line filters ``-k``, ``-d``, ``-p`` and ``-o``.

    Args:
        default_occurrence (int): Occurrence used when ``-o`` is omitted
            (``-1`` addresses every occurrence).
    """

    def decorator(f: Callable[P, R]) -> Callable[P, R]:
        f = click.option(
            "-k",
            "--keyword",
            required=True,
            help="First token of the targeted lines (e.g. MUTESOLO, or <FXCHAIN).",
        )(f)
        f = click.option(
            "-p",
            "--parent",
            required=True,
            help="Innermost element enclosing the targeted lines (e.g. TRACK).",
        )(f)
        f = click.option(
            "-d",
            "--depth",
            type=click.IntRange(min=1),
            required=True,
            help="Depth of the targeted lines (1 for lines directly in the root element).",
        )(f)
        f = click.option(
            "-o",
            "--occurrence",
            type=click.IntRange(min=ALL_OCCURRENCES),
            default=default_occurrence,
            show_default=True,
            help="Zero-based occurrence to address (-1 for all).",
        )(f)
        return f

    return decorator


def token_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-t/--token`` (zero-based token index)."""
    return click.option(
        "-t",
        "--token",
        type=click.IntRange(min=0),
        required=True,
        help="Zero-based token index (0 is the keyword).",
    )(f)


def apply_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--apply`` (write changes in place instead of printing them)."""
    return click.option(
        "--apply",
        "apply_changes",
        is_flag=True,
        default=False,
        help="Write changes to FILE (default: print the patched chunk and exit 2).",
    )(f)
