# topmark:header:start
#
#   project      : RppChunk
#   file         : errors.py
#   file_relpath : src/rppchunk/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the RppChunk CLI.

Raise these from commands to stop with a standardized message and exit code.
When a project console is present in the Click context the message is printed
through it; otherwise Click's default error display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from rppchunk.cli.exit_codes import ExitCode


class RppChunkError(click.ClickException):
    """Base class for RppChunk CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message (colors are applied in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error through the project console when available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: Any = getattr(ctx, "obj", None)
        console: Any = obj.get("console") if isinstance(obj, dict) else None
        if console is not None:
            console.error(self.format_message())
            return
        super().show(file)


class RppChunkUsageError(RppChunkError):
    """Invalid flags, arguments or operation parameters."""

    exit_code = ExitCode.USAGE_ERROR


class RppChunkDataError(RppChunkError):
    """Input that is not a usable chunk (undecodable, empty or malformed)."""

    exit_code = ExitCode.DATA_ERROR


class RppChunkConfigError(RppChunkError):
    """Missing or unreadable configuration file."""

    exit_code = ExitCode.CONFIG_ERROR


class RppChunkFileNotFoundError(RppChunkError):
    """Input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class RppChunkPermissionDeniedError(RppChunkError):
    """Insufficient permissions to read or write a file."""

    exit_code = ExitCode.PERMISSION_DENIED


class RppChunkIOError(RppChunkError):
    """Other I/O errors while reading or writing a file."""

    exit_code = ExitCode.IO_ERROR
