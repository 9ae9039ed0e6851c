# topmark:header:start
#
#   project      : RppChunk
#   file         : __main__.py
#   file_relpath : src/rppchunk/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the RppChunk CLI with ``python -m rppchunk``."""

from __future__ import annotations

from rppchunk.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="rppchunk")
