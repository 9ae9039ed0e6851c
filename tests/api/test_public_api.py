# topmark:header:start
#
#   project      : RppChunk
#   file         : test_public_api.py
#   file_relpath : tests/api/test_public_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public API surface checks."""

from __future__ import annotations

import rppchunk


def test_all_names_are_exported() -> None:
    """Every name in ``__all__`` resolves on the package."""
    missing = [name for name in rppchunk.__all__ if not hasattr(rppchunk, name)]
    assert missing == []


def test_version_is_a_string() -> None:
    """The package exposes its version."""
    assert isinstance(rppchunk.__version__, str)
    assert rppchunk.__version__
