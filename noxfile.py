# topmark:header:start
#
#   project      : RppChunk
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Nox sessions for RppChunk.

The Python versions come from the ``Programming Language :: Python :: X.Y``
classifiers of ``pyproject.toml``, so that CI and packaging metadata agree.

Sessions:
  - ``tests``: pytest without the slow property tests, per Python version.
  - ``typecheck``: pyright, per Python version.
  - ``properties``: the hypothesis tests marked ``hypothesis_slow``.
  - ``lint``: ruff check and ruff format ``--check``.
  - ``fmt``: ruff format (and ``ruff check --fix``).
  - ``dist``: build sdist and wheel, then ``twine check``.

``nox`` alone runs ``lint`` and ``tests``.
"""

from __future__ import annotations

import re
import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

if sys.version_info >= (3, 11):
    import tomllib

    _load_toml = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _load_toml = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

ROOT: Path = Path(__file__).parent
RUNNING_PYTHON: str = "{}.{}".format(*sys.version_info[:2])

_CLASSIFIER_RE = re.compile(r"^Programming Language :: Python :: (\d+)\.(\d+)$")


def python_versions(pyproject: Path = ROOT / "pyproject.toml") -> list[str]:
    """Return the ``X.Y`` versions declared by the classifiers, oldest first.

    Falls back to the running interpreter when none are declared.
    """
    try:
        project: Any = _load_toml(pyproject.read_text(encoding="utf-8")).get("project", {})
    except FileNotFoundError:
        return [RUNNING_PYTHON]
    found: set[tuple[int, int]] = set()
    for classifier in project.get("classifiers", []):
        m = _CLASSIFIER_RE.match(str(classifier))
        if m:
            found.add((int(m.group(1)), int(m.group(2))))
    return [f"{major}.{minor}" for major, minor in sorted(found)] or [RUNNING_PYTHON]


PYTHONS: list[str] = python_versions()

nox.options.sessions = ["lint", "tests"]
nox.options.default_venv_backend = "uv|virtualenv"


@nox.session(python=PYTHONS)
def tests(session: nox.Session) -> None:
    """Run the test suite, skipping the slow property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "-m", "not hypothesis_slow", *session.posargs)


@nox.session(python=PYTHONS)
def typecheck(session: nox.Session) -> None:
    """Type-check sources and tests with pyright."""
    session.install("-e", ".[dev]")
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session(python=RUNNING_PYTHON)
def properties(session: nox.Session) -> None:
    """Run the hypothesis property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-q", "-m", "hypothesis_slow", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis and formatting check."""
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session
def fmt(session: nox.Session) -> None:
    """Apply ruff fixes and formatting."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", ".")


@nox.session(python=RUNNING_PYTHON)
def dist(session: nox.Session) -> None:
    """Build the distributions and validate their metadata."""
    shutil.rmtree(ROOT / "dist", ignore_errors=True)
    session.install("build", "twine")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", *(str(p) for p in (ROOT / "dist").glob("*")))
