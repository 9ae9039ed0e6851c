# topmark:header:start
#
#   project      : RppChunk
#   file         : model.py
#   file_relpath : src/rppchunk/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable snapshot consumed by the scan engine and the
      commit controller.
    - `MutableConfig`: a mutable builder used while merging layers; it can be
      frozen into `Config` and thawed back for edits.

Layers, lowest precedence first:
    1. runtime defaults (`rppchunk.config.io.load_defaults_dict`)
    2. ``[tool.rppchunk]`` in ``pyproject.toml`` (discovery directory)
    3. ``rppchunk.toml`` (discovery directory)
    4. explicit config files, in the order given
    5. overrides (CLI flags or API dicts)

Unset values (``None``) in a higher layer never clear a lower layer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rppchunk.config.io import (
    get_bool_value_or_none_checked,
    get_positive_int_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from rppchunk.config.keys import Toml
from rppchunk.config.logging import get_logger
from rppchunk.constants import (
    DEFAULT_TOML_CONFIG_NAME,
    MAX_CHUNK_LINE_LENGTH,
    PYPROJECT_TOML_NAME,
)
from rppchunk.core.diagnostics import Diagnostic, DiagnosticLog

if TYPE_CHECKING:
    from rppchunk.config.io import TomlTable
    from rppchunk.config.logging import RppChunkLogger

# ArgsLike: generic mapping accepted by the override layer (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: RppChunkLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        process_base64 (bool): Tokenize base64 blob lines instead of skipping them.
        process_in_project_midi (bool): Tokenize in-project MIDI events instead of
            skipping them.
        process_freeze (bool): Tokenize frozen track sub-chunks instead of skipping them.
        max_line_length (int): Lines longer than this are truncated for tokenization.
        wants_minimal_state (bool): Ask host origins for minimal states when reading.
            Minimal states must not be written back.
        auto_commit (bool): Commit pending updates when a patcher is closed.
        config_files (tuple[Path, ...]): Config sources that contributed to this snapshot.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading.
    """

    process_base64: bool
    process_in_project_midi: bool
    process_freeze: bool
    max_line_length: int

    wants_minimal_state: bool
    auto_commit: bool

    config_files: tuple[Path, ...]
    diagnostics: tuple[Diagnostic, ...]

    def to_toml_dict(self) -> TomlTable:
        """Convert this Config into a TOML-serializable dict (export only)."""
        return {
            Toml.SECTION_PARSER: {
                Toml.KEY_PROCESS_BASE64: self.process_base64,
                Toml.KEY_PROCESS_IN_PROJECT_MIDI: self.process_in_project_midi,
                Toml.KEY_PROCESS_FREEZE: self.process_freeze,
                Toml.KEY_MAX_LINE_LENGTH: self.max_line_length,
            },
            Toml.SECTION_STATE: {
                Toml.KEY_WANTS_MINIMAL_STATE: self.wants_minimal_state,
                Toml.KEY_AUTO_COMMIT: self.auto_commit,
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            process_base64=self.process_base64,
            process_in_project_midi=self.process_in_project_midi,
            process_freeze=self.process_freeze,
            max_line_length=self.max_line_length,
            wants_minimal_state=self.wants_minimal_state,
            auto_commit=self.auto_commit,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    All option fields default to ``None`` ("not set by this layer") so that
    `merge_with` can tell explicit values from absent ones. `freeze` resolves
    whatever is still unset to the runtime defaults.
    """

    process_base64: bool | None = None
    process_in_project_midi: bool | None = None
    process_freeze: bool | None = None
    max_line_length: int | None = None

    wants_minimal_state: bool | None = None
    auto_commit: bool | None = None

    config_files: list[Path] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable Config."""
        return Config(
            process_base64=bool(self.process_base64),
            process_in_project_midi=bool(self.process_in_project_midi),
            process_freeze=bool(self.process_freeze),
            max_line_length=self.max_line_length or MAX_CHUNK_LINE_LENGTH,
            wants_minimal_state=bool(self.wants_minimal_state),
            auto_commit=True if self.auto_commit is None else self.auto_commit,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics.items),
        )

    # ---------------------------- Loaders ----------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated from the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: Path | None = None) -> MutableConfig:
        """Build a layer from a parsed TOML table.

        Unknown sections are reported as info diagnostics; wrongly typed values
        are reported as warnings and left unset.

        Args:
            data (TomlTable): Parsed TOML content (already unwrapped from
                ``[tool.rppchunk]`` for ``pyproject.toml``).
            source (Path | None): File the data came from, for provenance.

        Returns:
            MutableConfig: The layer.
        """
        diagnostics = DiagnosticLog()
        where_prefix: str = source.name if source is not None else "<defaults>"

        for section in data:
            if section not in (Toml.SECTION_PARSER, Toml.SECTION_STATE):
                diagnostics.add_info(f"Ignoring unknown section [{section}] in {where_prefix}")

        parser: TomlTable = get_table_value(data, Toml.SECTION_PARSER)
        state: TomlTable = get_table_value(data, Toml.SECTION_STATE)
        where_parser = f"{where_prefix}:{Toml.SECTION_PARSER}"
        where_state = f"{where_prefix}:{Toml.SECTION_STATE}"

        layer = cls(
            process_base64=get_bool_value_or_none_checked(
                parser, Toml.KEY_PROCESS_BASE64, where=where_parser, diagnostics=diagnostics
            ),
            process_in_project_midi=get_bool_value_or_none_checked(
                parser,
                Toml.KEY_PROCESS_IN_PROJECT_MIDI,
                where=where_parser,
                diagnostics=diagnostics,
            ),
            process_freeze=get_bool_value_or_none_checked(
                parser, Toml.KEY_PROCESS_FREEZE, where=where_parser, diagnostics=diagnostics
            ),
            max_line_length=get_positive_int_or_none_checked(
                parser, Toml.KEY_MAX_LINE_LENGTH, where=where_parser, diagnostics=diagnostics
            ),
            wants_minimal_state=get_bool_value_or_none_checked(
                state, Toml.KEY_WANTS_MINIMAL_STATE, where=where_state, diagnostics=diagnostics
            ),
            auto_commit=get_bool_value_or_none_checked(
                state, Toml.KEY_AUTO_COMMIT, where=where_state, diagnostics=diagnostics
            ),
            diagnostics=diagnostics,
        )
        if source is not None:
            layer.config_files.append(source)
        return layer

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig:
        """Load a layer from ``rppchunk.toml`` or ``pyproject.toml``."""
        logger.debug("Loading config layer from %s", path)
        return cls.from_toml_dict(load_toml_dict(path), source=path)

    @classmethod
    def from_overrides(cls, args: ArgsLike) -> MutableConfig:
        """Build a layer from a flat mapping of option names (``None`` means unset)."""
        layer = cls()
        for name in (
            Toml.KEY_PROCESS_BASE64,
            Toml.KEY_PROCESS_IN_PROJECT_MIDI,
            Toml.KEY_PROCESS_FREEZE,
            Toml.KEY_MAX_LINE_LENGTH,
            Toml.KEY_WANTS_MINIMAL_STATE,
            Toml.KEY_AUTO_COMMIT,
        ):
            value: Any = args.get(name)
            if value is not None:
                setattr(layer, name, value)
        return layer

    # ---------------------------- Merge ----------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Overlay ``other`` on top of this builder (in place) and return self.

        Values set in ``other`` win; unset values keep what this builder has.
        Provenance and diagnostics are accumulated.
        """
        for name in (
            "process_base64",
            "process_in_project_midi",
            "process_freeze",
            "max_line_length",
            "wants_minimal_state",
            "auto_commit",
        ):
            value: Any = getattr(other, name)
            if value is not None:
                setattr(self, name, value)
        self.config_files.extend(other.config_files)
        self.diagnostics.extend(other.diagnostics)
        return self

    @classmethod
    def discover(cls, directory: Path) -> list[Path]:
        """Return config files found in ``directory``, lowest precedence first."""
        found: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, DEFAULT_TOML_CONFIG_NAME):
            candidate: Path = directory / name
            if candidate.is_file():
                found.append(candidate)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        directory: Path | None = None,
        extra_config_files: Iterable[Path] = (),
        overrides: ArgsLike | None = None,
    ) -> MutableConfig:
        """Merge defaults, discovered files, explicit files and overrides.

        Args:
            directory (Path | None): Where to discover ``pyproject.toml`` and
                ``rppchunk.toml``; ``None`` skips discovery.
            extra_config_files (Iterable[Path]): Explicit files, applied in order.
            overrides (ArgsLike | None): Highest precedence values.

        Returns:
            MutableConfig: The merged builder (call `freeze` to use it).
        """
        draft: MutableConfig = cls.from_defaults()
        paths: list[Path] = cls.discover(directory) if directory is not None else []
        paths.extend(Path(p) for p in extra_config_files)
        for path in paths:
            draft.merge_with(cls.from_toml_file(path))
        if overrides:
            draft.merge_with(cls.from_overrides(overrides))
        logger.debug("Merged config from %d file(s): %s", len(paths), paths)
        return draft
