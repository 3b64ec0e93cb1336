"""Core enums, constants, and run-scoped value types for cue-split.

Enums:
    Stage        -- Individual pipeline stage (validate through prompt).
    StageStatus  -- Stage execution state (pending, running, completed, failed, skipped).

Types:
    RunConfig      -- What the user asked for (target directory, cyrillic fix).
    ResolvedPaths  -- What the validator found on disk (cue sheet, audio file, root).
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Stage(StrEnum):
    VALIDATE = "validate"
    NORMALIZE = "normalize"
    SPLIT = "split"
    TAG = "tag"
    CLEANUP = "cleanup"
    PROMPT = "prompt"


class StageStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


# Stages run by the runner after validation, in order
STAGE_ORDER: list[Stage] = [
    Stage.NORMALIZE,
    Stage.SPLIT,
    Stage.TAG,
]

AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".wav",
        ".wv",
        ".flac",
        ".ape",
    }
)

# Extensions the splitter can't read directly -- transcoded to FLAC first
TRANSCODE_EXTENSIONS: frozenset[str] = frozenset({".ape"})

CUE_EXTENSION = ".cue"

# Substrings that must appear (case-insensitive) anywhere in the cue sheet's raw text
CUE_FORMAT_MARKERS: tuple[str, ...] = (".ape", ".flac", ".wav", ".wv")

FIRST_TRACK_AT_ZERO = "INDEX 01 00:00:00"

# shnsplit naming template: "<n>. <performer> - <title>.flac"
TRACK_NAME_TEMPLATE = "%n. %p - %t"
OUTPUT_FORMAT = "flac"

BACKUP_SUFFIX = "_original"
CONVERTED_SUFFIX = "_cyr"


def is_track_file(name: str) -> bool:
    """True for splitter output names: starts with a digit, ends with .flac."""
    return name[:1].isdigit() and name.endswith(".flac")


@dataclass(frozen=True)
class RunConfig:
    """Parsed command-line intent. Built once by the CLI, never mutated."""

    target_dir: Path
    cyrillic_fix: bool = False


@dataclass(frozen=True)
class ResolvedPaths:
    """Files the validator located for this run."""

    cue_file: Path
    audio_file: Path
    root_dir: Path

    @property
    def backup_cue(self) -> Path:
        return self.cue_file.with_name(self.cue_file.name + BACKUP_SUFFIX)

    @property
    def converted_cue(self) -> Path:
        return self.cue_file.with_name(self.cue_file.name + CONVERTED_SUFFIX)

    @property
    def intermediate_flac(self) -> Path:
        """Lossless transcode target for sources the splitter can't read."""
        return self.audio_file.with_suffix(".flac")

    @property
    def needs_transcode(self) -> bool:
        return self.audio_file.suffix.lower() in TRANSCODE_EXTENSIONS
