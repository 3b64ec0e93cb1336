"""Validation stage -- locates the cue sheet and audio image, checks the environment.

Everything here is read-only: any PreconditionError leaves the directory
exactly as it was.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..cuesheet import (
    has_supported_format,
    looks_cyrillic,
    pregap_lines,
    read_cue_text,
    starts_at_zero,
)
from ..errors import PreconditionError
from ..models import AUDIO_EXTENSIONS, CUE_EXTENSION, ResolvedPaths, RunConfig
from ..tools import check_tools

if TYPE_CHECKING:
    from ..config import SplitterConfig

log = logger.bind(stage="validate")


def _find_files(root: Path, extensions: frozenset[str]) -> list[Path]:
    """Files anywhere under ``root`` whose suffix (any case) is in ``extensions``."""
    return sorted(
        f for f in root.rglob("*") if f.is_file() and f.suffix.lower() in extensions
    )


def find_cue_sheet(target_dir: Path) -> Path:
    cue_files = _find_files(target_dir, frozenset({CUE_EXTENSION}))
    if not cue_files:
        raise PreconditionError(f"No cue sheets found in {target_dir}")
    if len(cue_files) > 1:
        raise PreconditionError(
            "Multiple cue sheets found; remove extras and retry",
            details=[str(f.relative_to(target_dir)) for f in cue_files],
        )
    return cue_files[0]


def check_cue_sheet(cue_file: Path) -> None:
    """Reject sheets with no supported FILE format or with a track-1 pre-gap."""
    text = read_cue_text(cue_file)

    if not has_supported_format(text):
        raise PreconditionError(
            f"Unsupported audio format in {cue_file.name} "
            "(expected .ape, .flac, .wav or .wv)"
        )

    if not starts_at_zero(text):
        raise PreconditionError(
            f"Pre-gap detected in {cue_file.name}: track 1 does not start at 00:00:00",
            details=pregap_lines(text)
            + [
                "The splitter would write the pre-gap as a separate file.",
                "Edit the cue sheet so track 1 has INDEX 01 00:00:00, then retry.",
            ],
        )


def find_audio_file(target_dir: Path) -> Path:
    audio_files = _find_files(target_dir, AUDIO_EXTENSIONS)
    if len(audio_files) > 1:
        raise PreconditionError(
            "Multiple audio files found; remove extras and retry",
            details=[str(f.relative_to(target_dir)) for f in audio_files],
        )
    if not audio_files:
        raise PreconditionError(f"No audio file found in {target_dir}")
    return audio_files[0]


def run(run_config: RunConfig, config: SplitterConfig) -> ResolvedPaths:
    """Resolve the cue sheet and audio image for ``run_config.target_dir``.

    Raises PreconditionError on any check failure; nothing is modified.
    """
    target_dir = run_config.target_dir
    if not target_dir.is_dir():
        raise PreconditionError(f"Not a directory: {target_dir}")

    cue_file = find_cue_sheet(target_dir)
    log.debug(f"Cue sheet: {cue_file}")
    check_cue_sheet(cue_file)

    audio_file = find_audio_file(target_dir)
    log.debug(f"Audio file: {audio_file}")

    check_tools(config)

    if not run_config.cyrillic_fix and looks_cyrillic(cue_file):
        log.warning(
            f"{cue_file.name} looks like a Cyrillic 8-bit encoding; "
            "re-run with --cyrillic if tags come out garbled"
        )

    paths = ResolvedPaths(
        cue_file=cue_file,
        audio_file=audio_file,
        root_dir=cue_file.parent,
    )
    click.echo(f"  VALIDATE: {cue_file.name} + {audio_file.name}")
    return paths
