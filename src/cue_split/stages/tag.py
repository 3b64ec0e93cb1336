"""Tag stage -- copies cue-sheet metadata onto the split tracks via cuetag."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..errors import ExternalToolError, StageError
from ..manifest import list_track_files
from ..models import ResolvedPaths, RunConfig, Stage, StageStatus
from ..tools import copy_cue_tags

if TYPE_CHECKING:
    from ..config import SplitterConfig
    from ..manifest import RunManifest

log = logger.bind(stage="tag")


def _natural_sort_key(p: Path) -> list:
    """Extract numeric/text parts for natural sorting of filenames."""
    return [int(c) if c.isdigit() else c.lower() for c in re.split(r"(\d+)", p.name)]


def collect_tracks(paths: ResolvedPaths) -> list[Path]:
    """Numbered FLACs in the root dir in track order, minus the source image."""
    tracks = [
        p
        for p in list_track_files(paths.root_dir)
        if p.name != paths.audio_file.name
    ]
    return sorted(tracks, key=_natural_sort_key)


def run(
    paths: ResolvedPaths,
    run_config: RunConfig,
    config: SplitterConfig,
    manifest: RunManifest,
) -> None:
    """Write cue-sheet metadata into every numbered FLAC in the root dir.

    cuetag assigns tags positionally, so files are passed in track order.
    """
    manifest.set_stage(Stage.TAG, StageStatus.RUNNING)

    tracks = collect_tracks(paths)
    if not tracks:
        manifest.set_stage(Stage.TAG, StageStatus.FAILED)
        raise StageError(f"No track files to tag in {paths.root_dir}", stage="tag")

    log.info(f"Tagging {len(tracks)} tracks from {paths.cue_file.name}")
    try:
        copy_cue_tags(config, paths.cue_file, tracks)
    except ExternalToolError:
        manifest.set_stage(Stage.TAG, StageStatus.FAILED)
        raise

    manifest.set_stage(Stage.TAG, StageStatus.COMPLETED)
    click.echo(f"  TAG: {len(tracks)} tracks tagged")
