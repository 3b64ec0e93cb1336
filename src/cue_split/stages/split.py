"""Split stage -- wraps shnsplit, transcoding APE images to FLAC first."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from loguru import logger

from ..errors import ExternalToolError
from ..models import (
    OUTPUT_FORMAT,
    TRACK_NAME_TEMPLATE,
    ResolvedPaths,
    RunConfig,
    Stage,
    StageStatus,
)
from ..tools import split_by_cue, transcode_to_flac

if TYPE_CHECKING:
    from ..config import SplitterConfig
    from ..manifest import RunManifest

log = logger.bind(stage="split")


def run(
    paths: ResolvedPaths,
    run_config: RunConfig,
    config: SplitterConfig,
    manifest: RunManifest,
) -> None:
    """Produce one numbered FLAC per cue-sheet track in ``paths.root_dir``.

    1. Transcode APE sources to an intermediate FLAC (same base name)
    2. Snapshot existing track files so new outputs can be told apart
    3. Run the splitter with the cue sheet and naming template
    4. Record the new track files, drop the intermediate
    """
    manifest.set_stage(Stage.SPLIT, StageStatus.RUNNING)

    source = paths.audio_file
    intermediate = None
    if paths.needs_transcode:
        intermediate = paths.intermediate_flac
        log.info(f"Transcoding {source.name} -> {intermediate.name}")
        manifest.record(intermediate)
        try:
            transcode_to_flac(config, source, intermediate)
        except ExternalToolError:
            # A partial transcode would trip the single-audio-file check next run
            intermediate.unlink(missing_ok=True)
            manifest.forget(intermediate)
            manifest.set_stage(Stage.SPLIT, StageStatus.FAILED)
            raise
        source = intermediate

    manifest.snapshot_tracks()
    log.info(f"Splitting {source.name} with {paths.cue_file.name}")
    try:
        split_by_cue(
            config,
            cue_file=paths.cue_file,
            audio_file=source,
            output_dir=paths.root_dir,
            output_format=OUTPUT_FORMAT,
            name_template=TRACK_NAME_TEMPLATE,
        )
    except ExternalToolError:
        if intermediate is not None:
            intermediate.unlink(missing_ok=True)
            manifest.forget(intermediate)
        manifest.set_stage(Stage.SPLIT, StageStatus.FAILED)
        raise

    tracks = manifest.record_new_tracks()
    log.debug(f"Splitter produced {len(tracks)} track files")

    if intermediate is not None:
        intermediate.unlink(missing_ok=True)
        manifest.forget(intermediate)
        log.debug(f"Removed intermediate {intermediate.name}")

    manifest.set_stage(Stage.SPLIT, StageStatus.COMPLETED)
    click.echo(f"  SPLIT: {paths.audio_file.name} -> {len(tracks)} tracks")
