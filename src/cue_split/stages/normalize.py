"""Normalize stage -- rewrite a legacy-encoded cue sheet to UTF-8 in place.

The original is kept as ``<cue>_original`` and written back at end of run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from loguru import logger

from ..errors import ExternalToolError, PreconditionError
from ..models import ResolvedPaths, RunConfig, Stage, StageStatus
from ..tools import convert_encoding

if TYPE_CHECKING:
    from ..config import SplitterConfig
    from ..manifest import RunManifest

log = logger.bind(stage="normalize")


def run(
    paths: ResolvedPaths,
    run_config: RunConfig,
    config: SplitterConfig,
    manifest: RunManifest,
) -> None:
    """Convert the cue sheet with the encoding converter, keeping a backup.

    On converter failure the cue sheet is untouched and no backup exists.
    """
    if not run_config.cyrillic_fix:
        manifest.set_stage(Stage.NORMALIZE, StageStatus.SKIPPED)
        return

    manifest.set_stage(Stage.NORMALIZE, StageStatus.RUNNING)

    cue_file = paths.cue_file
    backup = paths.backup_cue
    converted = paths.converted_cue

    # A backup from an aborted run holds the only copy of the original bytes
    if backup.exists():
        manifest.set_stage(Stage.NORMALIZE, StageStatus.FAILED)
        raise PreconditionError(
            f"Backup {backup.name} already exists; refusing to overwrite it",
            details=[
                f"Restore it with: mv '{backup}' '{cue_file}'",
                "or delete it if the cue sheet is already correct.",
            ],
        )

    log.info(
        f"Converting {cue_file.name} from {config.legacy_encoding} "
        f"to {config.target_encoding}"
    )
    manifest.record(converted)
    try:
        convert_encoding(config, cue_file, converted)
    except ExternalToolError:
        converted.unlink(missing_ok=True)
        manifest.forget(converted)
        manifest.set_stage(Stage.NORMALIZE, StageStatus.FAILED)
        raise

    manifest.owns_backup = True
    cue_file.rename(backup)
    converted.rename(cue_file)
    manifest.forget(converted)
    log.debug(f"Backup kept at {backup}")

    manifest.set_stage(Stage.NORMALIZE, StageStatus.COMPLETED)
    click.echo(
        f"  NORMALIZE: {cue_file.name} "
        f"({config.legacy_encoding} -> {config.target_encoding})"
    )
