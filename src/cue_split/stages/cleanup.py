"""Cleanup stage -- undo a run's side effects after an interrupt.

Also owns cue-sheet restoration, which every run does on the way out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from loguru import logger

from ..models import ResolvedPaths, Stage, StageStatus

if TYPE_CHECKING:
    from ..manifest import RunManifest

log = logger.bind(stage="cleanup")


def restore_cue_backup(paths: ResolvedPaths, manifest: RunManifest) -> bool:
    """Write ``<cue>_original`` back over the cue sheet and delete it.

    Only a backup the normalizer made during this run is restored. Returns
    True if a backup was restored.
    """
    backup = paths.backup_cue
    if not manifest.owns_backup or not backup.exists():
        return False
    paths.cue_file.write_bytes(backup.read_bytes())
    backup.unlink()
    manifest.owns_backup = False
    log.debug(f"Restored {paths.cue_file.name} from {backup.name}")
    return True


def run(paths: ResolvedPaths, manifest: RunManifest) -> None:
    """Remove files this run created and restore the original cue sheet.

    Only files attributed to this run by the manifest are deleted, and
    never one named like the source audio image.
    """
    manifest.set_stage(Stage.CLEANUP, StageStatus.RUNNING)

    removed = 0
    for path in manifest.owned_files():
        path.unlink(missing_ok=True)
        manifest.forget(path)
        removed += 1
        log.debug(f"Removed {path.name}")

    restored = restore_cue_backup(paths, manifest)

    manifest.set_stage(Stage.CLEANUP, StageStatus.COMPLETED)
    summary = f"  CLEANUP: removed {removed} files"
    if restored:
        summary += f", restored {paths.cue_file.name}"
    click.echo(summary, err=True)
