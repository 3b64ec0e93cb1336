"""Split runner -- orchestrates stage execution for one directory."""

from __future__ import annotations

import click
from loguru import logger

from .config import SplitterConfig
from .errors import CueSplitError, RunInterrupted
from .interrupt import InterruptGuard
from .manifest import RunManifest
from .models import STAGE_ORDER, ResolvedPaths, RunConfig, Stage, StageStatus
from .stages import cleanup, get_stage_runner, prompt, validate

log = logger.bind(stage="runner")


class SplitRunner:
    """Runs validate -> normalize -> split -> tag -> prompt for one directory."""

    def __init__(self, config: SplitterConfig, run_config: RunConfig) -> None:
        self.config = config
        self.run_config = run_config
        self.paths: ResolvedPaths | None = None
        self.manifest: RunManifest | None = None

    def run(self) -> None:
        """Run the whole pipeline.

        Raises PreconditionError before touching anything, ExternalToolError or
        StageError when a stage fails (after restoring the cue sheet), and
        RunInterrupted after cleanup when the user interrupts.

        The resolved paths and the manifest are kept on ``self.paths`` and
        ``self.manifest`` so callers can inspect stage statuses afterwards.
        """
        paths = validate.run(self.run_config, self.config)
        manifest = RunManifest(paths)
        manifest.set_stage(Stage.VALIDATE, StageStatus.COMPLETED)
        self.paths = paths
        self.manifest = manifest

        log.debug(f"Stages: {' -> '.join(s.value for s in STAGE_ORDER)}")

        with InterruptGuard(lambda: cleanup.run(paths, manifest)):
            try:
                for stage in STAGE_ORDER:
                    stage_runner = get_stage_runner(stage)
                    stage_runner(
                        paths=paths,
                        run_config=self.run_config,
                        config=self.config,
                        manifest=manifest,
                    )
            except RunInterrupted:
                raise
            except CueSplitError:
                # Leave outputs for inspection, but give the user their cue sheet back
                if cleanup.restore_cue_backup(paths, manifest):
                    log.info(f"Restored original {paths.cue_file.name}")
                raise

            cleanup.restore_cue_backup(paths, manifest)

        click.echo(f"Done: {paths.audio_file.name} split into {paths.root_dir}")
        prompt.run(paths, self.config, manifest)
