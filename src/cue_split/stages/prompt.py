"""Prompt stage -- offer to delete the source audio image after a good run."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click
from loguru import logger

from ..models import ResolvedPaths, Stage, StageStatus

if TYPE_CHECKING:
    from ..config import SplitterConfig
    from ..manifest import RunManifest

log = logger.bind(stage="prompt")


def _stdin_is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def ask_delete(name: str) -> bool:
    """Read one character; only y/Y means yes."""
    click.echo(f"Delete source file {name}? [y/N] ", nl=False)
    try:
        answer = click.getchar()
    except EOFError:
        answer = ""
    click.echo(answer)
    return answer in ("y", "Y")


def run(
    paths: ResolvedPaths,
    config: SplitterConfig,
    manifest: RunManifest,
) -> bool:
    """Ask whether to delete the source audio image. Returns True if deleted.

    Non-interactive sessions and --no-prompt answer "no".
    """
    if config.no_prompt or not _stdin_is_interactive():
        log.debug("Non-interactive: keeping source file")
        manifest.set_stage(Stage.PROMPT, StageStatus.SKIPPED)
        return False

    manifest.set_stage(Stage.PROMPT, StageStatus.RUNNING)
    deleted = False
    if ask_delete(paths.audio_file.name):
        paths.audio_file.unlink()
        deleted = True
        log.info(f"Deleted source file {paths.audio_file.name}")
    else:
        log.debug("Keeping source file")

    manifest.set_stage(Stage.PROMPT, StageStatus.COMPLETED)
    return deleted
