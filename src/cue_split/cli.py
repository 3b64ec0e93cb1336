"""CLI entry point for cue-split."""

from pathlib import Path

import click
from loguru import logger

from .config import SplitterConfig
from .errors import CueSplitError, PreconditionError, RunInterrupted
from .models import RunConfig
from .runner import SplitRunner

log = logger.bind(stage="cli")


class SplitCommand(click.Command):
    """click command whose usage errors exit 1 instead of click's default 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


@click.command(
    cls=SplitCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-c",
    "--cyrillic",
    is_flag=True,
    help="Convert the cue sheet from CP1251 to UTF-8 before splitting.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--no-prompt",
    is_flag=True,
    help="Never ask to delete the source audio file (answers no).",
)
@click.pass_context
def main(
    ctx: click.Context,
    directory: Path,
    cyrillic: bool,
    verbose: bool,
    no_prompt: bool,
) -> None:
    """Split a single-file album into per-track FLACs using its cue sheet.

    DIRECTORY must hold exactly one .cue file and one .flac/.ape/.wv/.wav
    image. Tracks are written next to the cue sheet as
    "<n>. <performer> - <title>.flac" and tagged from the cue sheet.
    """
    # Pass CLI flags as kwargs to avoid env pollution
    config_kwargs: dict[str, bool | str] = {
        "verbose": verbose,
        "no_prompt": no_prompt,
    }
    if verbose:
        config_kwargs["log_level"] = "DEBUG"

    config = SplitterConfig(**config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()

    run_config = RunConfig(target_dir=directory.resolve(), cyrillic_fix=cyrillic)
    log.debug(f"Starting: target={run_config.target_dir} cyrillic={cyrillic}")

    try:
        SplitRunner(config=config, run_config=run_config).run()
    except RunInterrupted as exc:
        log.warning("Run interrupted; partial output removed")
        ctx.exit(exc.exit_code)
    except PreconditionError as exc:
        log.error(str(exc))
        for line in exc.details:
            log.error(f"  {line}")
        ctx.exit(1)
    except CueSplitError as exc:
        log.error(str(exc))
        ctx.exit(1)
