"""Stage registry -- maps Stage enum values to run functions.

Pipeline order: validate -> normalize -> split -> tag -> prompt

Stages:
    validate -- Resolve the single cue sheet and audio image under the target
                directory (recursive scan). Rejects zero or multiple cue
                sheets, cue sheets without a .ape/.flac/.wav/.wv FILE marker,
                track-1 pre-gaps (no INDEX 01 00:00:00), multiple or missing
                audio files, and missing external tools. Read-only; returns
                ResolvedPaths. Called directly by the runner, not through
                get_stage_runner, since it produces the paths other stages take.
    normalize -- With --cyrillic, convert the cue sheet from CP1251 to UTF-8
                 via iconv into <cue>_cyr, then swap it in and keep the
                 original as <cue>_original. Refuses to run if a backup is
                 already present. Converter failure leaves no backup.
    split -- Transcode APE to an intermediate FLAC with ffmpeg if needed, then
             run shnsplit with the cue sheet, FLAC output, the root dir and the
             "%n. %p - %t" template. Records new track files in the run
             manifest and removes the intermediate after a good split.
    tag -- Run cuetag with the cue sheet and every numbered FLAC in track
           order. Fatal on failure.
    cleanup -- On interrupt: delete files the manifest attributes to this run
               (never one named like the source image) and write
               <cue>_original back over the cue sheet.
    prompt -- Ask (single keypress) whether to delete the source image.
              Non-interactive or --no-prompt answers no.
"""

from ..models import Stage


def get_stage_runner(stage: Stage):
    """Return the run function for a post-validation pipeline stage.

    Raises NotImplementedError for stages the runner drives itself.
    """
    if stage == Stage.NORMALIZE:
        from .normalize import run as normalize_run

        return normalize_run

    if stage == Stage.SPLIT:
        from .split import run as split_run

        return split_run

    if stage == Stage.TAG:
        from .tag import run as tag_run

        return tag_run

    raise NotImplementedError(
        f"Stage '{stage.value}' is not a pipeline stage; "
        f"only 'normalize', 'split' and 'tag' run through the registry."
    )
