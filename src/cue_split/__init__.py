"""cue-split -- split a single-file album into tagged per-track FLACs via its cue sheet.

Core modules:
    config    -- Tool locations and behavior via pydantic-settings (CUE_SPLIT_* env vars)
    cli       -- Click CLI entry point. Usage errors exit 1; CLI flags passed as
                 kwargs to SplitterConfig (no env pollution).
    runner    -- Pipeline orchestration and stage execution
    cuesheet  -- Substring checks on the raw cue sheet (format marker, pre-gap)
                 plus chardet-based encoding sniffing. No structured parsing.
    tools     -- External tool lookup and blocking subprocess wrappers
                 (ffmpeg, shnsplit, iconv, cuetag). Non-zero exit raises
                 ExternalToolError with the tool's stderr.
    manifest  -- In-memory record of files this run created and stage states
    interrupt -- SIGINT/SIGTERM guard that runs cleanup exactly once

Subpackages:
    stages    -- Pipeline stages (validate, normalize, split, tag, cleanup, prompt)
"""
