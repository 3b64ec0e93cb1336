"""External tool lookup and subprocess wrappers.

Every tool role (decode/encode, split, FLAC codec, APE codec, charset
conversion, tag copy) is filled by a configurable binary. Calls are blocking;
a non-zero exit raises ExternalToolError with the tool's stderr.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from .errors import ExternalToolError, PreconditionError

if TYPE_CHECKING:
    from .config import SplitterConfig

log = logger.bind(stage="tools")


@dataclass(frozen=True)
class ToolRole:
    """One external capability and how to install its default provider."""

    role: str
    config_field: str
    package: str


TOOL_ROLES: tuple[ToolRole, ...] = (
    ToolRole("decode/encode engine", "ffmpeg_bin", "ffmpeg"),
    ToolRole("cue splitter", "shnsplit_bin", "shntool"),
    ToolRole("FLAC codec", "flac_bin", "flac"),
    ToolRole("APE codec", "mac_bin", "monkeys-audio"),
    ToolRole("encoding converter", "iconv_bin", "libc-bin (iconv)"),
    ToolRole("tag copier", "cuetag_bin", "cuetools"),
)


def find_missing_tools(config: SplitterConfig) -> list[tuple[str, ToolRole]]:
    """Return (binary, role) for every configured tool not found on PATH."""
    missing = []
    for role in TOOL_ROLES:
        binary = getattr(config, role.config_field)
        if shutil.which(binary) is None:
            log.debug(f"Missing {role.role}: {binary}")
            missing.append((binary, role))
    return missing


def check_tools(config: SplitterConfig) -> None:
    """Raise PreconditionError naming each missing tool and its package."""
    missing = find_missing_tools(config)
    if not missing:
        return
    hints = [
        f"'{binary}' ({role.role}) not found -- install package: {role.package}"
        for binary, role in missing
    ]
    names = ", ".join(binary for binary, _ in missing)
    raise PreconditionError(f"Required tools missing: {names}", details=hints)


def run_tool(
    args: list[str],
    timeout: float | None = None,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess:
    """Run an external tool to completion, raising on failure."""
    args_str = " ".join(args)
    if len(args_str) > 200:
        args_str = args_str[:197] + "..."
    log.debug(f"run_tool args={args_str}")
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired as exc:
        raise ExternalToolError(
            tool=args[0],
            exit_code=-1,
            stderr=f"timed out after {exc.timeout}s",
        ) from exc
    if result.returncode != 0:
        raise ExternalToolError(
            tool=args[0],
            exit_code=result.returncode,
            stderr=result.stderr.strip(),
        )
    return result


# -- Per-role command builders --


def transcode_to_flac(
    config: SplitterConfig, source: Path, target: Path
) -> subprocess.CompletedProcess:
    """Losslessly transcode an audio image to FLAC."""
    return run_tool(
        [
            config.ffmpeg_bin,
            "-nostdin",
            "-loglevel",
            "error",
            "-i",
            str(source),
            "-c:a",
            "flac",
            str(target),
        ],
        timeout=config.tool_timeout,
    )


def split_by_cue(
    config: SplitterConfig,
    cue_file: Path,
    audio_file: Path,
    output_dir: Path,
    output_format: str,
    name_template: str,
) -> subprocess.CompletedProcess:
    """Split an audio image into one file per cue-sheet track."""
    return run_tool(
        [
            config.shnsplit_bin,
            "-f",
            str(cue_file),
            "-o",
            output_format,
            "-d",
            str(output_dir),
            "-t",
            name_template,
            str(audio_file),
        ],
        timeout=config.tool_timeout,
    )


def convert_encoding(
    config: SplitterConfig, source: Path, target: Path
) -> subprocess.CompletedProcess:
    """Rewrite a text file from the legacy to the target encoding."""
    return run_tool(
        [
            config.iconv_bin,
            "-f",
            config.legacy_encoding,
            "-t",
            config.target_encoding,
            "-o",
            str(target),
            str(source),
        ],
        timeout=config.tool_timeout,
    )


def copy_cue_tags(
    config: SplitterConfig, cue_file: Path, tracks: list[Path]
) -> subprocess.CompletedProcess:
    """Write cue-sheet metadata into each track's tags, in track order."""
    return run_tool(
        [config.cuetag_bin, str(cue_file), *(str(t) for t in tracks)],
        timeout=config.tool_timeout,
    )
