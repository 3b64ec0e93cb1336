"""Splitter configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class SplitterConfig(BaseSettings):
    """Tool locations and behavior with layered resolution:
    .env file < CUE_SPLIT_* environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_prefix="CUE_SPLIT_",
        env_file=".env",
        extra="ignore",
    )

    # -- External tools (any compliant binary may fill a role) --
    ffmpeg_bin: str = "ffmpeg"
    shnsplit_bin: str = "shnsplit"
    flac_bin: str = "flac"
    mac_bin: str = "mac"
    iconv_bin: str = "iconv"
    cuetag_bin: str = "cuetag"
    tool_timeout: float | None = None  # seconds; None = wait forever

    # -- Encoding normalization --
    legacy_encoding: str = "CP1251"
    target_encoding: str = "UTF-8"

    # -- Behavior --
    no_prompt: bool = False
    verbose: bool = False
    log_level: str = "INFO"
    log_dir: Path | None = None

    def setup_logging(self) -> None:
        """Configure loguru for the splitter."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level=self.log_level.upper(),
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "cue-split.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
