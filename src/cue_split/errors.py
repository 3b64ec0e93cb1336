"""Exception hierarchy for cue-split."""

import signal


class CueSplitError(Exception):
    """Base exception for all cue-split errors."""


class PreconditionError(CueSplitError):
    """The target directory or environment is not fit for a run.

    Raised before anything on disk is touched. ``details`` carries extra
    lines for the user (offending cue lines, install hints).
    """

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = list(details or [])


class StageError(CueSplitError):
    """A pipeline stage failed for a reason other than a tool exit code."""

    def __init__(self, message: str, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class ExternalToolError(CueSplitError):
    """An external subprocess (ffmpeg, shnsplit, cuetag, iconv) failed."""

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        super().__init__(f"{tool} exited with code {exit_code}: {stderr}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr


class RunInterrupted(CueSplitError):
    """The user interrupted the run with a signal."""

    def __init__(self, signum: int) -> None:
        super().__init__(f"Interrupted by {signal.Signals(signum).name}")
        self.signum = signum

    @property
    def exit_code(self) -> int:
        return 128 + self.signum
