from __future__ import annotations

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes."""

    OK = 0
    USER_ERROR = 1  # bad scheme name, missing workspace, ...
    ENV_ERROR = 2  # generator / xcodebuild not installed
    BUILD_ERROR = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5  # toolchain and wsgen disagree on where products live
    INTERRUPTED = 130
