"""Exceptions returned (or raised) by cdwalk.

Per-entry filesystem failures are plain OSError instances handed to the
callback. The classes here cover the failures the walker itself reports.
"""

from typing import Optional


class WalkError(Exception):
    """Base class for errors produced by the walker itself."""


class WorkingDirectoryError(WalkError):
    """The caller's working directory could not be saved.

    Returned before anything is touched: without a handle on the starting
    directory the walker cannot promise to put the process back there.
    """

    def __init__(self, cause: OSError):
        super().__init__(f"cannot save current working directory: {cause}")
        self.__cause__ = cause


class AscendError(WalkError):
    """chdir("..") failed after finishing a subtree.

    The working directory no longer matches the walker's idea of where it
    is, so the traversal is abandoned.

    Attributes:
        path: Logical path of the directory being ascended from
        cwd: Working directory at failure time, if it could be read
        cwd_error: Error raised while reading the working directory, if any
    """

    def __init__(self,
                 path: str,
                 cause: OSError,
                 cwd: Optional[str] = None,
                 cwd_error: Optional[OSError] = None):
        super().__init__(
            f"can't ascend (..) from {path} in {cwd}: {cause} "
            f"(getcwd error: {cwd_error})"
        )
        self.path = path
        self.cwd = cwd
        self.cwd_error = cwd_error
        self.__cause__ = cause


class SkipSubtreeError(WalkError):
    """SKIP_SUBTREE was returned for an entry that is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"skip requested for non-directory: {path}")
        self.path = path


class ErrorThresholdExceeded(WalkError):
    """More per-entry errors were reported than a ThresholdPolicy allows."""

    def __init__(self, max_errors: int, last_error: BaseException):
        super().__init__(f"Error threshold exceeded ({max_errors} errors)")
        self.max_errors = max_errors
        self.__cause__ = last_error
