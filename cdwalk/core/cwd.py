"""The caller's working directory as a scoped resource.

The walk moves the process working directory around. SavedWorkingDirectory
pins the starting directory on entry and puts the process back there on
every exit path, including exceptions raised by the callback.

The working directory is process-global: nothing else in the process may
depend on or change it while a walk is in progress.
"""

import logging
from typing import Any, Optional

from .adapter import DirectoryAdapter
from ..errors import WorkingDirectoryError

logger = logging.getLogger(__name__)


class SavedWorkingDirectory:
    """Context manager that restores the working directory on exit.

    Example:
        with SavedWorkingDirectory(adapter):
            adapter.chdir("somewhere")
        # back where we started
    """

    def __init__(self, adapter: DirectoryAdapter):
        self.adapter = adapter
        self._handle: Optional[Any] = None

    @property
    def saved(self) -> bool:
        return self._handle is not None

    def save(self) -> None:
        """Pin the current directory.

        Raises:
            WorkingDirectoryError: If the directory cannot be opened
        """
        if self._handle is not None:
            raise RuntimeError("working directory already saved")
        try:
            self._handle = self.adapter.open_cwd()
        except OSError as e:
            logger.error("Cannot save working directory: %s", e)
            raise WorkingDirectoryError(e) from e

    def restore(self) -> None:
        """Change back to the pinned directory and release the handle."""
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            self.adapter.restore_cwd(handle)
        finally:
            self.adapter.close_cwd(handle)

    def __enter__(self) -> 'SavedWorkingDirectory':
        self.save()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.restore()
