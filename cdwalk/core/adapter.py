"""Filesystem primitives consumed by the walker.

The driver never touches ``os`` directly; it goes through a DirectoryAdapter.
OSAdapter is the real implementation. Tests substitute subclasses that fail
on demand, which is the only practical way to exercise failures such as a
broken ``chdir("..")``.

Every name passed to an adapter is relative to the current working
directory and, apart from the walk's root, a single path component.
"""

import os
import stat
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple


class DirectoryAdapter(ABC):
    """Abstract set of working-directory-relative filesystem operations."""

    @abstractmethod
    def lstat(self, name: str) -> os.stat_result:
        """Stat ``name`` without following symbolic links."""
        pass

    @abstractmethod
    def chdir(self, name: str) -> None:
        """Change the process working directory to ``name``."""
        pass

    @abstractmethod
    def list_names(self) -> Tuple[List[str], Optional[OSError]]:
        """List the current directory.

        The directory handle is opened, read and closed within this call.

        Returns:
            Tuple of (names, error). If opening fails, names is empty. If
            reading fails part way, names holds everything read before the
            failure. error is None on success.
        """
        pass

    @abstractmethod
    def getcwd(self) -> str:
        pass

    @abstractmethod
    def open_cwd(self) -> Any:
        """Return a handle on the current directory for later restore.

        The handle must not be inherited by child processes.
        """
        pass

    @abstractmethod
    def restore_cwd(self, handle: Any) -> None:
        pass

    @abstractmethod
    def close_cwd(self, handle: Any) -> None:
        pass

    def is_directory(self, info: os.stat_result) -> bool:
        return stat.S_ISDIR(info.st_mode)


class OSAdapter(DirectoryAdapter):
    """DirectoryAdapter backed by the ``os`` module.

    The saved working directory is an open descriptor restored with
    ``os.fchdir``. Where ``os.fchdir`` is unavailable (Windows), the handle
    is the absolute path instead.
    """

    def __init__(self):
        self.use_descriptor = hasattr(os, 'fchdir')

    def lstat(self, name: str) -> os.stat_result:
        return os.lstat(name)

    def chdir(self, name: str) -> None:
        os.chdir(name)

    def list_names(self) -> Tuple[List[str], Optional[OSError]]:
        names: List[str] = []
        try:
            with os.scandir('.') as entries:
                for entry in entries:
                    names.append(entry.name)
        except OSError as e:
            return names, e
        return names, None

    def getcwd(self) -> str:
        return os.getcwd()

    def open_cwd(self) -> Any:
        if not self.use_descriptor:
            return os.getcwd()
        fd = os.open('.', os.O_RDONLY | getattr(os, 'O_DIRECTORY', 0))
        try:
            os.set_inheritable(fd, False)
        except OSError:
            os.close(fd)
            raise
        return fd

    def restore_cwd(self, handle: Any) -> None:
        if self.use_descriptor:
            os.fchdir(handle)
        else:
            os.chdir(handle)

    def close_cwd(self, handle: Any) -> None:
        if self.use_descriptor:
            os.close(handle)
