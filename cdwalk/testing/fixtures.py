"""Test fixtures for cdwalk consumers.

These helpers make it easy to build small trees, record what a walk saw,
and make the filesystem fail at chosen places. Permission-based failures
are unreliable in tests (root ignores them), so failures are injected
through the adapter instead.
"""

import errno
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.adapter import OSAdapter

Layout = Mapping[str, Union[str, bytes, None, 'Layout']]


def build_tree(base: Union[str, Path], layout: Layout) -> Path:
    """Create files and directories below ``base`` from a nested mapping.

    Mapping values are file contents (str or bytes), None for an empty
    file, or another mapping for a directory.

    Example:
        build_tree(tmp_path / "a", {"b": {"c": "hello"}, "d": None})
        # a/b/c and a/d

    Returns:
        The base path
    """
    base = Path(base)
    base.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        target = base / name
        if isinstance(content, dict):
            build_tree(target, content)
        elif isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content or "")
    return base


class RecordingCallback:
    """Walk callback that remembers every call it receives.

    ``responses`` maps logical paths to what the callback should return
    for them; everything else gets ``default``. Reported errors get
    ``on_error`` (a value, or a callable taking the error) instead.

    Example:
        recorder = RecordingCallback(responses={str(root / "b"): SKIP_SUBTREE})
        walk(root, recorder)
        assert str(root / "b" / "c") not in recorder.paths
    """

    def __init__(self,
                 responses: Optional[Dict[str, Any]] = None,
                 default: Any = None,
                 on_error: Any = None,
                 record_cwd: bool = False):
        self.responses = dict(responses or {})
        self.default = default
        self.on_error = on_error
        self.record_cwd = record_cwd
        self.calls: List[Tuple[str, Optional[os.stat_result], Optional[BaseException]]] = []
        self.cwds: List[str] = []

    def __call__(self, path, info, error):
        self.calls.append((path, info, error))
        if self.record_cwd:
            self.cwds.append(os.getcwd())
        if error is not None:
            if callable(self.on_error):
                return self.on_error(error)
            return self.on_error
        return self.responses.get(path, self.default)

    @property
    def paths(self) -> List[str]:
        """Paths of successful visits, in order."""
        return [path for path, _, error in self.calls if error is None]

    @property
    def errors(self) -> List[Tuple[str, BaseException]]:
        """(path, error) for every reported failure, in order."""
        return [(path, error) for path, _, error in self.calls if error is not None]

    def relative_paths(self, root: Union[str, Path]) -> List[str]:
        """Successful visits relative to ``root`` ('.' for the root itself)."""
        root = str(root)
        return [os.path.relpath(path, root) if path != root else '.' for path in self.paths]


def _fault(code: int, name: str) -> OSError:
    return OSError(code, os.strerror(code), name)


class FaultInjectingAdapter(OSAdapter):
    """OSAdapter that fails on demand.

    Args:
        lstat_failures: Names whose lstat raises ENOENT
        chdir_failures: Names whose chdir raises EACCES
        list_failures: Directory base name -> number of names to return
            before the listing fails with EIO (0 fails the open itself)
        ascend_failures: Directory base names that cannot be left with
            chdir("..")
        getcwd_fails: Make getcwd raise ENOENT
        open_cwd_fails: Make saving the working directory raise EACCES
    """

    def __init__(self,
                 lstat_failures: Iterable[str] = (),
                 chdir_failures: Iterable[str] = (),
                 list_failures: Optional[Dict[str, int]] = None,
                 ascend_failures: Iterable[str] = (),
                 getcwd_fails: bool = False,
                 open_cwd_fails: bool = False):
        super().__init__()
        self.lstat_failures = set(lstat_failures)
        self.chdir_failures = set(chdir_failures)
        self.list_failures = dict(list_failures or {})
        self.ascend_failures = set(ascend_failures)
        self.getcwd_fails = getcwd_fails
        self.open_cwd_fails = open_cwd_fails
        self.lstat_names: List[str] = []
        self.open_handles = 0

    def _current_name(self) -> str:
        return os.path.basename(os.getcwd())

    def lstat(self, name: str) -> os.stat_result:
        self.lstat_names.append(name)
        if name in self.lstat_failures:
            raise _fault(errno.ENOENT, name)
        return super().lstat(name)

    def chdir(self, name: str) -> None:
        if name == os.pardir and self._current_name() in self.ascend_failures:
            raise _fault(errno.EACCES, name)
        if name in self.chdir_failures:
            raise _fault(errno.EACCES, name)
        super().chdir(name)

    def list_names(self):
        current = self._current_name()
        if current not in self.list_failures:
            return super().list_names()
        keep = self.list_failures[current]
        if keep == 0:
            return [], _fault(errno.EACCES, os.curdir)
        names, error = super().list_names()
        if error is not None:
            return names, error
        return names[:keep], _fault(errno.EIO, os.curdir)

    def getcwd(self) -> str:
        if self.getcwd_fails:
            raise _fault(errno.ENOENT, os.curdir)
        return super().getcwd()

    def open_cwd(self):
        if self.open_cwd_fails:
            raise _fault(errno.EACCES, os.curdir)
        handle = super().open_cwd()
        self.open_handles += 1
        return handle

    def close_cwd(self, handle) -> None:
        super().close_cwd(handle)
        self.open_handles -= 1
