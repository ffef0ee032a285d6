"""Entry point of the walker.

``walk`` sets the stage for the driver: it pins the caller's working
directory, moves into the parent of the root and seeds the frontier.
"""

import logging
import os
from typing import Optional, Union

from .core.adapter import DirectoryAdapter, OSAdapter
from .core.cwd import SavedWorkingDirectory
from .core.driver import Driver, WalkCallback
from .core.frontier import Frontier
from .core.verdict import Verdict
from .errors import WorkingDirectoryError

logger = logging.getLogger(__name__)

PathArg = Union[str, 'os.PathLike[str]']


def walk(root: PathArg,
         callback: WalkCallback,
         *,
         adapter: Optional[DirectoryAdapter] = None) -> Optional[BaseException]:
    """Walk the tree rooted at ``root`` without recursion.

    ``callback(path, info, error)`` is called once for every file and
    directory, parents before their children. ``path`` is the logical path
    (``root`` joined with the names below it), ``info`` the ``os.lstat``
    result and ``error`` None. When something about an entry fails (lstat,
    changing into it, opening or reading it) the callback is called with
    the OSError instead, and ``info`` is None if the entry could not even
    be stat'ed. See cdwalk.core.verdict for what the callback may return.

    The walk descends with ``os.chdir`` and only ever touches bare names,
    so trees deeper than PATH_MAX are reachable. Symbolic links are
    reported but never followed. Sibling order is whatever the OS lists,
    reversed.

    The process working directory is restored before returning, whatever
    happens. Since it is process-global, do not run two walks at once or
    rely on the working directory from other threads during a walk.
    Exceptions raised by the callback propagate.

    Args:
        root: Directory (or file) to start from
        callback: Called for each entry, returns a verdict
        adapter: Filesystem primitives to use (defaults to OSAdapter)

    Returns:
        None, or the last error recorded during the walk. Errors the
        callback answered with None do not count.

    Example:
        >>> def show(path, info, error):
        ...     if error is not None:
        ...         return None  # ignore unreadable entries
        ...     print(path)
        >>> walk("/tmp/project", show)
    """
    root = os.path.normpath(os.fspath(root))
    adapter = adapter or OSAdapter()

    saved = SavedWorkingDirectory(adapter)
    try:
        saved.save()
    except WorkingDirectoryError as e:
        return e

    try:
        try:
            adapter.chdir(os.path.dirname(root) or os.curdir)
        except OSError as e:
            logger.debug("Cannot enter parent of %s: %s", root, e)
            return Verdict.coerce(callback(root, None, e)).error

        return Driver(callback, adapter).run(Frontier.seed(root))
    finally:
        saved.restore()


def walk_or_raise(root: PathArg,
                  callback: WalkCallback,
                  *,
                  adapter: Optional[DirectoryAdapter] = None) -> None:
    """Like walk(), but raise the returned error instead of returning it.

    Raises:
        BaseException: Whatever walk() would have returned
    """
    error = walk(root, callback, adapter=adapter)
    if error is not None:
        raise error
