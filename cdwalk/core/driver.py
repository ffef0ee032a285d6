"""The iterative traversal loop.

The driver repeatedly looks at the top of the frontier and does one of four
things with it:

1. A visited entry that was descended into: ``chdir("..")`` and pop it.
2. Any other visited entry: pop it.
3. An unvisited entry whose lstat fails: report the error to the callback.
4. An unvisited entry whose lstat succeeds: show it to the callback and, if
   it is a directory the callback did not prune, change into it and push
   its children above it.

Because a directory's entry stays on the stack underneath its children,
the ascend out of it happens only after its whole subtree is drained. At
any moment the driver stats or lists a name, the working directory is the
logical parent of that name.
"""

import logging
import os
from typing import Any, Callable, Optional

from .adapter import DirectoryAdapter
from .frontier import Frontier, FrontierEntry
from .verdict import Verdict
from ..errors import AscendError, SkipSubtreeError

logger = logging.getLogger(__name__)

WalkCallback = Callable[[str, Optional[os.stat_result], Optional[OSError]], Any]


class Driver:
    """Runs a frontier to exhaustion, calling ``callback`` for each entry.

    The driver assumes the working directory already is the parent of the
    seed entry; restoring the caller's directory afterwards is the entry
    point's job.
    """

    def __init__(self, callback: WalkCallback, adapter: DirectoryAdapter):
        self.callback = callback
        self.adapter = adapter

    def run(self, frontier: Frontier) -> Optional[BaseException]:
        """Drain the frontier.

        Returns:
            The last recorded error, the error carried by a STOP verdict,
            or an AscendError if the walk had to be abandoned. None if
            nothing went wrong (or every error was recovered).
        """
        error: Optional[BaseException] = None

        while frontier:
            entry = frontier.top

            if entry.visited:
                if entry.ascend:
                    try:
                        self.adapter.chdir(os.pardir)
                    except OSError as e:
                        return self._ascend_failed(entry, e)
                    logger.debug("Ascended out of %s", entry.path)
                frontier.pop()
                continue

            entry.visited = True
            path = entry.path

            try:
                info = self.adapter.lstat(entry.entry_name)
            except OSError as e:
                verdict = self._report(path, None, e)
                if verdict.is_stop:
                    return self._stopped(path, verdict, error)
                if verdict.is_skip:
                    # without lstat info the entry is not known to be a directory
                    error = SkipSubtreeError(path)
                else:
                    error = verdict.error
                continue

            verdict = self._invoke(path, info, None)
            is_dir = self.adapter.is_directory(info)

            if verdict.is_stop:
                return self._stopped(path, verdict, error)
            if verdict.is_skip:
                if not is_dir:
                    error = SkipSubtreeError(path)
                continue
            if not verdict.is_continue:
                error = verdict.error
                continue
            if not is_dir:
                continue

            try:
                self.adapter.chdir(entry.entry_name)
            except OSError as e:
                verdict = self._report(path, info, e)
                if verdict.is_stop:
                    return self._stopped(path, verdict, error)
                error = verdict.error
                continue

            # We are inside the directory now; whatever happens with the
            # listing, this entry has to take us back out.
            entry.ascend = True
            logger.debug("Descended into %s", path)

            names, list_error = self.adapter.list_names()
            if list_error is not None:
                verdict = self._report(path, info, list_error)
                if verdict.is_stop:
                    return self._stopped(path, verdict, error)
                error = verdict.error

            for name in names:
                frontier.push(path, name)

        return error

    def _invoke(self,
                path: str,
                info: Optional[os.stat_result],
                error: Optional[OSError]) -> Verdict:
        return Verdict.coerce(self.callback(path, info, error))

    def _report(self,
                path: str,
                info: Optional[os.stat_result],
                error: OSError) -> Verdict:
        """Hand a per-entry failure to the callback and return its verdict."""
        logger.debug("Reporting error for %s: %s", path, error)
        return self._invoke(path, info, error)

    def _stopped(self,
                 path: str,
                 verdict: Verdict,
                 error: Optional[BaseException]) -> Optional[BaseException]:
        logger.debug("Walk stopped at %s", path)
        if verdict.error is not None:
            return verdict.error
        return error

    def _ascend_failed(self, entry: FrontierEntry, cause: OSError) -> AscendError:
        cwd = None
        cwd_error = None
        try:
            cwd = self.adapter.getcwd()
        except OSError as e:
            cwd_error = e
        err = AscendError(entry.path, cause, cwd=cwd, cwd_error=cwd_error)
        logger.error("Abandoning walk: %s", err)
        return err
