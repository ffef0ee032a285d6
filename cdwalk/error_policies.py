"""
Error handling policies for cdwalk.

The walker hands every per-entry failure (lstat, chdir, open, listing) to
the callback. A policy packages a common answer to those failures so that
callbacks only have to deal with entries that were read successfully:

    policy = ContinueOnErrorsPolicy(verbose=False)
    walk(root, with_error_policy(my_callback, policy))
    print(policy.get_statistics())
"""

import functools
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .core.driver import WalkCallback
from .core.verdict import CONTINUE, Verdict
from .errors import ErrorThresholdExceeded

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses decide what a reported failure means for the walk.
    """

    @abstractmethod
    def handle(self,
               error: OSError,
               path: str,
               info: Optional[os.stat_result]) -> Verdict:
        """
        Decide what to do about a failure reported for ``path``.

        Args:
            error: The OSError the walker ran into
            path: Logical path of the entry
            info: lstat result, or None if the stat itself failed

        Returns:
            The verdict to hand back to the walker.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that stops the walk at the first error and returns it.

    Useful when a partial result is worse than no result.
    """

    def handle(self, error: OSError, path: str, info: Optional[os.stat_result]) -> Verdict:
        logger.debug("Stopping walk at %s: %s", path, error)
        return Verdict.stop(error)


class _RecordingPolicy(ErrorPolicy):
    """Shared bookkeeping for policies that keep the errors they see."""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []

    def _record(self, error: OSError, path: str) -> None:
        self.errors.append({
            'path': path,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        if isinstance(error, PermissionError):
            self.skipped_paths.append(path)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'not_found_errors': sum(1 for e in self.errors if e['error_type'] == 'FileNotFoundError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ContinueOnErrorsPolicy(_RecordingPolicy):
    """
    Policy that logs errors and keeps walking.

    Every error is recovered: it is recorded here, but the walk itself
    finishes without an error. The failing entry contributes no children.
    """

    def __init__(self, verbose: bool = True):
        """
        Args:
            verbose: If True, log a warning for each error
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, error: OSError, path: str, info: Optional[os.stat_result]) -> Verdict:
        self._record(error, path)
        if self.verbose:
            if isinstance(error, PermissionError):
                logger.warning("Skipping inaccessible path '%s': %s", path, error)
            else:
                logger.warning("Error walking '%s': %s", path, error)
        return CONTINUE


class CollectErrorsPolicy(_RecordingPolicy):
    """
    Policy that silently collects errors and keeps the last one.

    The walk carries on, but still returns the most recent error, so the
    caller can tell that something went wrong and then look at ``errors``.
    """

    def handle(self, error: OSError, path: str, info: Optional[os.stat_result]) -> Verdict:
        self._record(error, path)
        return Verdict.fail(error)


class ThresholdPolicy(_RecordingPolicy):
    """
    Policy that tolerates errors up to a threshold, then stops the walk.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt processing.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Args:
            max_errors: Maximum errors to tolerate before stopping
            verbose: If True, log a warning for each tolerated error
        """
        super().__init__()
        self.max_errors = max_errors
        self.verbose = verbose

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def handle(self, error: OSError, path: str, info: Optional[os.stat_result]) -> Verdict:
        self._record(error, path)

        if self.error_count > self.max_errors:
            logger.error("Error threshold exceeded at '%s' (%d errors)", path, self.max_errors)
            return Verdict.stop(ErrorThresholdExceeded(self.max_errors, error))

        if self.verbose:
            logger.warning("[%d/%d] Error walking '%s': %s",
                           self.error_count, self.max_errors, path, error)
        return CONTINUE


def with_error_policy(callback: WalkCallback, policy: ErrorPolicy) -> WalkCallback:
    """
    Wrap ``callback`` so that reported failures go to ``policy`` instead.

    The wrapped callback only ever sees entries that were read successfully
    (its ``error`` argument is always None).
    """
    @functools.wraps(callback)
    def wrapper(path, info, error):
        if error is not None:
            return policy.handle(error, path, info)
        return callback(path, info, error)

    return wrapper
