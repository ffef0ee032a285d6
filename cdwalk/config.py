"""Configuration for the high-level helpers in cdwalk.api.

The core ``walk`` takes no configuration: everything it decides is left to
the callback. These classes describe the common decisions (how deep, which
names, which kinds of entries, what to do with errors) so the helpers can
build that callback for you.
"""

import fnmatch
import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Set


class EntryKind(Enum):
    """What kind of filesystem object an entry is."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"          # fifos, sockets, devices
    ERROR = "error"          # failed before it could be reported

    @classmethod
    def from_stat(cls, info: Optional[os.stat_result]) -> 'EntryKind':
        """Classify an lstat result (None means the stat failed)."""
        if info is None:
            return cls.ERROR
        mode = info.st_mode
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.FILE
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        return cls.OTHER


@dataclass
class DepthConfig:
    """Depth limits. The root is at depth 0."""

    min_depth: int = 0                  # Minimum depth to yield
    max_depth: Optional[int] = None     # Maximum depth to traverse

    def should_yield(self, depth: int) -> bool:
        """Check if entries at this depth should be reported.

        Args:
            depth: Depth of the entry

        Returns:
            True if depth is within configured range
        """
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        """Check if a directory at this depth should be descended into."""
        if self.max_depth is None:
            return True
        return depth < self.max_depth


@dataclass
class FilterConfig:
    """Name-based filtering. Patterns are fnmatch globs on the base name."""

    include_hidden: bool = True
    include_patterns: Optional[Set[str]] = None   # Report only matching names
    exclude_patterns: Optional[Set[str]] = None   # Never report matching names
    prune_patterns: Optional[Set[str]] = None     # Do not descend into these

    def should_include(self, name: str) -> bool:
        """Check if an entry with this base name should be reported.

        Exclusion takes precedence over inclusion.
        """
        if not self.include_hidden and _is_hidden(name):
            return False
        if self.exclude_patterns and _matches_any(name, self.exclude_patterns):
            return False
        if self.include_patterns:
            return _matches_any(name, self.include_patterns)
        return True

    def should_prune(self, name: str) -> bool:
        """Check if a directory with this base name should be skipped."""
        if not self.include_hidden and _is_hidden(name):
            return True
        if self.prune_patterns:
            return _matches_any(name, self.prune_patterns)
        return False


@dataclass
class WalkConfig:
    """Complete configuration for the high-level helpers.

    ``error_policy`` is an ErrorPolicy from cdwalk.error_policies. When it
    is None, per-entry errors are collected as ERROR entries and the walk
    carries on.
    """

    depth: DepthConfig = field(default_factory=DepthConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    kinds: Optional[Set[EntryKind]] = None   # None reports every kind
    error_policy: Optional[Any] = None

    @classmethod
    def shallow(cls, max_depth: int = 1) -> 'WalkConfig':
        """Root and entries down to ``max_depth`` levels below it."""
        return cls(depth=DepthConfig(max_depth=max_depth))

    @classmethod
    def files_only(cls) -> 'WalkConfig':
        return cls(kinds={EntryKind.FILE})

    def wants(self, kind: EntryKind) -> bool:
        """Check if entries of this kind should be reported."""
        if kind is EntryKind.ERROR:
            return True
        return self.kinds is None or kind in self.kinds

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.kinds is not None and not self.kinds:
            errors.append("kinds cannot be empty (use None for all kinds)")

        if self.error_policy is not None and not hasattr(self.error_policy, 'handle'):
            errors.append("error_policy must provide handle()")

        return errors


def _is_hidden(name: str) -> bool:
    return name.startswith('.') and name not in (os.curdir, os.pardir)


def _matches_any(name: str, patterns: Set[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)
