"""High-level API for cdwalk.

These functions build a callback from a WalkConfig, run ``walk`` and hand
back what was collected. They are eager on purpose: the walk changes the
working directory as it goes, so nothing is yielded to the caller until
the walk is over and the working directory has been restored.
"""

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .config import EntryKind, WalkConfig
from .core.adapter import DirectoryAdapter
from .core.verdict import SKIP_SUBTREE
from .error_policies import with_error_policy
from .walk import PathArg, walk


@dataclass
class WalkEntry:
    """One entry reported by a walk.

    ``error`` is set when something about the entry failed. ``kind`` is
    ERROR for failures on entries the config did not report otherwise;
    ``info`` is None when not even lstat succeeded.
    """
    path: str
    depth: int
    kind: EntryKind
    info: Optional[os.stat_result] = None
    error: Optional[OSError] = None

    @property
    def name(self) -> str:
        return os.path.basename(self.path) or self.path

    @property
    def size(self) -> int:
        return self.info.st_size if self.info is not None else 0


@dataclass
class ScanResult:
    """Entries collected by scan_tree plus the error the walk returned."""
    entries: List[WalkEntry] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def failed(self) -> List[WalkEntry]:
        return [entry for entry in self.entries if entry.error is not None]

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def path_depth(path: str, root: str) -> int:
    """Depth of a logical path below ``root`` (the root itself is 0).

    Purely lexical: ``path`` must be one the walker built from ``root``.
    """
    if path == root:
        return 0
    rest = path[len(root):].lstrip(os.sep)
    return rest.count(os.sep) + 1


def scan_tree(root: PathArg,
              config: Optional[WalkConfig] = None,
              adapter: Optional[DirectoryAdapter] = None) -> ScanResult:
    """Walk ``root`` and collect the entries ``config`` asks for.

    Without an error policy, failures are collected as entries carrying
    the error and the walk carries on. With one, the policy decides, and
    whatever the walk returns ends up in ``ScanResult.error``.

    Args:
        root: Directory to scan
        config: What to report and how deep to go (default: everything)
        adapter: Filesystem primitives passed on to walk()

    Returns:
        ScanResult with entries in visiting order

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or WalkConfig()
    problems = config.validate()
    if problems:
        raise ValueError(f"Invalid walk configuration: {'; '.join(problems)}")

    root_path = os.path.normpath(os.fspath(root))
    result = ScanResult()

    def on_entry(path, info, error):
        depth = path_depth(path, root_path)

        if error is not None:
            last = result.entries[-1] if result.entries else None
            if last is not None and last.path == path and last.error is None:
                # chdir/listing failure on a directory we just reported
                result.entries[-1] = dataclasses.replace(last, error=error)
            else:
                # lstat failed, or the config filtered the entry out
                result.entries.append(WalkEntry(path, depth, EntryKind.ERROR, info, error))
            return None

        kind = EntryKind.from_stat(info)
        name = os.path.basename(path) or path

        if (config.depth.should_yield(depth)
                and config.wants(kind)
                and (depth == 0 or config.filter.should_include(name))):
            result.entries.append(WalkEntry(path, depth, kind, info))

        if kind is EntryKind.DIRECTORY:
            if not config.depth.should_explore(depth):
                return SKIP_SUBTREE
            if depth > 0 and config.filter.should_prune(name):
                return SKIP_SUBTREE
        return None

    callback = on_entry
    if config.error_policy is not None:
        callback = with_error_policy(on_entry, config.error_policy)

    result.error = walk(root_path, callback, adapter=adapter)
    return result


def collect_entries(root: PathArg, config: Optional[WalkConfig] = None) -> List[WalkEntry]:
    """Like scan_tree, but raise the walk's error instead of returning it.

    Example:
        >>> for entry in collect_entries("/srv/data", WalkConfig.files_only()):
        ...     print(f"{entry.path}: {entry.size} bytes")
    """
    result = scan_tree(root, config)
    result.raise_for_error()
    return result.entries


def get_tree_paths(root: PathArg, config: Optional[WalkConfig] = None) -> List[str]:
    """Logical paths of every reported entry, in visiting order."""
    return [entry.path for entry in collect_entries(root, config)]


def count_entries(root: PathArg, config: Optional[WalkConfig] = None) -> int:
    """Count reported entries, including the root and failed entries."""
    return len(collect_entries(root, config))


def find_paths(root: PathArg,
               predicate: Callable[[WalkEntry], bool],
               config: Optional[WalkConfig] = None) -> List[str]:
    """Paths of the entries for which ``predicate`` returns True.

    Example:
        >>> big = find_paths("/var/log", lambda e: e.size > 10 * 2**20)
    """
    return [entry.path for entry in collect_entries(root, config) if predicate(entry)]


def get_tree_stats(root: PathArg, config: Optional[WalkConfig] = None) -> Dict[str, Any]:
    """Summarise a tree.

    Returns:
        Dictionary with counts per kind ('files', 'directories',
        'symlinks', 'other'), 'errors', 'total_size' (bytes in regular
        files) and 'max_depth'.
    """
    stats = {
        'files': 0,
        'directories': 0,
        'symlinks': 0,
        'other': 0,
        'errors': 0,
        'total_size': 0,
        'max_depth': 0,
    }
    counters = {
        EntryKind.FILE: 'files',
        EntryKind.DIRECTORY: 'directories',
        EntryKind.SYMLINK: 'symlinks',
        EntryKind.OTHER: 'other',
    }

    for entry in collect_entries(root, config):
        if entry.error is not None:
            stats['errors'] += 1
        if entry.kind in counters:
            stats[counters[entry.kind]] += 1
        if entry.kind is EntryKind.FILE:
            stats['total_size'] += entry.size
        stats['max_depth'] = max(stats['max_depth'], entry.depth)

    return stats
