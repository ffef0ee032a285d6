"""cdwalk - non-recursive directory walker that descends with chdir.

cdwalk visits every file and directory below a root, calling a callback
for each one. Instead of recursing and building ever longer paths, it keeps
pending work on an explicit stack and moves the process working directory
down and back up the tree, so it only ever touches single path components.
Trees nested deeper than PATH_MAX stay reachable.

Basic use:
━━━━━━━━━━
    from cdwalk import walk, SKIP_SUBTREE

    def visit(path, info, error):
        if error is not None:
            return None          # ignore what we cannot read
        if path.endswith('.git'):
            return SKIP_SUBTREE
        print(path)

    error = walk("/srv/repo", visit)
━━━━━━━━━━

The working directory is process-global: a walk must not run alongside
other code that depends on it.
"""

__version__ = "0.2.0"

from .core.adapter import DirectoryAdapter, OSAdapter
from .core.verdict import Action, Verdict, CONTINUE, SKIP_SUBTREE
from .errors import (
    WalkError,
    WorkingDirectoryError,
    AscendError,
    SkipSubtreeError,
    ErrorThresholdExceeded,
)
from .walk import walk, walk_or_raise

from .config import WalkConfig, DepthConfig, FilterConfig, EntryKind
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
    with_error_policy,
)
from .api import (
    WalkEntry,
    ScanResult,
    scan_tree,
    collect_entries,
    get_tree_paths,
    count_entries,
    find_paths,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Core
    'walk',
    'walk_or_raise',
    'Action',
    'Verdict',
    'CONTINUE',
    'SKIP_SUBTREE',
    'DirectoryAdapter',
    'OSAdapter',
    # Errors
    'WalkError',
    'WorkingDirectoryError',
    'AscendError',
    'SkipSubtreeError',
    'ErrorThresholdExceeded',
    # Config
    'WalkConfig',
    'DepthConfig',
    'FilterConfig',
    'EntryKind',
    # Policies
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    'with_error_policy',
    # API
    'WalkEntry',
    'ScanResult',
    'scan_tree',
    'collect_entries',
    'get_tree_paths',
    'count_entries',
    'find_paths',
    'get_tree_stats',
]
