"""Core traversal engine: frontier, driver and filesystem adapter."""

from .adapter import DirectoryAdapter, OSAdapter
from .cwd import SavedWorkingDirectory
from .driver import Driver, WalkCallback
from .frontier import Frontier, FrontierEntry
from .verdict import Action, Verdict, CONTINUE, SKIP_SUBTREE

__all__ = [
    'DirectoryAdapter',
    'OSAdapter',
    'SavedWorkingDirectory',
    'Driver',
    'WalkCallback',
    'Frontier',
    'FrontierEntry',
    'Action',
    'Verdict',
    'CONTINUE',
    'SKIP_SUBTREE',
]
