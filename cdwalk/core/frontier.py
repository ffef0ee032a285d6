"""The frontier: pending traversal steps kept on an explicit stack.

The frontier replaces the call stack a recursive walker would use. Each
entry is either "visit this name" or, once the driver has changed into a
directory, "ascend out of this directory when everything above me is done".
Both kinds live on the same singly linked LIFO stack; an ascend marker is
simply a visited directory entry left in place with its children pushed
above it.
"""

import os
from typing import Iterator, Optional


class FrontierEntry:
    """One pending unit of work on the frontier.

    Attributes:
        parent_path: Logical path of the containing directory. Only used to
            build the path reported to the callback, never for filesystem
            access.
        name: Base name of the entry (the whole root for the seed entry)
        visited: False until the driver has processed this entry once
        ascend: True once the driver has changed into this directory
        next: Entry below this one on the stack
    """

    __slots__ = ('parent_path', 'name', 'visited', 'ascend', 'next')

    def __init__(self,
                 parent_path: str,
                 name: str,
                 next: Optional['FrontierEntry'] = None):
        self.parent_path = parent_path
        self.name = name
        self.visited = False
        self.ascend = False
        self.next = next

    @property
    def path(self) -> str:
        """Logical path reported to the callback."""
        if not self.parent_path:
            return self.name
        return os.path.join(self.parent_path, self.name)

    @property
    def entry_name(self) -> str:
        """Name used for lstat/chdir relative to the current directory.

        Listed children are already single components. The seed entry holds
        the whole root, and the walk starts in the root's parent, so only
        its last component is meaningful there ("/" has none and is used
        as-is).
        """
        return os.path.basename(self.name) or self.name

    def __repr__(self) -> str:
        flags = []
        if self.visited:
            flags.append('visited')
        if self.ascend:
            flags.append('ascend')
        return f"FrontierEntry(path={self.path!r}, flags={flags})"


class Frontier:
    """Singly linked LIFO stack of FrontierEntry objects.

    The frontier exclusively owns its entries; nothing outside the driver
    loop holds on to them.
    """

    def __init__(self):
        self._top: Optional[FrontierEntry] = None
        self._size = 0

    @classmethod
    def seed(cls, root: str) -> 'Frontier':
        """Create a frontier holding a single entry naming the root."""
        frontier = cls()
        frontier.push('', root)
        return frontier

    @property
    def top(self) -> Optional[FrontierEntry]:
        return self._top

    def push(self, parent_path: str, name: str) -> FrontierEntry:
        """Prepend a new unvisited entry, which becomes the new top."""
        entry = FrontierEntry(parent_path, name, next=self._top)
        self._top = entry
        self._size += 1
        return entry

    def pop(self) -> FrontierEntry:
        """Unlink and return the top entry.

        Raises:
            IndexError: If the frontier is empty
        """
        entry = self._top
        if entry is None:
            raise IndexError("pop from empty frontier")
        self._top = entry.next
        entry.next = None
        self._size -= 1
        return entry

    def __iter__(self) -> Iterator[FrontierEntry]:
        """Iterate from top to bottom without consuming."""
        entry = self._top
        while entry is not None:
            yield entry
            entry = entry.next

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._top is not None

    def __repr__(self) -> str:
        return f"Frontier(size={self._size}, top={self._top!r})"
