#!/usr/bin/env python3
"""A small ``du`` built on cdwalk.

Prints the total size of each directory directly below the given roots
and keeps going past unreadable directories, reporting them on stderr.

    python examples/disk_usage.py /var/lib
    python examples/disk_usage.py --one-file-system /
"""

import argparse
import logging
import os
import stat
import sys
from collections import defaultdict
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from cdwalk import walk, SKIP_SUBTREE


def human(size):
    for unit in ("B", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024


def disk_usage(root, one_file_system=False):
    """Sum regular file sizes per top-level entry below ``root``.

    Returns:
        (totals, problems, error) where totals maps each top-level path
        to a byte count and problems lists (path, error) pairs
    """
    root = os.path.normpath(root)
    totals = defaultdict(int)
    problems = []
    root_dev = None

    def visit(path, info, error):
        nonlocal root_dev
        if error is not None:
            problems.append((path, error))
            return None
        if path == root:
            root_dev = info.st_dev
            return None

        top = os.path.join(root, os.path.relpath(path, root).split(os.sep)[0])
        if stat.S_ISREG(info.st_mode):
            totals[top] += info.st_size
        elif stat.S_ISDIR(info.st_mode):
            totals.setdefault(top, 0)
            if one_file_system and info.st_dev != root_dev:
                return SKIP_SUBTREE
        return None

    error = walk(root, visit)
    return dict(totals), problems, error


def main(argv=None):
    parser = argparse.ArgumentParser(description="Summarise disk usage below directories")
    parser.add_argument("roots", nargs="*", default=["."], help="Directories to scan")
    parser.add_argument("-x", "--one-file-system", action="store_true",
                        help="Skip directories on other file systems")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log walk details")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    status = 0
    for root in args.roots:
        totals, problems, error = disk_usage(root, args.one_file_system)
        for path, problem in problems:
            print(f"du: {path}: {problem}", file=sys.stderr)
        if error is not None:
            print(f"du: {root}: {error}", file=sys.stderr)
            status = 1

        for path, size in sorted(totals.items(), key=lambda item: item[1], reverse=True):
            print(f"{human(size):>8}  {path}")
        print(f"{human(sum(totals.values())):>8}  {root} (total)")

    return status


if __name__ == "__main__":
    sys.exit(main())
