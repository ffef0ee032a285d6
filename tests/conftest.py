"""Shared fixtures for the cdwalk test suite."""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cdwalk.testing import build_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running tests (deselect with -m 'not slow')")


@pytest.fixture
def restore_cwd():
    """Fail loudly if a test leaves the working directory changed."""
    before = os.getcwd()
    yield before
    after = os.getcwd()
    os.chdir(before)
    assert after == before, f"working directory leaked: {after}"


@pytest.fixture
def simple_tree(tmp_path, restore_cwd):
    """The small tree from the documentation.

    Structure:
    a/
    ├── b/
    │   └── c
    └── d
    """
    return build_tree(tmp_path / "a", {"b": {"c": "content"}, "d": "content"})


@pytest.fixture
def sample_tree(tmp_path, restore_cwd):
    """A slightly bigger tree.

    Structure:
    root/
    ├── file1.txt
    ├── file2.py
    ├── .hidden
    ├── dir1/
    │   ├── file3.txt
    │   ├── file4.py
    │   └── subdir1/
    │       └── file5.txt
    └── dir2/
        └── file6.txt
    """
    return build_tree(tmp_path / "root", {
        "file1.txt": "content1",
        "file2.py": "# python file",
        ".hidden": "secret",
        "dir1": {
            "file3.txt": "content3",
            "file4.py": "# another python file",
            "subdir1": {"file5.txt": "content5"},
        },
        "dir2": {"file6.txt": "content6"},
    })
