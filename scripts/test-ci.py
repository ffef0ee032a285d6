#!/usr/bin/env python
"""
Pre-push checks for cdwalk
==========================

Runs the checks worth doing before pushing: the package imports, flake8
finds no syntax errors or undefined names, mypy accepts the package, and
the whole test suite passes, including the slow deep-tree test.

The linters come from the dev extra (pip install -e .[dev]); checks whose
tool is missing are reported as skipped.

Usage:
    python scripts/test-ci.py            # everything
    python scripts/test-ci.py --fast     # leave out slow tests
"""

import argparse
import importlib.util
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_check(cmd, description):
    """Run ``cmd`` from the project root and report whether it passed."""
    print(f"\n[Check] {description}")
    print(f"  $ {' '.join(cmd)}")

    result = subprocess.run(cmd, cwd=PROJECT_ROOT, capture_output=True, text=True)
    if result.returncode == 0:
        print("  PASSED")
        return True

    print("  FAILED")
    output = (result.stdout + result.stderr).strip()
    if output:
        print("  " + "\n  ".join(output.splitlines()[-20:]))
    return False


def has_module(name):
    return importlib.util.find_spec(name) is not None


def main():
    parser = argparse.ArgumentParser(description="Pre-push checks for cdwalk")
    parser.add_argument("--fast", action="store_true", help="Skip slow tests")
    args = parser.parse_args()

    results = {}

    results["import"] = run_check(
        [sys.executable, "-c", "import cdwalk; print(cdwalk.__version__)"],
        "Package imports",
    )

    if has_module("flake8"):
        results["flake8"] = run_check(
            [sys.executable, "-m", "flake8", "cdwalk", "tests", "examples",
             "--count", "--select=E9,F63,F7,F82", "--show-source"],
            "No syntax errors or undefined names",
        )
    else:
        print("\n[Skipped] flake8 not installed (pip install -e .[dev])")

    if has_module("mypy"):
        results["mypy"] = run_check(
            [sys.executable, "-m", "mypy", "cdwalk", "--ignore-missing-imports"],
            "Type check the package",
        )
    else:
        print("\n[Skipped] mypy not installed (pip install -e .[dev])")

    test_cmd = [sys.executable, "run_tests.py"]
    if not args.fast:
        test_cmd.append("--all")
    results["tests"] = run_check(
        test_cmd,
        "Test suite" + ("" if args.fast else " including deep-tree tests"),
    )

    print("\n" + "=" * 60)
    for name, passed in results.items():
        print(f"  {name:<8} {'ok' if passed else 'FAILED'}")
    print("=" * 60)

    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
