#!/usr/bin/env python3
"""
Build script for Resend CLI.

Runs the lint, type-check and test steps, then builds the package.
"""

import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_command(command: List[str], cwd: Optional[Path] = PROJECT_ROOT) -> int:
    """Run a command and return its exit code."""
    print(f"Running: {' '.join(command)}")
    result = subprocess.run(command, cwd=cwd)
    return result.returncode


def build_package() -> int:
    """Check, test and build the distribution."""
    print("Building resend-cli...")

    steps = [
        ("Running linter", ["ruff", "check", "src/", "tests/"]),
        ("Checking formatting", ["ruff", "format", "--check", "src/", "tests/"]),
        ("Running type checker", ["mypy", "src/"]),
        ("Running tests", ["pytest", "tests/"]),
        ("Building package", [sys.executable, "-m", "build"]),
    ]

    for title, command in steps:
        print(f"\n{title}...")
        if run_command(command) != 0:
            print(f"Failed: {title.lower()}")
            return 1

    print("\nBuild completed successfully!")
    return 0


def clean() -> int:
    """Remove build and tool caches."""
    print("Cleaning build artifacts...")

    for name in ["build", "dist", ".pytest_cache", ".mypy_cache", ".ruff_cache", "htmlcov"]:
        shutil.rmtree(PROJECT_ROOT / name, ignore_errors=True)
    for path in PROJECT_ROOT.rglob("__pycache__"):
        shutil.rmtree(path, ignore_errors=True)
    for path in PROJECT_ROOT.rglob("*.egg-info"):
        shutil.rmtree(path, ignore_errors=True)

    print("Clean completed!")
    return 0


def test() -> int:
    """Run the test suite."""
    return run_command(["pytest", "tests/", "-q"])


def lint() -> int:
    """Run linting with auto-fix, then the formatter."""
    result = run_command(["ruff", "check", "--fix", "src/", "tests/"])
    if result != 0:
        return result
    return run_command(["ruff", "format", "src/", "tests/"])


COMMANDS = {
    "build": build_package,
    "clean": clean,
    "test": test,
    "lint": lint,
}


def main() -> None:
    """Main entry point."""
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(f"Usage: python scripts/build.py [{'|'.join(COMMANDS)}]")
        sys.exit(1)

    sys.exit(COMMANDS[sys.argv[1]]())


if __name__ == "__main__":
    main()
