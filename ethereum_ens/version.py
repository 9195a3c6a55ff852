"""
Package version.

`__version__` is the released version. When the package runs from a git
checkout, `version()` appends the `git describe` output so bug reports can
name the exact commit.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

__version__ = "0.3.0"


@dataclass(frozen=True)
class VersionInfo:
    base: str
    git: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.base} ({self.git})" if self.git else self.base


def _checkout_root(path: str) -> Optional[str]:
    # look a few levels up for the .git directory of a source checkout
    for _ in range(6):
        if os.path.isdir(os.path.join(path, ".git")):
            return path
        parent = os.path.dirname(path)
        if parent == path:
            break
        path = parent
    return None


def _git_describe(start: Optional[str] = None) -> Optional[str]:
    root = _checkout_root(start or os.path.dirname(os.path.abspath(__file__)))
    if root is None:
        return None
    try:
        described = subprocess.check_output(
            ["git", "-C", root, "describe", "--tags", "--dirty", "--always"],
            stderr=subprocess.DEVNULL,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return described.strip() or None


def version_info() -> VersionInfo:
    return VersionInfo(base=__version__, git=_git_describe())


def version() -> str:
    """'0.3.0', or '0.3.0 (v0.3.0-3-gabc1234)' from a checkout."""
    return str(version_info())


__all__ = ["__version__", "VersionInfo", "version_info", "version"]
