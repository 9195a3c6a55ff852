"""
ethereum_ens.cli
================

Command-line interface, exposed via the `ens` console script. Typer is only
imported when the CLI is actually used.

Quick usage
-----------
- From Python:
    >>> from ethereum_ens.cli import run
    >>> run(["addr", "foo.eth"])

- From shell:
    $ ens --help
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, List, Optional

__all__: List[str] = ["main", "run", "app"]

_SUBMODULE = "ethereum_ens.cli.main"
_EXPOSE = ("app", "main", "run")


def _load() -> Any:
    return import_module(_SUBMODULE)


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name in _EXPOSE:
        return getattr(_load(), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main(argv: Optional[list[str]] = None) -> int:
    """Execute the CLI and return its exit code."""
    return int(_load().main(argv))


def run(argv: Optional[list[str]] = None) -> int:
    """Alias for :func:`main`."""
    return main(argv)
