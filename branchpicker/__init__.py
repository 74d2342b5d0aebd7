"""Public package surface for branchpicker.

Exports ``main`` for programmatic CLI invocation.
The reusable picker lives in ``branchpicker.selector``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
