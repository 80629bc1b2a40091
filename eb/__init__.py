"""Public package surface for eb.

Exports ``main`` for programmatic CLI invocation.
Listing formatters live in ``eb.listing``; file printing in ``eb.printer``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
