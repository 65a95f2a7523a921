"""Route content entries to files according to per-model setup answers.

This package turns a set of structural choices about content models (page or
data object, where the output path comes from, which field holds the body,
how the layout is chosen) into a routing function that decides, for every
entry, whether and where to write it and in which format.

Exports
-------
- ``compile_routes``: Build an ``EntryRouter`` from ``SetupAnswers``.
- ``app``: Cyclopts application behind the ``content-router`` command.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from content_router import compile_routes
>>> from content_router.setup import SetupAnswers
>>> compile_routes(SetupAnswers()).describe()
[]
"""

from __future__ import annotations

from .cli import app, main
from .routing import compile_routes

__all__ = ["app", "compile_routes", "main"]
