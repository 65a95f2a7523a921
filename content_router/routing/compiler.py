"""Compile setup answers into an :class:`EntryRouter`.

The compiler walks the page specs and then the data specs of a
:class:`~content_router.setup.SetupAnswers` value, in their collection order,
and emits one :class:`RouteRule` per spec. It performs no I/O and never looks
at real entries; anything an entry lacks is discovered lazily when the router
runs. The result is reusable: ``slugify`` is injected through ``utils`` on
every call rather than captured here.

Example
-------
>>> from content_router.routing import RoutingUtils, compile_routes
>>> from content_router.setup import DataSpec, ModelRef, SetupAnswers, StaticFile
>>> spec = DataSpec(
...     model=ModelRef("author", "p1", "cms"),
...     location=StaticFile("data/authors.json"),
... )
>>> router = compile_routes(SetupAnswers(data=(spec,)))
>>> entry = {"__metadata": {"modelName": "author", "projectId": "p1",
...          "source": "cms"}, "name": "Ada"}
>>> router(entry, RoutingUtils()).path
'data/authors.json'
"""

from __future__ import annotations

import logging
import typing as typ

from .router import EntryRouter, RouteRule

if typ.TYPE_CHECKING:
    from content_router.setup.models import SetupAnswers

logger = logging.getLogger(__name__)


def compile_routes(answers: SetupAnswers, *, strict: bool = False) -> EntryRouter:
    """Build the routing function for ``answers``.

    Parameters
    ----------
    answers : SetupAnswers
        Page and data specs; pages take priority over data and each group
        keeps its own order.
    strict : bool, optional
        Raise :class:`~content_router.routing.MissingFieldError` when an entry
        lacks a configured field instead of degrading to empty values.

    Returns
    -------
    EntryRouter
        Immutable callable ``(entry, utils) -> RouteResult | None``.
    """
    rules = tuple(
        RouteRule(spec=spec, strict=strict) for spec in (*answers.pages, *answers.data)
    )
    router = EntryRouter(rules=rules)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Compiled %d routing rule(s):\n%s",
            len(rules),
            "\n".join(router.describe()) or "(none)",
        )
    return router


__all__ = ["compile_routes"]
