"""The compiled routing function: an ordered list of guarded rules."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from content_router._constants import FORMAT_FRONTMATTER_MD, METADATA_KEY
from content_router.setup.models import DataSpec, ModelRef, PageSpec

from .projection import describe_location, project_data, project_page

if typ.TYPE_CHECKING:
    from .models import Entry, RouteResult


@dc.dataclass(frozen=True, slots=True)
class RouteRule:
    """Guard plus projection for a single page or data spec."""

    spec: PageSpec | DataSpec
    strict: bool = False

    @property
    def model(self) -> ModelRef:
        return self.spec.model

    @property
    def kind(self) -> str:
        return "page" if isinstance(self.spec, PageSpec) else "data"

    def matches(self, metadata: cabc.Mapping[str, typ.Any]) -> bool:
        """Return whether the entry metadata selects this rule."""
        return self.spec.model.matches(metadata)

    def apply(
        self,
        fields: cabc.Mapping[str, typ.Any],
        metadata: cabc.Mapping[str, typ.Any],
        utils: object,
    ) -> RouteResult:
        """Project a matched entry into its RouteResult."""
        match self.spec:
            case PageSpec():
                return project_page(
                    self.spec, fields, metadata, utils, strict=self.strict
                )
            case DataSpec():
                return project_data(
                    self.spec, fields, metadata, utils, strict=self.strict
                )
        msg = f"Unsupported spec {self.spec!r}"  # pragma: no cover - exhaustive
        raise TypeError(msg)

    def describe(self) -> str:
        """Return a one-line summary such as ``page src/p1/post -> a.md``."""
        fmt = (
            FORMAT_FRONTMATTER_MD if isinstance(self.spec, PageSpec) else self.spec.format
        )
        line = (
            f"{self.kind} {self.model.label()} -> "
            f"{describe_location(self.spec.location)} [{fmt}]"
        )
        if isinstance(self.spec, DataSpec) and self.spec.is_multiple:
            line += " (append)"
        return line


@dc.dataclass(frozen=True, slots=True)
class EntryRouter:
    """Route content entries by evaluating rules top to bottom.

    The first rule whose guard matches the entry's metadata wins; later rules
    for the same model are unreachable. Instances hold no mutable state, so a
    router may be called any number of times and in any order.

    Examples
    --------
    >>> from content_router.routing import EntryRouter, RoutingUtils
    >>> EntryRouter(rules=())({"title": "x"}, RoutingUtils()) is None
    True
    """

    rules: tuple[RouteRule, ...] = ()

    def __call__(self, entry: Entry, utils: object) -> RouteResult | None:
        """Return the RouteResult for ``entry`` or ``None`` to skip it."""
        metadata = entry.get(METADATA_KEY)
        if not isinstance(metadata, cabc.Mapping) or not metadata:
            return None
        fields = {key: value for key, value in entry.items() if key != METADATA_KEY}
        for rule in self.rules:
            if rule.matches(metadata):
                return rule.apply(fields, metadata, utils)
        return None

    def describe(self) -> list[str]:
        """Return the rule chain in evaluation order, one line per rule."""
        return [
            f"{position}. {rule.describe()}"
            for position, rule in enumerate(self.rules, start=1)
        ]


__all__ = ["EntryRouter", "RouteRule"]
