"""Shared dataclasses and errors used by the routing pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from content_router._constants import FORMAT_FRONTMATTER_MD

Entry = cabc.Mapping[str, typ.Any]
Slugify = cabc.Callable[[str], str]


class RoutingError(RuntimeError):
    """Raised when an entry cannot be routed at evaluation time."""


class CapabilityMissingError(RoutingError):
    """Raised when a branch needs a ``utils`` capability that was not supplied."""


class MissingFieldError(RoutingError):
    """Raised in strict mode when a configured field is absent from an entry."""


@dc.dataclass(slots=True)
class RoutingUtils:
    """Capabilities injected into the router at evaluation time.

    Attributes
    ----------
    slugify : Callable[[str], str] | None
        Turns a field value into a file-name stem. Only directory collections
        call it; routing any other spec works without it.
    """

    slugify: Slugify | None = None


@dc.dataclass(slots=True)
class PageContent:
    """Body and frontmatter of a ``frontmatter-md`` document.

    Attributes
    ----------
    body : Any
        Value of the configured content field, ``None`` when the entry lacks
        it, or an empty mapping when no content field is configured.
    frontmatter : dict[str, Any]
        Remaining entry fields plus the resolved ``layout`` and ``date`` keys.
    """

    body: typ.Any
    frontmatter: dict[str, typ.Any]


@dc.dataclass(slots=True)
class RouteResult:
    """Descriptor telling the sink what to write, where and how.

    Attributes
    ----------
    content : PageContent | dict[str, Any]
        Page body/frontmatter, or the entry fields verbatim for data objects.
    format : str
        ``"frontmatter-md"``, ``"json"`` or ``"yml"``.
    path : str
        Output path relative to the sink's root.
    append : bool | None
        ``True`` when entries accumulate in one file; ``None`` for pages.
    """

    content: PageContent | dict[str, typ.Any]
    format: str
    path: str
    append: bool | None = None

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> RouteResult:
        """Build a result from the plain mapping a custom ``write_file`` returns."""
        content = payload.get("content")
        fmt = str(payload.get("format", ""))
        if fmt == FORMAT_FRONTMATTER_MD and isinstance(content, cabc.Mapping):
            content = PageContent(
                body=content.get("body", {}),
                frontmatter=dict(content.get("frontmatter") or {}),
            )
        elif isinstance(content, cabc.Mapping):
            content = dict(content)
        append = payload.get("append")
        return cls(
            content=typ.cast("PageContent | dict[str, typ.Any]", content),
            format=fmt,
            path=str(payload.get("path") or ""),
            append=None if append is None else bool(append),
        )


__all__ = [
    "CapabilityMissingError",
    "Entry",
    "MissingFieldError",
    "PageContent",
    "RouteResult",
    "RoutingError",
    "RoutingUtils",
    "Slugify",
]
