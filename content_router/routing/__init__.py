"""Compile setup answers into a routing function and evaluate it per entry."""

from .compiler import compile_routes
from .models import (
    CapabilityMissingError,
    Entry,
    MissingFieldError,
    PageContent,
    RouteResult,
    RoutingError,
    RoutingUtils,
)
from .projection import resolve_path
from .router import EntryRouter, RouteRule

__all__ = [
    "CapabilityMissingError",
    "Entry",
    "EntryRouter",
    "MissingFieldError",
    "PageContent",
    "RouteResult",
    "RouteRule",
    "RoutingError",
    "RoutingUtils",
    "compile_routes",
    "resolve_path",
]
