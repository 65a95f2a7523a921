"""Apply a ``write_file`` function to every entry and queue its results.

This is the host-facing step of the pipeline: it takes the loaded
:class:`~content_router.source.SourceData`, optionally flattens asset values
down to their URL, hands each entry to ``write_file(entry, utils)`` (usually a
compiled :class:`~content_router.routing.EntryRouter`) and appends whatever
comes back onto the existing file queue, preserving entry order.

Example
-------
>>> from content_router.routing import RoutingUtils, compile_routes
>>> from content_router.transform import TransformOptions, transform
>>> options = TransformOptions(write_file=compile_routes(answers))  # doctest: +SKIP
>>> transform(data, options).files  # doctest: +SKIP
(RouteResult(...), ...)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ._constants import ASSET_MODEL_NAME, ASSET_URL_KEY, METADATA_KEY, MODEL_NAME_KEY
from .routing.models import RoutingUtils
from .slug import slugify

if typ.TYPE_CHECKING:
    from .source import SourceData

logger = logging.getLogger(__name__)

WriteFile = cabc.Callable[[cabc.Mapping[str, typ.Any], typ.Any], typ.Any]


@dc.dataclass(slots=True)
class TransformOptions:
    """Host options for :func:`transform`.

    Attributes
    ----------
    write_file : Callable | None
        ``(entry, utils) -> result | list[result] | None``. When it is not
        callable the data passes through untouched.
    full_asset_objects : bool
        Keep asset values as full objects instead of reducing them to URLs.
    utils : RoutingUtils | None
        Capabilities passed to ``write_file``; defaults to the built-in
        :func:`~content_router.slug.slugify`.
    """

    write_file: WriteFile | None = None
    full_asset_objects: bool = False
    utils: RoutingUtils | None = None


def transform(data: SourceData, options: TransformOptions) -> SourceData:
    """Return ``data`` with the routed results appended to ``data.files``."""
    write_file = options.write_file
    if not callable(write_file):
        return data

    utils = options.utils or RoutingUtils(slugify=slugify)
    queued: list[typ.Any] = []
    for entry in data.objects:
        processed = entry if options.full_asset_objects else flatten_assets(entry)
        result = write_file(processed, utils)
        if not result:
            logger.debug("No route for entry %s", _entry_label(entry))
            continue
        if isinstance(result, list | tuple):
            queued.extend(result)
        else:
            queued.append(result)
    return dc.replace(data, files=(*data.files, *queued))


def flatten_assets(entry: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Replace every asset-valued field of ``entry`` with the asset's URL."""
    return {
        name: value.get(ASSET_URL_KEY) if is_asset(value) else value
        for name, value in entry.items()
    }


def is_asset(value: object) -> bool:
    """Return whether ``value`` is an asset object carrying the asset marker."""
    if not isinstance(value, cabc.Mapping):
        return False
    metadata = value.get(METADATA_KEY)
    return (
        isinstance(metadata, cabc.Mapping)
        and metadata.get(MODEL_NAME_KEY) == ASSET_MODEL_NAME
    )


def _entry_label(entry: cabc.Mapping[str, typ.Any]) -> str:
    metadata = entry.get(METADATA_KEY)
    if isinstance(metadata, cabc.Mapping):
        return str(metadata.get("id") or metadata.get(MODEL_NAME_KEY) or "<unknown>")
    return "<no metadata>"


__all__ = [
    "TransformOptions",
    "WriteFile",
    "flatten_assets",
    "is_asset",
    "transform",
]
