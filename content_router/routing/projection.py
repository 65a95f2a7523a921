"""Turn a matched entry into a RouteResult according to its spec.

Each function here is one half of a routing rule: given the entry fields
(metadata removed), the metadata mapping and the injected ``utils``, it
computes the content, format and path for a page or data spec. Field names
are only ever used as dictionary keys, so configured names containing quotes,
braces or other punctuation behave like any other key.

Missing fields resolve to ``None`` (or an empty path segment) unless strict
mode is requested, in which case :class:`MissingFieldError` is raised.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from content_router._constants import (
    CREATED_AT_KEY,
    DATE_PREFIX_LENGTH,
    FORMAT_FRONTMATTER_MD,
    PAGE_EXTENSION,
)
from content_router.setup.models import (
    DataSpec,
    DirectoryCollection,
    FieldDerivedFile,
    LocationSpec,
    PageSpec,
    StaticFile,
)

from .models import (
    CapabilityMissingError,
    MissingFieldError,
    PageContent,
    RouteResult,
    Slugify,
)


def project_page(
    spec: PageSpec,
    fields: cabc.Mapping[str, typ.Any],
    metadata: cabc.Mapping[str, typ.Any],
    utils: object,
    *,
    strict: bool = False,
) -> RouteResult:
    """Build the frontmatter-md descriptor for a page entry."""
    excluded: set[str] = set()
    if spec.content_field:
        excluded.add(spec.content_field)
        body = _field_value(fields, spec.content_field, strict=strict)
    else:
        body = {}
    if spec.layout_source == "field" and spec.layout:
        excluded.add(spec.layout)

    frontmatter = {key: value for key, value in fields.items() if key not in excluded}
    if spec.layout_source == "static":
        frontmatter["layout"] = spec.layout
    elif spec.layout_source == "field" and spec.layout:
        frontmatter["layout"] = _field_value(fields, spec.layout, strict=strict)
    created = _created_date(metadata)
    if spec.add_date_field and created:
        frontmatter["date"] = created

    return RouteResult(
        content=PageContent(body=body, frontmatter=frontmatter),
        format=FORMAT_FRONTMATTER_MD,
        path=resolve_path(spec.location, fields, metadata, utils, strict=strict),
    )


def project_data(
    spec: DataSpec,
    fields: cabc.Mapping[str, typ.Any],
    metadata: cabc.Mapping[str, typ.Any],
    utils: object,
    *,
    strict: bool = False,
) -> RouteResult:
    """Build the data-file descriptor carrying the entry fields verbatim."""
    return RouteResult(
        content=dict(fields),
        format=spec.format,
        path=resolve_path(spec.location, fields, metadata, utils, strict=strict),
        append=spec.is_multiple,
    )


def resolve_path(
    location: LocationSpec,
    fields: cabc.Mapping[str, typ.Any],
    metadata: cabc.Mapping[str, typ.Any],
    utils: object,
    *,
    strict: bool = False,
) -> str:
    """Compute the output path for ``location``.

    Parameters
    ----------
    location : LocationSpec
        Static file, field-derived file or directory collection.
    fields : Mapping[str, Any]
        Entry fields with metadata removed.
    metadata : Mapping[str, Any]
        Entry metadata; only ``createdAt`` is read, and only for dated
        collections.
    utils : object
        Object or mapping exposing ``slugify``; required for collections.
    strict : bool, optional
        Raise :class:`MissingFieldError` instead of emitting an empty segment.

    Returns
    -------
    str
        The path relative to the sink root, e.g.
        ``"content/posts/2024-03-15-hello-world.md"``.

    Raises
    ------
    CapabilityMissingError
        If a directory collection is routed without a ``slugify`` capability.
    """
    match location:
        case StaticFile(file_name=file_name):
            return file_name
        case FieldDerivedFile(file_name_field=field):
            return _as_text(_field_value(fields, field, strict=strict))
        case DirectoryCollection():
            slugify = _require_slugify(utils)
            parts: list[str] = []
            if location.directory:
                parts.append(f"{location.directory}/")
            if location.use_date:
                parts.append(f"{_created_date(metadata)}-")
            value = _field_value(fields, location.file_name_field, strict=strict)
            parts.append(f"{slugify(_as_text(value))}{PAGE_EXTENSION}")
            return "".join(parts)
    msg = f"Unsupported location {location!r}"  # pragma: no cover - exhaustive
    raise TypeError(msg)


def describe_location(location: LocationSpec) -> str:
    """Return a readable template of the path ``location`` produces."""
    match location:
        case StaticFile(file_name=file_name):
            return file_name
        case FieldDerivedFile(file_name_field=field):
            return f"{{{field}}}"
        case DirectoryCollection():
            prefix = f"{location.directory}/" if location.directory else ""
            date = "{createdAt:date}-" if location.use_date else ""
            stem = f"{{slugify({location.file_name_field})}}"
            return f"{prefix}{date}{stem}{PAGE_EXTENSION}"
    msg = f"Unsupported location {location!r}"  # pragma: no cover - exhaustive
    raise TypeError(msg)


def _field_value(
    fields: cabc.Mapping[str, typ.Any], name: str, *, strict: bool
) -> typ.Any:
    if strict and name not in fields:
        msg = f"Entry has no field '{name}'."
        raise MissingFieldError(msg)
    return fields.get(name)


def _created_date(metadata: cabc.Mapping[str, typ.Any]) -> str:
    created_at = metadata.get(CREATED_AT_KEY) or ""
    return str(created_at)[:DATE_PREFIX_LENGTH]


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _require_slugify(utils: object) -> Slugify:
    """Return the injected slugify capability or raise CapabilityMissingError."""
    if isinstance(utils, cabc.Mapping):
        slugify = utils.get("slugify")
    else:
        slugify = getattr(utils, "slugify", None)
    if not callable(slugify):
        msg = "utils.slugify is required to route directory collections."
        raise CapabilityMissingError(msg)
    return typ.cast("Slugify", slugify)


__all__ = ["describe_location", "project_data", "project_page", "resolve_path"]
