"""Typed dataclasses describing the answers collected during setup."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from content_router._constants import (
    FORMAT_JSON,
    MODEL_NAME_KEY,
    PROJECT_ID_KEY,
    SOURCE_KEY,
)


class SetupAnswersError(ValueError):
    """Raised when setup answers are invalid or incomplete."""


LayoutSource = typ.Literal["field", "static"]
DataFormat = typ.Literal["json", "yml"]


@dc.dataclass(frozen=True, slots=True)
class ModelRef:
    """Identify a content model by its exact ``(name, project, source)`` triple."""

    model_name: str
    project_id: str
    source: str

    def matches(self, metadata: cabc.Mapping[str, typ.Any]) -> bool:
        """Return whether entry metadata carries exactly this triple."""
        return (
            metadata.get(MODEL_NAME_KEY) == self.model_name
            and metadata.get(PROJECT_ID_KEY) == self.project_id
            and metadata.get(SOURCE_KEY) == self.source
        )

    def label(self) -> str:
        """Return a compact ``source/project/model`` label for logs."""
        return f"{self.source}/{self.project_id}/{self.model_name}"


@dc.dataclass(frozen=True, slots=True)
class StaticFile:
    """Write every matching entry to the same fixed path."""

    file_name: str


@dc.dataclass(frozen=True, slots=True)
class FieldDerivedFile:
    """Take the output path verbatim from an entry field."""

    file_name_field: str


@dc.dataclass(frozen=True, slots=True)
class DirectoryCollection:
    """Write one markdown file per entry inside an optional directory.

    Attributes
    ----------
    file_name_field : str
        Entry field whose slugified value becomes the file stem.
    directory : str | None
        Directory prefix joined with ``/``; omitted when ``None`` or empty.
    use_date : bool
        Prefix the file stem with the ``YYYY-MM-DD`` date of ``createdAt``.
    """

    file_name_field: str
    directory: str | None = None
    use_date: bool = False


LocationSpec = StaticFile | FieldDerivedFile | DirectoryCollection


@dc.dataclass(frozen=True, slots=True)
class PageSpec:
    """Routing choices for a model rendered as a frontmatter + markdown page."""

    model: ModelRef
    location: LocationSpec
    content_field: str | None = None
    layout: str | None = None
    layout_source: LayoutSource | None = None
    add_date_field: bool = False


@dc.dataclass(frozen=True, slots=True)
class DataSpec:
    """Routing choices for a model serialized verbatim as a data file."""

    model: ModelRef
    location: StaticFile | FieldDerivedFile
    format: DataFormat = FORMAT_JSON
    is_multiple: bool = False


@dc.dataclass(frozen=True, slots=True)
class SetupAnswers:
    """Ordered page and data specs; order is the routing priority."""

    pages: tuple[PageSpec, ...] = ()
    data: tuple[DataSpec, ...] = ()

    def with_page(self, spec: PageSpec) -> SetupAnswers:
        """Return a copy with ``spec`` appended to the page specs."""
        return dc.replace(self, pages=(*self.pages, spec))

    def with_data(self, spec: DataSpec) -> SetupAnswers:
        """Return a copy with ``spec`` appended to the data specs."""
        return dc.replace(self, data=(*self.data, spec))


__all__ = [
    "DataFormat",
    "DataSpec",
    "DirectoryCollection",
    "FieldDerivedFile",
    "LayoutSource",
    "LocationSpec",
    "ModelRef",
    "PageSpec",
    "SetupAnswers",
    "SetupAnswersError",
    "StaticFile",
]
