"""Utility helpers shared by the setup answers loader and writer."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from content_router._constants import DATA_FORMATS

from .models import (
    DataSpec,
    DirectoryCollection,
    FieldDerivedFile,
    LocationSpec,
    ModelRef,
    PageSpec,
    SetupAnswersError,
    StaticFile,
)

LAYOUT_SOURCES = ("field", "static")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _field_name(value: object | None) -> str | None:
    """Return a configured field name as written, or None when empty."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _require_field_name(
    payload: cabc.Mapping[str, typ.Any], key: str, *, where: str
) -> str:
    """Return ``payload[key]`` unstripped; field lookups use exact keys."""
    value = _field_name(payload.get(key))
    if value is None:
        msg = f"{where} is missing '{key}'."
        raise SetupAnswersError(msg)
    return value


def _build_model_ref(payload: object, *, where: str) -> ModelRef:
    """Build a ModelRef from its mapping form."""
    if not isinstance(payload, dict):
        msg = f"{where} must define a 'model' mapping."
        raise SetupAnswersError(msg)
    # Identity fields are compared verbatim at routing time, so no stripping.
    values: dict[str, str] = {}
    for key in ("model_name", "project_id", "source"):
        value = payload.get(key)
        if not isinstance(value, str):
            msg = f"{where} model is missing '{key}'."
            raise SetupAnswersError(msg)
        values[key] = value
    return ModelRef(**values)


def _build_location(payload: object, *, where: str) -> LocationSpec:
    """Build the location variant implied by the keys present in ``payload``."""
    match payload:
        case {"file_name": file_name}:
            name = _optional_str(file_name)
            if name is None:
                msg = f"{where} location has an empty 'file_name'."
                raise SetupAnswersError(msg)
            return StaticFile(file_name=name)
        case {"directory": _} | {"use_date": _}:
            return DirectoryCollection(
                file_name_field=_require_field_name(
                    payload, "file_name_field", where=f"{where} location"
                ),
                directory=_optional_str(payload.get("directory")),
                use_date=bool(payload.get("use_date", False)),
            )
        case {"file_name_field": _}:
            return FieldDerivedFile(
                file_name_field=_require_field_name(
                    payload, "file_name_field", where=f"{where} location"
                )
            )
        case _:
            msg = (
                f"{where} location must define 'file_name', 'file_name_field' "
                "or 'directory'."
            )
            raise SetupAnswersError(msg)


def _build_page_spec(payload: cabc.Mapping[str, typ.Any], *, index: int) -> PageSpec:
    """Build a PageSpec for one entry of the ``pages`` list."""
    where = f"Page #{index + 1}"
    layout_source = payload.get("layout_source")
    if layout_source is not None and layout_source not in LAYOUT_SOURCES:
        msg = f"{where} has unknown layout_source '{layout_source}'."
        raise SetupAnswersError(msg)
    layout = (
        _field_name(payload.get("layout"))
        if layout_source == "field"
        else _optional_str(payload.get("layout"))
    )
    if layout_source and layout is None:
        msg = f"{where} sets layout_source but no 'layout'."
        raise SetupAnswersError(msg)
    return PageSpec(
        model=_build_model_ref(payload.get("model"), where=where),
        location=_build_location(payload.get("location"), where=where),
        content_field=_field_name(payload.get("content_field")),
        layout=layout,
        layout_source=layout_source,
        add_date_field=bool(payload.get("add_date_field", False)),
    )


def _build_data_spec(payload: cabc.Mapping[str, typ.Any], *, index: int) -> DataSpec:
    """Build a DataSpec for one entry of the ``data`` list."""
    where = f"Data object #{index + 1}"
    location = _build_location(payload.get("location"), where=where)
    if isinstance(location, DirectoryCollection):
        msg = f"{where} location must be a static file or a field reference."
        raise SetupAnswersError(msg)
    data_format = payload.get("format", "json")
    if data_format not in DATA_FORMATS:
        msg = f"{where} has unknown format '{data_format}'."
        raise SetupAnswersError(msg)
    return DataSpec(
        model=_build_model_ref(payload.get("model"), where=where),
        location=location,
        format=data_format,
        is_multiple=bool(payload.get("is_multiple", False)),
    )


def _model_ref_payload(model: ModelRef) -> dict[str, str]:
    return {
        "model_name": model.model_name,
        "project_id": model.project_id,
        "source": model.source,
    }


def _location_payload(location: LocationSpec) -> dict[str, typ.Any]:
    """Return the mapping form of a location variant."""
    match location:
        case StaticFile(file_name=file_name):
            return {"file_name": file_name}
        case FieldDerivedFile(file_name_field=field):
            return {"file_name_field": field}
        case DirectoryCollection():
            payload: dict[str, typ.Any] = {}
            if location.directory:
                payload["directory"] = location.directory
            payload["file_name_field"] = location.file_name_field
            payload["use_date"] = location.use_date
            return payload
    msg = f"Unsupported location {location!r}"  # pragma: no cover - exhaustive
    raise TypeError(msg)


def _page_payload(spec: PageSpec) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "model": _model_ref_payload(spec.model),
        "location": _location_payload(spec.location),
    }
    if spec.content_field:
        payload["content_field"] = spec.content_field
    if spec.layout_source:
        payload["layout"] = spec.layout
        payload["layout_source"] = spec.layout_source
    if spec.add_date_field:
        payload["add_date_field"] = True
    return payload


def _data_payload(spec: DataSpec) -> dict[str, typ.Any]:
    return {
        "model": _model_ref_payload(spec.model),
        "location": _location_payload(spec.location),
        "format": spec.format,
        "is_multiple": spec.is_multiple,
    }


__all__ = [
    "LAYOUT_SOURCES",
    "_build_data_spec",
    "_build_location",
    "_build_model_ref",
    "_build_page_spec",
    "_data_payload",
    "_location_payload",
    "_optional_str",
    "_page_payload",
]
