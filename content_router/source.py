"""Load the content models and entries that setup and routing operate on.

A source document is a JSON or YAML mapping with two lists: ``models``
describes each content model (``modelName``, ``projectId``, ``source``,
optional ``modelLabel`` and ``fieldNames``) and ``objects`` holds the entries
themselves, each carrying a ``__metadata`` mapping. Documents are read from a
local file or downloaded over HTTP(S).

Example
-------
>>> from content_router.source import load_source_data
>>> data = load_source_data("export/content.json")  # doctest: +SKIP
>>> [model.ref.model_name for model in data.models]  # doctest: +SKIP
['post', 'author']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from urllib3.util.retry import Retry

from ._constants import MODEL_NAME_KEY, PROJECT_ID_KEY, SOURCE_KEY
from .setup.models import ModelRef

_YAML_SUFFIXES = (".yaml", ".yml")


class SourceDataError(ValueError):
    """Raised when a source document does not describe models and entries."""


@dc.dataclass(frozen=True, slots=True)
class ContentModel:
    """A content model offered to the setup collector."""

    ref: ModelRef
    label: str | None = None
    field_names: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        return self.label or self.ref.model_name


@dc.dataclass(frozen=True, slots=True)
class SourceData:
    """Models, entries and the host's file queue."""

    models: tuple[ContentModel, ...] = ()
    objects: tuple[cabc.Mapping[str, typ.Any], ...] = ()
    files: tuple[typ.Any, ...] = ()


def load_source_data(location: str | Path) -> SourceData:
    """Read a source document from a path or an ``http(s)://`` URL.

    Raises
    ------
    FileNotFoundError
        If a local path does not exist.
    requests.HTTPError
        If the download fails after retries.
    SourceDataError
        If the document is not a mapping with well-formed ``models`` and
        ``objects`` lists.
    """
    text = str(location)
    if urlsplit(text).scheme in {"http", "https"}:
        raw = _decode(_fetch_text(text), suffix=Path(urlsplit(text).path).suffix)
    else:
        path = Path(location)
        if not path.exists():
            msg = f"Source file '{path}' not found."
            raise FileNotFoundError(msg)
        raw = _decode(path.read_text(encoding="utf-8"), suffix=path.suffix)
    return parse_source_data(raw)


def parse_source_data(raw: object) -> SourceData:
    """Build SourceData from a decoded JSON/YAML document."""
    if not isinstance(raw, cabc.Mapping):
        msg = "Top-level source structure must be a mapping."
        raise SourceDataError(msg)
    models_raw = raw.get("models") or []
    objects_raw = raw.get("objects") or []
    if not isinstance(models_raw, list) or not isinstance(objects_raw, list):
        msg = "'models' and 'objects' must be lists."
        raise SourceDataError(msg)

    models = tuple(
        _build_content_model(payload, index=index)
        for index, payload in enumerate(models_raw)
    )
    objects: list[cabc.Mapping[str, typ.Any]] = []
    for index, payload in enumerate(objects_raw):
        if not isinstance(payload, cabc.Mapping):
            msg = f"Object #{index + 1} must be a mapping."
            raise SourceDataError(msg)
        objects.append(dict(payload))
    return SourceData(models=models, objects=tuple(objects))


def _build_content_model(payload: object, *, index: int) -> ContentModel:
    if not isinstance(payload, cabc.Mapping):
        msg = f"Model #{index + 1} must be a mapping."
        raise SourceDataError(msg)
    values: list[str] = []
    for key in (MODEL_NAME_KEY, PROJECT_ID_KEY, SOURCE_KEY):
        value = payload.get(key)
        if not isinstance(value, str):
            msg = f"Model #{index + 1} is missing '{key}'."
            raise SourceDataError(msg)
        values.append(value)
    field_names = payload.get("fieldNames") or []
    label = payload.get("modelLabel")
    return ContentModel(
        ref=ModelRef(*values),
        label=str(label) if label else None,
        field_names=tuple(str(name) for name in field_names),
    )


def _decode(text: str, *, suffix: str) -> object:
    if suffix.lower() in _YAML_SUFFIXES:
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            return loader.load(text)
        except YAMLError as exc:
            msg = f"Source document is not valid YAML: {exc}"
            raise SourceDataError(msg) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Source document is not valid JSON: {exc}"
        raise SourceDataError(msg) from exc


def _fetch_text(url: str) -> str:
    """Download ``url`` with retries on transient server errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        resp = session.get(url, timeout=30)
        resp.raise_for_status()
        return resp.text
    finally:
        session.close()


__all__ = [
    "ContentModel",
    "SourceData",
    "SourceDataError",
    "load_source_data",
    "parse_source_data",
]
