"""Unit tests for loading source documents (models and entries)."""

from __future__ import annotations

import json
import typing as typ
from textwrap import dedent

import pytest

from content_router import source as source_module
from content_router.setup import ModelRef
from content_router.source import SourceDataError, load_source_data, parse_source_data

if typ.TYPE_CHECKING:
    from pathlib import Path

DOCUMENT = {
    "models": [
        {
            "modelName": "post",
            "projectId": "p1",
            "source": "cms",
            "modelLabel": "Blog post",
            "fieldNames": ["title", "body"],
        }
    ],
    "objects": [
        {
            "__metadata": {"modelName": "post", "projectId": "p1", "source": "cms"},
            "title": "Hello",
        }
    ],
}


def test_load_json_document(tmp_path: Path) -> None:
    """JSON documents produce typed models and entry mappings."""
    path = tmp_path / "content.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")

    data = load_source_data(path)

    assert data.models[0].ref == ModelRef("post", "p1", "cms")
    assert data.models[0].display_name == "Blog post"
    assert data.models[0].field_names == ("title", "body")
    assert data.objects[0]["title"] == "Hello"
    assert data.files == ()


def test_load_yaml_document(tmp_path: Path) -> None:
    """YAML documents are recognised by their suffix."""
    path = tmp_path / "content.yml"
    path.write_text(
        dedent(
            """
            models:
              - {modelName: author, projectId: p1, source: cms}
            objects: []
            """
        ),
        encoding="utf-8",
    )

    data = load_source_data(str(path))

    assert data.models[0].display_name == "author"
    assert data.models[0].field_names == ()


def test_urls_are_downloaded(monkeypatch: pytest.MonkeyPatch) -> None:
    """HTTP locations are fetched and decoded like local files."""
    requested: list[str] = []

    def fake_fetch(url: str) -> str:
        requested.append(url)
        return json.dumps(DOCUMENT)

    monkeypatch.setattr(source_module, "_fetch_text", fake_fetch)

    data = load_source_data("https://cms.example/export.json")

    assert requested == ["https://cms.example/export.json"]
    assert len(data.objects) == 1


def test_missing_file_raises(tmp_path: Path) -> None:
    """Missing local documents raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_source_data(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path: Path) -> None:
    """Undecodable JSON is reported as SourceDataError."""
    path = tmp_path / "content.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SourceDataError, match="not valid JSON"):
        load_source_data(path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """Unparseable YAML is reported as SourceDataError too."""
    path = tmp_path / "content.yaml"
    path.write_text("models: [unclosed\n", encoding="utf-8")

    with pytest.raises(SourceDataError, match="not valid YAML"):
        load_source_data(path)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (["models"], "mapping"),
        ({"models": {"modelName": "post"}}, "lists"),
        ({"models": [{"modelName": "post"}]}, "projectId"),
        ({"objects": ["entry"]}, "Object #1"),
    ],
)
def test_malformed_documents_are_rejected(payload: object, message: str) -> None:
    """Structural problems name the offending part."""
    with pytest.raises(SourceDataError, match=message):
        parse_source_data(payload)
