"""Unit tests for example field sampling used by setup prompts."""

from __future__ import annotations

from content_router.sampler import sample_field_examples
from content_router.setup import ModelRef

POST = ModelRef("post", "p1", "cms")


def _entry(model_name: str = "post", **fields: object) -> dict[str, object]:
    metadata = {"modelName": model_name, "projectId": "p1", "source": "cms"}
    return {"__metadata": metadata, **fields}


def test_first_non_empty_scalar_wins() -> None:
    """Each field takes the first usable value across matching entries."""
    entries = [
        _entry(title="  ", views=3, draft=False, tags=["a"]),
        _entry(title="First title", views=9, tags=["b"]),
        _entry(title="Second title"),
    ]

    examples = sample_field_examples(
        POST, ["title", "views", "draft", "tags", "absent"], entries
    )

    assert examples == {"title": "First title", "views": "3", "draft": "false"}


def test_other_models_and_bare_entries_are_skipped() -> None:
    """Only entries whose metadata matches the model exactly are sampled."""
    entries = [
        {"title": "no metadata"},
        _entry("author", title="Author name"),
        _entry(title="Post title"),
    ]

    assert sample_field_examples(POST, ["title"], entries) == {"title": "Post title"}


def test_examples_are_truncated() -> None:
    """Values are stripped, then cut to ``max_length`` characters."""
    entries = [_entry(body="  " + "x" * 100)]

    examples = sample_field_examples(POST, ["body"], entries)
    short = sample_field_examples(POST, ["body"], entries, max_length=5)

    assert examples["body"] == "x" * 60
    assert short["body"] == "xxxxx"


def test_whole_floats_drop_their_fraction() -> None:
    """Integral floats render like integers; other floats keep their digits."""
    entries = [_entry(price=1.0, rating=4.5)]

    examples = sample_field_examples(POST, ["price", "rating"], entries)

    assert examples == {"price": "1", "rating": "4.5"}
