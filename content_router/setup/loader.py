"""Load and persist setup answers as YAML."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _build_data_spec,
    _build_page_spec,
    _data_payload,
    _page_payload,
)
from .models import SetupAnswers, SetupAnswersError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_setup_answers(path: Path) -> SetupAnswers:
    """Load the YAML file holding the page and data routing choices.

    Parameters
    ----------
    path : Path
        Filesystem path to the setup answers file (for example,
        ``setup.yaml``), usually written by ``content-router setup``.

    Returns
    -------
    SetupAnswers
        Page and data specs in file order, which is also their routing
        priority.

    Raises
    ------
    FileNotFoundError
        If the file does not exist at ``path``.
    SetupAnswersError
        If the top-level structure is not a mapping or a spec is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from content_router.setup import load_setup_answers
    >>> answers = load_setup_answers(Path("setup.yaml"))  # doctest: +SKIP
    >>> [spec.model.model_name for spec in answers.pages]  # doctest: +SKIP
    ['post']
    """
    if not path.exists():
        msg = f"Setup file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    return parse_setup_answers(loaded)


def parse_setup_answers(raw: object) -> SetupAnswers:
    """Build SetupAnswers from an already-decoded mapping."""
    if not isinstance(raw, dict):
        msg = "Top-level setup structure must be a mapping."
        raise SetupAnswersError(msg)

    pages_raw = raw.get("pages") or []
    data_raw = raw.get("data") or []
    if not isinstance(pages_raw, list) or not isinstance(data_raw, list):
        msg = "'pages' and 'data' must be lists."
        raise SetupAnswersError(msg)

    answers = SetupAnswers()
    for index, payload in enumerate(pages_raw):
        match payload:
            case dict():
                answers = answers.with_page(_build_page_spec(payload, index=index))
            case _:
                msg = f"Page #{index + 1} must be a mapping."
                raise SetupAnswersError(msg)
    for index, payload in enumerate(data_raw):
        match payload:
            case dict():
                answers = answers.with_data(_build_data_spec(payload, index=index))
            case _:
                msg = f"Data object #{index + 1} must be a mapping."
                raise SetupAnswersError(msg)
    return answers


def dump_setup_answers(answers: SetupAnswers, path: Path) -> Path:
    """Write ``answers`` to ``path`` so a later run can route headlessly."""
    document = {
        "pages": [_page_payload(spec) for spec in answers.pages],
        "data": [_data_payload(spec) for spec in answers.data],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        _build_roundtrip_yaml().dump(document, handle)
    return path


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


__all__ = ["dump_setup_answers", "load_setup_answers", "parse_setup_answers"]
