"""Find example field values to decorate setup questions.

The collector shows ``fieldName (e.g. value)`` for every field choice so the
person answering can recognise which field holds a title, a slug or a body.
Sampling is advisory only and has no effect on routing.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ._constants import EXAMPLE_MAX_LENGTH, METADATA_KEY

if typ.TYPE_CHECKING:
    from .setup.models import ModelRef


def sample_field_examples(
    model: ModelRef,
    field_names: cabc.Sequence[str],
    entries: cabc.Iterable[cabc.Mapping[str, typ.Any]],
    *,
    max_length: int = EXAMPLE_MAX_LENGTH,
) -> dict[str, str]:
    """Return the first non-empty scalar value of each field, as a short string.

    Parameters
    ----------
    model : ModelRef
        Only entries whose metadata carries exactly this triple are sampled.
    field_names : Sequence[str]
        Fields to find examples for.
    entries : Iterable[Mapping[str, Any]]
        Candidate entries, scanned in order; the first usable value wins.
    max_length : int, optional
        Maximum length of each example after stripping (default 60).

    Returns
    -------
    dict[str, str]
        Mapping of field name to example; fields without a usable value are
        absent.
    """
    examples: dict[str, str] = {}
    for entry in entries:
        metadata = entry.get(METADATA_KEY)
        if not isinstance(metadata, cabc.Mapping) or not model.matches(metadata):
            continue
        for name in field_names:
            if name in examples:
                continue
            text = _scalar_text(entry.get(name))
            if text is None:
                continue
            text = text.strip()[:max_length]
            if text:
                examples[name] = text
        if len(examples) == len(field_names):
            break
    return examples


def _scalar_text(value: object) -> str | None:
    """Return the string form of booleans, numbers and strings, else None."""
    match value:
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer():
            return str(int(value))
        case int() | float() | str():
            return str(value)
        case _:
            return None


__all__ = ["sample_field_examples"]
