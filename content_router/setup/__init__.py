"""Describe, load and persist the routing choices gathered during setup.

This subpackage holds the typed dataclasses that make up a
:class:`SetupAnswers` value (one :class:`PageSpec` or :class:`DataSpec` per
configured content model) together with the YAML loader and writer that let a
session's answers be replayed without prompting. The order of the specs is
meaningful: it becomes the match priority of the compiled router.

Examples
--------
>>> from pathlib import Path
>>> from content_router.setup import load_setup_answers
>>> answers = load_setup_answers(Path("setup.yaml"))  # doctest: +SKIP
>>> answers.data[0].location  # doctest: +SKIP
StaticFile(file_name='data/authors.json')
"""

from .loader import dump_setup_answers, load_setup_answers, parse_setup_answers
from .models import (
    DataSpec,
    DirectoryCollection,
    FieldDerivedFile,
    LocationSpec,
    ModelRef,
    PageSpec,
    SetupAnswers,
    SetupAnswersError,
    StaticFile,
)

__all__ = [
    "DataSpec",
    "DirectoryCollection",
    "FieldDerivedFile",
    "LocationSpec",
    "ModelRef",
    "PageSpec",
    "SetupAnswers",
    "SetupAnswersError",
    "StaticFile",
    "dump_setup_answers",
    "load_setup_answers",
    "parse_setup_answers",
]
