"""Interactive collection of setup answers.

:class:`SetupCollector` walks through the content models of a source, asks
whether each one is a page, a data object or skipped, and then configures the
chosen models one at a time: all pages first, then all data objects. Every
question goes through an injected :class:`Prompter`, so the same flow runs
against a terminal (:class:`ConsolePrompter`) or a scripted prompter in
tests. Field choices are decorated with example values drawn from the
source entries.

Example
-------
>>> from content_router.collector import ConsolePrompter, SetupCollector
>>> from content_router.source import load_source_data
>>> data = load_source_data("export/content.json")  # doctest: +SKIP
>>> answers = SetupCollector(ConsolePrompter(), data).run()  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .sampler import sample_field_examples
from .setup.models import (
    DataSpec,
    DirectoryCollection,
    FieldDerivedFile,
    LocationSpec,
    PageSpec,
    SetupAnswers,
    StaticFile,
)
from .slug import slugify

if typ.TYPE_CHECKING:
    from .source import ContentModel, SourceData


@dc.dataclass(frozen=True, slots=True)
class Choice:
    """One option of a select question."""

    label: str
    value: typ.Any


class Prompter(typ.Protocol):
    """Question primitives the collector relies on."""

    def select(self, message: str, choices: cabc.Sequence[Choice]) -> typ.Any:
        """Return the ``value`` of the chosen option."""
        ...

    def text(self, message: str, *, default: str | None = None) -> str:
        """Return free-form input, or ``default`` when left blank."""
        ...

    def confirm(self, message: str, *, default: bool = True) -> bool:
        """Return a yes/no answer."""
        ...

    def note(self, message: str) -> None:
        """Display an informational line."""
        ...


_PAGE = "page"
_DATA = "data"
_FIELD = "field"
_STATIC = "static"
_OTHER = "other"


class SetupCollector:
    """Ask the setup questions for every model of ``source``."""

    def __init__(self, prompter: Prompter, source: SourceData) -> None:
        self.prompter = prompter
        self.source = source

    def run(self) -> SetupAnswers:
        """Run the whole session and return the accumulated answers."""
        page_models: list[ContentModel] = []
        data_models: list[ContentModel] = []
        for model in self.source.models:
            kind = self.prompter.select(
                f"Choose a type for {model.display_name} ({model.ref.source}):",
                [Choice("Page", _PAGE), Choice("Data", _DATA), Choice("Skip", None)],
            )
            if kind == _PAGE:
                page_models.append(model)
            elif kind == _DATA:
                data_models.append(model)

        answers = SetupAnswers()
        for index, model in enumerate(page_models, start=1):
            self.prompter.note(
                f"Configuring page: {model.display_name} ({index} of {len(page_models)})"
            )
            answers = answers.with_page(self.collect_page(model))
        for index, model in enumerate(data_models, start=1):
            self.prompter.note(
                f"Configuring data object: {model.display_name} "
                f"({index} of {len(data_models)})"
            )
            answers = answers.with_data(self.collect_data(model))
        return answers

    def collect_page(self, model: ContentModel) -> PageSpec:
        """Ask the page questions for ``model``."""
        examples = self._examples(model)
        page_type = self.prompter.select(
            "What is the type of this page?",
            [
                Choice("Single page", "single"),
                Choice("Collection of entries", "collection"),
            ],
        )
        if page_type == "single":
            location = self._single_page_location(model, examples)
        else:
            location = self._collection_location(model, examples)

        layout_source = self.prompter.select(
            "Choose the name of the template (i.e. layout) for this page.",
            [
                Choice("It comes from one of the page fields", _FIELD),
                Choice("It's a static value that I will specify", _STATIC),
                Choice("None", None),
            ],
        )
        layout: str | None = None
        if layout_source == _FIELD:
            layout = self._choose_field(model, examples, "Select the layout field:")
        elif layout_source == _STATIC:
            layout = self.prompter.text("Insert the layout name")

        add_date_field = self.prompter.confirm(
            "Do you want to add a 'date' field to the frontmatter? (e.g. date: 2019-12-31)",
            default=True,
        )
        content_field = self.prompter.select(
            "Select the field that contains the page's content. "
            "The other fields will be added to the frontmatter.",
            [*self._field_choices(model, examples), Choice("None", None)],
        )
        return PageSpec(
            model=model.ref,
            location=location,
            content_field=content_field,
            layout=layout,
            layout_source=layout_source,
            add_date_field=add_date_field,
        )

    def collect_data(self, model: ContentModel) -> DataSpec:
        """Ask the data object questions for ``model``."""
        examples = self._examples(model)
        data_format = self.prompter.select(
            "Choose a format for the file where the data objects will be stored:",
            [Choice("JSON", "json"), Choice("YAML", "yml")],
        )
        default_name = f"data/{model.ref.model_name}.{data_format}"
        choices = [Choice(default_name, StaticFile(default_name))]
        if model.field_names:
            choices.append(Choice("It comes from one of the model fields", _FIELD))
        choices.append(Choice("Other", _OTHER))
        location: StaticFile | FieldDerivedFile = self.prompter.select(
            "Choose a location for the file:", choices
        )
        if location == _FIELD:
            location = FieldDerivedFile(
                self._choose_field(
                    model, examples, "Select the field that contains the file location"
                )
            )
        elif location == _OTHER:
            location = StaticFile(
                self.prompter.text("Insert the location for the file", default=default_name)
            )

        is_multiple = self.prompter.confirm(
            "Do you want to include multiple entries in the same file? "
            f"If so, multiple entries of {model.ref.model_name} will be added as a "
            "list to the file; if not, only one entry will be kept.",
            default=True,
        )
        return DataSpec(
            model=model.ref,
            location=location,
            format=data_format,
            is_multiple=is_multiple,
        )

    def _single_page_location(
        self, model: ContentModel, examples: dict[str, str]
    ) -> LocationSpec:
        choices = [Choice("It's a static value that I will specify", _STATIC)]
        if model.field_names:
            choices.insert(0, Choice("It comes from one of the page fields", _FIELD))
        source = self.prompter.select("Choose the file path for this page", choices)
        if source == _FIELD:
            return FieldDerivedFile(
                self._choose_field(
                    model,
                    examples,
                    "Choose the field that contains the path for this page:",
                    slug_examples=True,
                )
            )
        return StaticFile(
            self.prompter.text(
                "Choose a location for this page",
                default=f"content/{model.ref.model_name}.md",
            )
        )

    def _collection_location(
        self, model: ContentModel, examples: dict[str, str]
    ) -> DirectoryCollection:
        default_directory = f"content/{model.ref.model_name}"
        directory = self.prompter.select(
            "Choose the directory for this collection:",
            [Choice(default_directory, default_directory), Choice("Other", _OTHER)],
        )
        if directory == _OTHER:
            directory = self.prompter.text("Insert the location for this collection.")
        file_name_field = self._choose_field(
            model,
            examples,
            "Choose a field to generate the file name from:",
            slug_examples=True,
        )
        use_date = self.prompter.confirm(
            "Do you want to prefix file names with the creation date? "
            "(e.g. 2019-12-31-my-post.md)",
            default=False,
        )
        return DirectoryCollection(
            file_name_field=file_name_field,
            directory=directory.strip("/") or None,
            use_date=use_date,
        )

    def _choose_field(
        self,
        model: ContentModel,
        examples: dict[str, str],
        message: str,
        *,
        slug_examples: bool = False,
    ) -> str:
        if not model.field_names:
            return self.prompter.text(message)
        return self.prompter.select(
            message, self._field_choices(model, examples, slug_examples=slug_examples)
        )

    @staticmethod
    def _field_choices(
        model: ContentModel, examples: dict[str, str], *, slug_examples: bool = False
    ) -> list[Choice]:
        choices: list[Choice] = []
        for name in model.field_names:
            example = examples.get(name)
            if example and slug_examples:
                example = slugify(example)
            label = f"{name} (e.g. {example})" if example else name
            choices.append(Choice(label, name))
        return choices

    def _examples(self, model: ContentModel) -> dict[str, str]:
        return sample_field_examples(model.ref, model.field_names, self.source.objects)


class ConsolePrompter:
    """Prompter reading answers from stdin and writing questions to stdout."""

    def __init__(
        self,
        *,
        reader: cabc.Callable[[str], str] = input,
        writer: cabc.Callable[[str], None] = print,
    ) -> None:
        self._read = reader
        self._write = writer

    def select(self, message: str, choices: cabc.Sequence[Choice]) -> typ.Any:
        if not choices:
            msg = f"No choices available for '{message}'"
            raise ValueError(msg)
        self._write(message)
        for position, choice in enumerate(choices, start=1):
            self._write(f"  {position}) {choice.label}")
        while True:
            raw = self._read(f"Select [1-{len(choices)}] (default 1): ").strip()
            if not raw:
                return choices[0].value
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return choices[int(raw) - 1].value
            self._write(f"Please enter a number between 1 and {len(choices)}.")

    def text(self, message: str, *, default: str | None = None) -> str:
        suffix = f" [{default}]" if default else ""
        while True:
            raw = self._read(f"{message}{suffix}: ").strip()
            if raw:
                return raw
            if default is not None:
                return default
            self._write("A value is required.")

    def confirm(self, message: str, *, default: bool = True) -> bool:
        hint = "Y/n" if default else "y/N"
        while True:
            raw = self._read(f"{message} [{hint}]: ").strip().lower()
            if not raw:
                return default
            if raw in {"y", "yes"}:
                return True
            if raw in {"n", "no"}:
                return False
            self._write("Please answer 'y' or 'n'.")

    def note(self, message: str) -> None:
        self._write(f"\n{message}")


__all__ = ["Choice", "ConsolePrompter", "Prompter", "SetupCollector"]
