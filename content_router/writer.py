"""Write routed entries to disk.

:class:`FileWriter` is the default sink for the descriptors produced by the
router. It understands the three formats the router emits:

* ``frontmatter-md``: a YAML frontmatter block followed by the page body.
* ``json``: indented JSON.
* ``yml``: block-style YAML.

Descriptors flagged ``append`` accumulate into a list per path and are written
once; all others overwrite, so the last descriptor for a path wins. Paths are
resolved under the writer's output directory and must not escape it.
"""

from __future__ import annotations

import collections.abc as cabc
import io
import json
import logging
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML

from ._constants import FORMAT_FRONTMATTER_MD, FORMAT_JSON, FORMAT_YAML
from .routing.models import PageContent, RouteResult

logger = logging.getLogger(__name__)


class OutputPathError(ValueError):
    """Raised when a descriptor's path is empty or leaves the output directory."""


class UnsupportedFormatError(ValueError):
    """Raised when a descriptor names a format the writer cannot render."""


class FileWriter:
    """Persist RouteResults beneath an output directory."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self._yaml = _build_output_yaml()

    def write(
        self, results: cabc.Iterable[RouteResult | cabc.Mapping[str, typ.Any]]
    ) -> list[Path]:
        """Render and write ``results``, returning the written paths in order.

        Descriptors with an unsafe path are logged and skipped so one bad entry
        does not abort the batch. Unknown formats raise
        :class:`UnsupportedFormatError`.
        """
        pending: dict[Path, tuple[str, typ.Any]] = {}
        accumulating: set[Path] = set()
        for item in results:
            result = (
                item if isinstance(item, RouteResult) else RouteResult.from_mapping(item)
            )
            try:
                target = self.resolve_target(result.path)
            except OutputPathError as exc:
                logger.warning("Skipping %s descriptor: %s", result.format, exc)
                continue
            if result.append:
                if target in accumulating:
                    pending[target][1].append(result.content)
                else:
                    accumulating.add(target)
                    pending[target] = (result.format, [result.content])
            else:
                accumulating.discard(target)
                pending[target] = (result.format, result.content)

        written: list[Path] = []
        for target, (fmt, content) in pending.items():
            text = self.render(fmt, content)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
            written.append(target)
        return written

    def resolve_target(self, path: str) -> Path:
        """Return the filesystem path for a descriptor path."""
        if not path or not path.strip():
            msg = "path is empty"
            raise OutputPathError(msg)
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            msg = f"path '{path}' must stay inside the output directory"
            raise OutputPathError(msg)
        if relative.name in {"", ".", ".md"}:
            msg = f"path '{path}' has no file name"
            raise OutputPathError(msg)
        return self.output_dir.joinpath(*relative.parts)

    def render(self, fmt: str, content: typ.Any) -> str:
        """Render ``content`` in ``fmt``; lists come from appended descriptors."""
        match fmt:
            case "frontmatter-md":
                if isinstance(content, list):
                    return "\n".join(self._render_page(item) for item in content)
                return self._render_page(content)
            case "json":
                text = json.dumps(content, indent=2, ensure_ascii=False, default=str)
                return text + "\n"
            case "yml":
                return self._dump_yaml(content)
            case _:
                msg = (
                    f"Unsupported format '{fmt}'; expected one of "
                    f"{FORMAT_FRONTMATTER_MD}, {FORMAT_JSON}, {FORMAT_YAML}."
                )
                raise UnsupportedFormatError(msg)

    def _render_page(self, content: typ.Any) -> str:
        if isinstance(content, PageContent):
            body, frontmatter = content.body, content.frontmatter
        elif isinstance(content, cabc.Mapping):
            body, frontmatter = content.get("body"), content.get("frontmatter") or {}
        else:
            body, frontmatter = content, {}
        header = self._dump_yaml(dict(frontmatter)) if frontmatter else ""
        text = self._body_text(body)
        if text and not text.endswith("\n"):
            text += "\n"
        return f"---\n{header}---\n{text}"

    def _body_text(self, body: object) -> str:
        """Return markdown text for a body; structured bodies render as YAML."""
        match body:
            case None:
                return ""
            case str():
                return body
            case bool():
                return "true" if body else "false"
            case cabc.Mapping() | list() | tuple():
                return self._dump_yaml(_plain(body)) if body else ""
            case _:
                return str(body)

    def _dump_yaml(self, payload: typ.Any) -> str:
        buffer = io.StringIO()
        self._yaml.dump(payload, buffer)
        return buffer.getvalue()


def _build_output_yaml() -> YAML:
    # Round-trip mode keeps frontmatter keys in entry order.
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _plain(value: typ.Any) -> typ.Any:
    # The round-trip representer only knows dict and list containers.
    if isinstance(value, cabc.Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    return value


__all__ = ["FileWriter", "OutputPathError", "UnsupportedFormatError"]
