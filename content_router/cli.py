"""Cyclopts CLI entrypoint for configuring and running content routing.

The ``content-router`` console script collects routing choices interactively,
saves them as a setup YAML file, and replays that file headlessly to write
every routed entry of a source document to disk. Typical usage runs
``content-router setup`` once per content model set and
``content-router route`` in CI on every content export.

Examples
--------
Route an export into ``public`` using saved answers:

>>> from content_router.cli import app
>>> app.run(
...     ["route", "--setup", "setup.yaml", "--source", "export.json"]
... )  # doctest: +SKIP

Inspect the rule chain the answers compile to:

>>> app.run(["explain", "--setup", "setup.yaml"])  # doctest: +SKIP
1. page cms/p1/post -> content/posts/{createdAt:date}-{slugify(title)}.md [frontmatter-md]
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .collector import ConsolePrompter, SetupCollector
from .routing import RoutingUtils, compile_routes
from .setup import dump_setup_answers, load_setup_answers
from .slug import slugify
from .source import load_source_data
from .transform import TransformOptions, transform
from .writer import FileWriter

DEFAULT_SETUP = Path("setup.yaml")
DEFAULT_OUTPUT_DIR = Path("public")

app = App(
    name="content-router",
    config=cyclopts.config.Env("CONTENT_ROUTER_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Interactively choose how each content model is written.")
def setup(
    *,
    source: typ.Annotated[
        str, Parameter(help="Path or URL of the source document (models + objects)")
    ],
    output: typ.Annotated[
        Path, Parameter(help="Where to save the setup answers")
    ] = DEFAULT_SETUP,
) -> None:
    """Run the setup questions and save the answers as YAML.

    Parameters
    ----------
    source : str
        Local path or ``http(s)://`` URL of a JSON/YAML document with
        ``models`` and ``objects`` lists.
    output : Path, optional
        Destination of the setup answers; defaults to ``setup.yaml``.
    """
    data = load_source_data(source)
    answers = SetupCollector(ConsolePrompter(), data).run()
    written = dump_setup_answers(answers, output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Route every entry of a source document and write the files.")
def route(
    *,
    source: typ.Annotated[
        str, Parameter(help="Path or URL of the source document (models + objects)")
    ],
    setup: typ.Annotated[
        Path, Parameter(help="Path to the setup answers")
    ] = DEFAULT_SETUP,
    output_dir: typ.Annotated[
        Path, Parameter(help="Directory the routed files are written under")
    ] = DEFAULT_OUTPUT_DIR,
    full_asset_objects: typ.Annotated[
        bool, Parameter(help="Keep asset fields as full objects instead of URLs")
    ] = False,
    strict: typ.Annotated[
        bool, Parameter(help="Fail when an entry lacks a configured field")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log the routing decisions")] = False,
) -> None:
    """Compile the setup answers and write the routed entries.

    Parameters
    ----------
    source : str
        Local path or ``http(s)://`` URL of the source document.
    setup : Path, optional
        Setup answers produced by ``content-router setup``.
    output_dir : Path, optional
        Root directory for the written files; defaults to ``public``.
    full_asset_objects : bool, optional
        Skip reducing asset objects to their URL.
    strict : bool, optional
        Raise on missing fields instead of writing degraded paths or content.
    verbose : bool, optional
        Enable DEBUG logging, including the compiled rule chain.

    Raises
    ------
    MissingFieldError
        In strict mode, when an entry lacks a configured field.
    """
    _configure_logging(verbose)
    router = compile_routes(load_setup_answers(setup), strict=strict)
    data = load_source_data(source)
    routed = transform(
        data,
        TransformOptions(
            write_file=router,
            full_asset_objects=full_asset_objects,
            utils=RoutingUtils(slugify=slugify),
        ),
    )
    for path in FileWriter(output_dir).write(routed.files):
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the routing rules compiled from the setup answers.")
def explain(
    *,
    setup: typ.Annotated[
        Path, Parameter(help="Path to the setup answers")
    ] = DEFAULT_SETUP,
) -> None:
    """Print the compiled rule chain in evaluation order."""
    router = compile_routes(load_setup_answers(setup))
    lines = router.describe()
    if not lines:
        print("no routing rules configured")
    for line in lines:
        print(line)


def main() -> None:
    """Invoke the Cyclopts application behind the ``content-router`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
