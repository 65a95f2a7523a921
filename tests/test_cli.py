"""Tests for the ``content-router`` CLI commands.

Most tests invoke the command functions directly with temporary setup and
source files so the full pipeline (load, compile, transform, write) runs in
process. The command-line tests run ``python -m content_router`` in a
subprocess so cyclopts parses the flags and ``CONTENT_ROUTER_*`` variables.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from textwrap import dedent

import msgspec.json as msgspec_json
import pytest

from content_router import cli
from content_router.collector import ConsolePrompter
from content_router.routing import MissingFieldError
from content_router.setup import StaticFile, load_setup_answers

REPO_ROOT = Path(__file__).resolve().parents[1]
META = {"projectId": "p1", "source": "cms"}


@pytest.fixture
def source_path(tmp_path: Path) -> Path:
    """Write a source document with two posts, two authors and an asset."""
    document = {
        "models": [
            {**META, "modelName": "post", "fieldNames": ["title", "body"]},
            {**META, "modelName": "author", "fieldNames": ["name", "avatar"]},
        ],
        "objects": [
            {
                "__metadata": {
                    **META,
                    "modelName": "post",
                    "createdAt": "2024-03-15T10:00:00Z",
                },
                "title": "Hello World",
                "body": "First post.",
            },
            {
                "__metadata": {
                    **META,
                    "modelName": "post",
                    "createdAt": "2024-04-01T08:30:00Z",
                },
                "title": "Second Post",
                "body": "More words.",
            },
            {
                "__metadata": {**META, "modelName": "author"},
                "name": "Ada",
                "avatar": {
                    "__metadata": {**META, "modelName": "__asset"},
                    "url": "https://cdn.example/ada.png",
                },
            },
            {"__metadata": {**META, "modelName": "author"}, "name": "Grace"},
        ],
    }
    path = tmp_path / "content.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def setup_path(tmp_path: Path) -> Path:
    """Write setup answers routing posts to a dated collection."""
    path = tmp_path / "setup.yaml"
    path.write_text(
        dedent(
            """
            pages:
              - model: {model_name: post, project_id: p1, source: cms}
                location: {directory: content/posts, file_name_field: title, use_date: true}
                content_field: body
                layout: post
                layout_source: static
            data:
              - model: {model_name: author, project_id: p1, source: cms}
                location: {file_name: data/authors.json}
                format: json
                is_multiple: true
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


def test_route_writes_every_routed_entry(
    tmp_path: Path,
    source_path: Path,
    setup_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Posts become markdown pages and authors share one JSON file."""
    out = tmp_path / "public"

    cli.route(source=str(source_path), setup=setup_path, output_dir=out)

    first = out / "content" / "posts" / "2024-03-15-hello-world.md"
    assert first.read_text(encoding="utf-8") == (
        "---\ntitle: Hello World\nlayout: post\n---\nFirst post.\n"
    )
    assert (out / "content" / "posts" / "2024-04-01-second-post.md").exists()
    authors = msgspec_json.decode((out / "data" / "authors.json").read_bytes())
    assert authors == [
        {"name": "Ada", "avatar": "https://cdn.example/ada.png"},
        {"name": "Grace"},
    ]
    printed = capsys.readouterr().out.splitlines()
    assert len(printed) == 3
    assert all(line.startswith("wrote ") for line in printed)


def test_route_keeps_full_assets_on_request(
    tmp_path: Path, source_path: Path, setup_path: Path
) -> None:
    """``--full-asset-objects`` leaves asset mappings intact."""
    out = tmp_path / "public"

    cli.route(
        source=str(source_path),
        setup=setup_path,
        output_dir=out,
        full_asset_objects=True,
    )

    authors = msgspec_json.decode((out / "data" / "authors.json").read_bytes())
    assert authors[0]["avatar"]["url"] == "https://cdn.example/ada.png"


def test_route_strict_mode_fails_on_missing_fields(
    tmp_path: Path, source_path: Path
) -> None:
    """Strict routing surfaces a missing content field."""
    setup_path = tmp_path / "strict.yaml"
    setup_path.write_text(
        dedent(
            """
            pages:
              - model: {model_name: post, project_id: p1, source: cms}
                location: {file_name_field: permalink}
            """
        ),
        encoding="utf-8",
    )

    with pytest.raises(MissingFieldError, match="permalink"):
        cli.route(
            source=str(source_path),
            setup=setup_path,
            output_dir=tmp_path / "public",
            strict=True,
        )


def test_explain_prints_rule_chain(
    setup_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``explain`` lists the compiled rules in priority order."""
    cli.explain(setup=setup_path)

    assert capsys.readouterr().out.splitlines() == [
        "1. page cms/p1/post -> "
        "content/posts/{createdAt:date}-{slugify(title)}.md [frontmatter-md]",
        "2. data cms/p1/author -> data/authors.json [json] (append)",
    ]


def test_setup_saves_collected_answers(
    tmp_path: Path, source_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``setup`` runs the collector over the console and saves the answers."""
    replies = iter(
        [
            "3",  # post: skip
            "2",  # author: data
            "1",  # JSON
            "",  # data/author.json
            "y",  # multiple entries
        ]
    )
    monkeypatch.setattr(
        cli,
        "ConsolePrompter",
        lambda: ConsolePrompter(
            reader=lambda _prompt: next(replies), writer=lambda _line: None
        ),
    )
    output = tmp_path / "answers" / "setup.yaml"

    cli.setup(source=str(source_path), output=output)

    answers = load_setup_answers(output)
    assert answers.pages == ()
    assert answers.data[0].location == StaticFile("data/author.json")
    assert answers.data[0].is_multiple is True


def _run_cli(
    args: list[str], *, cwd: Path, env: dict[str, str] | None = None
) -> subprocess.CompletedProcess[str]:
    """Run ``python -m content_router`` with a clean ``CONTENT_ROUTER_*`` env."""
    run_env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("CONTENT_ROUTER_")
    }
    run_env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(REPO_ROOT), os.environ.get("PYTHONPATH")])
    )
    run_env.update(env or {})
    return subprocess.run(  # noqa: S603 - inputs are controlled fixture paths
        [sys.executable, "-m", "content_router", *args],
        cwd=cwd,
        env=run_env,
        capture_output=True,
        text=True,
        timeout=120,
        check=False,
    )


def test_route_command_line_flags(
    tmp_path: Path, source_path: Path, setup_path: Path
) -> None:
    """Flags reach the route command through cyclopts parsing."""
    result = _run_cli(
        [
            "route",
            "--source",
            str(source_path),
            "--setup",
            str(setup_path),
            "--output-dir",
            "site",
            "--full-asset-objects",
            "--verbose",
        ],
        cwd=tmp_path,
    )

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "site" / "content" / "posts" / "2024-03-15-hello-world.md").exists()
    authors = msgspec_json.decode((tmp_path / "site" / "data" / "authors.json").read_bytes())
    assert authors[0]["avatar"]["url"] == "https://cdn.example/ada.png", (
        "--full-asset-objects should keep the asset mapping"
    )
    assert result.stdout.splitlines() == [
        f"wrote {Path('site', 'content', 'posts', '2024-03-15-hello-world.md')}",
        f"wrote {Path('site', 'content', 'posts', '2024-04-01-second-post.md')}",
        f"wrote {Path('site', 'data', 'authors.json')}",
    ]
    assert "Compiled 2 routing rule(s)" in result.stderr, (
        "--verbose should log the compiled rule chain"
    )


def test_route_output_dir_from_environment(
    tmp_path: Path, source_path: Path, setup_path: Path
) -> None:
    """``CONTENT_ROUTER_OUTPUT_DIR`` supplies ``--output-dir``."""
    result = _run_cli(
        ["route", "--source", str(source_path), "--setup", str(setup_path)],
        cwd=tmp_path,
        env={"CONTENT_ROUTER_OUTPUT_DIR": str(tmp_path / "from-env")},
    )

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "from-env" / "data" / "authors.json").exists()
    assert not (tmp_path / "public").exists(), "the default output dir was used"
    assert "Compiled" not in result.stderr, "rule chain logged without --verbose"


def test_route_strict_flag_fails_the_command(
    tmp_path: Path, source_path: Path
) -> None:
    """``--strict`` turns a missing path field into a failing exit status."""
    setup_path = tmp_path / "strict.yaml"
    setup_path.write_text(
        dedent(
            """
            pages:
              - model: {model_name: post, project_id: p1, source: cms}
                location: {file_name_field: permalink}
            """
        ),
        encoding="utf-8",
    )

    lenient = _run_cli(
        ["route", "--source", str(source_path), "--setup", str(setup_path)],
        cwd=tmp_path,
    )
    strict = _run_cli(
        ["route", "--source", str(source_path), "--setup", str(setup_path), "--strict"],
        cwd=tmp_path,
    )

    assert lenient.returncode == 0, lenient.stderr
    assert strict.returncode != 0
    assert "MissingFieldError" in strict.stderr
    assert "permalink" in strict.stderr
