"""Shared test fixtures and helpers for phpconcepts tests.

Provides:
- Parse helpers: extract_php(), concept()
- Git helpers: git_init()
- CliRunner fixtures: cli_runner, invoke_cli()
- Factory fixture: project_factory for custom PHP file layouts
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os
import subprocess

import pytest
from click.testing import CliRunner

# ===========================================================================
# Extraction helpers
# ===========================================================================


def extract_php(source_text: str, file_path: str = "test.php"):
    """Parse PHP source with tree-sitter and return the extracted concepts."""
    from phpconcepts.index.extraction import extract_source

    result = extract_source(source_text, file_path)
    assert result.errors == [], result.errors
    return result.concepts


def concept(concepts, name: str, concept_type: str | None = None):
    """Return the single concept named *name* (optionally of a given type)."""
    matches = [
        c for c in concepts
        if c.name == name and (concept_type is None or c.concept_type == concept_type)
    ]
    assert len(matches) == 1, f"expected one {name!r}, got {[c.id for c in matches]}"
    return matches[0]


# ===========================================================================
# Git helpers
# ===========================================================================


def git_init(path):
    """Initialize a git repo, add all files, and commit."""
    subprocess.run(["git", "init"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "user.email", "t@t.com"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "user.name", "Test"], cwd=path, capture_output=True)
    subprocess.run(["git", "add", "."], cwd=path, capture_output=True)
    subprocess.run(["git", "commit", "-m", "init"], cwd=path, capture_output=True)


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the phpconcepts CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["scan"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from phpconcepts.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None, expected_exit=0):
    """Parse JSON from a CliRunner result."""
    assert result.exit_code == expected_exit, (
        f"Command {command or '?'} exited {result.exit_code}:\n{result.output}"
    )
    text = result.output
    # A trailing "Error: ..." line from a partial run is not part of the JSON
    end = text.rfind("}")
    try:
        return json.loads(text[: end + 1])
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{text[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    for key in ("command", "version", "schema", "summary"):
        assert key in data, f"Missing {key!r} key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    summary = data["summary"]
    assert isinstance(summary, dict), f"summary should be dict, got {type(summary)}"
    assert isinstance(summary.get("verdict"), str)


# ===========================================================================
# Project fixtures
# ===========================================================================


@pytest.fixture
def project_factory(tmp_path_factory):
    """Factory fixture for creating custom project layouts.

    Usage:
        def test_something(project_factory):
            proj = project_factory({
                "src/User.php": "<?php class User {}",
                "vendor/lib/Dep.php": "<?php class Dep {}",
            })

    Returns a callable that accepts a dict of {relative_path: content}
    and returns the project path.  Pass git=True to commit the files.
    """

    def _create(files, *, git=False):
        proj = tmp_path_factory.mktemp("project")
        for rel_path, content in files.items():
            fp = proj / rel_path
            fp.parent.mkdir(parents=True, exist_ok=True)
            fp.write_text(content)
        if git:
            git_init(proj)
        return proj

    return _create
