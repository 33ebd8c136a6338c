"""PHP file discovery tests."""

from __future__ import annotations

import shutil

import pytest

from phpconcepts.index.discovery import discover_files

LAYOUT = {
    "src/UserService.php": "<?php class UserService {}",
    "src/helpers.inc": "<?php function helper() {}",
    "src/compiled.min.php": "<?php // minified helper ?>",
    "resources/views/example.blade.php": "<div>{{ $user->name }}</div>",
    "vendor/compiled/cache.php": "<?php return [];",
    "composer.json": "{}",
    "README.md": "# demo",
}


def test_defaults_skip_vendor_templates_and_minified(project_factory):
    proj = project_factory(LAYOUT)
    assert discover_files(proj) == ["src/UserService.php", "src/helpers.inc"]


def test_templates_and_vendor_can_be_included(project_factory):
    proj = project_factory(LAYOUT)
    files = discover_files(proj, {"include_templates": True, "include_vendor": True})
    assert "resources/views/example.blade.php" in files
    assert "vendor/compiled/cache.php" in files
    assert "src/compiled.min.php" not in files


def test_exclude_globs(project_factory):
    proj = project_factory({
        "src/A.php": "<?php class A {}",
        "tests/ATest.php": "<?php class ATest {}",
    })
    assert discover_files(proj, {"exclude": ["tests/*"]}) == ["src/A.php"]


def test_oversized_files_are_skipped(project_factory):
    proj = project_factory({
        "small.php": "<?php class S {}",
        "big.php": "<?php\n" + "// filler\n" * 200,
    })
    assert discover_files(proj, {"max_file_size": 100}) == ["small.php"]


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_git_listing_respects_gitignore(project_factory):
    proj = project_factory({
        ".gitignore": "generated/\n",
        "src/Keep.php": "<?php class Keep {}",
        "generated/Proxy.php": "<?php class Proxy {}",
    }, git=True)
    assert discover_files(proj) == ["src/Keep.php"]
