"""PHP file discovery using git ls-files with fallback to os.walk."""

from __future__ import annotations

import fnmatch
import os
import subprocess
from pathlib import Path
from typing import Any

from phpconcepts.config import DEFAULT_CONFIG
from phpconcepts.index.parser import EXTENSION_MAP

# Directories to skip during os.walk fallback
SKIP_DIRS = frozenset({
    ".git", ".hg", ".svn", "node_modules", "__pycache__",
    ".tox", ".mypy_cache", ".pytest_cache", ".ruff_cache",
    "venv", ".venv", "env", ".env",
    ".idea", ".vscode",
})

VENDOR_DIR = "vendor"
TEMPLATE_SUFFIX = ".blade.php"
MINIFIED_SUFFIX = ".min.php"


def _is_skippable(rel_path: str, config: dict[str, Any]) -> bool:
    """Check whether a relative path should be skipped."""
    parts = rel_path.split("/")
    name = parts[-1].lower()
    _, ext = os.path.splitext(name)
    if ext not in EXTENSION_MAP:
        return True
    if name.endswith(MINIFIED_SUFFIX):
        return True
    if name.endswith(TEMPLATE_SUFFIX) and not config["include_templates"]:
        return True
    if VENDOR_DIR in parts[:-1] and not config["include_vendor"]:
        return True
    return any(fnmatch.fnmatch(rel_path, pattern) for pattern in config["exclude"])


def _git_ls_files(root: Path) -> list[str] | None:
    """Try to list files using git ls-files. Returns None if git unavailable."""
    try:
        result = subprocess.run(
            ["git", "ls-files", "--cached", "--others", "--exclude-standard"],
            cwd=str(root),
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.returncode != 0:
            return None
        return [p.strip() for p in result.stdout.splitlines() if p.strip()]
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _walk_files(root: Path) -> list[str]:
    """Fallback file discovery using os.walk, respecting common ignore dirs."""
    result = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for fname in filenames:
            full = os.path.join(dirpath, fname)
            try:
                rel = os.path.relpath(full, root)
            except (ValueError, OSError):
                continue
            result.append(rel)
    return result


def _filter_files(paths: list[str], root: Path, config: dict[str, Any]) -> list[str]:
    """Keep PHP sources that pass the skip rules and the size limit."""
    kept = []
    for rel_path in paths:
        if _is_skippable(rel_path, config):
            continue
        try:
            if (root / rel_path).stat().st_size > config["max_file_size"]:
                continue
        except OSError:
            continue
        kept.append(rel_path)
    return kept


def discover_files(root: str | Path, config: dict[str, Any] | None = None) -> list[str]:
    """Discover PHP source files in a project directory.

    Uses git ls-files when available, falls back to os.walk.
    Returns a sorted list of relative paths using forward slashes.
    """
    root = Path(root).resolve()
    config = {**DEFAULT_CONFIG, **(config or {})}
    raw = _git_ls_files(root)
    if raw is None:
        raw = _walk_files(root)

    raw = [p.replace("\\", "/") for p in raw]

    filtered = _filter_files(raw, root, config)
    filtered.sort()
    return filtered
