"""composer.json insights: autoload namespaces, framework hints, priority paths."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

COMPOSER_FILE = "composer.json"

# Exact package -> framework hint
FRAMEWORK_PACKAGES = {
    "laravel/framework": "laravel",
    "laravel/lumen-framework": "lumen",
    "symfony/symfony": "symfony",
    "symfony/http-kernel": "symfony",
    "symfony/console": "symfony",
    "cakephp/cakephp": "cakephp",
    "codeigniter4/framework": "codeigniter",
    "yiisoft/yii2": "yii",
    "drupal/core": "drupal",
    "wordpress/wordpress": "wordpress",
    "johnpbloch/wordpress-core": "wordpress",
    "woocommerce/woocommerce": "woocommerce",
}

# Vendor prefix -> framework hint, for packages not listed above
FRAMEWORK_VENDORS = {
    "symfony/": "symfony",
    "laravel/": "laravel",
    "drupal/": "drupal",
}


@dataclass
class ComposerInsights:
    namespaces: dict[str, list[str]] = field(default_factory=dict)
    framework_hints: list[str] = field(default_factory=list)
    priority_paths: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "namespaces": {ns: list(paths) for ns, paths in self.namespaces.items()},
            "framework_hints": list(self.framework_hints),
            "priority_paths": [dict(p) for p in self.priority_paths],
        }


def _project_root(project_path: str | Path) -> Path:
    path = Path(project_path)
    return path.parent if path.is_file() else path


def load_composer_json(project_path: str | Path) -> dict[str, Any] | None:
    """Read composer.json from a project directory (or a file's directory).

    Returns None when the file is missing, unreadable, or not a JSON object.
    """
    composer_path = _project_root(project_path) / COMPOSER_FILE
    try:
        data = json.loads(composer_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("Ignoring unreadable %s: %s", composer_path, exc)
        return None
    if not isinstance(data, dict):
        log.warning("Ignoring %s: top level is not an object", composer_path)
        return None
    return data


def _normalize_path_fragment(fragment: str) -> str:
    # "" maps a namespace to the project root
    if fragment == "":
        return "."
    fragment = fragment.replace("\\", "/")
    if fragment.startswith("./"):
        fragment = fragment[2:]
    return fragment


def _autoload_entries(config: dict[str, Any], standard: str):
    for section_key in ("autoload", "autoload-dev"):
        section = config.get(section_key)
        if not isinstance(section, dict):
            continue
        mapping = section.get(standard)
        if not isinstance(mapping, dict):
            continue
        for namespace, paths in mapping.items():
            if isinstance(paths, str):
                paths = [paths]
            yield namespace, [p for p in paths if isinstance(p, str)]


def detect_frameworks(config: dict[str, Any]) -> list[str]:
    """Framework hints from require and require-dev packages, sorted."""
    packages = {**(config.get("require") or {}), **(config.get("require-dev") or {})}
    hints = set()
    for package in packages:
        if package in FRAMEWORK_PACKAGES:
            hints.add(FRAMEWORK_PACKAGES[package])
            continue
        for prefix, hint in FRAMEWORK_VENDORS.items():
            if package.startswith(prefix):
                hints.add(hint)
    return sorted(hints)


def extract_composer_insights(config: dict[str, Any] | None, project_path: str | Path) -> ComposerInsights:
    """Summarize PSR-4/PSR-0 autoload namespaces and framework hints.

    Paths for one namespace keep their declaration order (autoload before
    autoload-dev) without duplicates.  Priority paths pair each namespace
    with its directory, sorted by namespace then relative path.
    """
    if not config:
        return ComposerInsights()

    root = _project_root(project_path)
    namespaces: dict[str, list[str]] = {}
    priority: dict[tuple[str, str], dict[str, str]] = {}

    for standard in ("psr-4", "psr-0"):
        for namespace, paths in _autoload_entries(config, standard):
            known = namespaces.setdefault(namespace, [])
            for raw in paths:
                relative = _normalize_path_fragment(raw)
                if relative not in known:
                    known.append(relative)
                absolute = os.path.normpath(os.path.join(root, relative))
                priority.setdefault((namespace, absolute), {
                    "namespace": namespace,
                    "relative_path": relative,
                    "absolute_path": absolute,
                })

    priority_paths = sorted(priority.values(), key=lambda p: (p["namespace"], p["relative_path"]))
    return ComposerInsights(
        namespaces=namespaces,
        framework_hints=detect_frameworks(config),
        priority_paths=priority_paths,
    )
