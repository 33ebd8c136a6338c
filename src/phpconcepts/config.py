"""Project configuration: discovery, loading, validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from phpconcepts.exit_codes import ConfigError

CONFIG_NAME = ".phpconcepts.json"

DEFAULT_CONFIG: dict[str, Any] = {
    "exclude": [],
    "include_templates": False,
    "include_vendor": False,
    "max_file_size": 1_000_000,
}


def find_config_root(start: str | Path = ".") -> Path | None:
    """Walk up from *start* looking for a .phpconcepts.json file.

    Returns the directory containing the config, or None.
    """
    current = Path(start).resolve()
    while True:
        if (current / CONFIG_NAME).exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def load_config(root: str | Path) -> dict[str, Any]:
    """Read .phpconcepts.json from *root*, merged over the defaults.

    A missing file yields the defaults.  Raises ConfigError when the file
    is not valid JSON or a known key has the wrong type.
    """
    config = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_CONFIG.items()}
    config_path = Path(root) / CONFIG_NAME
    if not config_path.exists():
        return config
    try:
        cfg = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    _validate_config(cfg)
    config.update({k: v for k, v in cfg.items() if k in DEFAULT_CONFIG})
    return config


def save_config(root: str | Path, config: dict[str, Any]) -> Path:
    """Write *config* as .phpconcepts.json to *root*.

    Returns the path to the written file.
    """
    _validate_config(config)
    config_path = Path(root) / CONFIG_NAME
    config_path.write_text(
        json.dumps(config, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return config_path


def _validate_config(cfg: Any) -> None:
    """Raise ConfigError if the config is structurally invalid."""
    if not isinstance(cfg, dict):
        raise ConfigError(f"{CONFIG_NAME} must be a JSON object")
    exclude = cfg.get("exclude", [])
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise ConfigError("'exclude' must be a list of glob strings")
    for key in ("include_templates", "include_vendor"):
        if not isinstance(cfg.get(key, False), bool):
            raise ConfigError(f"'{key}' must be true or false")
    size = cfg.get("max_file_size", 1)
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigError("'max_file_size' must be a positive integer")
