"""Compact text and JSON formatting for concept listings."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

ENVELOPE_SCHEMA_NAME = "phpconcepts-envelope-v1"

KIND_ABBREV = {
    "function": "fn",
    "class": "cls",
    "method": "meth",
    "constant": "const",
    "interface": "iface",
    "enum": "enum",
    "namespace": "ns",
    "trait": "trait",
    "property": "prop",
}

# Metadata keys shown inline in text output, in display order.
_TEXT_FLAGS = ("visibility", "static", "abstract", "final")


def abbrev_kind(kind: str) -> str:
    return KIND_ABBREV.get(kind, kind)


def loc(path: str, line: int | None = None) -> str:
    if line is not None:
        return f"{path}:{line}"
    return path


def concept_line(concept) -> str:
    """One-line rendering: kind, name, modifiers, types, location."""
    meta = concept.metadata
    parts = [abbrev_kind(concept.concept_type), concept.name]
    flags = []
    for key in _TEXT_FLAGS:
        value = meta.get(key)
        if value:
            flags.append(key if value == "true" else value)
    if flags:
        parts.append(" ".join(flags))
    if meta.get("type"):
        parts.append(meta["type"])
    if meta.get("return_type"):
        parts.append(f"-> {meta['return_type']}")
    if meta.get("traits"):
        parts.append(f"uses {meta['traits']}")
    parts.append(loc(concept.file_path, concept.line_range.start))
    return "  ".join(parts)


def section(title: str, lines: list[str]) -> str:
    out = [title]
    out.extend(lines)
    return "\n".join(out)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering.

    Uses ``sort_keys=True`` so that identical data always produces
    byte-identical output.
    """
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def _get_version() -> str:
    from phpconcepts import __version__

    return __version__


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Non-deterministic metadata (``timestamp``) lives in ``_meta`` so the
    content keys stay stable across invocations::

        {
            "command": "scan",
            "version": "<current>",
            "schema":  "phpconcepts-envelope-v1",
            "summary": {"verdict": "...", ...},
            "_meta":   {"timestamp": "2026-02-12T14:30:00Z"},
            ...payload
        }
    """
    envelope = {
        "command": command,
        "version": _get_version(),
        "schema": ENVELOPE_SCHEMA_NAME,
        "summary": summary or {},
        "_meta": {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        },
    }
    envelope.update(payload)
    return envelope
