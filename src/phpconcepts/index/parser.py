"""Source parsing with tree-sitter grammars from tree_sitter_language_pack."""

from __future__ import annotations

import os
from functools import lru_cache

# Extension -> language.  Single source of truth for language detection.
EXTENSION_MAP: dict[str, str] = {
    ".php": "php",
    ".phtml": "php",
    ".php5": "php",
    ".php7": "php",
    ".phps": "php",
    ".inc": "php",
}


def detect_language(path: str) -> str | None:
    """Return the language for *path* based on its extension, or None."""
    _, ext = os.path.splitext(path)
    return EXTENSION_MAP.get(ext.lower())


@lru_cache(maxsize=None)
def _get_parser(language: str):
    from tree_sitter_language_pack import get_parser

    return get_parser(language)


def parse_source(source: bytes, language: str = "php"):
    """Parse *source* and return the tree-sitter Tree.

    tree-sitter is error-tolerant: incomplete code still yields a tree
    with ERROR nodes, never an exception.
    """
    return _get_parser(language).parse(source)
