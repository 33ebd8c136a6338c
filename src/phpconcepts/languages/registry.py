"""Language detection and extractor registry."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from phpconcepts.index.parser import detect_language

if TYPE_CHECKING:
    from .base import LanguageExtractor

_SUPPORTED_LANGUAGES = frozenset({"php"})


@lru_cache(maxsize=None)
def _create_extractor(language: str) -> "LanguageExtractor":
    """Create and cache an extractor instance for a language."""
    if language == "php":
        from .php_lang import PhpExtractor

        return PhpExtractor()
    raise ValueError(f"Unsupported language: {language}")


def get_extractor(language: str) -> "LanguageExtractor":
    """Get an extractor instance for a language.

    Raises:
        ValueError: If the language is not supported.
    """
    if language not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    return _create_extractor(language)


def get_extractor_for_file(path: str) -> "LanguageExtractor | None":
    """Get an extractor for a file based on its extension, or None."""
    language = detect_language(path)
    if language is None:
        return None
    return _create_extractor(language)
