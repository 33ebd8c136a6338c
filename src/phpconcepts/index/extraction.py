"""Whole-file concept extraction: parse, walk, dispatch every node."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from phpconcepts.exit_codes import EXIT_USAGE, ConceptsError, ExtractionError
from phpconcepts.index.parser import parse_source
from phpconcepts.languages.registry import get_extractor, get_extractor_for_file
from phpconcepts.models import Concept

log = logging.getLogger(__name__)


@dataclass
class FileExtraction:
    file_path: str
    concepts: list[Concept] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def walk_tree(root_node, extractor, file_path: str, source: bytes, concepts: list[Concept]) -> list[ExtractionError]:
    """Visit every node in pre-order, handing each to *extractor*.

    A malformed node is recorded and skipped; its children are still
    visited.  Returns the errors encountered.
    """
    errors = []
    stack = [root_node]
    while stack:
        node = stack.pop()
        try:
            extractor.extract_concepts(node, file_path, source, concepts)
        except ExtractionError as exc:
            log.warning("Extraction failed at %s:%d: %s", file_path, node.start_point[0] + 1, exc.reason)
            errors.append(exc)
        stack.extend(reversed(node.children))
    return errors


def extract_source(source: str | bytes, file_path: str, language: str | None = None) -> FileExtraction:
    """Parse *source* and extract every concept it declares.

    The extractor is chosen by *language*, or by the extension of
    *file_path* when no language is given.  Raises ConceptsError for a
    file type no extractor handles.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    extractor = get_extractor(language) if language else get_extractor_for_file(file_path)
    if extractor is None:
        raise ConceptsError(f"Unsupported file type: {file_path}", EXIT_USAGE)
    tree = parse_source(source, extractor.language_name)
    result = FileExtraction(file_path=file_path)
    errors = walk_tree(tree.root_node, extractor, file_path, source, result.concepts)
    result.errors = [exc.format_message() for exc in errors]
    log.debug("Extracted %d concepts from %s", len(result.concepts), file_path)
    return result


def extract_file(path: str | Path, root: str | Path | None = None) -> FileExtraction:
    """Read *path* and extract its concepts.

    The recorded file path is relative to *root* (forward slashes) when
    given, otherwise *path* as passed.
    """
    path = Path(path)
    if root is not None:
        file_path = path.resolve().relative_to(Path(root).resolve()).as_posix()
    else:
        file_path = str(path).replace("\\", "/")
    source = path.read_bytes()
    return extract_source(source, file_path)


def extract_files(paths: list[str], root: str | Path) -> list[FileExtraction]:
    """Extract concepts from relative *paths* under *root*.

    Unreadable files become a FileExtraction carrying one error.
    """
    root = Path(root)
    results = []
    for rel_path in paths:
        try:
            results.append(extract_file(root / rel_path, root))
        except OSError as exc:
            log.warning("Cannot read %s: %s", rel_path, exc)
            results.append(FileExtraction(file_path=rel_path, errors=[f"{rel_path}: {exc}"]))
    total = sum(len(r.concepts) for r in results)
    log.info("Extracted %d concepts from %d files", total, len(results))
    return results
