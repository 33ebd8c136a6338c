from __future__ import annotations

from abc import ABC, abstractmethod

from phpconcepts.exit_codes import ExtractionError
from phpconcepts.models import SYNTACTIC_CONFIDENCE, Concept, LineRange

# Node kinds that directly carry a declaration's identifier, across grammars.
NAME_NODE_KINDS = (
    "name",
    "identifier",
    "type_identifier",
    "property_identifier",
    "field_identifier",
    "constant_identifier",
)


class LanguageExtractor(ABC):
    """Base class for language-specific concept extraction."""

    @property
    @abstractmethod
    def language_name(self) -> str: ...

    @abstractmethod
    def extract_concepts(self, node, file_path: str, source: bytes, concepts: list[Concept]) -> None:
        """Inspect exactly one node and append any concepts it declares.

        Does not recurse: the caller owns traversal order.  Raises
        ExtractionError when the node is structurally malformed.
        """
        ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def position_info(self, node) -> tuple[int, int, int, int]:
        """Return (start_line, start_column, end_line, end_column), all 1-based."""
        return (
            node.start_point[0] + 1,
            node.start_point[1] + 1,
            node.end_point[0] + 1,
            node.end_point[1] + 1,
        )

    def extract_name_from_node(self, node, source: bytes, file_path: str | None = None) -> str:
        """Generic name lookup shared by every extractor.

        Returns the text of the first immediate child whose kind is an
        identifier kind, or "" when there is none.  A node whose byte span
        is inverted or runs past the source buffer cannot be interpreted
        and raises ExtractionError.
        """
        self._check_span(node, source, file_path)
        for child in node.children:
            if child.type in NAME_NODE_KINDS:
                self._check_span(child, source, file_path)
                return self.node_text(child, source).strip()
        return ""

    def collect_identifiers(self, node, source: bytes) -> list[str]:
        """Texts of the name-like immediate children of *node*, in order."""
        names = []
        for child in node.children:
            if child.type in NAME_NODE_KINDS or child.type == "qualified_name":
                text = self.node_text(child, source).strip()
                if text:
                    names.append(text)
        return names

    def _check_span(self, node, source: bytes, file_path: str | None) -> None:
        if node is None:
            raise ExtractionError("missing syntax node", file_path)
        if node.start_byte > node.end_byte or node.end_byte > len(source):
            raise ExtractionError(
                f"byte span {node.start_byte}..{node.end_byte} outside source of {len(source)} bytes",
                file_path,
                node.type,
            )

    def _make_concept(
        self,
        name: str,
        concept_type: str,
        raw_type: str,
        file_path: str,
        line_start: int,
        line_end: int,
        metadata: dict[str, str],
    ) -> Concept:
        return Concept(
            id=f"{self.language_name}::{raw_type}::{file_path}::{name}",
            name=name,
            concept_type=concept_type,
            confidence=SYNTACTIC_CONFIDENCE,
            file_path=file_path,
            line_range=LineRange(line_start, line_end),
            relationships={},
            metadata=metadata,
        )


def find_child_type(node, type_name: str):
    """Find first child of a given type."""
    for child in node.children:
        if child.type == type_name:
            return child
    return None
