"""Concept records produced by the language extractors."""

from __future__ import annotations

from dataclasses import dataclass, field

# Fixed syntactic-certainty score: concepts come from structure alone.
SYNTACTIC_CONFIDENCE = 0.85

CONCEPT_TYPES = frozenset({
    "class",
    "interface",
    "trait",
    "enum",
    "function",
    "method",
    "property",
    "constant",
    "namespace",
})


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid line range {self.start}-{self.end}")


@dataclass(frozen=True)
class Concept:
    """One named source declaration plus derived metadata.

    ``id`` joins language, raw concept-type label, file path and name.  It
    is stable across runs but does not disambiguate same-named constructs
    in different scopes of one file.
    """

    id: str
    name: str
    concept_type: str
    confidence: float
    file_path: str
    line_range: LineRange
    relationships: dict[str, list[str]] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "concept_type": self.concept_type,
            "confidence": self.confidence,
            "file_path": self.file_path,
            "line_range": {"start": self.line_range.start, "end": self.line_range.end},
            "relationships": {k: list(v) for k, v in sorted(self.relationships.items())},
            "metadata": dict(sorted(self.metadata.items())),
        }
