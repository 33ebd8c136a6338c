"""PHPDoc docblock lookup and parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

DOC_OPENER = "/**"

_COMMENT_KINDS = ("comment", "phpdoc_comment")

_PARAM_RE = re.compile(r"@param\s+(\S+)\s+\$?(\w+)")
_RETURN_RE = re.compile(r"@return\s+(\S+)")
_THROWS_RE = re.compile(r"@throws\s+(\S+)")


@dataclass
class DocblockInfo:
    description: str = ""
    params: list[str] = field(default_factory=list)
    returns: str | None = None
    throws: list[str] = field(default_factory=list)

    def to_metadata(self) -> dict[str, str]:
        """Flatten into ``docblock.*`` metadata keys, omitting empty parts."""
        meta = {}
        if self.description:
            meta["docblock.description"] = self.description
        if self.params:
            meta["docblock.params"] = "|".join(self.params)
        if self.returns is not None:
            meta["docblock.return"] = self.returns
        if self.throws:
            meta["docblock.throws"] = "|".join(self.throws)
        return meta


def find_docblock(node, source: bytes) -> DocblockInfo | None:
    """Parse the doc comment directly preceding *node*, if any.

    Walks back over extra (formatting) siblings.  The first comment found
    decides: a ``/**`` comment is parsed, any other comment blocks
    attribution.  Any other semantic sibling also ends the search.
    """
    prev = node.prev_sibling
    while prev is not None:
        if prev.type in _COMMENT_KINDS:
            text = source[prev.start_byte : prev.end_byte].decode("utf-8", errors="replace")
            if text.lstrip().startswith(DOC_OPENER):
                return parse_docblock(text)
            return None
        if prev.type == "inline_comment" or not prev.is_extra:
            return None
        prev = prev.prev_sibling
    return None


def _clean_line(line: str) -> str:
    cleaned = line.strip()
    if cleaned.startswith(DOC_OPENER):
        cleaned = cleaned[len(DOC_OPENER):]
    if cleaned.endswith("*/"):
        cleaned = cleaned[:-2]
    return cleaned.strip().lstrip("*").strip()


def parse_docblock(raw: str) -> DocblockInfo:
    """Parse a ``/** ... */`` comment into description, params, return, throws.

    ``@param`` entries are normalised to ``"<type> $<name>"``.  A repeated
    ``@return`` keeps the last one.  Unknown tags are ignored.
    """
    info = DocblockInfo()
    description_lines = []

    for line in raw.splitlines():
        cleaned = _clean_line(line)
        if cleaned.startswith("@"):
            m = _PARAM_RE.match(cleaned)
            if m:
                info.params.append(f"{m.group(1)} ${m.group(2)}")
                continue
            m = _RETURN_RE.match(cleaned)
            if m:
                info.returns = m.group(1)
                continue
            m = _THROWS_RE.match(cleaned)
            if m:
                info.throws.append(m.group(1))
        elif cleaned:
            description_lines.append(cleaned)

    info.description = " ".join(description_lines)
    return info
