from __future__ import annotations

import logging
import re

from phpconcepts.models import Concept

from .base import LanguageExtractor, find_child_type
from .docblock import find_docblock

log = logging.getLogger(__name__)

# Grammar kind -> concept type for kinds that are not already normalized.
_NORMALIZED_TYPES = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "trait_declaration": "trait",
    "enum_declaration": "enum",
}

# Node kind -> (strategy, raw concept-type label).
#   "construct": the node itself is one declaration
#   "elements":  the node bundles several declarators, one concept each
_DISPATCH = {
    "class_declaration": ("construct", "class_declaration"),
    "interface_declaration": ("construct", "interface_declaration"),
    "trait_declaration": ("construct", "trait_declaration"),
    "enum_declaration": ("construct", "enum_declaration"),
    "function_definition": ("construct", "function"),
    "method_declaration": ("construct", "method"),
    "property_promotion_parameter": ("construct", "property"),
    "namespace_definition": ("construct", "namespace"),
    "property_declaration": ("elements", "property"),
    "const_declaration": ("elements", "constant"),
}

_ELEMENT_KINDS = {
    "property_declaration": ("property_element",),
    "const_declaration": ("const_element", "constant_declarator"),
}

_VISIBILITY_KEYWORDS = ("public", "protected", "private")
_FLAG_MODIFIERS = ("static", "abstract", "final")
_TRAIT_USE_KINDS = ("use_declaration", "trait_use_clause")

_TRAIT_USE_RE = re.compile(r"^\s*use\s+([A-Za-z_\\][A-Za-z0-9_\\]*)\s*;", re.MULTILINE)


def normalize_concept_type(concept_type: str) -> str:
    return _NORMALIZED_TYPES.get(concept_type, concept_type)


class PhpExtractor(LanguageExtractor):
    """PHP concept extractor with docblock and trait awareness.

    Handles namespaces, classes, interfaces, traits, enums, functions,
    methods, properties (including constructor promotion, PHP 8.0+) and
    constants.  Stateless: one instance can serve any number of files.
    """

    @property
    def language_name(self) -> str:
        return "php"

    def extract_concepts(self, node, file_path: str, source: bytes, concepts: list[Concept]) -> None:
        strategy, raw_type = _DISPATCH.get(node.type, ("skip", None))
        if strategy == "construct":
            found = self._handle_construct(node, file_path, source, raw_type)
        elif strategy == "elements":
            found = self._handle_elements(node, file_path, source, raw_type)
        else:
            return
        # Extend only after every declarator built, so a failure adds nothing.
        concepts.extend(found)

    # ---- Dispatch strategies ----

    def _handle_construct(self, node, file_path, source, raw_type) -> list[Concept]:
        concept = self.build_construct(node, file_path, source, raw_type)
        return [concept] if concept is not None else []

    def _handle_elements(self, node, file_path, source, raw_type) -> list[Concept]:
        """One concept per declarator; modifiers and type come from *node*."""
        found = []
        element_kinds = _ELEMENT_KINDS[node.type]
        for child in node.children:
            if child.type not in element_kinds:
                continue
            concept = self.build_construct(child, file_path, source, raw_type, owner=node)
            if concept is not None:
                found.append(concept)
        return found

    # ---- Construct builder ----

    def build_construct(self, node, file_path: str, source: bytes, raw_type: str, owner=None) -> Concept | None:
        """Assemble one concept from *node*, or None if it has no name.

        *owner* is the declaration that carries shared modifiers, type and
        docblock for a declarator node; it defaults to *node* itself.
        """
        name = self.resolve_name(node, source, file_path)
        if not name:
            log.debug("Skipping unnamed %s at %s:%d", node.type, file_path, node.start_point[0] + 1)
            return None
        owner = owner if owner is not None else node

        start_line, start_col, end_line, end_col = self.position_info(node)
        concept_type = normalize_concept_type(raw_type)

        metadata = {
            "language": self.language_name,
            "kind": concept_type,
            "start_column": str(start_col),
            "end_column": str(end_col),
        }
        visibility = self.extract_visibility(owner, source)
        if visibility:
            metadata["visibility"] = visibility
        for modifier in _FLAG_MODIFIERS:
            if self.has_modifier(owner, modifier):
                metadata[modifier] = "true"
        return_type = self.extract_return_type(owner, source)
        if return_type:
            metadata["return_type"] = return_type
        annotation = self.extract_type_annotation(owner, source)
        if annotation:
            metadata["type"] = annotation

        docblock = find_docblock(owner, source)
        if docblock is not None:
            metadata.update(docblock.to_metadata())

        if concept_type == "class":
            traits = self.collect_traits(node, source)
            if traits:
                metadata["traits"] = ",".join(traits)

        return self._make_concept(
            name=name,
            concept_type=concept_type,
            raw_type=raw_type,
            file_path=file_path,
            line_start=start_line,
            line_end=end_line,
            metadata=metadata,
        )

    # ---- Name resolution ----

    def resolve_name(self, node, source: bytes, file_path: str | None = None) -> str:
        """Try each name strategy in order; first non-empty result wins."""
        for strategy in (self._name_from_field, self._name_from_generic, self._name_from_variable):
            name = strategy(node, source, file_path)
            if name:
                return name
        return ""

    def _name_from_field(self, node, source, file_path) -> str:
        named = node.child_by_field_name("name")
        if named is None:
            return ""
        text = self.node_text(named, source)
        # PHP 8 grammars put the $variable itself in the name field
        if named.type == "variable_name":
            return text.lstrip("$")
        return text

    def _name_from_generic(self, node, source, file_path) -> str:
        return self.extract_name_from_node(node, source, file_path)

    def _name_from_variable(self, node, source, file_path) -> str:
        var_node = find_child_type(node, "variable_name")
        if var_node is None:
            return ""
        return self.node_text(var_node, source).lstrip("$")

    # ---- Attribute harvesters ----

    def extract_visibility(self, node, source: bytes) -> str | None:
        for child in node.children:
            if child.type == "visibility_modifier":
                text = self.node_text(child, source).strip()
                if text:
                    return text
            elif child.type in _VISIBILITY_KEYWORDS:
                return child.type
        return None

    def has_modifier(self, node, token: str) -> bool:
        modifier_kind = f"{token}_modifier"
        return any(child.type in (modifier_kind, token) for child in node.children)

    def extract_return_type(self, node, source: bytes) -> str | None:
        ret = node.child_by_field_name("return_type")
        if ret is None:
            return None
        return self.node_text(ret, source).strip()

    def extract_type_annotation(self, node, source: bytes) -> str | None:
        type_node = node.child_by_field_name("type") or node.child_by_field_name("type_declaration")
        if type_node is None:
            return None
        return self.node_text(type_node, source).strip()

    # ---- Traits ----

    def collect_traits(self, node, source: bytes) -> list[str]:
        """Sorted, de-duplicated trait names used by a class body.

        Reads trait-use clauses from the syntax tree; when the grammar
        exposes none, falls back to matching ``use Name;`` lines in the
        class text.
        """
        traits = self._traits_from_clauses(node, source) or self._traits_from_text(node, source)
        return sorted(set(traits))

    def _traits_from_clauses(self, node, source) -> list[str]:
        containers = [node]
        body = node.child_by_field_name("body")
        if body is not None:
            containers.append(body)
        traits = []
        for container in containers:
            for child in container.children:
                if child.type in _TRAIT_USE_KINDS:
                    traits.extend(self.collect_identifiers(child, source))
        return traits

    def _traits_from_text(self, node, source) -> list[str]:
        return _TRAIT_USE_RE.findall(self.node_text(node, source))
