"""Docblock parsing tests (pure text, no grammar needed)."""

from __future__ import annotations

from phpconcepts.languages.docblock import DocblockInfo, parse_docblock


class TestParseDocblock:
    def test_full_docblock(self):
        info = parse_docblock(
            "/**\n"
            " * Find a user by id.\n"
            " *\n"
            " * @param int $id\n"
            " * @return ?User\n"
            " * @throws NotFoundException\n"
            " */"
        )
        assert info.description == "Find a user by id."
        assert info.params == ["int $id"]
        assert info.returns == "?User"
        assert info.throws == ["NotFoundException"]

    def test_description_lines_are_space_joined(self):
        info = parse_docblock("/**\n * First line.\n * Second line.\n */")
        assert info.description == "First line. Second line."

    def test_param_sigil_is_normalized(self):
        info = parse_docblock("/**\n * @param string name\n * @param array|null $opts\n */")
        assert info.params == ["string $name", "array|null $opts"]

    def test_last_return_wins(self):
        info = parse_docblock("/**\n * @return int\n * @return string\n */")
        assert info.returns == "string"

    def test_multiple_throws_keep_order(self):
        info = parse_docblock("/**\n * @throws B\n * @throws A\n */")
        assert info.throws == ["B", "A"]

    def test_unknown_tags_are_ignored(self):
        info = parse_docblock("/**\n * Summary.\n * @deprecated use other()\n * @see Foo\n */")
        assert info.description == "Summary."
        assert info.params == []
        assert info.returns is None
        assert info.throws == []

    def test_param_without_name_is_ignored(self):
        info = parse_docblock("/**\n * @param int\n */")
        assert info.params == []

    def test_single_line_docblock(self):
        info = parse_docblock("/** @return bool */")
        assert info.returns == "bool"
        assert info.description == ""

    def test_single_line_description(self):
        assert parse_docblock("/** Counts things. */").description == "Counts things."


class TestDocblockMetadata:
    def test_empty_parts_are_omitted(self):
        assert DocblockInfo().to_metadata() == {}

    def test_lists_are_pipe_joined(self):
        info = DocblockInfo(
            description="Load.",
            params=["int $id", "bool $fresh"],
            returns="User",
            throws=["IOError", "NotFound"],
        )
        assert info.to_metadata() == {
            "docblock.description": "Load.",
            "docblock.params": "int $id|bool $fresh",
            "docblock.return": "User",
            "docblock.throws": "IOError|NotFound",
        }
