"""Tests for the scope exporter."""

from __future__ import annotations

import pytest

from syntax_server.core.grammars import Grammar, GrammarCatalog
from syntax_server.core.scopify import Region, ScopeNameTable, scopify
from tests.conftest import GappyLexer

SNIPPETS = [
    "",
    "x",
    "def x\n",
    "def a\ndef b\n",
    'def "é"\n',
    "no trailing newline",
    "crlf\r\nline\r\n",
    "\n\n\n",
    "a\n\nb",
    "emoji 🎉 = ✓\n",
]


def _assert_partition(code: str, regions: list[Region]) -> None:
    offset = 0
    for region in regions:
        assert region.offset == offset
        assert region.length > 0
        offset += region.length
    assert offset == len(code.encode("utf-8"))


class TestScopeNameTable:
    def test_indices_follow_first_insertion(self) -> None:
        table = ScopeNameTable()
        assert [table.insert(n) for n in ("a", "b", "a", "c", "b")] == [0, 1, 0, 2, 1]
        assert table.names == ["a", "b", "c"]
        assert len(table) == 3


class TestScopify:
    def test_regions_and_names(self, mini_grammar: Grammar) -> None:
        names, regions = scopify("def x\n", mini_grammar)
        assert names == ["source.mini", "keyword", "text", "text.whitespace", "name"]
        assert regions == [
            Region(offset=0, length=3, scopes=(0, 1)),
            Region(offset=3, length=1, scopes=(0, 2, 3)),
            Region(offset=4, length=1, scopes=(0, 4)),
            Region(offset=5, length=1, scopes=(0, 2, 3)),
        ]

    def test_repeated_scopes_keep_their_index(self, mini_grammar: Grammar) -> None:
        names, regions = scopify("def a\ndef b\n", mini_grammar)
        assert names.count("keyword") == 1
        keyword_regions = [r for r in regions if r.scopes == (0, 1)]
        assert [r.offset for r in keyword_regions] == [0, 6]

    def test_lengths_are_utf8_bytes(self, mini_grammar: Grammar) -> None:
        names, regions = scopify('def "é"\n', mini_grammar)
        string_region = regions[2]
        assert string_region.length == 4
        assert names[string_region.scopes[-1]] == "literal.string.double"

    def test_empty_code(self, mini_grammar: Grammar) -> None:
        assert scopify("", mini_grammar) == ([], [])

    def test_untokenized_text_is_still_covered(self) -> None:
        names, regions = scopify("ab, cd\n", Grammar.from_lexer_class(GappyLexer))
        assert names == ["source.gappy", "name", "text"]
        assert regions == [
            Region(offset=0, length=2, scopes=(0, 1)),
            Region(offset=2, length=2, scopes=(0, 2)),
            Region(offset=4, length=2, scopes=(0, 1)),
            Region(offset=6, length=1, scopes=(0, 2)),
        ]

    @pytest.mark.parametrize("code", SNIPPETS)
    def test_partition_with_mini_grammar(self, mini_grammar: Grammar, code: str) -> None:
        _, regions = scopify(code, mini_grammar)
        _assert_partition(code, regions)

    @pytest.mark.parametrize("extension", ["go", "py", "js", "rs", "html", "md", "sh", "c"])
    @pytest.mark.parametrize("code", SNIPPETS)
    def test_partition_with_real_grammars(self, grammars: GrammarCatalog, extension: str, code: str) -> None:
        grammar = grammars.find_by_extension(extension)
        assert grammar is not None
        _, regions = scopify(code, grammar)
        _assert_partition(code, regions)

    def test_partition_with_plain_text(self, grammars: GrammarCatalog) -> None:
        code = "just some words\nand more\n"
        names, regions = scopify(code, grammars.plain_text())
        _assert_partition(code, regions)
        assert names[0] == "text.plain"

    def test_deterministic(self, grammars: GrammarCatalog) -> None:
        grammar = grammars.find_by_extension("py")
        assert grammar is not None
        code = 'import os\n\n\ndef main():\n    """Doc."""\n    return os.getcwd()  # cwd\n'
        assert scopify(code, grammar) == scopify(code, grammar)

    def test_outermost_scope_is_the_grammar(self, grammars: GrammarCatalog) -> None:
        grammar = grammars.find_by_extension("go")
        assert grammar is not None
        names, regions = scopify("package main\n", grammar)
        assert names[0] == "source.go"
        assert all(region.scopes[0] == 0 for region in regions)
        assert sum(region.length for region in regions) == 13
