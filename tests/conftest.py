"""Shared fixtures and helpers for tests."""

import re
from collections.abc import Iterator
from pathlib import Path

import pytest
from pygments.lexer import Lexer, RegexLexer
from pygments.lexers.special import TextLexer
from pygments.style import Style as PygmentsStyle
from pygments.token import Error, Keyword, Name, Punctuation, String, Token, Whitespace

from syntax_server.core.grammars import Grammar, GrammarCatalog
from syntax_server.core.highlight import Catalogs
from syntax_server.core.themes import Theme, ThemeCatalog

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Small, fully predictable grammars and themes
# ---------------------------------------------------------------------------


class MiniLexer(RegexLexer):
    name = "Mini"
    aliases = ["mini"]
    filenames = ["*.mini", "Minifile"]

    tokens = {
        "root": [
            (r"\bdef\b", Keyword),
            (r'"[^"\n]*"', String.Double),
            (r"\s+", Whitespace),
            (r"\w+", Name),
            (r".", Punctuation),
        ],
    }


class GappyLexer(Lexer):
    """Only reports words, leaving everything between them untokenized."""

    name = "Gappy"
    aliases = ["gappy"]
    filenames = ["*.gappy"]

    def get_tokens_unprocessed(self, text: str) -> Iterator[tuple[int, object, str]]:
        for match in re.finditer(r"[a-z]+", text):
            yield match.start(), Name, match.group()


class ExplodingLexer(Lexer):
    name = "Exploding"
    aliases = ["boom"]
    filenames = ["*.boom"]

    def get_tokens_unprocessed(self, text: str) -> Iterator[tuple[int, object, str]]:
        raise RuntimeError("lexer state corrupted")
        yield  # pragma: no cover


class PaperStyle(PygmentsStyle):
    background_color = "#ffffff"
    styles = {
        Token: "#111111",
        Keyword: "bold #0000ff",
        String: "italic #00aa00 bg:#ffff00",
        Error: "underline #ff0000 bg:#ffffff",
    }


@pytest.fixture(scope="session")
def default_catalogs() -> Catalogs:
    """The catalogs the server ships with (every Pygments lexer and style)."""
    return Catalogs.load_defaults()


@pytest.fixture(scope="session")
def grammars(default_catalogs: Catalogs) -> GrammarCatalog:
    return default_catalogs.grammars


@pytest.fixture
def mini_grammar() -> Grammar:
    return Grammar.from_lexer_class(MiniLexer)


@pytest.fixture
def paper_theme() -> Theme:
    return Theme.from_pygments_style("paper", PaperStyle)


@pytest.fixture
def mini_catalogs(paper_theme: Theme) -> Catalogs:
    """Catalogs holding only the test grammars, plain text and the paper theme."""
    grammars = GrammarCatalog(
        Grammar.from_lexer_class(lexer) for lexer in (TextLexer, MiniLexer, GappyLexer, ExplodingLexer)
    )
    return Catalogs(grammars=grammars, themes=ThemeCatalog([paper_theme]))
