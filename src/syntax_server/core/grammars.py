"""Grammar catalog backed by the Pygments lexer registry.

Every lexer Pygments knows becomes a :class:`Grammar`. The catalog is built once
per process and never mutated afterwards, so it can be shared between worker
threads without locking.
"""

from __future__ import annotations

import itertools
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from pygments.lexer import Lexer
from pygments.lexers import find_lexer_class, get_all_lexers
from pygments.lexers.special import TextLexer

logger = logging.getLogger(__name__)

PLAIN_TEXT_SCOPE = "text.plain"

# Lowest analyse_text() score accepted when sniffing the first line of a snippet.
FIRST_LINE_MIN_SCORE = 0.5

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")
_NON_SCOPE_CHARS_RE = re.compile(r"[^a-z0-9+#_-]+")


@dataclass(frozen=True)
class Grammar:
    name: str
    aliases: tuple[str, ...]
    filenames: tuple[str, ...]
    lexer_class: type[Lexer] = field(repr=False)
    priority: float = 0

    @property
    def scope(self) -> str:
        """Top-level scope enclosing every token this grammar produces."""
        if self.lexer_class is TextLexer:
            return PLAIN_TEXT_SCOPE
        label = self.aliases[0] if self.aliases else self.name
        return "source." + _NON_SCOPE_CHARS_RE.sub("-", label.lower()).strip("-")

    @property
    def is_plain_text(self) -> bool:
        return self.lexer_class is TextLexer

    def new_lexer(self) -> Lexer:
        # Offsets are reported against the caller's text, so the lexer must not
        # strip or append newlines.
        return self.lexer_class(stripnl=False, stripall=False, ensurenl=False)

    @classmethod
    def from_lexer_class(cls, lexer_class: type[Lexer]) -> Grammar:
        return cls(
            name=lexer_class.name,
            aliases=tuple(lexer_class.aliases),
            filenames=tuple(lexer_class.filenames),
            lexer_class=lexer_class,
            priority=getattr(lexer_class, "priority", 0) or 0,
        )


def _expand_brackets(pattern: str) -> list[str]:
    parts = _BRACKET_RE.split(pattern)
    choices: list[Iterable[str]] = []
    for i, part in enumerate(parts):
        if i % 2 == 0:
            choices.append((part,))
        elif not part or part.startswith("!") or "-" in part:
            return []
        else:
            choices.append(tuple(part))
    return ["".join(combo) for combo in itertools.product(*choices)]


def filename_keys(pattern: str) -> list[str]:
    """Return the literal lookup keys a filename glob registers.

    ``*.go`` registers ``go``; a glob without wildcards such as ``Dockerfile``
    registers the whole name. Globs that cannot be reduced to literals register
    nothing.
    """
    body = pattern[2:] if pattern.startswith("*.") else pattern
    keys = []
    for key in _expand_brackets(body):
        if not key or any(ch in key for ch in "*?[]"):
            continue
        keys.append(key.lower())
    return keys


class _Candidate(NamedTuple):
    grammar: Grammar
    # Registered through a whole file name rather than a ``*.ext`` glob.
    explicit: bool

    def rating(self, code: str) -> tuple[float, str]:
        """Rank a candidate the way Pygments ranks lexers sharing a file name."""
        bonus = 0.5 if self.explicit else 0.0
        if code:
            score = self.grammar.lexer_class.analyse_text(code) + bonus
        else:
            score = self.grammar.priority + bonus
        return score, self.grammar.lexer_class.__name__


class GrammarCatalog:
    """Immutable set of grammars queryable by extension, file name or first line."""

    def __init__(self, grammars: Iterable[Grammar]) -> None:
        self._grammars = tuple(sorted(grammars, key=lambda g: g.name.lower()))
        plain = [g for g in self._grammars if g.is_plain_text]
        if not plain:
            raise ValueError("grammar catalog has no plain text grammar")
        self._plain_text = plain[0]

        index: dict[str, list[_Candidate]] = {}
        for grammar in self._grammars:
            for pattern in grammar.filenames:
                explicit = "*" not in pattern
                for key in filename_keys(pattern):
                    candidates = index.setdefault(key, [])
                    if all(c.grammar is not grammar for c in candidates):
                        candidates.append(_Candidate(grammar, explicit))
        self._by_extension = {key: tuple(candidates) for key, candidates in index.items()}

    @classmethod
    def load_defaults(cls) -> GrammarCatalog:
        grammars = []
        for name, *_ in get_all_lexers():
            lexer_class = find_lexer_class(name)
            if lexer_class is None:
                logger.warning("Lexer %r is registered but could not be loaded", name)
                continue
            grammars.append(Grammar.from_lexer_class(lexer_class))
        catalog = cls(grammars)
        logger.info("Loaded %d grammars", len(catalog))
        return catalog

    def __iter__(self) -> Iterator[Grammar]:
        return iter(self._grammars)

    def __len__(self) -> int:
        return len(self._grammars)

    def find_by_extension(self, extension: str, code: str = "") -> Grammar | None:
        """Find a grammar registered for ``extension``.

        Some grammars register whole file names (``Dockerfile``,
        ``CMakeLists.txt``) in the same table, so this also serves lookups by
        file name. The match is case-insensitive.

        When several grammars claim the key, each one scores ``code`` with its
        lexer's ``analyse_text()`` and the best score wins. Without code the
        lexer priority decides.
        """
        if not extension:
            return None
        candidates = self._by_extension.get(extension.lower(), ())
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0].grammar
        return max(candidates, key=lambda c: c.rating(code)).grammar

    def find_by_first_line(self, code: str) -> Grammar | None:
        """Guess a grammar from the first line of ``code`` (shebangs, mode lines)."""
        first_line = code.removeprefix("\ufeff").split("\n", 1)[0]
        if not first_line.strip():
            return None

        best: Grammar | None = None
        best_score = 0.0
        for grammar in self._grammars:
            if grammar.is_plain_text:
                continue
            score = grammar.lexer_class.analyse_text(first_line)
            if score > best_score:
                best, best_score = grammar, score
                if score >= 1.0:
                    break
        if best_score < FIRST_LINE_MIN_SCORE:
            return None
        return best

    def plain_text(self) -> Grammar:
        return self._plain_text
