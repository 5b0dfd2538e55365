"""Request handling: resolve the language, then render HTML or export scopes."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from syntax_server.core.errors import HighlightError, InvalidThemeError, panic_payload
from syntax_server.core.grammars import GrammarCatalog
from syntax_server.core.html import highlighted_snippet
from syntax_server.core.resolver import resolve_language
from syntax_server.core.scopify import Region, scopify
from syntax_server.core.themes import ThemeCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalogs:
    """Process-wide grammar and theme catalogs, read-only once built."""

    grammars: GrammarCatalog
    themes: ThemeCatalog

    @classmethod
    def load_defaults(cls) -> Catalogs:
        return cls(grammars=GrammarCatalog.load_defaults(), themes=ThemeCatalog.load_defaults())


@dataclass(frozen=True)
class Query:
    theme: str
    code: str
    # Superseded by filepath; still sent by older clients.
    extension: str = ""
    filepath: str = ""
    scopify: bool = False


@dataclass(frozen=True)
class HtmlHighlight:
    data: str
    plaintext: bool
    detected_language: str

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScopifiedHighlight:
    plaintext: bool
    detected_language: str
    scope_names: list[str]
    regions: list[Region]

    def to_payload(self) -> dict[str, Any]:
        return {
            "plaintext": self.plaintext,
            "detected_language": self.detected_language,
            "scopified_scope_names": self.scope_names,
            "scopified_regions": [
                {"offset": r.offset, "length": r.length, "scopes": list(r.scopes)} for r in self.regions
            ],
        }


def highlight(query: Query, catalogs: Catalogs) -> HtmlHighlight | ScopifiedHighlight:
    resolved = resolve_language(catalogs.grammars, query.extension, query.filepath, query.code)
    grammar = resolved.grammar

    if query.scopify:
        scope_names, regions = scopify(query.code, grammar)
        return ScopifiedHighlight(
            plaintext=resolved.plaintext,
            detected_language=grammar.name,
            scope_names=scope_names,
            regions=regions,
        )

    theme = catalogs.themes.get(query.theme)
    if theme is None:
        raise InvalidThemeError()

    return HtmlHighlight(
        data=highlighted_snippet(query.code, grammar, theme),
        plaintext=resolved.plaintext,
        detected_language=grammar.name,
    )


def handle_query(query: Query, catalogs: Catalogs) -> dict[str, Any]:
    """Answer one query with a response payload; never raises.

    Lexers do not report their internal failures as typed errors, so any
    unexpected exception while resolving, rendering or exporting is confined to
    this request and reported as a ``panic`` error.
    """
    try:
        return highlight(query, catalogs).to_payload()
    except HighlightError as exc:
        return exc.to_payload()
    except Exception:
        logger.exception("Panic while highlighting code (filepath=%r, extension=%r)", query.filepath, query.extension)
        return panic_payload()
