"""Colorized HTML rendering of a snippet."""

from __future__ import annotations

import html
from collections.abc import Sequence

from syntax_server.core.grammars import Grammar
from syntax_server.core.parsing import ParseState, ScopeStack, lines_with_endings, scope_regions, token_type_for_scope
from syntax_server.core.themes import Color, Style, Theme


class HighlightLines:
    """Styles a snippet line by line with one tokenizer session."""

    def __init__(self, grammar: Grammar, theme: Theme, text: str) -> None:
        self._state = ParseState(grammar, text)
        self._stack = ScopeStack()
        self._theme = theme

    def _current_style(self) -> Style:
        scopes = self._stack.as_slice()
        # The outermost scope names the grammar, not a token.
        innermost = scopes[-1] if len(scopes) > 1 else ""
        return self._theme.style_for(token_type_for_scope(innermost))

    def highlight(self, line: str) -> list[tuple[Style, str]]:
        regions: list[tuple[Style, str]] = []
        for fragment, op in scope_regions(self._state.parse_line(line), line):
            self._stack.apply(op)
            if not fragment:
                continue
            style = self._current_style()
            if regions and regions[-1][0] == style:
                regions[-1] = (style, regions[-1][1] + fragment)
            else:
                regions.append((style, fragment))
        return regions


def styles_to_coloured_html(regions: Sequence[tuple[Style, str]], container_background: Color | None = None) -> str:
    """Render styled regions as inline-styled ``<span>`` elements.

    A region only states its background color when it differs from
    ``container_background``; with no container color every region states it.
    """
    parts = []
    for style, text in regions:
        declarations = []
        if container_background is None or style.background != container_background:
            declarations.append(f"background-color:{style.background.hex};")
        if style.bold:
            declarations.append("font-weight:bold;")
        if style.italic:
            declarations.append("font-style:italic;")
        if style.underline:
            declarations.append("text-decoration:underline;")
        declarations.append(f"color:{style.foreground.hex};")
        parts.append(f'<span style="{"".join(declarations)}">{html.escape(text)}</span>')
    return "".join(parts)


def highlighted_snippet(text: str, grammar: Grammar, theme: Theme) -> str:
    """Render ``text`` as a ``<pre>`` block colored with ``theme``."""
    background = theme.base_background
    highlighter = HighlightLines(grammar, theme, text)

    output = [f'<pre style="background-color:{background.hex};">\n']
    for line in lines_with_endings(text):
        output.append(styles_to_coloured_html(highlighter.highlight(line), background))
    output.append("</pre>")
    return "".join(output)
