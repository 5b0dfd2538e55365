"""Theme catalog backed by the Pygments style registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from pygments.style import Style as PygmentsStyle
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Token, _TokenType

logger = logging.getLogger(__name__)


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def parse(cls, value: str | None) -> Color | None:
        """Parse ``#rrggbb``, ``#rgb`` or the bare hex Pygments stores.

        Anything else (empty, ANSI color names) yields ``None``.
        """
        if not value:
            return None
        digits = value.removeprefix("#")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) != 6:
            return None
        try:
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        except ValueError:
            return None

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


WHITE = Color(0xFF, 0xFF, 0xFF)
BLACK = Color(0x00, 0x00, 0x00)


@dataclass(frozen=True)
class Style:
    foreground: Color
    background: Color
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass(frozen=True)
class Theme:
    name: str
    style_class: type[PygmentsStyle] = field(repr=False)
    background: Color | None = None
    foreground: Color | None = None

    @classmethod
    def from_pygments_style(cls, name: str, style_class: type[PygmentsStyle]) -> Theme:
        root = style_class.style_for_token(Token)
        return cls(
            name=name,
            style_class=style_class,
            background=Color.parse(style_class.background_color),
            foreground=Color.parse(root.get("color")),
        )

    @property
    def base_background(self) -> Color:
        return self.background or WHITE

    def style_for(self, token_type: _TokenType) -> Style:
        # Styles only know the token types they were declared with plus the
        # standard set; anything more specific inherits from its parent.
        while not self.style_class.styles_token(token_type) and token_type.parent is not None:
            token_type = token_type.parent
        token_style = self.style_class.style_for_token(token_type)
        return Style(
            foreground=Color.parse(token_style.get("color")) or self.foreground or BLACK,
            background=Color.parse(token_style.get("bgcolor")) or self.base_background,
            bold=bool(token_style.get("bold")),
            italic=bool(token_style.get("italic")),
            underline=bool(token_style.get("underline")),
        )


class ThemeCatalog:
    """Immutable mapping from theme name to :class:`Theme`."""

    def __init__(self, themes: Iterable[Theme]) -> None:
        self._themes = {theme.name: theme for theme in sorted(themes, key=lambda t: t.name)}

    @classmethod
    def load_defaults(cls) -> ThemeCatalog:
        catalog = cls(Theme.from_pygments_style(name, get_style_by_name(name)) for name in get_all_styles())
        logger.info("Loaded %d themes", len(catalog))
        return catalog

    def __iter__(self) -> Iterator[Theme]:
        return iter(self._themes.values())

    def __len__(self) -> int:
        return len(self._themes)

    def get(self, name: str) -> Theme | None:
        return self._themes.get(name)
