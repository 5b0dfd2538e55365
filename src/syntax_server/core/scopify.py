"""Export of the scopes enclosing every span of a snippet."""

from __future__ import annotations

from dataclasses import dataclass

from syntax_server.core.grammars import Grammar
from syntax_server.core.parsing import ParseState, ScopeStack, lines_with_endings, scope_regions


@dataclass(frozen=True)
class Region:
    offset: int
    length: int
    scopes: tuple[int, ...]


class ScopeNameTable:
    """Insertion-ordered set of scope names handing out stable indices."""

    def __init__(self) -> None:
        self._indices: dict[str, int] = {}

    def insert(self, name: str) -> int:
        return self._indices.setdefault(name, len(self._indices))

    @property
    def names(self) -> list[str]:
        return list(self._indices)

    def __len__(self) -> int:
        return len(self._indices)


def scopify(text: str, grammar: Grammar) -> tuple[list[str], list[Region]]:
    """Split ``text`` into regions annotated with their enclosing scopes.

    Offsets and lengths count UTF-8 bytes. Region scopes index into the returned
    name list, outermost first. The regions cover ``text`` exactly, in order.
    """
    state = ParseState(grammar, text)
    stack = ScopeStack()
    table = ScopeNameTable()

    regions: list[Region] = []
    offset = 0
    for line in lines_with_endings(text):
        for fragment, op in scope_regions(state.parse_line(line), line):
            stack.apply(op)
            if not fragment:
                continue
            length = len(fragment.encode("utf-8"))
            scopes = tuple(table.insert(name) for name in stack.as_slice())
            regions.append(Region(offset=offset, length=length, scopes=scopes))
            offset += length
    return table.names, regions
