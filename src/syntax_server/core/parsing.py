"""Line-by-line tokenizer sessions producing scope stack operations.

Pygments lexers tokenize a whole buffer at once. :class:`ParseState` wraps one
such stream for a single snippet and hands it out one line at a time, expressed
as push/pop operations on a stack of named scopes. A token of type
``Keyword.Namespace`` is enclosed by the scopes ``keyword`` and
``keyword.namespace``, which in turn sit under the grammar's top-level scope.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from functools import lru_cache

from pygments.token import Text, Token, _TokenType

from syntax_server.core.grammars import Grammar


@dataclass(frozen=True)
class ScopeStackOp:
    pop: int = 0
    push: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.pop or self.push)


NOOP = ScopeStackOp()


class ScopeStack:
    """Ordered scopes currently open, outermost first."""

    def __init__(self) -> None:
        self._scopes: list[str] = []

    def apply(self, op: ScopeStackOp) -> None:
        if op.pop > len(self._scopes):
            raise IndexError(f"cannot pop {op.pop} scopes from a stack of {len(self._scopes)}")
        if op.pop:
            del self._scopes[-op.pop :]
        self._scopes.extend(op.push)

    def as_slice(self) -> tuple[str, ...]:
        return tuple(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)


@lru_cache(maxsize=None)
def scope_for_token_type(token_type: _TokenType) -> tuple[str, ...]:
    """Scopes enclosing a token, outermost first (``Token`` itself has none)."""
    return tuple(".".join(t).lower() for t in token_type.split()[1:])


@lru_cache(maxsize=None)
def token_type_for_scope(scope: str) -> _TokenType:
    """Inverse of :func:`scope_for_token_type` for the innermost scope.

    Unknown trailing parts resolve to the closest known ancestor; scopes that are
    not token scopes (``source.go``) resolve to ``Token``.
    """
    token_type = Token
    for part in scope.split("."):
        for child in token_type.subtypes:
            if child[-1].lower() == part:
                token_type = child
                break
        else:
            return token_type
    return token_type


def lines_with_endings(text: str) -> Iterator[str]:
    """Yield each line of ``text`` including its ``\\n``; the last line may lack one."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        end = len(text) if end == -1 else end + 1
        yield text[start:end]
        start = end


def _transition(current: tuple[str, ...], target: tuple[str, ...]) -> ScopeStackOp:
    common = 0
    for a, b in zip(current, target):
        if a != b:
            break
        common += 1
    return ScopeStackOp(pop=len(current) - common, push=target[common:])


class ParseState:
    """Tokenizer session for one snippet; never share it between requests."""

    def __init__(self, grammar: Grammar, text: str) -> None:
        self._grammar = grammar
        self._text = text
        self._tokens = iter(grammar.new_lexer().get_tokens_unprocessed(text))
        self._pending: tuple[int, _TokenType, int] | None = None
        self._pos = 0
        self._scopes: tuple[str, ...] | None = None

    def _next_token(self) -> tuple[int, _TokenType, int] | None:
        if self._pending is not None:
            token, self._pending = self._pending, None
            return token
        for index, token_type, value in self._tokens:
            if value:
                return index, token_type, index + len(value)
        return None

    def _tokens_until(self, end: int) -> Iterator[tuple[int, _TokenType]]:
        """Yield ``(start, token_type)`` covering ``[self._pos, end)`` without gaps."""
        while self._pos < end:
            token = self._next_token()
            if token is None:
                yield self._pos, Text
                self._pos = end
                return
            start, token_type, stop = token
            if stop <= self._pos:
                continue
            if start > self._pos:
                # Text the lexer skipped over.
                self._pending = token
                yield self._pos, Text
                self._pos = min(start, end)
                continue
            yield self._pos, token_type
            if stop > end:
                self._pending = (end, token_type, stop)
                self._pos = end
            else:
                self._pos = stop

    def parse_line(self, line: str) -> list[tuple[int, ScopeStackOp]]:
        """Return the scope operations for the next line, keyed by index in the line."""
        line_start = self._pos
        end = line_start + len(line)
        if self._text[line_start:end] != line:
            raise ValueError("lines must be parsed in order and match the session text")

        ops: list[tuple[int, ScopeStackOp]] = []
        if self._scopes is None:
            self._scopes = (self._grammar.scope,)
            ops.append((0, ScopeStackOp(push=self._scopes)))

        for start, token_type in self._tokens_until(end):
            target = (self._grammar.scope, *scope_for_token_type(token_type))
            op = _transition(self._scopes, target)
            if op:
                ops.append((start - line_start, op))
                self._scopes = target
        return ops


def scope_regions(ops: Sequence[tuple[int, ScopeStackOp]], line: str) -> Iterator[tuple[str, ScopeStackOp]]:
    """Pair each operation with the text that follows it, up to the next operation.

    The text before the first operation comes paired with :data:`NOOP`. Fragments
    may be empty when operations share a position.
    """
    last = 0
    op = NOOP
    for index, next_op in ops:
        yield line[last:index], op
        last, op = index, next_op
    yield line[last:], op
