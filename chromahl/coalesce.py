"""A lexer wrapper that merges runs of same-typed tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from chromahl.tokens import Config, Lexer, Token, TokeniseOptions

_MAX_RUN_BYTES = 8192


def _coalesced(tokens: Iterable[Token]) -> Iterator[Token]:
    run_type = None
    parts: list[str] = []
    size = 0
    for token in tokens:
        if not token.value:
            continue
        if parts and token.type == run_type and size < _MAX_RUN_BYTES:
            parts.append(token.value)
            size += len(token.value.encode("utf-8"))
            continue
        if parts:
            yield Token(run_type, "".join(parts))
        run_type = token.type
        parts = [token.value]
        size = len(token.value.encode("utf-8"))
    if parts:
        yield Token(run_type, "".join(parts))


class Coalescer(Lexer):
    """Wraps a lexer, collapsing runs of tokens of one type into one token."""

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    def config(self) -> Config:
        return self.lexer.config()

    def tokenise(self, options: TokeniseOptions | None, text: str) -> Iterator[Token]:
        tokens = iter(self.lexer.tokenise(options, text))
        return _coalesced(tokens)

    def set_registry(self, registry: Any) -> Lexer:
        self.lexer.set_registry(registry)
        return self

    def set_analyser(self, analyser: Callable[[str], float]) -> Lexer:
        self.lexer.set_analyser(analyser)
        return self

    def analyse_text(self, text: str) -> float:
        return self.lexer.analyse_text(text)


def coalesce(lexer: Lexer) -> Coalescer:
    """Wrap lexer so that adjacent tokens of the same type are merged."""
    return Coalescer(lexer)