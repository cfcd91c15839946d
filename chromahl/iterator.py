"""Helpers for streams of tokens."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator

from chromahl.tokens import Lexer, Token, TokeniseOptions


def concaterator(*iterators: Iterable[Token]) -> Iterator[Token]:
    """Yield the tokens of each iterator in turn."""
    return itertools.chain(*iterators)


def literator(*tokens: Token) -> Iterator[Token]:
    """Iterate over the given tokens."""
    return iter(tokens)


def split_tokens_into_lines(tokens: Iterable[Token]) -> list[list[Token]]:
    """Split tokens at newlines into lines, each ending with its newline."""
    lines: list[list[Token]] = []
    line: list[Token] = []
    for token in tokens:
        while "\n" in token.value:
            head, tail = token.value.split("\n", 1)
            line.append(Token(token.type, head + "\n"))
            lines.append(line)
            line = []
            token = Token(token.type, tail)
        line.append(token)
    if line:
        lines.append(line)
    if lines and len(lines[-1]) == 1 and lines[-1][0].value == "":
        lines.pop()
    return lines


def tokenise(lexer: Lexer, options: TokeniseOptions | None, text: str) -> list[Token]:
    """Tokenise text with lexer and collect the tokens into a list."""
    return list(lexer.tokenise(options, text))