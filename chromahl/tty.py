"""Terminal formatters using indexed and true-colour escape sequences."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import TextIO

from chromahl.colour import Colour
from chromahl.formatter import Formatter, FormatterFunc
from chromahl.style import Style, StyleEntry, Trilean
from chromahl.tokens import Token, TokenType
from chromahl.ttytables import TTYTable, tty_table

_RESET = "\033[0m"
_NEWLINE = re.compile(r"\r?\n")


def find_closest(table: TTYTable, seeking: Colour) -> Colour:
    """The colour in table nearest to seeking."""
    closest_colour = Colour(0)
    closest = math.inf
    for colour in table.colours():
        distance = colour.distance(seeking)
        if distance < closest:
            closest = distance
            closest_colour = colour
    return closest_colour


def _decorations(entry: StyleEntry) -> str:
    out = ""
    if entry.bold == Trilean.YES:
        out += "\033[1m"
    if entry.underline == Trilean.YES:
        out += "\033[4m"
    if entry.italic == Trilean.YES:
        out += "\033[3m"
    return out


def _entry_to_escape_sequence(table: TTYTable, entry: StyleEntry) -> str:
    out = _decorations(entry)
    if entry.colour.is_set():
        out += table.foreground_for(find_closest(table, entry.colour))
    if entry.background.is_set():
        out += table.background_for(find_closest(table, entry.background))
    return out


def clear_background(style: Style) -> Style:
    """A copy of style whose background entry has no background colour."""
    return style.replace_entry(TokenType.BACKGROUND, background=Colour(0), no_inherit=True)


def _style_to_escape_sequence(table: TTYTable, style: Style) -> dict[TokenType, str]:
    style = clear_background(style)
    return {
        token_type: _entry_to_escape_sequence(table, style.get(token_type))
        for token_type in style.types()
    }


def write_token(writer: TextIO, formatting: str, text: str) -> None:
    """Write text with formatting, resetting it at each line end and resuming after.

    This lets a pager show any single line with the right formatting.
    """
    if not formatting:
        writer.write(text)
        return
    after_last_newline = 0
    for match in _NEWLINE.finditer(text):
        writer.write(formatting)
        writer.write(text[after_last_newline:match.start()])
        writer.write(_RESET)
        writer.write(match.group())
        after_last_newline = match.end()
    if after_last_newline < len(text):
        writer.write(formatting)
        writer.write(text[after_last_newline:])
        writer.write(_RESET)


class IndexedTTYFormatter(Formatter):
    """Formats tokens for a terminal with an indexed colour palette."""

    def __init__(self, table: TTYTable) -> None:
        self.table = table

    def format(self, writer: TextIO, style: Style, tokens: Iterable[Token]) -> None:
        theme = _style_to_escape_sequence(self.table, style)
        for token in tokens:
            lookups = (
                token.type,
                token.type.sub_category(),
                token.type.category(),
                TokenType.TEXT,
            )
            formatting = next(
                (theme[key] for key in lookups if key in theme),
                theme.get(TokenType.BACKGROUND, ""),
            )
            write_token(writer, formatting, token.value)


def true_colour_format(writer: TextIO, style: Style, tokens: Iterable[Token]) -> None:
    """Write tokens using 24-bit colour escape sequences."""
    style = clear_background(style)
    for token in tokens:
        entry = style.get(token.type)
        if entry.is_zero():
            writer.write(token.value)
            continue
        formatting = _decorations(entry)
        if entry.colour.is_set():
            colour = entry.colour
            formatting += f"\033[38;2;{colour.red()};{colour.green()};{colour.blue()}m"
        if entry.background.is_set():
            bg = entry.background
            formatting += f"\033[48;2;{bg.red()};{bg.green()};{bg.blue()}m"
        write_token(writer, formatting, token.value)


TTY = IndexedTTYFormatter(tty_table(8))
TTY8 = IndexedTTYFormatter(tty_table(8))
TTY16 = IndexedTTYFormatter(tty_table(16))
TTY256 = IndexedTTYFormatter(tty_table(256))
TTY16M = FormatterFunc(true_colour_format)