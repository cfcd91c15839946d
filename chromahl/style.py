"""Styles: how each token type is coloured and decorated."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from chromahl.colour import Colour
from chromahl.tokens import TokenType


class Trilean(IntEnum):
    """A yes/no flag that may also defer to an ancestor entry."""

    PASS = 0
    YES = 1
    NO = 2


@dataclass(frozen=True)
class StyleEntry:
    """The colours and text decorations for one token type."""

    colour: Colour = Colour(0)
    background: Colour = Colour(0)
    border: Colour = Colour(0)
    bold: Trilean = Trilean.PASS
    italic: Trilean = Trilean.PASS
    underline: Trilean = Trilean.PASS
    no_inherit: bool = False

    def is_zero(self) -> bool:
        """True if the entry sets nothing at all."""
        return self == _ZERO

    def sub(self, other: StyleEntry) -> StyleEntry:
        """The parts of this entry that differ from other."""
        return StyleEntry(
            colour=self.colour if self.colour != other.colour else Colour(0),
            background=self.background if self.background != other.background else Colour(0),
            border=self.border if self.border != other.border else Colour(0),
            bold=self.bold if self.bold != other.bold else Trilean.PASS,
            italic=self.italic if self.italic != other.italic else Trilean.PASS,
            underline=self.underline if self.underline != other.underline else Trilean.PASS,
        )

    def _inherit(self, *ancestors: StyleEntry) -> StyleEntry:
        out = self
        for ancestor in reversed(ancestors):
            if out.no_inherit:
                return out
            out = StyleEntry(
                colour=out.colour if out.colour.is_set() else ancestor.colour,
                background=out.background if out.background.is_set() else ancestor.background,
                border=out.border if out.border.is_set() else ancestor.border,
                bold=out.bold if out.bold != Trilean.PASS else ancestor.bold,
                italic=out.italic if out.italic != Trilean.PASS else ancestor.italic,
                underline=out.underline if out.underline != Trilean.PASS else ancestor.underline,
                no_inherit=ancestor.no_inherit,
            )
        return out


_ZERO = StyleEntry()


class Style:
    """A named set of style entries, resolved through the token type hierarchy."""

    def __init__(self, name: str, entries: Mapping[TokenType, StyleEntry] | None = None) -> None:
        self.name = name
        self._entries: dict[TokenType, StyleEntry] = dict(entries or {})

    @property
    def entries(self) -> Mapping[TokenType, StyleEntry]:
        """The entries as given, without inheritance applied."""
        return MappingProxyType(self._entries)

    def _raw(self, token_type: TokenType) -> StyleEntry:
        return self._entries.get(token_type, _ZERO)

    def get(self, token_type: TokenType) -> StyleEntry:
        """The entry for token_type, inheriting from its categories, text and background."""
        return self._raw(token_type)._inherit(
            self._raw(TokenType.BACKGROUND),
            self._raw(TokenType.TEXT),
            self._raw(token_type.category()),
            self._raw(token_type.sub_category()),
        )

    def types(self) -> list[TokenType]:
        """The token types that have entries, in ascending order."""
        return sorted(self._entries)

    def with_entry(self, token_type: TokenType, entry: StyleEntry) -> Style:
        """A copy of this style with the entry for token_type replaced."""
        entries = dict(self._entries)
        entries[token_type] = entry
        return Style(self.name, entries)

    def replace_entry(self, token_type: TokenType, **changes: object) -> Style:
        """A copy with fields of the raw entry for token_type changed."""
        return self.with_entry(token_type, dataclasses.replace(self._raw(token_type), **changes))

    def __repr__(self) -> str:
        return f"Style({self.name!r}, {self._entries!r})"