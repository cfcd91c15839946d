"""Indexed terminal colour tables for 8, 16 and 256 colour terminals."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from chromahl.colour import Colour, must_parse_colour


@dataclass(frozen=True)
class TTYTable:
    """Escape sequences for the colours an indexed terminal can show."""

    foreground: Mapping[Colour, str]
    background: Mapping[Colour, str]

    def foreground_for(self, colour: Colour) -> str:
        """Foreground escape sequence for colour, or "" if not in the table."""
        return self.foreground.get(colour, "")

    def background_for(self, colour: Colour) -> str:
        """Background escape sequence for colour, or "" if not in the table."""
        return self.background.get(colour, "")

    def colours(self) -> list[Colour]:
        """The colours in the table."""
        return list(self.foreground)


_BASIC = (
    "#000000", "#7f0000", "#007f00", "#7f7fe0", "#00007f", "#7f007f", "#007f7f", "#e5e5e5",
    "#555555", "#ff0000", "#00ff00", "#ffff00", "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
)

_SYSTEM_256 = (
    "#000000", "#800000", "#008000", "#808000", "#000080", "#800080", "#008080", "#c0c0c0",
    "#808080", "#ff0000", "#00ff00", "#ffff00", "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
)

_CUBE_LEVELS = (0x00, 0x5F, 0x87, 0xAF, 0xD7, 0xFF)


def _palette_256() -> list[str]:
    palette = list(_SYSTEM_256)
    palette.extend(
        f"#{r:02x}{g:02x}{b:02x}"
        for r in _CUBE_LEVELS
        for g in _CUBE_LEVELS
        for b in _CUBE_LEVELS
    )
    palette.extend(f"#{level:02x}{level:02x}{level:02x}" for level in range(8, 248, 10))
    return palette


def _build(palette: list[str], fg, bg) -> TTYTable:
    foreground: dict[Colour, str] = {}
    background: dict[Colour, str] = {}
    # Later entries win where a colour appears more than once.
    for index, hex_colour in enumerate(palette):
        colour = must_parse_colour(hex_colour)
        foreground[colour] = fg(index)
        background[colour] = bg(index)
    return TTYTable(foreground, background)


def _eight(base: int):
    return lambda n: f"\033[{base + n}m" if n < 8 else f"\033[1m\033[{base + n - 8}m"


def _sixteen(base: int, bright: int):
    return lambda n: f"\033[{base + n}m" if n < 8 else f"\033[{bright + n - 8}m"


_TABLES: dict[int, TTYTable] = {
    8: _build(list(_BASIC), _eight(30), _eight(40)),
    16: _build(list(_BASIC), _sixteen(30, 90), _sixteen(40, 100)),
    256: _build(
        _palette_256(),
        lambda n: f"\033[38;5;{n}m",
        lambda n: f"\033[48;5;{n}m",
    ),
}


def tty_table(colours: int) -> TTYTable:
    """The table for a terminal with 8, 16 or 256 colours."""
    try:
        return _TABLES[colours]
    except KeyError:
        raise ValueError(f"no terminal colour table for {colours} colours") from None