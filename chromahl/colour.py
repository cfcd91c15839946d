"""RGB colours as used by styles and formatters."""

from __future__ import annotations

import math
import re

# The sixteen basic terminal colours, darker half first.
_BASIC_COLOURS: tuple[tuple[str, str], ...] = (
    ("black", "000000"),
    ("darkred", "7f0000"),
    ("darkgreen", "007f00"),
    ("brown", "7f7fe0"),
    ("darkblue", "00007f"),
    ("purple", "7f007f"),
    ("teal", "007f7f"),
    ("lightgray", "e5e5e5"),
    ("darkgray", "555555"),
    ("red", "ff0000"),
    ("green", "00ff00"),
    ("yellow", "ffff00"),
    ("blue", "0000ff"),
    ("fuchsia", "ff00ff"),
    ("turquoise", "00ffff"),
    ("white", "ffffff"),
)

# Each basic colour is known both as "#ansi<name>" and as plain "#<name>".
ANSI2RGB: dict[str, str] = {
    f"#{prefix}{name}": rgb
    for prefix in ("ansi", "")
    for name, rgb in _BASIC_COLOURS
}

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


class Colour(int):
    """An RGB colour.

    The integer value is 0 for an unset colour, otherwise 0xRRGGBB plus one,
    so colours order and hash like plain integers.
    """

    __slots__ = ()

    def is_set(self) -> bool:
        """True if the colour is set."""
        return self != 0

    def red(self) -> int:
        """Red component, 0-255."""
        return ((self - 1) >> 16) & 0xFF

    def green(self) -> int:
        """Green component, 0-255."""
        return ((self - 1) >> 8) & 0xFF

    def blue(self) -> int:
        """Blue component, 0-255."""
        return (self - 1) & 0xFF

    def _components(self) -> tuple[int, int, int]:
        return self.red(), self.green(), self.blue()

    def distance(self, other: Colour) -> float:
        """Perceptual distance to another colour (weighted RGB metric)."""
        (ar, ag, ab), (br, bg, bb) = self._components(), other._components()
        mean_red = (ar + br) // 2
        dr, dg, db = ar - br, ag - bg, ab - bb
        weighted = (
            (((512 + mean_red) * dr * dr) >> 8)
            + 4 * dg * dg
            + (((767 - mean_red) * db * db) >> 8)
        )
        return math.sqrt(weighted)

    def brighten(self, factor: float) -> Colour:
        """Return a copy with brightness adjusted; a negative factor darkens."""
        channels = [float(value) for value in self._components()]
        if factor < 0:
            scale = factor + 1
            adjusted = [value * scale for value in channels]
        else:
            adjusted = [(255 - value) * factor + value for value in channels]
        return new_colour(*(_to_byte(value) for value in adjusted))

    def brighten_or_darken(self, factor: float) -> Colour:
        """Brighten a dark colour or darken a bright one."""
        return self.brighten(factor if self.brightness() < 0.5 else -factor)

    def clamp_brightness(self, minimum: float, maximum: float) -> Colour:
        """Return a copy whose brightness lies within [minimum, maximum]."""
        if not self.is_set():
            return self
        lower, upper = max(minimum, 0.0), min(maximum, 1.0)
        current = self.brightness()
        target = min(max(current, lower), upper)
        if current == target:
            return self
        total = float(sum(self._components()))
        full = 255 * 3
        if target > current:
            return self.brighten((target * full - total) / (full - total))
        return self.brighten((target * full) / total - 1)

    def brightness(self) -> float:
        """Approximate brightness in the range 0.0 to 1.0."""
        return sum(self._components()) / 255.0 / 3.0

    def __str__(self) -> str:
        return f"#{int(self) - 1:06x}"

    def __repr__(self) -> str:
        return f"Colour(0x{int(self) - 1:06x})"

    def __format__(self, spec: str) -> str:
        if not spec:
            return str(self)
        return int.__format__(self, spec)


def _to_byte(value: float) -> int:
    return min(max(int(value), 0), 255)


def new_colour(r: int, g: int, b: int) -> Colour:
    """Create a colour from its red, green and blue components."""
    return Colour((((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)) + 1)


def _normalise(colour: str) -> str:
    named = ANSI2RGB.get(colour)
    if named is not None:
        return named
    if colour.startswith("#"):
        colour = colour[1:]
        if len(colour) == 3:
            return "".join(ch * 2 for ch in colour)
    return colour


def parse_colour(colour: str) -> Colour:
    """Parse #rgb, #rrggbb, #ansi<name> or #<name>; invalid input gives an unset colour."""
    digits = _normalise(colour)
    if not _HEX_DIGITS.fullmatch(digits):
        return Colour(0)
    number = int(digits, 16)
    if number > 0xFFFFFFFF:
        return Colour(0)
    value = (number + 1) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return Colour(value)


def must_parse_colour(colour: str) -> Colour:
    """Like parse_colour, but raise ValueError for an invalid colour."""
    parsed = parse_colour(colour)
    if not parsed.is_set():
        raise ValueError(f"invalid colour {colour!r}")
    return parsed