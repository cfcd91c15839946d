"""CSS helpers for the HTML formatter: entry conversion, compression and caching."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol

from chromahl.style import Style, StyleEntry, Trilean
from chromahl.tokens import TokenType

STYLE_CACHE_LIMIT = 32


def style_entry_to_css(entry: StyleEntry) -> str:
    """CSS declarations for a style entry, separated by "; "."""
    styles: list[str] = []
    if entry.colour.is_set():
        styles.append(f"color: {entry.colour}")
    if entry.background.is_set():
        styles.append(f"background-color: {entry.background}")
    if entry.bold == Trilean.YES:
        styles.append("font-weight: bold")
    if entry.italic == Trilean.YES:
        styles.append("font-style: italic")
    if entry.underline == Trilean.YES:
        styles.append("text-decoration: underline")
    return "; ".join(styles)


def _compress_declaration(declaration: str) -> str:
    declaration = " ".join(declaration.split())
    declaration = declaration.replace(": ", ":", 1)
    if "#" in declaration and len(declaration) >= 6:
        tail = declaration[-6:]
        if tail[0] == tail[1] and tail[2] == tail[3] and tail[4] == tail[5]:
            declaration = declaration[:-6] + tail[0] + tail[2] + tail[4]
    return declaration


def compress_style(style: str) -> str:
    """Remove redundant spaces and shorten #rrggbb colours to #rgb where possible."""
    return ";".join(_compress_declaration(part) for part in style.split(";"))


class CSSSource(Protocol):
    """What the cache needs from a formatter to build CSS for a style."""

    classes: bool

    def style_to_css(self, style: Style) -> dict[TokenType, str]: ...


@dataclass
class _CacheEntry:
    style: Style
    compressed: bool
    css: dict[TokenType, str]


class StyleCache:
    """A small least-recently-used cache of CSS compiled from styles."""

    def __init__(self, source: CSSSource, limit: int = STYLE_CACHE_LIMIT) -> None:
        self.source = source
        self.limit = limit
        self._entries: list[_CacheEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, style: Style, compress: bool) -> dict[TokenType, str]:
        """CSS for each token type of style, compressed if asked."""
        with self._lock:
            found = next(
                (
                    entry
                    for entry in reversed(self._entries)
                    if entry.style is style and entry.compressed == compress
                ),
                None,
            )
            if found is not None:
                if self._entries[-1] is not found:
                    self._entries.remove(found)
                    self._entries.append(found)
                return found.css

            css = self.source.style_to_css(style)
            if not self.source.classes:
                css = {token_type: compress_style(text) for token_type, text in css.items()}
            if compress:
                css = {token_type: compress_style(text) for token_type, text in css.items()}
            if len(self._entries) >= self.limit:
                del self._entries[0]
            self._entries.append(_CacheEntry(style, compress, css))
            return css