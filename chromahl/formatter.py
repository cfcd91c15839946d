"""The formatter interface and error-guarding wrappers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from chromahl.tokens import Token


class FormatError(Exception):
    """Raised when formatting a token stream fails."""


@contextmanager
def _format_errors() -> Iterator[None]:
    try:
        yield
    except FormatError:
        raise
    except Exception as exc:
        raise FormatError(str(exc)) from exc


class Formatter(ABC):
    """Writes a token stream to a text stream in some output format."""

    @abstractmethod
    def format(self, writer: TextIO, style: Any, tokens: Iterable[Token]) -> None:
        """Write tokens, styled with style, to writer."""


class FormatterFunc(Formatter):
    """A formatter backed by a plain function.

    Any error raised while formatting, including by the token stream,
    surfaces as a FormatError.
    """

    def __init__(self, func: Callable[[TextIO, Any, Iterable[Token]], None]) -> None:
        self.func = func

    def format(self, writer: TextIO, style: Any, tokens: Iterable[Token]) -> None:
        with _format_errors():
            self.func(writer, style, tokens)


class _RecoveringFormatter(Formatter):
    def __init__(self, formatter: Formatter) -> None:
        self.formatter = formatter

    def format(self, writer: TextIO, style: Any, tokens: Iterable[Token]) -> None:
        with _format_errors():
            self.formatter.format(writer, style, tokens)


def recovering_formatter(formatter: Formatter) -> Formatter:
    """Wrap formatter so that any error it raises becomes a FormatError."""
    return _RecoveringFormatter(formatter)