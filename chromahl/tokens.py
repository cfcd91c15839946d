"""Token types, tokens, lexer configuration and the lexer interface."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


def _truncate(value: int, unit: int) -> int:
    magnitude = abs(value) // unit * unit
    return magnitude if value >= 0 else -magnitude


_NAME_OVERRIDES = {"LINE_TABLE_TD": "LineTableTD", "EOF_TYPE": "EOFType"}


class TokenType(IntEnum):
    """Type of a lexed token, grouped into categories and sub-categories."""

    BACKGROUND = -1
    PRE_WRAPPER = -2
    LINE = -3
    LINE_NUMBERS = -4
    LINE_NUMBERS_TABLE = -5
    LINE_HIGHLIGHT = -6
    LINE_TABLE = -7
    LINE_TABLE_TD = -8
    LINE_LINK = -9
    CODE_LINE = -10
    ERROR = -11
    OTHER = -12
    NONE = -13
    EOF_TYPE = 0

    KEYWORD = 1000
    KEYWORD_CONSTANT = 1001
    KEYWORD_DECLARATION = 1002
    KEYWORD_NAMESPACE = 1003
    KEYWORD_PSEUDO = 1004
    KEYWORD_RESERVED = 1005
    KEYWORD_TYPE = 1006

    NAME = 2000
    NAME_ATTRIBUTE = 2001
    NAME_BUILTIN = 2002
    NAME_BUILTIN_PSEUDO = 2003
    NAME_CLASS = 2004
    NAME_CONSTANT = 2005
    NAME_DECORATOR = 2006
    NAME_ENTITY = 2007
    NAME_EXCEPTION = 2008
    NAME_FUNCTION = 2009
    NAME_FUNCTION_MAGIC = 2010
    NAME_KEYWORD = 2011
    NAME_LABEL = 2012
    NAME_NAMESPACE = 2013
    NAME_OPERATOR = 2014
    NAME_OTHER = 2015
    NAME_PSEUDO = 2016
    NAME_PROPERTY = 2017
    NAME_TAG = 2018
    NAME_VARIABLE = 2019
    NAME_VARIABLE_ANONYMOUS = 2020
    NAME_VARIABLE_CLASS = 2021
    NAME_VARIABLE_GLOBAL = 2022
    NAME_VARIABLE_INSTANCE = 2023
    NAME_VARIABLE_MAGIC = 2024

    LITERAL = 3000
    LITERAL_DATE = 3001
    LITERAL_OTHER = 3002

    LITERAL_STRING = 3100
    LITERAL_STRING_AFFIX = 3101
    LITERAL_STRING_ATOM = 3102
    LITERAL_STRING_BACKTICK = 3103
    LITERAL_STRING_BOOLEAN = 3104
    LITERAL_STRING_CHAR = 3105
    LITERAL_STRING_DELIMITER = 3106
    LITERAL_STRING_DOC = 3107
    LITERAL_STRING_DOUBLE = 3108
    LITERAL_STRING_ESCAPE = 3109
    LITERAL_STRING_HEREDOC = 3110
    LITERAL_STRING_INTERPOL = 3111
    LITERAL_STRING_NAME = 3112
    LITERAL_STRING_OTHER = 3113
    LITERAL_STRING_REGEX = 3114
    LITERAL_STRING_SINGLE = 3115
    LITERAL_STRING_SYMBOL = 3116

    LITERAL_NUMBER = 3200
    LITERAL_NUMBER_BIN = 3201
    LITERAL_NUMBER_FLOAT = 3202
    LITERAL_NUMBER_HEX = 3203
    LITERAL_NUMBER_INTEGER = 3204
    LITERAL_NUMBER_INTEGER_LONG = 3205
    LITERAL_NUMBER_OCT = 3206
    LITERAL_NUMBER_BYTE = 3207

    OPERATOR = 4000
    OPERATOR_WORD = 4001

    PUNCTUATION = 5000

    COMMENT = 6000
    COMMENT_HASHBANG = 6001
    COMMENT_MULTILINE = 6002
    COMMENT_SINGLE = 6003
    COMMENT_SPECIAL = 6004
    COMMENT_PREPROC = 6100
    COMMENT_PREPROC_FILE = 6101

    GENERIC = 7000
    GENERIC_DELETED = 7001
    GENERIC_EMPH = 7002
    GENERIC_ERROR = 7003
    GENERIC_HEADING = 7004
    GENERIC_INSERTED = 7005
    GENERIC_OUTPUT = 7006
    GENERIC_PROMPT = 7007
    GENERIC_STRONG = 7008
    GENERIC_SUBHEADING = 7009
    GENERIC_TRACEBACK = 7010
    GENERIC_UNDERLINE = 7011

    TEXT = 8000
    TEXT_WHITESPACE = 8001
    TEXT_SYMBOL = 8002
    TEXT_PUNCTUATION = 8003

    # Aliases.
    WHITESPACE = 8001
    DATE = 3001
    STRING = 3100
    STRING_AFFIX = 3101
    STRING_BACKTICK = 3103
    STRING_CHAR = 3105
    STRING_DELIMITER = 3106
    STRING_DOC = 3107
    STRING_DOUBLE = 3108
    STRING_ESCAPE = 3109
    STRING_HEREDOC = 3110
    STRING_INTERPOL = 3111
    STRING_OTHER = 3113
    STRING_REGEX = 3114
    STRING_SINGLE = 3115
    STRING_SYMBOL = 3116
    NUMBER = 3200
    NUMBER_BIN = 3201
    NUMBER_FLOAT = 3202
    NUMBER_HEX = 3203
    NUMBER_INTEGER = 3204
    NUMBER_INTEGER_LONG = 3205
    NUMBER_OCT = 3206

    def category(self) -> TokenType:
        """The top-level category, e.g. NAME for NAME_BUILTIN."""
        return TokenType(_truncate(self.value, 1000))

    def sub_category(self) -> TokenType:
        """The sub-category, e.g. LITERAL_STRING for LITERAL_STRING_DOUBLE."""
        return TokenType(_truncate(self.value, 100))

    def parent(self) -> TokenType:
        """The next type up the hierarchy, EOF_TYPE at the top."""
        if abs(self.value) % 100:
            return self.sub_category()
        if abs(self.value) % 1000:
            return self.category()
        return TokenType.EOF_TYPE

    def in_category(self, other: TokenType) -> bool:
        return self.category() == other

    def in_sub_category(self, other: TokenType) -> bool:
        return self.sub_category() == other

    def css_class(self) -> str | None:
        """The short CSS class of a standard type, or None."""
        return STANDARD_TYPES.get(self)

    def __str__(self) -> str:
        name = self.name
        if name in _NAME_OVERRIDES:
            return _NAME_OVERRIDES[name]
        return "".join(part.capitalize() for part in name.split("_"))

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_T = TokenType

STANDARD_TYPES: dict[TokenType, str] = {
    _T.BACKGROUND: "bg",
    _T.PRE_WRAPPER: "chroma",
    _T.LINE: "line",
    _T.LINE_NUMBERS: "ln",
    _T.LINE_NUMBERS_TABLE: "lnt",
    _T.LINE_HIGHLIGHT: "hl",
    _T.LINE_TABLE: "lntable",
    _T.LINE_TABLE_TD: "lntd",
    _T.LINE_LINK: "lnlinks",
    _T.CODE_LINE: "cl",
    _T.TEXT: "",
    _T.TEXT_WHITESPACE: "w",
    _T.ERROR: "err",
    _T.OTHER: "x",
    _T.KEYWORD: "k",
    _T.KEYWORD_CONSTANT: "kc",
    _T.KEYWORD_DECLARATION: "kd",
    _T.KEYWORD_NAMESPACE: "kn",
    _T.KEYWORD_PSEUDO: "kp",
    _T.KEYWORD_RESERVED: "kr",
    _T.KEYWORD_TYPE: "kt",
    _T.NAME: "n",
    _T.NAME_ATTRIBUTE: "na",
    _T.NAME_BUILTIN: "nb",
    _T.NAME_BUILTIN_PSEUDO: "bp",
    _T.NAME_CLASS: "nc",
    _T.NAME_CONSTANT: "no",
    _T.NAME_DECORATOR: "nd",
    _T.NAME_ENTITY: "ni",
    _T.NAME_EXCEPTION: "ne",
    _T.NAME_FUNCTION: "nf",
    _T.NAME_FUNCTION_MAGIC: "fm",
    _T.NAME_PROPERTY: "py",
    _T.NAME_LABEL: "nl",
    _T.NAME_NAMESPACE: "nn",
    _T.NAME_OTHER: "nx",
    _T.NAME_TAG: "nt",
    _T.NAME_VARIABLE: "nv",
    _T.NAME_VARIABLE_CLASS: "vc",
    _T.NAME_VARIABLE_GLOBAL: "vg",
    _T.NAME_VARIABLE_INSTANCE: "vi",
    _T.NAME_VARIABLE_MAGIC: "vm",
    _T.LITERAL: "l",
    _T.LITERAL_DATE: "ld",
    _T.LITERAL_STRING: "s",
    _T.LITERAL_STRING_AFFIX: "sa",
    _T.LITERAL_STRING_BACKTICK: "sb",
    _T.LITERAL_STRING_CHAR: "sc",
    _T.LITERAL_STRING_DELIMITER: "dl",
    _T.LITERAL_STRING_DOC: "sd",
    _T.LITERAL_STRING_DOUBLE: "s2",
    _T.LITERAL_STRING_ESCAPE: "se",
    _T.LITERAL_STRING_HEREDOC: "sh",
    _T.LITERAL_STRING_INTERPOL: "si",
    _T.LITERAL_STRING_OTHER: "sx",
    _T.LITERAL_STRING_REGEX: "sr",
    _T.LITERAL_STRING_SINGLE: "s1",
    _T.LITERAL_STRING_SYMBOL: "ss",
    _T.LITERAL_NUMBER: "m",
    _T.LITERAL_NUMBER_BIN: "mb",
    _T.LITERAL_NUMBER_FLOAT: "mf",
    _T.LITERAL_NUMBER_HEX: "mh",
    _T.LITERAL_NUMBER_INTEGER: "mi",
    _T.LITERAL_NUMBER_INTEGER_LONG: "il",
    _T.LITERAL_NUMBER_OCT: "mo",
    _T.OPERATOR: "o",
    _T.OPERATOR_WORD: "ow",
    _T.PUNCTUATION: "p",
    _T.COMMENT: "c",
    _T.COMMENT_HASHBANG: "ch",
    _T.COMMENT_MULTILINE: "cm",
    _T.COMMENT_PREPROC: "cp",
    _T.COMMENT_PREPROC_FILE: "cpf",
    _T.COMMENT_SINGLE: "c1",
    _T.COMMENT_SPECIAL: "cs",
    _T.GENERIC: "g",
    _T.GENERIC_DELETED: "gd",
    _T.GENERIC_EMPH: "ge",
    _T.GENERIC_ERROR: "gr",
    _T.GENERIC_HEADING: "gh",
    _T.GENERIC_INSERTED: "gi",
    _T.GENERIC_OUTPUT: "go",
    _T.GENERIC_PROMPT: "gp",
    _T.GENERIC_STRONG: "gs",
    _T.GENERIC_SUBHEADING: "gu",
    _T.GENERIC_TRACEBACK: "gt",
    _T.GENERIC_UNDERLINE: "gl",
}


@dataclass(frozen=True)
class Token:
    """A piece of lexed text with its type."""

    type: TokenType
    value: str

    def clone(self) -> Token:
        return dataclasses.replace(self)

    def debug_repr(self) -> str:
        return f"Token({self.type}, {self.value!r})"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RegexConfig:
    """A regex pattern and the score it contributes on a match."""

    pattern: str
    score: float


@dataclass
class AnalyseConfig:
    """Regexes used to score how well text matches a lexer."""

    regexes: list[RegexConfig] = field(default_factory=list)
    first: bool = False


@dataclass
class Config:
    """Configuration describing a lexer."""

    name: str = ""
    aliases: list[str] = field(default_factory=list)
    filenames: list[str] = field(default_factory=list)
    alias_filenames: list[str] = field(default_factory=list)
    mime_types: list[str] = field(default_factory=list)
    case_insensitive: bool = False
    dot_all: bool = False
    not_multiline: bool = False
    ensure_nl: bool = False
    priority: float = 0.0
    analyse: AnalyseConfig | None = None


@dataclass(frozen=True)
class TokeniseOptions:
    """Options for a tokenising run."""

    state: str = "root"
    nested: bool = False
    ensure_lf: bool = False


DEFAULT_OPTIONS = TokeniseOptions(state="root", ensure_lf=True)


class Lexer(ABC):
    """Turns text into a stream of tokens."""

    registry: Any = None
    _analyser: Callable[[str], float] | None = None

    @abstractmethod
    def config(self) -> Config:
        """Configuration describing this lexer."""

    @abstractmethod
    def tokenise(self, options: TokeniseOptions | None, text: str) -> Iterator[Token]:
        """Return an iterator over the tokens of text."""

    def set_registry(self, registry: Any) -> Lexer:
        self.registry = registry
        return self

    def set_analyser(self, analyser: Callable[[str], float]) -> Lexer:
        self._analyser = analyser
        return self

    def analyse_text(self, text: str) -> float:
        """Score between 0.0 and 1.0 of how likely text suits this lexer."""
        if self._analyser is None:
            return 0.0
        return self._analyser(text)


def sort_by_name(lexers: Iterable[Lexer]) -> list[Lexer]:
    """Lexers sorted case-insensitively by name."""
    return sorted(lexers, key=lambda lexer: lexer.config().name.lower())


def sort_by_priority(lexers: Iterable[Lexer]) -> list[Lexer]:
    """Lexers sorted by descending priority; a priority of 0 counts as 1."""
    return sorted(lexers, key=lambda lexer: -(lexer.config().priority or 1))