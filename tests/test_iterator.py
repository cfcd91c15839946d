from chromahl.iterator import concaterator, literator, split_tokens_into_lines, tokenise
from chromahl.tokens import Config, Lexer, Token, TokenType


class _FixedLexer(Lexer):
    def __init__(self, tokens):
        self.tokens = tokens
        self.seen = []

    def config(self):
        return Config(name="fixed")

    def tokenise(self, options, text):
        self.seen.append((options, text))
        return iter(self.tokens)


def _tok(value, kind=TokenType.TEXT):
    return Token(kind, value)


def test_concaterator_preserves_order():
    first = [_tok("a"), _tok("b")]
    second = [_tok("c")]
    third = [_tok("d"), _tok("e")]
    assert list(concaterator(iter(first), iter(second), iter(third))) == first + second + third


def test_concaterator_with_nothing_is_empty():
    assert list(concaterator()) == []


def test_literator_returns_given_tokens():
    tokens = [_tok("x"), _tok("y", TokenType.KEYWORD)]
    assert list(literator(*tokens)) == tokens


def test_split_tokens_into_lines():
    tokens = [
        Token(TokenType.NAME_KEYWORD, "hello"),
        Token(TokenType.NAME_KEYWORD, " world\nwhat?\n"),
    ]
    expected = [
        [Token(TokenType.NAME_KEYWORD, "hello"), Token(TokenType.NAME_KEYWORD, " world\n")],
        [Token(TokenType.NAME_KEYWORD, "what?\n")],
    ]
    assert split_tokens_into_lines(tokens) == expected


def test_split_preserves_text_and_line_endings():
    tokens = [_tok("one\ntwo"), _tok(" three\n\nfour", TokenType.KEYWORD), _tok("\nfive")]
    lines = split_tokens_into_lines(tokens)
    joined = "".join(token.value for line in lines for token in line)
    assert joined == "".join(token.value for token in tokens)
    for line in lines[:-1]:
        assert line[-1].value.endswith("\n")
    for line in lines:
        assert sum(token.value.count("\n") for token in line) <= 1


def test_split_keeps_token_types():
    tokens = [_tok("a\nb", TokenType.COMMENT)]
    lines = split_tokens_into_lines(tokens)
    assert {token.type for line in lines for token in line} == {TokenType.COMMENT}


def test_split_strips_empty_trailing_line():
    token = _tok("a\n")
    assert split_tokens_into_lines([token]) == [[token]]


def test_split_empty_input():
    assert split_tokens_into_lines([]) == []


def test_tokenise_collects_lexer_output():
    tokens = [_tok("a"), _tok("b", TokenType.PUNCTUATION)]
    lexer = _FixedLexer(tokens)
    assert tokenise(lexer, None, "ab") == tokens
    assert lexer.seen == [(None, "ab")]