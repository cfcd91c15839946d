import io
import re

import pytest

from chromahl.colour import parse_colour
from chromahl.html import HTMLFormatter, PreWrapper
from chromahl.style import Style, StyleEntry, Trilean
from chromahl.tokens import STANDARD_TYPES, Token, TokenType

T = TokenType

STYLE = Style(
    "test",
    {
        T.BACKGROUND: StyleEntry(colour=parse_colour("#f8f8f2"), background=parse_colour("#272822")),
        T.NAME_BUILTIN: StyleEntry(colour=parse_colour("#a6e22e")),
        T.LITERAL_STRING: StyleEntry(colour=parse_colour("#e6db74")),
        T.KEYWORD: StyleEntry(colour=parse_colour("#66d9ef"), bold=Trilean.YES),
    },
)

ECHO = [Token(T.NAME_BUILTIN, "echo"), Token(T.TEXT, " FOO")]
ECHO_QUOTED = [Token(T.NAME_BUILTIN, "echo"), Token(T.TEXT, " "), Token(T.LITERAL_STRING_DOUBLE, '"FOO"')]

GO_SOURCE = [
    Token(T.KEYWORD_NAMESPACE, "package"),
    Token(T.TEXT, " "),
    Token(T.NAME_OTHER, "main"),
    Token(T.TEXT, "\n"),
    Token(T.KEYWORD_DECLARATION, "func"),
    Token(T.TEXT, " "),
    Token(T.NAME_FUNCTION, "main"),
    Token(T.PUNCTUATION, "()"),
    Token(T.TEXT, "\n"),
    Token(T.PUNCTUATION, "{"),
    Token(T.TEXT, "\n"),
    Token(T.NAME_BUILTIN, "println"),
    Token(T.PUNCTUATION, "("),
    Token(T.LITERAL_STRING_BACKTICK, "`hello world`"),
    Token(T.PUNCTUATION, ")"),
    Token(T.TEXT, "\n"),
    Token(T.PUNCTUATION, "}"),
    Token(T.TEXT, "\n"),
]


def render(formatter, tokens=ECHO, style=STYLE):
    buf = io.StringIO()
    formatter.format(buf, style, iter(tokens))
    return buf.getvalue()


def css_of(formatter, style=STYLE):
    buf = io.StringIO()
    formatter.write_css(buf, style)
    return buf.getvalue()


class FooWrapper(PreWrapper):
    def start(self, code, style_attr):
        return f'<foo{style_attr} id="code-{str(code).lower()}">'

    def end(self, code):
        return "</foo>"


def test_style_to_css_rules_do_not_start_with_semicolon():
    style = STYLE.with_entry(T.LINE_HIGHLIGHT, StyleEntry(background=parse_colour("#ffffcc")))
    style = style.with_entry(T.LINE_NUMBERS, StyleEntry(bold=Trilean.YES))
    css = HTMLFormatter(classes=True).style_to_css(style)
    assert css
    assert all(not rule.strip().startswith(";") for rule in css.values())


def test_class_prefix():
    with_prefix = HTMLFormatter(classes=True, prefix="some-prefix-")
    no_prefix = HTMLFormatter(classes=True)
    for token_type in STANDARD_TYPES:
        if no_prefix.class_for(token_type) == "":
            assert with_prefix.class_for(token_type) == ""
        else:
            assert with_prefix.class_for(token_type).startswith("some-prefix-")
    assert ".some-prefix-chroma " in css_of(with_prefix)


def test_class_for_walks_up_the_hierarchy():
    formatter = HTMLFormatter(classes=True)
    assert formatter.class_for(T.NAME_BUILTIN) == "nb"
    assert formatter.class_for(T.LITERAL_STRING_NAME) == "s"
    assert formatter.class_for(T.TEXT_SYMBOL) == ""


def test_table_line_number_newlines():
    formatter = HTMLFormatter(classes=True, line_numbers=True, line_numbers_in_table=True)
    out = render(formatter, GO_SOURCE)
    assert '<span class="lnt">2\n</span><span class="lnt">3\n</span><span class="lnt">4\n</span>' in out


def test_tab_width_style():
    out = render(HTMLFormatter(tab_width=4, classes=False))
    pattern = r'<pre.*style=".*background-color:[^;]+;-moz-tab-size:4;-o-tab-size:4;tab-size:4;[^"]*".+'
    match = re.search(pattern, out)
    assert match[0].startswith("<pre")


def test_with_custom_css():
    formatter = HTMLFormatter(classes=False, custom_css={T.LINE: "display: inline;"})
    out = render(formatter)
    pattern = r'<span style="display:flex;display:inline;"><span><span style=".*">echo</span> FOO</span></span>'
    match = re.search(pattern, out)
    assert match[0].endswith("echo</span> FOO</span></span>")


def test_with_custom_css_style_inheritance():
    formatter = HTMLFormatter(
        classes=False,
        custom_css={T.STRING: "background: blue;", T.LITERAL_STRING_DOUBLE: "color: tomato;"},
    )
    out = render(formatter, ECHO_QUOTED)
    match = re.search(r' <span style=".*;background:blue;color:tomato;">&#34;FOO&#34;</span>', out)
    assert match[0].endswith("&#34;FOO&#34;</span>")


def test_wrap_long_lines():
    out = render(HTMLFormatter(classes=False, wrap_long_lines=True), GO_SOURCE)
    match = re.search(r'<pre.*style=".*white-space:pre-wrap;word-break:break-word;', out)
    assert match[0].endswith("white-space:pre-wrap;word-break:break-word;")


def test_highlight_lines():
    out = render(HTMLFormatter(classes=True, highlight_ranges=[(4, 5)]), GO_SOURCE)
    assert '<span class="line hl"><span class="cl">' in out
    assert out.count("line hl") == 2


def test_line_numbers():
    out = render(HTMLFormatter(classes=True, line_numbers=True))
    assert (
        '<span class="line"><span class="ln">1</span><span class="cl">'
        '<span class="nb">echo</span> FOO</span></span>'
    ) in out


def test_pre_wrapper_standalone():
    out = render(HTMLFormatter(standalone=True, classes=True))
    body = re.search(
        '<body class="bg">\n<pre.*class="chroma"><code><span class="line"><span class="cl">'
        '<span class="nb">echo</span> FOO</span></span></code></pre>\n</body>\n</html>',
        out,
    )
    assert body[0].endswith("</body>\n</html>")
    assert re.search(r"\.bg { .+ }", out)[0].startswith(".bg {")
    assert re.search(r"\.chroma { .+ }", out)[0].startswith(".chroma {")


def test_linkable_line_numbers():
    formatter = HTMLFormatter(
        classes=False,
        line_numbers=True,
        linkable_line_numbers=True,
        line_numbers_id_prefix="line",
    )
    out = render(formatter, GO_SOURCE)
    assert 'id="line1"><a style="outline:none;text-decoration:none;color:inherit" href="#line1">1</a>' in out
    assert 'id="line5"><a style="outline:none;text-decoration:none;color:inherit" href="#line5">5</a>' in out


def test_table_linkable_line_numbers():
    formatter = HTMLFormatter(
        standalone=True,
        classes=True,
        line_numbers=True,
        line_numbers_in_table=True,
        linkable_line_numbers=True,
        line_numbers_id_prefix="line",
    )
    out = render(formatter, GO_SOURCE)
    assert 'id="line1"><a class="lnlinks" href="#line1">1</a>' in out
    assert 'id="line5"><a class="lnlinks" href="#line5">5</a>' in out
    assert "/* LineLink */ .chroma .lnlinks { outline: none; text-decoration: none; color: inherit }" in out


@pytest.mark.parametrize(
    "base, expected",
    [
        (
            7,
            '<span class="lnt"> 7\n</span><span class="lnt"> 8\n</span><span class="lnt"> 9\n'
            '</span><span class="lnt">10\n</span><span class="lnt">11\n</span>',
        ),
        (
            6,
            '<span class="lnt"> 6\n</span><span class="lnt"> 7\n</span><span class="lnt"> 8\n'
            '</span><span class="lnt"> 9\n</span><span class="lnt">10\n</span>',
        ),
        (
            5,
            '<span class="lnt">5\n</span><span class="lnt">6\n</span><span class="lnt">7\n'
            '</span><span class="lnt">8\n</span><span class="lnt">9\n</span>',
        ),
    ],
)
def test_table_line_number_spacing(base, expected):
    formatter = HTMLFormatter(
        classes=True, line_numbers=True, line_numbers_in_table=True, base_line_number=base
    )
    assert expected in render(formatter, GO_SOURCE)


def test_pre_wrapper_regular():
    assert render(HTMLFormatter(classes=True)) == (
        '<pre class="chroma"><code><span class="line"><span class="cl">'
        '<span class="nb">echo</span> FOO</span></span></code></pre>'
    )


def test_prevent_surrounding_pre():
    out = render(HTMLFormatter(prevent_surrounding_pre=True, classes=True))
    assert out == '<span class="nb">echo</span> FOO'


def test_inline_code():
    out = render(HTMLFormatter(inline_code=True, classes=True))
    assert out == '<code class="chroma"><span class="nb">echo</span> FOO</code>'


def test_inline_code_inline_styles():
    out = render(HTMLFormatter(inline_code=True))
    match = re.fullmatch(r'<code style=".+?"><span style=".+?">echo</span> FOO</code>', out)
    assert match[0] == out


def test_custom_wrapper():
    out = render(HTMLFormatter(pre_wrapper=FooWrapper(), classes=True))
    assert out == (
        '<foo class="chroma" id="code-true"><span class="line"><span class="cl">'
        '<span class="nb">echo</span> FOO</span></span></foo>'
    )


def test_custom_wrapper_line_numbers_in_table():
    formatter = HTMLFormatter(
        pre_wrapper=FooWrapper(), classes=True, line_numbers=True, line_numbers_in_table=True
    )
    assert render(formatter) == (
        '<div class="chroma">\n'
        '<table class="lntable"><tr><td class="lntd">\n'
        '<foo class="chroma" id="code-false"><span class="lnt">1\n'
        "</span></foo></td>\n"
        '<td class="lntd">\n'
        '<foo class="chroma" id="code-true"><span class="line"><span class="cl">'
        '<span class="nb">echo</span> FOO</span></span></foo></td></tr></table>\n'
        "</div>\n"
    )


def test_write_css_with_all_classes():
    out = css_of(HTMLFormatter(all_classes=True))
    assert ".chroma . {" not in out
    assert "/* Background */ .bg {" in out


def test_style_cache_is_bounded():
    formatter = HTMLFormatter()
    for index in range(40):
        css_of(formatter, Style(f"style{index}", dict(STYLE.entries)))
    assert len(formatter.style_cache) == 32