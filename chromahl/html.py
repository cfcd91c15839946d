"""A formatter that renders tokens as HTML, with inline styles or CSS classes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TextIO

from chromahl.formatter import Formatter
from chromahl.html_css import StyleCache, style_entry_to_css
from chromahl.iterator import split_tokens_into_lines
from chromahl.style import Style
from chromahl.tokens import STANDARD_TYPES, Token, TokenType

_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"}
)

_LINE_NUMBERS_STYLE = (
    "white-space: pre; -webkit-user-select: none; user-select: none; "
    "margin-right: 0.4em; padding: 0 0.4em 0 0.4em;"
)


def _escape(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


class PreWrapper:
    """Produces the elements around the output; by default <pre> and <code>.

    The code flag is true around highlighted code and false around line
    numbers listed in a table.
    """

    def start(self, code: bool, style_attr: str) -> str:
        if code:
            return f"<pre{style_attr}><code>"
        return f"<pre{style_attr}>"

    def end(self, code: bool) -> str:
        if code:
            return "</code></pre>"
        return "</pre>"


class _NopPreWrapper(PreWrapper):
    def start(self, code: bool, style_attr: str) -> str:
        return ""

    def end(self, code: bool) -> str:
        return ""


class _InlineCodePreWrapper(PreWrapper):
    def start(self, code: bool, style_attr: str) -> str:
        return f"<code{style_attr}>" if code else ""

    def end(self, code: bool) -> str:
        return "</code>" if code else ""


DEFAULT_PRE_WRAPPER = PreWrapper()
NOP_PRE_WRAPPER = _NopPreWrapper()
INLINE_CODE_PRE_WRAPPER = _InlineCodePreWrapper()


class HTMLFormatter(Formatter):
    """Renders tokens as HTML."""

    def __init__(
        self,
        *,
        standalone: bool = False,
        prefix: str = "",
        classes: bool = False,
        all_classes: bool = False,
        custom_css: Mapping[TokenType, str] | None = None,
        tab_width: int = 8,
        prevent_surrounding_pre: bool = False,
        inline_code: bool = False,
        pre_wrapper: PreWrapper | None = None,
        wrap_long_lines: bool = False,
        line_numbers: bool = False,
        line_numbers_in_table: bool = False,
        linkable_line_numbers: bool = False,
        line_numbers_id_prefix: str = "",
        highlight_ranges: Iterable[Sequence[int]] = (),
        base_line_number: int = 1,
    ) -> None:
        self.standalone = standalone
        self.prefix = prefix
        self.classes = classes
        self.all_classes = all_classes
        self.custom_css: dict[TokenType, str] = dict(custom_css or {})
        self.tab_width = tab_width
        self.prevent_surrounding_pre = prevent_surrounding_pre
        self.inline_code = inline_code
        if pre_wrapper is not None:
            self.pre_wrapper = pre_wrapper
        elif inline_code:
            self.pre_wrapper = INLINE_CODE_PRE_WRAPPER
        elif prevent_surrounding_pre:
            self.pre_wrapper = NOP_PRE_WRAPPER
        else:
            self.pre_wrapper = DEFAULT_PRE_WRAPPER
        self.wrap_long_lines = wrap_long_lines
        self.line_numbers = line_numbers
        self.line_numbers_in_table = line_numbers_in_table
        self.linkable_line_numbers = linkable_line_numbers
        self.line_numbers_id_prefix = line_numbers_id_prefix
        self.highlight_ranges: list[tuple[int, int]] = sorted(
            ((int(start), int(end)) for start, end in highlight_ranges),
            key=lambda span: span[0],
        )
        self.base_line_number = base_line_number
        self.style_cache = StyleCache(self)

    def format(self, writer: TextIO, style: Style, tokens: Iterable[Token]) -> None:
        write = writer.write
        css = self.style_cache.get(style, True)
        attr = self._style_attr

        if self.standalone:
            write("<html>\n")
            if self.classes:
                write('<style type="text/css">\n')
                self.write_css(writer, style)
                write(f"body {{ {css[TokenType.BACKGROUND]}; }}\n")
                write("</style>")
            write(f"<body{attr(css, TokenType.BACKGROUND)}>\n")

        wrap_in_table = self.line_numbers and self.line_numbers_in_table
        lines = split_tokens_into_lines(tokens)
        first = self.base_line_number
        line_digits = len(str(first + len(lines) - 1))

        if wrap_in_table:
            write(f"<div{attr(css, TokenType.PRE_WRAPPER)}>\n")
            write(f"<table{attr(css, TokenType.LINE_TABLE)}><tr>")
            write(f"<td{attr(css, TokenType.LINE_TABLE_TD)}>\n")
            write(self.pre_wrapper.start(False, attr(css, TokenType.PRE_WRAPPER)))
            highlight_index = 0
            for line in range(first, first + len(lines)):
                highlight, advance = self._should_highlight(highlight_index, line)
                if advance:
                    highlight_index += 1
                if highlight:
                    write(f"<span{attr(css, TokenType.LINE_HIGHLIGHT)}>")
                write(
                    f"<span{attr(css, TokenType.LINE_NUMBERS_TABLE)}{self._line_id_attribute(line)}>"
                    f"{self._line_title(css, line_digits, line)}\n</span>"
                )
                if highlight:
                    write("</span>")
            write(self.pre_wrapper.end(False))
            write("</td>\n")
            write(f"<td{attr(css, TokenType.LINE_TABLE_TD, 'width:100%')}>\n")

        write(self.pre_wrapper.start(True, attr(css, TokenType.PRE_WRAPPER)))

        wrap_lines = not (self.prevent_surrounding_pre or self.inline_code)
        highlight_index = 0
        for line, line_tokens in enumerate(lines, start=first):
            highlight, advance = self._should_highlight(highlight_index, line)
            if advance:
                highlight_index += 1

            if wrap_lines:
                write("<span")
                if highlight:
                    if self.classes:
                        write(
                            f' class="{self.class_for(TokenType.LINE)} '
                            f'{self.class_for(TokenType.LINE_HIGHLIGHT)}"'
                        )
                    else:
                        write(
                            f' style="{css.get(TokenType.LINE, "")} '
                            f'{css.get(TokenType.LINE_HIGHLIGHT, "")}"'
                        )
                    write(">")
                else:
                    write(f"{attr(css, TokenType.LINE)}>")
                if self.line_numbers and not wrap_in_table:
                    write(
                        f"<span{attr(css, TokenType.LINE_NUMBERS)}{self._line_id_attribute(line)}>"
                        f"{self._line_title(css, line_digits, line)}</span>"
                    )
                write(f"<span{attr(css, TokenType.CODE_LINE)}>")

            for token in line_tokens:
                text = _escape(token.value)
                token_attr = attr(css, token.type)
                if token_attr:
                    text = f"<span{token_attr}>{text}</span>"
                write(text)

            if wrap_lines:
                write("</span>")  # code line
                write("</span>")  # line

        write(self.pre_wrapper.end(True))

        if wrap_in_table:
            write("</td></tr></table>\n")
            write("</div>\n")

        if self.standalone:
            write("\n</body>\n")
            write("</html>\n")

    def _line_id(self, line: int) -> str:
        return f"{self.line_numbers_id_prefix}{line}"

    def _line_id_attribute(self, line: int) -> str:
        if not self.linkable_line_numbers:
            return ""
        return f' id="{self._line_id(line)}"'

    def _line_title(self, css: Mapping[TokenType, str], digits: int, line: int) -> str:
        title = str(line).rjust(digits)
        if not self.linkable_line_numbers:
            return title
        return (
            f'<a{self._style_attr(css, TokenType.LINE_LINK)} '
            f'href="#{self._line_id(line)}">{title}</a>'
        )

    def _should_highlight(self, highlight_index: int, line: int) -> tuple[bool, bool]:
        advance = False
        ranges = self.highlight_ranges
        while highlight_index < len(ranges) and line > ranges[highlight_index][1]:
            highlight_index += 1
            advance = True
        if highlight_index < len(ranges):
            start, end = ranges[highlight_index]
            if start <= line <= end:
                return True, advance
        return False, advance

    def class_for(self, token_type: TokenType) -> str:
        """The CSS class for token_type, found via its ancestors; "" if none."""
        current = token_type
        while current != TokenType.EOF_TYPE:
            if current in STANDARD_TYPES:
                cls = STANDARD_TYPES[current]
                return self.prefix + cls if cls else ""
            current = current.parent()
        return ""

    def _style_attr(
        self, styles: Mapping[TokenType, str], token_type: TokenType, *extra_css: str
    ) -> str:
        if self.classes:
            cls = self.class_for(token_type)
            return f' class="{cls}"' if cls else ""
        for candidate in (token_type, token_type.sub_category(), token_type.category()):
            if candidate in styles:
                return ' style="%s"' % ";".join([styles[candidate], *extra_css])
        return ""

    def _tab_width_style(self) -> str:
        if self.tab_width not in (0, 8):
            width = self.tab_width
            return f"-moz-tab-size: {width}; -o-tab-size: {width}; tab-size: {width};"
        return ""

    def write_css(self, writer: TextIO, style: Style) -> None:
        """Write CSS rules for style, without surrounding HTML."""
        css = self.style_cache.get(style, False)
        write = writer.write
        prefix = self.prefix
        write(f"/* {TokenType.BACKGROUND} */ .{prefix}bg {{ {css[TokenType.BACKGROUND]} }}\n")
        write(
            f"/* {TokenType.PRE_WRAPPER} */ .{prefix}chroma "
            f"{{ {css[TokenType.PRE_WRAPPER]} }}\n"
        )
        if self.line_numbers and self.line_numbers_in_table:
            write(
                f"/* {TokenType.LINE_TABLE_TD} */ .{prefix}chroma "
                f".{self.class_for(TokenType.LINE_TABLE_TD)}:last-child {{ width: 100%; }}"
            )
        if self.line_numbers or self.line_numbers_in_table:
            targeted = style_entry_to_css(style.get(TokenType.LINE_HIGHLIGHT))
            for token_type in (TokenType.LINE_NUMBERS, TokenType.LINE_NUMBERS_TABLE):
                write(
                    f"/* {token_type} targeted by URL anchor */ .{prefix}chroma "
                    f".{self.class_for(token_type)}:target {{ {targeted} }}\n"
                )
        for token_type in sorted(css):
            if token_type in (TokenType.BACKGROUND, TokenType.PRE_WRAPPER):
                continue
            cls = self.class_for(token_type)
            if not cls:
                continue
            write(f"/* {token_type} */ .{prefix}chroma .{cls} {{ {css[token_type]} }}\n")

    def style_to_css(self, style: Style) -> dict[TokenType, str]:
        """CSS declarations for each standard token type of style."""
        classes: dict[TokenType, str] = {}
        custom = self.custom_css
        background = style.get(TokenType.BACKGROUND)
        for token_type in STANDARD_TYPES:
            entry = style.get(token_type)
            if token_type != TokenType.BACKGROUND:
                entry = entry.sub(background)

            category = token_type.category()
            sub_category = token_type.sub_category()
            if token_type != category and category in custom:
                classes[token_type] = custom[category]
            if category != sub_category and sub_category in custom:
                classes[token_type] = classes.get(token_type, "") + custom[sub_category]
            if token_type in custom:
                classes[token_type] = classes.get(token_type, "") + custom[token_type]

            extra = classes.get(token_type, "")
            if not self.all_classes and entry.is_zero() and extra == "":
                continue

            entry_css = style_entry_to_css(entry)
            if entry_css and extra:
                entry_css += ";"
            classes[token_type] = entry_css + extra

        classes[TokenType.BACKGROUND] = (
            classes.get(TokenType.BACKGROUND, "") + ";" + self._tab_width_style()
        )
        classes[TokenType.PRE_WRAPPER] = (
            classes.get(TokenType.PRE_WRAPPER, "") + classes[TokenType.BACKGROUND]
        )
        if self.highlight_ranges and custom.get(TokenType.PRE_WRAPPER, "") == "":
            classes[TokenType.PRE_WRAPPER] += "display: grid;"
        if self.wrap_long_lines:
            classes[TokenType.PRE_WRAPPER] += "white-space: pre-wrap; word-break: break-word;"

        def prepend(token_type: TokenType, rules: str) -> None:
            classes[token_type] = rules + classes.get(token_type, "")

        prepend(TokenType.LINE, "display: flex;")
        prepend(TokenType.LINE_NUMBERS, _LINE_NUMBERS_STYLE)
        prepend(TokenType.LINE_NUMBERS_TABLE, _LINE_NUMBERS_STYLE)
        prepend(TokenType.LINE_TABLE, "border-spacing: 0; padding: 0; margin: 0; border: 0;")
        prepend(TokenType.LINE_TABLE_TD, "vertical-align: top; padding: 0; margin: 0; border: 0;")
        prepend(TokenType.LINE_LINK, "outline: none; text-decoration: none; color: inherit")
        return classes