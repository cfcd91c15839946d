# chromahl

Building blocks for syntax highlighting, with no third-party dependencies:

- `chromahl.tokens`: `TokenType` (a hierarchy of categories and
  sub-categories, with `category()`, `sub_category()`, `parent()` and
  `css_class()`), `Token`, `Config`, `TokeniseOptions` and the abstract
  `Lexer` base class, plus `sort_by_name` and `sort_by_priority`.
- `chromahl.colour`: `Colour` with `red()`, `green()`, `blue()`,
  `brightness()`, `brighten()`, `brighten_or_darken()`,
  `clamp_brightness()` and `distance()`; `parse_colour`,
  `must_parse_colour` and `new_colour`.
- `chromahl.iterator`: `concaterator`, `literator`,
  `split_tokens_into_lines` and `tokenise`.
- `chromahl.coalesce`: `coalesce(lexer)` wraps a lexer so that adjacent
  tokens of the same type are merged into one.
- `chromahl.style`: `Style`, `StyleEntry` and `Trilean`. `Style.get`
  resolves an entry through the token's sub-category, category, `TEXT` and
  `BACKGROUND`.
- `chromahl.formatter`: the `Formatter` base class, `FormatterFunc`,
  `recovering_formatter` and `FormatError`.
- `chromahl.html`: `HTMLFormatter`, and `PreWrapper` for controlling the
  elements around the output.
- `chromahl.html_css`: `style_entry_to_css`, `compress_style` and the
  `StyleCache` used by the HTML formatter.
- `chromahl.tty` and `chromahl.ttytables`: terminal formatters for 8, 16,
  256 and 24-bit colour.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Colours

```python
from chromahl.colour import parse_colour, must_parse_colour, new_colour

c = parse_colour("#8913af")
c.red(), c.green(), c.blue()      # (0x89, 0x13, 0xaf)
str(c)                            # "#8913af"
parse_colour("#f00")              # short form
parse_colour("#ansired")          # named basic colours, also "#red"
new_colour(128, 128, 128).brighten(0.5)
```

`parse_colour` returns an unset colour (`is_set()` is false) for invalid
input; `must_parse_colour` raises `ValueError` instead.

## Lexers and token streams

`Lexer` is abstract: a lexer provides `config()` and
`tokenise(options, text)`, which returns an iterator of `Token`s.

```python
from chromahl.coalesce import coalesce
from chromahl.iterator import tokenise, split_tokens_into_lines
from chromahl.tokens import Config, Lexer, Token, TokenType


class Characters(Lexer):
    def config(self):
        return Config(name="characters")

    def tokenise(self, options, text):
        for ch in text:
            yield Token(TokenType.TEXT, ch)


tokenise(coalesce(Characters()), None, "abc")   # one TEXT token "abc"

split_tokens_into_lines([
    Token(TokenType.KEYWORD, "hello"),
    Token(TokenType.TEXT, " world\nnext\n"),
])
# [[KEYWORD "hello", TEXT " world\n"], [TEXT "next\n"]]
```

## Styles

```python
from chromahl.colour import parse_colour
from chromahl.style import Style, StyleEntry, Trilean
from chromahl.tokens import TokenType

style = Style("demo", {
    TokenType.BACKGROUND: StyleEntry(background=parse_colour("#ffffff")),
    TokenType.KEYWORD: StyleEntry(colour=parse_colour("#0000ff"), bold=Trilean.YES),
})
```

`with_entry` and `replace_entry` return modified copies of a style.

## HTML

```python
import io
from chromahl.html import HTMLFormatter

out = io.StringIO()
HTMLFormatter(classes=True).format(out, style, tokens)
```

`HTMLFormatter` takes keyword options: `classes` (CSS classes instead of
inline styles), `prefix` (class prefix), `all_classes`, `custom_css`,
`standalone` (a complete HTML document), `tab_width`, `wrap_long_lines`,
`line_numbers`, `line_numbers_in_table`, `linkable_line_numbers` with
`line_numbers_id_prefix`, `highlight_ranges` (inclusive `(start, end)` line
pairs), `base_line_number`, `prevent_surrounding_pre`, `inline_code` and
`pre_wrapper`. `write_css(writer, style)` writes the stylesheet for a style,
and `class_for(token_type)` gives the CSS class of a token type.

## Terminals

```python
import sys
from chromahl.tty import TTY8, TTY16, TTY256, TTY16M

TTY256.format(sys.stdout, style, tokens)
```

Indexed formatters map each colour to the nearest one in the terminal's
palette (`find_closest`). Every formatter resets formatting at each line end
and resumes it on the next line, so a pager can show any line on its own.

## What it does not do

The package ships no lexers for any language: you supply `Lexer`
subclasses. There is no command-line program, no lookup of formatters by
name, and no SVG or JSON output; create and call the formatters above
directly.