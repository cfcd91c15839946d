"""Token streams, colours, styles, and HTML and terminal formatters for syntax highlighting."""

__version__ = "0.1.0"