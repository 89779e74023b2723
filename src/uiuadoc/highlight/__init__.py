"""Source code tokenization for syntax highlighting."""

from .classes import highlight_class, span_css_class
from .tokenizer import (
    ClassifiedSpan,
    Classifier,
    CodeLine,
    Fragment,
    LineBreak,
    PlainText,
    render_code_lines,
    tokenize,
)

__all__ = [
    "tokenize",
    "render_code_lines",
    "highlight_class",
    "span_css_class",
    "Classifier",
    "CodeLine",
    "Fragment",
    "PlainText",
    "LineBreak",
    "ClassifiedSpan",
]
