"""Line-accurate tokenization of source code for highlighting.

The classifier reports span boundaries as grapheme-cluster positions, so all
indexing here happens over a grapheme array rather than code points.
"""

import logging
from html import escape
from typing import Annotated, Callable, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..core.models import SpanEvent, SpanKind, graphemes
from .classes import span_css_class


logger = logging.getLogger(__name__)

NEWLINES = ("\n", "\r\n")


class PlainText(BaseModel):
    type: Literal["plain"] = "plain"
    text: str


class LineBreak(BaseModel):
    type: Literal["br"] = "br"


class ClassifiedSpan(BaseModel):
    type: Literal["span"] = "span"
    text: str
    kind: SpanKind


Fragment = Annotated[Union[PlainText, LineBreak, ClassifiedSpan], Field(discriminator="type")]


class CodeLine(BaseModel):
    """One rendered line of code."""

    fragments: List[Fragment] = Field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return all(isinstance(fragment, LineBreak) for fragment in self.fragments)

    @property
    def text(self) -> str:
        return "".join(
            fragment.text for fragment in self.fragments
            if not isinstance(fragment, LineBreak)
        )


Classifier = Callable[[str], List[SpanEvent]]


def count_lines(code: str) -> int:
    """Number of lines in ``code``; a trailing newline does not open a line."""
    if not code:
        return 0
    return code.count("\n") + (0 if code.endswith("\n") else 1)


class _LineBuilder:
    """Accumulates fragments line by line."""

    def __init__(self):
        self.lines: List[List[Fragment]] = [[]]

    @property
    def current(self) -> List[Fragment]:
        return self.lines[-1]

    def push_plain(self, text: str) -> None:
        if not text:
            return
        line = self.current
        if line and isinstance(line[-1], PlainText):
            line[-1] = PlainText(text=line[-1].text + text)
        else:
            line.append(PlainText(text=text))

    def push_span(self, text: str, kind: SpanKind) -> None:
        self.current.append(ClassifiedSpan(text=text, kind=kind))

    def new_line(self) -> None:
        if not self.current:
            self.current.append(LineBreak())
        self.lines.append([])


def tokenize(code: str,
             classify: Classifier,
             context: Optional[str] = None) -> List[CodeLine]:
    """Split code into lines of plain and classified fragments.

    Args:
        code: Source code to render
        classify: Classifier returning spans over the text it is given
        context: Text the code depends on; it is classified along with the
            code so references resolve, and its lines are dropped afterwards

    Returns:
        Exactly one CodeLine per line of ``code``
    """
    full_text = f"{context}\n\n{code}" if context is not None else code
    chars = graphemes(full_text)
    builder = _LineBuilder()
    position = 0

    def push_gap(target: int) -> None:
        nonlocal position
        target = min(target, len(chars))
        buffer = []
        while position < target:
            char = chars[position]
            if char in NEWLINES:
                builder.push_plain("".join(buffer))
                buffer = []
                builder.new_line()
            else:
                buffer.append(char)
            position += 1
        builder.push_plain("".join(buffer))

    for span in classify(full_text):
        push_gap(span.start)

        span_chars = chars[span.start:span.end]
        if span_chars and all(char in NEWLINES for char in span_chars):
            for _ in range(len(span_chars)):
                builder.new_line()
        else:
            # A span ending in a newline still closes its line
            for i, line in enumerate("".join(span_chars).split("\n")):
                if i > 0:
                    builder.new_line()
                line = line[:-1] if line.endswith("\r") else line
                if line:
                    builder.push_span(line, span.kind)

        position = max(position, min(span.end, len(chars)))

    push_gap(len(chars))

    lines = builder.lines
    if full_text.endswith("\n") and not lines[-1]:
        lines.pop()

    wanted = count_lines(code)
    if len(lines) > wanted:
        lines = lines[len(lines) - wanted:]

    logger.debug(f"Tokenized {wanted} lines of code")
    return [CodeLine(fragments=fragments) for fragments in lines]


def render_code_lines(lines: List[CodeLine]) -> str:
    """Render code lines as HTML for the documentation site."""
    rendered = []

    for line in lines:
        if not line.fragments:
            rendered.append('<div class="code-line"><br /></div>')
            continue

        spans = []
        for fragment in line.fragments:
            if isinstance(fragment, LineBreak):
                spans.append("<br />")
            elif isinstance(fragment, PlainText):
                spans.append(f'<span class="code-span">{escape(fragment.text)}</span>')
            else:
                spans.append(
                    f'<span class="{span_css_class(fragment.kind)}">{escape(fragment.text)}</span>'
                )
        rendered.append(f'<div class="code-line">{"".join(spans)}</div>')

    return "\n".join(rendered)
