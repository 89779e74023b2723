"""Markdown rendering for prose documentation.

Doc comments are written as standalone pages, so their headings start at
``h1``. On the reference page they sit below the page title and are pushed
down one level; the resulting ``h2`` headings become anchors for the table of
contents.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from xml.etree.ElementTree import Element

import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ..core.exceptions import RenderError
from .models import ItemLink


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ["tables", "fenced_code"]

PROMOTED_HEADINGS = {
    "h1": "h2",
    "h2": "h3",
    "h3": "h4",
    "h4": "h5",
    "h5": "h6",
    "h6": "h6",
}


def slugify(title: str) -> str:
    """Anchor id for a heading title."""
    return title.lower().replace(" ", "-")


class HeadingPromotionProcessor(Treeprocessor):
    """Demote every heading by one level and collect ``h2`` anchors."""

    def __init__(self, md: markdown.Markdown, links: List[ItemLink]):
        super().__init__(md)
        self.links = links

    def run(self, root: Element) -> None:
        for element in list(root.iter()):
            level = PROMOTED_HEADINGS.get(element.tag)
            if level is None:
                continue

            # The promoted heading keeps only the text of the original.
            # Escaped characters are still placeholders at this priority.
            title = self.md.treeprocessors["unescape"].unescape("".join(element.itertext()))
            tail = element.tail
            element.clear()
            element.tag = level
            element.text = title
            element.tail = tail

            if level == "h2":
                anchor = slugify(title)
                element.set("id", anchor)
                self.links.append(ItemLink(title=title, url=f"#{anchor}"))


class HeadingPromotionExtension(Extension):
    """Markdown extension wrapping ``HeadingPromotionProcessor``."""

    def __init__(self, **kwargs):
        self.links: List[ItemLink] = []
        super().__init__(**kwargs)

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # After inline parsing, before prettifying and unescaping
        md.treeprocessors.register(HeadingPromotionProcessor(md, self.links), "promote_headings", 15)

    def reset(self) -> None:
        self.links.clear()


def markdown_to_html(text: str, extensions: Optional[Sequence[str]] = None) -> str:
    """Convert markdown to an HTML fragment."""
    try:
        return markdown.markdown(text, extensions=list(DEFAULT_EXTENSIONS if extensions is None else extensions))
    except Exception as e:
        raise RenderError(f"Failed to render markdown: {e}", text) from e


def render_documentation(text: str,
                         extensions: Optional[Sequence[str]] = None) -> Tuple[str, List[ItemLink]]:
    """Render a doc comment with promoted headings.

    Returns:
        The HTML fragment and the table-of-contents links of its ``h2`` headings
    """
    promotion = HeadingPromotionExtension()
    md = markdown.Markdown(extensions=[*(DEFAULT_EXTENSIONS if extensions is None else extensions), promotion])

    try:
        html = md.convert(text)
    except Exception as e:
        raise RenderError(f"Failed to render documentation: {e}", text) from e

    logger.debug(f"Rendered documentation with {len(promotion.links)} anchors")
    return html, list(promotion.links)
