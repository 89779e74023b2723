"""Documentation summary: sections, anchors and rendered prose."""

from .builder import SummaryBuilder, extract_doc_comments, summarize_content
from .models import (
    DocumentationSection,
    DocumentationSummary,
    ItemGroup,
    ItemLink,
    RenderedDocumentation,
    RenderingItem,
    SectionType,
)
from .rendering import markdown_to_html, render_documentation, slugify

__all__ = [
    "SummaryBuilder",
    "summarize_content",
    "extract_doc_comments",
    "markdown_to_html",
    "render_documentation",
    "slugify",
    "DocumentationSummary",
    "DocumentationSection",
    "SectionType",
    "RenderingItem",
    "RenderedDocumentation",
    "ItemGroup",
    "ItemLink",
]
