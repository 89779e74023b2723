"""Grouping of extracted items into the sections of a reference page."""

import logging
from typing import Callable, List, Optional, Sequence

from ..extraction.models import (
    BindingDefinition,
    CodeChunk,
    CodeMacroDefinition,
    ConstantDefinition,
    DataDefinition,
    DocumentationItem,
    FileContent,
    FunctionDefinition,
    IndexMacroDefinition,
    ModuleDefinition,
    VariantDefinition,
)
from .models import (
    DocumentationSection,
    DocumentationSummary,
    ItemGroup,
    RenderedDocumentation,
    RenderingItem,
    SectionType,
)
from .rendering import DEFAULT_EXTENSIONS, render_documentation


logger = logging.getLogger(__name__)

DOC_MARKER = "# !doc"

FUNCTION_GROUPS = [
    (0, "Noadic functions", "__noadic_functions"),
    (1, "Monadic functions", "__monadic_functions"),
    (2, "Dyadic functions", "__dyadic_functions"),
    (3, "Triadic functions", "__triadic_functions"),
    (4, "Tetradic functions", "__tetradic_functions"),
    (5, "Pentadic functions", "__pentadic_functions"),
    (6, "Hexadic functions", "__hexadic_functions"),
]
MAX_GROUPED_ARITY = FUNCTION_GROUPS[-1][0]
OVERFLOW_GROUP = ("Polyadic functions", "__polyadic_functions")


def strip_prefix(line: str, prefix: str) -> str:
    """Remove every leading repetition of ``prefix``."""
    while prefix and line.startswith(prefix):
        line = line[len(prefix):]
    return line


def extract_doc_comments(items: Sequence[DocumentationItem], marker: str = DOC_MARKER) -> List[str]:
    """Markdown text of every top-level code chunk starting with ``marker``."""
    comments = []

    for item in items:
        if not isinstance(item, CodeChunk) or not item.code.startswith(marker):
            continue
        lines = [strip_prefix(line, marker).lstrip("#").strip() for line in item.code.split("\n")]
        comments.append("\n".join(lines).strip())

    return comments


def is_visible(item: DocumentationItem) -> bool:
    """Whether an item is shown inside a module listing."""
    if isinstance(item, BindingDefinition):
        return item.public
    if isinstance(item, ModuleDefinition):
        return item.has_public_items()
    return isinstance(item, (DataDefinition, VariantDefinition))


def public_bindings(items: Sequence[DocumentationItem],
                    predicate: Callable[[BindingDefinition], bool]) -> List[DocumentationItem]:
    return [
        item for item in items
        if isinstance(item, BindingDefinition) and item.public and predicate(item)
    ]


def function_arity(binding: BindingDefinition) -> Optional[int]:
    if isinstance(binding.kind, FunctionDefinition):
        return binding.kind.signature().inputs
    return None


class SummaryBuilder:
    """Build the documentation summary of one file.

    Sections, when present, always appear in the order documentation,
    modules, bindings. Empty sections and empty binding groups are left
    out.
    """

    def __init__(self,
                 doc_marker: str = DOC_MARKER,
                 markdown_extensions: Optional[Sequence[str]] = None,
                 group_overflow_arities: bool = True):
        self.doc_marker = doc_marker
        self.markdown_extensions = list(DEFAULT_EXTENSIONS if markdown_extensions is None else markdown_extensions)
        self.group_overflow_arities = group_overflow_arities

    def summarize(self, content: FileContent, title: str) -> DocumentationSummary:
        """Summarize a file's extracted items."""
        sections = []

        for section in (
            self._documentation_section(content.items),
            self._modules_section(content.items),
            self._bindings_section(content.items),
        ):
            if section is not None:
                sections.append(section)

        logger.info(f"Summarized {content.file} into {len(sections)} sections")
        return DocumentationSummary(title=title, sections=sections)

    def _documentation_section(self, items: Sequence[DocumentationItem]) -> Optional[DocumentationSection]:
        comments = extract_doc_comments(items, self.doc_marker)
        if not comments:
            return None

        content = []
        for comment in comments:
            html, links = render_documentation(comment, self.markdown_extensions)
            content.append(RenderingItem(links=links, content=RenderedDocumentation(html=html)))

        return DocumentationSection(
            title="Documentation",
            section_type=SectionType.DOCUMENTATION,
            content=content
        )

    def _modules_section(self, items: Sequence[DocumentationItem]) -> Optional[DocumentationSection]:
        modules = [
            item for item in items
            if isinstance(item, ModuleDefinition) and item.has_public_items()
        ]
        if not modules:
            return None

        content = []
        for module in modules:
            shown = ModuleDefinition(
                name=module.name,
                comment=module.comment,
                items=[item for item in module.items if is_visible(item)]
            )
            content.append(RenderingItem(
                content=ItemGroup(title=module.name, anchor_id=module.name, items=[shown])
            ))

        return DocumentationSection(
            title="Modules",
            section_type=SectionType.MODULES,
            content=content
        )

    def _bindings_section(self, items: Sequence[DocumentationItem]) -> Optional[DocumentationSection]:
        groups = [
            ("Constants", "__constants",
             public_bindings(items, lambda b: isinstance(b.kind, ConstantDefinition))),
            ("Data types", "__data",
             [item for item in items if isinstance(item, (DataDefinition, VariantDefinition))]),
            ("Code macros", "__code_macros",
             public_bindings(items, lambda b: isinstance(b.kind, CodeMacroDefinition))),
            ("Index macros", "__index_macros",
             public_bindings(items, lambda b: isinstance(b.kind, IndexMacroDefinition))),
        ]

        for arity, title, anchor in FUNCTION_GROUPS:
            groups.append((title, anchor, public_bindings(items, lambda b, n=arity: function_arity(b) == n)))

        if self.group_overflow_arities:
            title, anchor = OVERFLOW_GROUP
            groups.append((title, anchor, public_bindings(
                items, lambda b: (function_arity(b) or 0) > MAX_GROUPED_ARITY
            )))

        content = [
            RenderingItem(content=ItemGroup(title=title, anchor_id=anchor, items=members))
            for title, anchor, members in groups
            if members
        ]
        if not content:
            return None

        return DocumentationSection(
            title="Bindings",
            section_type=SectionType.BINDINGS,
            content=content
        )


def summarize_content(content: FileContent,
                      title: str,
                      builder: Optional[SummaryBuilder] = None) -> DocumentationSummary:
    """Summarize a file with the default section layout."""
    return (builder or SummaryBuilder()).summarize(content, title)
