"""Output formatting utilities."""

import json
from typing import Any, List

import yaml
from pydantic import BaseModel

from ..core.config import OutputConfig, OutputFormat
from ..extraction.models import (
    BindingDefinition,
    CodeChunk,
    DataDefinition,
    DocumentationItem,
    FileContent,
    FunctionDefinition,
    ImportDefinition,
    ModuleDefinition,
    VariantDefinition,
)
from ..highlight import CodeLine, ClassifiedSpan, LineBreak, highlight_class, render_code_lines
from ..summary import DocumentationSummary, ItemGroup, RenderedDocumentation


class OutputFormatter:
    """Formats documentation data for different output formats."""

    def __init__(self, config: OutputConfig):
        self.config = config

    def _dump(self, data: Any) -> str:
        if self.config.format == OutputFormat.YAML:
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return json.dumps(data, indent=self.config.indent, ensure_ascii=False)

    def _serialize(self, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json", exclude_none=True)
        if isinstance(value, list):
            return [self._serialize(item) for item in value]
        return value

    def format_summary(self, summary: DocumentationSummary) -> str:
        """Format a documentation summary according to configuration."""
        if self.config.format == OutputFormat.TEXT:
            return self._format_summary_text(summary)
        return self._dump(self._serialize(summary))

    def format_files(self, files: List[FileContent]) -> str:
        """Format extracted file contents according to configuration."""
        if self.config.format == OutputFormat.TEXT:
            output = []
            for content in files:
                marker = " (main)" if content.main else ""
                output.append(f"{content.file}{marker}")
                output.extend(self._item_lines(content.items, 1))
            return "\n".join(output)
        return self._dump(self._serialize(files))

    def format_code_lines(self, lines: List[CodeLine]) -> str:
        """Format highlighted code according to configuration."""
        if self.config.format == OutputFormat.HTML:
            return render_code_lines(lines)
        if self.config.format == OutputFormat.TEXT:
            return self._format_code_text(lines)
        return self._dump(self._serialize(lines))

    def _format_summary_text(self, summary: DocumentationSummary) -> str:
        """Format as a human-readable outline."""
        output = []

        # Header
        output.append(summary.title)
        output.append("=" * max(len(summary.title), 10))

        for section in summary.sections:
            output.append("")
            output.append(section.title)
            output.append("-" * len(section.title))

            for rendering in section.content:
                content = rendering.content
                if isinstance(content, RenderedDocumentation):
                    for link in rendering.links:
                        output.append(f"  {link.title} ({link.url})")
                elif isinstance(content, ItemGroup):
                    output.append(f"  {content.title} (#{content.anchor_id})")
                    output.extend(self._item_lines(content.items, 2))

        return "\n".join(output)

    def _item_lines(self, items: List[DocumentationItem], depth: int) -> List[str]:
        indent = "  " * depth
        lines = []

        for item in items:
            if isinstance(item, BindingDefinition):
                suffix = ""
                if isinstance(item.kind, FunctionDefinition):
                    suffix = f" {item.kind.signature()}"
                visibility = "" if item.public else " (private)"
                lines.append(f"{indent}{item.name}{suffix} [{item.kind.type}]{visibility}")
            elif isinstance(item, ModuleDefinition):
                lines.append(f"{indent}{item.name} [module]")
                lines.extend(self._item_lines(item.items, depth + 1))
            elif isinstance(item, (DataDefinition, VariantDefinition)):
                lines.append(f"{indent}{item.name or '(unnamed)'} [{item.type}]")
            elif isinstance(item, ImportDefinition):
                lines.append(f"{indent}{item.path} [import]")
            elif isinstance(item, CodeChunk):
                first_line = item.code.split("\n", 1)[0]
                lines.append(f"{indent}{first_line} [code]")

        return lines

    def _format_code_text(self, lines: List[CodeLine]) -> str:
        """One line per code line, classified spans annotated with their class."""
        output = []

        for line in lines:
            parts = []
            for fragment in line.fragments:
                if isinstance(fragment, LineBreak):
                    continue
                if isinstance(fragment, ClassifiedSpan):
                    color = highlight_class(fragment.kind) or fragment.kind.category.value
                    parts.append(f"[{fragment.text}|{color}]")
                else:
                    parts.append(fragment.text)
            output.append("".join(parts))

        return "\n".join(output)
