"""Documentation generator that ties the frontend, extraction and summary together."""

import logging
from typing import List, Optional

from .config import DocgenConfig
from .exceptions import LibraryNotFoundError, SourceParseError
from ..extraction import FileContent, ItemExtractor, SpanResolver
from ..frontend import CompilerFrontend
from ..highlight import CodeLine, tokenize
from ..summary import DocumentationSummary, SummaryBuilder


logger = logging.getLogger(__name__)


class DocumentationGenerator:
    """Produce documentation data for a compiled Uiua library."""

    def __init__(self, frontend: CompilerFrontend, config: Optional[DocgenConfig] = None):
        self.frontend = frontend
        self.config = config or DocgenConfig.get_default_config()
        self.logger = logging.getLogger(__name__)

        # Validate configuration
        config_issues = self.config.validate_config()
        if config_issues:
            self.logger.warning(f"Configuration issues: {config_issues}")

        self.resolver = SpanResolver(frontend.bindings)
        self.summary_builder = SummaryBuilder(
            doc_marker=self.config.summary.doc_marker,
            markdown_extensions=self.config.summary.markdown_extensions,
            group_overflow_arities=self.config.summary.group_overflow_arities,
        )
        self._files: Optional[List[FileContent]] = None

    def is_excluded(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.config.extraction.excluded_path_prefixes)

    def is_main_file(self, path: str) -> bool:
        main_file = self.config.extraction.main_file
        return path == main_file or path.endswith(main_file)

    def extract_files(self) -> List[FileContent]:
        """Extract documentation items from every documented source file.

        Returns:
            One FileContent per file, in the frontend's file order

        Raises:
            SourceParseError: If the frontend reports errors for a file
        """
        if self._files is not None:
            return self._files

        sources = self.frontend.source_files
        extractor = ItemExtractor(self.resolver, sources)
        files = []

        for path, text in sources.items():
            if self.is_excluded(path):
                self.logger.debug(f"Skipping excluded file {path}")
                continue

            outcome = self.frontend.parse(text, path)
            if not outcome.ok:
                raise SourceParseError(path, outcome.errors[0], len(outcome.errors))

            items = extractor.extract(outcome.items)
            files.append(FileContent(main=self.is_main_file(path), file=path, items=items))
            self.logger.info(f"Extracted {len(items)} items from {path}")

        self._files = files
        return files

    def main_file(self) -> FileContent:
        """The extracted content of the library's entry file."""
        for content in self.extract_files():
            if content.main:
                return content
        raise LibraryNotFoundError(self.config.extraction.main_file, {
            "files": [content.file for content in self.extract_files()]
        })

    def generate(self, title: Optional[str] = None) -> DocumentationSummary:
        """Build the documentation summary of the library's entry file."""
        main = self.main_file()
        title = title or self.config.summary.title or main.file
        self.logger.info(f"Generating documentation for {main.file}")
        return self.summary_builder.summarize(main, title)

    def highlight(self, code: str) -> List[CodeLine]:
        """Tokenize a code snippet for syntax highlighting."""
        context = None
        if self.config.highlight.include_context:
            context = self.frontend.source_files.get(self.main_file().file)
        return tokenize(code, self.frontend.classify, context)

    def get_generator_info(self) -> dict:
        """Get information about the loaded program."""
        files = self.extract_files()
        main = next((content.file for content in files if content.main), None)
        return {
            "files": [content.file for content in files],
            "excluded": [path for path in self.frontend.source_files if self.is_excluded(path)],
            "main_file": main,
            "binding_count": len(self.resolver),
            "item_counts": {content.file: len(content.items) for content in files},
        }
