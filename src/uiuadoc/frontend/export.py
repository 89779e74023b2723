"""Frontend backed by a compiled-program export file.

The compiler writes its view of a program (binding registry, per-file AST,
parse errors and classified spans) to JSON or YAML; this module loads that
export and serves it through the ``CompilerFrontend`` interface.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..core.exceptions import FrontendError
from ..core.models import AstItem, BindingMetadata, ParseError, SpanEvent, graphemes
from .base import CompilerFrontend, ParseOutcome


logger = logging.getLogger(__name__)


class SourceFile(BaseModel):
    """One compiled source file as exported by the compiler."""

    text: str
    items: List[AstItem] = Field(default_factory=list)
    errors: List[ParseError] = Field(default_factory=list)
    spans: List[SpanEvent] = Field(default_factory=list)


class Classification(BaseModel):
    """Classified spans recorded for an arbitrary code snippet."""

    text: str
    spans: List[SpanEvent] = Field(default_factory=list)


class CompiledProgram(BaseModel):
    """A whole compiled program."""

    bindings: List[BindingMetadata] = Field(default_factory=list)
    files: Dict[str, SourceFile] = Field(default_factory=dict)
    classifications: List[Classification] = Field(default_factory=list)


class ExportedProgramFrontend(CompilerFrontend):
    """Serve a ``CompiledProgram`` through the frontend interface."""

    def __init__(self, program: CompiledProgram):
        self.program = program
        self._classified: Dict[str, List[SpanEvent]] = {}

        for source in program.files.values():
            self._classified.setdefault(source.text, source.spans)
        for entry in program.classifications:
            self._classified.setdefault(entry.text, entry.spans)

    @classmethod
    def load(cls, export_path: Path) -> "ExportedProgramFrontend":
        """Load an export from a ``.json``, ``.yaml`` or ``.yml`` file."""
        if not export_path.exists():
            raise FrontendError(f"Program export not found: {export_path}", str(export_path))

        try:
            with open(export_path, 'r', encoding='utf-8') as f:
                if export_path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise FrontendError(f"Failed to read program export: {e}", str(export_path)) from e

        try:
            program = CompiledProgram.model_validate(data or {})
        except ValidationError as e:
            raise FrontendError(f"Invalid program export: {e}", str(export_path)) from e

        logger.info(
            f"Loaded program export with {len(program.files)} files "
            f"and {len(program.bindings)} bindings"
        )
        return cls(program)

    @property
    def bindings(self) -> List[BindingMetadata]:
        return self.program.bindings

    @property
    def source_files(self) -> Dict[str, str]:
        return {path: source.text for path, source in self.program.files.items()}

    def parse(self, text: str, path: str) -> ParseOutcome:
        source = self.program.files.get(path)
        if source is None:
            raise FrontendError(f"No parsed items exported for {path}", path)
        if source.text != text:
            logger.warning(f"Source text of {path} differs from the exported text")
        return ParseOutcome(list(source.items), list(source.errors))

    def classify(self, text: str) -> List[SpanEvent]:
        spans = self._classified.get(text)
        if spans is not None:
            return list(spans)

        # Code highlighted in context is recorded without the context prefix
        recorded = max(
            (known for known in self._classified if known and text.endswith(known)),
            key=len,
            default=None
        )
        if recorded is None:
            logger.debug("No classification recorded for snippet, rendering as plain text")
            return []

        offset = len(graphemes(text[:len(text) - len(recorded)]))
        logger.debug(f"Classifying snippet by its recorded suffix at position {offset}")
        return [
            span.model_copy(update={"start": span.start + offset, "end": span.end + offset})
            for span in self._classified[recorded]
        ]
