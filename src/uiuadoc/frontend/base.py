"""Compiler frontend interface consumed by the documentation pipeline."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..core.models import AstItem, BindingMetadata, ParseError, SpanEvent


class ParseOutcome:
    """Result of parsing one source file."""

    def __init__(self,
                 items: List[AstItem],
                 errors: Optional[List[ParseError]] = None):
        self.items = items
        self.errors = errors or []

    @property
    def ok(self) -> bool:
        return not self.errors


class CompilerFrontend(ABC):
    """Abstract access to a compiled program.

    A frontend owns everything language-specific: parsing, name
    resolution, arity inference and span classification. The pipeline only
    reads from it.
    """

    @property
    @abstractmethod
    def bindings(self) -> List[BindingMetadata]:
        """Binding metadata registry of the compiled program."""
        pass

    @property
    @abstractmethod
    def source_files(self) -> Dict[str, str]:
        """Source text of every compiled file, keyed by path, in input order."""
        pass

    @abstractmethod
    def parse(self, text: str, path: str) -> ParseOutcome:
        """Parse a source file into top-level AST items."""
        pass

    @abstractmethod
    def classify(self, text: str) -> List[SpanEvent]:
        """Classify source text into semantic spans."""
        pass
