"""Core module for uiuadoc."""

from .models import (
    AstItem,
    BindingMetadata,
    CodeSpan,
    Loc,
    ParseError,
    Signature,
    SpanCategory,
    SpanEvent,
    SpanKind,
)

from .config import (
    DocgenConfig,
    ExtractionConfig,
    SummaryConfig,
    HighlightConfig,
    OutputConfig,
    OutputFormat,
)

from .exceptions import (
    DocgenError,
    LibraryNotFoundError,
    SourceParseError,
    MissingBindingInfoError,
    DataFunctionError,
    RenderError,
    FrontendError,
)

__all__ = [
    # Models
    "AstItem",
    "BindingMetadata",
    "CodeSpan",
    "Loc",
    "ParseError",
    "Signature",
    "SpanCategory",
    "SpanEvent",
    "SpanKind",
    # Configuration
    "DocgenConfig",
    "ExtractionConfig",
    "SummaryConfig",
    "HighlightConfig",
    "OutputConfig",
    "OutputFormat",
    # Exceptions
    "DocgenError",
    "LibraryNotFoundError",
    "SourceParseError",
    "MissingBindingInfoError",
    "DataFunctionError",
    "RenderError",
    "FrontendError",
]
