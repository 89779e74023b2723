"""Custom exception hierarchy for documentation generation."""

from typing import Optional, Any


class DocgenError(Exception):
    """Base exception for all documentation-generation errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LibraryNotFoundError(DocgenError):
    """Raised when the program has no main entry file."""

    def __init__(self, main_file: str, details: Optional[dict] = None):
        message = f"Library file not found: {main_file}"
        error_details = {"main_file": main_file}
        if details:
            error_details.update(details)
        super().__init__(message, error_details)
        self.main_file = main_file


class SourceParseError(DocgenError):
    """Raised when the frontend reports parse errors for a source file."""

    def __init__(self, file_path: str, error: Any, error_count: int = 1):
        message = f"Failed to parse file: {file_path}: {error}"
        super().__init__(message, {
            "file_path": file_path,
            "error": str(error),
            "error_count": error_count
        })
        self.file_path = file_path
        self.error = error
        self.error_count = error_count


class MissingBindingInfoError(DocgenError):
    """Raised when a named declaration has no binding metadata."""

    def __init__(self, name: str, span: Optional[Any] = None):
        message = f"Data definition without binding info: {name}"
        super().__init__(message, {
            "name": name,
            "span": str(span) if span is not None else None
        })
        self.name = name
        self.span = span


class DataFunctionError(DocgenError):
    """Raised when a data constructor lacks its expected call metadata."""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message, {"name": name})
        self.name = name


class RenderError(DocgenError):
    """Raised when documentation markup cannot be rendered."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, {"source": source})
        self.source = source


class FrontendError(DocgenError):
    """Raised when compiler frontend data cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, {"path": path})
        self.path = path
