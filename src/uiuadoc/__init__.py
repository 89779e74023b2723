"""
uiuadoc: documentation generator for Uiua libraries.

This package turns a compiled Uiua program into structured documentation:
extracted bindings, modules and data definitions with reconciled
signatures, a sectioned summary for the reference page, and line-accurate
highlighted code.
"""

__version__ = "0.1.0"

from .core.config import DocgenConfig
from .core.exceptions import DocgenError
from .core.generator import DocumentationGenerator
from .frontend import CompilerFrontend, ExportedProgramFrontend
from .summary import DocumentationSummary

# For convenient imports
from .cli.main import main as cli_main


def generate_documentation(export_path, title=None, config=None) -> DocumentationSummary:
    """Build the documentation summary of a compiled-program export file."""
    from pathlib import Path

    frontend = ExportedProgramFrontend.load(Path(export_path))
    return DocumentationGenerator(frontend, config).generate(title)


__all__ = [
    "DocgenConfig",
    "DocgenError",
    "DocumentationGenerator",
    "CompilerFrontend",
    "ExportedProgramFrontend",
    "DocumentationSummary",
    "generate_documentation",
    "cli_main",
]
