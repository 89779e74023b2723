"""Compiler frontend access for documentation generation."""

from .base import CompilerFrontend, ParseOutcome
from .export import (
    Classification,
    CompiledProgram,
    ExportedProgramFrontend,
    SourceFile,
)

__all__ = [
    "CompilerFrontend",
    "ParseOutcome",
    "Classification",
    "CompiledProgram",
    "ExportedProgramFrontend",
    "SourceFile",
]
