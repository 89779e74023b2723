"""Documentation item extraction from compiled programs."""

from .extractor import ItemExtractor
from .models import (
    BindingDefinition,
    CodeChunk,
    CodeMacroDefinition,
    ConstantDefinition,
    DataDefinition,
    Definition,
    DocumentationItem,
    FieldDefinition,
    FileContent,
    FunctionArgument,
    FunctionDefinition,
    FunctionOutput,
    ImportDefinition,
    IndexMacroDefinition,
    ModuleDefinition,
    NamedArgument,
    NamedSignature,
    VariantDefinition,
)
from .resolver import SpanResolver
from .signature import reconcile_signature

__all__ = [
    # Extraction
    "ItemExtractor",
    "SpanResolver",
    "reconcile_signature",

    # Documentation items
    "DocumentationItem",
    "CodeChunk",
    "BindingDefinition",
    "ModuleDefinition",
    "DataDefinition",
    "VariantDefinition",
    "ImportDefinition",
    "Definition",
    "FieldDefinition",
    "FileContent",

    # Binding kinds
    "ConstantDefinition",
    "FunctionDefinition",
    "IndexMacroDefinition",
    "CodeMacroDefinition",
    "FunctionArgument",
    "FunctionOutput",
    "NamedArgument",
    "NamedSignature",
]
