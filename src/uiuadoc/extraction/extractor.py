"""Extraction of documentation items from top-level AST items."""

import logging
from typing import List, Mapping, Optional, Tuple

from ..core.exceptions import DataFunctionError, DocgenError, MissingBindingInfoError
from ..core.models import (
    AstItem,
    BindingItem,
    BindingMetadata,
    CodeMacroBindingKind,
    ConstBindingKind,
    DataDef,
    DataItem,
    FuncBindingKind,
    ImportItem,
    IndexMacroBindingKind,
    ModuleBindingKind,
    ModuleItem,
    ModuleKind,
    Word,
    WordsItem,
)
from .models import (
    BindingDefinition,
    BindingType,
    CodeChunk,
    CodeMacroDefinition,
    ConstantDefinition,
    DataDefinition,
    Definition,
    DocumentationItem,
    FieldDefinition,
    ImportDefinition,
    IndexMacroDefinition,
    ModuleDefinition,
    NamedArgument,
    NamedSignature,
    VariantDefinition,
)
from .resolver import SpanResolver
from .signature import reconcile_signature


logger = logging.getLogger(__name__)


def normalize_newlines(code: str) -> str:
    return code.replace("\r\n", "\n")


def split_paragraphs(code: str) -> List[str]:
    """Split code at blank lines, dropping empty pieces."""
    return [piece for piece in code.split("\n\n") if piece]


class _CodeRun:
    """Consecutive plain-code items on contiguous lines."""

    def __init__(self):
        self.pieces: List[str] = []
        self.last_line = 0

    def accepts(self, first_line: int) -> bool:
        return not self.pieces or first_line == self.last_line + 1

    def add(self, code: str, last_line: int) -> None:
        self.pieces.append(code)
        self.last_line = last_line

    def flush(self) -> List[DocumentationItem]:
        if not self.pieces:
            return []
        chunks = [CodeChunk(code=piece) for piece in split_paragraphs("\n".join(self.pieces))]
        self.pieces = []
        return chunks


class ItemExtractor:
    """Turn a file's AST items into documentation items.

    Binding metadata is looked up by exact span. Missing metadata is
    expected for desugared code and skips the item, except for named data
    definitions, which the compiler always registers.
    """

    def __init__(self, resolver: SpanResolver, sources: Mapping[str, str]):
        self.resolver = resolver
        self.sources = sources

    def extract(self, items: List[AstItem]) -> List[DocumentationItem]:
        """Extract documentation items in source order."""
        results: List[DocumentationItem] = []
        run = _CodeRun()

        for item in items:
            if isinstance(item, WordsItem):
                code = self._words_as_code(item.words)
                if code is None:
                    continue
                text, first_line, last_line = code
                if not run.accepts(first_line):
                    results.extend(run.flush())
                run.add(text, last_line)
                continue

            results.extend(run.flush())

            if isinstance(item, BindingItem):
                binding = self._extract_binding(item)
                if binding is not None:
                    results.append(binding)
            elif isinstance(item, ModuleItem):
                module = self._extract_module(item)
                if module is not None:
                    results.append(module)
            elif isinstance(item, DataItem):
                for data_def in item.definitions:
                    results.append(self._extract_data(data_def))
            elif isinstance(item, ImportItem):
                results.append(ImportDefinition(path=item.path.value))

        results.extend(run.flush())
        return results

    def _words_as_code(self, words: List[Word]) -> Optional[Tuple[str, int, int]]:
        """Source text of a word run with its first and last line."""
        if not words:
            return None

        first = words[0].span
        last = words[-1].span
        text = first.merge(last).as_str(self.sources)

        return normalize_newlines(text), first.start.line, last.end.line

    def _words_text(self, words: List[Word]) -> str:
        code = self._words_as_code(words)
        return code[0] if code is not None else ""

    def _extract_binding(self, item: BindingItem) -> Optional[BindingDefinition]:
        info = self.resolver.resolve(item.name.span)
        if info is None:
            logger.debug(f"No binding info for {item.name.value} at {item.name.span}, skipping")
            return None

        kind = self._binding_type(info)
        if kind is None:
            return None

        return BindingDefinition(
            name=item.name.value,
            code=normalize_newlines(item.span.as_str(self.sources)),
            public=info.public,
            comment=info.comment.text if info.comment else None,
            kind=kind
        )

    def _binding_type(self, info: BindingMetadata) -> Optional[BindingType]:
        named_signature = self._named_signature(info)
        kind = info.kind

        if isinstance(kind, ConstBindingKind):
            return ConstantDefinition(value=kind.value)
        if isinstance(kind, FuncBindingKind):
            return reconcile_signature(kind.signature, named_signature)
        if isinstance(kind, IndexMacroBindingKind):
            return IndexMacroDefinition(arguments=kind.arguments, named_signature=named_signature)
        if isinstance(kind, CodeMacroBindingKind):
            return CodeMacroDefinition(named_signature=named_signature)

        # Modules, imports, scopes and errors surface as their own AST items
        return None

    @staticmethod
    def _named_signature(info: BindingMetadata) -> Optional[NamedSignature]:
        if info.comment is None or info.comment.sig is None:
            return None
        return NamedSignature.from_doc_sig(info.comment.sig)

    def _extract_module(self, item: ModuleItem) -> Optional[ModuleDefinition]:
        if item.kind == ModuleKind.TEST:
            return None

        info = self.resolver.resolve(item.name.span)
        if info is None:
            logger.debug(f"No binding info for module {item.name.value}, skipping")
            return None

        return ModuleDefinition(
            name=item.name.value,
            comment=info.comment.text if info.comment else None,
            items=self.extract(item.items)
        )

    def _extract_data(self, data_def: DataDef) -> DocumentationItem:
        info: Optional[BindingMetadata] = None
        if data_def.name is not None:
            info = self.resolver.resolve(data_def.name.span)
            if info is None:
                raise MissingBindingInfoError(data_def.name.value, data_def.name.span)

        name = data_def.name.value if data_def.name is not None else None
        comment = info.comment.text if info is not None and info.comment else None

        if data_def.func is not None:
            return self._extract_data_function(data_def, info, name, comment)

        definition = None
        if data_def.fields is not None:
            definition = Definition(
                boxed=data_def.fields.boxed,
                fields=[
                    FieldDefinition(
                        name=field.name.value,
                        validator=self._words_text(field.validator) if field.validator is not None else None
                    )
                    for field in data_def.fields.fields
                ]
            )

        if data_def.variant:
            if name is None:
                raise DocgenError("Variant without a name", {"span": str(data_def.span)})
            return VariantDefinition(name=name, comment=comment, definition=definition)

        return DataDefinition(name=name, comment=comment, definition=definition)

    def _extract_data_function(self,
                               data_def: DataDef,
                               info: Optional[BindingMetadata],
                               name: Optional[str],
                               comment: Optional[str]) -> BindingDefinition:
        """A data definition with a constructor is documented as a function."""
        if info is None or name is None:
            raise DataFunctionError("Data function without a name")

        if not isinstance(info.kind, ModuleBindingKind):
            raise DataFunctionError(f"Data function without module binding: {name}", name)

        call_index = info.kind.names.get("Call")
        call = self.resolver.binding_at(call_index) if call_index is not None else None
        if call is None or not isinstance(call.kind, FuncBindingKind):
            raise DataFunctionError(f"Data function without Call binding: {name}", name)

        if data_def.fields is None:
            raise DataFunctionError(f"Data function without fields: {name}", name)

        arguments = [
            NamedArgument(name=field.name.value, required=field.init is None)
            for field in data_def.fields.fields
        ]

        return BindingDefinition(
            name=name,
            code=normalize_newlines(data_def.span.as_str(self.sources)),
            public=data_def.public,
            comment=comment,
            kind=reconcile_signature(
                call.kind.signature,
                self._named_signature(info),
                arguments
            )
        )
