"""Core data models shared with the compiler frontend.

These models describe what the frontend hands to the documentation
pipeline: source spans, the top-level AST items of a file, the binding
metadata registry and the classified spans used for highlighting. They are
read-only inputs; nothing in the pipeline mutates them.
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Mapping, Optional, Union

import regex
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import FrontendError


GRAPHEME_PATTERN = regex.compile(r"\X")


def graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters."""
    return GRAPHEME_PATTERN.findall(text)


class Loc(BaseModel):
    """A position inside a source file."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=1, ge=1)
    col: int = Field(default=1, ge=1)
    char_pos: int = Field(default=0, ge=0)  # grapheme index
    byte_pos: int = Field(default=0, ge=0)  # UTF-8 offset

    @classmethod
    def at(cls, text: str, offset: int) -> "Loc":
        """Build the location of a code point offset within ``text``."""
        before = text[:offset]
        line_start = before.rfind("\n") + 1
        return cls(
            line=before.count("\n") + 1,
            col=offset - line_start + 1,
            char_pos=len(graphemes(before)),
            byte_pos=len(before.encode("utf-8"))
        )


class CodeSpan(BaseModel):
    """A range of source text; hashable so it can key metadata lookups."""

    model_config = ConfigDict(frozen=True)

    src: str
    start: Loc
    end: Loc

    @model_validator(mode='after')
    def validate_order(self) -> 'CodeSpan':
        if self.end.byte_pos < self.start.byte_pos:
            raise ValueError("Span end must not precede span start")
        return self

    @classmethod
    def from_offsets(cls, src: str, text: str, start: int, end: int) -> "CodeSpan":
        """Build a span from code point offsets into ``text``."""
        return cls(src=src, start=Loc.at(text, start), end=Loc.at(text, end))

    def merge(self, other: "CodeSpan") -> "CodeSpan":
        """Return the smallest span covering both spans."""
        start = min(self.start, other.start, key=lambda loc: loc.byte_pos)
        end = max(self.end, other.end, key=lambda loc: loc.byte_pos)
        return CodeSpan(src=self.src, start=start, end=end)

    def as_str(self, sources: Mapping[str, str]) -> str:
        """Return the exact source text covered by this span."""
        if self.src not in sources:
            raise FrontendError(f"Span refers to unknown source: {self.src}", self.src)
        data = sources[self.src].encode("utf-8")
        return data[self.start.byte_pos:self.end.byte_pos].decode("utf-8")

    def __str__(self) -> str:
        return f"{self.src}:{self.start.line}:{self.start.col}"


class Signature(BaseModel):
    """Compiler-inferred stack arity of a function."""

    inputs: int = Field(default=0, ge=0)
    outputs: int = Field(default=0, ge=0)

    @property
    def color_class(self) -> str:
        """Highlight bucket for a function of this arity."""
        return {
            0: "noadic-function",
            1: "monadic-function",
            2: "dyadic-function",
            3: "triadic-function",
            4: "tetradic-function",
        }.get(self.inputs, "")

    def __str__(self) -> str:
        if self.outputs == 1:
            return f"|{self.inputs}"
        return f"|{self.inputs}.{self.outputs}"


# AST items

class Ident(BaseModel):
    """An identifier together with its source span."""

    value: str
    span: CodeSpan


class Word(BaseModel):
    """A single word of code; only its span is needed for extraction."""

    span: CodeSpan


class WordsItem(BaseModel):
    """A run of ordinary code that is not part of any declaration."""

    type: Literal["words"] = "words"
    words: List[Word] = Field(default_factory=list)


class BindingItem(BaseModel):
    """A named binding declaration."""

    type: Literal["binding"] = "binding"
    name: Ident
    span: CodeSpan  # the whole binding, name included


class ModuleKind(str, Enum):
    """Kinds of module blocks."""

    NAMED = "named"
    TEST = "test"


class ModuleItem(BaseModel):
    """A module block and its body."""

    type: Literal["module"] = "module"
    kind: ModuleKind = ModuleKind.NAMED
    name: Optional[Ident] = None
    items: List["AstItem"] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_name(self) -> 'ModuleItem':
        if self.kind == ModuleKind.NAMED and self.name is None:
            raise ValueError("Named module requires a name")
        return self


class DataField(BaseModel):
    """A field of a data definition."""

    name: Ident
    validator: Optional[List[Word]] = None
    init: Optional[List[Word]] = None


class DataFields(BaseModel):
    """The field block of a data definition."""

    boxed: bool = False
    fields: List[DataField] = Field(default_factory=list)


class DataDef(BaseModel):
    """A single data or variant definition."""

    name: Optional[Ident] = None
    variant: bool = False
    public: bool = True
    span: CodeSpan
    fields: Optional[DataFields] = None
    func: Optional[List[Word]] = None  # constructor body, if callable


class DataItem(BaseModel):
    """A data declaration, possibly expanding to several definitions."""

    type: Literal["data"] = "data"
    definitions: List[DataDef] = Field(default_factory=list)


class ImportItem(BaseModel):
    """An import statement."""

    type: Literal["import"] = "import"
    path: Ident


AstItem = Annotated[
    Union[WordsItem, BindingItem, ModuleItem, DataItem, ImportItem],
    Field(discriminator="type")
]

ModuleItem.model_rebuild()


class ParseError(BaseModel):
    """A parse error reported by the frontend."""

    message: str
    span: Optional[CodeSpan] = None

    def __str__(self) -> str:
        if self.span is not None:
            return f"{self.span}: {self.message}"
        return self.message


# Binding metadata

class DocCommentSig(BaseModel):
    """Argument and output names declared in a doc comment."""

    args: Optional[List[str]] = None
    outputs: Optional[List[str]] = None


class DocComment(BaseModel):
    """A binding's doc comment."""

    text: str
    sig: Optional[DocCommentSig] = None


class ConstBindingKind(BaseModel):
    type: Literal["const"] = "const"
    value: Optional[str] = None


class FuncBindingKind(BaseModel):
    type: Literal["func"] = "func"
    signature: Signature


class IndexMacroBindingKind(BaseModel):
    type: Literal["index_macro"] = "index_macro"
    arguments: int = Field(default=1, ge=0)


class CodeMacroBindingKind(BaseModel):
    type: Literal["code_macro"] = "code_macro"


class ModuleBindingKind(BaseModel):
    type: Literal["module"] = "module"
    names: Dict[str, int] = Field(default_factory=dict)  # name -> registry index


class ImportBindingKind(BaseModel):
    type: Literal["import"] = "import"
    path: Optional[str] = None


class ScopeBindingKind(BaseModel):
    type: Literal["scope"] = "scope"


class ErrorBindingKind(BaseModel):
    type: Literal["error"] = "error"


BindingKind = Annotated[
    Union[
        ConstBindingKind, FuncBindingKind, IndexMacroBindingKind,
        CodeMacroBindingKind, ModuleBindingKind, ImportBindingKind,
        ScopeBindingKind, ErrorBindingKind
    ],
    Field(discriminator="type")
]


class BindingMetadata(BaseModel):
    """Compiler metadata registered for a declaration span."""

    span: CodeSpan
    name: str
    public: bool = True
    comment: Optional[DocComment] = None
    kind: BindingKind


# Classified spans

class PrimitiveClass(str, Enum):
    """Primitive groups that affect highlighting."""

    STACK = "stack"
    DEBUG = "debug"
    CONSTANT = "constant"
    OTHER = "other"


class PrimitiveInfo(BaseModel):
    """What the classifier knows about a built-in primitive."""

    name: str
    prim_class: PrimitiveClass = PrimitiveClass.OTHER
    modifier_args: Optional[int] = None
    signature: Optional[Signature] = None  # subscript-adjusted when known


class BindingDocsKind(str, Enum):
    CONSTANT = "constant"
    FUNCTION = "function"
    MODIFIER = "modifier"
    MODULE = "module"
    ERROR = "error"


class BindingDocs(BaseModel):
    """Resolved binding information attached to an identifier span."""

    kind: BindingDocsKind
    signature: Optional[Signature] = None
    modifier_args: Optional[int] = None


class SpanCategory(str, Enum):
    """Semantic categories produced by the classifier."""

    PRIMITIVE = "primitive"
    OBVERSE = "obverse"
    NUMBER = "number"
    STRING = "string"
    IMPORT_SRC = "import_src"
    COMMENT = "comment"
    OUTPUT_COMMENT = "output_comment"
    STRAND = "strand"
    SUBSCRIPT = "subscript"
    MACRO_DELIM = "macro_delim"
    ARG_SETTER = "arg_setter"
    IDENT = "ident"
    LABEL = "label"
    SIGNATURE = "signature"
    WHITESPACE = "whitespace"
    PLACEHOLDER = "placeholder"
    DELIMITER = "delimiter"
    FUNC_DELIM = "func_delim"


class SpanKind(BaseModel):
    """Category of a classified span plus the details highlighting needs."""

    category: SpanCategory
    primitive: Optional[PrimitiveInfo] = None
    docs: Optional[BindingDocs] = None
    modifier_args: Optional[int] = None


class SpanEvent(BaseModel):
    """A classified span; positions are grapheme indices into the text."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    kind: SpanKind

    @model_validator(mode='after')
    def validate_range(self) -> 'SpanEvent':
        if self.end < self.start:
            raise ValueError("Span end must not precede span start")
        return self
