"""Documentation models produced by item extraction."""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..core.models import DocCommentSig, Signature


class NamedSignature(BaseModel):
    """Argument and output names written by a human in a doc comment."""

    inputs: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)

    @classmethod
    def from_doc_sig(cls, sig: DocCommentSig) -> "NamedSignature":
        return cls(inputs=list(sig.args or []), outputs=list(sig.outputs or []))


class NamedArgument(BaseModel):
    """An explicitly named constructor argument."""

    name: str
    required: bool = True


class FunctionArgument(BaseModel):
    """A reconciled function input."""

    name: str
    optional: bool = False
    comment_alias: Optional[str] = None
    inferred: bool = False


class FunctionOutput(BaseModel):
    """A reconciled function output."""

    name: str
    inferred: bool = False


class ConstantDefinition(BaseModel):
    type: Literal["const"] = "const"
    value: Optional[str] = None


class FunctionDefinition(BaseModel):
    """Function signature with names merged from every available source."""

    type: Literal["function"] = "function"
    required_inputs: List[FunctionArgument] = Field(default_factory=list)
    optional_inputs: List[FunctionArgument] = Field(default_factory=list)
    outputs: List[FunctionOutput] = Field(default_factory=list)

    def signature(self) -> Signature:
        """Arity as seen by callers: required inputs and outputs."""
        return Signature(inputs=len(self.required_inputs), outputs=len(self.outputs))

    def inputs(self) -> List[FunctionArgument]:
        """All inputs, required first."""
        return self.required_inputs + self.optional_inputs


class IndexMacroDefinition(BaseModel):
    type: Literal["index_macro"] = "index_macro"
    arguments: int = 1
    named_signature: Optional[NamedSignature] = None

    @property
    def color_class(self) -> str:
        if self.arguments <= 1:
            return "monadic-modifier"
        if self.arguments == 2:
            return "dyadic-modifier"
        return "triadic-modifier"


class CodeMacroDefinition(BaseModel):
    type: Literal["code_macro"] = "code_macro"
    named_signature: Optional[NamedSignature] = None


BindingType = Annotated[
    Union[ConstantDefinition, FunctionDefinition, IndexMacroDefinition, CodeMacroDefinition],
    Field(discriminator="type")
]


class CodeChunk(BaseModel):
    """Ordinary code that belongs to no declaration."""

    type: Literal["code"] = "code"
    code: str


class BindingDefinition(BaseModel):
    """A documented binding."""

    type: Literal["binding"] = "binding"
    name: str
    code: str
    public: bool = True
    comment: Optional[str] = None
    kind: BindingType


class FieldDefinition(BaseModel):
    """A field of a data type with its validator source, if any."""

    name: str
    validator: Optional[str] = None


class Definition(BaseModel):
    """Field layout of a data type or variant."""

    boxed: bool = False
    fields: List[FieldDefinition] = Field(default_factory=list)


class DataDefinition(BaseModel):
    type: Literal["data"] = "data"
    name: Optional[str] = None
    comment: Optional[str] = None
    definition: Optional[Definition] = None


class VariantDefinition(BaseModel):
    type: Literal["variant"] = "variant"
    name: str
    comment: Optional[str] = None
    definition: Optional[Definition] = None


class ImportDefinition(BaseModel):
    type: Literal["import"] = "import"
    path: str


class ModuleDefinition(BaseModel):
    """A documented module and its items in source order."""

    type: Literal["module"] = "module"
    name: str
    comment: Optional[str] = None
    items: List["DocumentationItem"] = Field(default_factory=list)

    def has_public_items(self) -> bool:
        """Whether anything in this module (recursively) is worth showing."""
        for item in self.items:
            if isinstance(item, BindingDefinition) and item.public:
                return True
            if isinstance(item, (DataDefinition, VariantDefinition)):
                return True
            if isinstance(item, ModuleDefinition) and item.has_public_items():
                return True
        return False


DocumentationItem = Annotated[
    Union[
        CodeChunk, BindingDefinition, ModuleDefinition,
        DataDefinition, VariantDefinition, ImportDefinition
    ],
    Field(discriminator="type")
]

ModuleDefinition.model_rebuild()


class FileContent(BaseModel):
    """Everything extracted from one source file."""

    main: bool = False
    file: str
    items: List[DocumentationItem] = Field(default_factory=list)
