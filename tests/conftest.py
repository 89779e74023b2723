"""Test configuration."""

import pytest
from pathlib import Path
import tempfile
import os

from uiuadoc.core.models import (
    BindingDocs,
    BindingDocsKind,
    BindingItem,
    BindingMetadata,
    CodeSpan,
    ConstBindingKind,
    DocComment,
    DocCommentSig,
    FuncBindingKind,
    Ident,
    ModuleBindingKind,
    ModuleItem,
    Signature,
    SpanCategory,
    SpanEvent,
    SpanKind,
    Word,
    WordsItem,
)
from uiuadoc.frontend import Classification, CompiledProgram, ExportedProgramFrontend, SourceFile


LIB_SOURCE = (
    "# !doc # Overview\n"
    "# !doc Utilities for stacks.\n"
    "\n"
    "Double ← ×2\n"
    "Pi ← 3.14\n"
    "Helper ← +1\n"
    "┌─╴Geo\n"
    "  Area ← ×\n"
    "└─╴\n"
    "\n"
    "&p Double 5\n"
)

DEP_SOURCE = "Dep ← ¯\n"


def span_of(text: str, needle: str, src: str = "lib.ua", occurrence: int = 1) -> CodeSpan:
    """Span of the n-th occurrence of ``needle`` in ``text``."""
    start = -1
    for _ in range(occurrence):
        start = text.index(needle, start + 1)
    return CodeSpan.from_offsets(src, text, start, start + len(needle))


def binding_item(text: str, name: str, line: str, src: str = "lib.ua") -> BindingItem:
    name_span = span_of(text, name, src)
    return BindingItem(name=Ident(value=name, span=name_span), span=span_of(text, line, src))


# Test fixtures
@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def lib_source():
    return LIB_SOURCE


@pytest.fixture
def sample_bindings():
    """Binding registry for the sample library."""
    text = LIB_SOURCE
    return [
        BindingMetadata(
            span=span_of(text, "Double"),
            name="Double",
            comment=DocComment(text="Double a value", sig=DocCommentSig(args=["x"], outputs=["doubled"])),
            kind=FuncBindingKind(signature=Signature(inputs=1, outputs=1))
        ),
        BindingMetadata(
            span=span_of(text, "Pi"),
            name="Pi",
            kind=ConstBindingKind(value="3.14")
        ),
        BindingMetadata(
            span=span_of(text, "Helper"),
            name="Helper",
            public=False,
            kind=FuncBindingKind(signature=Signature(inputs=1, outputs=1))
        ),
        BindingMetadata(
            span=span_of(text, "Geo"),
            name="Geo",
            comment=DocComment(text="Geometry helpers"),
            kind=ModuleBindingKind(names={"Area": 4})
        ),
        BindingMetadata(
            span=span_of(text, "Area"),
            name="Area",
            kind=FuncBindingKind(signature=Signature(inputs=2, outputs=1))
        ),
        BindingMetadata(
            span=span_of(DEP_SOURCE, "Dep", "uiua-modules/dep/lib.ua"),
            name="Dep",
            kind=FuncBindingKind(signature=Signature(inputs=1, outputs=1))
        ),
    ]


@pytest.fixture
def sample_items():
    """Top-level AST items of the sample library."""
    text = LIB_SOURCE
    doc_comment = "# !doc # Overview\n# !doc Utilities for stacks."
    return [
        WordsItem(words=[Word(span=span_of(text, doc_comment))]),
        binding_item(text, "Double", "Double ← ×2"),
        binding_item(text, "Pi", "Pi ← 3.14"),
        binding_item(text, "Helper", "Helper ← +1"),
        ModuleItem(
            name=Ident(value="Geo", span=span_of(text, "Geo")),
            items=[binding_item(text, "Area", "Area ← ×")]
        ),
        WordsItem(words=[
            Word(span=span_of(text, "&p")),
            Word(span=span_of(text, "Double", occurrence=2)),
            Word(span=span_of(text, "5")),
        ]),
    ]


@pytest.fixture
def snippet_spans():
    """Classified spans of the ``Double 5`` snippet."""
    return [
        SpanEvent(start=0, end=6, kind=SpanKind(
            category=SpanCategory.IDENT,
            docs=BindingDocs(kind=BindingDocsKind.FUNCTION, signature=Signature(inputs=1, outputs=1))
        )),
        SpanEvent(start=7, end=8, kind=SpanKind(category=SpanCategory.NUMBER)),
    ]


@pytest.fixture
def sample_program(sample_bindings, sample_items, snippet_spans):
    """A compiled program with the sample library and one vendored dependency."""
    dep_item = binding_item(DEP_SOURCE, "Dep", "Dep ← ¯", "uiua-modules/dep/lib.ua")
    return CompiledProgram(
        bindings=sample_bindings,
        files={
            "uiua-modules/dep/lib.ua": SourceFile(text=DEP_SOURCE, items=[dep_item]),
            "lib.ua": SourceFile(text=LIB_SOURCE, items=sample_items),
        },
        classifications=[Classification(text="Double 5", spans=snippet_spans)]
    )


@pytest.fixture
def sample_frontend(sample_program):
    return ExportedProgramFrontend(sample_program)


@pytest.fixture
def export_file(temp_dir, sample_program):
    """The sample program written as a JSON export."""
    file_path = temp_dir / "program.json"
    file_path.write_text(sample_program.model_dump_json(indent=2), encoding="utf-8")
    return file_path


@pytest.fixture
def clean_title_env():
    """Remove the title environment variable for the duration of a test."""
    original = os.environ.pop('UIUADOC_TITLE', None)
    yield
    if original is not None:
        os.environ['UIUADOC_TITLE'] = original
    else:
        os.environ.pop('UIUADOC_TITLE', None)
