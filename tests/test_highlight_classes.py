"""Test highlight class mapping."""

import pytest

from uiuadoc.core.models import (
    BindingDocs,
    BindingDocsKind,
    PrimitiveClass,
    PrimitiveInfo,
    Signature,
    SpanCategory,
    SpanKind,
)
from uiuadoc.highlight import highlight_class, span_css_class
from uiuadoc.highlight.classes import binding_class, modifier_class, primitive_class


class TestPrimitiveClass:
    """Test buckets for built-in primitives."""

    def test_identity_is_stack_function(self):
        assert primitive_class(PrimitiveInfo(name="identity")) == "stack-function"

    def test_stack_primitive(self):
        primitive = PrimitiveInfo(name="dup", prim_class=PrimitiveClass.STACK,
                                  signature=Signature(inputs=1, outputs=2))
        assert primitive_class(primitive) == "stack-function"

    def test_stack_modifier_uses_modifier_bucket(self):
        primitive = PrimitiveInfo(name="dip", prim_class=PrimitiveClass.STACK, modifier_args=1)
        assert primitive_class(primitive) == "binding monadic-modifier"

    def test_constant(self):
        primitive = PrimitiveInfo(name="pi", prim_class=PrimitiveClass.CONSTANT)
        assert primitive_class(primitive) == "number-literal"

    @pytest.mark.parametrize("inputs,expected", [
        (0, "binding noadic-function"),
        (1, "binding monadic-function"),
        (2, "binding dyadic-function"),
        (3, "binding triadic-function"),
        (4, "binding tetradic-function"),
        (5, "binding"),
    ])
    def test_function_by_arity(self, inputs, expected):
        primitive = PrimitiveInfo(name="f", signature=Signature(inputs=inputs, outputs=1))
        assert primitive_class(primitive) == expected

    def test_unknown(self):
        assert primitive_class(PrimitiveInfo(name="f")) == ""


class TestBindingClass:
    """Test buckets for resolved identifiers."""

    def test_kinds(self):
        assert binding_class(BindingDocs(kind=BindingDocsKind.CONSTANT)) == "binding constant"
        assert binding_class(BindingDocs(kind=BindingDocsKind.MODULE)) == "binding module"
        assert binding_class(BindingDocs(kind=BindingDocsKind.ERROR)) == "output-error"

    def test_function(self):
        docs = BindingDocs(kind=BindingDocsKind.FUNCTION, signature=Signature(inputs=2, outputs=1))
        assert binding_class(docs) == "binding dyadic-function"

    def test_modifier(self):
        docs = BindingDocs(kind=BindingDocsKind.MODIFIER, modifier_args=3)
        assert binding_class(docs) == "binding triadic-modifier"

    def test_modifier_buckets(self):
        assert modifier_class(0) == "binding monadic-modifier"
        assert modifier_class(2) == "binding dyadic-modifier"
        assert modifier_class(5) == "binding triadic-modifier"


class TestHighlightClass:
    """Test classes for classified span kinds."""

    @pytest.mark.parametrize("category,expected", [
        (SpanCategory.NUMBER, "number-literal"),
        (SpanCategory.STRING, "string-literal-span"),
        (SpanCategory.IMPORT_SRC, "string-literal-span"),
        (SpanCategory.COMMENT, "comment-span"),
        (SpanCategory.OUTPUT_COMMENT, "comment-span"),
        (SpanCategory.STRAND, "strand-span"),
        (SpanCategory.SUBSCRIPT, "number-literal"),
        (SpanCategory.ARG_SETTER, "binding monadic-function"),
        (SpanCategory.OBVERSE, "binding monadic-modifier"),
        (SpanCategory.WHITESPACE, ""),
        (SpanCategory.LABEL, ""),
        (SpanCategory.IDENT, ""),
    ])
    def test_categories(self, category, expected):
        assert highlight_class(SpanKind(category=category)) == expected

    def test_macro_delimiter(self):
        kind = SpanKind(category=SpanCategory.MACRO_DELIM, modifier_args=2)
        assert highlight_class(kind) == "binding dyadic-modifier"

    def test_ident_with_docs(self):
        kind = SpanKind(category=SpanCategory.IDENT, docs=BindingDocs(kind=BindingDocsKind.CONSTANT))
        assert highlight_class(kind) == "binding constant"

    def test_subscripted_primitive(self):
        kind = SpanKind(
            category=SpanCategory.SUBSCRIPT,
            primitive=PrimitiveInfo(name="take", signature=Signature(inputs=1, outputs=1))
        )
        assert highlight_class(kind) == "binding monadic-function"

    def test_css_class(self):
        assert span_css_class(SpanKind(category=SpanCategory.NUMBER)) == "code-span number-literal"
        assert span_css_class(SpanKind(category=SpanCategory.WHITESPACE)) == "code-span"
        assert span_css_class(None) == "code-span"
