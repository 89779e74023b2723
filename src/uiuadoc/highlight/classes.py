"""Mapping from classified spans to highlight buckets."""

from typing import Optional

from ..core.models import (
    BindingDocs,
    BindingDocsKind,
    PrimitiveClass,
    PrimitiveInfo,
    Signature,
    SpanCategory,
    SpanKind,
)


def modifier_class(modifier_args: int) -> str:
    if modifier_args <= 1:
        return "binding monadic-modifier"
    if modifier_args == 2:
        return "binding dyadic-modifier"
    return "binding triadic-modifier"


def signature_class(signature: Signature) -> str:
    color = signature.color_class
    return f"binding {color}" if color else "binding"


def primitive_class(primitive: PrimitiveInfo) -> str:
    """Bucket for a built-in primitive."""
    if primitive.name == "identity":
        return "stack-function"
    if primitive.prim_class in (PrimitiveClass.STACK, PrimitiveClass.DEBUG) and primitive.modifier_args is None:
        return "stack-function"
    if primitive.prim_class == PrimitiveClass.CONSTANT:
        return "number-literal"
    if primitive.modifier_args is not None:
        return modifier_class(primitive.modifier_args)
    if primitive.signature is not None:
        return signature_class(primitive.signature)
    return ""


def binding_class(docs: BindingDocs) -> str:
    """Bucket for an identifier that resolved to a binding."""
    if docs.kind == BindingDocsKind.CONSTANT:
        return "binding constant"
    if docs.kind == BindingDocsKind.FUNCTION:
        return signature_class(docs.signature or Signature())
    if docs.kind == BindingDocsKind.MODIFIER:
        return modifier_class(docs.modifier_args or 0)
    if docs.kind == BindingDocsKind.MODULE:
        return "binding module"
    return "output-error"


def highlight_class(kind: SpanKind) -> str:
    """CSS class used to render a span of the given kind.

    Only chooses a colour; unknown or uninteresting kinds map to ``""``.
    """
    category = kind.category

    if category == SpanCategory.PRIMITIVE:
        return primitive_class(kind.primitive) if kind.primitive else ""
    if category == SpanCategory.OBVERSE:
        return modifier_class(1)
    if category == SpanCategory.NUMBER:
        return "number-literal"
    if category in (SpanCategory.STRING, SpanCategory.IMPORT_SRC):
        return "string-literal-span"
    if category in (SpanCategory.COMMENT, SpanCategory.OUTPUT_COMMENT):
        return "comment-span"
    if category == SpanCategory.STRAND:
        return "strand-span"
    if category == SpanCategory.SUBSCRIPT:
        return primitive_class(kind.primitive) if kind.primitive else "number-literal"
    if category == SpanCategory.MACRO_DELIM:
        return modifier_class(kind.modifier_args or 0)
    if category == SpanCategory.ARG_SETTER:
        return signature_class(Signature(inputs=1, outputs=0))
    if category == SpanCategory.IDENT and kind.docs is not None:
        return binding_class(kind.docs)
    return ""


def span_css_class(kind: Optional[SpanKind]) -> str:
    """Full class attribute for a rendered code span."""
    if kind is None:
        return "code-span"
    color = highlight_class(kind)
    return f"code-span {color}" if color else "code-span"
