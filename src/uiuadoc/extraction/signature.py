"""Reconciliation of function argument names.

The compiler only knows how many values a function takes and returns.
Names come from people: from the signature line of a doc comment, and for
data constructors from the declared field names. Every slot is resolved with
the priority field name > comment name > inferred default.
"""

from typing import List, Optional, Sequence, TypeVar

from ..core.models import Signature
from .models import (
    FunctionArgument,
    FunctionDefinition,
    FunctionOutput,
    NamedArgument,
    NamedSignature,
)


T = TypeVar("T")


def default_names(prefix: str, count: int) -> List[str]:
    """Positional names used when nobody named a slot."""
    if count == 0:
        return []
    if count == 1:
        return [prefix]
    return [f"{prefix}{i + 1}" for i in range(count)]


def pad(values: Sequence[T], length: int) -> List[Optional[T]]:
    """Align ``values`` to ``length`` slots, filling with ``None``.

    Values past ``length`` are dropped.
    """
    padded: List[Optional[T]] = list(values[:length])
    padded.extend([None] * (length - len(padded)))
    return padded


def resolve_input(default: str,
                  comment_name: Optional[str],
                  field_name: Optional[str],
                  optional: bool = False) -> FunctionArgument:
    """Resolve one input slot from its three possible name sources."""
    if comment_name is None and field_name is None:
        return FunctionArgument(name=default, optional=optional, inferred=True)

    name = field_name if field_name is not None else comment_name
    alias = comment_name if comment_name is not None and comment_name != name else None

    return FunctionArgument(
        name=name,
        optional=optional,
        comment_alias=alias,
        inferred=False
    )


def reconcile_signature(signature: Signature,
                        named_signature: Optional[NamedSignature] = None,
                        named_arguments: Optional[List[NamedArgument]] = None) -> FunctionDefinition:
    """Merge arity, doc-comment names and explicit field names.

    Args:
        signature: Compiler-inferred arity
        named_signature: Names declared in the binding's doc comment
        named_arguments: Field names of a data constructor, in declaration order

    Returns:
        FunctionDefinition with required inputs, optional inputs and outputs
    """
    named_signature = named_signature or NamedSignature()
    named_arguments = named_arguments or []

    required_names = [arg.name for arg in named_arguments if arg.required]
    optional_names = [arg.name for arg in named_arguments if not arg.required]

    default_inputs = default_names("Input", signature.inputs)
    default_outputs = default_names("Output", signature.outputs)
    slots = len(default_inputs)

    comment_inputs = pad(named_signature.inputs, slots)
    field_inputs = pad(required_names, slots)

    required_inputs = [
        resolve_input(default, comment_name, field_name)
        for default, comment_name, field_name in zip(default_inputs, comment_inputs, field_inputs)
    ]

    # Optional fields have no positional slot; comment names written past the
    # required slots are matched to them in order
    extra_comment_names = pad(named_signature.inputs[slots:], len(optional_names))
    optional_inputs = [
        resolve_input(name, comment_name, name, optional=True)
        for name, comment_name in zip(optional_names, extra_comment_names)
    ]

    outputs = []
    for default, comment_name in zip(default_outputs, pad(named_signature.outputs, len(default_outputs))):
        if comment_name is None:
            outputs.append(FunctionOutput(name=default, inferred=True))
        else:
            outputs.append(FunctionOutput(name=comment_name, inferred=False))

    return FunctionDefinition(
        required_inputs=required_inputs,
        optional_inputs=optional_inputs,
        outputs=outputs
    )
