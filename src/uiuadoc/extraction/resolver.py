"""Exact-span lookup into the compiler's binding registry."""

import logging
from typing import Dict, List, Optional

from ..core.models import BindingMetadata, CodeSpan


logger = logging.getLogger(__name__)


class SpanResolver:
    """Read-only index from declaration spans to binding metadata.

    Only exact span equality matches. Spans the compiler synthesized while
    desugaring have no registry entry and resolve to ``None``.
    """

    def __init__(self, bindings: List[BindingMetadata]):
        self._bindings = bindings
        self._by_span: Dict[CodeSpan, BindingMetadata] = {}

        for binding in bindings:
            # First registration wins, matching a front-to-back registry scan
            self._by_span.setdefault(binding.span, binding)

        logger.debug(f"Indexed {len(self._by_span)} binding spans")

    def resolve(self, span: CodeSpan) -> Optional[BindingMetadata]:
        """Return the metadata registered for exactly this span."""
        return self._by_span.get(span)

    def binding_at(self, index: int) -> Optional[BindingMetadata]:
        """Return the registry entry at ``index``, if it exists."""
        if 0 <= index < len(self._bindings):
            return self._bindings[index]
        return None

    def __len__(self) -> int:
        return len(self._bindings)
