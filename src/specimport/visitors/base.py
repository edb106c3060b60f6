"""Abstract operation visitors, one contract per document version family.

A policy visitor inspects a single operation of a parsed document and may
contribute a :class:`~specimport.models.PolicyConfiguration`. Converters call
:meth:`~OperationVisitor.visit` once per operation and per visitor, in the
order the caller requested the visitors; a ``None`` result contributes
nothing.

Both the document and the operation handed to a visitor have their internal
``$ref`` pointers already inlined.

Example:
    Minimal visitor::

        class RateLimitVisitor(SwaggerOperationVisitor):
            def visit(self, document, operation):
                if "x-rate-limit" not in operation:
                    return None
                return PolicyConfiguration(
                    name="rate-limit",
                    configuration={"limit": operation["x-rate-limit"]},
                )
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from specimport.models import PolicyConfiguration


class OperationVisitor(ABC):
    """Base class for all operation visitors."""

    @abstractmethod
    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        """Inspect *operation* and optionally contribute a policy.

        Args:
            document: The whole resolved document, for top-level settings
                such as ``produces`` or ``servers``.
            operation: The resolved operation object.

        Returns:
            A policy configuration, or ``None`` to contribute nothing.
        """
        ...


class SwaggerOperationVisitor(OperationVisitor):
    """Visitor for Swagger 2 documents (and Swagger 1 documents, which are
    held in the Swagger 2 layout)."""


class OAIOperationVisitor(OperationVisitor):
    """Visitor for OpenAPI 3 documents, including WSDL projections."""
