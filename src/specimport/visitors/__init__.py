"""Policy visitors -- pluggable units contributing gateway policies per operation.

Key classes:

* :class:`SwaggerOperationVisitor` / :class:`OAIOperationVisitor` -- the
  visitor contracts for each document version family.
* :class:`OperationVisitorDescriptor` -- a registry entry (id plus one
  factory per supported family).
* :class:`PolicyVisitorRegistry` -- the catalog resolving requested ids into
  visitor instances.

Built-in visitors: ``mock``, ``json-validation`` and ``rest-to-soap``.
"""

from specimport.visitors.base import (
    OAIOperationVisitor,
    OperationVisitor,
    SwaggerOperationVisitor,
)
from specimport.visitors.registry import (
    OperationVisitorDescriptor,
    PolicyVisitorRegistry,
    default_registry,
)

__all__ = [
    "OAIOperationVisitor",
    "OperationVisitor",
    "OperationVisitorDescriptor",
    "PolicyVisitorRegistry",
    "SwaggerOperationVisitor",
    "default_registry",
]
