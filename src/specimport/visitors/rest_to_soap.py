"""REST to SOAP policy visitor for WSDL imports.

Only OpenAPI 3 documents can carry the ``x-soap-envelope`` extension (written
by :class:`~specimport.parser.wsdl.WsdlParser`), so this policy has no
Swagger-family visitor.
"""

from __future__ import annotations

from typing import Any, Optional

from specimport.models import PolicyConfiguration
from specimport.visitors.base import OAIOperationVisitor
from specimport.visitors.registry import OperationVisitorDescriptor

POLICY_NAME = "rest-to-soap"


class OAIRestToSoapVisitor(OAIOperationVisitor):
    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        envelope = operation.get("x-soap-envelope")
        if not envelope:
            return None

        configuration: dict[str, Any] = {
            "envelope": envelope,
            "charset": "UTF-8",
            "preserveQueryParams": False,
        }
        if operation.get("x-soap-action"):
            configuration["soapAction"] = operation["x-soap-action"]
        return PolicyConfiguration(name=POLICY_NAME, configuration=configuration)


descriptor = OperationVisitorDescriptor(
    id="rest-to-soap",
    name="REST to SOAP",
    description="Wrap REST calls into the SOAP envelope declared by a WSDL import",
    oai_visitor_factory=OAIRestToSoapVisitor,
)
