"""JSON validation policy visitor: validate request bodies against their schema."""

from __future__ import annotations

import json
from typing import Any, Optional

from specimport.models import PolicyConfiguration
from specimport.visitors.base import OAIOperationVisitor, SwaggerOperationVisitor
from specimport.visitors.registry import OperationVisitorDescriptor

POLICY_NAME = "json-validation"

DEFAULT_ERROR_MESSAGE = '{"error":"Bad request"}'


def _is_json_media_type(media_type: str) -> bool:
    base = media_type.split(";", 1)[0].strip().lower()
    return base == "application/json" or base.endswith("+json")


def _validation_policy(schema: dict[str, Any]) -> PolicyConfiguration:
    return PolicyConfiguration(
        name=POLICY_NAME,
        configuration={
            "scope": "REQUEST_CONTENT",
            "errorMessage": DEFAULT_ERROR_MESSAGE,
            "schema": json.dumps(schema),
        },
    )


class SwaggerJsonValidationVisitor(SwaggerOperationVisitor):
    """Use the schema of the operation's ``in: body`` parameter."""

    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        consumes = operation.get("consumes") or document.get("consumes") or ["application/json"]
        if isinstance(consumes, str):
            consumes = [consumes]
        elif not isinstance(consumes, list):
            return None
        if not any(
            isinstance(media_type, str) and _is_json_media_type(media_type) for media_type in consumes
        ):
            return None

        parameters = operation.get("parameters")
        for param in parameters if isinstance(parameters, list) else []:
            if isinstance(param, dict) and param.get("in") == "body":
                schema = param.get("schema")
                if isinstance(schema, dict) and schema:
                    return _validation_policy(schema)
        return None


class OAIJsonValidationVisitor(OAIOperationVisitor):
    """Use the schema of the first JSON media type in ``requestBody``."""

    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        request_body = operation.get("requestBody")
        if not isinstance(request_body, dict):
            return None

        content = request_body.get("content")
        if not isinstance(content, dict):
            return None

        for media_type, media in content.items():
            if not _is_json_media_type(str(media_type)) or not isinstance(media, dict):
                continue
            schema = media.get("schema")
            if isinstance(schema, dict) and schema:
                return _validation_policy(schema)
        return None


descriptor = OperationVisitorDescriptor(
    id="json-validation",
    name="JSON Validation",
    description="Validate JSON request bodies against the declared schema",
    swagger_visitor_factory=SwaggerJsonValidationVisitor,
    oai_visitor_factory=OAIJsonValidationVisitor,
)
