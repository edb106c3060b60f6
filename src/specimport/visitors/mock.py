"""Mock policy visitor: answer each operation with a canned response.

The mocked status is the first 2xx response declared by the operation (else
the first declared response, else ``200``). The mocked body is the response
example when one is declared, otherwise a sample generated from the response
schema.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from specimport.models import PolicyConfiguration
from specimport.visitors.base import OAIOperationVisitor, SwaggerOperationVisitor
from specimport.visitors.registry import OperationVisitorDescriptor

POLICY_NAME = "mock"

_MAX_DEPTH = 8


def generate_sample(schema: Any, depth: int = 0) -> Any:
    """Build an example value conforming to a (resolved) JSON schema."""
    if not isinstance(schema, dict) or depth > _MAX_DEPTH or "$ref" in schema:
        return None

    if "example" in schema:
        return schema["example"]
    if "default" in schema:
        return schema["default"]
    if isinstance(schema.get("enum"), list) and schema["enum"]:
        return schema["enum"][0]

    for combinator in ("allOf", "oneOf", "anyOf"):
        if isinstance(schema.get(combinator), list) and schema[combinator]:
            if combinator == "allOf":
                merged: dict[str, Any] = {}
                for part in schema["allOf"]:
                    sample = generate_sample(part, depth + 1)
                    if isinstance(sample, dict):
                        merged.update(sample)
                return merged
            return generate_sample(schema[combinator][0], depth + 1)

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if t != "null"), None)
    if schema_type is None and "properties" in schema:
        schema_type = "object"

    if schema_type == "object":
        return {
            name: generate_sample(prop, depth + 1)
            for name, prop in _mapping(schema.get("properties")).items()
        }
    if schema_type == "array":
        return [generate_sample(schema.get("items"), depth + 1)]
    if schema_type == "integer":
        return 0
    if schema_type == "number":
        return 0.0
    if schema_type == "boolean":
        return True
    if schema_type == "string":
        return "Mocked string"
    return None


def _pick_response(responses: Any) -> tuple[Optional[str], dict[str, Any]]:
    """Return the first 2xx response (else the first one) as ``(status, response)``."""
    if not isinstance(responses, dict):
        return None, {}
    chosen = next((key for key in responses if str(key).startswith("2")), None)
    if chosen is None:
        chosen = next(iter(responses), None)
    if chosen is None:
        return None, {}
    response = responses[chosen]
    return str(chosen), response if isinstance(response, dict) else {}


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _mock_policy(status: str, content_type: Optional[str], body: Any) -> PolicyConfiguration:
    configuration: dict[str, Any] = {"status": status}
    if content_type:
        configuration["headers"] = [{"name": "Content-Type", "value": content_type}]
    if body is not None:
        configuration["content"] = body if isinstance(body, str) else json.dumps(body, indent=2)
    return PolicyConfiguration(name=POLICY_NAME, configuration=configuration)


class SwaggerMockVisitor(SwaggerOperationVisitor):
    """Mock visitor for Swagger 2 operations (``examples`` and ``schema``)."""

    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        status, response = _pick_response(operation.get("responses"))
        if status is None:
            return _mock_policy("200", None, None)

        produces = operation.get("produces") or document.get("produces")
        if isinstance(produces, str):
            produces = [produces]
        elif not isinstance(produces, list) or not produces:
            produces = ["application/json"]

        examples = _mapping(response.get("examples"))
        if examples:
            content_type = next(iter(examples))
            return _mock_policy(status, content_type, examples[content_type])

        body = generate_sample(response.get("schema"))
        return _mock_policy(status, produces[0] if body is not None else None, body)


class OAIMockVisitor(OAIOperationVisitor):
    """Mock visitor for OpenAPI 3 operations (media type examples and schemas)."""

    def visit(
        self, document: dict[str, Any], operation: dict[str, Any]
    ) -> Optional[PolicyConfiguration]:
        status, response = _pick_response(operation.get("responses"))
        if status is None:
            return _mock_policy("200", None, None)

        content = _mapping(response.get("content"))
        if not content:
            return _mock_policy(status, None, None)

        content_type, media = next(iter(content.items()))
        media = media if isinstance(media, dict) else {}

        if "example" in media:
            return _mock_policy(status, content_type, media["example"])
        for example in _mapping(media.get("examples")).values():
            if isinstance(example, dict) and "value" in example:
                return _mock_policy(status, content_type, example["value"])

        return _mock_policy(status, content_type, generate_sample(media.get("schema")))


descriptor = OperationVisitorDescriptor(
    id="mock",
    name="Mock",
    description="Answer every operation with a response generated from the descriptor",
    swagger_visitor_factory=SwaggerMockVisitor,
    oai_visitor_factory=OAIMockVisitor,
)
