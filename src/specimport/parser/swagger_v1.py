"""Swagger 1.x parser.

Swagger 1.x documents come in two shapes: a *resource listing* whose
``apis`` entries only name resources, and an *API declaration* whose ``apis``
entries carry ``operations``. Both are up-converted to the Swagger 2 layout
so that :class:`~specimport.converter.swagger_v2.SwaggerV2ToAPIConverter`
handles them unchanged:

* ``basePath`` is split into ``schemes``, ``host`` and ``basePath``.
* Each operation lands under ``paths[path][method]``; ``nickname`` becomes
  ``operationId`` and ``notes`` becomes ``description``.
* ``paramType`` maps onto ``in`` (``form`` becomes ``formData``); body
  parameters reference the declared ``models`` through ``#/definitions``.
* ``responseMessages`` become ``responses``.

The original ``swaggerVersion`` is kept as the ``x-swagger-version``
extension.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlparse

from specimport.models import HTTPMethod
from specimport.parser.base import DocumentParser

logger = logging.getLogger(__name__)

_PARAM_TYPES = {
    "path": "path",
    "query": "query",
    "header": "header",
    "body": "body",
    "form": "formData",
}

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


class SwaggerV1Parser(DocumentParser):
    """Recognise Swagger 1.x documents and convert them to the Swagger 2 layout."""

    @property
    def name(self) -> str:
        return "Swagger v1"

    def parse_document(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        version = document.get("swaggerVersion")
        if version is None or not str(version).startswith("1"):
            logger.debug("Not a Swagger v1 document (swaggerVersion=%r)", version)
            return None
        if not isinstance(document.get("apis"), list):
            logger.debug("Swagger v1 document has no 'apis' list")
            return None

        return _to_swagger_v2(document)


def _to_swagger_v2(document: dict[str, Any]) -> dict[str, Any]:
    info = _mapping(document.get("info"))
    models = _mapping(document.get("models"))

    result: dict[str, Any] = {
        "swagger": "2.0",
        "info": {
            "title": info.get("title") or _title_from_resource(document),
            "version": str(document.get("apiVersion", "0.0.0")),
        },
    }
    if info.get("description"):
        result["info"]["description"] = info["description"]

    result.update(_split_base_path(document.get("basePath")))

    for key in ("consumes", "produces"):
        if document.get(key):
            result[key] = document[key]

    paths: dict[str, Any] = {}
    for api in document["apis"]:
        if not isinstance(api, dict) or not isinstance(api.get("path"), str):
            continue
        path_item = paths.setdefault(api["path"], {})
        for operation in _list(api.get("operations")):
            if not isinstance(operation, dict):
                continue
            method = str(operation.get("method") or operation.get("httpMethod") or "").lower()
            if method not in _HTTP_METHODS:
                continue
            path_item[method] = _convert_operation(operation, models)
    result["paths"] = paths

    if models:
        result["definitions"] = {
            name: {key: value for key, value in model.items() if key != "id"}
            for name, model in models.items()
            if isinstance(model, dict)
        }

    result["x-swagger-version"] = str(document["swaggerVersion"])
    return result


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _title_from_resource(document: dict[str, Any]) -> str:
    resource_path = document.get("resourcePath")
    if resource_path:
        return str(resource_path).strip("/") or "Untitled API"
    return "Untitled API"


def _split_base_path(base_path: Any) -> dict[str, Any]:
    """Split a Swagger 1.x absolute ``basePath`` URL into Swagger 2 fields."""
    if not base_path:
        return {}

    parsed = urlparse(str(base_path))
    if parsed.scheme and parsed.netloc:
        return {
            "schemes": [parsed.scheme],
            "host": parsed.netloc,
            "basePath": parsed.path or "/",
        }
    return {"basePath": parsed.path or "/"}


def _convert_operation(operation: dict[str, Any], models: dict[str, Any]) -> dict[str, Any]:
    converted: dict[str, Any] = {}
    if operation.get("nickname"):
        converted["operationId"] = operation["nickname"]
    if operation.get("summary"):
        converted["summary"] = operation["summary"]
    if operation.get("notes"):
        converted["description"] = operation["notes"]
    for key in ("consumes", "produces"):
        if operation.get(key):
            converted[key] = operation[key]

    converted["parameters"] = [
        _convert_parameter(param, models)
        for param in _list(operation.get("parameters"))
        if isinstance(param, dict) and isinstance(param.get("paramType"), str)
        and param["paramType"] in _PARAM_TYPES
    ]

    responses: dict[str, Any] = {}
    return_type = operation.get("type")
    if return_type and return_type != "void":
        responses["200"] = {
            "description": "successful operation",
            "schema": _schema_for(return_type, operation.get("items"), models),
        }
    for message in _list(operation.get("responseMessages")):
        if isinstance(message, dict) and "code" in message:
            responses[str(message["code"])] = {"description": message.get("message", "")}
    if not responses:
        responses["default"] = {"description": "successful operation"}
    converted["responses"] = responses

    return converted


def _convert_parameter(param: dict[str, Any], models: dict[str, Any]) -> dict[str, Any]:
    location = _PARAM_TYPES[param["paramType"]]
    converted: dict[str, Any] = {
        "name": param.get("name", "body" if location == "body" else ""),
        "in": location,
        "required": bool(param.get("required", location == "path")),
    }
    if param.get("description"):
        converted["description"] = param["description"]

    if location == "body":
        converted["schema"] = _schema_for(param.get("type"), param.get("items"), models)
    else:
        converted["type"] = param.get("type", "string")
        if param.get("format"):
            converted["format"] = param["format"]
        if param.get("enum"):
            converted["enum"] = param["enum"]
    return converted


def _schema_for(type_name: Any, items: Any, models: dict[str, Any]) -> dict[str, Any]:
    if isinstance(type_name, str) and type_name in models:
        return {"$ref": f"#/definitions/{type_name}"}
    if type_name == "array" and isinstance(items, dict):
        item_type = items.get("$ref") or items.get("type")
        return {"type": "array", "items": _schema_for(item_type, None, models)}
    return {"type": type_name or "string"}
