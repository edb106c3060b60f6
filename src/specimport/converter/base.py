"""Shared conversion walk from a descriptor to a :class:`~specimport.models.SwaggerApiEntity`.

:class:`DescriptorConverter` implements the part both version families have
in common: resolving internal ``$ref`` pointers, walking every path and HTTP
method in document order, building canonical
:class:`~specimport.models.Operation` records, and asking each visitor for a
policy contribution. Subclasses supply the version-specific pieces: the base
URL, the declared endpoints, and how a parameter's schema is found.

Parameter merging follows both specifications: path-level parameters provide
defaults, and operation-level parameters override them when they share the
same ``name`` and ``in`` values.

A malformed path item, operation or parameter list aborts the whole
conversion; no partial entity is ever returned.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence

from specimport.descriptors import Descriptor
from specimport.exceptions import DescriptorConversionError
from specimport.models import (
    HTTPMethod,
    Operation,
    OperationParameter,
    ParameterLocation,
    PathEntity,
    SwaggerApiEntity,
    Version,
)
from specimport.parser.resolver import resolve_refs
from specimport.visitors.base import OperationVisitor

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

_PATH_PARAM = re.compile(r"\{([^/{}]+)\}")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class BaseUrl:
    """The document's resolved base URL parts, computed once per conversion."""

    scheme: str
    host: str
    base_path: str


def to_gateway_path(path: str) -> str:
    """Rewrite ``{param}`` placeholders to the gateway's ``:param`` notation."""
    return _PATH_PARAM.sub(r":\1", path)


class DescriptorConverter(ABC):
    """Base class for the version-family converters.

    Args:
        visitors: Resolved visitors, applied to every operation in this order.
        default_scheme: Scheme used when the document declares none.
        with_path_mapping: Emit :attr:`SwaggerApiEntity.path_mappings`.
    """

    VERSIONS: ClassVar[frozenset[Version]]

    def __init__(
        self,
        visitors: Sequence[OperationVisitor] = (),
        default_scheme: str = "https",
        with_path_mapping: bool = True,
    ) -> None:
        self._visitors = list(visitors)
        self._default_scheme = default_scheme
        self._with_path_mapping = with_path_mapping

    def convert(self, descriptor: Descriptor) -> SwaggerApiEntity:
        """Convert *descriptor* into a :class:`~specimport.models.SwaggerApiEntity`.

        Raises:
            DescriptorConversionError: If the descriptor belongs to another
                version family, has no ``paths`` mapping, contains a
                malformed path item, operation or parameter list, or holds an
                unresolvable internal ``$ref``.
        """
        if descriptor.version not in self.VERSIONS:
            raise DescriptorConversionError(
                f"{type(self).__name__} cannot convert a {descriptor.version.value} descriptor"
            )

        document = resolve_refs(descriptor.specification)
        paths = document.get("paths")
        if not isinstance(paths, dict):
            raise DescriptorConversionError("Descriptor declares no paths")

        info = document.get("info")
        info = info if isinstance(info, dict) else {}
        name = str(info.get("title") or "Untitled API")
        base_url = self.base_url(document)

        entity = SwaggerApiEntity(
            name=name,
            version=str(info.get("version") or "0.0.0"),
            description=str(info.get("description") or f"Description of {name}"),
            context_path=self._context_path(base_url, name),
            endpoints=self.endpoints(document),
            tags=_tag_names(document),
        )

        for path, path_item in paths.items():
            path = str(path)
            if not isinstance(path_item, dict):
                raise DescriptorConversionError(f"Malformed path item for '{path}'")
            entity.paths[path] = self._convert_path(document, path, path_item, base_url)

        if self._with_path_mapping:
            entity.path_mappings = [path.gateway_path for path in entity.paths.values()]
        return entity

    # ------------------------------------------------------------------
    # Version-specific hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def base_url(self, document: dict[str, Any]) -> BaseUrl:
        """Compute the scheme, host and base path declared by *document*."""
        ...

    @abstractmethod
    def endpoints(self, document: dict[str, Any]) -> list[str]:
        """Return the absolute backend URLs declared by *document*."""
        ...

    @abstractmethod
    def parameter_schema(self, param: dict[str, Any]) -> dict[str, Any]:
        """Return the schema describing *param*'s value."""
        ...

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _context_path(self, base_url: BaseUrl, name: str) -> str:
        context_path = base_url.base_path.rstrip("/")
        if context_path:
            return context_path
        return "/" + _WHITESPACE.sub("", name).lower()

    def _convert_path(
        self,
        document: dict[str, Any],
        path: str,
        path_item: dict[str, Any],
        base_url: BaseUrl,
    ) -> PathEntity:
        path_params = _parameter_list(path_item.get("parameters"), path)
        entity = PathEntity(path=path, gateway_path=to_gateway_path(path))

        for key, operation in path_item.items():
            method_str = str(key).lower()
            if method_str not in _HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                raise DescriptorConversionError(
                    f"Malformed operation {method_str.upper()} {path}"
                )
            for key in ("responses", "requestBody"):
                if key in operation and not isinstance(operation[key], dict):
                    raise DescriptorConversionError(
                        f"Malformed {key} for {method_str.upper()} {path}"
                    )

            method = HTTPMethod(method_str)
            op_params = _parameter_list(operation.get("parameters"), path)
            record = Operation(
                path=path,
                method=method,
                operation_id=_optional_str(operation.get("operationId")),
                summary=_optional_str(operation.get("summary")),
                description=_optional_str(operation.get("description")),
                tags=[str(tag) for tag in as_list(operation.get("tags"))],
                parameters=self._extract_parameters(_merge_parameters(path_params, op_params)),
                scheme=base_url.scheme,
                host=base_url.host,
                base_path=base_url.base_path,
            )

            for visitor in self._visitors:
                policy = visitor.visit(document, operation)
                if policy is not None:
                    record.policies[policy.name] = policy

            entity.operations[method] = record
        return entity

    def _extract_parameters(self, params: list[dict[str, Any]]) -> list[OperationParameter]:
        parameters: list[OperationParameter] = []
        for param in params:
            try:
                location = ParameterLocation(param.get("in", "query"))
            except ValueError:
                continue

            schema = self.parameter_schema(param)
            required = bool(param.get("required", False))
            if location == ParameterLocation.PATH:
                required = True

            parameters.append(
                OperationParameter(
                    name=str(param.get("name", "")),
                    location=location,
                    required=required,
                    description=_optional_str(param.get("description")),
                    schema_type=_schema_type(schema),
                    schema_format=_optional_str(schema.get("format")),
                )
            )
        return parameters


def as_list(value: Any) -> list[Any]:
    """Treat a lone string as a one-item list and any other non-list as empty."""
    if isinstance(value, str):
        return [value]
    return value if isinstance(value, list) else []


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _parameter_list(value: Any, path: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(p, dict) for p in value):
        raise DescriptorConversionError(f"Malformed parameters for '{path}'")
    return value


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters, operation-level first on conflicts."""
    overridden = {(param.get("name", ""), param.get("in", "")) for param in op_params}
    merged = [
        param
        for param in path_params
        if (param.get("name", ""), param.get("in", "")) not in overridden
    ]
    merged.extend(op_params)
    return merged


def _schema_type(schema: dict[str, Any]) -> str:
    """Return the schema's type; the first non-null entry of an OpenAPI 3.1 type array."""
    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        return str(non_null[0]) if non_null else "string"
    if type_value is None:
        return "object" if "properties" in schema else "string"
    return str(type_value)


def _tag_names(document: dict[str, Any]) -> list[str]:
    names: list[str] = []
    for tag in as_list(document.get("tags")):
        name: Optional[Any] = tag.get("name") if isinstance(tag, dict) else tag
        if name:
            names.append(str(name))
    return names
