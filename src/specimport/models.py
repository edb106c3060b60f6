"""Canonical Pydantic models shared across all specimport modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Import request models** -- what a caller hands to the service:
    :class:`ImportFormat`, :class:`SourceKind`, :class:`ImportRequest`.

**Canonical API models** -- produced by the converters, independent of the
source document format:
    :class:`HTTPMethod`, :class:`ParameterLocation`,
    :class:`OperationParameter`, :class:`PolicyConfiguration`,
    :class:`Operation`, :class:`PathEntity`, and :class:`SwaggerApiEntity`.

**Configuration models**:
    :class:`ImportConfig`.

:class:`Version` tags every parsed descriptor and drives converter and
visitor-family dispatch.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Version(str, enum.Enum):
    """Document version family of a parsed descriptor."""

    SWAGGER_V1 = "SWAGGER_V1"
    SWAGGER_V2 = "SWAGGER_V2"
    OAI_V3 = "OAI_V3"


# --- Import request ---


class ImportFormat(str, enum.Enum):
    """How the payload should be interpreted.

    ``API`` auto-detects among Swagger 1.x, Swagger 2.x and OpenAPI 3.x.
    ``WSDL`` is never auto-detected and must be requested explicitly.
    """

    API = "API"
    WSDL = "WSDL"


class SourceKind(str, enum.Enum):
    """Whether the payload is the document itself or a URL pointing to it."""

    INLINE = "INLINE"
    URL = "URL"


class ImportRequest(BaseModel):
    """Caller-supplied instruction for one import.

    ``with_policies`` lists the policy visitor ids to apply, in priority
    order. ``None`` means *no* policies are applied, not all of them.

    The service overwrites ``payload`` (and sets ``type`` to ``INLINE``) after
    a WSDL import so that the caller can persist a readable OpenAPI document
    instead of the raw WSDL.

    Example::

        ImportRequest(
            payload="https://petstore.example.com/v2/swagger.json",
            type=SourceKind.URL,
            with_policies=["mock", "json-validation"],
        )
    """

    payload: str
    type: SourceKind = SourceKind.INLINE
    format: ImportFormat = ImportFormat.API
    with_policies: Optional[list[str]] = None
    with_path_mapping: bool = Field(
        default=True, description="Emit gateway path mappings for every path"
    )


# --- Canonical API model ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised in Swagger and OpenAPI path items."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where a parameter can appear, per the ``in`` field.

    ``body`` and ``formData`` only occur in Swagger 2 documents.
    """

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"
    BODY = "body"
    FORM_DATA = "formData"


class OperationParameter(BaseModel):
    """A single declared parameter of an operation."""

    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    schema_type: str = Field(default="string", description="JSON Schema type")
    schema_format: Optional[str] = None


class PolicyConfiguration(BaseModel):
    """A gateway policy configuration fragment contributed by a visitor.

    ``name`` is the policy identifier (e.g. ``"mock"``); an operation holds at
    most one configuration per name.
    """

    name: str
    configuration: dict[str, Any] = Field(default_factory=dict)
    description: Optional[str] = None


class Operation(BaseModel):
    """Canonical record for one path + HTTP method pair.

    Carries the declared parameters, the document's resolved base URL parts,
    and the policy contributions in the order visitors produced them.
    """

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[OperationParameter] = Field(default_factory=list)
    scheme: str
    host: str = ""
    base_path: str = "/"
    policies: dict[str, PolicyConfiguration] = Field(default_factory=dict)


class PathEntity(BaseModel):
    """All operations declared under one path template.

    ``gateway_path`` is the template rewritten to the gateway's ``:param``
    notation (``/pets/{petId}`` becomes ``/pets/:petId``).
    """

    path: str
    gateway_path: str
    operations: dict[HTTPMethod, Operation] = Field(default_factory=dict)


class SwaggerApiEntity(BaseModel):
    """Format-independent API produced by a converter.

    ``paths`` is keyed by path template and keeps document order.

    See Also:
        :class:`~specimport.converter.swagger_v2.SwaggerV2ToAPIConverter`
        and :class:`~specimport.converter.oai.OAIToAPIConverter`.
    """

    name: str
    version: str
    description: str
    context_path: str = "/"
    endpoints: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    paths: dict[str, PathEntity] = Field(default_factory=dict)
    path_mappings: list[str] = Field(default_factory=list)

    def policy_names(self) -> set[str]:
        """Return every policy name contributed to any operation."""
        return {
            name
            for path in self.paths.values()
            for operation in path.operations.values()
            for name in operation.policies
        }


# --- Configuration ---


class ImportConfig(BaseModel):
    """Settings injected into the import service at construction.

    Loaded by :func:`~specimport.config.load_import_config`.
    """

    default_scheme: str = Field(
        default="https", description="Scheme used when a document declares none"
    )
    import_allowlist: list[str] = Field(
        default_factory=list,
        description="Hosts or URL prefixes descriptors may be fetched from (empty allows all)",
    )
    allow_import_from_private: bool = Field(
        default=False, description="Allow fetching from private or loopback addresses"
    )
    fetch_timeout: float = Field(default=30.0, description="URL fetch timeout in seconds")
