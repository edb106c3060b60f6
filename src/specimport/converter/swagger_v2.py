"""Convert Swagger 2 (and up-converted Swagger 1) descriptors."""

from __future__ import annotations

from typing import Any

from specimport.converter.base import BaseUrl, DescriptorConverter, as_list
from specimport.models import Version


class SwaggerV2ToAPIConverter(DescriptorConverter):
    """Converter for the Swagger version family.

    The base URL comes from ``schemes``, ``host`` and ``basePath``; the first
    declared scheme wins and the configured default scheme applies when none
    is declared.
    """

    VERSIONS = frozenset({Version.SWAGGER_V1, Version.SWAGGER_V2})

    def _schemes(self, document: dict[str, Any]) -> list[str]:
        schemes = [str(scheme) for scheme in as_list(document.get("schemes")) if scheme]
        return schemes or [self._default_scheme]

    def base_url(self, document: dict[str, Any]) -> BaseUrl:
        return BaseUrl(
            scheme=self._schemes(document)[0],
            host=str(document.get("host") or ""),
            base_path=str(document.get("basePath") or "/"),
        )

    def endpoints(self, document: dict[str, Any]) -> list[str]:
        host = document.get("host")
        if not host:
            return []
        base_path = str(document.get("basePath") or "/")
        return [f"{scheme}://{host}{base_path}" for scheme in self._schemes(document)]

    def parameter_schema(self, param: dict[str, Any]) -> dict[str, Any]:
        # Body parameters carry a schema; the others describe their type inline
        if param.get("in") == "body":
            schema = param.get("schema")
            return schema if isinstance(schema, dict) else {}
        return param
