"""Convert OpenAPI 3 descriptors, including WSDL projections."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlparse

from specimport.converter.base import BaseUrl, DescriptorConverter
from specimport.models import Version

_SERVER_VARIABLE = re.compile(r"\{([^{}]+)\}")


def expand_server_url(server: dict[str, Any]) -> str:
    """Substitute server variables with their declared defaults.

    Variables without a default are left in place.
    """
    url = str(server.get("url") or "")
    variables = server.get("variables")
    if not isinstance(variables, dict):
        variables = {}

    def _substitute(match: re.Match[str]) -> str:
        variable = variables.get(match.group(1))
        if isinstance(variable, dict) and "default" in variable:
            return str(variable["default"])
        return match.group(0)

    return _SERVER_VARIABLE.sub(_substitute, url)


class OAIToAPIConverter(DescriptorConverter):
    """Converter for OpenAPI 3 documents.

    The base URL comes from the first entry of ``servers``. A server URL
    without a scheme takes the configured default scheme; a relative server
    URL (``/v1``) yields an empty host.
    """

    VERSIONS = frozenset({Version.OAI_V3})

    def _server_urls(self, document: dict[str, Any]) -> list[str]:
        return [
            expand_server_url(server)
            for server in document.get("servers") or []
            if isinstance(server, dict) and server.get("url")
        ]

    def base_url(self, document: dict[str, Any]) -> BaseUrl:
        urls = self._server_urls(document)
        if not urls:
            return BaseUrl(scheme=self._default_scheme, host="", base_path="/")

        parsed = urlparse(urls[0])
        return BaseUrl(
            scheme=parsed.scheme or self._default_scheme,
            host=parsed.netloc,
            base_path=parsed.path or "/",
        )

    def endpoints(self, document: dict[str, Any]) -> list[str]:
        endpoints: list[str] = []
        for url in self._server_urls(document):
            parsed = urlparse(url)
            if not parsed.netloc:
                continue
            if not parsed.scheme:
                url = f"{self._default_scheme}:{url}"
            endpoints.append(url)
        return endpoints

    def parameter_schema(self, param: dict[str, Any]) -> dict[str, Any]:
        schema = param.get("schema")
        if isinstance(schema, dict):
            return schema
        # Parameters described through ``content`` carry the schema one level down
        content = param.get("content")
        for media in content.values() if isinstance(content, dict) else []:
            if isinstance(media, dict) and isinstance(media.get("schema"), dict):
                return media["schema"]
        return {}
