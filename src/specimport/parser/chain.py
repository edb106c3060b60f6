"""Ordered fallback chain that detects a descriptor's format.

:class:`ParserChain` tries format parsers in a fixed priority order and wraps
the first native document it gets in the matching
:class:`~specimport.descriptors.Descriptor`:

* REST formats: Swagger 2, then OpenAPI 3, then Swagger 1. Format grammars
  overlap, so the most common and most specific formats go first.
* WSDL: only when explicitly requested, and then no REST parser runs. The
  result is an :class:`~specimport.descriptors.OAIDescriptor`.

A URL payload is vetted by the URL-safety collaborator and fetched once
before any parser sees it; every redirect target is vetted the same way.
JSON and YAML payloads are decoded once and shared by the REST parsers.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from specimport.descriptors import (
    Descriptor,
    OAIDescriptor,
    SwaggerV1Descriptor,
    SwaggerV2Descriptor,
)
from specimport.exceptions import DescriptorParseError
from specimport.models import ImportConfig
from specimport.parser.base import DescriptorParser, DocumentParser
from specimport.parser.loader import fetch_url, is_url, parse_content
from specimport.parser.oai import OAIParser
from specimport.parser.swagger_v1 import SwaggerV1Parser
from specimport.parser.swagger_v2 import SwaggerV2Parser
from specimport.parser.wsdl import WsdlParser
from specimport.security import UrlChecker, check_allowed

ParserStep = tuple[DescriptorParser, type[Descriptor]]


def default_rest_parsers() -> list[ParserStep]:
    """The auto-detection order for REST descriptors."""
    return [
        (SwaggerV2Parser(), SwaggerV2Descriptor),
        (OAIParser(), OAIDescriptor),
        (SwaggerV1Parser(), SwaggerV1Descriptor),
    ]


class ParserChain:
    """Resolve raw descriptor content into a version-tagged descriptor.

    Args:
        config: Import settings (allowlist, private-network flag, fetch
            timeout).
        url_checker: URL-safety collaborator; defaults to
            :func:`~specimport.security.check_allowed`.
        client: Optional ``httpx.Client`` used to fetch URL payloads.
        rest_parsers: Override of the REST auto-detection order.
        wsdl_parser: Override of the WSDL parser.
        logger: Log sink; defaults to this module's logger.

    Example::

        chain = ParserChain(ImportConfig())
        descriptor = chain.resolve(text)
        print(descriptor.version)
    """

    def __init__(
        self,
        config: Optional[ImportConfig] = None,
        url_checker: Optional[UrlChecker] = None,
        client: Optional[httpx.Client] = None,
        rest_parsers: Optional[Sequence[ParserStep]] = None,
        wsdl_parser: Optional[DescriptorParser] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or ImportConfig()
        self._url_checker = url_checker or check_allowed
        self._client = client
        self._rest_parsers = list(rest_parsers) if rest_parsers is not None else default_rest_parsers()
        self._wsdl_parser = wsdl_parser or WsdlParser()
        self._logger = logger or logging.getLogger(__name__)

    def resolve(self, content: str, wsdl: bool = False) -> Descriptor:
        """Detect the format of *content* and wrap the parsed document.

        Args:
            content: Inline descriptor text, or a URL pointing to it.
            wsdl: Parse as WSDL only.

        Returns:
            The descriptor produced by the first parser that recognised the
            content.

        Raises:
            SecurityError: If *content* is a URL, or redirects to a URL,
                rejected by the URL checker.
            DescriptorParseError: If the URL cannot be fetched or no parser
                recognised the content.
        """
        if is_url(content):
            url = content.strip()
            self._check_url(url)
            self._logger.debug("Fetching descriptor from %s", url)
            content = fetch_url(
                url,
                self._client,
                self._config.fetch_timeout,
                check_redirect=self._check_url,
            )

        steps: list[ParserStep]
        if wsdl:
            steps = [(self._wsdl_parser, OAIDescriptor)]
        else:
            steps = self._rest_parsers

        decoded = _DecodedContent(content)
        for parser, wrapper in steps:
            self._logger.debug("Trying to load a %s descriptor", parser.name)
            if isinstance(parser, DocumentParser):
                raw = decoded.document()
                document = parser.parse_document(raw) if raw is not None else None
            else:
                document = parser.parse(content)
            if document is not None:
                self._logger.debug("Loaded a %s descriptor", parser.name)
                return wrapper(document)

        raise DescriptorParseError()

    def _check_url(self, url: str) -> None:
        self._url_checker(
            url,
            self._config.import_allowlist,
            self._config.allow_import_from_private,
        )


class _DecodedContent:
    """Decodes the payload as JSON or YAML at most once per resolution."""

    def __init__(self, content: str) -> None:
        self._content = content
        self._decoded = False
        self._document: Optional[dict[str, Any]] = None

    def document(self) -> Optional[dict[str, Any]]:
        if not self._decoded:
            self._document = parse_content(self._content)
            self._decoded = True
        return self._document
