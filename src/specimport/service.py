"""Import service -- the orchestration entry point of the package.

:class:`DescriptorImportService` ties the pipeline together::

    payload -> ParserChain -> Descriptor -> [transformers] -> converter -> SwaggerApiEntity

Its collaborators are injected at construction: the policy visitor registry,
the import configuration, the URL-safety checker, the HTTP client used for URL
payloads, and the logger. A service holds no per-call state, so one instance
may serve concurrent imports.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx
import yaml

from specimport.converter import CONVERTERS
from specimport.descriptors import Descriptor
from specimport.exceptions import DescriptorConversionError
from specimport.models import (
    ImportConfig,
    ImportFormat,
    ImportRequest,
    SourceKind,
    SwaggerApiEntity,
)
from specimport.parser.chain import ParserChain
from specimport.security import UrlChecker
from specimport.transformers import DescriptorTransformer
from specimport.transformers import transform as run_transformers
from specimport.visitors.registry import PolicyVisitorRegistry, default_registry


class DescriptorImportService:
    """Parse, transform and convert API descriptors.

    Args:
        registry: Policy visitor catalog; defaults to
            :func:`~specimport.visitors.registry.default_registry`.
        config: Import settings; defaults to :class:`~specimport.models.ImportConfig`.
        url_checker: URL-safety collaborator passed to the parser chain.
        client: ``httpx.Client`` used to fetch URL payloads.
        logger: Log sink for the whole pipeline.

    Example::

        service = DescriptorImportService(config=load_import_config())
        entity = service.create_api(ImportRequest(payload=text, with_policies=["mock"]))
    """

    def __init__(
        self,
        registry: Optional[PolicyVisitorRegistry] = None,
        config: Optional[ImportConfig] = None,
        url_checker: Optional[UrlChecker] = None,
        client: Optional[httpx.Client] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._config = config or ImportConfig()
        self._logger = logger or logging.getLogger(__name__)
        self._chain = ParserChain(
            config=self._config,
            url_checker=url_checker,
            client=client,
            logger=self._logger,
        )

    @property
    def registry(self) -> PolicyVisitorRegistry:
        return self._registry

    def parse(self, content: str, wsdl: bool = False) -> Descriptor:
        """Detect and parse *content* (inline text or URL).

        Raises:
            SecurityError: If a URL payload is rejected.
            DescriptorParseError: If no parser recognised the content.
        """
        return self._chain.resolve(content, wsdl)

    def transform(
        self,
        descriptor: Descriptor,
        transformers: Optional[Iterable[DescriptorTransformer]],
    ) -> None:
        """Apply *transformers* to *descriptor* in place, in order."""
        run_transformers(descriptor, transformers)

    def create_api(
        self,
        request: ImportRequest,
        transformers: Optional[Iterable[DescriptorTransformer]] = None,
    ) -> SwaggerApiEntity:
        """Import *request* into a :class:`~specimport.models.SwaggerApiEntity`.

        A WSDL import overwrites ``request.payload`` with the YAML of the
        generated OpenAPI document and sets ``request.type`` to ``INLINE``.
        That step is best effort: if serialization fails, the original
        payload is kept and the import still succeeds.

        Args:
            request: The import instruction. ``request.with_policies`` of
                ``None`` applies no policies.
            transformers: Optional transformers applied before conversion.

        Raises:
            SecurityError: If a URL payload is rejected.
            DescriptorParseError: If no parser recognised the payload.
            DescriptorConversionError: If the descriptor cannot be converted.
        """
        wsdl = request.format == ImportFormat.WSDL
        descriptor = self.parse(request.payload, wsdl)

        if wsdl:
            self._override_payload(request, descriptor)

        self.transform(descriptor, transformers)

        converter_cls = CONVERTERS.get(descriptor.version)
        if converter_cls is None:
            raise DescriptorConversionError(
                f"No converter for descriptor version {descriptor.version!r}"
            )

        visitors = self._registry.resolve(request.with_policies, descriptor.version)
        converter = converter_cls(
            visitors,
            default_scheme=self._config.default_scheme,
            with_path_mapping=request.with_path_mapping,
        )
        return converter.convert(descriptor)

    def _override_payload(self, request: ImportRequest, descriptor: Descriptor) -> None:
        """Replace a WSDL payload with the generated OpenAPI document."""
        try:
            payload = descriptor.to_yaml()
        except (yaml.YAMLError, TypeError, ValueError) as exc:
            self._logger.warning(
                "SerializationWarning: unable to serialize the WSDL descriptor, "
                "keeping the original payload: %s",
                exc,
            )
            return
        request.payload = payload
        request.type = SourceKind.INLINE
