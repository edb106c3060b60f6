"""Descriptor transformers -- post-parse, pre-conversion mutations.

A :class:`DescriptorTransformer` declares which descriptor versions it
handles and mutates the wrapped document in place. :func:`transform` runs a
list of transformers in order; the first failure propagates and aborts the
import.

Built-in transformers:

* :class:`EntrypointsTransformer` -- point the document's servers (or
  ``host``/``basePath``/``schemes``) at the gateway entrypoints, so that the
  published descriptor documents the gateway rather than the backend.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Iterable, Optional
from urllib.parse import urlparse

from specimport.descriptors import Descriptor
from specimport.exceptions import TransformError
from specimport.models import Version

logger = logging.getLogger(__name__)


class DescriptorTransformer(ABC):
    """Base class for in-place descriptor mutations.

    Subclasses list the versions they handle in ``VERSIONS`` and implement
    :meth:`apply`.
    """

    VERSIONS: ClassVar[frozenset[Version]] = frozenset(Version)

    def handles(self, descriptor: Descriptor) -> bool:
        return descriptor.version in self.VERSIONS

    def transform(self, descriptor: Descriptor) -> None:
        """Apply this transformer to *descriptor*.

        Raises:
            TransformError: If *descriptor*'s version is not handled.
        """
        if not self.handles(descriptor):
            raise TransformError(
                f"{type(self).__name__} cannot transform a {descriptor.version.value} descriptor"
            )
        self.apply(descriptor)

    @abstractmethod
    def apply(self, descriptor: Descriptor) -> None:
        """Mutate ``descriptor.specification`` in place."""
        ...


def transform(
    descriptor: Descriptor,
    transformers: Optional[Iterable[DescriptorTransformer]],
) -> None:
    """Run *transformers* on *descriptor* in order.

    ``None`` or an empty iterable is a no-op. Exceptions raised by a
    transformer propagate immediately; no later transformer runs.
    """
    if not transformers:
        return
    for transformer in transformers:
        logger.debug("Applying %s to %r", type(transformer).__name__, descriptor)
        transformer.transform(descriptor)


class EntrypointsTransformer(DescriptorTransformer):
    """Rewrite the declared base URLs to the gateway entrypoints.

    OpenAPI documents get one ``servers`` entry per entrypoint. Swagger
    documents can only declare one host, so ``host``, ``basePath`` and
    ``schemes`` come from the first entrypoint.

    Args:
        entrypoints: Absolute gateway URLs, e.g.
            ``["https://gateway.example.com/petstore"]``.
    """

    def __init__(self, entrypoints: Iterable[str]) -> None:
        self._entrypoints = [entrypoint for entrypoint in entrypoints if entrypoint]

    def apply(self, descriptor: Descriptor) -> None:
        if not self._entrypoints:
            return

        document = descriptor.specification
        if descriptor.version is Version.OAI_V3:
            document["servers"] = [{"url": entrypoint} for entrypoint in self._entrypoints]
            return

        parsed = urlparse(self._entrypoints[0])
        if parsed.netloc:
            document["host"] = parsed.netloc
        if parsed.scheme:
            document["schemes"] = [parsed.scheme]
        document["basePath"] = parsed.path or "/"
