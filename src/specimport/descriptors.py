"""Version-tagged wrappers around successfully parsed API documents.

A descriptor owns exactly one native document (the decoded mapping produced
by a format parser), exposes its :class:`~specimport.models.Version`, and can
serialize itself back to JSON or YAML. Descriptors are created by
:class:`~specimport.parser.chain.ParserChain`, optionally mutated in place by
transformers, and consumed by a converter.

Variants:

* :class:`SwaggerV1Descriptor` -- a Swagger 1.x document, already
  up-converted to the Swagger 2 layout by the Swagger 1 parser.
* :class:`SwaggerV2Descriptor` -- a Swagger 2.x document.
* :class:`OAIDescriptor` -- an OpenAPI 3.x document, including the OpenAPI
  projection of a WSDL document.
"""

from __future__ import annotations

import json
from abc import ABC
from typing import Any, ClassVar

import yaml

from specimport.models import Version

__all__ = [
    "Descriptor",
    "OAIDescriptor",
    "SwaggerV1Descriptor",
    "SwaggerV2Descriptor",
    "Version",
]


class Descriptor(ABC):
    """Base class for all descriptor variants.

    Subclasses pin :attr:`version` with the ``VERSION`` class attribute; the
    tag cannot change after construction.

    Args:
        specification: The parsed native document.
    """

    VERSION: ClassVar[Version]

    def __init__(self, specification: dict[str, Any]) -> None:
        self._specification = specification

    @property
    def version(self) -> Version:
        return self.VERSION

    @property
    def specification(self) -> dict[str, Any]:
        """The wrapped native document. Transformers mutate it in place."""
        return self._specification

    def to_json(self) -> str:
        """Serialize the document to indented JSON.

        Raises:
            TypeError: If the document holds values JSON cannot represent.
            ValueError: If the document contains circular references.
        """
        return json.dumps(self._specification, indent=2)

    def to_yaml(self) -> str:
        """Serialize the document to block-style YAML, keeping key order.

        Raises:
            yaml.YAMLError: If the document holds values YAML cannot represent.
        """
        return yaml.safe_dump(
            self._specification,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.VERSION.value})"


class SwaggerV1Descriptor(Descriptor):
    """A Swagger 1.x document, held in the Swagger 2 layout."""

    VERSION = Version.SWAGGER_V1


class SwaggerV2Descriptor(Descriptor):
    """A Swagger 2.x document."""

    VERSION = Version.SWAGGER_V2


class OAIDescriptor(Descriptor):
    """An OpenAPI 3.x document."""

    VERSION = Version.OAI_V3
