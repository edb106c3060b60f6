"""Descriptor converters -- build the canonical API entity.

* :class:`SwaggerV2ToAPIConverter` handles ``SWAGGER_V1`` and ``SWAGGER_V2``.
* :class:`OAIToAPIConverter` handles ``OAI_V3``.

:data:`CONVERTERS` maps every :class:`~specimport.models.Version` to the
converter class for its family; the import service dispatches through it.
"""

from specimport.converter.base import DescriptorConverter, to_gateway_path
from specimport.converter.oai import OAIToAPIConverter
from specimport.converter.swagger_v2 import SwaggerV2ToAPIConverter
from specimport.models import Version

CONVERTERS: dict[Version, type[DescriptorConverter]] = {
    Version.SWAGGER_V1: SwaggerV2ToAPIConverter,
    Version.SWAGGER_V2: SwaggerV2ToAPIConverter,
    Version.OAI_V3: OAIToAPIConverter,
}

__all__ = [
    "CONVERTERS",
    "DescriptorConverter",
    "OAIToAPIConverter",
    "SwaggerV2ToAPIConverter",
    "to_gateway_path",
]
