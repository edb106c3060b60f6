"""Shared test fixtures for specimport.

Provides raw descriptor fixtures loaded from ``tests/fixtures``, parsed
descriptors, a registry holding the built-in visitors, and a service wired
with a permissive URL checker so that no test touches DNS.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from specimport.descriptors import OAIDescriptor, SwaggerV2Descriptor
from specimport.models import ImportConfig
from specimport.parser.oai import OAIParser
from specimport.parser.swagger_v2 import SwaggerV2Parser
from specimport.service import DescriptorImportService
from specimport.visitors.registry import PolicyVisitorRegistry, default_registry


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Raw descriptor fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def swagger_v2_text() -> str:
    """Petstore Swagger 2.0 document (JSON)."""
    return read_fixture("petstore_swagger2.json")


@pytest.fixture
def oai_text() -> str:
    """Petstore OpenAPI 3.0 document (YAML)."""
    return read_fixture("petstore_oai3.yaml")


@pytest.fixture
def swagger_v1_text() -> str:
    """Petstore Swagger 1.2 API declaration (JSON)."""
    return read_fixture("petstore_swagger12.json")


@pytest.fixture
def wsdl_text() -> str:
    """StockQuote WSDL 1.1 document with SOAP 1.1 and 1.2 bindings."""
    return read_fixture("stockquote.wsdl")


# ---------------------------------------------------------------------------
# Parsed descriptor fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def swagger_v2_descriptor(swagger_v2_text: str) -> SwaggerV2Descriptor:
    document = SwaggerV2Parser().parse(swagger_v2_text)
    assert document is not None
    return SwaggerV2Descriptor(document)


@pytest.fixture
def oai_descriptor(oai_text: str) -> OAIDescriptor:
    document = OAIParser().parse(oai_text)
    assert document is not None
    return OAIDescriptor(document)


# ---------------------------------------------------------------------------
# Service fixtures
# ---------------------------------------------------------------------------


def allow_all(url: str, allowlist: Sequence[str], allow_private: bool) -> None:
    """URL checker accepting every URL."""


@pytest.fixture
def registry() -> PolicyVisitorRegistry:
    """A sealed registry holding only the built-in visitors."""
    return default_registry(discover=False)


@pytest.fixture
def service(registry: PolicyVisitorRegistry) -> DescriptorImportService:
    """An import service with the built-in visitors and ``http`` as default scheme."""
    return DescriptorImportService(
        registry=registry,
        config=ImportConfig(default_scheme="http"),
        url_checker=allow_all,
    )
