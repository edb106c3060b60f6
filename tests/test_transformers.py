"""Tests for specimport.transformers."""

from __future__ import annotations

import pytest

from specimport.descriptors import Descriptor, OAIDescriptor, SwaggerV2Descriptor
from specimport.exceptions import TransformError
from specimport.models import Version
from specimport.transformers import DescriptorTransformer, EntrypointsTransformer, transform


class AppendTransformer(DescriptorTransformer):
    """Records its label into ``x-applied``."""

    def __init__(self, label: str) -> None:
        self.label = label

    def apply(self, descriptor: Descriptor) -> None:
        descriptor.specification.setdefault("x-applied", []).append(self.label)


class SwaggerOnlyTransformer(AppendTransformer):
    VERSIONS = frozenset({Version.SWAGGER_V1, Version.SWAGGER_V2})


class TestTransform:
    def test_none_is_noop(self) -> None:
        descriptor = OAIDescriptor({"openapi": "3.0.0"})
        transform(descriptor, None)
        transform(descriptor, [])
        assert descriptor.specification == {"openapi": "3.0.0"}

    def test_runs_in_order(self) -> None:
        descriptor = OAIDescriptor({"openapi": "3.0.0"})
        transform(descriptor, [AppendTransformer("a"), AppendTransformer("b")])
        assert descriptor.specification["x-applied"] == ["a", "b"]

    def test_unsupported_version_aborts(self) -> None:
        descriptor = OAIDescriptor({"openapi": "3.0.0"})
        with pytest.raises(TransformError, match="cannot transform a OAI_V3"):
            transform(
                descriptor,
                [AppendTransformer("a"), SwaggerOnlyTransformer("b"), AppendTransformer("c")],
            )
        assert descriptor.specification["x-applied"] == ["a"]


class TestEntrypointsTransformer:
    def test_openapi_servers(self) -> None:
        descriptor = OAIDescriptor({"openapi": "3.0.0", "servers": [{"url": "https://backend"}]})
        EntrypointsTransformer(
            ["https://gw.example.com/pets", "http://gw.internal/pets"]
        ).transform(descriptor)
        assert descriptor.specification["servers"] == [
            {"url": "https://gw.example.com/pets"},
            {"url": "http://gw.internal/pets"},
        ]

    def test_swagger_host(self) -> None:
        descriptor = SwaggerV2Descriptor(
            {"swagger": "2.0", "host": "backend:8080", "basePath": "/v2", "schemes": ["http"]}
        )
        EntrypointsTransformer(["https://gw.example.com/pets"]).transform(descriptor)
        assert descriptor.specification["host"] == "gw.example.com"
        assert descriptor.specification["basePath"] == "/pets"
        assert descriptor.specification["schemes"] == ["https"]

    def test_empty_entrypoints(self) -> None:
        descriptor = SwaggerV2Descriptor({"swagger": "2.0", "host": "backend"})
        EntrypointsTransformer(["", ""]).transform(descriptor)
        assert descriptor.specification == {"swagger": "2.0", "host": "backend"}
