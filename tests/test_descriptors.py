"""Tests for specimport.descriptors."""

from __future__ import annotations

import json

import yaml

from specimport.descriptors import (
    OAIDescriptor,
    SwaggerV1Descriptor,
    SwaggerV2Descriptor,
    Version,
)


class TestVersionTag:
    def test_each_variant_is_tagged(self) -> None:
        assert SwaggerV1Descriptor({}).version is Version.SWAGGER_V1
        assert SwaggerV2Descriptor({}).version is Version.SWAGGER_V2
        assert OAIDescriptor({}).version is Version.OAI_V3

    def test_repr(self) -> None:
        assert repr(OAIDescriptor({})) == "OAIDescriptor(version=OAI_V3)"


class TestSerialization:
    def test_to_json(self, swagger_v2_descriptor: SwaggerV2Descriptor) -> None:
        assert json.loads(swagger_v2_descriptor.to_json()) == swagger_v2_descriptor.specification

    def test_to_yaml_keeps_key_order(self) -> None:
        descriptor = OAIDescriptor(
            {"openapi": "3.0.1", "info": {"title": "Ünïcode", "version": "1"}, "paths": {}}
        )
        text = descriptor.to_yaml()
        assert text.splitlines()[0].startswith("openapi:")
        assert "Ünïcode" in text
        assert yaml.safe_load(text) == descriptor.specification

    def test_specification_is_shared(self) -> None:
        document = {"swagger": "2.0"}
        descriptor = SwaggerV2Descriptor(document)
        descriptor.specification["host"] = "api.example.com"
        assert document["host"] == "api.example.com"
