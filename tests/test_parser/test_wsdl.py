"""Tests for specimport.parser.wsdl."""

from __future__ import annotations

from typing import Any

import pytest

from specimport.parser.wsdl import SOAP11_ENVELOPE_NS, WsdlParser


@pytest.fixture
def document(wsdl_text: str) -> dict[str, Any]:
    result = WsdlParser().parse(wsdl_text)
    assert result is not None
    return result


class TestDetection:
    def test_rejects_json(self, swagger_v2_text: str) -> None:
        assert WsdlParser().parse(swagger_v2_text) is None

    def test_rejects_other_xml(self) -> None:
        assert WsdlParser().parse("<project><name>x</name></project>") is None

    def test_rejects_malformed_xml(self) -> None:
        assert WsdlParser().parse("<wsdl:definitions") is None

    def test_rejects_entity_declarations(self) -> None:
        bomb = (
            '<?xml version="1.0"?>\n'
            '<!DOCTYPE lolz [<!ENTITY lol "lol"><!ENTITY lol2 "&lol;&lol;">]>\n'
            '<definitions xmlns="http://schemas.xmlsoap.org/wsdl/">&lol2;</definitions>'
        )
        assert WsdlParser().parse(bomb) is None


class TestProjection:
    def test_info(self, document: dict[str, Any]) -> None:
        assert document["openapi"].startswith("3")
        assert document["info"] == {
            "title": "StockQuoteService",
            "version": "1.0.0",
            "description": "My first service",
        }

    def test_servers(self, document: dict[str, Any]) -> None:
        assert document["servers"] == [
            {"url": "http://stock.example.com/stockquote"},
            {"url": "http://stock.example.com/stockquote12"},
        ]

    def test_one_post_per_operation(self, document: dict[str, Any]) -> None:
        assert list(document["paths"]) == ["/GetLastTradePrice", "/GetCompany"]
        for path_item in document["paths"].values():
            assert list(path_item) == ["post"]

    def test_first_binding_wins(self, document: dict[str, Any]) -> None:
        operation = document["paths"]["/GetLastTradePrice"]["post"]
        assert operation["x-soap-version"] == "1.1"
        assert operation["x-soap-action"] == "http://example.com/GetLastTradePrice"

    def test_operation_fields(self, document: dict[str, Any]) -> None:
        operation = document["paths"]["/GetLastTradePrice"]["post"]
        assert operation["operationId"] == "GetLastTradePrice"
        assert operation["summary"] == "Returns the last trade price of a symbol"
        assert "text/xml" in operation["requestBody"]["content"]
        assert "200" in operation["responses"]

    def test_envelope_from_element_part(self, document: dict[str, Any]) -> None:
        envelope = document["paths"]["/GetLastTradePrice"]["post"]["x-soap-envelope"]
        assert envelope.startswith(
            f'<soapenv:Envelope xmlns:soapenv="{SOAP11_ENVELOPE_NS}" '
            'xmlns:tns="http://example.com/stockquote.wsdl">'
        )
        assert "<soapenv:Header/>" in envelope
        assert "<tns:TradePriceRequest/>" in envelope
        assert envelope.endswith("</soapenv:Envelope>")

    def test_envelope_from_type_part(self, document: dict[str, Any]) -> None:
        envelope = document["paths"]["/GetCompany"]["post"]["x-soap-envelope"]
        assert "<tns:symbol/>" in envelope
        assert "summary" not in document["paths"]["/GetCompany"]["post"]


class TestWithoutServices:
    WSDL = """<?xml version="1.0"?>
<definitions name="Bare" targetNamespace="urn:bare"
    xmlns="http://schemas.xmlsoap.org/wsdl/"
    xmlns:tns="urn:bare"
    xmlns:soap12="http://schemas.xmlsoap.org/wsdl/soap12/">
  <portType name="BarePort">
    <operation name="Ping"/>
  </portType>
  <binding name="BareBinding" type="tns:BarePort">
    <soap12:binding transport="http://schemas.xmlsoap.org/soap/http"/>
    <operation name="Ping">
      <soap12:operation soapAction="urn:ping"/>
    </operation>
  </binding>
</definitions>
"""

    def test_falls_back_to_bindings(self) -> None:
        document = WsdlParser().parse(self.WSDL)
        assert document is not None
        assert document["info"]["title"] == "Bare"
        assert "servers" not in document

        operation = document["paths"]["/Ping"]["post"]
        assert operation["x-soap-version"] == "1.2"
        assert operation["x-soap-action"] == "urn:ping"
        assert "<tns:Ping/>" in operation["x-soap-envelope"]
        assert "http://www.w3.org/2003/05/soap-envelope" in operation["x-soap-envelope"]
