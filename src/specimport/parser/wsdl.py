"""WSDL 1.1 parser projecting SOAP services onto an OpenAPI 3 document.

WSDL has no dedicated internal model: the parsed service is expressed as an
OpenAPI 3 document so that the OpenAPI converter and visitors apply to it.
The projection is:

* ``info.title`` -- the first ``wsdl:service`` name (else the
  ``definitions`` name).
* ``servers`` -- one entry per ``soap:address`` / ``soap12:address``.
* ``paths`` -- one ``POST /{operation}`` per binding operation. When several
  bindings (SOAP 1.1 and 1.2, typically) declare the same operation, the
  first one wins.
* Operation extensions ``x-soap-action``, ``x-soap-version`` and
  ``x-soap-envelope`` (an envelope skeleton for the input message) feed the
  ``rest-to-soap`` policy visitor.

XML is parsed with ``defusedxml`` so that entity expansion and external
entity tricks in untrusted WSDL are rejected.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from specimport.parser.base import DescriptorParser

logger = logging.getLogger(__name__)

WSDL_NS = "http://schemas.xmlsoap.org/wsdl/"
SOAP11_NS = "http://schemas.xmlsoap.org/wsdl/soap/"
SOAP12_NS = "http://schemas.xmlsoap.org/wsdl/soap12/"

SOAP11_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP12_ENVELOPE_NS = "http://www.w3.org/2003/05/soap-envelope"

_NS = {"wsdl": WSDL_NS, "soap": SOAP11_NS, "soap12": SOAP12_NS}

OPENAPI_VERSION = "3.0.1"


class WsdlParser(DescriptorParser):
    """Recognise WSDL 1.1 documents and project them onto OpenAPI 3."""

    @property
    def name(self) -> str:
        return "WSDL"

    def parse(self, content: str) -> Optional[dict[str, Any]]:
        try:
            root = ET.fromstring(content.strip())
        except (ET.ParseError, DefusedXmlException, ValueError) as exc:
            logger.debug("Content is not well-formed XML: %s", exc)
            return None

        if root.tag != f"{{{WSDL_NS}}}definitions":
            logger.debug("XML root %s is not a WSDL definitions element", root.tag)
            return None

        return _WsdlProjection(root).to_openapi()


def _local(qname: Optional[str]) -> str:
    """Strip the namespace prefix from a ``prefix:name`` attribute value."""
    if not qname:
        return ""
    return qname.rsplit(":", 1)[-1]


def _documentation(element: Element) -> Optional[str]:
    doc = element.find("wsdl:documentation", _NS)
    if doc is None or not doc.text or not doc.text.strip():
        return None
    return doc.text.strip()


class _WsdlProjection:
    """Walks one ``wsdl:definitions`` element and builds the OpenAPI document."""

    def __init__(self, root: Element) -> None:
        self._root = root
        self._target_ns = root.get("targetNamespace", "")
        self._messages = {
            message.get("name"): message for message in root.findall("wsdl:message", _NS)
        }
        self._port_types = {
            port_type.get("name"): port_type for port_type in root.findall("wsdl:portType", _NS)
        }
        self._bindings = {
            binding.get("name"): binding for binding in root.findall("wsdl:binding", _NS)
        }

    def to_openapi(self) -> dict[str, Any]:
        services = self._root.findall("wsdl:service", _NS)

        title = (
            (services[0].get("name") if services else None)
            or self._root.get("name")
            or "WSDL Service"
        )
        info: dict[str, Any] = {"title": title, "version": "1.0.0"}
        description = _documentation(services[0]) if services else None
        description = description or _documentation(self._root)
        if description:
            info["description"] = description

        servers: list[dict[str, Any]] = []
        binding_names: list[str] = []
        for service in services:
            for port in service.findall("wsdl:port", _NS):
                binding_name = _local(port.get("binding"))
                if binding_name and binding_name not in binding_names:
                    binding_names.append(binding_name)
                location = self._address(port)
                if location and all(server["url"] != location for server in servers):
                    servers.append({"url": location})

        # Without services, fall back to every SOAP binding in declaration order
        if not binding_names:
            binding_names = list(self._bindings)

        paths: dict[str, Any] = {}
        for binding_name in binding_names:
            binding = self._bindings.get(binding_name)
            if binding is None:
                continue
            soap_version = self._soap_version(binding)
            if soap_version is None:
                continue
            for operation in binding.findall("wsdl:operation", _NS):
                name = operation.get("name")
                if not name or f"/{name}" in paths:
                    continue
                paths[f"/{name}"] = {
                    "post": self._operation(binding, operation, soap_version),
                }

        document: dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": info}
        if servers:
            document["servers"] = servers
        document["paths"] = paths
        return document

    def _address(self, port: Element) -> Optional[str]:
        for prefix in ("soap", "soap12"):
            address = port.find(f"{prefix}:address", _NS)
            if address is not None and address.get("location"):
                return address.get("location")
        return None

    def _soap_version(self, binding: Element) -> Optional[str]:
        if binding.find("soap:binding", _NS) is not None:
            return "1.1"
        if binding.find("soap12:binding", _NS) is not None:
            return "1.2"
        return None

    def _operation(self, binding: Element, operation: Element, soap_version: str) -> dict[str, Any]:
        name = operation.get("name", "")
        prefix = "soap" if soap_version == "1.1" else "soap12"
        soap_operation = operation.find(f"{prefix}:operation", _NS)
        soap_action = soap_operation.get("soapAction", "") if soap_operation is not None else ""

        abstract = self._abstract_operation(binding, name)
        result: dict[str, Any] = {"operationId": name}
        summary = _documentation(abstract) if abstract is not None else None
        if summary:
            result["summary"] = summary

        result["requestBody"] = {
            "content": {"text/xml": {"schema": {"type": "string"}}},
        }
        result["responses"] = {
            "200": {
                "description": "SOAP response",
                "content": {"text/xml": {"schema": {"type": "string"}}},
            }
        }
        result["x-soap-version"] = soap_version
        result["x-soap-action"] = soap_action
        result["x-soap-envelope"] = self._envelope(abstract, name, soap_version)
        return result

    def _abstract_operation(self, binding: Element, name: str) -> Optional[Element]:
        port_type = self._port_types.get(_local(binding.get("type")))
        if port_type is None:
            return None
        for operation in port_type.findall("wsdl:operation", _NS):
            if operation.get("name") == name:
                return operation
        return None

    def _envelope(self, abstract: Optional[Element], name: str, soap_version: str) -> str:
        envelope_ns = SOAP11_ENVELOPE_NS if soap_version == "1.1" else SOAP12_ENVELOPE_NS

        body_elements = []
        if abstract is not None:
            input_element = abstract.find("wsdl:input", _NS)
            message = (
                self._messages.get(_local(input_element.get("message")))
                if input_element is not None
                else None
            )
            if message is not None:
                for part in message.findall("wsdl:part", _NS):
                    body_elements.append(_local(part.get("element")) or part.get("name", ""))
        if not body_elements:
            body_elements.append(name)

        body = "\n".join(f"      <tns:{element}/>" for element in body_elements if element)
        return (
            f'<soapenv:Envelope xmlns:soapenv="{envelope_ns}" xmlns:tns="{self._target_ns}">\n'
            "   <soapenv:Header/>\n"
            "   <soapenv:Body>\n"
            f"{body}\n"
            "   </soapenv:Body>\n"
            "</soapenv:Envelope>"
        )
