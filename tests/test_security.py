"""Tests for specimport.security."""

from __future__ import annotations

import ipaddress

import pytest

from specimport import security
from specimport.exceptions import SecurityError
from specimport.security import check_allowed


@pytest.fixture
def resolve_to(monkeypatch: pytest.MonkeyPatch):
    """Make hostname resolution return the given addresses."""

    def _set(*addresses: str) -> None:
        ips = [ipaddress.ip_address(address) for address in addresses]
        monkeypatch.setattr(security, "_resolve_hostname_to_ips", lambda hostname: ips)

    return _set


class TestScheme:
    @pytest.mark.parametrize(
        "url", ["file:///etc/passwd", "ftp://example.com/api.json", "gopher://x/"]
    )
    def test_non_http_is_rejected(self, url: str) -> None:
        with pytest.raises(SecurityError, match="scheme"):
            check_allowed(url, [], True)

    def test_missing_host(self) -> None:
        with pytest.raises(SecurityError, match="no host"):
            check_allowed("http:///path", [], True)


class TestPrivateAddresses:
    @pytest.mark.parametrize(
        "url",
        [
            "http://127.0.0.1/api.json",
            "http://10.0.0.8/api.json",
            "http://192.168.1.1/api.json",
            "http://169.254.169.254/latest/meta-data",
            "http://[::1]/api.json",
            "http://[::ffff:10.0.0.1]/api.json",
            "http://0.0.0.0/api.json",
        ],
    )
    def test_ip_literals_are_rejected(self, url: str) -> None:
        with pytest.raises(SecurityError, match="private or reserved"):
            check_allowed(url, [], False)

    def test_public_ip_literal(self) -> None:
        check_allowed("https://93.184.216.34/api.json", [], False)

    def test_hostname_resolving_to_private(self, resolve_to) -> None:
        resolve_to("93.184.216.34", "10.1.2.3")
        with pytest.raises(SecurityError, match="10.1.2.3"):
            check_allowed("https://internal.example.com/api.json", [], False)

    def test_hostname_resolving_to_public(self, resolve_to) -> None:
        resolve_to("93.184.216.34")
        check_allowed("https://petstore.example.com/api.json", [], False)

    def test_allow_private(self) -> None:
        check_allowed("http://localhost:8080/api.json", [], True)


class TestAllowlist:
    def test_hostname_entry(self) -> None:
        check_allowed("https://Specs.Example.com/a.json", ["specs.example.com"], False)

    def test_prefix_entry(self) -> None:
        check_allowed(
            "https://example.com/specs/petstore.json",
            ["https://example.com/specs/"],
            False,
        )

    def test_prefix_mismatch(self) -> None:
        with pytest.raises(SecurityError, match="allowlist"):
            check_allowed(
                "https://example.com/private/api.json",
                ["https://example.com/specs/"],
                False,
            )

    def test_unlisted_host(self) -> None:
        with pytest.raises(SecurityError, match="allowlist"):
            check_allowed("https://evil.example.org/a.json", ["specs.example.com"], True)

    def test_listed_private_host_is_trusted(self) -> None:
        check_allowed("http://10.0.0.5/a.json", ["10.0.0.5"], False)


class TestHelpers:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("8.8.8.8", False),
            ("172.16.0.1", True),
            ("224.0.0.1", True),
            ("fe80::1", True),
            ("2606:4700:4700::1111", False),
        ],
    )
    def test_is_private_or_reserved(self, address: str, expected: bool) -> None:
        assert security._is_private_or_reserved_ip(ipaddress.ip_address(address)) is expected
