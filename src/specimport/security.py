"""URL safety checks applied before a descriptor is fetched from the network.

:func:`check_allowed` is the default implementation of the URL-safety
collaborator used by :class:`~specimport.parser.chain.ParserChain`. It
prevents Server-Side Request Forgery when a caller submits a descriptor URL:

- Only ``http`` and ``https`` URLs are accepted.
- When an allowlist is configured, the URL must match one of its entries
  (an entry containing ``://`` is a URL prefix, anything else an exact,
  case-insensitive hostname). An allowlisted URL is trusted as-is.
- Without an allowlist, every address the host resolves to must be public
  unless private targets are explicitly allowed.

Callers with their own policy can pass any callable with the same signature
to the service instead.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Callable, Sequence
from urllib.parse import urlparse

from specimport.exceptions import SecurityError

logger = logging.getLogger(__name__)

UrlChecker = Callable[[str, Sequence[str], bool], None]
"""Signature of a URL-safety collaborator: ``(url, allowlist, allow_private)``."""

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def _is_private_or_reserved_ip(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    """Return ``True`` if *ip* is private, loopback, link-local, reserved or multicast."""
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def _resolve_hostname_to_ips(hostname: str) -> list[ipaddress.IPv4Address | ipaddress.IPv6Address]:
    """Resolve *hostname* to every IP address it maps to.

    Raises:
        SecurityError: If resolution fails or yields no usable address.
    """
    try:
        addr_infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror as exc:
        raise SecurityError(f"Failed to resolve hostname {hostname}: {exc}") from exc

    ips = []
    for addr_info in addr_infos:
        try:
            ips.append(ipaddress.ip_address(addr_info[4][0]))
        except ValueError:
            continue

    if not ips:
        raise SecurityError(f"No valid IP addresses resolved for hostname: {hostname}")
    return ips


def _normalize_hostname(hostname: str) -> str:
    """IDNA-encode and lowercase *hostname* for comparison."""
    try:
        return hostname.encode("idna").decode("ascii").lower()
    except UnicodeError:
        return hostname.lower()


def _matches_allowlist(url: str, hostname: str, allowlist: Sequence[str]) -> bool:
    normalized = _normalize_hostname(hostname)
    for entry in allowlist:
        if "://" in entry:
            if url.startswith(entry):
                return True
        elif normalized == _normalize_hostname(entry):
            return True
    return False


def check_allowed(url: str, allowlist: Sequence[str], allow_private: bool) -> None:
    """Reject *url* if it may not be fetched.

    Args:
        url: The descriptor URL submitted by the caller.
        allowlist: Host names or URL prefixes that may be fetched. Empty
            means any public host is accepted.
        allow_private: Accept hosts resolving to private or reserved
            addresses when no allowlist is configured.

    Raises:
        SecurityError: If the URL scheme is not HTTP(S), the URL is not in a
            non-empty allowlist, or the host resolves to a forbidden address.
    """
    parsed = urlparse(url)
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise SecurityError(f"URL scheme '{parsed.scheme}' is not allowed: {url}")

    hostname = parsed.hostname
    if not hostname:
        raise SecurityError(f"URL has no host: {url}")

    if allowlist:
        if not _matches_allowlist(url, hostname, allowlist):
            raise SecurityError(f"URL is not in the import allowlist: {url}")
        logger.debug("URL %s matched the import allowlist", url)
        return

    if allow_private:
        return

    try:
        ips = [ipaddress.ip_address(hostname)]
    except ValueError:
        ips = _resolve_hostname_to_ips(hostname)

    for ip in ips:
        if _is_private_or_reserved_ip(ip):
            raise SecurityError(
                f"URL resolves to a private or reserved address ({ip}): {url}"
            )
