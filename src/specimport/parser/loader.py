"""Read descriptor payloads and decode them into Python objects.

This module handles all I/O for the parser layer:

* :func:`read_payload` -- Read a payload from a local file, stdin (``-``), or
  pass a URL through unchanged; used by the command-line shell.
* :func:`is_url` -- Tell a URL payload from inline document text.
* :func:`fetch_url` -- Download a descriptor with ``httpx``.
* :func:`parse_content` -- Decode JSON or YAML text into a mapping, returning
  ``None`` when the text is neither.

Format parsers call :func:`parse_content`; they never raise for "not my
format", so the decoding helpers report failure with ``None`` too.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import httpx
import yaml

from specimport.exceptions import DescriptorParseError, SecurityError
from specimport.models import SourceKind

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5
"""Redirect hops followed before a descriptor fetch is abandoned."""


def is_url(content: str) -> bool:
    """Return ``True`` if *content* is a single absolute URL.

    Inline documents frequently contain URLs, so the whole stripped payload
    must parse as one URL with a scheme and a network location.
    """
    candidate = content.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def read_payload(source: str) -> tuple[str, SourceKind]:
    """Read a payload from a URL, file path, or stdin ('-').

    URLs are not fetched here: they are returned as the payload so that the
    parser chain can vet them first.

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.

    Returns:
        A ``(payload, source_kind)`` tuple.

    Raises:
        DescriptorParseError: If the file or stdin cannot be read or is empty.
    """
    if source == "-":
        return _read_stdin(), SourceKind.INLINE
    if source.startswith(("http://", "https://")):
        return source, SourceKind.URL
    return _read_file(source), SourceKind.INLINE


def _read_stdin() -> str:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise DescriptorParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise DescriptorParseError("No input received from stdin")
    return content


def _read_file(path: str) -> str:
    """Read a descriptor from a local file.

    Raises:
        DescriptorParseError: If the file is missing, unreadable or empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DescriptorParseError(f"Descriptor file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptorParseError(f"Failed to read descriptor file {path}: {exc}") from exc

    if not content.strip():
        raise DescriptorParseError(f"Descriptor file is empty: {path}")
    return content


def fetch_url(
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
    check_redirect: Optional[Callable[[str], None]] = None,
) -> str:
    """Fetch a descriptor from *url*.

    The URL must already have passed the URL-safety check. Redirects are
    followed one hop at a time so that *check_redirect* vets every target
    before it is requested.

    Args:
        url: The HTTP(S) URL to fetch.
        client: Optional ``httpx.Client`` to reuse; a one-off client is made
            otherwise.
        timeout: Request timeout in seconds when no client is supplied.
        check_redirect: Called with each redirect target; raises to abort.

    Returns:
        The response body as text.

    Raises:
        DescriptorParseError: If the request fails or returns an error status.
        SecurityError: If a redirect target is rejected or the redirect chain
            exceeds :data:`MAX_REDIRECTS`.
    """
    if client is None:
        with httpx.Client(timeout=timeout) as one_off:
            return _fetch(url, one_off, check_redirect)
    return _fetch(url, client, check_redirect)


def _fetch(
    url: str,
    client: httpx.Client,
    check_redirect: Optional[Callable[[str], None]],
) -> str:
    current = url
    try:
        for _ in range(MAX_REDIRECTS + 1):
            response = client.get(current, follow_redirects=False)
            if not response.is_redirect:
                response.raise_for_status()
                return response.text

            current = str(response.url.join(response.headers["location"]))
            logger.debug("Descriptor URL redirects to %s", current)
            if check_redirect is not None:
                check_redirect(current)
    except httpx.HTTPStatusError as exc:
        raise DescriptorParseError(
            f"HTTP {exc.response.status_code} fetching descriptor from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DescriptorParseError(f"Failed to fetch descriptor from {url}: {exc}") from exc

    raise SecurityError(f"Too many redirects fetching descriptor from {url}")


def parse_content(content: str) -> Optional[dict[str, Any]]:
    """Decode *content* as a JSON or YAML mapping.

    Tries JSON first, then YAML: valid JSON is also valid YAML, but JSON
    parsing is stricter and faster.

    Args:
        content: The raw text.

    Returns:
        The decoded mapping, or ``None`` if the text is neither JSON nor YAML
        or does not hold an object at the top level.
    """
    try:
        result = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.debug("Content is not JSON: %s", exc)
    else:
        return result if isinstance(result, dict) else None

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        logger.debug("Content is not YAML: %s", exc)
        return None

    return result if isinstance(result, dict) else None
