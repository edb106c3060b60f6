"""Abstract base class for format parsers.

A parser inspects decoded or raw descriptor text and returns its native
document when the text is in the parser's format. Returning ``None`` means
"not my format" and lets :class:`~specimport.parser.chain.ParserChain` try
the next parser; exceptions are reserved for genuinely exceptional
conditions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from specimport.parser.loader import parse_content


class DescriptorParser(ABC):
    """Base class for all format parsers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short format name used in log messages (e.g. ``"Swagger v2"``)."""
        ...

    @abstractmethod
    def parse(self, content: str) -> Optional[dict[str, Any]]:
        """Parse *content* into the parser's native document.

        Args:
            content: The descriptor text (never a URL; the chain fetches
                remote descriptors before calling parsers).

        Returns:
            The native document, or ``None`` if *content* is not in this
            parser's format.
        """
        ...


class DocumentParser(DescriptorParser):
    """Base class for formats carried as a JSON or YAML mapping.

    :class:`~specimport.parser.chain.ParserChain` decodes the payload once
    and hands the mapping to :meth:`parse_document` of every such parser.
    """

    def parse(self, content: str) -> Optional[dict[str, Any]]:
        document = parse_content(content)
        if document is None:
            return None
        return self.parse_document(document)

    @abstractmethod
    def parse_document(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Return the native document if the decoded *document* is in this format.

        *document* may be shared with other parsers; it is returned as-is on
        acceptance and never modified otherwise.
        """
        ...
