"""Descriptor parsing -- load payloads, detect formats, and wrap documents.

This sub-package is responsible for the first half of the import pipeline:
turning a raw payload (inline text or a URL) into a version-tagged
:class:`~specimport.descriptors.Descriptor`.

Typical usage::

    from specimport.parser import ParserChain

    descriptor = ParserChain().resolve(payload)

Sub-modules:

* :mod:`~specimport.parser.loader` -- I/O layer (file, stdin, URL) and
  JSON/YAML decoding.
* :mod:`~specimport.parser.swagger_v2`, :mod:`~specimport.parser.oai`,
  :mod:`~specimport.parser.swagger_v1`, :mod:`~specimport.parser.wsdl` --
  one parser per supported format.
* :mod:`~specimport.parser.chain` -- the ordered fallback chain.
* :mod:`~specimport.parser.resolver` -- internal ``$ref`` resolution used by
  the converters.
"""

from specimport.parser.chain import ParserChain
from specimport.parser.loader import is_url, parse_content, read_payload

__all__ = ["ParserChain", "is_url", "parse_content", "read_payload"]
