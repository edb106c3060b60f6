"""Resolve internal ``$ref`` pointers in Swagger and OpenAPI documents.

Converters and visitors work on operations whose parameters, bodies and
schemas are inlined. :func:`resolve_refs` returns a resolved deep copy of a
document; the descriptor itself keeps its ``$ref`` pointers so that it
serializes back unchanged.

Internal references (``#/definitions/Pet``, ``#/components/schemas/Pet``)
are replaced by their targets. External references (other files or URLs)
are left untouched since no network access happens at conversion time.
Circular references are left unresolved at the cycle point.
"""

from __future__ import annotations

import copy
from typing import Any

from specimport.exceptions import DescriptorConversionError


def resolve_refs(document: dict[str, Any]) -> dict[str, Any]:
    """Return a deep copy of *document* with internal ``$ref`` pointers inlined.

    Args:
        document: A Swagger 2 or OpenAPI 3 document.

    Returns:
        A new dictionary with all resolvable internal references replaced.

    Raises:
        DescriptorConversionError: If an internal ``$ref`` points to a path
            that does not exist in the document.
    """
    root = copy.deepcopy(document)
    return _deep_resolve(root, root, seen=None)


def _resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Follow a ``#/...`` JSON Pointer (RFC 6901) from *root*."""
    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise DescriptorConversionError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise DescriptorConversionError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise DescriptorConversionError(
                f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
            )

    return current


def _deep_resolve(obj: Any, root: dict[str, Any], seen: set[str] | None = None) -> Any:
    """Recursively resolve ``$ref`` pointers within *obj*.

    ``seen`` holds the references on the current resolution stack; a new set
    is built per branch so sibling references do not interfere.
    """
    if seen is None:
        seen = set()

    if isinstance(obj, dict):
        ref = obj.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/"):
            if ref in seen:
                return obj
            resolved = _resolve_ref(ref, root)
            return _deep_resolve(resolved, root, seen | {ref})

        return {key: _deep_resolve(value, root, seen) for key, value in obj.items()}

    if isinstance(obj, list):
        return [_deep_resolve(item, root, seen) for item in obj]

    return obj
