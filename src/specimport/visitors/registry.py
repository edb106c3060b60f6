"""Policy visitor registry -- registration, discovery, and resolution.

:class:`PolicyVisitorRegistry` is a catalog of
:class:`OperationVisitorDescriptor` entries keyed by a stable string id. Each
entry supplies zero, one or two visitor factories: one for the Swagger
family and one for the OpenAPI 3 family. At import time
:meth:`PolicyVisitorRegistry.resolve` turns the caller's requested ids into
fresh visitor instances for the family actually parsed.

The registry is populated once when the application starts and then sealed
with :meth:`~PolicyVisitorRegistry.seal`; after that it is only read, so
concurrent imports may share it without locking.

Third-party packages contribute visitors through the
``specimport.visitors`` entry-point group; each entry point refers to an
:class:`OperationVisitorDescriptor` instance::

    [project.entry-points."specimport.visitors"]
    rate-limit = "my_package.visitors:rate_limit_descriptor"
"""

from __future__ import annotations

import importlib.metadata
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from specimport.exceptions import VisitorRegistrationError
from specimport.models import Version
from specimport.visitors.base import OAIOperationVisitor, SwaggerOperationVisitor

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "specimport.visitors"
"""The entry-point group name used for visitor discovery."""

_SWAGGER_FAMILY = frozenset({Version.SWAGGER_V1, Version.SWAGGER_V2})

Visitor = Union[SwaggerOperationVisitor, OAIOperationVisitor]


@dataclass(frozen=True)
class OperationVisitorDescriptor:
    """Registry entry describing one logical policy visitor.

    Attributes:
        id: Unique identifier callers use in ``with_policies``.
        name: Human-readable name.
        description: One-line description.
        swagger_visitor_factory: Builds the Swagger-family visitor, if the
            policy supports Swagger documents.
        oai_visitor_factory: Builds the OpenAPI 3 visitor, if the policy
            supports OpenAPI documents.
    """

    id: str
    name: str
    description: str = ""
    swagger_visitor_factory: Optional[Callable[[], SwaggerOperationVisitor]] = None
    oai_visitor_factory: Optional[Callable[[], OAIOperationVisitor]] = None

    def supports(self, version: Version) -> bool:
        """Return ``True`` if this policy has a visitor for *version*'s family."""
        return self._factory_for(version) is not None

    def create(self, version: Version) -> Optional[Visitor]:
        """Build the visitor for *version*'s family, or ``None`` if unsupported."""
        factory = self._factory_for(version)
        return factory() if factory is not None else None

    def _factory_for(self, version: Version) -> Optional[Callable[[], Visitor]]:
        if version in _SWAGGER_FAMILY:
            return self.swagger_visitor_factory
        if version is Version.OAI_V3:
            return self.oai_visitor_factory
        return None


class PolicyVisitorRegistry:
    """Catalog of policy visitors resolved by id at import time.

    Example:
        Typical usage::

            registry = default_registry()
            visitors = registry.resolve(["mock"], Version.SWAGGER_V2)
    """

    def __init__(self, descriptors: Iterable[OperationVisitorDescriptor] = ()) -> None:
        self._descriptors: dict[str, OperationVisitorDescriptor] = {}
        self._sealed = False
        for descriptor in descriptors:
            self.register(descriptor)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, descriptor: OperationVisitorDescriptor) -> None:
        """Add a visitor descriptor to the catalog.

        Raises:
            VisitorRegistrationError: If the registry is sealed or the id is
                already registered.
        """
        if self._sealed:
            raise VisitorRegistrationError(
                f"Cannot register visitor '{descriptor.id}': registry is sealed"
            )
        if descriptor.id in self._descriptors:
            raise VisitorRegistrationError(f"Visitor '{descriptor.id}' is already registered")

        self._descriptors[descriptor.id] = descriptor
        logger.info("Registered policy visitor '%s'", descriptor.id)

    def discover(self) -> list[str]:
        """Register visitors declared in the ``specimport.visitors`` entry-point group.

        Entry points that fail to load, do not refer to an
        :class:`OperationVisitorDescriptor`, or collide with an existing id
        are logged as warnings and skipped.

        Returns:
            The ids registered by this call.
        """
        registered: list[str] = []
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            try:
                descriptor = ep.load()
                if not isinstance(descriptor, OperationVisitorDescriptor):
                    raise TypeError(
                        f"expected OperationVisitorDescriptor, got {type(descriptor).__name__}"
                    )
                self.register(descriptor)
                registered.append(descriptor.id)
            except Exception as exc:
                logger.warning("Failed to load policy visitor '%s': %s", ep.name, exc)
        return registered

    def seal(self) -> None:
        """Forbid further registration. Reads stay available."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get(self, visitor_id: str) -> Optional[OperationVisitorDescriptor]:
        return self._descriptors.get(visitor_id)

    def list_visitors(self) -> list[OperationVisitorDescriptor]:
        """All registered descriptors in registration order."""
        return list(self._descriptors.values())

    def __contains__(self, visitor_id: object) -> bool:
        return visitor_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def resolve(self, ids: Optional[Iterable[str]], version: Version) -> list[Visitor]:
        """Build the visitors for *ids* that support *version*'s family.

        Args:
            ids: Requested visitor ids in priority order. ``None`` resolves
                to no visitors at all.
            version: The version of the parsed descriptor.

        Returns:
            Fresh visitor instances in the order the ids were supplied. Unknown
            ids and ids without a visitor for this family are dropped;
            repeated ids are resolved once.
        """
        if ids is None:
            return []

        visitors: list[Visitor] = []
        seen: set[str] = set()
        for visitor_id in ids:
            if visitor_id in seen:
                continue
            seen.add(visitor_id)

            descriptor = self._descriptors.get(visitor_id)
            if descriptor is None:
                logger.debug("Unknown policy visitor '%s', skipping", visitor_id)
                continue
            visitor = descriptor.create(version)
            if visitor is None:
                logger.debug(
                    "Policy visitor '%s' does not support %s, skipping", visitor_id, version.value
                )
                continue
            visitors.append(visitor)
        return visitors


def default_registry(discover: bool = True) -> PolicyVisitorRegistry:
    """Build a sealed registry holding the built-in visitors.

    Args:
        discover: Also register visitors from installed entry points.
    """
    from specimport.visitors.json_validation import descriptor as json_validation
    from specimport.visitors.mock import descriptor as mock
    from specimport.visitors.rest_to_soap import descriptor as rest_to_soap

    registry = PolicyVisitorRegistry([mock, json_validation, rest_to_soap])
    if discover:
        registry.discover()
    registry.seal()
    return registry
