"""Swagger 2.x parser (JSON or YAML)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from specimport.parser.base import DocumentParser

logger = logging.getLogger(__name__)


class SwaggerV2Parser(DocumentParser):
    """Recognise documents declaring ``swagger: "2.x"``."""

    @property
    def name(self) -> str:
        return "Swagger v2"

    def parse_document(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        version = document.get("swagger")
        # YAML reads an unquoted ``swagger: 2.0`` as a float
        if version is None or not str(version).startswith("2"):
            logger.debug("Not a Swagger v2 document (swagger=%r)", version)
            return None
        return document
