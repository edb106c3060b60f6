"""OpenAPI 3.x parser (JSON or YAML)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from specimport.parser.base import DocumentParser

logger = logging.getLogger(__name__)


class OAIParser(DocumentParser):
    """Recognise documents declaring ``openapi: "3.x"``."""

    @property
    def name(self) -> str:
        return "OpenAPI"

    def parse_document(self, document: dict[str, Any]) -> Optional[dict[str, Any]]:
        version = document.get("openapi")
        if version is None or not str(version).startswith("3"):
            logger.debug("Not an OpenAPI 3 document (openapi=%r)", version)
            return None
        return document
