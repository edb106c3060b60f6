"""Import configuration loading with precedence resolution.

The import service is configured by a single :class:`~specimport.models.ImportConfig`.
:func:`load_import_config` assembles it from, in order of precedence
(high to low):

1. Keyword overrides passed by the caller (e.g. CLI flags).
2. Environment variables ``SPECIMPORT_DEFAULT_SCHEME``,
   ``SPECIMPORT_IMPORT_ALLOWLIST`` (comma separated) and
   ``SPECIMPORT_ALLOW_PRIVATE``.
3. A JSON file: the explicit *path* argument, or ``./specimport.json`` when it
   exists.
4. Model defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specimport.exceptions import ConfigError
from specimport.models import ImportConfig

_PROJECT_CONFIG_FILENAME = "specimport.json"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def load_config_file(path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Read the JSON configuration file.

    Args:
        path: Explicit file path. When ``None``, ``./specimport.json`` is used
            if present.

    Returns:
        The parsed JSON object, or ``None`` if no file applies.

    Raises:
        ConfigError: If an explicit *path* does not exist, or the file holds
            invalid JSON or a non-object value.
    """
    if path is None:
        path = Path.cwd() / _PROJECT_CONFIG_FILENAME
        if not path.is_file():
            return None
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


def _env_overrides() -> dict[str, Any]:
    """Collect configuration values from ``SPECIMPORT_*`` environment variables."""
    values: dict[str, Any] = {}

    scheme = os.environ.get("SPECIMPORT_DEFAULT_SCHEME")
    if scheme:
        values["default_scheme"] = scheme

    allowlist = os.environ.get("SPECIMPORT_IMPORT_ALLOWLIST")
    if allowlist:
        values["import_allowlist"] = [
            entry.strip() for entry in allowlist.split(",") if entry.strip()
        ]

    allow_private = os.environ.get("SPECIMPORT_ALLOW_PRIVATE")
    if allow_private:
        values["allow_import_from_private"] = allow_private.strip().lower() in _TRUTHY

    return values


def load_import_config(path: Optional[Path] = None, **overrides: Any) -> ImportConfig:
    """Resolve the effective :class:`~specimport.models.ImportConfig`.

    Args:
        path: Optional JSON config file path.
        **overrides: Highest-precedence values; ``None`` values are ignored.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is invalid or the merged values fail
            validation.
    """
    data: dict[str, Any] = {}

    file_data = load_config_file(path)
    if file_data is not None:
        data.update(file_data)

    data.update(_env_overrides())
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ImportConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid import configuration: {exc}") from exc
