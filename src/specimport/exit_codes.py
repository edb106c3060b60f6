"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specimport.exceptions.SpecimportError` subclass.
The ``specimport`` command exits with these codes so that wrapping scripts
can tell a rejected URL from an unparseable document without reading stderr.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_DESCRIPTOR_PARSE_ERROR = 7
"""No supported format could parse the descriptor."""

EXIT_SECURITY_ERROR = 8
"""The descriptor URL was rejected by the allowlist or private network guard."""

EXIT_CONVERSION_ERROR = 9
"""The descriptor was parsed but could not be converted into an API entity."""

EXIT_VISITOR_ERROR = 10
"""A policy visitor failed to register or load."""
