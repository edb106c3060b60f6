"""Exception hierarchy for specimport.

All exceptions inherit from :class:`SpecimportError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specimport.exit_codes`.
The command-line entry point catches ``SpecimportError`` and exits with the
appropriate code; library callers map the subclasses to their own status
codes.

Subclass hierarchy::

    SpecimportError               (exit 1)
    +-- DescriptorParseError      (exit 7)
    +-- SecurityError             (exit 8)
    +-- DescriptorConversionError (exit 9)
    +-- VisitorRegistrationError  (exit 10)
    +-- TransformError            (exit 1)
    +-- ConfigError               (exit 1)

:class:`SerializationWarning` is not an exception that is ever raised: it
names the non-fatal failure to re-serialize a WSDL import and is only
reported through logging.
"""

from specimport.exit_codes import (
    EXIT_CONVERSION_ERROR,
    EXIT_DESCRIPTOR_PARSE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_SECURITY_ERROR,
    EXIT_VISITOR_ERROR,
)


class SpecimportError(Exception):
    """Base exception for all specimport errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class DescriptorParseError(SpecimportError):
    """Raised when no parser in the applicable chain recognised the payload.

    The message is deliberately opaque: individual parser failures are
    logged at debug level and never surfaced.
    """

    exit_code = EXIT_DESCRIPTOR_PARSE_ERROR

    def __init__(self, message: str = "Unable to parse the API descriptor", exit_code: int | None = None):
        super().__init__(message, exit_code)


class SecurityError(SpecimportError):
    """Raised when a descriptor URL targets a disallowed or private host."""

    exit_code = EXIT_SECURITY_ERROR


class DescriptorConversionError(SpecimportError):
    """Raised when a parsed descriptor cannot be converted into an API entity."""

    exit_code = EXIT_CONVERSION_ERROR


class VisitorRegistrationError(SpecimportError):
    """Raised for duplicate visitor ids or registration on a sealed registry."""

    exit_code = EXIT_VISITOR_ERROR


class TransformError(SpecimportError):
    """Raised when a transformer is applied to a descriptor version it does not handle."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(SpecimportError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class SerializationWarning(UserWarning):
    """A WSDL descriptor could not be re-serialized; the original payload is kept."""
