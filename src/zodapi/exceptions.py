"""Exception hierarchy for zodapi.

All exceptions inherit from :class:`ZodapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`zodapi.exit_codes`.
The ``import-openapi`` command catches every exception, prints
``Error: <message>`` and exits with the error's code (``1`` for anything
that is not a ``ZodapiError``).

Only *fatal* conditions are raised. Partially specified documents (missing
``$ref`` targets, absent response content, untyped schemas) are handled by
substitution inside the pipeline and never surface here.

Subclass hierarchy::

    ZodapiError (exit 1)
    +-- SpecParseError   (exit 1)
    +-- ConversionError  (exit 1)
    +-- ConfigError      (exit 1)
    +-- GenerationError  (exit 1)
"""

from zodapi.exit_codes import EXIT_GENERIC_FAILURE


class ZodapiError(Exception):
    """Base exception for all zodapi errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class SpecParseError(ZodapiError):
    """Raised when the input document cannot be read, parsed, or is not OpenAPI/Swagger."""


class ConversionError(ZodapiError):
    """Raised when a Swagger 2.0 document cannot be converted to OpenAPI 3."""


class ConfigError(ZodapiError):
    """Raised for configuration problems (invalid ``zodapi.json``, bad values)."""


class GenerationError(ZodapiError):
    """Raised when the generated source cannot be written to the output directory."""
