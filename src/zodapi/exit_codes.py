"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

The generator has a single failure class visible to callers: any error that
aborts a run before the output file is written exits with
:data:`EXIT_GENERIC_FAILURE`. Each :class:`~zodapi.exceptions.ZodapiError`
subclass still carries its own ``exit_code`` attribute so that wrappers can
distinguish categories later without changing the hierarchy.

Example::

    $ zodapi import-openapi missing.yaml
    Error: Spec file not found: missing.yaml
    $ echo $?
    1
"""

EXIT_SUCCESS = 0
"""The output file was generated successfully."""

EXIT_GENERIC_FAILURE = 1
"""The run failed (unreadable document, unsupported version, write error)."""
