"""Typer application and CLI entry point for zodapi.

This module wires together the top-level Typer application and registers the
``import-openapi`` command.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  It installs a SIGINT handler, registers commands, and
invokes the Typer app.  Any :class:`~zodapi.exceptions.ZodapiError` that
escapes a command is printed as ``Error: <message>`` and mapped to its exit
code.

See Also:
    :mod:`zodapi.config`: Output settings resolution.
    :mod:`zodapi.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from zodapi import __version__
from zodapi.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="zodapi",
    help="Generate zod-validated API endpoint definitions from OpenAPI/Swagger documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"zodapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~zodapi.output.OutputManager` from CLI
    flags and routes library log records to stderr.

    Args:
        version: If ``True``, print the version string and exit.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from zodapi.output import OutputManager, set_output

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    output.install_log_handler()
    set_output(output)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _register_commands() -> None:
    from zodapi.commands.generate import import_openapi_command

    app.command("import-openapi")(import_openapi_command)


_register_commands()


def main() -> None:
    """CLI entry point invoked by the ``zodapi`` console script.

    Unhandled :class:`~zodapi.exceptions.ZodapiError` instances cause a
    clean exit with the error's ``exit_code``.  Any other exception is
    reported as ``Error: <message>`` with the generic failure code.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from zodapi.exceptions import ZodapiError
        from zodapi.output import error

        error(str(exc))
        if isinstance(exc, ZodapiError):
            sys.exit(exc.exit_code)
        sys.exit(EXIT_GENERIC_FAILURE)
