"""Typer application and CLI entry point for authacquire.

The CLI resolves the active profile, builds its acquirer, and prints the
resulting ``Authorization`` value on stdout so it can be spliced into other
tools::

    curl -H "Authorization: $(authacquire token -p billing)" https://api.example.com/

Built-in sub-commands: ``token``, ``check``, ``types`` and the ``profiles``
group. :func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from authacquire import __version__
from authacquire.exceptions import AuthAcquireError, InvalidUsageError
from authacquire.exit_codes import EXIT_GENERIC_FAILURE
from authacquire.output import error, info, print_data, print_table, success


app = typer.Typer(
    name="authacquire",
    help="Acquire Authorization header values from configured credential strategies.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"authacquire {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send ``authacquire`` log records to stderr through Rich.

    DEBUG with ``--verbose``, WARNING otherwise.
    """
    from rich.logging import RichHandler

    from authacquire.output import get_output

    package_logger = logging.getLogger("authacquire")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(
            console=get_output().stderr_console,
            show_time=False,
            show_path=False,
        )
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback: set up output and logging, stash shared options on ``ctx.obj``."""
    from authacquire.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile


def _resolve_profile(ctx: typer.Context):  # noqa: ANN202
    """Return the active profile.

    Raises:
        InvalidUsageError: If no profile is selected.
    """
    from authacquire.config import resolve_config

    profile_name = ctx.obj.get("profile") if ctx.obj else None
    _, profile = resolve_config(profile_name)
    if profile is None:
        raise InvalidUsageError(
            "No profile selected. Pass --profile NAME, set AUTHACQUIRE_PROFILE, "
            "or create one with 'authacquire profiles add'."
        )
    return profile


@app.command("token")
def token_command(
    ctx: typer.Context,
    show_expiry: bool = typer.Option(
        False, "--show-expiry", help="Report the cached token expiry on stderr."
    ),
) -> None:
    """Acquire a credential for the active profile and print it.

    Prints nothing (exit 0) when the profile's strategy yields no
    credential, e.g. type ``none``.

    Example::

        authacquire token
        authacquire -p billing token --show-expiry
    """
    from authacquire.auth import create_default_manager
    from authacquire.plugins.remote_bearer import RemoteBearerTokenAcquirer

    try:
        profile = _resolve_profile(ctx)
        with create_default_manager().create_for_profile(profile) as acquirer:
            value = acquirer.acquire()
            if show_expiry and isinstance(acquirer, RemoteBearerTokenAcquirer):
                info(f"Expires: {acquirer.expires.isoformat()}")
    except AuthAcquireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not value:
        info(f"Profile '{profile.name}' yields no credential; no header would be sent.")
        return
    print_data(value)


@app.command("check")
def check_command(ctx: typer.Context) -> None:
    """Validate the active profile and build its acquirer without acquiring.

    Credential sources are resolved, but no network request is made.
    """
    from authacquire.auth import create_default_manager

    try:
        profile = _resolve_profile(ctx)
        with create_default_manager().create_for_profile(profile) as acquirer:
            pass
    except AuthAcquireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    auth_type = profile.auth.type if profile.auth else "none"
    success(f"Profile '{profile.name}' is valid ({auth_type}: {acquirer!r}).")


@app.command("types")
def types_command() -> None:
    """List the registered acquirer types."""
    from authacquire.auth import create_default_manager

    manager = create_default_manager()
    rows = [
        [auth_type, manager.get_acquirer_class(auth_type).__name__]
        for auth_type in manager.list_types()
    ]
    print_table(["type", "acquirer"], rows, title="Acquirer types")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under the data directory and return its path."""
    from authacquire.config import get_data_dir

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = get_data_dir() / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


from authacquire.commands.profiles import profiles_app  # noqa: E402

app.add_typer(profiles_app, name="profiles", help="Profile management.")


def main() -> None:
    """CLI entry point invoked by the ``authacquire`` console script.

    :class:`~authacquire.exceptions.AuthAcquireError` escaping a command
    exits with the error's ``exit_code``; anything else writes a crash log
    and exits with :data:`EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except AuthAcquireError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
