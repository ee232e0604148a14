"""Profile commands -- create, inspect and remove auth profiles.

Provides the ``authacquire profiles`` sub-command group. Profiles are JSON
files under the config directory; secrets are referenced through credential
sources (``env:VAR``, ``file:/path``, ``value:LITERAL``, ``prompt``) and
never written in resolved form.

Typical workflow::

    authacquire profiles add billing --type remote_bearer \\
        --auth-url https://issuer.example.com/token --buffer 30
    authacquire profiles use billing
    authacquire token
"""

from __future__ import annotations

from typing import Optional

import typer

from authacquire.exceptions import AuthAcquireError
from authacquire.exit_codes import EXIT_INVALID_USAGE
from authacquire.output import error, format_response, info, print_table, success, suggest


profiles_app = typer.Typer(no_args_is_help=True)


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            error(f"Invalid header '{item}', expected NAME=VALUE")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        headers[name.strip()] = value.strip()
    return headers


@profiles_app.command("add")
def profiles_add(
    name: str = typer.Argument(help="Profile name."),
    auth_type: str = typer.Option(
        "none", "--type", "-t", help="Acquirer type (see 'authacquire types')."
    ),
    source: Optional[str] = typer.Option(
        None, "--source", help="Credential source for fixed or pre-encoded basic values."
    ),
    username: Optional[str] = typer.Option(None, "--username", help="Basic auth username."),
    password_source: Optional[str] = typer.Option(
        None, "--password-source", help="Credential source for the basic auth password."
    ),
    auth_url: Optional[str] = typer.Option(None, "--auth-url", help="Token endpoint URL."),
    timeout: float = typer.Option(10.0, "--timeout", help="Token request timeout (seconds)."),
    buffer: float = typer.Option(
        0.0, "--buffer", help="Refresh this many seconds before the token expires."
    ),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Extra token request header, NAME=VALUE. Repeatable."
    ),
    token_parser: str = typer.Option(
        "simple", "--token-parser", help="Response parser pair: simple or raw."
    ),
    description: Optional[str] = typer.Option(None, "--description", help="Free-form note."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing profile."),
) -> None:
    """Create a profile.

    The configuration is validated against the chosen acquirer type before
    it is saved; credential sources are not resolved.
    """
    from authacquire.auth import create_default_manager
    from authacquire.config import profile_exists, save_profile
    from authacquire.models import AuthConfig, Profile

    if profile_exists(name) and not force:
        error(f"Profile '{name}' already exists.")
        suggest("Pass --force to overwrite it.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    try:
        auth = AuthConfig(
            type=auth_type,
            source=source,
            username=username,
            password_source=password_source,
            auth_url=auth_url,
            timeout=timeout,
            buffer=buffer,
            request_headers=_parse_headers(header),
            token_parser=token_parser,
        )
    except ValueError as exc:
        error(f"Invalid auth options: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    try:
        acquirer_cls = create_default_manager().get_acquirer_class(auth_type)
    except AuthAcquireError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    problems = acquirer_cls.validate_config(auth)
    if problems:
        for problem in problems:
            error(problem)
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    save_profile(Profile(name=name, description=description, auth=auth))
    success(f"Profile '{name}' saved.")
    suggest(f"Try it: authacquire -p {name} token")


@profiles_app.command("list")
def profiles_list() -> None:
    """List profiles, marking the configured default."""
    from authacquire.config import list_profiles, load_global_config, load_profile

    names = list_profiles()
    if not names:
        info("No profiles configured.")
        return

    default = load_global_config().default_profile
    rows: list[list[str]] = []
    for profile_name in names:
        try:
            profile = load_profile(profile_name)
            auth_type = profile.auth.type if profile.auth else "none"
        except AuthAcquireError:
            auth_type = "(invalid)"
        rows.append([profile_name, auth_type, "*" if profile_name == default else ""])
    print_table(["name", "type", "default"], rows, title="Profiles")


@profiles_app.command("show")
def profiles_show(name: str = typer.Argument(help="Profile name.")) -> None:
    """Show a profile's stored configuration."""
    from authacquire.config import load_profile

    try:
        profile = load_profile(name)
    except AuthAcquireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    format_response(profile.model_dump(mode="json", exclude_none=True))


@profiles_app.command("use")
def profiles_use(name: str = typer.Argument(help="Profile name.")) -> None:
    """Make a profile the global default."""
    from authacquire.config import load_global_config, profile_exists, save_global_config

    if not profile_exists(name):
        error(f"Profile '{name}' not found.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    config = load_global_config()
    config.default_profile = name
    save_global_config(config)
    success(f"Default profile set to '{name}'.")


@profiles_app.command("delete")
def profiles_delete(
    name: str = typer.Argument(help="Profile name."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Delete a profile."""
    from authacquire.config import delete_profile, load_global_config, save_global_config

    if not force and not typer.confirm(f"Delete profile '{name}'?"):
        info("Cancelled.")
        raise typer.Exit()

    try:
        delete_profile(name)
    except AuthAcquireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    config = load_global_config()
    if config.default_profile == name:
        config.default_profile = None
        save_global_config(config)
    success(f"Profile '{name}' deleted.")
