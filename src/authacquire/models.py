"""Pydantic models for authacquire configuration.

Serialised as JSON in the user's config directory:

* :class:`AuthConfig` -- which acquirer to build and its parameters.
* :class:`Profile` -- a named auth target, one JSON file per profile.
* :class:`GlobalConfig` -- user-wide defaults.

Models that accept acquirer-defined extensions use ``extra="allow"`` so that
unknown keys are preserved in ``model_extra`` and visible to third-party
acquirers registered on an :class:`~authacquire.auth.manager.AcquirerManager`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthConfig(BaseModel):
    """Selects and configures an acquirer.

    The ``type`` field picks the strategy (``none``, ``fixed``, ``basic``,
    ``remote_bearer``); the remaining fields supply strategy-specific
    parameters. Secrets are never stored inline: fields ending in
    ``source`` hold a credential source descriptor resolved by
    :func:`~authacquire.config.resolve_credential`.

    Example::

        AuthConfig(
            type="remote_bearer",
            auth_url="https://issuer.example.com/token",
            buffer=30,
            request_headers={"X-Client-Id": "billing"},
        )
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(
        description="Acquirer type: none, fixed, basic, remote_bearer (alias jwt)"
    )
    source: Optional[str] = Field(
        default=None,
        description="Credential source for fixed values or pre-encoded Basic "
        "tokens: env:VAR, file:/path, value:LITERAL, prompt",
    )
    # Basic, plaintext pair
    username: Optional[str] = None
    password_source: Optional[str] = None
    # Remote bearer token
    auth_url: Optional[str] = Field(
        default=None, description="Token endpoint fetched with GET"
    )
    timeout: float = Field(
        default=10.0, gt=0, description="Token request timeout in seconds"
    )
    buffer: float = Field(
        default=0.0,
        ge=0,
        description="Seconds before expiry at which a cached token is refreshed",
    )
    request_headers: dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent to the token endpoint"
    )
    token_parser: str = Field(
        default="simple",
        description="Response parser pair: simple (expires_in + serviceAccessToken) "
        "or raw (body is a JWT, expiry from its exp claim)",
    )


class Profile(BaseModel):
    """Named auth target stored as JSON under the ``profiles/`` config directory.

    See Also:
        :func:`~authacquire.config.load_profile`: Deserialise a profile by name.
        :func:`~authacquire.config.save_profile`: Persist a profile to disk.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    description: Optional[str] = None
    auth: Optional[AuthConfig] = None


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/authacquire/config.json``."""

    default_profile: Optional[str] = None
    auto_select_single_profile: bool = True
