"""Profile storage, precedence resolution, and credential sources.

Everything authacquire persists lives here:

* **Directories** -- ``$XDG_CONFIG_HOME/authacquire`` and
  ``$XDG_DATA_HOME/authacquire`` on Linux/BSD, ``~/.authacquire`` elsewhere.
* **Global config** -- one :class:`~authacquire.models.GlobalConfig` JSON
  file naming the default profile.
* **Profiles** -- one JSON file per auth target under ``profiles/``.
* **Precedence** -- :func:`resolve_config` picks the active profile.
* **Credential sources** -- :func:`resolve_credential` turns a descriptor
  such as ``env:SVC_TOKEN`` into the secret it names.

Writes go through :func:`_atomic_write`, so a crash never leaves a
truncated profile behind.
"""

from __future__ import annotations

import contextlib
import getpass
import json
import logging
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel

from authacquire.exceptions import ConfigError
from authacquire.models import GlobalConfig, Profile

logger = logging.getLogger(__name__)

_APP_NAME = "authacquire"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "authacquire.json"
PROFILE_ENV_VAR = "AUTHACQUIRE_PROFILE"

ModelT = TypeVar("ModelT", bound=BaseModel)

# kind -> (XDG variable, default below $HOME, subdirectory of ~/.authacquire)
_APP_DIRS: dict[str, tuple[str, tuple[str, ...], tuple[str, ...]]] = {
    "config": ("XDG_CONFIG_HOME", (".config",), ()),
    "data": ("XDG_DATA_HOME", (".local", "share"), ("logs",)),
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, xdg_default, fallback = _APP_DIRS[kind]
    if _is_xdg_platform():
        base = os.environ.get(env_var) or Path.home().joinpath(*xdg_default)
        path = Path(base) / _APP_NAME
    else:
        path = Path.home().joinpath(f".{_APP_NAME}", *fallback)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the directory holding ``config.json`` and ``profiles/``, creating it."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Return the directory crash logs are written under, creating it."""
    return _app_dir("data")


def get_profiles_dir() -> Path:
    path = get_config_dir() / "profiles"
    path.mkdir(exist_ok=True)
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a sibling temp file and ``os.replace``.

    ``mkstemp`` creates the file readable by the owner only, which the
    final file keeps.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _load_model(path: Path, model: type[ModelT], what: str) -> ModelT:
    try:
        return model.model_validate(_read_json(path, what))
    except ValueError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _save_model(path: Path, instance: BaseModel) -> None:
    data = instance.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, json.dumps(data, indent=2) + "\n")


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load ``config.json``, or return defaults when it does not exist yet.

    Raises:
        ConfigError: If the file is not valid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    return _load_model(path, GlobalConfig, "global config")


def save_global_config(config: GlobalConfig) -> None:
    _save_model(_global_config_path(), config)


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def _existing_profile_path(name: str) -> Path:
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    return path


def list_profiles() -> list[str]:
    """Names of all stored profiles, sorted."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Read ``profiles/<name>.json``.

    Raises:
        ConfigError: If the profile is missing, not valid JSON, or fails
            validation.
    """
    return _load_model(_existing_profile_path(name), Profile, f"profile '{name}'")


def save_profile(profile: Profile) -> None:
    """Write *profile* to ``profiles/<profile.name>.json``, replacing any existing file.

    Unset optional fields are left out of the file.
    """
    _save_model(_profile_path(profile.name), profile)


def delete_profile(name: str) -> None:
    """Remove a stored profile.

    Raises:
        ConfigError: If the profile does not exist.
    """
    _existing_profile_path(name).unlink()


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./authacquire.json``, which may pin ``default_profile`` for a checkout.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Active profile ---


def resolve_config(
    cli_profile: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Return the global config and the active profile, if any.

    The first of these that names a profile wins:

    1. *cli_profile* (``--profile``)
    2. ``$AUTHACQUIRE_PROFILE``
    3. ``default_profile`` in ``./authacquire.json``
    4. ``default_profile`` in the global config
    5. the only stored profile, when ``auto_select_single_profile`` is on

    Raises:
        ConfigError: If the selected profile cannot be loaded.
    """
    global_cfg = load_global_config()
    project = load_project_config() or {}

    candidates = (
        cli_profile,
        os.environ.get(PROFILE_ENV_VAR),
        project.get("default_profile"),
        global_cfg.default_profile,
    )
    name = next((c for c in candidates if c), None)

    if name is None and global_cfg.auto_select_single_profile:
        stored = list_profiles()
        if len(stored) == 1:
            name = stored[0]

    if name is None:
        return global_cfg, None

    logger.debug("Active profile: %s", name)
    return global_cfg, load_profile(name)


# --- Credential sources ---


def _from_env(name: str) -> str:
    value = os.environ.get(name)
    if value is None:
        raise ConfigError(f"Environment variable '{name}' is not set")
    return value


def _from_file(ref: str) -> str:
    path = Path(ref).expanduser()
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        raise ConfigError(f"Credential file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc


def _from_prompt() -> str:
    if not sys.stdin.isatty():
        raise ConfigError("Cannot prompt for a credential: stdin is not a TTY")
    return getpass.getpass("Credential: ")


_SOURCE_RESOLVERS: dict[str, Callable[[str], str]] = {
    "env": _from_env,
    "file": _from_file,
    "value": lambda literal: literal,
}


def resolve_credential(source: str) -> str:
    """Return the secret named by a credential source descriptor.

    ``env:NAME`` reads an environment variable, ``file:PATH`` reads a
    file (surrounding whitespace stripped), ``value:TEXT`` is the text
    itself and ``prompt`` asks on the terminal.

    Raises:
        ConfigError: If the descriptor is unknown or its secret is unavailable.
    """
    if source == "prompt":
        return _from_prompt()
    scheme, sep, ref = source.partition(":")
    resolver = _SOURCE_RESOLVERS.get(scheme) if sep else None
    if resolver is None:
        raise ConfigError(
            f"Unknown credential source '{source}'; "
            "expected env:NAME, file:PATH, value:TEXT or prompt"
        )
    return resolver(ref)
