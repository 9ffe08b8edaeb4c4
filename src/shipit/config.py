from __future__ import annotations

import os
import sys
from pathlib import Path

import msgspec

from .errors import ImproperlyConfiguredError

DEFAULT_API_URL = "https://api.shipit.dev"
LOCAL_CONFIG_FILENAME = "shipit.json"


class GlobalConfig(msgspec.Struct, rename="camel"):
    current_team: str | None = None


class AuthConfig(msgspec.Struct):
    token: str | None = None


class LocalConfig(msgspec.Struct):
    name: str | None = None


def default_global_config_dir() -> Path:
    if env_dir := os.getenv("SHIPIT_GLOBAL_CONFIG"):
        return Path(env_dir)
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / "shipit"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "shipit"
    if xdg := os.getenv("XDG_CONFIG_HOME"):
        return Path(xdg) / "shipit"
    return Path.home() / ".config" / "shipit"


def default_api_url() -> str:
    return os.getenv("SHIPIT_API_URL", DEFAULT_API_URL)


def _decode(path: Path, type_):
    try:
        return msgspec.json.decode(path.read_bytes(), type=type_)
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise ImproperlyConfiguredError(f"Couldn't parse {path}: {e}") from e


def read_global_config(config_dir: Path) -> GlobalConfig:
    path = config_dir / "config.json"
    if not path.exists():
        return GlobalConfig()
    return _decode(path, GlobalConfig)


def read_auth_config(config_dir: Path) -> AuthConfig:
    path = config_dir / "auth.json"
    if not path.exists():
        return AuthConfig(token=os.getenv("SHIPIT_TOKEN"))
    auth = _decode(path, AuthConfig)
    if not auth.token:
        auth.token = os.getenv("SHIPIT_TOKEN")
    return auth


def read_local_config(project_dir: Path, explicit: Path | None = None) -> LocalConfig:
    """
    Read the project level ``shipit.json``. An explicit path (``--local-config``)
    has to exist, the implicit one next to the project is optional.
    """
    if explicit is not None:
        if not explicit.exists():
            raise ImproperlyConfiguredError(
                f"Couldn't find a project configuration file at {explicit}"
            )
        return _decode(explicit, LocalConfig)
    path = project_dir / LOCAL_CONFIG_FILENAME
    if not path.exists():
        return LocalConfig()
    return _decode(path, LocalConfig)
