"""Behavior settings for the binding registry."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import tomllib
from platformdirs import user_config_dir

DEFAULT_APP_NAME = "binding-registry"
CONFIG_FILE_NAME = "config.toml"
CONFIG_TABLE = "registry"

_ENV_KEY_MAP: dict[str, str] = {
    "invalidate_on_overwrite": "BINDING_REGISTRY_INVALIDATE_ON_OVERWRITE",
    "detect_cycles": "BINDING_REGISTRY_DETECT_CYCLES",
}
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def default_config_path() -> Path:
    """Return the platform-specific default config path for registry settings."""

    base_dir = Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))
    return base_dir / CONFIG_FILE_NAME


def _parse_flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def _load_table_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    table = data.get(CONFIG_TABLE, {})
    return table if isinstance(table, dict) else {}


@dataclass(frozen=True)
class RegistrySettings:
    """Switches that change how a ``Registry`` treats its bindings.

    ``invalidate_on_overwrite`` drops a cached service instance when its key
    is rebound through ``set`` or ``extend``. ``detect_cycles`` turns
    re-entrant resolution of a key into ``CircularDependencyError`` instead
    of unbounded recursion.
    """

    invalidate_on_overwrite: bool = True
    detect_cycles: bool = True

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "RegistrySettings":
        """Read settings from the TOML ``[registry]`` table, then the environment."""

        config_path = Path(path) if path is not None else default_config_path()
        env = os.environ if environ is None else environ
        settings = cls()
        known = {item.name for item in fields(cls)}

        overrides: dict[str, bool] = {}
        for name, raw_value in _load_table_from_file(config_path).items():
            flag = _parse_flag(raw_value)
            if name in known and flag is not None:
                overrides[name] = flag
        for name, env_key in _ENV_KEY_MAP.items():
            if env_key not in env:
                continue
            flag = _parse_flag(env[env_key])
            if flag is not None:
                overrides[name] = flag
        return replace(settings, **overrides)
