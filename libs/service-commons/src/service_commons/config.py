"""
YAML-backed settings loading shared by every service.

Settings models declare no defaults: a missing or unknown key fails
startup with ConfigurationError instead of silently falling back.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

REDACTION_MARKER = "***REDACTED***"

_SENSITIVE_KEY_PARTS: tuple[str, ...] = ("secret", "password", "token", "private_key", "api_key")

SettingsT = TypeVar("SettingsT", bound=BaseModel)


class ConfigurationError(Exception):
    """Raised when the configuration file is missing, unreadable or invalid."""


def get_config_path(env_var_name: str, default_filename: str) -> Path:
    """
    Resolve the configuration file path.

    Uses the environment variable when set, otherwise default_filename
    in the current working directory.
    """
    override = os.environ.get(env_var_name)
    if override:
        return Path(override)
    return Path.cwd() / default_filename


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping from disk."""
    try:
        raw = yaml.safe_load(config_path.read_text())
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Configuration file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Configuration file is not valid YAML: {config_path}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
    return raw


def create_settings_loader(
    settings_model: type[SettingsT],
    config_path_resolver: Callable[[], Path],
) -> tuple[Callable[[], SettingsT], Callable[[], None]]:
    """
    Build a cached settings getter and its cache-clearing companion.

    Returns:
        (get_settings, clear_settings_cache)
    """

    @lru_cache(maxsize=1)
    def get_settings() -> SettingsT:
        config_path = config_path_resolver()
        raw = load_yaml_config(config_path)
        try:
            return settings_model.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    def clear_settings_cache() -> None:
        get_settings.cache_clear()

    return get_settings, clear_settings_cache


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in _SENSITIVE_KEY_PARTS)


def _redact(value: Any, marker: str) -> Any:
    if isinstance(value, dict):
        return {
            key: marker if _is_sensitive(str(key)) else _redact(item, marker)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_redact(item, marker) for item in value]
    return value


def get_safe_model_config(settings: BaseModel, marker: str = REDACTION_MARKER) -> dict[str, Any]:
    """Dump settings to a dict with sensitive-looking values replaced by marker."""
    redacted: dict[str, Any] = _redact(settings.model_dump(), marker)
    return redacted
