"""Layered configuration loading.

Layers, lowest precedence first:

- built-in defaults
- global file: ``~/.config/debugplane/config.yaml``
- repo file: ``<repo>/.debugplane/config.yaml``
- environment: ``DEBUGPLANE__<SECTION>__<KEY>``
- keyword arguments to load_config
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from debugplane.config.models import (
    DebugPlaneConfig,
    LoggingConfig,
    ProbeConfig,
    RegistryConfig,
)
from debugplane.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/debugplane/config.yaml").expanduser()
REPO_CONFIG_RELPATH = Path(".debugplane") / "config.yaml"

# File layers for the load_config call in progress
_file_layers: ContextVar[dict[str, Any]] = ContextVar("debugplane_file_layers")


def _read_layer(path: Path) -> dict[str, Any]:
    """Parse one YAML layer; a missing file is an empty layer."""
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _overlay(lower: dict[str, Any], upper: dict[str, Any]) -> dict[str, Any]:
    """Recursively lay ``upper`` over ``lower``; non-mapping values replace."""
    merged = dict(lower)
    for key, value in upper.items():
        below = merged.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            merged[key] = _overlay(below, value)
        else:
            merged[key] = value
    return merged


class _Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DEBUGPLANE__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    probe: ProbeConfig = ProbeConfig()
    registry: RegistryConfig = RegistryConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # First source wins
        files = InitSettingsSource(settings_cls, init_kwargs=_file_layers.get({}))
        return (init_settings, env_settings, files)


def _invalid(error: ValidationError) -> ConfigError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return ConfigError.invalid_value(field, first.get("input"), first["msg"])


def load_config(repo_root: Path | None = None, **kwargs: Any) -> DebugPlaneConfig:
    """Resolve the configuration for ``repo_root`` (default: current directory).

    Raises:
        ConfigError: A YAML file does not parse, or a value fails validation.
    """
    root = repo_root or Path.cwd()
    layers = _overlay(_read_layer(GLOBAL_CONFIG_PATH), _read_layer(root / REPO_CONFIG_RELPATH))

    token = _file_layers.set(layers)
    try:
        settings = _Settings(**kwargs)
    except ValidationError as e:
        raise _invalid(e) from e
    finally:
        _file_layers.reset(token)
    return DebugPlaneConfig.model_validate(settings.model_dump())
