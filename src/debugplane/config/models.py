"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DEBUGPLANE__SECTION__KEY)
3. Repo YAML (.debugplane/config.yaml)
4. Global YAML (~/.config/debugplane/config.yaml)
5. Built-in defaults (this file)

Examples:
    DEBUGPLANE__LOGGING__LEVEL=DEBUG
    DEBUGPLANE__PROBE__FOLLOW_SYMLINKS=true
    DEBUGPLANE__REGISTRY__DISABLED_LANGUAGES='["javascript"]'
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = (
    ".git",
    "node_modules",
    ".venv",
    "venv",
    "__pycache__",
    ".tox",
    "dist",
    "build",
)


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DEBUGPLANE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every framework probe.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ProbeConfig(BaseModel):
    """Workspace file probe configuration.

    Env vars:
        DEBUGPLANE__PROBE__EXCLUDED_DIRS: JSON list of directory names to skip
        DEBUGPLANE__PROBE__FOLLOW_SYMLINKS: Follow symlinked directories while globbing
    """

    excluded_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS),
        description="Directory names never searched for framework markers. "
        "Vendored trees (node_modules, .venv) would otherwise produce false positives.",
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Follow symlinked directories during marker search.",
    )

    @field_validator("excluded_dirs")
    @classmethod
    def validate_excluded_dirs(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or "/" in name or "\\" in name:
                raise ValueError(f"Excluded dir must be a bare directory name: {name!r}")
        return v


class RegistryConfig(BaseModel):
    """Language module registry configuration.

    Env vars:
        DEBUGPLANE__REGISTRY__DISABLED_LANGUAGES: JSON list of language keys
    """

    disabled_languages: list[str] = Field(
        default_factory=list,
        description="Language keys left out of the default registry.",
    )


class DebugPlaneConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
