"""Debug configuration core models.

SymbolInfo is the input unit handed over by symbol discovery. DebugConfig and
TestConfig are the outputs of the generation engine. DebugConfig is a tagged
union over ``type``: every variant shares the required launch fields and keeps
an open extension map for adapter-specific keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Symbols
# =============================================================================


class SymbolKind(str, Enum):
    """Category of a located code construct."""

    FILE = "file"
    MODULE = "module"
    NAMESPACE = "namespace"
    PACKAGE = "package"
    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    ENUM = "enum"
    INTERFACE = "interface"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"


@dataclass(frozen=True, slots=True)
class SymbolInfo:
    """A located code construct.

    Attributes:
        name: Simple identifier of the symbol
        path: Identifiers from the outermost enclosing scope to the symbol itself
        kind: Symbol category
        language: Registry lookup key (case-sensitive, e.g. "python", "go")
        file_path: Absolute path of the containing file
        workspace_root: Absolute path of the project root
    """

    name: str
    path: tuple[str, ...]
    kind: SymbolKind
    language: str
    file_path: str
    workspace_root: str

    def __post_init__(self) -> None:
        # Accept any sequence from callers, store an immutable tuple
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def qualified_name(self) -> str:
        return ".".join(self.path)


# =============================================================================
# Debug Configurations
# =============================================================================

RequestKind = Literal["launch", "attach"]
GoMode = Literal["debug", "test", "auto", "exec"]


class DebugConfig(BaseModel):
    """Launch configuration base.

    Unknown keys are kept as extra fields so adapter-specific settings
    survive validation and serialization.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str
    name: str
    request: RequestKind = "launch"

    def to_launch_dict(self) -> dict[str, Any]:
        """Render as a launch.json entry (camelCase keys, unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GoDebugConfig(DebugConfig):
    """Delve launch configuration."""

    type: Literal["go"] = "go"  # type: ignore[assignment]
    mode: GoMode = "auto"
    program: str
    args: list[str] | None = None
    env: dict[str, str] | None = None


class PythonDebugConfig(DebugConfig):
    """debugpy launch configuration. Either ``module`` or ``program`` is set."""

    type: Literal["python"] = "python"  # type: ignore[assignment]
    module: str | None = None
    program: str | None = None
    args: list[str] | None = None
    cwd: str | None = None
    env: dict[str, str] | None = None
    console: str | None = None
    just_my_code: bool | None = Field(default=None, alias="justMyCode")


class PlatformOverride(BaseModel):
    """Per-OS launch overrides (e.g. the ``windows`` block)."""

    model_config = ConfigDict(extra="allow")

    program: str | None = None


class NodeDebugConfig(DebugConfig):
    """Node.js launch configuration."""

    type: Literal["node"] = "node"  # type: ignore[assignment]
    program: str
    args: list[str] | None = None
    cwd: str | None = None
    console: str | None = None
    env: dict[str, str] | None = None
    runtime_args: list[str] | None = Field(default=None, alias="runtimeArgs")
    windows: PlatformOverride | None = None


_VARIANTS: dict[str, type[DebugConfig]] = {
    "go": GoDebugConfig,
    "python": PythonDebugConfig,
    "node": NodeDebugConfig,
}


def parse_debug_config(data: Mapping[str, Any]) -> DebugConfig:
    """Validate a launch.json entry into its typed variant.

    Unknown ``type`` values validate against the open base model.
    """
    config_cls = _VARIANTS.get(str(data.get("type")), DebugConfig)
    return config_cls.model_validate(dict(data))


# =============================================================================
# Test Configurations
# =============================================================================


@dataclass
class TestConfig:
    """Command line for running a single symbol under its test runner."""

    __test__ = False

    framework: str
    test_command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] | None = None
    cwd: str | None = None

    def command_line(self) -> list[str]:
        return [*self.test_command.split(), *self.args]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "framework": self.framework,
            "testCommand": self.test_command,
            "args": list(self.args),
        }
        if self.env is not None:
            result["env"] = dict(self.env)
        if self.cwd is not None:
            result["cwd"] = self.cwd
        return result
