"""Framework rules and language modules.

A Framework is a named testing/debugging convention: marker globs used as
workspace existence probes, a priority, and the factories that turn a symbol
into configuration. A LanguageModule is the closed catalog of frameworks for
one language plus its default configuration factory.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from debugplane.debug.models import DebugConfig, SymbolInfo, TestConfig

DebugConfigFactory = Callable[[SymbolInfo], DebugConfig]
TestConfigFactory = Callable[[SymbolInfo], TestConfig]
DefaultConfigFactory = Callable[[str, str], DebugConfig]


@dataclass(frozen=True, slots=True)
class Framework:
    """A testing/debugging convention for one language.

    Attributes:
        name: Identifier, unique within its module (e.g., "pytest", "go-test")
        file_patterns: Globs probed for existence anywhere in the workspace
        priority: Higher = preferred when several frameworks are present
        debug_config: Builds the launch configuration for a symbol
        test_config: Builds the test command for a symbol, if the runner has one
        setup_instructions: Human-readable setup hint
        requirements: Human-readable prerequisite list
    """

    name: str
    file_patterns: tuple[str, ...]
    priority: int
    debug_config: DebugConfigFactory
    test_config: TestConfigFactory | None = None
    setup_instructions: str | None = None
    requirements: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FrameworkInfo:
    """Diagnostic projection of a Framework."""

    name: str
    priority: int


@dataclass(frozen=True, slots=True)
class LanguageModule:
    """Framework catalog and default behavior for one language.

    Attributes:
        language: Registry key (e.g., "python")
        display_name: Human-readable name
        file_extensions: Recognized extensions, lowercase, without the dot
        default_debug_type: Debug adapter identifier used by this module
        frameworks: Framework rules; order only matters between equal priorities
        default_config: Pure factory of (file_path, workspace_root), used when
            no framework is detected
        tools: Executables expected on PATH for debugging to work
    """

    language: str
    display_name: str
    file_extensions: tuple[str, ...]
    default_debug_type: str
    frameworks: tuple[Framework, ...]
    default_config: DefaultConfigFactory
    setup_instructions: str | None = None
    requirements: tuple[str, ...] = ()
    documentation: str | None = None
    tools: tuple[str, ...] = field(default_factory=tuple)

    def handles_extension(self, extension: str) -> bool:
        return extension.lower().lstrip(".") in self.file_extensions
