"""Debug configuration generation: symbols in, launch configurations out."""

from debugplane.debug.framework import Framework, FrameworkInfo, LanguageModule
from debugplane.debug.models import (
    DebugConfig,
    GoDebugConfig,
    NodeDebugConfig,
    PythonDebugConfig,
    SymbolInfo,
    SymbolKind,
    TestConfig,
    parse_debug_config,
)
from debugplane.debug.probe import FilesystemProbe, StaticProbe, WorkspaceProbe
from debugplane.debug.registry import (
    DetectionResult,
    ModuleRegistry,
    ProbeFailure,
    create_default_registry,
)

__all__ = [
    "DebugConfig",
    "DetectionResult",
    "FilesystemProbe",
    "Framework",
    "FrameworkInfo",
    "GoDebugConfig",
    "LanguageModule",
    "ModuleRegistry",
    "NodeDebugConfig",
    "ProbeFailure",
    "PythonDebugConfig",
    "StaticProbe",
    "SymbolInfo",
    "SymbolKind",
    "TestConfig",
    "WorkspaceProbe",
    "create_default_registry",
    "parse_debug_config",
]
