"""Language module registry and debug configuration generation.

The registry maps language keys to LanguageModules and runs framework
detection against an injected WorkspaceProbe:

1. Look up the symbol's module (exact, case-sensitive key)
2. Order its frameworks by priority, highest first; equal priorities keep
   their declaration order within the module
3. Probe each framework's patterns; the first hit selects the framework and
   ends the scan
4. The selected framework builds the config; with no framework, the module's
   default factory does

Probe failures never abort detection. They count as "no match", are logged,
and are reported on DetectionResult for callers that need to tell a broken
probe from a genuine absence.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from debugplane.config.models import DebugPlaneConfig
from debugplane.core.errors import RegistryError
from debugplane.core.logging import get_logger, request_scope
from debugplane.debug.framework import Framework, FrameworkInfo, LanguageModule
from debugplane.debug.models import DebugConfig, SymbolInfo, TestConfig
from debugplane.debug.modules import BUILTIN_MODULES
from debugplane.debug.probe import FilesystemProbe, WorkspaceProbe

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ProbeFailure:
    """A pattern probe that raised instead of answering."""

    framework: str
    pattern: str
    error: str


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of framework detection for one symbol."""

    framework: Framework | None
    probe_failures: tuple[ProbeFailure, ...] = ()

    @property
    def degraded(self) -> bool:
        """True if any probe failed, so a None framework may be a false negative."""
        return bool(self.probe_failures)


def resolution_order(frameworks: Sequence[Framework]) -> list[Framework]:
    """Frameworks in the order detection evaluates them.

    Priority descending, then declaration order. The index is an explicit
    secondary key so ties never depend on sort stability.
    """
    ranked = sorted(enumerate(frameworks), key=lambda item: (-item[1].priority, item[0]))
    return [framework for _, framework in ranked]


class ModuleRegistry:
    """Directory of language modules for one host.

    Construct one per host (or per test) and pass it where configs are
    generated. Registration is synchronous; detection and generation are
    coroutines that suspend at every workspace probe.
    """

    def __init__(self, probe: WorkspaceProbe, modules: Iterable[LanguageModule] = ()) -> None:
        self._probe = probe
        self._modules: dict[str, LanguageModule] = {}
        for module in modules:
            self.register(module)

    @property
    def probe(self) -> WorkspaceProbe:
        return self._probe

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, module: LanguageModule) -> None:
        """Insert or replace the module for ``module.language``."""
        replaced = module.language in self._modules
        self._modules[module.language] = module
        log.info(
            "language_module_replaced" if replaced else "language_module_registered",
            language=module.language,
            display_name=module.display_name,
            frameworks=[fw.name for fw in module.frameworks],
        )

    def unregister(self, language: str) -> None:
        if self._modules.pop(language, None) is not None:
            log.info("language_module_unregistered", language=language)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_module(self, language: str) -> LanguageModule | None:
        return self._modules.get(language)

    def get_module_by_extension(self, extension: str) -> LanguageModule | None:
        """First module, in registration order, claiming ``extension``."""
        for module in self._modules.values():
            if module.handles_extension(extension):
                return module
        return None

    def get_supported_languages(self) -> list[str]:
        return list(self._modules)

    def get_all_modules(self) -> list[LanguageModule]:
        return list(self._modules.values())

    def get_framework_info(self, language: str) -> list[FrameworkInfo]:
        """Frameworks for ``language`` in resolution order."""
        module = self.get_module(language)
        if module is None:
            return []
        return [FrameworkInfo(fw.name, fw.priority) for fw in resolution_order(module.frameworks)]

    def get_setup_instructions(self, language: str) -> str | None:
        module = self.get_module(language)
        return module.setup_instructions if module else None

    def get_requirements(self, language: str) -> list[str] | None:
        module = self.get_module(language)
        return list(module.requirements) if module else None

    def validate_setup(self, language: str) -> list[str]:
        """Tools required by the module that are missing from PATH.

        Raises:
            RegistryError: If no module is registered for ``language``.
        """
        module = self._require_module(language)
        missing = [tool for tool in module.tools if shutil.which(tool) is None]
        if missing:
            log.warning("language_tools_missing", language=language, missing=missing)
        return missing

    def _require_module(self, language: str) -> LanguageModule:
        module = self.get_module(language)
        if module is None:
            log.error("unregistered_language", language=language)
            raise RegistryError.unregistered_language(language)
        return module

    # =========================================================================
    # Detection
    # =========================================================================

    async def detect_framework(self, symbol: SymbolInfo) -> Framework | None:
        """Highest-priority framework present in the workspace, if any."""
        result = await self.detect_framework_with_report(symbol)
        return result.framework

    async def detect_framework_with_report(self, symbol: SymbolInfo) -> DetectionResult:
        """Like detect_framework, also reporting probes that failed."""
        module = self.get_module(symbol.language)
        if module is None:
            return DetectionResult(framework=None)
        return await self._detect(module, symbol)

    async def _detect(self, module: LanguageModule, symbol: SymbolInfo) -> DetectionResult:
        # Snapshot before the first await: a concurrent register() only
        # affects detections that start after it
        candidates = resolution_order(module.frameworks)
        failures: list[ProbeFailure] = []

        for framework in candidates:
            if await self._matches(framework, failures):
                log.debug(
                    "framework_detected",
                    language=module.language,
                    symbol=symbol.name,
                    framework=framework.name,
                    priority=framework.priority,
                )
                return DetectionResult(framework, tuple(failures))

        log.debug(
            "framework_not_detected",
            language=module.language,
            symbol=symbol.name,
            probe_failures=len(failures),
        )
        return DetectionResult(None, tuple(failures))

    async def _matches(self, framework: Framework, failures: list[ProbeFailure]) -> bool:
        for pattern in framework.file_patterns:
            try:
                if await self._probe.exists(pattern):
                    return True
            except Exception as e:  # noqa: BLE001
                log.warning(
                    "framework_probe_failed",
                    framework=framework.name,
                    pattern=pattern,
                    error=str(e),
                )
                failures.append(ProbeFailure(framework.name, pattern, str(e)))
        return False

    # =========================================================================
    # Generation
    # =========================================================================

    async def generate_debug_config(self, symbol: SymbolInfo) -> DebugConfig:
        """Launch configuration for ``symbol``.

        Events logged during the call share one request id unless the caller
        already set one.

        Raises:
            RegistryError: If no module is registered for ``symbol.language``.
        """
        module = self._require_module(symbol.language)
        with request_scope():
            result = await self._detect(module, symbol)

            if result.framework is not None:
                config = result.framework.debug_config(symbol)
                log.debug(
                    "debug_config_generated",
                    language=module.language,
                    symbol=symbol.name,
                    framework=result.framework.name,
                )
                return config

            log.debug(
                "default_debug_config_generated",
                language=module.language,
                symbol=symbol.name,
                degraded=result.degraded,
            )
            return module.default_config(symbol.file_path, symbol.workspace_root)

    async def generate_test_config(self, symbol: SymbolInfo) -> TestConfig | None:
        """Test command for ``symbol``, or None when its framework has none.

        Raises:
            RegistryError: If no module is registered for ``symbol.language``.
        """
        module = self._require_module(symbol.language)
        with request_scope():
            result = await self._detect(module, symbol)
        framework = result.framework
        if framework is None or framework.test_config is None:
            return None
        return framework.test_config(symbol)


def create_default_registry(
    config: DebugPlaneConfig | None = None,
    *,
    probe: WorkspaceProbe | None = None,
    workspace_root: Path | None = None,
) -> ModuleRegistry:
    """Registry with the built-in modules minus the configured exclusions.

    Without an explicit probe, the workspace is searched on disk under
    ``workspace_root`` (default: the current directory).
    """
    config = config or DebugPlaneConfig()
    if probe is None:
        probe = FilesystemProbe.from_config(workspace_root or Path.cwd(), config.probe)

    disabled = set(config.registry.disabled_languages)
    registry = ModuleRegistry(probe)
    for module in BUILTIN_MODULES:
        if module.language in disabled:
            log.info("language_module_disabled", language=module.language)
            continue
        registry.register(module)
    return registry
