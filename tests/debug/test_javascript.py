"""Tests for the JavaScript/TypeScript language module."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from debugplane.debug.models import SymbolInfo
from debugplane.debug.modules.javascript import (
    JEST,
    MOCHA,
    build_default_config,
    build_jest_debug_config,
    build_jest_test_config,
    build_mocha_debug_config,
    build_mocha_test_config,
    is_typescript,
    javascript_module,
)
from debugplane.debug.probe import StaticProbe
from debugplane.debug.registry import ModuleRegistry

SymbolFactory = Callable[..., SymbolInfo]


@pytest.fixture
def js_symbol(make_symbol: SymbolFactory) -> SymbolInfo:
    return make_symbol("adds numbers", language="javascript", file_path="/workspace/sum.test.js")


@pytest.fixture
def ts_symbol(make_symbol: SymbolFactory) -> SymbolInfo:
    return make_symbol("adds numbers", language="javascript", file_path="/workspace/sum.test.ts")


class TestTypeScriptDetection:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [("a.ts", True), ("a.tsx", True), ("a.js", False), ("a.d.json", False)],
    )
    def test_is_typescript(self, path: str, expected: bool) -> None:
        assert is_typescript(path) is expected


class TestJest:
    """Jest launch and test configurations."""

    def test_debug_config_javascript(self, js_symbol: SymbolInfo) -> None:
        launch = build_jest_debug_config(js_symbol).to_launch_dict()

        assert launch["type"] == "node"
        assert launch["program"] == "${workspaceFolder}/node_modules/.bin/jest"
        assert launch["args"] == ["--runInBand", "--testNamePattern", "adds numbers"]
        assert launch["windows"] == {"program": "${workspaceFolder}/node_modules/jest/bin/jest"}
        assert "runtimeArgs" not in launch
        assert "env" not in launch

    def test_debug_config_typescript(self, ts_symbol: SymbolInfo) -> None:
        launch = build_jest_debug_config(ts_symbol).to_launch_dict()

        assert launch["runtimeArgs"] == ["-r", "ts-node/register"]
        assert launch["env"] == {"TS_NODE_PROJECT": "${workspaceFolder}/tsconfig.json"}

    def test_test_config(self, js_symbol: SymbolInfo) -> None:
        config = build_jest_test_config(js_symbol)
        assert config.command_line() == ["jest", "--runInBand", "--testNamePattern", "adds numbers"]


class TestMocha:
    """Mocha launch and test configurations."""

    def test_debug_config(self, ts_symbol: SymbolInfo) -> None:
        launch = build_mocha_debug_config(ts_symbol).to_launch_dict()

        assert launch["program"] == "${workspaceFolder}/node_modules/.bin/mocha"
        assert launch["args"] == ["--grep", "adds numbers"]
        assert launch["runtimeArgs"] == ["-r", "ts-node/register"]
        assert "windows" not in launch

    def test_test_config(self, js_symbol: SymbolInfo) -> None:
        assert build_mocha_test_config(js_symbol).to_dict() == {
            "framework": "mocha",
            "testCommand": "mocha",
            "args": ["--grep", "adds numbers"],
            "cwd": "${workspaceFolder}",
        }


class TestDefaultConfig:
    def test_javascript_file(self) -> None:
        config = build_default_config("/workspace/src/index.js", "/workspace")

        assert config.name == "Node.js: JavaScript File"
        assert config.program == "${workspaceFolder}/src/index.js"
        assert config.runtime_args is None

    def test_typescript_file(self) -> None:
        config = build_default_config("/workspace/src/index.ts", "/workspace")

        assert config.name == "Node.js: TypeScript File"
        assert config.runtime_args == ["-r", "ts-node/register"]


class TestDetection:
    """Jest vs Mocha precedence."""

    def test_framework_table(self) -> None:
        assert javascript_module.frameworks == (JEST, MOCHA)
        assert JEST.priority > MOCHA.priority
        assert javascript_module.handles_extension("TSX")

    @pytest.mark.asyncio
    async def test_jest_wins_when_both_match(self, js_symbol: SymbolInfo) -> None:
        registry = ModuleRegistry(StaticProbe(["test/sum.js", "package.json"]), [javascript_module])
        assert await registry.detect_framework(js_symbol) is JEST

    @pytest.mark.asyncio
    async def test_mocha_from_root_spec_file(self, js_symbol: SymbolInfo) -> None:
        registry = ModuleRegistry(StaticProbe(["sumspec.js"]), [javascript_module])

        config = await registry.generate_debug_config(js_symbol)

        assert config.name == "Mocha: adds numbers"
