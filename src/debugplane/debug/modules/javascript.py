"""JavaScript/TypeScript language module (Node.js debugger).

Jest and Mocha differ only in the binary they launch and how they filter to
one test (``--testNamePattern`` vs ``--grep``). TypeScript sources add the
ts-node loader and point it at the project's tsconfig.
"""

from __future__ import annotations

from debugplane.debug.framework import Framework, LanguageModule
from debugplane.debug.models import NodeDebugConfig, PlatformOverride, SymbolInfo, TestConfig
from debugplane.debug.modules.paths import WORKSPACE_FOLDER, in_workspace, templated_file

INTEGRATED_TERMINAL = "integratedTerminal"
TYPESCRIPT_SUFFIXES = (".ts", ".tsx")
TS_NODE_LOADER = ["-r", "ts-node/register"]


def is_typescript(file_path: str) -> bool:
    return file_path.endswith(TYPESCRIPT_SUFFIXES)


def _ts_env(file_path: str) -> dict[str, str] | None:
    if not is_typescript(file_path):
        return None
    return {"TS_NODE_PROJECT": in_workspace("tsconfig.json")}


def _ts_runtime_args(file_path: str) -> list[str] | None:
    return list(TS_NODE_LOADER) if is_typescript(file_path) else None


# =============================================================================
# Jest
# =============================================================================


def _jest_args(symbol: SymbolInfo) -> list[str]:
    return ["--runInBand", "--testNamePattern", symbol.name]


def build_jest_debug_config(symbol: SymbolInfo) -> NodeDebugConfig:
    return NodeDebugConfig(
        name=f"Jest: {symbol.name}",
        program=in_workspace("node_modules/.bin/jest"),
        args=_jest_args(symbol),
        cwd=WORKSPACE_FOLDER,
        console=INTEGRATED_TERMINAL,
        env=_ts_env(symbol.file_path),
        runtime_args=_ts_runtime_args(symbol.file_path),
        # .bin shims are shell scripts; Windows needs the real entry point
        windows=PlatformOverride(program=in_workspace("node_modules/jest/bin/jest")),
    )


def build_jest_test_config(symbol: SymbolInfo) -> TestConfig:
    return TestConfig(
        framework="jest",
        test_command="jest",
        args=_jest_args(symbol),
        cwd=WORKSPACE_FOLDER,
    )


# =============================================================================
# Mocha
# =============================================================================


def build_mocha_debug_config(symbol: SymbolInfo) -> NodeDebugConfig:
    return NodeDebugConfig(
        name=f"Mocha: {symbol.name}",
        program=in_workspace("node_modules/.bin/mocha"),
        args=["--grep", symbol.name],
        cwd=WORKSPACE_FOLDER,
        console=INTEGRATED_TERMINAL,
        runtime_args=_ts_runtime_args(symbol.file_path),
        env=_ts_env(symbol.file_path),
    )


def build_mocha_test_config(symbol: SymbolInfo) -> TestConfig:
    return TestConfig(
        framework="mocha",
        test_command="mocha",
        args=["--grep", symbol.name],
        cwd=WORKSPACE_FOLDER,
    )


def build_default_config(file_path: str, workspace_root: str) -> NodeDebugConfig:
    """Launch the current file with node (through ts-node for TypeScript)."""
    return NodeDebugConfig(
        name="Node.js: TypeScript File" if is_typescript(file_path) else "Node.js: JavaScript File",
        program=templated_file(file_path, workspace_root),
        cwd=WORKSPACE_FOLDER,
        console=INTEGRATED_TERMINAL,
        runtime_args=_ts_runtime_args(file_path),
        env=_ts_env(file_path),
    )


JEST = Framework(
    name="jest",
    file_patterns=(
        "**/*.test.js",
        "**/*.test.ts",
        "**/*.spec.js",
        "**/*.spec.ts",
        "**/test/**",
        "**/tests/**",
        "jest.config.*",
        "package.json",
    ),
    priority=10,
    debug_config=build_jest_debug_config,
    test_config=build_jest_test_config,
    setup_instructions="Install Jest: npm install --save-dev jest",
    requirements=("Node.js", "Jest", "TypeScript (for TS projects)"),
)

MOCHA = Framework(
    name="mocha",
    file_patterns=(
        "**/test/**",
        "**/tests/**",
        "*test.js",
        "*test.ts",
        "*spec.js",
        "*spec.ts",
        "mocha.opts",
    ),
    priority=5,
    debug_config=build_mocha_debug_config,
    test_config=build_mocha_test_config,
    setup_instructions="Install Mocha: npm install --save-dev mocha",
    requirements=("Node.js", "Mocha", "TypeScript (for TS projects)"),
)

SETUP_INSTRUCTIONS = """\
# JavaScript/TypeScript Debugging Setup

## Installation
    npm install -g typescript ts-node
    npm install --save-dev jest   # or: npm install --save-dev mocha

## Common Issues
- ts-node must be installed for TypeScript debugging
- Check that tsconfig.json is valid
- node_modules must contain the selected test runner
"""

javascript_module = LanguageModule(
    language="javascript",
    display_name="JavaScript/TypeScript",
    file_extensions=("js", "mjs", "cjs", "ts", "tsx", "jsx"),
    default_debug_type="node",
    frameworks=(JEST, MOCHA),
    default_config=build_default_config,
    setup_instructions=SETUP_INSTRUCTIONS,
    requirements=("Node.js 14+", "TypeScript (for TS projects)", "Testing framework of choice"),
    documentation="https://code.visualstudio.com/docs/nodejs/nodejs-tutorial",
    tools=("node",),
)
