"""Go language module (Delve via the Go extension).

Symbols are classified before synthesis:
- test-style: in a ``*_test.go`` file and named ``Test*``, ``Benchmark*`` or
  ``Example*``; launched in ``test`` mode filtered to exactly that symbol
- entry-point: ``main`` inside a ``main`` scope; launched in ``debug`` mode
- plain: anything else; launched in ``auto`` mode

All three launch the containing package directory, not the single file.
"""

from __future__ import annotations

from debugplane.debug.framework import Framework, LanguageModule
from debugplane.debug.models import GoDebugConfig, SymbolInfo, TestConfig
from debugplane.debug.modules.paths import (
    CURRENT_FILE,
    WORKSPACE_FOLDER,
    file_directory,
    file_name,
)

TEST_FILE_SUFFIX = "_test.go"
TEST_PREFIXES = ("Test", "Benchmark", "Example")
ENTRY_FUNCTION = "main"
ENTRY_PACKAGE = "main"

_REQUIREMENTS = ("Go 1.18+", "Delve debugger", "Go extension for VS Code")


def _go_env() -> dict[str, str]:
    return {"GOPATH": WORKSPACE_FOLDER, "GO111MODULE": "on"}


def is_test_function(symbol: SymbolInfo) -> bool:
    return symbol.file_path.endswith(TEST_FILE_SUFFIX) and symbol.name.startswith(TEST_PREFIXES)


def is_main_function(symbol: SymbolInfo) -> bool:
    return symbol.name == ENTRY_FUNCTION and ENTRY_PACKAGE in symbol.path


def build_debug_config(symbol: SymbolInfo) -> GoDebugConfig:
    """Launch configuration for a Go symbol, by classification."""
    program = file_directory(symbol.file_path, symbol.workspace_root)

    if is_test_function(symbol):
        return GoDebugConfig(
            name=f"Go Test: {symbol.name}",
            mode="test",
            program=program,
            args=["-test.run", f"^{symbol.name}$", "-test.v"],
            env=_go_env(),
        )
    if is_main_function(symbol):
        return GoDebugConfig(
            name=f"Go Debug: {symbol.name} ({program})",
            mode="debug",
            program=program,
            env=_go_env(),
        )
    return GoDebugConfig(
        name=f"Go Debug: {symbol.name} ({program})",
        mode="auto",
        program=program,
        env=_go_env(),
    )


def build_test_config(symbol: SymbolInfo) -> TestConfig:
    """``go test`` invocation for the symbol's package."""
    package_dir = file_directory(symbol.file_path, symbol.workspace_root)
    if is_test_function(symbol):
        args = ["-run", f"^{symbol.name}$", "-v", package_dir]
    else:
        args = ["-v", package_dir]
    return TestConfig(
        framework="go-test",
        test_command="go test",
        args=args,
        cwd=package_dir,
        env=_go_env(),
    )


def build_default_config(file_path: str, workspace_root: str) -> GoDebugConfig:
    """Fallback by file name when no Go framework is detected."""
    name = file_name(file_path)
    package_dir = file_directory(file_path, workspace_root)

    if name == "main.go":
        return GoDebugConfig(
            name="Launch file",
            mode="debug",
            program=CURRENT_FILE,
            env=_go_env(),
        )
    if name.endswith(TEST_FILE_SUFFIX):
        return GoDebugConfig(
            name="Go: Launch Tests",
            mode="test",
            program=package_dir,
            args=["-test.v"],
            env=_go_env(),
        )
    return GoDebugConfig(
        name=f"Go: Launch Package ({package_dir})",
        mode="auto",
        program=package_dir,
        env=_go_env(),
    )


GO_TEST = Framework(
    name="go-test",
    file_patterns=("**/*_test.go", "go.mod", "go.sum"),
    priority=10,
    debug_config=build_debug_config,
    test_config=build_test_config,
    setup_instructions="Install Go and Delve debugger for test debugging",
    requirements=_REQUIREMENTS,
)

GO_MAIN = Framework(
    name="go-main",
    file_patterns=("**/main.go", "go.mod"),
    priority=8,
    debug_config=build_debug_config,
    setup_instructions="Ensure main function is properly structured for debugging",
    requirements=_REQUIREMENTS,
)

SETUP_INSTRUCTIONS = """\
# Go Debugging Setup

## Installation
    go install github.com/go-delve/delve/cmd/dlv@latest
    export PATH="$PATH:$(go env GOPATH)/bin"

## Symbol handling
- main functions launch the package in debug mode
- Test*, Benchmark* and Example* functions in *_test.go files launch in test
  mode, filtered to the selected function
- any other function launches its package in auto mode

## Common Issues
- Ensure Delve is installed and in your PATH
- Test functions must be in files ending with _test.go
"""

golang_module = LanguageModule(
    language="go",
    display_name="Go",
    file_extensions=("go",),
    default_debug_type="go",
    frameworks=(GO_TEST, GO_MAIN),
    default_config=build_default_config,
    setup_instructions=SETUP_INSTRUCTIONS,
    requirements=_REQUIREMENTS,
    documentation="https://code.visualstudio.com/docs/go/go-tutorial",
    tools=("go", "dlv"),
)
