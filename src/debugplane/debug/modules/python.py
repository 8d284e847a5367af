"""Python language module (debugpy).

pytest outranks unittest: both match the usual test-file conventions, but
pytest also recognizes its own configuration markers and runs unittest-style
tests unchanged.
"""

from __future__ import annotations

from debugplane.debug.framework import Framework, LanguageModule
from debugplane.debug.models import PythonDebugConfig, SymbolInfo, TestConfig
from debugplane.debug.modules.paths import (
    WORKSPACE_FOLDER,
    file_name,
    relative_or_absolute,
    templated_file,
    workspace_relative,
)

INTEGRATED_TERMINAL = "integratedTerminal"


def _pythonpath_env() -> dict[str, str]:
    return {"PYTHONPATH": WORKSPACE_FOLDER}


def pytest_node_id(symbol: SymbolInfo) -> str:
    """``file::Scope::name`` selector, file relative to the workspace root."""
    file_ref = relative_or_absolute(symbol.file_path, symbol.workspace_root)
    return "::".join((file_ref, *symbol.path))


def unittest_reference(symbol: SymbolInfo) -> str:
    """Dotted ``package.module.Scope.name`` reference for ``python -m unittest``."""
    relative = workspace_relative(symbol.file_path, symbol.workspace_root)
    module_path = relative if relative is not None else file_name(symbol.file_path)
    head, _, last = module_path.rpartition("/")
    stem = last.rsplit(".", 1)[0] if "." in last else last
    module = ".".join(part for part in (*head.split("/"), stem) if part)
    return ".".join(part for part in (module, *symbol.path) if part)


def build_pytest_debug_config(symbol: SymbolInfo) -> PythonDebugConfig:
    return PythonDebugConfig(
        name=f"pytest: {symbol.name}",
        module="pytest",
        args=["-s", "-v", pytest_node_id(symbol)],
        cwd=WORKSPACE_FOLDER,
        env=_pythonpath_env(),
        console=INTEGRATED_TERMINAL,
        just_my_code=False,
    )


def build_pytest_test_config(symbol: SymbolInfo) -> TestConfig:
    return TestConfig(
        framework="pytest",
        test_command="pytest",
        args=["-s", "-v", pytest_node_id(symbol)],
        env=_pythonpath_env(),
        cwd=WORKSPACE_FOLDER,
    )


def build_unittest_debug_config(symbol: SymbolInfo) -> PythonDebugConfig:
    return PythonDebugConfig(
        name=f"unittest: {symbol.name}",
        module="unittest",
        args=[unittest_reference(symbol)],
        cwd=WORKSPACE_FOLDER,
        env=_pythonpath_env(),
        console=INTEGRATED_TERMINAL,
        just_my_code=True,
    )


def build_default_config(file_path: str, workspace_root: str) -> PythonDebugConfig:
    """Run the current file as a script."""
    return PythonDebugConfig(
        name="Python: Current File",
        program=templated_file(file_path, workspace_root),
        console=INTEGRATED_TERMINAL,
        just_my_code=True,
        cwd=WORKSPACE_FOLDER,
    )


PYTEST = Framework(
    name="pytest",
    file_patterns=(
        "**/test_*.py",
        "**/*_test.py",
        "**/tests/**",
        "**/conftest.py",
        "pytest.ini",
        "pyproject.toml",
        "setup.cfg",
    ),
    priority=10,
    debug_config=build_pytest_debug_config,
    test_config=build_pytest_test_config,
    setup_instructions="Install pytest: pip install pytest",
    requirements=("pytest", "python", "Python extension for VS Code"),
)

UNITTEST = Framework(
    name="unittest",
    file_patterns=("**/test_*.py", "**/*_test.py", "**/tests/**"),
    priority=5,
    debug_config=build_unittest_debug_config,
    setup_instructions="unittest is built into Python standard library",
    requirements=("python", "Python extension for VS Code"),
)

SETUP_INSTRUCTIONS = """\
# Python Debugging Setup

## Required Extensions
1. Python (ms-python.python)
2. Python Debugger (ms-python.debugpy), usually bundled with the above

## Installation
    pip install pytest

## Common Issues
- Verify the selected interpreter ("Python: Select Interpreter")
- Activate virtual environments before starting the editor
"""

python_module = LanguageModule(
    language="python",
    display_name="Python",
    file_extensions=("py", "pyw", "py3"),
    default_debug_type="python",
    frameworks=(PYTEST, UNITTEST),
    default_config=build_default_config,
    setup_instructions=SETUP_INSTRUCTIONS,
    requirements=("Python 3.7+", "Python extension for VS Code"),
    documentation="https://code.visualstudio.com/docs/python/python-tutorial",
    tools=("python3",),
)
