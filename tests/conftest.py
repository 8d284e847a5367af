"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of debugplane modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("debugplane"):
        del sys.modules[module_name]

from debugplane.debug.models import SymbolInfo, SymbolKind  # noqa: E402

SymbolFactory = Callable[..., SymbolInfo]


@pytest.fixture
def make_symbol() -> SymbolFactory:
    """Build SymbolInfo values rooted at /workspace unless overridden."""

    def _make(
        name: str,
        *,
        language: str,
        file_path: str,
        path: Sequence[str] | None = None,
        kind: SymbolKind = SymbolKind.FUNCTION,
        workspace_root: str = "/workspace",
    ) -> SymbolInfo:
        return SymbolInfo(
            name=name,
            path=tuple(path) if path is not None else (name,),
            kind=kind,
            language=language,
            file_path=file_path,
            workspace_root=workspace_root,
        )

    return _make
