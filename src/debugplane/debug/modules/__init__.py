"""Built-in language modules."""

from debugplane.debug.framework import LanguageModule
from debugplane.debug.modules.golang import golang_module
from debugplane.debug.modules.javascript import javascript_module
from debugplane.debug.modules.python import python_module

BUILTIN_MODULES: tuple[LanguageModule, ...] = (
    python_module,
    golang_module,
    javascript_module,
)

__all__ = [
    "BUILTIN_MODULES",
    "golang_module",
    "javascript_module",
    "python_module",
]
