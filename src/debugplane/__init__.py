"""debugplane: debug/run configuration generation for located code symbols."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("debugplane")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"
