"""Config module exports."""

from debugplane.config.loader import load_config
from debugplane.config.models import (
    DebugPlaneConfig,
    LoggingConfig,
    LogOutputConfig,
    ProbeConfig,
    RegistryConfig,
)

__all__ = [
    "load_config",
    "DebugPlaneConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ProbeConfig",
    "RegistryConfig",
]
