"""Core module exports."""

from debugplane.core.errors import (
    ConfigError,
    DebugPlaneError,
    ErrorCode,
    ProbeError,
    RegistryError,
)
from debugplane.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    request_scope,
    set_request_id,
)

__all__ = [
    # Errors
    "DebugPlaneError",
    "ConfigError",
    "ErrorCode",
    "ProbeError",
    "RegistryError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "request_scope",
    "set_request_id",
]
