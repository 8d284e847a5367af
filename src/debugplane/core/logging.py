"""structlog setup for debugplane.

Every event goes through stdlib logging so one call to configure_logging
controls all outputs. Each output (stderr, stdout, or a file) renders either
JSON or console text at its own level. Events emitted while a request id is
set carry it as ``request_id``, which keeps concurrent config generations
apart in a shared log.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from debugplane.config.models import LoggingConfig, LogOutputConfig

_request_id: ContextVar[str | None] = ContextVar("debugplane_request_id", default=None)
_primary_log_file: Path | None = None


# =============================================================================
# Request correlation
# =============================================================================


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None = None) -> str:
    """Use ``request_id`` for subsequent events, generating one if omitted."""
    rid = request_id or uuid4().hex[:12]
    _request_id.set(rid)
    return rid


def clear_request_id() -> None:
    _request_id.set(None)


class request_scope:  # noqa: N801
    """Correlate the enclosed events, reusing an id already in effect.

    Exceptions raised in the block pass through unmodified.
    """

    __slots__ = ("_requested", "_token")

    def __init__(self, request_id: str | None = None) -> None:
        self._requested = request_id
        self._token: Token[str | None] | None = None

    def __enter__(self) -> str:
        current = _request_id.get()
        if current is not None and self._requested is None:
            return current
        rid = self._requested or uuid4().hex[:12]
        self._token = _request_id.set(rid)
        return rid

    def __exit__(self, *exc_info: object) -> None:
        if self._token is not None:
            _request_id.reset(self._token)
            self._token = None


def _inject_request_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    rid = _request_id.get()
    if rid is not None:
        event_dict.setdefault("request_id", rid)
    return event_dict


# =============================================================================
# Configuration
# =============================================================================


def _stream(destination: str) -> Any:
    """The live stdio stream for ``stderr``/``stdout``, else None."""
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def get_log_file_path() -> Path | None:
    """First file output of the active configuration, if any."""
    return _primary_log_file


def _level_number(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    stream = _stream(output.destination)
    return structlog.dev.ConsoleRenderer(
        colors=stream is not None and stream.isatty(),
        pad_event_to=0,
        pad_level=False,
    )


def _open_handler(destination: str) -> logging.Handler:
    stream = _stream(destination)
    if stream is not None:
        return logging.StreamHandler(stream)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _reset_root(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Install handlers and the structlog pipeline.

    A ``config`` wins over ``json_format``/``level``, which only describe a
    single stderr output. Calling again replaces the previous setup.
    """
    global _primary_log_file
    from debugplane.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )
    base_level = _level_number(config.level, logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _inject_request_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(base_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    _reset_root(root)
    root.setLevel(base_level)

    _primary_log_file = None
    for output in config.outputs:
        if _stream(output.destination) is None and _primary_log_file is None:
            _primary_log_file = Path(output.destination)

        handler = _open_handler(output.destination)
        handler.setLevel(_level_number(output.level, base_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=pre_chain,
            )
        )
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy logger; configuration is resolved on each call, not at import."""
    if name:
        return structlog.get_logger(name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
