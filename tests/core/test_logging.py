"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from debugplane.config.models import LoggingConfig, LogOutputConfig
from debugplane.core.errors import RegistryError
from debugplane.core.logging import (
    clear_request_id,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_request_id,
    request_scope,
    set_request_id,
)
from debugplane.debug.models import SymbolInfo, SymbolKind
from debugplane.debug.modules import python_module
from debugplane.debug.probe import StaticProbe
from debugplane.debug.registry import ModuleRegistry


class TestRequestIdCorrelation:
    """Request ID context variable tests."""

    def setup_method(self) -> None:
        clear_request_id()

    def test_given_request_id_when_set_then_can_retrieve(self) -> None:
        result = set_request_id("test-123")

        assert result == "test-123"
        assert get_request_id() == "test-123"

    def test_given_no_id_when_set_then_generates_uuid(self) -> None:
        rid = set_request_id()

        assert len(rid) == 12  # uuid4().hex[:12]

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        set_request_id("to-clear")

        clear_request_id()

        assert get_request_id() is None

    def test_given_scope_when_exited_then_previous_id_restored(self) -> None:
        with request_scope("inner") as rid:
            assert rid == "inner"
            assert get_request_id() == "inner"

        assert get_request_id() is None

    def test_given_active_id_when_scope_entered_then_reused(self) -> None:
        set_request_id("outer")

        with request_scope() as rid:
            assert rid == "outer"

        assert get_request_id() == "outer"

    def test_given_frozen_error_when_raised_in_scope_then_propagates_unchanged(self) -> None:
        error = RegistryError.unregistered_language("cobol")

        with pytest.raises(RegistryError) as exc_info, request_scope("failing"):
            raise error

        assert exc_info.value is error
        assert get_request_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_request_id()

    def test_given_json_format_when_log_then_valid_json_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON format produces valid JSON with required fields."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("framework_detected", framework="pytest")

        # Then
        captured = capsys.readouterr()
        lines = [line for line in captured.err.strip().split("\n") if line]
        data = json.loads(lines[-1])
        assert data["event"] == "framework_detected"
        assert data["framework"] == "pytest"
        assert data["logger"] == "test"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_given_request_id_when_log_then_included(self, tmp_path: Path) -> None:
        """Request correlation ID is attached to every event."""
        log_file = tmp_path / "debugplane.log"
        configure_logging(
            config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))])
        )
        set_request_id("req-42")

        get_logger().info("debug_config_generated")

        data = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert data["request_id"] == "req-42"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()
        assert get_log_file_path() == log_file

    def test_given_multi_output_config_when_configure_then_respects_levels(
        self, tmp_path: Path
    ) -> None:
        """Each output filters by its own level."""
        # Given
        debug_log = tmp_path / "debug.log"
        error_log = tmp_path / "error.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(debug_log), level="DEBUG"),
                LogOutputConfig(format="console", destination=str(error_log), level="ERROR"),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("probe_hit")
        logger.error("unregistered_language")

        # Then
        debug_content = debug_log.read_text()
        error_content = error_log.read_text()
        assert "probe_hit" in debug_content
        assert "unregistered_language" in debug_content
        assert "probe_hit" not in error_content
        assert "unregistered_language" in error_content
        assert get_log_file_path() == debug_log

    @pytest.mark.asyncio
    async def test_given_module_logger_imported_early_when_configured_then_routed(
        self, tmp_path: Path
    ) -> None:
        """Loggers created at import time follow a later configure_logging call."""
        # Given - debugplane.debug.registry was imported before configuration
        log_file = tmp_path / "registry.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        registry = ModuleRegistry(StaticProbe(["pytest.ini"]), [python_module])
        symbol = SymbolInfo(
            name="test_add",
            path=("test_add",),
            kind=SymbolKind.FUNCTION,
            language="python",
            file_path="/workspace/test_math.py",
            workspace_root="/workspace",
        )

        # When
        await registry.generate_debug_config(symbol)

        # Then
        events = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        detected = [e for e in events if e["event"] == "framework_detected"]
        assert len(detected) == 1
        assert detected[0]["framework"] == "pytest"
        assert detected[0]["logger"] == "debugplane.debug.registry"
        assert detected[0]["request_id"]
