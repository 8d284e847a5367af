"""Tests for error types and codes."""

import pytest

from debugplane.core.errors import (
    ConfigError,
    DebugPlaneError,
    ErrorCode,
    ProbeError,
    RegistryError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.UNREGISTERED_LANGUAGE, 3000),
            (ErrorCode.PROBE_INVALID_PATTERN, 4000),
            (ErrorCode.PROBE_FAILED, 4000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestDebugPlaneError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = DebugPlaneError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = DebugPlaneError(code=ErrorCode.PROBE_FAILED, message="Something broke")

        assert str(error) == "[4002] PROBE_FAILED: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(DebugPlaneError) as exc_info:
            raise RegistryError.unregistered_language("cobol")

        assert exc_info.value.code == ErrorCode.UNREGISTERED_LANGUAGE


class TestConfigError:
    """ConfigError factory method tests."""

    def test_given_parse_failure_when_parse_error_then_includes_path(self) -> None:
        error = ConfigError.parse_error("/path/to/config.yaml", "invalid syntax")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/path/to/config.yaml" in error.message
        assert error.details == {"path": "/path/to/config.yaml", "reason": "invalid syntax"}

    def test_given_bad_value_when_invalid_value_then_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("probe.excluded_dirs", ["a/b"], "bad name")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["field"] == "probe.excluded_dirs"
        assert error.details["value"] == "['a/b']"


class TestRegistryError:
    """RegistryError factory method tests."""

    def test_given_language_when_unregistered_then_not_retryable(self) -> None:
        error = RegistryError.unregistered_language("cobol")

        assert error.error_name == "UNREGISTERED_LANGUAGE"
        assert error.retryable is False
        assert error.details == {"language": "cobol"}
        assert "cobol" in str(error)


class TestProbeError:
    """ProbeError factory method tests."""

    def test_given_bad_pattern_when_invalid_pattern_then_records_reason(self) -> None:
        error = ProbeError.invalid_pattern("/abs/*.py", "pattern must be workspace-relative")

        assert error.code == ErrorCode.PROBE_INVALID_PATTERN
        assert error.details["pattern"] == "/abs/*.py"
        assert error.retryable is False

    def test_given_io_failure_when_failed_then_retryable(self) -> None:
        error = ProbeError.failed("**/*.go", "permission denied")

        assert error.code == ErrorCode.PROBE_FAILED
        assert error.retryable is True
