"""Tests for structured logging."""

import json
from io import StringIO

import pytest
import structlog

from stratum.observability.logging import (
    SecretRedactor,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self) -> None:
        """Should configure JSON format for production."""
        setup_logging(level="INFO", format="json", redact_secrets=False)
        get_logger("test").info("test_message")

    def test_setup_console_format(self) -> None:
        """Should configure console format for development."""
        setup_logging(level="DEBUG", format="console", redact_secrets=False)
        get_logger("test").debug("test_message")

    def test_setup_with_redaction(self) -> None:
        """Should configure secret redaction when enabled."""
        setup_logging(level="INFO", format="json", redact_secrets=True)
        get_logger("test").info("test_message", raw_token="eyJhbGciOiJkaXIifQ..iv.ct.tag")


class TestSecretRedactor:
    """Tests for secret redaction."""

    @pytest.fixture
    def redactor(self) -> SecretRedactor:
        """Create a SecretRedactor instance."""
        return SecretRedactor()

    def test_redacts_key_material_by_key(self, redactor: SecretRedactor) -> None:
        """Should redact key material values."""
        event_dict = {"symmetric_key_material": "s3cret", "cookie_name": "stn"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["symmetric_key_material"] == "[REDACTED]"
        assert result["cookie_name"] == "stn"

    def test_redacts_token_and_cookie_by_key(self, redactor: SecretRedactor) -> None:
        """Should redact token and cookie values."""
        event_dict = {"token": "abc123xyz", "cookie": "stn=abc"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["token"] == "[REDACTED]"
        assert result["cookie"] == "[REDACTED]"

    def test_redacts_token_pattern_in_string_value(self, redactor: SecretRedactor) -> None:
        """Should redact compact JWE tokens found in string values."""
        token = "eyJhbGciOiJkaXIiLCJlbmMiOiJBMjU2R0NNIn0..abc_def.ghi-jkl.mno"
        event_dict = {"message": f"Rejected {token} from client"}
        result = redactor(None, None, event_dict)  # type: ignore
        assert token not in result["message"]
        assert "[TOKEN]" in result["message"]

    def test_redacts_email_pattern_in_string_value(self, redactor: SecretRedactor) -> None:
        """Should redact email patterns found in string values."""
        event_dict = {"setting_value": '"user@example.com"'}
        result = redactor(None, None, event_dict)  # type: ignore
        assert "user@example.com" not in result["setting_value"]
        assert "[EMAIL]" in result["setting_value"]

    def test_handles_nested_dicts_and_lists(self, redactor: SecretRedactor) -> None:
        """Should handle nested dictionaries and lists."""
        event_dict = {
            "provider": {"password": "hunter2", "name": "cookie"},
            "contacts": ["a@example.com", {"secret": "x"}],
        }
        result = redactor(None, None, event_dict)  # type: ignore
        assert result["provider"] == {"password": "[REDACTED]", "name": "cookie"}
        assert result["contacts"] == ["[EMAIL]", {"secret": "[REDACTED]"}]

    def test_preserves_ordinary_data(self, redactor: SecretRedactor) -> None:
        """Should preserve non-secret data."""
        event_dict = {
            "event": "setting_saved",
            "setting_name": "dark_mode",
            "domain_enabled": True,
            "setting_count": 3,
        }
        result = redactor(None, None, event_dict)  # type: ignore
        assert result == event_dict


class TestJSONLogging:
    """Tests for JSON log output format."""

    def test_redacted_json_output(self) -> None:
        """Should produce valid JSON with secrets removed."""
        output = StringIO()
        structlog.configure(
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                SecretRedactor(),
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(0),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(output),
            cache_logger_on_first_use=False,
        )

        structlog.get_logger("test").info("cookie_written", token="abc", setting_count=2)

        parsed = json.loads(output.getvalue().strip())
        assert parsed["event"] == "cookie_written"
        assert parsed["token"] == "[REDACTED]"
        assert parsed["setting_count"] == 2
        assert "timestamp" in parsed
        assert "level" in parsed
