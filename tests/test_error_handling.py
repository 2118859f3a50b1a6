"""
Tests for the error_handling module.

Covers:
- Exception hierarchy and context
- with_error_handling conversion and chaining
- Configuration validation logging
"""

import logging
from datetime import datetime, timezone

import pytest

from tokenseal.error_handling import (
    BadData,
    BadTimeSignature,
    SignatureExpired,
    SignerConfigurationError,
    SigningError,
    TokenEncodingError,
    log_configuration_validation,
    with_error_handling,
)


class TestErrorHierarchy:
    def test_signing_error_base(self):
        error = SigningError("Test message")
        assert str(error) == "Test message"
        assert error.message == "Test message"
        assert error.context == {}

    def test_context_is_kept(self):
        error = SigningError("Test message", {"field": "signature"})
        assert error.context == {"field": "signature"}

    def test_error_logged_with_context(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="tokenseal.error_handling"):
            SigningError("Something broke", {"length": 3})
        assert "Signing error: Something broke (length=3)" in caplog.text

    @pytest.mark.parametrize(
        "error_class",
        [SignerConfigurationError, TokenEncodingError, BadData, BadTimeSignature, SignatureExpired],
    )
    def test_all_errors_derive_from_signing_error(self, error_class):
        assert issubclass(error_class, SigningError)

    def test_verification_errors_derive_from_bad_data(self):
        assert issubclass(BadTimeSignature, BadData)
        assert issubclass(SignatureExpired, BadTimeSignature)
        assert not issubclass(SignerConfigurationError, BadData)

    def test_bad_data_payload(self):
        assert BadData("x").payload is None
        assert BadData("x", payload=b"value").payload == b"value"

    def test_signature_expired_date_signed(self):
        error = SignatureExpired("expired", timestamp=0)
        assert error.date_signed == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert SignatureExpired("expired").date_signed is None
        assert SignatureExpired("expired", timestamp=2**64 - 1).date_signed is None


class TestWithErrorHandling:
    def test_returns_result(self):
        @with_error_handling(TokenEncodingError)
        def ok():
            return 42

        assert ok() == 42

    def test_converts_unexpected_exceptions(self):
        @with_error_handling(TokenEncodingError, context={"field": "timestamp"})
        def fails():
            raise OverflowError("too big")

        with pytest.raises(TokenEncodingError, match="Error in fails: too big") as exc_info:
            fails()

        error = exc_info.value
        assert isinstance(error.__cause__, OverflowError)
        assert error.context["field"] == "timestamp"
        assert error.context["function"] == "fails"
        assert error.context["original_error_type"] == "OverflowError"

    def test_signing_errors_pass_through(self):
        @with_error_handling(TokenEncodingError)
        def fails():
            raise BadData("bad")

        with pytest.raises(BadData):
            fails()

    def test_preserves_function_metadata(self):
        @with_error_handling()
        def documented():
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestLogConfigurationValidation:
    def test_success_logged(self, caplog):
        class Config:
            @log_configuration_validation("TestConfig")
            def validate(self):
                return "ok"

        with caplog.at_level(logging.DEBUG, logger="tokenseal.error_handling"):
            assert Config().validate() == "ok"
        assert "TestConfig validated" in caplog.text

    def test_configuration_error_logged_with_context(self, caplog):
        class Config:
            @log_configuration_validation("TestConfig")
            def validate(self):
                raise SignerConfigurationError("bad separator", {"separator": b"a"})

        with caplog.at_level(logging.DEBUG, logger="tokenseal.error_handling"):
            with pytest.raises(SignerConfigurationError, match="bad separator"):
                Config().validate()
        assert "TestConfig rejected: bad separator (separator=b'a')" in caplog.text

    def test_unexpected_error_converted(self, caplog):
        class Config:
            @log_configuration_validation("TestConfig")
            def validate(self):
                raise ValueError("bad value")

        with caplog.at_level(logging.DEBUG, logger="tokenseal.error_handling"):
            with pytest.raises(SignerConfigurationError, match="Invalid TestConfig: bad value") as exc_info:
                Config().validate()
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.context == {"config_class": "TestConfig"}
        assert "TestConfig rejected: unexpected ValueError: bad value" in caplog.text
