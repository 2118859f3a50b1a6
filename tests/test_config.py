"""
Tests for SignerConfig resolution and validation.
"""

import dataclasses
import hashlib
import logging

import pytest

from tokenseal.algorithms import HMACAlgorithm, NoneAlgorithm
from tokenseal.config import (
    DEFAULT_KEY_DERIVATION,
    DEFAULT_SALT,
    DEFAULT_SEPARATOR,
    KEY_DERIVATIONS,
    SignerConfig,
)
from tokenseal.error_handling import SignerConfigurationError


class TestDefaults:
    """All defaults are substituted when the config is created."""

    def test_defaults_resolved_eagerly(self):
        config = SignerConfig(b"secret")
        assert config.secret_key == b"secret"
        assert config.salt == DEFAULT_SALT == b"itsdangerous.Signer"
        assert config.separator == DEFAULT_SEPARATOR == b"."
        assert config.key_derivation == DEFAULT_KEY_DERIVATION == "django-concat"
        assert config.digest_method is hashlib.sha1
        assert isinstance(config.algorithm, HMACAlgorithm)
        assert config.algorithm.digest_method is hashlib.sha1

    def test_default_algorithm_uses_configured_digest(self):
        config = SignerConfig(b"secret", digest_method=hashlib.sha256)
        assert config.algorithm.digest_method is hashlib.sha256

    def test_text_settings_coerced_to_bytes(self):
        config = SignerConfig("secret", salt="salt", separator="|")
        assert config.secret_key == b"secret"
        assert config.salt == b"salt"
        assert config.separator == b"|"

    def test_empty_salt_is_kept(self):
        assert SignerConfig(b"secret", salt=b"").salt == b""

    def test_explicit_algorithm_kept(self):
        alg = NoneAlgorithm()
        assert SignerConfig(b"secret", algorithm=alg).algorithm is alg


class TestImmutability:
    def test_config_is_frozen(self):
        config = SignerConfig(b"secret")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.salt = b"other"

    def test_secret_not_in_repr(self):
        config = SignerConfig(b"very-secret-value")
        assert b"very-secret-value".decode() not in repr(config)

    def test_to_dict_omits_secret(self):
        info = SignerConfig(b"very-secret-value").to_dict()
        assert "secret_key" not in info
        assert b"very-secret-value" not in info.values()
        assert info["key_derivation"] == "django-concat"
        assert info["algorithm"] == "HMACAlgorithm"


class TestValidation:
    def test_secret_required(self):
        with pytest.raises(SignerConfigurationError, match="secret_key"):
            SignerConfig()

    @pytest.mark.parametrize("separator", ["a", "Z", "0", "-", "_", "=", ".a", "x.", "::9"])
    def test_separator_overlapping_base64_alphabet_rejected(self, separator):
        with pytest.raises(SignerConfigurationError, match="separator"):
            SignerConfig(b"secret", separator=separator)

    def test_empty_separator_rejected(self):
        with pytest.raises(SignerConfigurationError, match="separator"):
            SignerConfig(b"secret", separator=b"")

    @pytest.mark.parametrize("separator", [".", "|", "::", "~", "\x00", "·"])
    def test_safe_separators_accepted(self, separator):
        config = SignerConfig(b"secret", separator=separator)
        assert config.separator == separator.encode("utf-8")

    @pytest.mark.parametrize("method", KEY_DERIVATIONS)
    def test_known_key_derivations_accepted(self, method):
        assert SignerConfig(b"secret", key_derivation=method).key_derivation == method

    def test_unknown_key_derivation_rejected(self):
        with pytest.raises(SignerConfigurationError, match="Unknown key derivation"):
            SignerConfig(b"secret", key_derivation="pbkdf2")

    def test_digest_must_be_callable(self):
        with pytest.raises(SignerConfigurationError, match="digest_method"):
            SignerConfig(b"secret", digest_method="sha1")

    def test_algorithm_type_checked(self):
        with pytest.raises(SignerConfigurationError, match="SigningAlgorithm"):
            SignerConfig(b"secret", algorithm=object())

    def test_secret_type_checked(self):
        with pytest.raises(SignerConfigurationError):
            SignerConfig(12345)


class TestConfigLogging:
    def test_validation_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="tokenseal"):
            SignerConfig(b"hunter2-secret", salt=b"logged-salt")
        assert "SignerConfig validated" in caplog.text
        assert "logged-salt" in caplog.text
        assert "hunter2-secret" not in caplog.text

    def test_validation_failure_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="tokenseal"):
            with pytest.raises(SignerConfigurationError):
                SignerConfig(b"secret", separator="a")
        assert "SignerConfig rejected: The given separator cannot be used" in caplog.text
        assert "separator=b'a'" in caplog.text
