"""
Configuration Management for Tokenseal
======================================

SignerConfig holds everything a Signer needs. All defaults are resolved and
validated when the config is created, and the dataclass is frozen afterwards, so a
config (and any signer built from it) can be shared between threads without locks.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from .algorithms import HMACAlgorithm, SigningAlgorithm
from .encoding import BASE64_ALPHABET, want_bytes
from .error_handling import SignerConfigurationError, log_configuration_validation

logger = logging.getLogger(__name__)

DEFAULT_SALT = b"itsdangerous.Signer"
DEFAULT_SEPARATOR = b"."
DEFAULT_KEY_DERIVATION = "django-concat"
DEFAULT_DIGEST_METHOD = hashlib.sha1

KEY_DERIVATIONS = ("concat", "django-concat", "hmac", "none")


@dataclass(frozen=True)
class SignerConfig:
    """Immutable signer configuration with every default substituted."""

    secret_key: Union[str, bytes, None] = field(default=None, repr=False)
    salt: Union[str, bytes, None] = None
    separator: Union[str, bytes, None] = None
    key_derivation: Optional[str] = None
    digest_method: Optional[Callable] = None
    algorithm: Optional[SigningAlgorithm] = None

    @log_configuration_validation("SignerConfig")
    def __post_init__(self):
        """Resolve defaults and validate the signer configuration."""
        if self.secret_key is None:
            raise SignerConfigurationError("secret_key is required")

        salt = DEFAULT_SALT if self.salt is None else self.salt
        separator = DEFAULT_SEPARATOR if self.separator is None else self.separator
        key_derivation = self.key_derivation or DEFAULT_KEY_DERIVATION
        digest_method = self.digest_method or DEFAULT_DIGEST_METHOD

        try:
            secret_key = want_bytes(self.secret_key)
            salt = want_bytes(salt)
            separator = want_bytes(separator)
        except TypeError as e:
            raise SignerConfigurationError(str(e)) from e

        if not separator:
            raise SignerConfigurationError("The separator must not be empty")

        if set(separator) & set(BASE64_ALPHABET):
            raise SignerConfigurationError(
                "The given separator cannot be used because it may be contained in "
                "the signature itself. ASCII letters, digits, and '-_=' must not be used.",
                {"separator": separator},
            )

        if key_derivation not in KEY_DERIVATIONS:
            raise SignerConfigurationError(
                f"Unknown key derivation method: {key_derivation}",
                {"valid_methods": KEY_DERIVATIONS},
            )

        if not callable(digest_method):
            raise SignerConfigurationError("digest_method must be a hashlib-style constructor")

        algorithm = self.algorithm
        if algorithm is None:
            algorithm = HMACAlgorithm(digest_method)
        elif not isinstance(algorithm, SigningAlgorithm):
            raise SignerConfigurationError(
                f"algorithm must be a SigningAlgorithm, got {type(algorithm).__name__}"
            )

        object.__setattr__(self, "secret_key", secret_key)
        object.__setattr__(self, "salt", salt)
        object.__setattr__(self, "separator", separator)
        object.__setattr__(self, "key_derivation", key_derivation)
        object.__setattr__(self, "digest_method", digest_method)
        object.__setattr__(self, "algorithm", algorithm)

        logger.debug(
            f"Signer configured: derivation={key_derivation}, "
            f"digest={_digest_name(digest_method)}, salt={salt!r}, separator={separator!r}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Describe the configuration without exposing the secret."""
        return {
            "salt": self.salt,
            "separator": self.separator,
            "key_derivation": self.key_derivation,
            "digest_method": _digest_name(self.digest_method),
            "algorithm": type(self.algorithm).__name__,
        }


def _digest_name(digest_method: Callable) -> str:
    return getattr(digest_method, "__name__", repr(digest_method))
