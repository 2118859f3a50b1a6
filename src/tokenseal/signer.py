"""
Token Signing
=============

This module provides Signer, which appends an HMAC signature to a value and verifies
it again later using a shared secret.

Token format::

    <value><separator><base64url-nopad(signature)>

Security Model:
- The signing key is derived from the secret and a salt, so one secret can be used
  for unrelated purposes without the signatures being interchangeable
- Verification splits on the last separator, so values may contain the separator
- Signatures are compared in constant time
- The value is authenticated, not encrypted: anyone holding the token can read it
"""

import hmac
import logging
from typing import Any, Callable, Dict, Optional, Union

from .algorithms import SigningAlgorithm
from .config import SignerConfig
from .encoding import base64_decode, base64_encode, bytes_combine, want_bytes
from .error_handling import BadData, SignerConfigurationError, SigningError

logger = logging.getLogger(__name__)


class Signer:
    """
    Signs values and verifies signed tokens.

    A Signer is immutable once constructed and can be shared between threads.
    """

    def __init__(
        self,
        secret_key: Union[str, bytes, None] = None,
        salt: Union[str, bytes, None] = None,
        separator: Union[str, bytes, None] = None,
        key_derivation: Optional[str] = None,
        digest_method: Optional[Callable] = None,
        algorithm: Optional[SigningAlgorithm] = None,
        *,
        config: Optional[SignerConfig] = None,
    ):
        """
        Initialize the signer.

        Args:
            secret_key: Shared secret used to derive the signing key
            salt: Namespace for the derived key (default ``itsdangerous.Signer``)
            separator: Delimiter between token fields (default ``.``)
            key_derivation: One of ``concat``, ``django-concat``, ``hmac``, ``none``
            digest_method: hashlib constructor used for key derivation and HMAC
            algorithm: Signature algorithm (default HMAC with ``digest_method``)
            config: Ready-made SignerConfig, used instead of the individual settings

        Raises:
            SignerConfigurationError: If the configuration is invalid
        """
        settings = (secret_key, salt, separator, key_derivation, digest_method, algorithm)

        if config is None:
            config = SignerConfig(
                secret_key=secret_key,
                salt=salt,
                separator=separator,
                key_derivation=key_derivation,
                digest_method=digest_method,
                algorithm=algorithm,
            )
        elif any(setting is not None for setting in settings):
            raise SignerConfigurationError(
                "Pass either a SignerConfig or individual settings, not both"
            )
        elif not isinstance(config, SignerConfig):
            raise SignerConfigurationError(
                f"config must be a SignerConfig, got {type(config).__name__}"
            )

        self._config = config

        logger.debug(
            f"{type(self).__name__} initialized: derivation={config.key_derivation}, "
            f"algorithm={type(config.algorithm).__name__}"
        )

    @property
    def config(self) -> SignerConfig:
        return self._config

    @property
    def salt(self) -> bytes:
        return self._config.salt

    @property
    def separator(self) -> bytes:
        return self._config.separator

    @property
    def key_derivation(self) -> str:
        return self._config.key_derivation

    @property
    def digest_method(self) -> Callable:
        return self._config.digest_method

    @property
    def algorithm(self) -> SigningAlgorithm:
        return self._config.algorithm

    def derive_key(self, secret_key: Union[str, bytes, None] = None) -> bytes:
        """
        Derive the signing key from a secret.

        Args:
            secret_key: Secret to derive from (defaults to the configured secret)

        Returns:
            Key passed to the signing algorithm

        Raises:
            SignerConfigurationError: If the key derivation method is unknown
        """
        if secret_key is None:
            secret_key = self._config.secret_key
        else:
            secret_key = want_bytes(secret_key)

        method = self._config.key_derivation
        digest_method = self._config.digest_method
        salt = self._config.salt

        if method == "concat":
            return digest_method(salt + secret_key).digest()
        elif method == "django-concat":
            return digest_method(salt + b"signer" + secret_key).digest()
        elif method == "hmac":
            return hmac.new(secret_key, salt, digest_method).digest()
        elif method == "none":
            return secret_key

        raise SignerConfigurationError(f"Unknown key derivation method: {method}")

    def get_signature(self, value: Union[str, bytes]) -> bytes:
        """Return the base64-encoded signature for ``value``."""
        key = self.derive_key()
        sig = self._config.algorithm.get_signature(key, want_bytes(value))
        return base64_encode(sig)

    def sign(self, value: Union[str, bytes]) -> bytes:
        """Return ``value`` followed by the separator and its signature."""
        value = want_bytes(value)
        return bytes_combine(value, self._config.separator, self.get_signature(value))

    def verify_signature(self, value: Union[str, bytes], sig: Union[str, bytes]) -> bool:
        """
        Verify an encoded signature for ``value``.

        Args:
            value: The signed value
            sig: Base64-encoded signature taken from a token

        Returns:
            True if the signature is valid, False otherwise (including undecodable input)
        """
        try:
            sig = base64_decode(sig)
        except BadData:
            return False

        key = self.derive_key(self._config.secret_key)
        return self._config.algorithm.verify_signature(key, want_bytes(value), sig)

    def unsign(self, signed_value: Union[str, bytes]) -> bytes:
        """
        Verify a signed token and return the original value.

        Args:
            signed_value: Token produced by sign()

        Returns:
            The value that was signed

        Raises:
            BadData: If the separator is missing or the signature does not match
        """
        return self._unsign(signed_value, logging.WARNING)

    def _unsign(self, signed_value: Union[str, bytes], log_level: int) -> bytes:
        """Shared unsign path; a mismatch is logged at ``log_level``."""
        signed_value = want_bytes(signed_value)
        sep = self._config.separator

        if sep not in signed_value:
            raise BadData(f"No {sep!r} found in value")

        value, _, sig = signed_value.rpartition(sep)

        if self.verify_signature(value, sig):
            return value

        logger.log(log_level, f"Signature verification failed for {type(self).__name__}")
        raise BadData(f"Signature {sig!r} does not match", payload=value)

    def validate(self, signed_value: Union[str, bytes]) -> bool:
        """Return True if ``signed_value`` carries a valid signature."""
        try:
            self._unsign(signed_value, logging.DEBUG)
            return True
        except SigningError:
            return False

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about the current signing configuration."""
        return self._config.to_dict()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(salt={self.salt!r}, separator={self.separator!r}, "
            f"key_derivation={self.key_derivation!r})"
        )


def create_signer(
    secret_key: Union[str, bytes],
    salt: Union[str, bytes, None] = None,
    separator: Union[str, bytes, None] = None,
) -> Signer:
    """
    Factory function to create a Signer with the default derivation and algorithm.

    Args:
        secret_key: Shared secret
        salt: Namespace for the derived key (default ``itsdangerous.Signer``)
        separator: Delimiter between token fields (default ``.``)

    Returns:
        Configured Signer instance
    """
    return Signer(secret_key, salt=salt, separator=separator)
