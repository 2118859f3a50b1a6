"""
Timestamped Token Signing
=========================

TimestampSigner works like Signer but also records when a value was signed, so
tokens can be rejected once they are older than a caller-supplied age.

Token format::

    <value><sep><base64url-nopad(unix seconds, minimal big-endian)><sep><signature>

The signature covers the value and the timestamp field together.
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .algorithms import SigningAlgorithm
from .config import SignerConfig
from .encoding import (
    base64_decode,
    base64_encode,
    bytes_combine,
    bytes_to_int,
    int_to_bytes,
    want_bytes,
)
from .error_handling import (
    BadTimeSignature,
    SignatureExpired,
    SigningError,
    TokenEncodingError,
    with_error_handling,
)
from .signer import Signer

MaxAge = Union[int, float, timedelta, None]


class TimestampSigner:
    """
    Signs values together with the time of signing.

    The timestamp is verified as part of the signature. unsign() can additionally
    enforce a maximum age, raising SignatureExpired for tokens that are too old or
    dated in the future.
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
        """Initialize the signer; parameters are the same as for Signer."""
        self._signer = Signer(
            secret_key,
            salt=salt,
            separator=separator,
            key_derivation=key_derivation,
            digest_method=digest_method,
            algorithm=algorithm,
            config=config,
        )

    @property
    def signer(self) -> Signer:
        """The underlying Signer that produces the outer signature."""
        return self._signer

    @property
    def config(self) -> SignerConfig:
        return self._signer.config

    @property
    def separator(self) -> bytes:
        return self._signer.separator

    def get_timestamp(self) -> int:
        """Return the current time as Unix seconds."""
        return int(time.time())

    def timestamp_to_datetime(self, ts: int) -> datetime:
        """Convert Unix seconds to a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(ts, tz=timezone.utc)

    @with_error_handling(TokenEncodingError)
    def encode_timestamp(self, ts: int) -> bytes:
        """Encode Unix seconds as base64 of the minimal big-endian representation."""
        return base64_encode(int_to_bytes(ts))

    def sign(self, value: Union[str, bytes]) -> bytes:
        """
        Sign ``value`` and attach the current time.

        Raises:
            TokenEncodingError: If the current time cannot be encoded
        """
        timestamp = self.encode_timestamp(self.get_timestamp())
        value = bytes_combine(want_bytes(value), self.separator, timestamp)
        return self._signer.sign(value)

    def _unpack(
        self, signed_value: Union[str, bytes], log_level: int = logging.WARNING
    ) -> Tuple[bytes, int]:
        """Verify the outer signature and split the result into value and timestamp."""
        result = self._signer._unsign(signed_value, log_level)
        sep = self.separator

        if sep not in result:
            raise BadTimeSignature("timestamp missing", payload=result)

        value, _, ts_field = result.rpartition(sep)
        ts_bytes = base64_decode(ts_field)

        try:
            timestamp = bytes_to_int(ts_bytes)
        except ValueError as e:
            raise BadTimeSignature("Malformed timestamp", payload=value) from e

        return value, timestamp

    def _to_datetime(self, ts: int, value: bytes) -> datetime:
        try:
            return self.timestamp_to_datetime(ts)
        except (OverflowError, OSError, ValueError) as e:
            raise BadTimeSignature("Malformed timestamp", {"timestamp": ts}, payload=value) from e

    def get_signed_timestamp(self, signed_value: Union[str, bytes]) -> datetime:
        """
        Return the time at which a token was signed.

        Raises:
            BadData: If the signature does not match or the timestamp field is not base64
            BadTimeSignature: If the timestamp is missing or malformed
        """
        value, timestamp = self._unpack(signed_value)
        return self._to_datetime(timestamp, value)

    def unsign(
        self,
        signed_value: Union[str, bytes],
        max_age: MaxAge = 0,
        return_timestamp: bool = False,
    ) -> Union[bytes, Tuple[bytes, datetime]]:
        """
        Verify a timestamped token and return the original value.

        Args:
            signed_value: Token produced by sign()
            max_age: Maximum age in seconds (or a timedelta). ``None`` or a value
                ``<= 0`` disables the age check.
            return_timestamp: Also return the signing time as a UTC datetime

        Returns:
            The signed value, or ``(value, datetime)`` if return_timestamp is set

        Raises:
            BadData: If the signature does not match
            BadTimeSignature: If the timestamp is missing or malformed
            SignatureExpired: If the token is older than max_age or from the future
        """
        return self._unsign(signed_value, max_age, return_timestamp, logging.WARNING)

    def _unsign(
        self,
        signed_value: Union[str, bytes],
        max_age: MaxAge,
        return_timestamp: bool,
        log_level: int,
    ) -> Union[bytes, Tuple[bytes, datetime]]:
        value, timestamp = self._unpack(signed_value, log_level)

        if isinstance(max_age, timedelta):
            max_age = max_age.total_seconds()

        if max_age is not None and max_age > 0:
            age = self.get_timestamp() - timestamp
            if age > max_age:
                raise SignatureExpired(
                    f"Signature age {age} > {max_age} seconds",
                    payload=value,
                    timestamp=timestamp,
                )
            if age < 0:
                raise SignatureExpired(
                    f"Signature age {age} < 0 seconds",
                    payload=value,
                    timestamp=timestamp,
                )

        if return_timestamp:
            return value, self._to_datetime(timestamp, value)
        return value

    def validate(self, signed_value: Union[str, bytes], max_age: MaxAge = 0) -> bool:
        """Return True if ``signed_value`` is correctly signed and not expired."""
        try:
            self._unsign(signed_value, max_age, False, logging.DEBUG)
            return True
        except SigningError:
            return False

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about the current signing configuration."""
        return self._signer.get_config_info()

    def __repr__(self) -> str:
        return f"TimestampSigner({self._signer!r})"


def create_timestamp_signer(
    secret_key: Union[str, bytes],
    salt: Union[str, bytes, None] = None,
    separator: Union[str, bytes, None] = None,
) -> TimestampSigner:
    """
    Factory function to create a TimestampSigner with the default derivation and algorithm.

    Args:
        secret_key: Shared secret
        salt: Namespace for the derived key (default ``itsdangerous.Signer``)
        separator: Delimiter between token fields (default ``.``)

    Returns:
        Configured TimestampSigner instance
    """
    return TimestampSigner(secret_key, salt=salt, separator=separator)
