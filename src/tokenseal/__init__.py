"""
tokenseal - Tamper-evident tokens signed with a shared secret.

A value is joined with an HMAC signature so that any later holder of the secret can
prove the value has not been altered. TimestampSigner also embeds the signing time
so tokens can be expired after a given age.

Quick Start:
    >>> from tokenseal import Signer, TimestampSigner
    >>>
    >>> signer = Signer("secret-key")
    >>> token = signer.sign(b"hello")
    >>> signer.unsign(token)
    b'hello'
    >>>
    >>> timed = TimestampSigner("secret-key", salt="password-reset")
    >>> token = timed.sign(b"user-42")
    >>> timed.unsign(token, max_age=3600)
    b'user-42'
"""

from .algorithms import HMACAlgorithm, NoneAlgorithm, SigningAlgorithm
from .config import KEY_DERIVATIONS, SignerConfig
from .encoding import base64_decode, base64_encode, bytes_combine, want_bytes
from .error_handling import (
    BadData,
    BadTimeSignature,
    SignatureExpired,
    SignerConfigurationError,
    SigningError,
    TokenEncodingError,
)
from .signer import Signer, create_signer
from .timed import TimestampSigner, create_timestamp_signer

__version__ = "0.1.0"

__all__ = [
    # Signers
    "Signer",
    "TimestampSigner",
    "create_signer",
    "create_timestamp_signer",
    # Configuration
    "SignerConfig",
    "KEY_DERIVATIONS",
    # Algorithms
    "SigningAlgorithm",
    "HMACAlgorithm",
    "NoneAlgorithm",
    # Encoding
    "base64_encode",
    "base64_decode",
    "bytes_combine",
    "want_bytes",
    # Errors
    "SigningError",
    "SignerConfigurationError",
    "TokenEncodingError",
    "BadData",
    "BadTimeSignature",
    "SignatureExpired",
    # Version info
    "__version__",
]
