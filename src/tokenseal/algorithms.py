"""
Signing Algorithms
==================

This module defines the pluggable signature primitive used by Signer.

A SigningAlgorithm computes a raw signature for a key and a message and verifies a
provided signature against it. Verification always uses a constant-time comparison.
"""

import hashlib
import hmac
from abc import ABC, abstractmethod
from typing import Callable, Optional


class SigningAlgorithm(ABC):
    """Interface for computing and verifying signatures."""

    @abstractmethod
    def get_signature(self, key: bytes, value: bytes) -> bytes:
        """
        Compute the raw signature of ``value``.

        Args:
            key: Derived signing key
            value: Message to sign

        Returns:
            Raw (unencoded) signature bytes
        """
        pass

    def verify_signature(self, key: bytes, value: bytes, sig: bytes) -> bool:
        """Check ``sig`` against a freshly computed signature in constant time."""
        return hmac.compare_digest(sig, self.get_signature(key, value))


class NoneAlgorithm(SigningAlgorithm):
    """
    Algorithm that returns a fixed marker instead of a signature.

    Only useful for tests and demonstrations: it provides no integrity at all.
    """

    MARKER = b"b"

    def get_signature(self, key: bytes, value: bytes) -> bytes:
        return self.MARKER


class HMACAlgorithm(SigningAlgorithm):
    """HMAC signatures using a configurable hashlib digest constructor."""

    default_digest_method = staticmethod(hashlib.sha1)

    def __init__(self, digest_method: Optional[Callable] = None):
        if digest_method is None:
            digest_method = self.default_digest_method
        self._digest_method = digest_method

    @property
    def digest_method(self) -> Callable:
        return self._digest_method

    def get_signature(self, key: bytes, value: bytes) -> bytes:
        return hmac.new(key, value, self._digest_method).digest()

    def __repr__(self) -> str:
        name = getattr(self._digest_method, "__name__", repr(self._digest_method))
        return f"HMACAlgorithm(digest_method={name})"
