"""
Standardized Error Handling for Tokenseal
=========================================

This module provides the exception hierarchy raised by the signers and a couple of
decorators that keep error conversion and logging consistent across modules.

Every failure raised by tokenseal derives from SigningError, so callers can catch
a single type. Verification failures derive from BadData.
"""

import functools
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Type

logger = logging.getLogger(__name__)


class SigningError(Exception):
    """Base exception for all signing-related errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

        # Log error with context for debugging
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.debug(
            f"Signing error: {message}" + (f" ({context_str})" if context_str else "")
        )


class SignerConfigurationError(SigningError):
    """Raised when a signer is constructed with an invalid configuration."""

    pass


class TokenEncodingError(SigningError):
    """Raised when a token field cannot be encoded while signing."""

    pass


class BadData(SigningError):
    """
    Raised when a token is malformed or its signature does not match.

    ``payload`` holds the value recovered from the token before verification
    failed, if one was recovered. It is untrusted data.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        payload: Optional[bytes] = None,
    ):
        super().__init__(message, context)
        self.payload = payload


class BadTimeSignature(BadData):
    """Raised when the timestamp field of a signed token is missing or malformed."""

    pass


class SignatureExpired(BadTimeSignature):
    """Raised when a timestamped token is older than max_age or dated in the future."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        payload: Optional[bytes] = None,
        timestamp: Optional[int] = None,
    ):
        super().__init__(message, context, payload)
        self.timestamp = timestamp

    @property
    def date_signed(self) -> Optional[datetime]:
        """UTC datetime of the signing, or None if it cannot be represented."""
        if self.timestamp is None:
            return None
        try:
            return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None


def with_error_handling(
    error_type: Type[SigningError] = SigningError,
    context: Optional[Dict[str, Any]] = None,
):
    """
    Decorator converting unexpected exceptions into tokenseal errors.

    SigningError subclasses pass through untouched; anything else is re-raised as
    ``error_type`` chained to the original exception.

    Args:
        error_type: Type of SigningError to raise
        context: Additional context to include in error
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SigningError:
                raise
            except Exception as e:
                error_context = (context or {}).copy()
                error_context.update(
                    {
                        "function": func.__name__,
                        "original_error": str(e),
                        "original_error_type": type(e).__name__,
                    }
                )
                raise error_type(f"Error in {func.__name__}: {e}", error_context) from e

        return wrapper

    return decorator


def log_configuration_validation(config_class: str):
    """
    Decorator to log configuration validation results.

    A SignerConfigurationError is logged together with its context and re-raised.
    Any other exception is re-raised as SignerConfigurationError chained to it, so
    building a configuration only ever fails with that type.

    Args:
        config_class: Name of the configuration class being validated
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                result = func(self, *args, **kwargs)
            except SignerConfigurationError as e:
                context_str = ", ".join(f"{k}={v!r}" for k, v in e.context.items())
                logger.error(
                    f"{config_class} rejected: {e.message}"
                    + (f" ({context_str})" if context_str else "")
                )
                raise
            except Exception as e:
                logger.error(f"{config_class} rejected: unexpected {type(e).__name__}: {e}")
                raise SignerConfigurationError(
                    f"Invalid {config_class}: {e}", {"config_class": config_class}
                ) from e

            logger.debug(f"{config_class} validated")
            return result

        return wrapper

    return decorator
