#!/usr/bin/env python3
"""
Signed Links Example
====================

Shows how to sign values for use in URLs and cookies, and how to expire them.

Usage:
    python signed_links_demo.py
"""

import logging
import time

from tokenseal import (
    BadData,
    SignatureExpired,
    Signer,
    TimestampSigner,
)

logging.basicConfig(level=logging.INFO)

SECRET_KEY = b"change-me-in-production"


def main():
    """Demonstrate signing, tampering and expiry."""

    print("=== Signed Links Demo ===\n")

    # Plain signatures: one salt per use-case
    print("🔗 UNSUBSCRIBE LINK:")
    unsubscribe = Signer(SECRET_KEY, salt="unsubscribe")
    token = unsubscribe.sign("user-42").decode("ascii")
    print(f"✅ https://example.com/unsubscribe?token={token}")
    print(f"✅ Verified user: {unsubscribe.unsign(token).decode()}")

    # A token for one salt is useless for another
    print("\n🧂 SALT SEPARATION:")
    activate = Signer(SECRET_KEY, salt="activate")
    print(f"❌ Accepted by activation signer: {activate.validate(token)}")

    # Tampering is detected
    print("\n🛡️  TAMPERING:")
    tampered = token.replace("user-42", "user-43")
    try:
        unsubscribe.unsign(tampered)
    except BadData as e:
        print(f"❌ Rejected: {e}")

    # Timestamped tokens expire
    print("\n⏱️  PASSWORD RESET (expires after 2 seconds):")
    reset = TimestampSigner(SECRET_KEY, salt="password-reset")
    token = reset.sign("user-42")
    value, signed_at = reset.unsign(token, max_age=2, return_timestamp=True)
    print(f"✅ Valid for {value.decode()}, signed at {signed_at.isoformat()}")

    time.sleep(3)
    try:
        reset.unsign(token, max_age=2)
    except SignatureExpired as e:
        print(f"❌ Expired: {e} (signed {e.date_signed.isoformat()})")


if __name__ == "__main__":
    main()
