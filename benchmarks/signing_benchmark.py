#!/usr/bin/env python3
"""
Signing Benchmark
=================

Benchmark the cost of signing and verifying tokens.

Measures:
  - Raw sign / unsign micro-cost per key derivation method
  - Impact of the digest method on sign / unsign
  - Timestamped tokens vs plain tokens
  - Impact of value size
"""

import hashlib
import logging
import time

from tokenseal import Signer, TimestampSigner
from tokenseal.config import KEY_DERIVATIONS

# Suppress signature mismatch warnings during benchmarks
logging.getLogger("tokenseal").setLevel(logging.ERROR)

SECRET = b"benchmark-secret"


# ── Helpers ──────────────────────────────────────────────────────────────────


def time_op(func, iterations: int = 100) -> float:
    """Return average ms per call."""
    for _ in range(min(5, iterations)):
        func()
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    return ((time.perf_counter() - start) / iterations) * 1000


# ── Benchmarks ───────────────────────────────────────────────────────────────


def benchmark_key_derivation():
    """Micro-benchmark of sign and unsign for each key derivation method."""
    print("\n🔐 Key Derivation Methods")
    print("-" * 60)
    print(f"  {'Method':>14} {'Sign μs':>10} {'Unsign μs':>10} {'Bad μs':>10}")
    print("  " + "-" * 46)

    value = b"user-42"
    for method in KEY_DERIVATIONS:
        signer = Signer(SECRET, key_derivation=method)
        token = signer.sign(value)
        bad = token[:-2] + (b"AA" if not token.endswith(b"AA") else b"BA")

        sign_t = time_op(lambda: signer.sign(value), iterations=5000)
        unsign_t = time_op(lambda: signer.unsign(token), iterations=5000)
        bad_t = time_op(lambda: signer.validate(bad), iterations=5000)

        print(f"  {method:>14} {sign_t * 1000:10.2f} {unsign_t * 1000:10.2f} {bad_t * 1000:10.2f}")


def benchmark_digest_methods():
    """Measure how the digest method affects signing time and token length."""
    print("\n📊 Digest Method Impact")
    print("-" * 60)
    print(f"  {'Digest':>8} {'Sign μs':>10} {'Unsign μs':>10} {'Sig chars':>10}")
    print("  " + "-" * 42)

    value = b"user-42"
    for digest in [hashlib.sha1, hashlib.sha256, hashlib.sha512]:
        signer = Signer(SECRET, digest_method=digest)
        token = signer.sign(value)

        sign_t = time_op(lambda: signer.sign(value), iterations=5000)
        unsign_t = time_op(lambda: signer.unsign(token), iterations=5000)
        sig_len = len(token) - len(value) - len(signer.separator)
        name = digest.__name__.replace("openssl_", "")

        print(f"  {name:>8} {sign_t * 1000:10.2f} {unsign_t * 1000:10.2f} {sig_len:>10}")


def benchmark_timestamp_overhead():
    """Timestamped tokens vs plain tokens."""
    print("\n⏱️  TimestampSigner vs Signer")
    print("-" * 60)

    value = b"user-42"
    signer = Signer(SECRET)
    ts_signer = TimestampSigner(SECRET)
    token = signer.sign(value)
    ts_token = ts_signer.sign(value)

    plain_sign = time_op(lambda: signer.sign(value), iterations=5000)
    plain_unsign = time_op(lambda: signer.unsign(token), iterations=5000)
    ts_sign = time_op(lambda: ts_signer.sign(value), iterations=5000)
    ts_unsign = time_op(lambda: ts_signer.unsign(ts_token, max_age=3600), iterations=5000)

    print(f"  Signer sign:             {plain_sign * 1000:8.2f} μs")
    print(f"  Signer unsign:           {plain_unsign * 1000:8.2f} μs")
    print(f"  TimestampSigner sign:    {ts_sign * 1000:8.2f} μs")
    print(f"  TimestampSigner unsign:  {ts_unsign * 1000:8.2f} μs")
    print(f"  Token overhead:          {len(ts_token) - len(token)} bytes")


def benchmark_value_size():
    """Signing cost as the value grows."""
    print("\n📈 Value Size Impact")
    print("-" * 60)
    print(f"  {'Bytes':>8} {'Sign μs':>10} {'Unsign μs':>10}")
    print("  " + "-" * 30)

    signer = Signer(SECRET)
    for size in [16, 256, 4096, 65536]:
        value = b"x" * size
        token = signer.sign(value)
        iterations = 2000 if size < 65536 else 200

        sign_t = time_op(lambda: signer.sign(value), iterations=iterations)
        unsign_t = time_op(lambda: signer.unsign(token), iterations=iterations)

        print(f"  {size:>8} {sign_t * 1000:10.2f} {unsign_t * 1000:10.2f}")


def main():
    print("🔐 Signing Benchmark")
    print("=" * 60)
    print("Benchmarking token signing/verification cost")
    print()

    try:
        benchmark_key_derivation()
        benchmark_digest_methods()
        benchmark_timestamp_overhead()
        benchmark_value_size()

        print()
        print("🎯 Interpretation Guide")
        print("=" * 60)
        print("• HMAC over short values costs a few μs; key derivation is a second hash")
        print("• Rejecting a bad token should cost about the same as accepting a good one")
        print("• Timestamped tokens add one base64 field and should add little time")
        print()
        print("✅ Benchmark complete!")

    except KeyboardInterrupt:
        print("\n⚠️  Benchmark interrupted by user")
    except Exception as e:
        print(f"\n❌ Benchmark failed: {e}")
        import traceback

        traceback.print_exc()


if __name__ == "__main__":
    main()
