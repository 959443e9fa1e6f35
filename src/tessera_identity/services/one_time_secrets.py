"""Generation and hashing of one-time secrets (confirmation tokens, reset codes).

Raw values leave the process only by email; storage sees SHA-256 digests.
"""

import hashlib
import hmac
import secrets

RESET_CODE_DIGITS = 6


def generate_confirmation_token() -> str:
    """Return a URL-safe token with 256 bits of entropy."""
    return secrets.token_urlsafe(32)


def generate_reset_code() -> str:
    """Return a uniformly random, zero-padded six digit code."""
    return f"{secrets.randbelow(10**RESET_CODE_DIGITS):0{RESET_CODE_DIGITS}d}"


def hash_secret(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def secret_matches(value: str, expected_hash: str) -> bool:
    """Compare a raw value against a stored digest in constant time."""
    return hmac.compare_digest(hash_secret(value), expected_hash)
