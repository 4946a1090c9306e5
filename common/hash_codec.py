"""Conversion between raw 20-byte hashes and their hex text form, plus SHA-1 helpers."""

import hashlib
import string

from common.constants import HASH_SIZE_BYTES, SENTINEL_HASH
from common.exceptions import FormatError

HEX_LENGTH = HASH_SIZE_BYTES * 2


def hash_to_hex(hash_value: bytes) -> str:
    """
    Render a hash as lowercase hex without a 0x prefix.

    Args:
        hash_value: Raw 20-byte hash

    Returns:
        40-character hex string, high nibble first

    Raises:
        FormatError: If the hash is not 20 bytes long
    """
    if len(hash_value) != HASH_SIZE_BYTES:
        raise FormatError(f"Expected {HASH_SIZE_BYTES} byte hash, got {len(hash_value)} bytes")
    return bytes(hash_value).hex()


def hash_from_hex(text: str) -> bytes:
    """
    Parse a 40-character hex string back into raw hash bytes.

    Args:
        text: Hex string without 0x prefix

    Returns:
        Raw 20-byte hash

    Raises:
        FormatError: If the string is not 40 hex characters
    """
    if len(text) != HEX_LENGTH:
        raise FormatError(f"Expected {HEX_LENGTH} char string without 0x, got {len(text)} chars")
    if any(c not in string.hexdigits for c in text):
        raise FormatError(f"Invalid hex digits in hash: {text!r}")
    return bytes.fromhex(text)


def compute_hash(payload: bytes) -> bytes:
    """
    Compute the SHA-1 content hash of a payload.

    Args:
        payload: Bytes to hash

    Returns:
        Raw 20-byte digest
    """
    return hashlib.sha1(payload).digest()


def verify_hash(payload: bytes, expected: bytes) -> bool:
    """Check that payload hashes to expected."""
    return compute_hash(payload) == expected


def is_sentinel(hash_value: bytes) -> bool:
    """True if hash_value is the end-of-chain pointer."""
    return bytes(hash_value) == SENTINEL_HASH
