"""Manages content-addressed blob files on disk: write, read and checksum verify."""

import logging
from pathlib import Path

from common.hash_codec import compute_hash, hash_to_hex, verify_hash
from common.exceptions import IntegrityError
from storenode.config import BLOB_STORAGE_PATH

logger = logging.getLogger(__name__)

BLOBS_DIR = Path(BLOB_STORAGE_PATH)


def ensure_blobs_directory() -> None:
    """Ensure blobs directory exists."""
    BLOBS_DIR.mkdir(parents=True, exist_ok=True)


def get_blob_path(hash_value: bytes) -> Path:
    """
    Get file path for a blob.

    Args:
        hash_value: Raw 20-byte content hash

    Returns:
        Path object for blob file
    """
    return BLOBS_DIR / f"{hash_to_hex(hash_value)}.blob"


def write_blob(data: bytes) -> bytes:
    """
    Write a blob to disk under its content hash.

    Existing blobs are left untouched, so writing the same bytes twice has
    no further effect. New blobs are written to a temp file and renamed
    into place.

    Args:
        data: Raw blob bytes

    Returns:
        Raw 20-byte content hash

    Raises:
        OSError: If write operation fails
    """
    hash_value = compute_hash(data)
    filepath = get_blob_path(hash_value)
    if filepath.exists():
        return hash_value

    ensure_blobs_directory()
    temp_path = filepath.with_suffix(".tmp")
    try:
        temp_path.write_bytes(data)
        temp_path.replace(filepath)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return hash_value


def read_blob(hash_value: bytes, verify: bool = True) -> bytes:
    """
    Read a blob from disk.

    Args:
        hash_value: Raw 20-byte content hash
        verify: Recompute the hash of the stored bytes

    Returns:
        Raw blob bytes

    Raises:
        FileNotFoundError: If blob does not exist
        IntegrityError: If the stored bytes no longer match their hash
    """
    data = get_blob_path(hash_value).read_bytes()
    if verify and not verify_hash(data, hash_value):
        logger.error(f"Blob {hash_to_hex(hash_value)} is corrupted on disk")
        raise IntegrityError(f"Blob {hash_to_hex(hash_value)} failed checksum verification")
    return data


def blob_exists(hash_value: bytes) -> bool:
    """Check if blob file exists on disk."""
    return get_blob_path(hash_value).exists()


def list_all_blobs() -> list[str]:
    """
    List all blob hashes in storage directory.

    Returns:
        List of hex hashes (without .blob extension)
    """
    if not BLOBS_DIR.exists():
        return []

    return [filepath.stem for filepath in BLOBS_DIR.glob("*.blob")]
