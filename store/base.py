"""Abstract content-addressed store contract consumed by the chain builder and reader."""

from abc import ABC, abstractmethod

from common.hash_codec import compute_hash


class BlobStore(ABC):
    """
    Immutable content-addressed key-value store.

    put is idempotent: identical payloads always map to the same hash. get
    may be stale or transiently absent; no ordering is guaranteed across
    calls.
    """

    @abstractmethod
    async def put(self, payload: bytes) -> bytes:
        """
        Store a payload.

        Args:
            payload: Opaque bytes (one encoded node)

        Returns:
            Raw 20-byte content hash of the payload

        Raises:
            StoreWriteError: If the value could not be stored
        """

    @abstractmethod
    async def get(self, hash_value: bytes) -> bytes:
        """
        Fetch the payload stored under hash_value.

        Raises:
            BlobNotFoundError: If no value is known for the hash
            StoreReadError: If the lookup failed
        """

    def content_hash(self, payload: bytes) -> bytes:
        """Hash rule used by this store to derive addresses."""
        return compute_hash(payload)

    async def close(self) -> None:
        """Release any held resources."""
        return None
