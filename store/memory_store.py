"""In-memory content-addressed store for tests and local runs."""

import logging
from typing import Dict

from common.exceptions import BlobNotFoundError
from common.hash_codec import hash_to_hex
from store.base import BlobStore

logger = logging.getLogger(__name__)


class InMemoryStore(BlobStore):
    """
    Dictionary keyed by SHA-1 of the stored bytes.

    Data is lost when the process exits.
    """

    def __init__(self):
        self._blobs: Dict[bytes, bytes] = {}
        self.put_count = 0
        self.get_count = 0

    async def put(self, payload: bytes) -> bytes:
        self.put_count += 1
        hash_value = self.content_hash(payload)
        if hash_value not in self._blobs:
            self._blobs[hash_value] = bytes(payload)
        logger.debug("put %s (%d bytes)", hash_to_hex(hash_value), len(payload))
        return hash_value

    async def get(self, hash_value: bytes) -> bytes:
        self.get_count += 1
        payload = self._blobs.get(bytes(hash_value))
        if payload is None:
            raise BlobNotFoundError(f"No value for hash {bytes(hash_value).hex()}")
        return payload

    def __contains__(self, hash_value: bytes) -> bool:
        return bytes(hash_value) in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
