"""Walks a linked chain from its head hash and reassembles the original bytes."""

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Union

from common.constants import FETCH_RETRY_DELAY_SECONDS, HASH_SIZE_BYTES, MAX_FILE_SIZE_BYTES
from common.exceptions import (
    FetchExhaustedError,
    FileTooLargeError,
    FormatError,
    IntegrityError,
    StoreReadError,
)
from common.hash_codec import hash_from_hex, hash_to_hex
from common.types import Node
from store.base import BlobStore

logger = logging.getLogger(__name__)


class FetchState(Enum):
    FETCHING = "fetching"
    RETRYING = "retrying"
    DONE = "done"
    FAILED = "failed"


class ChainReader:
    """
    Fetches nodes head to tail, one get at a time.

    A failed get is retried once after retry_delay seconds; a second
    consecutive failure on the same node ends the fetch with
    FetchExhaustedError.
    """

    def __init__(
        self,
        store: BlobStore,
        retry_delay: float = FETCH_RETRY_DELAY_SECONDS,
        verify_hashes: bool = True,
        max_file_size: int = MAX_FILE_SIZE_BYTES
    ):
        """
        Args:
            store: Store to read nodes from
            retry_delay: Seconds to wait before the single retry of a failed get
            verify_hashes: Re-derive each node's hash and compare it to the requested address
            max_file_size: Abort once more than this many payload bytes have been read
        """
        self.store = store
        self.retry_delay = retry_delay
        self.verify_hashes = verify_hashes
        self.max_file_size = max_file_size

    async def fetch_file(self, head_hash: Union[bytes, str]) -> bytes:
        """
        Reconstruct a file from the hash of its first node.

        Args:
            head_hash: Raw 20-byte hash or its 40-char hex form

        Returns:
            Concatenated chunk payloads in chain order

        Raises:
            FormatError: If head_hash is malformed or the chain loops back on itself
            FetchExhaustedError: If a node could not be read after one retry
            FileTooLargeError: If the chain yields more than max_file_size bytes
        """
        current = hash_from_hex(head_hash) if isinstance(head_hash, str) else bytes(head_hash)
        if len(current) != HASH_SIZE_BYTES:
            raise FormatError(f"Head hash must be {HASH_SIZE_BYTES} bytes, got {len(current)}")

        chunks: List[bytes] = []
        visited = {current}
        total = 0
        last_error: Optional[StoreReadError] = None
        state = FetchState.FETCHING

        while state in (FetchState.FETCHING, FetchState.RETRYING):
            if state is FetchState.RETRYING:
                logger.warning(f"Get failed for {hash_to_hex(current)}, retrying in {self.retry_delay}s: {last_error}")
                await asyncio.sleep(self.retry_delay)

            try:
                node = await self._fetch_node(current)
            except StoreReadError as e:
                last_error = e
                state = FetchState.RETRYING if state is FetchState.FETCHING else FetchState.FAILED
                continue

            chunks.append(node.payload)
            total += len(node.payload)
            if total > self.max_file_size:
                raise FileTooLargeError(f"Chain exceeds {self.max_file_size} bytes after {len(chunks)} nodes")

            logger.debug(f"Fetched node {len(chunks) - 1} ({len(node.payload)} byte payload), next {hash_to_hex(node.pointer)}")
            if node.is_tail:
                state = FetchState.DONE
            elif node.pointer in visited:
                raise FormatError(f"Chain loops back to {hash_to_hex(node.pointer)} after {len(chunks)} nodes")
            else:
                visited.add(node.pointer)
                current = node.pointer
                state = FetchState.FETCHING

        if state is FetchState.FAILED:
            logger.error(f"Giving up on {hash_to_hex(current)} after retry: {last_error}")
            raise FetchExhaustedError(f"Could not fetch node {hash_to_hex(current)}: {last_error}") from last_error

        logger.info(f"Fetched chain of {len(chunks)} nodes ({total} bytes)")
        return b"".join(chunks)

    async def _fetch_node(self, hash_value: bytes) -> Node:
        try:
            data = await self.store.get(hash_value)
        except StoreReadError:
            raise
        except Exception as e:
            raise StoreReadError(f"Get failed for {hash_to_hex(hash_value)}: {e!r}") from e

        if self.verify_hashes and self.store.content_hash(data) != hash_value:
            raise IntegrityError(f"Node bytes do not hash to {hash_to_hex(hash_value)}")

        try:
            return Node.from_bytes(data)
        except FormatError as e:
            raise StoreReadError(f"Malformed node {hash_to_hex(hash_value)}: {e}") from e


async def fetch_file(store: BlobStore, head_hash: Union[bytes, str]) -> bytes:
    """Fetch the file whose chain starts at head_hash."""
    return await ChainReader(store).fetch_file(head_hash)
