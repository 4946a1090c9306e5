"""Builds a content-addressed linked chain of nodes from ordered chunks."""

import logging
from pathlib import Path
from typing import List, Sequence, Union

from chain.chunker import chunk_buffer, chunk_file_by_name
from common.constants import CHUNK_SIZE_BYTES, MAX_FILE_SIZE_BYTES, SENTINEL_HASH
from common.exceptions import FileTooLargeError, StoreWriteError
from common.hash_codec import hash_to_hex, is_sentinel
from common.types import Node
from store.base import BlobStore

logger = logging.getLogger(__name__)


class ChainBuilder:
    """
    Persists chunks as a singly linked chain, tail first.

    Each node embeds the hash of its already-stored successor, so nodes are
    put one at a time from the last chunk back to the first.
    """

    def __init__(
        self,
        store: BlobStore,
        chunk_size: int = CHUNK_SIZE_BYTES,
        max_file_size: int = MAX_FILE_SIZE_BYTES
    ):
        self.store = store
        self.chunk_size = chunk_size
        self.max_file_size = max_file_size

    async def store_chunks(self, chunks: Sequence[bytes]) -> List[bytes]:
        """
        Store chunks as a linked chain.

        An empty sequence is stored as a single tail node with an empty
        payload so that zero-byte files still have a head hash.

        Args:
            chunks: Ordered chunk payloads

        Returns:
            Node hashes, head first

        Raises:
            StoreWriteError: If any put fails; nodes already written are left in place
        """
        if not chunks:
            chunks = [b""]

        hashes: List[bytes] = []
        prev_hash = SENTINEL_HASH

        for index in range(len(chunks) - 1, -1, -1):
            node = Node(pointer=prev_hash, payload=bytes(chunks[index]))
            prev_hash = await self._put_node(node, index)
            hashes.append(prev_hash)

        hashes.reverse()
        logger.info(f"Stored chain of {len(hashes)} nodes, head {hash_to_hex(hashes[0])}")
        return hashes

    async def _put_node(self, node: Node, index: int) -> bytes:
        try:
            hash_value = await self.store.put(node.to_bytes())
        except StoreWriteError as e:
            logger.error(f"Put failed for node {index}: {e}")
            raise
        except Exception as e:
            logger.error(f"Put failed for node {index}: {e}")
            raise StoreWriteError(f"Failed to store node {index}: {e}") from e

        if is_sentinel(hash_value):
            raise StoreWriteError(f"Store returned the end-of-chain marker as the hash of node {index}")

        logger.debug(f"Stored node {index} as {hash_to_hex(hash_value)} ({len(node.payload)} byte payload)")
        return hash_value

    async def store_buffer(self, buf: bytes) -> List[bytes]:
        """Chunk a buffer and store it as a chain. Returns hashes head first."""
        if len(buf) > self.max_file_size:
            raise FileTooLargeError(f"Buffer is {len(buf)} bytes, limit is {self.max_file_size}")
        return await self.store_chunks(chunk_buffer(buf, self.chunk_size))

    async def store_file_by_name(self, path: Union[str, Path]) -> List[bytes]:
        """Read a file and store it as a chain. Returns hashes head first."""
        chunks = chunk_file_by_name(path, self.chunk_size, self.max_file_size)
        return await self.store_chunks(chunks)


async def store_chunks(store: BlobStore, chunks: Sequence[bytes]) -> List[bytes]:
    """Store chunks as a chain on store. Returns hashes head first."""
    return await ChainBuilder(store).store_chunks(chunks)


async def store_file_by_name(store: BlobStore, path: Union[str, Path]) -> List[bytes]:
    """Store a file as a chain on store. Returns hashes head first."""
    return await ChainBuilder(store).store_file_by_name(path)
