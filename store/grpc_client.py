"""RPC client that exposes a remote store node as a BlobStore."""

import asyncio
import logging
from typing import Optional

import grpc

from common.protocol import (
    PutRequest,
    PutResponse,
    GetRequest,
    GetResponse,
    PingRequest,
    PingResponse,
)
from common.constants import GRPC_KEEPALIVE_TIME_MS, GRPC_KEEPALIVE_TIMEOUT_MS
from common.exceptions import BlobNotFoundError, FormatError, StoreReadError, StoreWriteError
from common.hash_codec import hash_from_hex, hash_to_hex
from store.base import BlobStore
from store.config import STORE_HOST, STORE_PORT, STORE_TIMEOUT

logger = logging.getLogger(__name__)

SERVICE_PATH = '/storenode.StoreNodeService'
TRANSIENT_CODES = (grpc.StatusCode.UNAVAILABLE, grpc.StatusCode.DEADLINE_EXCEEDED)


class StoreNodeClient(BlobStore):
    """
    gRPC client for store node operations.
    Handles connection management and RPC calls.
    """

    def __init__(
        self,
        target: Optional[str] = None,
        timeout: float = STORE_TIMEOUT,
        max_put_retries: int = 3
    ):
        """
        Initialize client with lazy connection.

        Args:
            target: host:port of the store node, defaults to DHTFS_STORE_HOST/DHTFS_STORE_PORT
            timeout: Per-call deadline in seconds
            max_put_retries: Attempts for a put on transient transport failures
        """
        self._channel = None
        self._target = target or f"{STORE_HOST}:{STORE_PORT}"
        self._timeout = timeout
        self._max_put_retries = max_put_retries

    def _ensure_channel(self):
        """Ensure gRPC channel is established."""
        if self._channel is None:
            options = [
                ('grpc.keepalive_time_ms', GRPC_KEEPALIVE_TIME_MS),
                ('grpc.keepalive_timeout_ms', GRPC_KEEPALIVE_TIMEOUT_MS),
                ('grpc.keepalive_permit_without_calls', 1),
            ]
            self._channel = grpc.aio.insecure_channel(self._target, options=options)
            logger.info(f"Established gRPC channel to {self._target}")

    def _unary(self, method: str):
        self._ensure_channel()
        return self._channel.unary_unary(
            f'{SERVICE_PATH}/{method}',
            request_serializer=lambda x: x,
            response_deserializer=lambda x: x,
        )

    async def close(self):
        """Close gRPC channel."""
        if self._channel:
            await self._channel.close()
            self._channel = None

    async def put(self, payload: bytes) -> bytes:
        """
        Store a payload on the store node.

        Puts are idempotent, so transient transport failures are retried
        with exponential backoff before giving up.

        Raises:
            StoreWriteError: If the node rejected the write or stayed unreachable
        """
        for attempt in range(self._max_put_retries):
            try:
                return await self._put_internal(payload)
            except grpc.RpcError as e:
                if e.code() in TRANSIENT_CODES and attempt < self._max_put_retries - 1:
                    delay = 2 ** attempt
                    logger.warning(f"Transient put failure, retrying in {delay}s (attempt {attempt + 1}/{self._max_put_retries}): {e.code()}")
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"gRPC error storing {len(payload)} byte payload: {e.code()}")
                raise StoreWriteError(f"Store node {self._target} put failed: {e.details()}") from e
        raise StoreWriteError(f"Store node {self._target} put failed")

    async def _put_internal(self, payload: bytes) -> bytes:
        """Internal implementation of put without retry logic."""
        response_bytes = await self._unary('Put')(
            PutRequest(payload=payload).to_json(),
            timeout=self._timeout
        )
        try:
            response = PutResponse.from_json(response_bytes)
        except (ValueError, KeyError, TypeError) as e:
            raise StoreWriteError(f"Malformed put response from {self._target}: {e}") from e

        if not response.success or not response.hash:
            raise StoreWriteError(f"Put rejected: {response.error_message}")

        try:
            hash_value = hash_from_hex(response.hash)
        except FormatError as e:
            raise StoreWriteError(f"Store node returned malformed hash {response.hash!r}") from e

        if hash_value != self.content_hash(payload):
            raise StoreWriteError(
                f"Store node returned hash {response.hash} that does not match the payload"
            )
        return hash_value

    async def get(self, hash_value: bytes) -> bytes:
        """
        Fetch a payload from the store node.

        Raises:
            BlobNotFoundError: If the node has no value for the hash
            StoreReadError: If the node is unreachable or failed
        """
        hex_hash = hash_to_hex(hash_value)
        try:
            response_bytes = await self._unary('Get')(
                GetRequest(hash=hex_hash).to_json(),
                timeout=self._timeout
            )
        except grpc.RpcError as e:
            if e.code() == grpc.StatusCode.NOT_FOUND:
                raise BlobNotFoundError(f"Hash {hex_hash} not found on {self._target}") from e
            logger.error(f"gRPC error fetching {hex_hash}: {e.code()}")
            raise StoreReadError(f"Store node {self._target} get failed: {e.details()}") from e

        try:
            return GetResponse.from_json(response_bytes).payload
        except (ValueError, KeyError, TypeError) as e:
            raise StoreReadError(f"Malformed get response for {hex_hash} from {self._target}: {e}") from e

    async def ping(self) -> bool:
        """
        Check if the store node is available.

        Returns:
            True if the node responds, False otherwise
        """
        try:
            response_bytes = await self._unary('Ping')(
                PingRequest().to_json(),
                timeout=5
            )
            return PingResponse.from_json(response_bytes).available
        except grpc.RpcError as e:
            logger.warning(f"Ping failed: {e.code()}")
            return False
