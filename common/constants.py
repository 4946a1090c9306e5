"""Project-wide constants (hash size, chunk size, limits, default ports)."""

import os

HASH_SIZE_BYTES: int = 20
SENTINEL_HASH: bytes = bytes(HASH_SIZE_BYTES)  # end-of-chain pointer

CHUNK_SIZE_BYTES: int = int(os.getenv("DHTFS_CHUNK_SIZE", "900"))
MAX_FILE_SIZE_BYTES: int = 100 * 1024  # 100 KiB

FETCH_RETRY_DELAY_SECONDS: float = float(os.getenv("DHTFS_FETCH_RETRY_DELAY", "5"))

STORENODE_SERVICE_NAME: str = "storenode"
STORENODE_PORT: int = 50061
STORE_TIMEOUT_SECONDS: float = 30.0

GRPC_KEEPALIVE_TIME_MS: int = 30000
GRPC_KEEPALIVE_TIMEOUT_MS: int = 10000

DEFAULT_BLOB_STORAGE_PATH: str = "/app/data/blobs"
