"""Configuration settings for the store node."""

import os
from common.constants import DEFAULT_BLOB_STORAGE_PATH, STORENODE_PORT as DEFAULT_STORENODE_PORT


STORENODE_HOST = os.getenv("STORENODE_HOST", "[::]")
STORENODE_PORT = int(os.getenv("STORENODE_PORT", str(DEFAULT_STORENODE_PORT)))

BLOB_STORAGE_PATH = os.getenv("BLOB_STORAGE_PATH", DEFAULT_BLOB_STORAGE_PATH)

SHUTDOWN_GRACE_SECONDS = int(os.getenv("STORENODE_SHUTDOWN_GRACE", "5"))
