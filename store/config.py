"""Configuration settings for store adapters."""

import os
from common.constants import STORENODE_SERVICE_NAME, STORENODE_PORT, STORE_TIMEOUT_SECONDS


STORE_HOST = os.environ.get("DHTFS_STORE_HOST", STORENODE_SERVICE_NAME)

STORE_PORT = int(os.environ.get("DHTFS_STORE_PORT", str(STORENODE_PORT)))

STORE_TIMEOUT = float(os.environ.get("DHTFS_STORE_TIMEOUT", str(STORE_TIMEOUT_SECONDS)))
