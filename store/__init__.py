"""Store adapters: the put/get capability the chain is persisted through."""

from store.base import BlobStore
from store.memory_store import InMemoryStore
from store.grpc_client import StoreNodeClient

__all__ = [
    "BlobStore",
    "InMemoryStore",
    "StoreNodeClient",
]
