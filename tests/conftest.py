"""Shared pytest fixtures for all tests."""

from typing import Dict

import pytest

from common.exceptions import StoreReadError
from store.memory_store import InMemoryStore


class FlakyStore(InMemoryStore):
    """
    InMemoryStore whose gets fail a configured number of times per hash.
    """

    def __init__(self):
        super().__init__()
        self.failures: Dict[bytes, int] = {}
        self.requested = []

    def fail_next(self, hash_value: bytes, times: int = 1) -> None:
        self.failures[bytes(hash_value)] = times

    async def get(self, hash_value: bytes) -> bytes:
        self.requested.append(bytes(hash_value))
        remaining = self.failures.get(bytes(hash_value), 0)
        if remaining > 0:
            self.failures[bytes(hash_value)] = remaining - 1
            raise StoreReadError("simulated transient failure")
        return await super().get(hash_value)


@pytest.fixture
def memory_store():
    """
    Create an empty in-memory store.

    Returns:
        InMemoryStore instance
    """
    return InMemoryStore()


@pytest.fixture
def flaky_store():
    """
    Create an in-memory store with injectable get failures.

    Returns:
        FlakyStore instance
    """
    return FlakyStore()


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a small file for store/fetch round trips.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to sample file containing b'Hello World'
    """
    file_path = tmp_path / 'hello.txt'
    file_path.write_bytes(b'Hello World')
    return file_path


@pytest.fixture
def blobs_dir(tmp_path, monkeypatch):
    """
    Point store node blob storage at a temporary directory.

    Returns:
        Path to temporary blobs directory
    """
    path = tmp_path / 'blobs'
    monkeypatch.setattr("storenode.blob_storage.BLOBS_DIR", path)
    return path
