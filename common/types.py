"""Shared data type definitions (Node)."""

from dataclasses import dataclass

from common.constants import HASH_SIZE_BYTES, SENTINEL_HASH
from common.exceptions import FormatError


@dataclass(frozen=True)
class Node:
    """
    Unit persisted in the store: a successor pointer followed by one chunk.

    Wire form is exactly [20-byte pointer][payload]. The last node of a
    chain carries SENTINEL_HASH as its pointer.
    """
    pointer: bytes
    payload: bytes

    def __post_init__(self):
        if len(self.pointer) != HASH_SIZE_BYTES:
            raise FormatError(f"Node pointer must be {HASH_SIZE_BYTES} bytes, got {len(self.pointer)}")

    @property
    def is_tail(self) -> bool:
        return self.pointer == SENTINEL_HASH

    def to_bytes(self) -> bytes:
        """Serialize to wire bytes."""
        return bytes(self.pointer) + bytes(self.payload)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Node':
        """
        Split wire bytes into pointer and payload.

        Raises:
            FormatError: If data is too short to hold a pointer
        """
        if len(data) < HASH_SIZE_BYTES:
            raise FormatError(f"Node too short: {len(data)} bytes")
        return cls(pointer=bytes(data[:HASH_SIZE_BYTES]), payload=bytes(data[HASH_SIZE_BYTES:]))
