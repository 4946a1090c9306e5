"""Unit tests for the Node wire type."""

import pytest

from common.constants import SENTINEL_HASH
from common.exceptions import FormatError
from common.types import Node


def test_to_bytes_is_pointer_then_payload():
    pointer = bytes(range(20))
    node = Node(pointer=pointer, payload=b"chunk")

    wire = node.to_bytes()

    assert wire == pointer + b"chunk"
    assert len(wire) == 20 + len(b"chunk")


def test_from_bytes_splits_at_twenty():
    node = Node.from_bytes(b"\x01" * 20 + b"data")

    assert node.pointer == b"\x01" * 20
    assert node.payload == b"data"
    assert not node.is_tail


def test_tail_node_with_empty_payload():
    node = Node.from_bytes(SENTINEL_HASH)

    assert node.is_tail
    assert node.payload == b""


def test_from_bytes_rejects_short_input():
    with pytest.raises(FormatError):
        Node.from_bytes(b"\x00" * 19)


def test_pointer_length_enforced():
    with pytest.raises(FormatError):
        Node(pointer=b"\x00" * 21, payload=b"")
