"""Unit tests for the store node gRPC servicer."""

import grpc
import pytest

from common.hash_codec import compute_hash, hash_to_hex
from common.protocol import (
    GetRequest,
    GetResponse,
    PingRequest,
    PingResponse,
    PutRequest,
    PutResponse,
)
from storenode.blob_storage import get_blob_path
from storenode.grpc_server import StoreNodeServicer


class AbortCalled(Exception):
    """Raised by FakeContext.abort, as grpc.aio does."""

    def __init__(self, code, details):
        super().__init__(details)
        self.code = code
        self.details = details


class FakeContext:
    """Minimal stand-in for grpc.aio.ServicerContext."""

    async def abort(self, code, details=""):
        raise AbortCalled(code, details)


@pytest.fixture
def servicer(blobs_dir):
    return StoreNodeServicer()


class TestPut:
    """Test Put handling."""

    @pytest.mark.asyncio
    async def test_put_returns_hex_hash(self, servicer):
        response = PutResponse.from_json(
            await servicer.Put(PutRequest(payload=b"hello").to_json(), FakeContext())
        )

        assert response.success
        assert response.hash == hash_to_hex(compute_hash(b"hello"))

    @pytest.mark.asyncio
    async def test_malformed_request(self, servicer):
        response = PutResponse.from_json(await servicer.Put(b"not json", FakeContext()))

        assert not response.success
        assert "Malformed" in response.error_message


class TestGet:
    """Test Get handling."""

    @pytest.mark.asyncio
    async def test_get_after_put(self, servicer):
        put = PutResponse.from_json(
            await servicer.Put(PutRequest(payload=b"payload").to_json(), FakeContext())
        )

        response = GetResponse.from_json(
            await servicer.Get(GetRequest(hash=put.hash).to_json(), FakeContext())
        )

        assert response.payload == b"payload"

    @pytest.mark.asyncio
    async def test_unknown_hash_is_not_found(self, servicer):
        with pytest.raises(AbortCalled) as exc_info:
            await servicer.Get(GetRequest(hash="ab" * 20).to_json(), FakeContext())

        assert exc_info.value.code == grpc.StatusCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_bad_hash_is_invalid_argument(self, servicer):
        with pytest.raises(AbortCalled) as exc_info:
            await servicer.Get(GetRequest(hash="abc").to_json(), FakeContext())

        assert exc_info.value.code == grpc.StatusCode.INVALID_ARGUMENT

    @pytest.mark.asyncio
    async def test_corrupted_blob_is_data_loss(self, servicer):
        put = PutResponse.from_json(
            await servicer.Put(PutRequest(payload=b"intact").to_json(), FakeContext())
        )
        get_blob_path(bytes.fromhex(put.hash)).write_bytes(b"damaged")

        with pytest.raises(AbortCalled) as exc_info:
            await servicer.Get(GetRequest(hash=put.hash).to_json(), FakeContext())

        assert exc_info.value.code == grpc.StatusCode.DATA_LOSS


@pytest.mark.asyncio
async def test_ping_reports_blob_count(servicer):
    await servicer.Put(PutRequest(payload=b"one").to_json(), FakeContext())
    await servicer.Put(PutRequest(payload=b"two").to_json(), FakeContext())

    response = PingResponse.from_json(await servicer.Ping(PingRequest().to_json(), FakeContext()))

    assert response.available
    assert response.blob_count == 2
