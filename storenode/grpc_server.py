"""gRPC server implementation for the store node."""

import errno
import logging

import grpc
from grpc import aio

from common.protocol import (
    PutRequest,
    PutResponse,
    GetRequest,
    GetResponse,
    PingRequest,
    PingResponse,
)
from common.exceptions import FormatError, IntegrityError
from common.hash_codec import hash_from_hex, hash_to_hex
from storenode.blob_storage import list_all_blobs, read_blob, write_blob

logger = logging.getLogger(__name__)


class StoreNodeServicer:
    """
    gRPC service implementation for content-addressed put/get.
    """

    async def Put(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> bytes:
        """
        Handle Put RPC (unary).
        Stores the payload under its SHA-1 hash and returns the hash.

        Args:
            request_bytes: Serialized PutRequest
            context: gRPC context

        Returns:
            Serialized PutResponse
        """
        try:
            request = PutRequest.from_json(request_bytes)
        except (ValueError, KeyError) as e:
            error_msg = f"Malformed put request: {e}"
            logger.error(error_msg)
            return PutResponse(success=False, error_message=error_msg).to_json()

        try:
            hash_value = write_blob(request.payload)
        except OSError as os_error:
            if os_error.errno == errno.ENOSPC:
                error_msg = f"Disk full: cannot store {len(request.payload)} byte blob"
            else:
                error_msg = f"Error storing blob: {os_error}"
            logger.error(error_msg)
            return PutResponse(success=False, error_message=error_msg).to_json()

        hex_hash = hash_to_hex(hash_value)
        logger.info(f"Stored blob {hex_hash} ({len(request.payload)} bytes)")
        return PutResponse(success=True, hash=hex_hash).to_json()

    async def Get(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> bytes:
        """
        Handle Get RPC (unary).

        Aborts with NOT_FOUND for unknown hashes and DATA_LOSS for blobs
        that fail checksum verification.

        Args:
            request_bytes: Serialized GetRequest
            context: gRPC context

        Returns:
            Serialized GetResponse
        """
        try:
            request = GetRequest.from_json(request_bytes)
            hash_value = hash_from_hex(request.hash)
        except (ValueError, KeyError, FormatError) as e:
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, f"Malformed get request: {e}")

        try:
            data = read_blob(hash_value)
        except FileNotFoundError:
            logger.info(f"Blob {request.hash} not found")
            await context.abort(grpc.StatusCode.NOT_FOUND, f"Blob {request.hash} not found")
        except IntegrityError as e:
            await context.abort(grpc.StatusCode.DATA_LOSS, str(e))
        except OSError as e:
            logger.error(f"Error reading blob {request.hash}: {e}", exc_info=True)
            await context.abort(grpc.StatusCode.INTERNAL, f"Error reading blob: {e}")

        logger.debug(f"Served blob {request.hash} ({len(data)} bytes)")
        return GetResponse(payload=data).to_json()

    async def Ping(
        self,
        request_bytes: bytes,
        context: grpc.aio.ServicerContext
    ) -> bytes:
        """
        Handle Ping RPC (unary).
        Simple health check endpoint.
        """
        PingRequest.from_json(request_bytes)
        return PingResponse(available=True, blob_count=len(list_all_blobs())).to_json()


def create_server() -> aio.Server:
    """
    Create and configure gRPC server.

    Returns:
        Configured gRPC server
    """
    server = aio.server()
    servicer = StoreNodeServicer()

    server.add_generic_rpc_handlers((
        grpc.method_handlers_generic_handler(
            'storenode.StoreNodeService',
            {
                'Put': grpc.unary_unary_rpc_method_handler(
                    servicer.Put,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
                'Get': grpc.unary_unary_rpc_method_handler(
                    servicer.Get,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
                'Ping': grpc.unary_unary_rpc_method_handler(
                    servicer.Ping,
                    request_deserializer=lambda x: x,
                    response_serializer=lambda x: x,
                ),
            }
        ),
    ))

    return server
