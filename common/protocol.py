"""Shared RPC/protocol message definitions (serialization formats)."""

from dataclasses import dataclass
from typing import Optional
import json
import base64


@dataclass
class PutRequest:
    """Request message for Put RPC."""
    payload: bytes

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'payload': base64.b64encode(self.payload).decode('ascii')
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'PutRequest':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(payload=base64.b64decode(obj['payload']))


@dataclass
class PutResponse:
    """Response message for Put RPC. hash is lowercase hex."""
    success: bool
    hash: Optional[str] = None
    error_message: Optional[str] = None

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'success': self.success,
            'hash': self.hash,
            'error_message': self.error_message
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'PutResponse':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(
            success=obj['success'],
            hash=obj.get('hash'),
            error_message=obj.get('error_message')
        )


@dataclass
class GetRequest:
    """Request message for Get RPC."""
    hash: str

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({'hash': self.hash}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'GetRequest':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(hash=obj['hash'])


@dataclass
class GetResponse:
    """Response message for Get RPC."""
    payload: bytes

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'payload': base64.b64encode(self.payload).decode('ascii')
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'GetResponse':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(payload=base64.b64decode(obj['payload']))


@dataclass
class PingRequest:
    """Request message for Ping RPC (health check)."""
    pass

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({}).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'PingRequest':
        """Deserialize from JSON bytes."""
        return cls()


@dataclass
class PingResponse:
    """Response message for Ping RPC."""
    available: bool
    blob_count: int = 0

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps({
            'available': self.available,
            'blob_count': self.blob_count
        }).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'PingResponse':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        return cls(available=obj['available'], blob_count=obj.get('blob_count', 0))
