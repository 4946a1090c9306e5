"""Chain core: chunking, tail-first chain building and head-first chain reading."""

from chain.chunker import chunk_buffer, chunk_file_by_name
from chain.builder import ChainBuilder, store_chunks, store_file_by_name
from chain.reader import ChainReader, FetchState, fetch_file

__all__ = [
    "chunk_buffer",
    "chunk_file_by_name",
    "ChainBuilder",
    "store_chunks",
    "store_file_by_name",
    "ChainReader",
    "FetchState",
    "fetch_file",
]
