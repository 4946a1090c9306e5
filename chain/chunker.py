"""Splits byte buffers and files into fixed-size chunks."""

import logging
import stat
from pathlib import Path
from typing import List, Union

from common.constants import CHUNK_SIZE_BYTES, MAX_FILE_SIZE_BYTES
from common.exceptions import FileTooLargeError, NotAFileError

logger = logging.getLogger(__name__)


def chunk_buffer(buf: bytes, chunk_size: int = CHUNK_SIZE_BYTES) -> List[bytes]:
    """
    Split a buffer front-to-back into chunks of at most chunk_size bytes.

    Every chunk but the last is exactly chunk_size long. An empty buffer
    yields an empty list.

    Args:
        buf: Bytes to split
        chunk_size: Maximum chunk length

    Returns:
        Ordered list of chunks
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    view = bytes(buf)
    return [view[start:start + chunk_size] for start in range(0, len(view), chunk_size)]


def chunk_file_by_name(
    path: Union[str, Path],
    chunk_size: int = CHUNK_SIZE_BYTES,
    max_file_size: int = MAX_FILE_SIZE_BYTES
) -> List[bytes]:
    """
    Read a whole file into memory and split it into chunks.

    Args:
        path: File to read
        chunk_size: Maximum chunk length
        max_file_size: Largest accepted file size in bytes

    Returns:
        Ordered list of chunks

    Raises:
        NotAFileError: If path does not name a regular file
        FileTooLargeError: If the file is larger than max_file_size
    """
    filepath = Path(path)
    try:
        st = filepath.stat()
    except (FileNotFoundError, NotADirectoryError) as e:
        raise NotAFileError(f"Not a file: {filepath}") from e

    if not stat.S_ISREG(st.st_mode):
        raise NotAFileError(f"Not a file: {filepath}")
    if st.st_size > max_file_size:
        raise FileTooLargeError(f"File too big: {filepath} is {st.st_size} bytes, limit is {max_file_size}")

    data = filepath.read_bytes()
    if len(data) > max_file_size:
        raise FileTooLargeError(f"File too big: {filepath} grew to {len(data)} bytes while being read, limit is {max_file_size}")

    chunks = chunk_buffer(data, chunk_size)
    logger.debug(f"Split {filepath} ({len(data)} bytes) into {len(chunks)} chunks")
    return chunks
