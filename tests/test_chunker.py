"""Unit tests for buffer and file chunking."""

from pathlib import Path
from unittest.mock import patch

import pytest

from chain.chunker import chunk_buffer, chunk_file_by_name
from common.constants import CHUNK_SIZE_BYTES, MAX_FILE_SIZE_BYTES
from common.exceptions import FileTooLargeError, NotAFileError


class TestChunkBuffer:
    """Test splitting in-memory buffers."""

    def test_small_buffer_is_single_chunk(self):
        assert chunk_buffer(b"Hello World", 900) == [b"Hello World"]

    def test_1801_bytes_gives_900_900_1(self):
        buf = bytes(i % 256 for i in range(1801))

        chunks = chunk_buffer(buf, 900)

        assert [len(c) for c in chunks] == [900, 900, 1]
        assert b"".join(chunks) == buf

    def test_evenly_divisible_last_chunk_is_full(self):
        chunks = chunk_buffer(b"x" * 1800, 900)

        assert [len(c) for c in chunks] == [900, 900]

    def test_empty_buffer_gives_no_chunks(self):
        assert chunk_buffer(b"", 900) == []

    @pytest.mark.parametrize("length", [1, 899, 900, 901, 2700, 5000])
    def test_chunk_bound(self, length):
        chunks = chunk_buffer(b"a" * length, 900)

        assert all(len(c) == 900 for c in chunks[:-1])
        assert 0 < len(chunks[-1]) <= 900

    def test_default_chunk_size(self):
        chunks = chunk_buffer(b"z" * (CHUNK_SIZE_BYTES + 1))

        assert len(chunks) == 2

    def test_accepts_bytearray(self):
        assert chunk_buffer(bytearray(b"abcd"), 3) == [b"abc", b"d"]

    def test_rejects_non_positive_chunk_size(self):
        with pytest.raises(ValueError):
            chunk_buffer(b"abc", 0)


class TestChunkFileByName:
    """Test reading and validating files before chunking."""

    def test_reads_regular_file(self, sample_file):
        assert chunk_file_by_name(sample_file) == [b"Hello World"]

    def test_accepts_string_path(self, sample_file):
        assert chunk_file_by_name(str(sample_file), chunk_size=5) == [b"Hello", b" Worl", b"d"]

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(NotAFileError):
            chunk_file_by_name(tmp_path)

    def test_missing_path_is_not_a_file(self, tmp_path):
        with pytest.raises(NotAFileError):
            chunk_file_by_name(tmp_path / "missing.bin")

    def test_file_over_limit_is_rejected(self, tmp_path):
        big = tmp_path / "big.bin"
        big.write_bytes(b"\x00" * (MAX_FILE_SIZE_BYTES + 1))

        with pytest.raises(FileTooLargeError):
            chunk_file_by_name(big)

    def test_file_at_limit_is_accepted(self, tmp_path):
        exact = tmp_path / "exact.bin"
        exact.write_bytes(b"\x01" * MAX_FILE_SIZE_BYTES)

        chunks = chunk_file_by_name(exact, chunk_size=900)

        assert sum(len(c) for c in chunks) == MAX_FILE_SIZE_BYTES

    def test_custom_limit(self, sample_file):
        with pytest.raises(FileTooLargeError):
            chunk_file_by_name(sample_file, max_file_size=10)

    def test_path_through_a_file_is_not_a_file(self, sample_file):
        with pytest.raises(NotAFileError):
            chunk_file_by_name(sample_file / "child")

    def test_file_growing_past_limit_during_read_is_rejected(self, sample_file):
        with patch.object(Path, "read_bytes", return_value=b"x" * 12):
            with pytest.raises(FileTooLargeError, match="while being read"):
                chunk_file_by_name(sample_file, max_file_size=11)
