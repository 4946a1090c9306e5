"""Shared constants, types, codecs, errors and logging."""
