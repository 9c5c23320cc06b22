"""Integrity checksum utilities for uploads"""

import base64
import struct

import google_crc32c


def crc32c_value(content: bytes) -> int:
    """CRC-32C (Castagnoli polynomial) of content"""
    return google_crc32c.value(bytes(content))


def encode_crc32c(value: int) -> str:
    """
    Encode a CRC-32C value the way object stores expect it

    Args:
        value: Unsigned 32-bit checksum

    Returns:
        Base64 of the big-endian 4-byte value
    """
    return base64.b64encode(struct.pack(">I", value)).decode("ascii")


def crc32c_checksum(content: bytes) -> str:
    """
    Calculate the base64 CRC-32C checksum of content

    Args:
        content: Content bytes

    Returns:
        Base64 checksum string
    """
    return encode_crc32c(crc32c_value(content))
