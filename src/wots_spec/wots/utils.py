"""Utility functions for the WOTS+ signature scheme."""


def to_byte(value: int, length: int) -> bytes:
    """
    Encodes a non-negative integer as a fixed-width big-endian byte string.

    This is the `toByte(x, y)` primitive of RFC 8391: the result is always
    exactly `length` bytes, zero-padded on the left.

    Args:
        value: The integer to encode.
        length: The output width in bytes.

    Returns:
        The `length`-byte big-endian encoding of `value`.
    """
    return value.to_bytes(length, "big")


def xor_bytes(left: bytes, right: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(left) != len(right):
        raise ValueError(f"Cannot XOR {len(left)} bytes with {len(right)} bytes")
    return bytes(a ^ b for a, b in zip(left, right, strict=True))
