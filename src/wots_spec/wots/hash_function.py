"""
Selection of the core hash function underneath `PRF` and `F`.

WOTS+ only needs an opaque `Hash(bytes) -> n bytes` capability. The digest
size `n` picks the concrete function inside a family:

- SHA-2: SHA-256 for `n = 32`, SHA-512 for `n = 64`.
- SHAKE: SHAKE128 for `n = 32`, SHAKE256 for `n = 64`, squeezed to `n` bytes.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Callable

from .exceptions import UnsupportedDigestSizeError

CoreHash = Callable[[bytes], bytes]
"""A hash function mapping an arbitrary byte string to a fixed-size digest."""


class HashFamily(Enum):
    """The hash families a parameter set can be instantiated with."""

    SHA2 = "sha2"
    """SHA-256 / SHA-512."""

    SHAKE = "shake"
    """SHAKE128 / SHAKE256."""


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


def _shake128_32(data: bytes) -> bytes:
    return hashlib.shake_128(data).digest(32)


def _shake256_64(data: bytes) -> bytes:
    return hashlib.shake_256(data).digest(64)


_CORE_HASHES: dict[tuple[HashFamily, int], CoreHash] = {
    (HashFamily.SHA2, 32): _sha256,
    (HashFamily.SHA2, 64): _sha512,
    (HashFamily.SHAKE, 32): _shake128_32,
    (HashFamily.SHAKE, 64): _shake256_64,
}


def get_core_hash(family: HashFamily, digest_size: int) -> CoreHash:
    """
    Looks up the core hash function for a family and digest size.

    Args:
        family: The hash family of the parameter set.
        digest_size: The digest size `n` in bytes.

    Returns:
        A function returning exactly `digest_size` bytes.

    Raises:
        UnsupportedDigestSizeError: If the family has no function of that size.
    """
    try:
        return _CORE_HASHES[(family, digest_size)]
    except KeyError:
        raise UnsupportedDigestSizeError(family.value, digest_size) from None
