"""
Implements the base-w digit encoding and checksum of WOTS+.

A signature reveals, for every digit `d` of the message digest, the value
reached after `d` steps along the corresponding hash chain. On its own this
would be forgeable: anyone can walk a revealed chain further and so raise any
digit.

The checksum closes that hole. It sums `W - 1 - d` over all message digits and
signs that sum as well. Raising a message digit lowers the sum, and lowering a
checksum digit would require walking a chain backwards, which the one-way
hash prevents.
"""

from .constants import PROD_CONFIG, TEST_CONFIG, WotsConfig
from .exceptions import InputLengthMismatchError


class WinternitzEncoder:
    """
    An instance of the base-w encoder for a given configuration.

    This class turns a message digest into the list of chain lengths a
    signature walks: `LEN_1` message digits followed by `LEN_2` checksum
    digits.
    """

    def __init__(self, config: WotsConfig):
        """Initializes the encoder with a specific parameter set."""
        self.config = config

    def base_w(self, data: bytes, out_len: int) -> list[int]:
        """
        Splits a byte string into `out_len` base-w digits.

        Bytes are consumed in order and each one yields `8 / LOG_W` digits,
        most significant bits first. If `out_len` asks for more digits than the
        input holds, the missing bytes are read as zero.

        Args:
            data: The bytes to encode.
            out_len: The number of digits to produce.

        Returns:
            `out_len` integers in `[0, W - 1]`.
        """
        log_w = self.config.LOG_W
        mask = self.config.W - 1

        digits: list[int] = []
        byte_index = 0
        current = 0
        bits = 0
        for _ in range(out_len):
            if bits == 0:
                current = data[byte_index] if byte_index < len(data) else 0
                byte_index += 1
                bits = 8
            bits -= log_w
            digits.append((current >> bits) & mask)
        return digits

    def checksum(self, message_digits: list[int]) -> list[int]:
        """
        Computes the checksum digits for the message digits.

        ### Algorithm

        1.  `csum = sum(W - 1 - d)` over the `LEN_1` message digits.
        2.  Shift `csum` left by `(8 - (LEN_2 * LOG_W) % 8) % 8` bits so that
            its `LEN_2` digits start at a byte boundary.
        3.  Write it big-endian into `ceil(LEN_2 * LOG_W / 8)` bytes.
        4.  Read back `LEN_2` base-w digits.

        Args:
            message_digits: The `LEN_1` digits of the message digest.

        Returns:
            The `LEN_2` checksum digits.

        Raises:
            InputLengthMismatchError: If there are not exactly `LEN_1` digits.
            ValueError: If a digit lies outside `[0, W - 1]`.
        """
        config = self.config
        if len(message_digits) != config.LEN_1:
            raise InputLengthMismatchError(
                "message digits", expected=config.LEN_1, actual=len(message_digits)
            )
        if any(not 0 <= digit < config.W for digit in message_digits):
            raise ValueError(f"Message digits must lie in [0, {config.W - 1}]")

        csum = sum(config.W - 1 - digit for digit in message_digits)

        csum_bits = config.LEN_2 * config.LOG_W
        csum <<= (8 - csum_bits % 8) % 8
        csum_bytes = csum.to_bytes((csum_bits + 7) // 8, "big")

        return self.base_w(csum_bytes, config.LEN_2)

    def chain_lengths(self, digest: bytes) -> list[int]:
        """
        Encodes a message digest into one chain length per hash chain.

        Args:
            digest: The `N`-byte message digest. This is never the raw
                message; callers must hash arbitrary messages down first.

        Returns:
            `LEN` digits: the message digits followed by the checksum digits.

        Raises:
            InputLengthMismatchError: If the digest is not exactly `N` bytes.
        """
        config = self.config
        if len(digest) != config.N:
            raise InputLengthMismatchError("digest", expected=config.N, actual=len(digest))

        message_digits = self.base_w(digest, config.LEN_1)
        return message_digits + self.checksum(message_digits)


PROD_ENCODER = WinternitzEncoder(PROD_CONFIG)
"""An instance configured for production-level parameters."""

TEST_ENCODER = WinternitzEncoder(TEST_CONFIG)
"""A lightweight instance for test environments."""
