"""
Defines the keyed pseudorandom function (PRF) of WOTS+.

The PRF serves two purposes:

1.  Expanding the secret key seed into one secret chain start per digit
    position (the input is a 32-byte counter).
2.  Deriving the per-call key and bitmask of the chaining function `F` from the
    public bitmask seed (the input is a serialized address).

### Construction

    PRF(input, key) = Hash(toByte(1, n) || key || input)

The leading `n`-byte padding tag separates PRF calls from `F` calls, whose
inputs start with `toByte(0, n)` and would otherwise be indistinguishable.
"""

from __future__ import annotations

from pydantic import model_validator

from ..types import StrictBaseModel
from ._validation import enforce_strict_types
from .constants import (
    HASH_PADDING_PRF,
    PRF_INPUT_LENGTH,
    PROD_CONFIG,
    TEST_CONFIG,
    WotsConfig,
)
from .exceptions import InputLengthMismatchError
from .hash_function import get_core_hash
from .utils import to_byte


class Prf(StrictBaseModel):
    """An instance of the padded-hash PRF for a given config."""

    config: WotsConfig
    """Configuration parameters for the PRF."""

    @model_validator(mode="after")
    def check_strict_types(self) -> "Prf":
        """Reject subclasses to prevent type confusion attacks."""
        enforce_strict_types(self, config=WotsConfig)
        return self

    def apply(self, key: bytes, data: bytes) -> bytes:
        """
        Applies the PRF to a 32-byte input under an `n`-byte key.

        The hash input is always exactly `2n + 32` bytes.

        Args:
            key: The `n`-byte key (a key seed or a bitmask seed).
            data: The 32-byte input (a counter or a serialized address).

        Returns:
            An `n`-byte pseudorandom output.

        Raises:
            InputLengthMismatchError: If the key or the input has the wrong size.
            UnsupportedDigestSizeError: If the config's hash family has no
                function of size `n`.
        """
        n = self.config.N
        if len(key) != n:
            raise InputLengthMismatchError("PRF key", expected=n, actual=len(key))
        if len(data) != PRF_INPUT_LENGTH:
            raise InputLengthMismatchError(
                "PRF input", expected=PRF_INPUT_LENGTH, actual=len(data)
            )

        core_hash = get_core_hash(self.config.HASH_FAMILY, n)
        return core_hash(to_byte(HASH_PADDING_PRF, n) + key + data)

    def chain_start(self, key_seed: bytes, chain_index: int) -> bytes:
        """
        Derives the secret start value of one hash chain.

        The chain index is encoded as a 32-byte big-endian counter, so every
        chain of a key pair gets an independent secret.

        Args:
            key_seed: The secret `n`-byte key seed.
            chain_index: The digit position, in `[0, LEN)`.

        Returns:
            The `n`-byte private key segment for that chain.
        """
        return self.apply(key_seed, to_byte(chain_index, PRF_INPUT_LENGTH))


PROD_PRF = Prf(config=PROD_CONFIG)
"""An instance configured for production-level parameters."""

TEST_PRF = Prf(config=TEST_CONFIG)
"""A lightweight instance for test environments."""
