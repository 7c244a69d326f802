"""
Defines the chaining function `F` and the hash-chain engine.

### The Problem: Hash Function Overload

WOTS+ applies the same core hash thousands of times: once per step of every
hash chain of every key pair. If each step simply computed `hash(value)`, an
output produced at one position could be reused at another, and the security
reduction of the scheme would no longer hold.

### The Solution: Keyed, Masked Hashing

Each step is computed by `F`, which mixes the step's `Address` into the hash
twice:

1.  A per-step **key** `PRF(address with key_and_mask=0, bitmask_seed)`.
2.  A per-step **bitmask** `PRF(address with key_and_mask=1, bitmask_seed)`,
    XORed into the chained value before hashing.

    F(value) = Hash(toByte(0, n) || key || (value XOR bitmask))

Since chain and step indices are part of the address, every step of every
chain hashes under its own key and mask.
"""

from __future__ import annotations

from pydantic import model_validator

from ..types import StrictBaseModel
from ._validation import enforce_strict_types
from .address import Address
from .constants import (
    BITMASK_SELECTOR,
    HASH_PADDING_F,
    KEY_SELECTOR,
    PROD_CONFIG,
    TEST_CONFIG,
    WotsConfig,
)
from .exceptions import InputLengthMismatchError
from .hash_function import get_core_hash
from .prf import PROD_PRF, TEST_PRF, Prf
from .utils import to_byte, xor_bytes


class TweakHasher(StrictBaseModel):
    """An instance of the chaining function for a given config."""

    config: WotsConfig
    """Configuration parameters for the hasher."""

    prf: Prf
    """PRF deriving the per-step keys and bitmasks."""

    @model_validator(mode="after")
    def check_strict_types(self) -> "TweakHasher":
        """Reject subclasses and mismatched components."""
        enforce_strict_types(self, config=WotsConfig, prf=Prf)
        if self.prf.config != self.config:
            raise ValueError("prf must be configured with the same parameter set")
        return self

    def apply(self, value: bytes, bitmask_seed: bytes, address: Address) -> bytes:
        """
        Applies the chaining function `F` once.

        The hash input is always exactly `3n` bytes.

        Args:
            value: The current `n`-byte chain value.
            bitmask_seed: The public `n`-byte seed keying the PRF.
            address: The address of this step. Its `key_and_mask` word is
                ignored; the two PRF derivations use copies with that word
                set to 0 and 1. The address itself is never modified.

        Returns:
            The next `n`-byte chain value.
        """
        n = self.config.N
        if len(value) != n:
            raise InputLengthMismatchError("chain value", expected=n, actual=len(value))

        key = self.prf.apply(bitmask_seed, address.with_key_and_mask(KEY_SELECTOR).to_bytes())
        bitmask = self.prf.apply(
            bitmask_seed, address.with_key_and_mask(BITMASK_SELECTOR).to_bytes()
        )

        core_hash = get_core_hash(self.config.HASH_FAMILY, n)
        return core_hash(to_byte(HASH_PADDING_F, n) + key + xor_bytes(value, bitmask))

    def hash_chain(
        self,
        start_digest: bytes,
        start_step: int,
        num_steps: int,
        bitmask_seed: bytes,
        chain_index: int,
        address: Address | None = None,
    ) -> bytes:
        """
        Walks a hash chain forward from a given position.

        The chain index stays fixed for the whole walk while the step index
        follows the position in the chain. Walking stops at step `W - 1`: a
        chain has at most `W - 1` links, however many steps are requested.

        Args:
            start_digest: The value at position `start_step`.
            start_step: The position the walk starts from.
            num_steps: How many times to apply `F`.
            bitmask_seed: The public `n`-byte seed.
            chain_index: The digit position the chain belongs to.
            address: Base address of the enclosing structure, if any.

        Returns:
            The value at position `min(start_step + num_steps, W - 1)`, or
            `start_digest` itself when no step is taken.

        Raises:
            ValueError: If `start_step` or `num_steps` is negative.
        """
        if start_step < 0 or num_steps < 0:
            raise ValueError(
                f"Chain positions must be non-negative, got start={start_step}, "
                f"steps={num_steps}"
            )

        chain_address = (address or Address()).with_chain_index(chain_index)
        end_step = min(start_step + num_steps, self.config.W - 1)

        current_digest = start_digest
        for step in range(start_step, end_step):
            current_digest = self.apply(
                current_digest, bitmask_seed, chain_address.with_chain_step(step)
            )
        return current_digest


PROD_TWEAK_HASHER = TweakHasher(config=PROD_CONFIG, prf=PROD_PRF)
"""An instance configured for production-level parameters."""

TEST_TWEAK_HASHER = TweakHasher(config=TEST_CONFIG, prf=TEST_PRF)
"""A lightweight instance for test environments."""
