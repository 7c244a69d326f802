"""
Defines the hash address used for domain separation.

Every call to the core hash function inside `F` is keyed by an address: a set
of eight 32-bit words locating the call within the whole scheme. Two calls
never share an address, so an output computed for one purpose (say step 3 of
chain 7) can never be replayed as the output of another.

Word layout, each word big-endian:

    word 0   layer          (tree layer, set by schemes built on top)
    word 1-2 tree           (64-bit tree index, set by schemes built on top)
    word 3   address_type   (0 for WOTS+ hashing)
    word 4   ots_index      (which one-time key inside a tree)
    word 5   chain_index    (which hash chain)
    word 6   chain_step     (which step inside the chain)
    word 7   key_and_mask   (0 derives the key of `F`, 1 its bitmask)

A standalone WOTS+ key pair leaves words 0-4 at zero.

Addresses are immutable values. Each update returns a new address.
"""

from __future__ import annotations

from pydantic import Field

from ..types import StrictBaseModel, Uint32, Uint64

ADDRESS_LENGTH: int = 32
"""The serialized size of an address: eight 4-byte words."""


class Address(StrictBaseModel):
    """The coordinates of a single hash invocation."""

    layer: Uint32 = Field(default=Uint32(0), description="Tree layer.")
    tree: Uint64 = Field(default=Uint64(0), description="Tree index, two words wide.")
    address_type: Uint32 = Field(default=Uint32(0), description="Address type (0 for WOTS+).")
    ots_index: Uint32 = Field(default=Uint32(0), description="One-time key index.")
    chain_index: Uint32 = Field(default=Uint32(0), description="Hash chain index.")
    chain_step: Uint32 = Field(default=Uint32(0), description="Step inside the chain.")
    key_and_mask: Uint32 = Field(default=Uint32(0), description="Key (0) or bitmask (1).")

    def with_chain_index(self, chain_index: int) -> Address:
        """Return a copy pointing at another hash chain."""
        return self.copy(chain_index=Uint32(chain_index))

    def with_chain_step(self, chain_step: int) -> Address:
        """Return a copy pointing at another step of the same chain."""
        return self.copy(chain_step=Uint32(chain_step))

    def with_key_and_mask(self, key_and_mask: int) -> Address:
        """Return a copy selecting the key or the bitmask derivation."""
        return self.copy(key_and_mask=Uint32(key_and_mask))

    def to_bytes(self) -> bytes:
        """
        Serialize the address as eight consecutive 4-byte big-endian words.

        Returns:
            Exactly `ADDRESS_LENGTH` bytes.
        """
        return (
            self.layer.to_bytes()
            + self.tree.to_bytes()
            + self.address_type.to_bytes()
            + self.ots_index.to_bytes()
            + self.chain_index.to_bytes()
            + self.chain_step.to_bytes()
            + self.key_and_mask.to_bytes()
        )
