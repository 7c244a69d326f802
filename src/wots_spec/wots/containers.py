"""
Data containers for the WOTS+ signature scheme.

Private keys, public keys and signatures share one shape: `LEN` chain values
of `N` bytes each, one per digit position. On the wire they are the plain
concatenation of those values, `KEY_LENGTH` bytes in digit-position order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from pydantic import Field, field_validator

from ..types import StrictBaseModel
from .constants import WotsConfig
from .exceptions import InputLengthMismatchError

if TYPE_CHECKING:
    from .interface import WotsScheme


class ChainValues(StrictBaseModel):
    """One `N`-byte value per hash chain, in digit-position order."""

    chains: tuple[bytes, ...]
    """The chain values."""

    @field_validator("chains")
    @classmethod
    def check_uniform_size(cls, chains: tuple[bytes, ...]) -> tuple[bytes, ...]:
        """All chain values of one key or signature have the digest size."""
        if not chains:
            raise ValueError("at least one chain value is required")
        size = len(chains[0])
        if any(len(chain) != size for chain in chains):
            raise ValueError("all chain values must have the same size")
        return chains

    def encode_bytes(self) -> bytes:
        """Return the `KEY_LENGTH`-byte concatenation of the chain values."""
        return b"".join(self.chains)

    @classmethod
    def decode_bytes(cls, data: bytes, config: WotsConfig) -> Self:
        """
        Split a serialized key or signature into its chain values.

        Args:
            data: Exactly `config.KEY_LENGTH` bytes.
            config: The parameter set the data was produced under.

        Raises:
            InputLengthMismatchError: If `data` has the wrong size.
        """
        if len(data) != config.KEY_LENGTH:
            raise InputLengthMismatchError(
                cls.__name__, expected=config.KEY_LENGTH, actual=len(data)
            )
        n = config.N
        return cls(chains=tuple(bytes(data[i : i + n]) for i in range(0, len(data), n)))

    def check_shape(self, config: WotsConfig) -> None:
        """
        Check that the value holds `LEN` chain values of `N` bytes.

        The segment size is checked first, so a mismatch reports either the
        size of one chain value or, with segments of the right size, the
        total length implied by the chain count.

        Raises:
            InputLengthMismatchError: If the shape does not match `config`.
        """
        name = type(self).__name__
        segment_size = len(self.chains[0])
        if segment_size != config.N:
            raise InputLengthMismatchError(
                f"{name} chain value", expected=config.N, actual=segment_size
            )
        if len(self.chains) != config.LEN:
            raise InputLengthMismatchError(
                f"{name} with {len(self.chains)} chains (need {config.LEN})",
                expected=config.KEY_LENGTH,
                actual=len(self.chains) * segment_size,
            )


class PrivateKey(ChainValues):
    """
    The secret chain starts. **MUST BE KEPT CONFIDENTIAL.**

    A private key signs **at most one** digest. Every signature reveals
    intermediate chain values; two signatures together let anyone combine the
    higher of each pair of values into a forgery.
    """

    chains: tuple[bytes, ...] = Field(repr=False)
    """The secret chain start values, hidden from `repr`."""


class PublicKey(ChainValues):
    """The chain ends: every private chain value walked `W - 1` steps."""


class Signature(ChainValues):
    """The chain values at the positions given by the digest's base-w digits."""

    def verify(
        self,
        public_key: PublicKey,
        digest: bytes,
        bitmask_seed: bytes,
        scheme: WotsScheme,
    ) -> bool:
        """
        Verify the signature against a public key and digest.

        This is a convenience method that delegates to `scheme.verify()`.

        Unlike the scheme method, inputs whose sizes do not match the scheme's
        parameter set are reported as `False` instead of raising.

        Args:
            public_key: The public key to verify against.
            digest: The `N`-byte digest that was supposedly signed.
            bitmask_seed: The public bitmask seed of the key pair.
            scheme: The WOTS+ scheme instance to use for verification.

        Returns:
            `True` if the signature is valid, `False` otherwise.
        """
        try:
            return scheme.verify(public_key, self, digest, bitmask_seed)
        except InputLengthMismatchError:
            return False
