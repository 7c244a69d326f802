"""
Defines the parameter sets and domain-separation constants for WOTS+.

A parameter set is fully determined by two public values:

- `n`, the digest size in bytes (32 or 64),
- `w`, the Winternitz parameter, i.e. the number of values one digit takes.

Everything else (digit counts, key sizes) is derived from them with exact
integer arithmetic.

We provide a production preset, a fast test preset and the `w = 256` preset
used by the timing demo.
"""

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from typing_extensions import Final

from ..config import WOTS_ENV
from .exceptions import InvalidParametersError
from .hash_function import HashFamily

SUPPORTED_DIGEST_SIZES: Final = (32, 64)
"""The digest sizes `n` (in bytes) a parameter set may use."""


class WotsConfig(BaseModel):
    """A model holding the configuration constants for a WOTS+ parameter set."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    N: int
    """The digest size in bytes; also the size of seeds and chain values."""

    W: int
    """The Winternitz parameter: digits take values in `[0, W - 1]`."""

    HASH_FAMILY: HashFamily = HashFamily.SHA2
    """The family of the core hash function."""

    @model_validator(mode="after")
    def check_parameters(self) -> "WotsConfig":
        """Reject `(n, w)` pairs that do not byte-align the base-w digits."""
        if self.N not in SUPPORTED_DIGEST_SIZES:
            raise InvalidParametersError(
                self.N, self.W, f"digest size must be one of {SUPPORTED_DIGEST_SIZES}"
            )
        if self.W < 4 or self.W & (self.W - 1) != 0:
            raise InvalidParametersError(
                self.N, self.W, "Winternitz parameter must be a power of two of at least 4"
            )
        if 8 % self.LOG_W != 0:
            raise InvalidParametersError(self.N, self.W, "log2(w) must divide 8")
        return self

    @property
    def LOG_W(self) -> int:  # noqa: N802
        """The number of bits per base-w digit."""
        return self.W.bit_length() - 1

    @property
    def LEN_1(self) -> int:  # noqa: N802
        """The number of digits encoding the message digest."""
        return 8 * self.N // self.LOG_W

    @property
    def LEN_2(self) -> int:  # noqa: N802
        """
        The number of checksum digits.

        This is `floor(log2(LEN_1 * (W - 1)) / LOG_W) + 1`. The integer log2 is
        taken with `bit_length` so power-of-two boundaries are exact.
        """
        max_checksum = self.LEN_1 * (self.W - 1)
        return (max_checksum.bit_length() - 1) // self.LOG_W + 1

    @property
    def LEN(self) -> int:  # noqa: N802
        """The total number of hash chains (message plus checksum digits)."""
        return self.LEN_1 + self.LEN_2

    @property
    def KEY_LENGTH(self) -> int:  # noqa: N802
        """The size in bytes of a private key, public key or signature."""
        return self.N * self.LEN


def init_params(n: int, w: int, hash_family: HashFamily = HashFamily.SHA2) -> WotsConfig:
    """
    Builds and validates the parameter set for `(n, w)`.

    Args:
        n: The digest size in bytes.
        w: The Winternitz parameter.
        hash_family: The family of the core hash function.

    Returns:
        The frozen parameter set with all derived sizes.

    Raises:
        InvalidParametersError: If the pair violates any constraint, including
            values that are not plain integers.
    """
    try:
        return WotsConfig(N=n, W=w, HASH_FAMILY=hash_family)
    except ValidationError as exc:
        raise InvalidParametersError(n, w, str(exc)) from exc


PROD_CONFIG: Final = WotsConfig(N=32, W=16)
"""WOTSP-SHA2_256: the parameter set recommended for production."""

TEST_CONFIG: Final = WotsConfig(N=32, W=4)
"""Short chains for fast tests."""

DEMO_CONFIG: Final = WotsConfig(N=32, W=256)
"""Few, long chains: the smallest signatures, the slowest signing."""

TARGET_CONFIG: Final = TEST_CONFIG if WOTS_ENV == "test" else PROD_CONFIG
"""The parameter set selected by the `WOTS_ENV` environment variable."""


HASH_PADDING_F: Final = 0x00
"""The padding tag prefixed to every chaining function `F` input."""

HASH_PADDING_PRF: Final = 0x01
"""The padding tag prefixed to every `PRF` input."""

PRF_INPUT_LENGTH: Final = 32
"""The fixed size of the `PRF` input: an address or a 32-byte counter."""

KEY_SELECTOR: Final = 0
"""Address `key_and_mask` value when deriving the key of `F`."""

BITMASK_SELECTOR: Final = 1
"""Address `key_and_mask` value when deriving the bitmask of `F`."""
