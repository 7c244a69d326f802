"""
Defines the core interface for the WOTS+ one-time signature scheme.

High-level functions (`key_gen`, `sign`, `verify`) of the scheme.

This constitutes the public API of the signature scheme.
"""

from __future__ import annotations

import hmac
import logging
from functools import lru_cache

from .address import Address
from .constants import PROD_CONFIG, TARGET_CONFIG, TEST_CONFIG, WotsConfig
from .containers import PrivateKey, PublicKey, Signature
from .encoding import WinternitzEncoder
from .exceptions import InputLengthMismatchError
from .prf import Prf
from .tweak_hash import TweakHasher

logger = logging.getLogger(__name__)


def _check_length(name: str, value: bytes, expected: int) -> None:
    """Raise if a seed or digest does not have the size of the parameter set."""
    if len(value) != expected:
        raise InputLengthMismatchError(name, expected=expected, actual=len(value))


class WotsScheme:
    """Instance of the WOTS+ signature scheme for a given config."""

    def __init__(
        self,
        config: WotsConfig,
        prf: Prf,
        hasher: TweakHasher,
        encoder: WinternitzEncoder,
    ):
        """Initializes the scheme with a specific parameter set."""
        self.config = config
        self.prf = prf
        self.hasher = hasher
        self.encoder = encoder

    def expand_seed(self, key_seed: bytes) -> PrivateKey:
        """
        Expands the secret key seed into the private key.

        Chain `i` starts at `PRF(toByte(i, 32), key_seed)`. The expansion is
        deterministic: the same seed always yields the same private key.

        Args:
            key_seed: The secret `N`-byte seed.

        Returns:
            The `PrivateKey` holding `LEN` secret chain starts.
        """
        _check_length("key seed", key_seed, self.config.N)
        return PrivateKey(
            chains=tuple(self.prf.chain_start(key_seed, i) for i in range(self.config.LEN))
        )

    def key_gen(
        self,
        key_seed: bytes,
        bitmask_seed: bytes,
        address: Address | None = None,
    ) -> tuple[PrivateKey, PublicKey]:
        """
        Generates a key pair from two seeds.

        This is a **deterministic** algorithm.

        ### Key Generation Algorithm

        1.  **Expand the seed**: derive one secret chain start per digit
            position from `key_seed`.
        2.  **Walk every chain to its end**: apply `F` `W - 1` times to each
            chain start. The chain ends form the public key.

        Args:
            key_seed: The secret `N`-byte seed.
            bitmask_seed: The public `N`-byte seed keying `F`.
            address: Base address when the key pair lives inside a larger
                structure. Defaults to the all-zero address.

        Returns:
            A tuple containing the `PrivateKey` and `PublicKey`.
        """
        config = self.config
        _check_length("bitmask seed", bitmask_seed, config.N)

        private_key = self.expand_seed(key_seed)
        public_key = PublicKey(
            chains=tuple(
                self.hasher.hash_chain(
                    start_digest=chain_start,
                    start_step=0,
                    num_steps=config.W - 1,
                    bitmask_seed=bitmask_seed,
                    chain_index=chain_index,
                    address=address,
                )
                for chain_index, chain_start in enumerate(private_key.chains)
            )
        )

        logger.debug(
            "Generated WOTS+ key pair (n=%d, w=%d, chains=%d)", config.N, config.W, config.LEN
        )
        return private_key, public_key

    def sign(
        self,
        digest: bytes,
        private_key: PrivateKey,
        bitmask_seed: bytes,
        address: Address | None = None,
    ) -> Signature:
        """
        Signs an `N`-byte message digest.

        This is a **deterministic** algorithm.

        **CRITICAL SECURITY WARNING**: A private key must **NEVER** sign two
        different digests. Each signature reveals intermediate chain values;
        two of them let an attacker forge a signature on any digest whose
        digits all lie above the lower of the two. This function keeps no
        record of use; tracking it is the caller's job.

        ### Signing Algorithm

        1.  **Encode the digest**: split it into `LEN_1` base-w digits and
            append the `LEN_2` checksum digits.
        2.  **Walk each chain part way**: for digit `d_i`, apply `F` `d_i` times
            to the `i`-th secret chain start.

        Args:
            digest: The `N`-byte message digest. Never the raw message.
            private_key: The private key from `key_gen`.
            bitmask_seed: The public `N`-byte seed used at key generation.
            address: Base address used at key generation, if any.

        Returns:
            The resulting `Signature`.
        """
        config = self.config
        private_key.check_shape(config)
        _check_length("bitmask seed", bitmask_seed, config.N)

        lengths = self.encoder.chain_lengths(digest)
        signature = Signature(
            chains=tuple(
                self.hasher.hash_chain(
                    start_digest=chain_start,
                    start_step=0,
                    num_steps=steps,
                    bitmask_seed=bitmask_seed,
                    chain_index=chain_index,
                    address=address,
                )
                for chain_index, (chain_start, steps) in enumerate(
                    zip(private_key.chains, lengths, strict=True)
                )
            )
        )

        logger.debug("Signed digest with WOTS+ (n=%d, w=%d)", config.N, config.W)
        return signature

    def public_key_from_signature(
        self,
        signature: Signature,
        digest: bytes,
        bitmask_seed: bytes,
        address: Address | None = None,
    ) -> PublicKey:
        """
        Recomputes the public key a signature commits to.

        Each signature value sits `d_i` steps into its chain; walking the
        remaining `W - 1 - d_i` steps reaches the chain end. Schemes built on
        top (e.g. XMSS) use the result as a Merkle leaf input instead of
        comparing it to a stored public key.

        Args:
            signature: The signature to complete.
            digest: The `N`-byte digest that was supposedly signed.
            bitmask_seed: The public `N`-byte seed of the key pair.
            address: Base address used at key generation, if any.

        Returns:
            The candidate `PublicKey`.
        """
        config = self.config
        signature.check_shape(config)
        _check_length("bitmask seed", bitmask_seed, config.N)

        lengths = self.encoder.chain_lengths(digest)
        return PublicKey(
            chains=tuple(
                self.hasher.hash_chain(
                    start_digest=signed_value,
                    start_step=steps,
                    num_steps=config.W - 1 - steps,
                    bitmask_seed=bitmask_seed,
                    chain_index=chain_index,
                    address=address,
                )
                for chain_index, (signed_value, steps) in enumerate(
                    zip(signature.chains, lengths, strict=True)
                )
            )
        )

    def verify(
        self,
        public_key: PublicKey,
        signature: Signature,
        digest: bytes,
        bitmask_seed: bytes,
        address: Address | None = None,
    ) -> bool:
        """
        Verifies a signature against a public key and digest.

        This is a **deterministic** algorithm.

        ### Verification Algorithm

        1.  **Re-encode the digest** into chain lengths, checksum included.
        2.  **Complete every chain** from its signed position to its end.
        3.  **Compare** each completed chain with the public key segment. All
            `LEN` segments are compared; a single mismatch fails verification.

        Args:
            public_key: The public key to verify against.
            signature: The signature to check.
            digest: The `N`-byte digest that was supposedly signed.
            bitmask_seed: The public `N`-byte seed of the key pair.
            address: Base address used at key generation, if any.

        Returns:
            `True` if the signature is valid, `False` otherwise.

        Raises:
            InputLengthMismatchError: If any input does not have the size of
                the parameter set. A wrong signature of the right size is
                never an error.
        """
        public_key.check_shape(self.config)
        candidate = self.public_key_from_signature(signature, digest, bitmask_seed, address)

        matches = [
            hmac.compare_digest(expected, actual)
            for expected, actual in zip(public_key.chains, candidate.chains, strict=True)
        ]
        is_valid = all(matches)

        logger.debug("WOTS+ verification %s", "succeeded" if is_valid else "failed")
        return is_valid


@lru_cache(maxsize=None)
def get_scheme(config: WotsConfig) -> WotsScheme:
    """
    Returns the scheme instance for a parameter set.

    Instances are stateless, so one instance per parameter set is shared.
    """
    prf = Prf(config=config)
    return WotsScheme(
        config,
        prf,
        TweakHasher(config=config, prf=prf),
        WinternitzEncoder(config),
    )


def key_gen(
    params: WotsConfig, key_seed: bytes, bitmask_seed: bytes
) -> tuple[PrivateKey, PublicKey]:
    """Generates a key pair under `params`. See `WotsScheme.key_gen`."""
    return get_scheme(params).key_gen(key_seed, bitmask_seed)


def sign(
    params: WotsConfig, digest: bytes, private_key: PrivateKey, bitmask_seed: bytes
) -> Signature:
    """Signs a digest under `params`. See `WotsScheme.sign`."""
    return get_scheme(params).sign(digest, private_key, bitmask_seed)


def verify(
    params: WotsConfig,
    public_key: PublicKey,
    signature: Signature,
    digest: bytes,
    bitmask_seed: bytes,
) -> bool:
    """Verifies a signature under `params`. See `WotsScheme.verify`."""
    return get_scheme(params).verify(public_key, signature, digest, bitmask_seed)


PROD_WOTS_SCHEME = get_scheme(PROD_CONFIG)
"""An instance configured for production-level parameters."""

TEST_WOTS_SCHEME = get_scheme(TEST_CONFIG)
"""A lightweight instance for test environments."""

TARGET_WOTS_SCHEME = get_scheme(TARGET_CONFIG)
"""The instance selected by the `WOTS_ENV` environment variable."""
