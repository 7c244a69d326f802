"""
End-to-end tests for the WOTS+ signature scheme.
"""

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from wots_spec.types import Uint32, Uint64
from wots_spec.wots import (
    Address,
    HashFamily,
    InputLengthMismatchError,
    PublicKey,
    Signature,
    init_params,
    key_gen,
    sign,
    verify,
)
from wots_spec.wots.constants import PROD_CONFIG, TEST_CONFIG, WotsConfig
from wots_spec.wots.interface import (
    PROD_WOTS_SCHEME,
    TARGET_WOTS_SCHEME,
    TEST_WOTS_SCHEME,
    WotsScheme,
    get_scheme,
)

KEY_SEED = bytes(range(32))
BITMASK_SEED = b"\xa5" * 32
DIGEST = hashlib.sha256(b"Hello world!").digest()


def _flip_bit(data: bytes, index: int, bit: int = 0) -> bytes:
    flipped = bytearray(data)
    flipped[index] ^= 1 << bit
    return bytes(flipped)


def _test_correctness_roundtrip(scheme: WotsScheme) -> None:
    """
    A helper to perform a full key_gen -> sign -> verify roundtrip.

    It also checks that verification fails for a different digest and for a
    different bitmask seed.
    """
    n = scheme.config.N
    key_seed = bytes(range(n))
    bitmask_seed = b"\x3c" * n
    digest = hashlib.sha512(b"message").digest()[:n]

    private_key, public_key = scheme.key_gen(key_seed, bitmask_seed)
    assert len(public_key.encode_bytes()) == scheme.config.KEY_LENGTH

    signature = scheme.sign(digest, private_key, bitmask_seed)
    assert len(signature.encode_bytes()) == scheme.config.KEY_LENGTH

    assert scheme.verify(public_key, signature, digest, bitmask_seed)
    assert not scheme.verify(public_key, signature, b"\x00" * n, bitmask_seed)
    assert not scheme.verify(public_key, signature, digest, b"\x3d" * n)


@pytest.mark.parametrize(
    "config",
    [
        pytest.param(TEST_CONFIG, id="n32-w4"),
        pytest.param(PROD_CONFIG, id="n32-w16"),
        pytest.param(init_params(32, 256), id="n32-w256"),
        pytest.param(init_params(64, 16), id="n64-w16"),
        pytest.param(init_params(32, 16, HashFamily.SHAKE), id="shake-n32-w16"),
        pytest.param(init_params(64, 4), id="n64-w4", marks=pytest.mark.slow),
        pytest.param(init_params(64, 256), id="n64-w256", marks=pytest.mark.slow),
        pytest.param(init_params(64, 16, HashFamily.SHAKE), id="shake-n64-w16"),
    ],
)
def test_signature_scheme_correctness(config: WotsConfig) -> None:
    """Runs an end-to-end test of the signature scheme."""
    _test_correctness_roundtrip(get_scheme(config))


def test_expand_seed_is_deterministic() -> None:
    """The same seed always expands to the same private key."""
    scheme = PROD_WOTS_SCHEME
    first = scheme.expand_seed(KEY_SEED)
    second = scheme.expand_seed(bytes(KEY_SEED))

    assert first.chains == second.chains
    assert len(first.chains) == PROD_CONFIG.LEN
    assert len(set(first.chains)) == PROD_CONFIG.LEN


def test_key_gen_is_deterministic() -> None:
    """Key pairs depend only on the two seeds."""
    first = PROD_WOTS_SCHEME.key_gen(KEY_SEED, BITMASK_SEED)
    second = PROD_WOTS_SCHEME.key_gen(KEY_SEED, BITMASK_SEED)
    assert first == second


def test_public_key_is_the_end_of_every_chain() -> None:
    """Public key segment `i` is private segment `i` walked `W - 1` steps."""
    scheme = TEST_WOTS_SCHEME
    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    for index in (0, 1, TEST_CONFIG.LEN - 1):
        expected = scheme.hasher.hash_chain(
            private_key.chains[index], 0, TEST_CONFIG.W - 1, BITMASK_SEED, index
        )
        assert public_key.chains[index] == expected


def test_signature_walks_to_the_digest_digits() -> None:
    """Signature segment `i` is private segment `i` walked `d_i` steps."""
    scheme = PROD_WOTS_SCHEME
    private_key, _ = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    signature = scheme.sign(DIGEST, private_key, BITMASK_SEED)
    lengths = scheme.encoder.chain_lengths(DIGEST)

    for index, steps in enumerate(lengths):
        expected = scheme.hasher.hash_chain(
            private_key.chains[index], 0, steps, BITMASK_SEED, index
        )
        assert signature.chains[index] == expected


def test_zero_digit_reveals_the_private_segment() -> None:
    """A digit of zero leaves its chain unwalked."""
    scheme = PROD_WOTS_SCHEME
    private_key, _ = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    digest = b"\x0f" + bytes(31)
    signature = scheme.sign(digest, private_key, BITMASK_SEED)
    assert signature.chains[0] == private_key.chains[0]
    assert signature.chains[1] != private_key.chains[1]


@pytest.fixture(scope="module")
def signed_test_vector() -> tuple[PublicKey, Signature]:
    scheme = TEST_WOTS_SCHEME
    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    return public_key, scheme.sign(DIGEST, private_key, BITMASK_SEED)


def test_signature_tampering_fails(signed_test_vector) -> None:
    """Flipping a bit on either side of every segment boundary breaks the signature."""
    public_key, signature = signed_test_vector
    scheme = TEST_WOTS_SCHEME
    n = TEST_CONFIG.N
    encoded = signature.encode_bytes()

    for segment in range(TEST_CONFIG.LEN):
        for index in (segment * n, segment * n + n - 1):
            tampered = Signature.decode_bytes(_flip_bit(encoded, index), TEST_CONFIG)
            assert not scheme.verify(public_key, tampered, DIGEST, BITMASK_SEED), (
                f"tampered signature byte {index} still verifies"
            )


def test_public_key_tampering_fails(signed_test_vector) -> None:
    """Flipping a bit in any public key segment breaks verification."""
    public_key, signature = signed_test_vector
    scheme = TEST_WOTS_SCHEME
    n = TEST_CONFIG.N
    encoded = public_key.encode_bytes()

    for segment in range(TEST_CONFIG.LEN):
        for index in (segment * n, segment * n + n - 1):
            tampered = PublicKey.decode_bytes(_flip_bit(encoded, index, bit=7), TEST_CONFIG)
            assert not scheme.verify(tampered, signature, DIGEST, BITMASK_SEED)


def test_digest_tampering_fails(signed_test_vector) -> None:
    """Flipping any single bit of the digest breaks verification."""
    public_key, signature = signed_test_vector
    scheme = TEST_WOTS_SCHEME

    for index in range(TEST_CONFIG.N):
        for bit in (0, 7):
            tampered = _flip_bit(DIGEST, index, bit)
            assert not scheme.verify(public_key, signature, tampered, BITMASK_SEED)


def test_checksum_blocks_chain_extension_forgery() -> None:
    """
    Walking a revealed chain further cannot forge a signature.

    Raising the first digest digit from 0 to 1 only needs one forward step on
    chain 0, which anyone can compute from the signature. The raised digit
    lowers the checksum, though, and lowering a checksum digit would mean
    walking a chain backwards. The forgery matches the public key on every
    message chain and is still rejected.
    """
    scheme = TEST_WOTS_SCHEME
    config = TEST_CONFIG
    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)

    signed_digest = bytes(config.N)
    forged_digest = b"\x40" + bytes(config.N - 1)
    signature = scheme.sign(signed_digest, private_key, BITMASK_SEED)

    signed_lengths = scheme.encoder.chain_lengths(signed_digest)
    forged_lengths = scheme.encoder.chain_lengths(forged_digest)
    assert signed_lengths[: config.LEN_1] == [0] * config.LEN_1
    assert forged_lengths[: config.LEN_1] == [1] + [0] * (config.LEN_1 - 1)
    assert signed_lengths[config.LEN_1 :] == [1, 2, 0, 0, 0]
    assert forged_lengths[config.LEN_1 :] == [1, 1, 3, 3, 3]

    # Walk forward wherever the forged digit is higher; keep the rest.
    forged_chains = []
    for index, (value, signed, forged) in enumerate(
        zip(signature.chains, signed_lengths, forged_lengths, strict=True)
    ):
        if forged >= signed:
            value = scheme.hasher.hash_chain(value, signed, forged - signed, BITMASK_SEED, index)
        forged_chains.append(value)
    forgery = Signature(chains=tuple(forged_chains))

    candidate = scheme.public_key_from_signature(forgery, forged_digest, BITMASK_SEED)
    mismatches = [
        index
        for index, (expected, actual) in enumerate(
            zip(public_key.chains, candidate.chains, strict=True)
        )
        if expected != actual
    ]

    # Only the checksum chain whose digit went down fails to line up.
    assert mismatches == [config.LEN_1 + 1]
    assert not scheme.verify(public_key, forgery, forged_digest, BITMASK_SEED)


def test_public_key_from_signature_recovers_public_key() -> None:
    """Completing the chains of a valid signature yields the public key."""
    scheme = PROD_WOTS_SCHEME
    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    signature = scheme.sign(DIGEST, private_key, BITMASK_SEED)
    assert scheme.public_key_from_signature(signature, DIGEST, BITMASK_SEED) == public_key


def test_base_address_binds_key_pairs_to_their_position() -> None:
    """A key pair generated at one OTS address does not verify at another."""
    scheme = TEST_WOTS_SCHEME
    address = Address(tree=Uint64(3), ots_index=Uint32(17))

    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED, address)
    default_private_key, default_public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    assert private_key == default_private_key
    assert public_key != default_public_key

    signature = scheme.sign(DIGEST, private_key, BITMASK_SEED, address)
    assert scheme.verify(public_key, signature, DIGEST, BITMASK_SEED, address)
    assert not scheme.verify(public_key, signature, DIGEST, BITMASK_SEED)


@pytest.mark.parametrize(
    "key_seed, bitmask_seed",
    [
        pytest.param(bytes(31), BITMASK_SEED, id="short key seed"),
        pytest.param(bytes(64), BITMASK_SEED, id="long key seed"),
        pytest.param(KEY_SEED, bytes(33), id="long bitmask seed"),
        pytest.param(KEY_SEED, b"", id="empty bitmask seed"),
    ],
)
def test_key_gen_rejects_wrong_seed_length(key_seed: bytes, bitmask_seed: bytes) -> None:
    """Seeds must be exactly `n` bytes."""
    with pytest.raises(InputLengthMismatchError):
        PROD_WOTS_SCHEME.key_gen(key_seed, bitmask_seed)


def test_sign_rejects_raw_messages() -> None:
    """Signing a message that is not an `n`-byte digest is a usage error."""
    private_key, _ = TEST_WOTS_SCHEME.key_gen(KEY_SEED, BITMASK_SEED)
    with pytest.raises(InputLengthMismatchError):
        TEST_WOTS_SCHEME.sign(b"Hello world!", private_key, BITMASK_SEED)


def test_inputs_from_another_parameter_set_raise() -> None:
    """Keys and signatures must match the scheme's parameter set."""
    private_key, public_key = TEST_WOTS_SCHEME.key_gen(KEY_SEED, BITMASK_SEED)
    signature = TEST_WOTS_SCHEME.sign(DIGEST, private_key, BITMASK_SEED)

    with pytest.raises(InputLengthMismatchError):
        PROD_WOTS_SCHEME.sign(DIGEST, private_key, BITMASK_SEED)
    with pytest.raises(InputLengthMismatchError):
        PROD_WOTS_SCHEME.verify(public_key, signature, DIGEST, BITMASK_SEED)


def test_verify_rejects_malformed_inputs_with_errors() -> None:
    """Wrongly sized inputs are errors; a wrong signature is simply `False`."""
    scheme = PROD_WOTS_SCHEME
    private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
    signature = scheme.sign(DIGEST, private_key, BITMASK_SEED)

    with pytest.raises(InputLengthMismatchError):
        scheme.verify(public_key, signature, DIGEST[:-1], BITMASK_SEED)
    with pytest.raises(InputLengthMismatchError):
        scheme.verify(public_key, signature, DIGEST, BITMASK_SEED[:-1])
    with pytest.raises(InputLengthMismatchError):
        scheme.verify(public_key, Signature(chains=signature.chains[1:]), DIGEST, BITMASK_SEED)

    other_private_key, _ = scheme.key_gen(b"\x99" * 32, BITMASK_SEED)
    other_signature = scheme.sign(DIGEST, other_private_key, BITMASK_SEED)
    assert scheme.verify(public_key, other_signature, DIGEST, BITMASK_SEED) is False


def test_module_level_functions() -> None:
    """The functional API wraps the cached scheme for a parameter set."""
    params = init_params(32, 16)
    private_key, public_key = key_gen(params, KEY_SEED, BITMASK_SEED)
    signature = sign(params, DIGEST, private_key, BITMASK_SEED)

    assert verify(params, public_key, signature, DIGEST, BITMASK_SEED)
    assert (private_key, public_key) == PROD_WOTS_SCHEME.key_gen(KEY_SEED, BITMASK_SEED)


def test_get_scheme_is_cached_per_config() -> None:
    """Equal parameter sets share one scheme instance."""
    assert get_scheme(init_params(32, 16)) is PROD_WOTS_SCHEME
    assert get_scheme(TEST_CONFIG) is TEST_WOTS_SCHEME
    assert TARGET_WOTS_SCHEME is TEST_WOTS_SCHEME


def test_concurrent_signing_is_independent() -> None:
    """Independent key pairs can be processed in parallel threads."""
    scheme = TEST_WOTS_SCHEME
    seeds = [bytes([i]) * 32 for i in range(8)]

    def roundtrip(seed: bytes) -> tuple[bytes, bool]:
        private_key, public_key = scheme.key_gen(seed, BITMASK_SEED)
        signature = scheme.sign(DIGEST, private_key, BITMASK_SEED)
        return signature.encode_bytes(), scheme.verify(public_key, signature, DIGEST, BITMASK_SEED)

    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(roundtrip, seeds))

    sequential = [roundtrip(seed) for seed in seeds]
    assert parallel == sequential
    assert all(valid for _, valid in parallel)


def test_verification_outcome_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Lifecycle operations log at debug level without leaking seeds."""
    scheme = TEST_WOTS_SCHEME
    with caplog.at_level(logging.DEBUG, logger="wots_spec.wots.interface"):
        private_key, public_key = scheme.key_gen(KEY_SEED, BITMASK_SEED)
        signature = scheme.sign(DIGEST, private_key, BITMASK_SEED)
        scheme.verify(public_key, signature, DIGEST, BITMASK_SEED)

    messages = [record.getMessage() for record in caplog.records]
    assert any("key pair" in message for message in messages)
    assert any("verification succeeded" in message for message in messages)
    assert not any(KEY_SEED.hex() in message for message in messages)
