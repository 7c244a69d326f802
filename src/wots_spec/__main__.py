"""
WOTS+ command line entry point.

Generate key pairs, sign and verify messages, or time a full round trip.

Usage::

    python -m wots_spec keygen --n 32 --w 16
    python -m wots_spec sign --key-seed HEX --bitmask-seed HEX --message "Hello world!"
    python -m wots_spec verify --bitmask-seed HEX --public-key HEX --signature HEX --message "..."
    python -m wots_spec demo --n 32 --w 256

Messages are hashed down to an `n`-byte digest with the parameter set's core
hash before they are signed or verified. Seeds default to fresh random bytes.

Exit status: 0 on success, 1 when a signature does not verify, 2 on invalid
input.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from wots_spec.wots import (
    HashFamily,
    PublicKey,
    Signature,
    WotsConfig,
    WotsError,
    get_scheme,
    init_params,
)
from wots_spec.wots.hash_function import get_core_hash

DEMO_MESSAGE = "Hello world!"
"""The message signed by the `demo` command."""

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the command line tool."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def digest_message(config: WotsConfig, message: bytes) -> bytes:
    """
    Reduce an arbitrary message to the `n`-byte digest WOTS+ signs.

    WOTS+ itself only ever signs fixed-size digests; this is the caller-side
    reduction, using the parameter set's own core hash.
    """
    return get_core_hash(config.HASH_FAMILY, config.N)(message)


def _seed(value: str | None, config: WotsConfig) -> bytes:
    """Decode a hex seed, or draw a fresh random one."""
    if value is None:
        return os.urandom(config.N)
    return bytes.fromhex(value.removeprefix("0x"))


def _config_from_args(args: argparse.Namespace) -> WotsConfig:
    return init_params(args.n, args.w, HashFamily(args.hash_family))


def cmd_keygen(args: argparse.Namespace) -> int:
    """Print a key pair's seeds and public key."""
    config = _config_from_args(args)
    key_seed = _seed(args.key_seed, config)
    bitmask_seed = _seed(args.bitmask_seed, config)

    _, public_key = get_scheme(config).key_gen(key_seed, bitmask_seed)

    print(f"key_seed: {key_seed.hex()}")
    print(f"bitmask_seed: {bitmask_seed.hex()}")
    print(f"public_key: {public_key.encode_bytes().hex()}")
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    """Print the signature of a message."""
    config = _config_from_args(args)
    scheme = get_scheme(config)
    key_seed = bytes.fromhex(args.key_seed.removeprefix("0x"))
    bitmask_seed = bytes.fromhex(args.bitmask_seed.removeprefix("0x"))

    logger.warning(
        "A WOTS+ key pair signs at most one message; "
        "signing a second message with the same key seed enables forgeries"
    )
    private_key = scheme.expand_seed(key_seed)
    digest = digest_message(config, args.message.encode())
    signature = scheme.sign(digest, private_key, bitmask_seed)

    print(f"signature: {signature.encode_bytes().hex()}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Check a signature and report the result through the exit status."""
    config = _config_from_args(args)
    bitmask_seed = bytes.fromhex(args.bitmask_seed.removeprefix("0x"))
    public_key = PublicKey.decode_bytes(bytes.fromhex(args.public_key.removeprefix("0x")), config)
    signature = Signature.decode_bytes(bytes.fromhex(args.signature.removeprefix("0x")), config)

    digest = digest_message(config, args.message.encode())
    if get_scheme(config).verify(public_key, signature, digest, bitmask_seed):
        print("valid")
        return 0
    print("invalid")
    return 1


def cmd_demo(args: argparse.Namespace) -> int:
    """Time a key generation, signature and verification with random seeds."""
    config = _config_from_args(args)
    scheme = get_scheme(config)
    key_seed = os.urandom(config.N)
    bitmask_seed = os.urandom(config.N)
    digest = digest_message(config, DEMO_MESSAGE.encode())

    start = time.perf_counter()
    private_key, public_key = scheme.key_gen(key_seed, bitmask_seed)
    keygen_ms = (time.perf_counter() - start) * 1000

    start = time.perf_counter()
    signature = scheme.sign(digest, private_key, bitmask_seed)
    sign_ms = (time.perf_counter() - start) * 1000

    start = time.perf_counter()
    result = scheme.verify(public_key, signature, digest, bitmask_seed)
    verify_ms = (time.perf_counter() - start) * 1000

    logger.info("Parameters: n=%d w=%d chains=%d", config.N, config.W, config.LEN)
    print(f"Key generation: {keygen_ms:.1f} ms")
    print(f"Signing: {sign_ms:.1f} ms")
    print(f"Verification: {verify_ms:.1f} ms")
    print(f"Signature size: {len(signature.encode_bytes())} bytes")
    print(f"Result: {'PASSED' if result else 'FAILED'}")
    return 0 if result else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="python -m wots_spec",
        description="WOTS+ one-time signatures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--n", type=int, default=32, help="Digest size in bytes (default: 32)")
    common.add_argument("--w", type=int, default=16, help="Winternitz parameter (default: 16)")
    common.add_argument(
        "--hash-family",
        choices=[family.value for family in HashFamily],
        default=HashFamily.SHA2.value,
        help="Core hash family (default: sha2)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    keygen = commands.add_parser("keygen", parents=[common], help="Generate a key pair")
    keygen.add_argument("--key-seed", default=None, help="Secret seed as hex (default: random)")
    keygen.add_argument(
        "--bitmask-seed", default=None, help="Public seed as hex (default: random)"
    )
    keygen.set_defaults(handler=cmd_keygen)

    sign = commands.add_parser(
        "sign",
        parents=[common],
        help="Sign a message (each key seed may sign only one message)",
        description="Sign one message. A key seed must never sign a second message.",
    )
    sign.add_argument("--key-seed", required=True, help="Secret seed as hex")
    sign.add_argument("--bitmask-seed", required=True, help="Public seed as hex")
    sign.add_argument("--message", required=True, help="Message to sign")
    sign.set_defaults(handler=cmd_sign)

    verify = commands.add_parser("verify", parents=[common], help="Verify a signature")
    verify.add_argument("--bitmask-seed", required=True, help="Public seed as hex")
    verify.add_argument("--public-key", required=True, help="Public key as hex")
    verify.add_argument("--signature", required=True, help="Signature as hex")
    verify.add_argument("--message", required=True, help="Message that was signed")
    verify.set_defaults(handler=cmd_verify)

    demo = commands.add_parser("demo", parents=[common], help="Time a sign/verify round trip")
    demo.set_defaults(handler=cmd_demo)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        return args.handler(args)
    except (WotsError, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
