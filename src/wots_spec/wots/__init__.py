"""
This package provides a Python specification for the WOTS+ one-time
signature scheme (RFC 8391, section 3).

It exposes the core data structures and the main interface functions.
"""

from .address import Address
from .constants import (
    DEMO_CONFIG,
    PROD_CONFIG,
    TARGET_CONFIG,
    TEST_CONFIG,
    WotsConfig,
    init_params,
)
from .containers import PrivateKey, PublicKey, Signature
from .exceptions import (
    InputLengthMismatchError,
    InvalidParametersError,
    UnsupportedDigestSizeError,
    WotsError,
)
from .hash_function import HashFamily
from .interface import (
    TARGET_WOTS_SCHEME,
    WotsScheme,
    get_scheme,
    key_gen,
    sign,
    verify,
)

__all__ = [
    "Address",
    "HashFamily",
    "WotsConfig",
    "WotsScheme",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "init_params",
    "get_scheme",
    "key_gen",
    "sign",
    "verify",
    "WotsError",
    "InvalidParametersError",
    "UnsupportedDigestSizeError",
    "InputLengthMismatchError",
    "PROD_CONFIG",
    "TEST_CONFIG",
    "DEMO_CONFIG",
    "TARGET_CONFIG",
    "TARGET_WOTS_SCHEME",
]
