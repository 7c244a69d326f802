"""
Exception hierarchy for the WOTS+ scheme.

None of these errors is retryable: each one reports a permanent
configuration or input defect. A signature that simply does not verify is
not an error and never raises.
"""

from __future__ import annotations


class WotsError(Exception):
    """
    Base exception for all WOTS+ errors.

    Not a `ValueError` subclass, so raising one inside a pydantic validator
    reaches the caller unchanged rather than wrapped in a `ValidationError`.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidParametersError(WotsError):
    """
    Raised when an `(n, w)` pair does not describe a usable parameter set.

    Attributes:
        n: The requested digest size in bytes.
        w: The requested Winternitz parameter.
        reason: Which constraint was violated.
    """

    def __init__(self, n: object, w: object, reason: str) -> None:
        self.n = n
        self.w = w
        self.reason = reason
        super().__init__(f"Invalid WOTS+ parameters (n={n!r}, w={w!r}): {reason}")


class UnsupportedDigestSizeError(WotsError):
    """
    Raised when no core hash function exists for a digest size.

    Attributes:
        family: Name of the hash family that was asked for.
        digest_size: The requested output size in bytes.
    """

    def __init__(self, family: str, digest_size: int) -> None:
        self.family = family
        self.digest_size = digest_size
        super().__init__(f"No {family} hash function with a {digest_size}-byte digest")


class InputLengthMismatchError(WotsError):
    """
    Raised when a seed, key, digest or signature has the wrong size.

    Attributes:
        name: What the offending input is (e.g. "digest", "bitmask seed").
        expected: The length implied by the parameter set.
        actual: The length that was received.
    """

    def __init__(self, name: str, *, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{name} must be exactly {expected} bytes, got {actual}")
