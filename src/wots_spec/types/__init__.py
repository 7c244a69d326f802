"""Reusable type definitions for the WOTS+ specification."""

from .base import StrictBaseModel
from .uint import BaseUint, Uint32, Uint64

__all__ = [
    "BaseUint",
    "StrictBaseModel",
    "Uint32",
    "Uint64",
]
