"""Reusable, strict base models shared by the WOTS+ types."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )

    def copy(self: Self, **kwargs: Any) -> Self:  # type: ignore[override]
        """Create a copy of the model with the updated fields that are validated."""
        return self.__class__(**(dict(self) | kwargs))
