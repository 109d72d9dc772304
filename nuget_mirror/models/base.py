"""Base models for NuGet Mirror."""

from pydantic import BaseModel, ConfigDict


class MirrorBaseModel(BaseModel):
    """Base model for all NuGet Mirror domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


class FrozenMirrorModel(MirrorBaseModel):
    """Immutable variant for identities and results."""

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["MirrorBaseModel", "FrozenMirrorModel"]
