"""Base models for vac-sync."""

from pydantic import BaseModel, ConfigDict


class VacBaseModel(BaseModel):
    """Base model for all vac-sync domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


class VacFrozenModel(VacBaseModel):
    """Base model for values that must not change once handed to a caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["VacBaseModel", "VacFrozenModel"]
