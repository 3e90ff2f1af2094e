"""Base classes for domain models."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable model compared by value.

    Field aliases mirror the upstream wire format, so instances can be built
    straight from provider JSON as well as by field name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)
