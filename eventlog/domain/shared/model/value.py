from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class Entity(BaseModel):
    """Mutable domain object with identity."""

    model_config = ConfigDict(validate_assignment=True)
