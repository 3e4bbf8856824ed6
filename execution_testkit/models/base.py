"""Base model configuration for all recorded data structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable base model.

    Arbitrary types are allowed so events can reference engine-owned
    descriptors and exception instances without copying them.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
