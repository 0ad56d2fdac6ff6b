from typing import Any

from pydantic import BaseModel, ConfigDict


class ModelBase(BaseModel):
    """
    Base class for all device-ui models.

    Forbids unknown fields and enables assignment-time validation, so a
    component's invariants are re-checked on every mutation.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        frozen=False,
    )


ComponentId = str
Patch = dict[str, Any]
