"""Wire-level message shapes.

Outbound lines are one of two objects: a snapshot of every component, or
an error answering a rejected inbound line.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .base import ComponentId


INVALID_JSON = "Invalid JSON"
UNKNOWN_COMPONENT = "Unknown component"


class SnapshotMessage(BaseModel):
    """Full component state, in registry insertion order.

    Attributes:
        components: Rendered snapshot of every component.
    """

    components: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Rendered snapshot of every component.",
    )


class ErrorMessage(BaseModel):
    """Error answer to an inbound line.

    Attributes:
        error: Human-readable error category.
        id: Component id the error refers to, if any.
    """

    error: str = Field(..., description="Human-readable error category.")
    id: Optional[ComponentId] = Field(
        default=None, description="Component id the error refers to, if any."
    )
