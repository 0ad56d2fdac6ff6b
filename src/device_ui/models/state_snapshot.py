"""Data model for rendered registry snapshots.

A snapshot captures the rendered state of every component at one tick of
the snapshot cadence. Only ``components`` is sent to the renderer; the
sequence number and timestamp are kept for logging.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from .messages import SnapshotMessage


class StateSnapshot(BaseModel):
    """Represents one rendered snapshot of the registry.

    Attributes:
        sequence: Monotonic counter of snapshots built by one handler.
        timestamp: When the snapshot was rendered.
        components: Ordered list of rendered component snapshots.
    """

    sequence: int = Field(
        default=0, ge=0, description="Monotonic snapshot counter."
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the snapshot was rendered.",
    )
    components: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered list of rendered component snapshots.",
    )

    def to_message(self) -> SnapshotMessage:
        return SnapshotMessage(components=self.components)
