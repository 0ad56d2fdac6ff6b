from typing import Any, Optional

from pydantic import Field, model_validator

from .base import ComponentId, ModelBase
from .enums import IntentType


class InboundIntent(ModelBase):
    """
    Classified meaning of one inbound protocol line.

    It is exactly one of:
    - an update of one component by id with a partial patch,
    - a well-formed message without an update directive (ignored), or
    - a malformed message that must be answered with an error.
    """

    type: IntentType = Field(
        ...,
        description="Classification of the inbound message.",
    )

    component_id: Optional[ComponentId] = Field(
        default=None,
        description="Target component id (update intents only).",
    )

    patch: dict[str, Any] = Field(
        default_factory=dict,
        description="Fields of the update section other than the id.",
    )

    reason: Optional[str] = Field(
        default=None,
        description="Why the message was classified as malformed.",
    )

    @model_validator(mode="after")
    def validate_by_type(self) -> "InboundIntent":
        if self.type == IntentType.UPDATE:
            if not isinstance(self.component_id, str):
                raise ValueError("update intents require a component_id")
            if self.reason is not None:
                raise ValueError("update intents must not carry a reason")
        else:
            if self.component_id is not None or self.patch:
                raise ValueError(
                    f"{self.type.value} intents must not carry a target or patch"
                )
        if self.type == IntentType.MALFORMED and not self.reason:
            raise ValueError("malformed intents require a reason")
        return self

    @classmethod
    def update(cls, component_id: ComponentId, patch: dict[str, Any]) -> "InboundIntent":
        return cls(type=IntentType.UPDATE, component_id=component_id, patch=patch)

    @classmethod
    def ignored(cls) -> "InboundIntent":
        return cls(type=IntentType.IGNORED)

    @classmethod
    def malformed(cls, reason: str) -> "InboundIntent":
        return cls(type=IntentType.MALFORMED, reason=reason)
