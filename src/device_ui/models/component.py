"""Data models for the device's UI components.

This module defines the closed set of component variants the runtime can
host. Each variant is a pydantic model tagged by its ``type`` field, and
``Component`` is the discriminated union over all of them. Structural
fields are frozen at construction; the mutable state is only ever changed
through the registry's update handlers.
"""

from typing import Annotated, Literal, Union

from pydantic import Field, model_validator

from .base import ComponentId, ModelBase


class Slider(ModelBase):
    """A bounded integer control.

    Attributes:
        type: Variant tag, always 'Slider'.
        id: Unique component identifier.
        min: Lower bound of the value (inclusive).
        max: Upper bound of the value (inclusive).
        value: Current value, always within [min, max].
    """

    type: Literal["Slider"] = Field(
        default="Slider", frozen=True, description="Variant tag."
    )
    id: ComponentId = Field(
        ..., min_length=1, frozen=True, description="Unique component identifier."
    )
    min: int = Field(
        ..., frozen=True, description="Lower bound of the value (inclusive)."
    )
    max: int = Field(
        ..., frozen=True, description="Upper bound of the value (inclusive)."
    )
    value: int = Field(
        ..., description="Current value, always within [min, max]."
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "Slider":
        if self.min > self.max:
            raise ValueError(
                f"slider {self.id!r}: min ({self.min}) must not exceed max ({self.max})"
            )
        if not self.min <= self.value <= self.max:
            raise ValueError(
                f"slider {self.id!r}: value {self.value} outside [{self.min}, {self.max}]"
            )
        return self


class Button(ModelBase):
    """A boolean control.

    Attributes:
        type: Variant tag, always 'Button'.
        id: Unique component identifier.
        pressed: Whether the button is currently pressed.
    """

    type: Literal["Button"] = Field(
        default="Button", frozen=True, description="Variant tag."
    )
    id: ComponentId = Field(
        ..., min_length=1, frozen=True, description="Unique component identifier."
    )
    pressed: bool = Field(
        default=False, description="Whether the button is currently pressed."
    )


class Window(ModelBase):
    """A positioned display of a single float value.

    The window is kept entirely inside the screen: after any update
    ``0 <= x <= screen_width - width`` and ``0 <= y <= screen_height - height``.

    Attributes:
        type: Variant tag, always 'Window'.
        id: Unique component identifier.
        value: Displayed payload; not bounded.
        x: Left edge of the window.
        y: Top edge of the window.
        width: Window width, fixed.
        height: Window height, fixed.
        screen_width: Width of the bounding screen, fixed.
        screen_height: Height of the bounding screen, fixed.
    """

    type: Literal["Window"] = Field(
        default="Window", frozen=True, description="Variant tag."
    )
    id: ComponentId = Field(
        ..., min_length=1, frozen=True, description="Unique component identifier."
    )
    value: float = Field(default=0.0, description="Displayed payload.")
    x: int = Field(default=0, description="Left edge of the window.")
    y: int = Field(default=0, description="Top edge of the window.")
    width: int = Field(..., ge=0, frozen=True, description="Window width.")
    height: int = Field(..., ge=0, frozen=True, description="Window height.")
    screen_width: int = Field(
        ..., ge=0, frozen=True, description="Width of the bounding screen."
    )
    screen_height: int = Field(
        ..., ge=0, frozen=True, description="Height of the bounding screen."
    )

    @property
    def max_x(self) -> int:
        return self.screen_width - self.width

    @property
    def max_y(self) -> int:
        return self.screen_height - self.height

    @model_validator(mode="after")
    def validate_geometry(self) -> "Window":
        # An empty position range cannot be clamped into.
        if self.width > self.screen_width:
            raise ValueError(
                f"window {self.id!r}: width {self.width} exceeds screen width {self.screen_width}"
            )
        if self.height > self.screen_height:
            raise ValueError(
                f"window {self.id!r}: height {self.height} exceeds screen height {self.screen_height}"
            )
        if not (0 <= self.x <= self.max_x and 0 <= self.y <= self.max_y):
            raise ValueError(
                f"window {self.id!r}: position ({self.x}, {self.y}) outside "
                f"[0, {self.max_x}] x [0, {self.max_y}]"
            )
        return self


Component = Annotated[
    Union[Slider, Button, Window], Field(discriminator="type")
]
