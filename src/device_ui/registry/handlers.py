"""Per-variant update and render rules.

Each component variant has one update handler and one render handler,
looked up by its type tag. Update handlers apply a partial patch: fields
absent from the patch, unknown fields and fields of the wrong value kind
are left alone. Render handlers are pure functions of the state.
"""

import math
from typing import Any, Callable

from ..models.base import Patch
from ..models.component import Button, Slider, Window
from ..models.enums import ComponentType


UpdateHandler = Callable[[Any, Patch], None]
RenderHandler = Callable[[Any], dict[str, Any]]


def is_integer(value: Any) -> bool:
    # bool is a subclass of int but never a valid integer field
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    if not (is_integer(value) or isinstance(value, float)):
        return False
    # NaN, infinities and ints beyond float range cannot be displayed.
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def build_update_handlers() -> dict[ComponentType, UpdateHandler]:
    def slider_update(slider: Slider, patch: Patch) -> None:
        value = patch.get("value")
        if is_integer(value):
            slider.value = clamp(value, slider.min, slider.max)

    def button_update(button: Button, patch: Patch) -> None:
        pressed = patch.get("pressed")
        if isinstance(pressed, bool):
            button.pressed = pressed

    def window_update(window: Window, patch: Patch) -> None:
        value = patch.get("value")
        if is_number(value):
            window.value = float(value)

        # Position moves only when both coordinates arrive together.
        x, y = patch.get("x"), patch.get("y")
        if is_integer(x) and is_integer(y):
            window.x = clamp(x, 0, window.max_x)
            window.y = clamp(y, 0, window.max_y)

    return {
        ComponentType.SLIDER: slider_update,
        ComponentType.BUTTON: button_update,
        ComponentType.WINDOW: window_update,
    }


def build_render_handlers() -> dict[ComponentType, RenderHandler]:
    def slider_render(slider: Slider) -> dict[str, Any]:
        return {
            "type": slider.type,
            "id": slider.id,
            "value": slider.value,
            "min": slider.min,
            "max": slider.max,
        }

    def button_render(button: Button) -> dict[str, Any]:
        return {
            "type": button.type,
            "id": button.id,
            "pressed": button.pressed,
        }

    def window_render(window: Window) -> dict[str, Any]:
        return {
            "type": window.type,
            "id": window.id,
            "value": window.value,
            "position": {"x": window.x, "y": window.y},
            "size": {"width": window.width, "height": window.height},
        }

    return {
        ComponentType.SLIDER: slider_render,
        ComponentType.BUTTON: button_render,
        ComponentType.WINDOW: window_render,
    }
