"""Enumeration definitions for the device UI runtime.

This module contains the Enum classes shared by the models, the registry
and the protocol layer so that tags and outcomes have a single spelling.
"""

from enum import Enum


class ComponentType(str, Enum):
    """Defines the closed set of component variants.

    The values are the type tags rendered on the wire.

    Attributes:
        SLIDER: Bounded integer control.
        BUTTON: Boolean pressed/released control.
        WINDOW: Positioned float display clamped to the screen.
    """

    SLIDER = "Slider"
    BUTTON = "Button"
    WINDOW = "Window"


class IntentType(str, Enum):
    """Defines the classified meaning of one inbound message.

    Attributes:
        UPDATE: The message targets a component with a patch.
        IGNORED: The message is well formed but carries no update.
        MALFORMED: The message cannot be decoded or has no target id.
    """

    UPDATE = "update"
    IGNORED = "ignored"
    MALFORMED = "malformed"


class DispatchOutcome(str, Enum):
    """Defines the result of routing a patch to the registry.

    Attributes:
        APPLIED: A component with the id existed and was updated.
        UNKNOWN_ID: No component has the id; nothing changed.
    """

    APPLIED = "applied"
    UNKNOWN_ID = "unknown_id"
