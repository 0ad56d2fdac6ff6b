"""Abstract base class for the component registry.

This module defines the interface of the object that owns every component
on the device, routes patches to them by id and renders them in order.
"""

from abc import ABC, abstractmethod
from typing import Any

from device_ui.models.base import ComponentId, Patch
from device_ui.models.component import Component
from device_ui.models.enums import DispatchOutcome


class Registry(ABC):
    """Interface for owning, updating and rendering components."""

    @abstractmethod
    def add(self, component: Component) -> None:
        """Registers a component after all existing ones.

        Args:
            component: The component to take ownership of.

        Raises:
            DuplicateComponentID: If a component with the same id exists.
        """
        pass  # pragma: no cover

    @abstractmethod
    def remove(self, component_id: ComponentId) -> None:
        """Removes a component and releases it.

        Args:
            component_id: The id of the component to remove.

        Raises:
            UnknownComponentID: If no component has this id.
        """
        pass  # pragma: no cover

    @abstractmethod
    def dispatch(self, component_id: ComponentId, patch: Patch) -> DispatchOutcome:
        """Applies a partial patch to the component with the given id.

        Args:
            component_id: The id of the target component.
            patch: Field names mapped to new values.

        Returns:
            APPLIED if the component exists, otherwise UNKNOWN_ID. An
            unknown id changes nothing.
        """
        pass  # pragma: no cover

    @abstractmethod
    def render(self, component_id: ComponentId) -> dict[str, Any]:
        """Renders a single component.

        Raises:
            UnknownComponentID: If no component has this id.
        """
        pass  # pragma: no cover

    @abstractmethod
    def render_all(self) -> list[dict[str, Any]]:
        """Renders every component in insertion order.

        Returns:
            One snapshot per component, ordered as they were added.
        """
        pass  # pragma: no cover

    @abstractmethod
    def ids(self) -> list[ComponentId]:
        """Lists component ids in insertion order."""
        pass  # pragma: no cover

    @abstractmethod
    def __len__(self) -> int:
        pass  # pragma: no cover

    @abstractmethod
    def __contains__(self, component_id: object) -> bool:
        pass  # pragma: no cover
