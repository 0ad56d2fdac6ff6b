import threading
from typing import Any, Iterable, Optional

from ..errors import DuplicateComponentID, UnknownComponentID
from ..models.base import ComponentId, Patch
from ..models.component import Component
from ..models.enums import ComponentType, DispatchOutcome
from ..observability.logging import get_logger
from .abstract import Registry
from .handlers import build_render_handlers, build_update_handlers


logger = get_logger(__name__)


class InMemoryRegistry(Registry):
    """
    Insertion-ordered registry held in process memory.

    One lock guards the whole registry and is held for a single add,
    remove, dispatch, render or render_all, so snapshots never observe a
    half-applied patch.
    """

    def __init__(self, components: Optional[Iterable[Component]] = None) -> None:
        self._components: dict[ComponentId, Component] = {}
        self._update_handlers = build_update_handlers()
        self._render_handlers = build_render_handlers()
        self._lock = threading.RLock()
        for component in components or ():
            self.add(component)

    def add(self, component: Component) -> None:
        with self._lock:
            if component.id in self._components:
                raise DuplicateComponentID(component.id)
            # Private copy: callers never hold a reference into the registry.
            self._components[component.id] = component.model_copy(deep=True)
        logger.debug(
            f"Registered {component.type} {component.id!r}",
            extra={"component_id": component.id},
        )

    def remove(self, component_id: ComponentId) -> None:
        with self._lock:
            if component_id not in self._components:
                raise UnknownComponentID(component_id)
            del self._components[component_id]
        logger.debug(
            f"Removed component {component_id!r}",
            extra={"component_id": component_id},
        )

    def dispatch(self, component_id: ComponentId, patch: Patch) -> DispatchOutcome:
        with self._lock:
            component = self._components.get(component_id)
            if component is None:
                return DispatchOutcome.UNKNOWN_ID
            handler = self._update_handlers[ComponentType(component.type)]
            handler(component, patch)
        return DispatchOutcome.APPLIED

    def render(self, component_id: ComponentId) -> dict[str, Any]:
        with self._lock:
            component = self._components.get(component_id)
            if component is None:
                raise UnknownComponentID(component_id)
            return self._render(component)

    def render_all(self) -> list[dict[str, Any]]:
        with self._lock:
            return [self._render(c) for c in self._components.values()]

    def ids(self) -> list[ComponentId]:
        with self._lock:
            return list(self._components)

    def __len__(self) -> int:
        with self._lock:
            return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        with self._lock:
            return component_id in self._components

    def _render(self, component: Component) -> dict[str, Any]:
        return self._render_handlers[ComponentType(component.type)](component)
