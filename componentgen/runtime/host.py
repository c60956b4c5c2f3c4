"""
Component host — the single-type lookup that generated accessors call.

A host keeps the components attached to one container instance. The
generated ``<Container>Getters`` mixins only need ``get_component``; any
class providing a method with the same contract can stand in for
``ComponentHost``.
"""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Callable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Sentinel(Enum):
    UNRESOLVED = "UNRESOLVED"

    def __repr__(self) -> str:
        return self.value


UNRESOLVED = _Sentinel.UNRESOLVED
"""Value of a cache field whose component has not been looked up yet.

Distinct from None so that a failed lookup is cached too.
"""


class ComponentHost:
    """Mixin that lets components be attached to an instance and found by type."""

    def _attached_components(self) -> list[object]:
        attached = self.__dict__.get("_components")
        if attached is None:
            attached = self.__dict__["_components"] = []
        return attached

    @property
    def components(self) -> tuple[object, ...]:
        return tuple(self._attached_components())

    def add_component(self, component: object) -> None:
        """Attach a component. The first one attached wins lookups by type."""
        self._attached_components().append(component)
        logger.debug("Attached %s to %s", type(component).__name__, type(self).__name__)

    def remove_component(self, component: object) -> bool:
        """Detach a component; returns False if it was not attached."""
        attached = self._attached_components()
        for index, candidate in enumerate(attached):
            if candidate is component:
                del attached[index]
                return True
        return False

    def get_component(self, component_type: type[T]) -> T | None:
        """Return the first attached component that is a ``component_type``, or None."""
        for component in self._attached_components():
            if isinstance(component, component_type):
                return component
        return None


class ComponentAccessor(property):
    """Property produced by a generated accessor, tagged with its visibility."""

    visibility: str = "public"


def component_accessor(
    visibility: str = "public",
) -> Callable[[Callable[[Any], Any]], ComponentAccessor]:
    """Decorator used by generated code in place of ``@property``."""

    def decorate(fget: Callable[[Any], Any]) -> ComponentAccessor:
        accessor = ComponentAccessor(fget)
        accessor.visibility = visibility
        return accessor

    return decorate


def iter_accessors(cls: type) -> Iterator[tuple[str, ComponentAccessor]]:
    """Yield ``(name, accessor)`` for every generated accessor on a class, by name."""
    for name in dir(cls):
        attr = inspect.getattr_static(cls, name)
        if isinstance(attr, ComponentAccessor):
            yield name, attr
