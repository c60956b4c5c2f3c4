"""
Class decorators recognized by the generator.

At runtime they only record requirements on the class; the accessors
themselves come from the generated mixin module. The generator reads
these decorators from source, so their arguments must be written as
plain type names and string literals.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

C = TypeVar("C", bound=type)

DEFAULT_VISIBILITY = "public"
REQUIRED_COMPONENTS_ATTR = "__required_components__"
GETTERS_VISIBILITY_ATTR = "__component_getters_visibility__"


def _add_requirements(cls: type, component_types: tuple[type, ...]) -> None:
    # getattr also picks up requirements declared on base classes
    merged = dict.fromkeys(getattr(cls, REQUIRED_COMPONENTS_ATTR, ()))
    merged.update(dict.fromkeys(component_types))
    setattr(cls, REQUIRED_COMPONENTS_ATTR, tuple(merged))


def required_components(cls: type) -> tuple[type, ...]:
    """Component types a class declared with ``require_component`` (bases included)."""
    return getattr(cls, REQUIRED_COMPONENTS_ATTR, ())


def require_component(*component_types: type) -> Callable[[C], C]:
    """Declare that instances of the class need components of these types."""

    def decorate(cls: C) -> C:
        _add_requirements(cls, component_types)
        return cls

    return decorate


def require_component_getters(visibility: Any = DEFAULT_VISIBILITY) -> Any:
    """Ask for an auto-named accessor per ``require_component`` type.

    Usable bare (``@require_component_getters``) or called with a
    visibility (``@require_component_getters("protected")``).
    """
    if isinstance(visibility, type):
        setattr(visibility, GETTERS_VISIBILITY_ATTR, DEFAULT_VISIBILITY)
        return visibility

    def decorate(cls: C) -> C:
        setattr(cls, GETTERS_VISIBILITY_ATTR, visibility)
        return cls

    return decorate


def require_component_getter(
    type: type,
    name: str,
    visibility: str = DEFAULT_VISIBILITY,
) -> Callable[[C], C]:
    """Ask for an accessor with a custom name and visibility for one type.

    Implies ``require_component(type)``.
    """

    def decorate(cls: C) -> C:
        _add_requirements(cls, (type,))
        return cls

    return decorate
