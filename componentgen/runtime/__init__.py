"""
Runtime support for generated component accessors.

Hand-written components import the decorators from here; generated
mixin modules import ``UNRESOLVED``, ``component_accessor`` and
``require_component``.
"""

from componentgen.runtime.annotations import (
    require_component,
    require_component_getter,
    require_component_getters,
    required_components,
)
from componentgen.runtime.host import (
    UNRESOLVED,
    ComponentAccessor,
    ComponentHost,
    component_accessor,
    iter_accessors,
)

__all__ = [
    "UNRESOLVED",
    "ComponentAccessor",
    "ComponentHost",
    "component_accessor",
    "iter_accessors",
    "require_component",
    "require_component_getter",
    "require_component_getters",
    "required_components",
]
