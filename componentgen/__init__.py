"""
componentgen — cached component accessor generator.

Scans Python sources for ``@require_component_getters`` /
``@require_component_getter`` class decorators and writes a mixin module
per component class with lazily-resolved, memoized accessors.
"""

__version__ = "0.1.0"
