"""
Scanner — find annotated component classes in the declaration forest.

Walks every class in every source unit once. A class takes part in
generation only if it carries a group marker (``@require_component_getters``)
or at least one override (``@require_component_getter``). Each recognized
decorator is parsed right away into a ``GroupMarker`` or ``SingleOverride``
and appended, in source order, to the container's aggregation record.
``@require_component`` operands that are plain type references are
collected into the container's required types; any other operand is
ignored without a diagnostic.

Decorators are matched on the last segment of their dotted name, so
``@require_component_getter`` and ``@runtime.require_component_getter``
are the same thing.
"""

from __future__ import annotations

import ast
import logging

from componentgen.core.models.annotation import (
    DEFAULT_VISIBILITY,
    Annotation,
    GroupMarker,
    SingleOverride,
)
from componentgen.core.models.container import AnnotatedContainer
from componentgen.core.models.diagnostic import SourceLocation
from componentgen.core.models.source import SourceUnit
from componentgen.core.services.forest import DeclarationForest

logger = logging.getLogger(__name__)

GROUP_MARKER = "require_component_getters"
SINGLE_OVERRIDE = "require_component_getter"
REQUIREMENT = "require_component"


def dotted_name(node: ast.expr | None) -> str | None:
    """``a.b.Widget`` for a Name/Attribute chain, None for anything else."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    return ".".join(reversed(parts))


def decorator_kind(decorator: ast.expr) -> str | None:
    """Which recognized decorator this is, or None."""
    target = decorator.func if isinstance(decorator, ast.Call) else decorator
    name = dotted_name(target)
    if name is None:
        return None
    simple = name.rsplit(".", 1)[-1]
    if simple in (GROUP_MARKER, SINGLE_OVERRIDE, REQUIREMENT):
        return simple
    return None


def _argument(decorator: ast.expr, name: str, index: int) -> ast.expr | None:
    """Find a decorator argument by keyword, then by position."""
    if not isinstance(decorator, ast.Call):
        return None
    for keyword in decorator.keywords:
        if keyword.arg == name:
            return keyword.value
    # keyword arguments can't precede positional ones, so looking
    # by keyword first is always correct
    if len(decorator.args) > index:
        return decorator.args[index]
    return None


def _literal_string(node: ast.expr | None) -> str | None:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return None


def _location(unit: SourceUnit, node: ast.expr) -> SourceLocation:
    return SourceLocation(path=unit.display_path, line=node.lineno, column=node.col_offset)


def parse_annotation(unit: SourceUnit, decorator: ast.expr, kind: str) -> Annotation:
    """Turn a recognized group marker or override decorator into its variant."""
    location = _location(unit, decorator)

    if kind == GROUP_MARKER:
        visibility = _literal_string(_argument(decorator, "visibility", 0))
        return GroupMarker(
            visibility=DEFAULT_VISIBILITY if visibility is None else visibility,
            location=location,
        )

    visibility = _literal_string(_argument(decorator, "visibility", 2))
    return SingleOverride(
        type_name=dotted_name(_argument(decorator, "type", 0)),
        name=_literal_string(_argument(decorator, "name", 1)),
        visibility=DEFAULT_VISIBILITY if visibility is None else visibility,
        source_text=ast.get_source_segment(unit.text, decorator) or ast.unparse(decorator),
        location=location,
    )


class _ContainerVisitor(ast.NodeVisitor):
    def __init__(self, unit: SourceUnit, containers: dict[str, AnnotatedContainer]):
        self.unit = unit
        self.containers = containers
        self.scope: list[str] = [unit.module] if unit.module else []

    def _visit_scope(self, node: ast.AST, name: str) -> None:
        self.scope.append(name)
        self.generic_visit(node)
        self.scope.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_scope(node, node.name)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_scope(node, node.name)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._scan_class(node)
        self._visit_scope(node, node.name)

    def _scan_class(self, node: ast.ClassDef) -> None:
        decorators = [(d, decorator_kind(d)) for d in node.decorator_list]
        if not any(kind in (GROUP_MARKER, SINGLE_OVERRIDE) for _, kind in decorators):
            return

        container = self._get_or_create(node)
        for decorator, kind in decorators:
            if kind == REQUIREMENT:
                if isinstance(decorator, ast.Call):
                    for operand in decorator.args:
                        type_name = dotted_name(operand)
                        if type_name is not None:
                            container.add_required(type_name)
            elif kind is not None:
                container.annotations.append(parse_annotation(self.unit, decorator, kind))

    def _get_or_create(self, node: ast.ClassDef) -> AnnotatedContainer:
        namespace = ".".join(self.scope)
        full_name = f"{namespace}.{node.name}" if namespace else node.name

        container = self.containers.get(full_name)
        if container is None:
            container = AnnotatedContainer(
                full_name=full_name,
                name=node.name,
                namespace=namespace,
                declaration=node,
                unit=self.unit,
            )
            self.containers[full_name] = container
            logger.debug("Found container %s (%s:%d)", full_name, self.unit.display_path, node.lineno)
        return container


def scan_unit(unit: SourceUnit, containers: dict[str, AnnotatedContainer]) -> None:
    """Add the annotated classes of one source unit to ``containers``."""
    _ContainerVisitor(unit, containers).visit(unit.tree)


def scan_forest(forest: DeclarationForest) -> dict[str, AnnotatedContainer]:
    """Scan every unit; returns containers keyed by full name, in scan order."""
    containers: dict[str, AnnotatedContainer] = {}
    for unit in forest.units:
        scan_unit(unit, containers)
    return containers
