"""
Validator — argument checks and the per-container go/no-go decision.

Every override is checked for a plain type reference (RCG001) and a
non-empty literal string name (RCG002); both are reported when both
are wrong. Accessors that would share a property or cache field name
are reported as RCG004.
All diagnostics of a container are collected before deciding: any
error suppresses the whole container, never a single accessor.
Containers never affect each other, except for the output name check
below, which only warns.
"""

from __future__ import annotations

import logging

from componentgen.core.models.annotation import SingleOverride
from componentgen.core.models.container import AnnotatedContainer
from componentgen.core.models.diagnostic import (
    DUPLICATE_ACCESSOR_NAME,
    MALFORMED_NAME_ARGUMENT,
    MALFORMED_TYPE_ARGUMENT,
    OUTPUT_NAME_COLLISION,
    Diagnostic,
    SourceLocation,
)
from componentgen.core.services.generators.accessors import (
    cache_field_name,
    output_name,
    planned_accessors,
)

logger = logging.getLogger(__name__)


def check_overrides(container: AnnotatedContainer) -> list[Diagnostic]:
    """Diagnostics for every malformed ``require_component_getter`` of a container."""
    diagnostics: list[Diagnostic] = []

    for annotation in container.annotations:
        if not isinstance(annotation, SingleOverride):
            continue
        if annotation.type_name is None:
            diagnostics.append(
                Diagnostic(
                    severity="error",
                    code=MALFORMED_TYPE_ARGUMENT,
                    message=f"Type argument must be a type reference: {annotation.source_text}",
                    location=annotation.location,
                )
            )
        if not annotation.name:
            reason = "must be a literal string" if annotation.name is None else "must not be empty"
            diagnostics.append(
                Diagnostic(
                    severity="error",
                    code=MALFORMED_NAME_ARGUMENT,
                    message=f"Name argument {reason}: {annotation.source_text}",
                    location=annotation.location,
                )
            )

    return diagnostics


def check_accessor_names(container: AnnotatedContainer) -> list[Diagnostic]:
    """An error per accessor whose property or cache field name is already taken.

    ``a.Widget`` and ``b.Widget`` both default to ``Widget``; an override
    named ``widget`` would share the ``_widget`` cache field with them.
    """
    diagnostics: list[Diagnostic] = []
    owners: dict[str, str] = {}

    for _, type_name, property_name in planned_accessors(container):
        for taken in (property_name, cache_field_name(property_name)):
            owner = owners.get(taken)
            if owner is not None:
                diagnostics.append(
                    Diagnostic(
                        severity="error",
                        code=DUPLICATE_ACCESSOR_NAME,
                        message=(
                            f"Accessor for {type_name} would reuse the name '{taken}' "
                            f"already generated for {owner}"
                        ),
                        location=_declaration_location(container),
                    )
                )
                break
        else:
            owners[property_name] = type_name
            owners[cache_field_name(property_name)] = type_name

    return diagnostics


def apply_override_precedence(container: AnnotatedContainer) -> None:
    """Drop required types that have an override; the override's accessor replaces them."""
    for type_name in container.overrides:
        container.required_types.pop(type_name, None)


def check_output_names(
    containers: list[AnnotatedContainer],
    warnings_as_errors: bool = False,
) -> list[AnnotatedContainer]:
    """Warn about containers that would register the same output name.

    The later container (in scan order) gets RCG003 and its module
    replaces the earlier one. With ``warnings_as_errors`` it is dropped
    instead. Returns the containers that still get generated.
    """
    claimed: dict[str, AnnotatedContainer] = {}
    kept: list[AnnotatedContainer] = []

    for container in containers:
        name = output_name(container.name)
        previous = claimed.get(name)
        if previous is not None:
            container.diagnostics.append(
                Diagnostic(
                    severity="warning",
                    code=OUTPUT_NAME_COLLISION,
                    message=(
                        f"Output '{name}' is also generated for {previous.full_name}; "
                        f"the module for {container.full_name} replaces it"
                    ),
                    location=_declaration_location(container),
                )
            )
            if warnings_as_errors:
                continue
        claimed[name] = container
        kept.append(container)

    return kept


def _declaration_location(container: AnnotatedContainer) -> SourceLocation:
    node = container.declaration
    return SourceLocation(path=container.unit.display_path, line=node.lineno, column=node.col_offset)


def validate_all(
    containers: dict[str, AnnotatedContainer],
    warnings_as_errors: bool = False,
) -> list[AnnotatedContainer]:
    """Validate every container; returns the ones to emit, in scan order."""
    passed: list[AnnotatedContainer] = []

    for container in containers.values():
        container.diagnostics.extend(check_overrides(container))
        container.diagnostics.extend(check_accessor_names(container))
        if container.has_errors(warnings_as_errors):
            logger.info(
                "Suppressing generation for %s (%d diagnostic(s))",
                container.full_name,
                len(container.diagnostics),
            )
            continue
        apply_override_precedence(container)
        passed.append(container)

    return check_output_names(passed, warnings_as_errors)
