"""
Aggregator — merge a container's annotations into its final settings.

Annotations are applied in source order, top to bottom:

- a group marker sets the default-generation config (a later marker
  replaces an earlier one);
- a well-formed override inserts the entry for its type, replacing any
  earlier entry for the same type wholesale (last write wins, the map
  keeps the type's original position).

Malformed overrides are left for the validator to report.
"""

from __future__ import annotations

from componentgen.core.models.annotation import GroupMarker
from componentgen.core.models.container import (
    AnnotatedContainer,
    DefaultGenerationConfig,
    OverrideEntry,
)


def aggregate(container: AnnotatedContainer) -> None:
    for annotation in container.annotations:
        if isinstance(annotation, GroupMarker):
            container.defaults = DefaultGenerationConfig(visibility=annotation.visibility)
        elif annotation.is_well_formed:
            container.overrides[annotation.type_name] = OverrideEntry(
                name=annotation.name,
                visibility=annotation.visibility,
            )


def aggregate_all(containers: dict[str, AnnotatedContainer]) -> None:
    for container in containers.values():
        aggregate(container)
