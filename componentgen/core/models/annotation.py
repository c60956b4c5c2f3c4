"""
Annotation variants — the two recognized class decorator shapes.

The scanner turns every recognized decorator into one of these
immediately on discovery. Nothing downstream looks at decorator
syntax again.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from pydantic import BaseModel, Field

from componentgen.core.models.diagnostic import SourceLocation

# Must match the defaults of the runtime decorators.
DEFAULT_VISIBILITY = "public"


class GroupMarker(BaseModel):
    """``@require_component_getters(visibility="public")``."""

    kind: Literal["group"] = "group"
    visibility: str = DEFAULT_VISIBILITY
    location: SourceLocation = Field(default_factory=SourceLocation)


class SingleOverride(BaseModel):
    """``@require_component_getter(type, name, visibility="public")``.

    ``type_name`` is the dotted type identity, or None when the type
    operand is missing or not a direct type reference. ``name`` is None
    when the name operand is missing or not a literal string. The raw
    source text of the decorator is kept for diagnostics.
    """

    kind: Literal["override"] = "override"
    type_name: str | None = None
    name: str | None = None
    visibility: str = DEFAULT_VISIBILITY
    source_text: str = ""
    location: SourceLocation = Field(default_factory=SourceLocation)

    @property
    def is_well_formed(self) -> bool:
        return self.type_name is not None and bool(self.name)


Annotation: TypeAlias = GroupMarker | SingleOverride
