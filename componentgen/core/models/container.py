"""
Container model — everything known about one annotated component class.

An ``AnnotatedContainer`` is created the first time the scanner meets a
recognized decorator on a class, filled in while the rest of the forest
is scanned, validated once, then consumed by the emitter. It never
outlives the generation pass that built it.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from componentgen.core.models.annotation import DEFAULT_VISIBILITY, Annotation
from componentgen.core.models.diagnostic import Diagnostic
from componentgen.core.models.source import SourceUnit


class OverrideEntry(BaseModel):
    """Custom accessor name and visibility for one required type."""

    name: str
    visibility: str = DEFAULT_VISIBILITY


class DefaultGenerationConfig(BaseModel):
    """Settings applied to every auto-named accessor of a container."""

    visibility: str = DEFAULT_VISIBILITY


@dataclass
class AnnotatedContainer:
    """Aggregation record for one container, keyed by ``full_name``."""

    full_name: str
    name: str
    namespace: str
    declaration: ast.ClassDef
    unit: SourceUnit

    # Insertion-ordered set: dict keys keep emission order stable
    # across interpreter runs, which a plain set would not.
    required_types: dict[str, None] = field(default_factory=dict)
    defaults: DefaultGenerationConfig | None = None
    overrides: dict[str, OverrideEntry] = field(default_factory=dict)
    annotations: list[Annotation] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add_required(self, type_name: str) -> None:
        self.required_types.setdefault(type_name, None)

    def has_errors(self, warnings_as_errors: bool = False) -> bool:
        """Whether generation must be suppressed for this container."""
        if warnings_as_errors:
            return bool(self.diagnostics)
        return any(d.is_error for d in self.diagnostics)

    @property
    def default_types(self) -> list[str]:
        """Required types that get an auto-named accessor."""
        if self.defaults is None:
            return []
        return list(self.required_types)

    def to_dict(self) -> dict[str, Any]:
        return {
            "full_name": self.full_name,
            "name": self.name,
            "namespace": self.namespace,
            "source": self.unit.display_path,
            "line": self.declaration.lineno,
            "required_types": list(self.required_types),
            "defaults": self.defaults.model_dump() if self.defaults else None,
            "overrides": {t: o.model_dump() for t, o in self.overrides.items()},
            "diagnostics": [d.model_dump(mode="json") for d in self.diagnostics],
        }
