"""
Domain models — types shared by the generation pass.

All models are re-exported here for convenient access:

    from componentgen.core.models import AnnotatedContainer, Diagnostic, GeneratedSource
"""

from componentgen.core.models.annotation import (
    DEFAULT_VISIBILITY,
    Annotation,
    GroupMarker,
    SingleOverride,
)
from componentgen.core.models.container import (
    AnnotatedContainer,
    DefaultGenerationConfig,
    OverrideEntry,
)
from componentgen.core.models.diagnostic import (
    DUPLICATE_ACCESSOR_NAME,
    MALFORMED_NAME_ARGUMENT,
    MALFORMED_TYPE_ARGUMENT,
    OUTPUT_NAME_COLLISION,
    Diagnostic,
    SourceLocation,
)
from componentgen.core.models.source import ImportDirective, ImportScope, SourceUnit
from componentgen.core.models.template import GENERATED_MARKER, GeneratedSource

__all__ = [
    # annotation.py
    "DEFAULT_VISIBILITY",
    "Annotation",
    "GroupMarker",
    "SingleOverride",
    # container.py
    "AnnotatedContainer",
    "DefaultGenerationConfig",
    "OverrideEntry",
    # diagnostic.py
    "DUPLICATE_ACCESSOR_NAME",
    "MALFORMED_NAME_ARGUMENT",
    "MALFORMED_TYPE_ARGUMENT",
    "OUTPUT_NAME_COLLISION",
    "Diagnostic",
    "SourceLocation",
    # source.py
    "ImportDirective",
    "ImportScope",
    "SourceUnit",
    # template.py
    "GENERATED_MARKER",
    "GeneratedSource",
]
