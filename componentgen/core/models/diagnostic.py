"""
Diagnostic model — problems found while scanning annotations.

Diagnostics are collected per container and reported through a
diagnostic channel. They never abort a generation pass; an
error-severity diagnostic only suppresses output for its container.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# ── Codes ───────────────────────────────────────────────────────

MALFORMED_TYPE_ARGUMENT = "RCG001"
MALFORMED_NAME_ARGUMENT = "RCG002"
OUTPUT_NAME_COLLISION = "RCG003"
DUPLICATE_ACCESSOR_NAME = "RCG004"


class SourceLocation(BaseModel):
    """Where a diagnostic points to (1-based line, 0-based column)."""

    path: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        path = self.path or "<unknown>"
        if not self.line:
            return path
        return f"{path}:{self.line}:{self.column}"


class Diagnostic(BaseModel):
    """A single report for the host's diagnostic channel."""

    severity: Literal["error", "warning"]
    code: str
    message: str
    location: SourceLocation = Field(default_factory=SourceLocation)

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def format(self) -> str:
        """Render like a compiler message: ``path:line:col: error RCG001: ...``."""
        return f"{self.location}: {self.severity} {self.code}: {self.message}"
