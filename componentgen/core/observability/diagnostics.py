"""
Diagnostic channel — where a generation pass reports problems.

Reporting never halts a pass. ``CollectingDiagnostics`` keeps every
report and mirrors it to the ``componentgen.diagnostics`` logger:
errors at ERROR, warnings at WARNING.
"""

from __future__ import annotations

import logging
from typing import Protocol

from componentgen.core.models.diagnostic import Diagnostic

logger = logging.getLogger("componentgen.diagnostics")


class DiagnosticChannel(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class CollectingDiagnostics:
    """Collects diagnostics and logs each one."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        level = logging.ERROR if diagnostic.is_error else logging.WARNING
        logger.log(level, "%s", diagnostic.format())

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]
