"""
Generation pass — scanner → aggregator → validator → emitter.

One call processes the whole declaration forest, reports every
diagnostic through the diagnostic channel and registers every generated
module with the output channel. All aggregation state lives in local
variables of ``run_generation_pass``; nothing carries over between
passes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from componentgen.core.models.diagnostic import Diagnostic
from componentgen.core.models.source import ImportScope
from componentgen.core.models.template import GeneratedSource
from componentgen.core.observability.diagnostics import CollectingDiagnostics, DiagnosticChannel
from componentgen.core.persistence.output import MemoryOutput, OutputChannel
from componentgen.core.services.aggregator import aggregate_all
from componentgen.core.services.forest import DeclarationForest
from componentgen.core.services.generators.accessors import RUNTIME_MODULE, generate_accessors
from componentgen.core.services.scanner import scan_forest
from componentgen.core.services.validator import validate_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassOptions:
    """Knobs for one generation pass (see ``GeneratorConfig``)."""

    import_scope: ImportScope = "all"
    runtime_module: str = RUNTIME_MODULE
    warnings_as_errors: bool = False


@dataclass
class PassResult:
    """What one generation pass found and produced."""

    sources: list[GeneratedSource] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    containers: list[dict] = field(default_factory=list)   # summaries, scan order
    suppressed: list[str] = field(default_factory=list)   # full names without output
    write_errors: list[str] = field(default_factory=list)  # "name: reason" per failed write

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if not d.is_error)

    def to_dict(self) -> dict:
        return {
            "containers": self.containers,
            "generated": [
                {"name": s.name, "container": s.container, "origin": s.origin}
                for s in self.sources
            ],
            "suppressed": self.suppressed,
            "write_errors": self.write_errors,
            "diagnostics": [d.model_dump(mode="json") for d in self.diagnostics],
            "errors": self.error_count,
            "warnings": self.warning_count,
        }


def run_generation_pass(
    forest: DeclarationForest,
    output: OutputChannel | None = None,
    diagnostics: DiagnosticChannel | None = None,
    options: PassOptions | None = None,
) -> PassResult:
    """Run one complete generation pass over a forest.

    Args:
        forest: Parsed source units to scan.
        output: Channel receiving generated modules (default: in memory).
        diagnostics: Channel receiving diagnostics (default: collect and log).
        options: Pass options.

    Returns:
        PassResult with every registered source and reported diagnostic.
    """
    output = output if output is not None else MemoryOutput()
    diagnostics = diagnostics if diagnostics is not None else CollectingDiagnostics()
    options = options or PassOptions()
    result = PassResult()

    containers = scan_forest(forest)
    aggregate_all(containers)
    emitted = validate_all(containers, options.warnings_as_errors)
    emitted_names = {c.full_name for c in emitted}

    for container in containers.values():
        for diagnostic in container.diagnostics:
            diagnostics.report(diagnostic)
            result.diagnostics.append(diagnostic)
        result.containers.append(container.to_dict())
        if container.full_name not in emitted_names:
            result.suppressed.append(container.full_name)

    for container in emitted:
        source = generate_accessors(container, options.import_scope, options.runtime_module)
        try:
            output.add_source(source)
        except OSError as e:
            logger.error("Cannot write %s for %s: %s", source.name, container.full_name, e)
            result.write_errors.append(f"{source.name}: {e}")
            continue
        result.sources.append(source)

    logger.info(
        "Generation pass: %d container(s), %d generated, %d suppressed, %d error(s)",
        len(containers),
        len(result.sources),
        len(result.suppressed),
        result.error_count,
    )
    return result
