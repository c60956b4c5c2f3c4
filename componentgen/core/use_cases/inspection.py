"""
Inspect use case — show what the scanner and validator make of the sources.

Runs a full pass into memory and returns the container summaries,
without touching the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from componentgen.core.config.loader import ConfigError
from componentgen.core.persistence.output import MemoryOutput
from componentgen.core.services.pipeline import PassResult, run_generation_pass
from componentgen.core.use_cases.generate import pass_options, prepare


@dataclass
class InspectResult:
    """Result of the inspect use case."""

    generation: PassResult | None = None
    output: MemoryOutput = field(default_factory=MemoryOutput)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.generation is not None
        return {
            "containers": self.generation.containers,
            "suppressed": self.generation.suppressed,
            "outputs": self.output.names(),
        }


def inspect_containers(
    config_path: Path | None = None,
    paths: list[Path] | None = None,
) -> InspectResult:
    result = InspectResult()

    try:
        config, forest = prepare(config_path, paths)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.generation = run_generation_pass(forest, output=result.output, options=pass_options(config))
    return result
