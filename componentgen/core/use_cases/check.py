"""
Check use case — run a pass without writing and report what is out of date.

Suitable for CI: fails when any container has error diagnostics or when
a generated module on disk differs from what the pass would write, or
when a generated module is left over from a container that no longer
produces one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from componentgen.core.config.loader import ConfigError
from componentgen.core.persistence.output import DirectoryOutput
from componentgen.core.services.pipeline import PassResult, run_generation_pass
from componentgen.core.use_cases.generate import obsolete_candidates, pass_options, prepare


@dataclass
class CheckResult:
    """Result of the check use case."""

    generation: PassResult | None = None
    stale: list[str] = field(default_factory=list)       # missing, outdated or obsolete modules
    parse_errors: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return (
            self.error is None
            and not self.stale
            and self.generation is not None
            and self.generation.error_count == 0
        )

    def to_dict(self) -> dict:
        if self.error:
            return {"ok": False, "error": self.error}
        return {
            "ok": self.ok,
            "stale": self.stale,
            "parse_errors": self.parse_errors,
            "generation": self.generation.to_dict() if self.generation else None,
        }


def check_generated(
    config_path: Path | None = None,
    paths: list[Path] | None = None,
    output_dir: Path | None = None,
) -> CheckResult:
    """Check that annotations are valid and generated modules are current.

    Args:
        config_path: Optional explicit path to componentgen.yml.
        paths: Source files/directories to scan instead of the configured ones.
        output_dir: Where generated modules are expected, if not next to sources.

    Returns:
        CheckResult listing diagnostics and stale modules.
    """
    result = CheckResult()

    try:
        config, forest = prepare(config_path, paths)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.parse_errors = list(forest.errors)
    output = DirectoryOutput(
        output_dir=output_dir.resolve() if output_dir else config.output_path(),
        dry_run=True,
        fallback_dir=config.root,
    )
    result.generation = run_generation_pass(forest, output=output, options=pass_options(config))
    output.prune(obsolete_candidates(forest, output, full_scan=not paths))
    result.stale = [str(p) for p in output.pending + output.obsolete]
    return result
