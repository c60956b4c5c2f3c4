"""
Generate use case — load config, parse sources, run a pass, write modules.

Ties together config loading, the declaration forest, the generation
pass and the directory output channel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from componentgen.core.config.loader import ConfigError, GeneratorConfig, load_config
from componentgen.core.persistence.output import DirectoryOutput
from componentgen.core.services.forest import DeclarationForest, generated_modules_in, load_forest
from componentgen.core.services.pipeline import PassOptions, PassResult, run_generation_pass

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of the generate use case."""

    config: GeneratorConfig | None = None
    forest: DeclarationForest | None = None
    generation: PassResult | None = None
    output: DirectoryOutput | None = None
    error: str | None = None

    @property
    def has_errors(self) -> bool:
        return self.error is not None or (
            self.generation is not None
            and (self.generation.error_count > 0 or bool(self.generation.write_errors))
        )

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error

        if self.forest:
            result["sources"] = self.forest.to_dict()
        if self.generation:
            result["generation"] = self.generation.to_dict()
        if self.output:
            result["output"] = self.output.to_dict()
        return result


def pass_options(config: GeneratorConfig) -> PassOptions:
    return PassOptions(
        import_scope=config.import_scope,
        runtime_module=config.runtime_module,
        warnings_as_errors=config.warnings_as_errors,
    )


def obsolete_candidates(
    forest: DeclarationForest,
    output: DirectoryOutput,
    full_scan: bool = True,
) -> list[Path]:
    """Generated modules found under the scanned roots or in the output directory.

    The output directory also holds modules of sources outside a partial
    scan (explicit paths), so it is only searched after a full scan.
    """
    candidates = list(forest.generated)
    if full_scan and output.output_dir is not None:
        candidates += generated_modules_in(output.output_dir)
    return candidates


def prepare(
    config_path: Path | None = None,
    paths: list[Path] | None = None,
) -> tuple[GeneratorConfig, DeclarationForest]:
    """Load the config and parse the forest; explicit paths replace ``sources``.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    config = load_config(config_path)
    roots = [p.resolve() for p in paths] if paths else config.source_paths()
    forest = load_forest(roots, config.include, config.exclude)
    return config, forest


def run_generate(
    config_path: Path | None = None,
    paths: list[Path] | None = None,
    output_dir: Path | None = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Generate accessor modules for every annotated component.

    Args:
        config_path: Optional explicit path to componentgen.yml.
        paths: Source files/directories to scan instead of the configured ones.
        output_dir: Write every module here instead of next to its source.
        dry_run: Work out what would change without writing anything.

    Returns:
        GenerateResult with the pass result and what was written.
    """
    result = GenerateResult()

    try:
        config, forest = prepare(config_path, paths)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = config
    result.forest = forest
    result.output = DirectoryOutput(
        output_dir=output_dir.resolve() if output_dir else config.output_path(),
        dry_run=dry_run,
        fallback_dir=config.root,
    )

    result.generation = run_generation_pass(forest, output=result.output, options=pass_options(config))

    try:
        result.output.prune(obsolete_candidates(forest, result.output, full_scan=not paths))
    except OSError as e:
        result.error = f"Cannot remove obsolete module: {e}"
        return result

    logger.info(
        "Generated %d module(s): %d written, %d unchanged, %d removed",
        len(result.generation.sources),
        len(result.output.written),
        len(result.output.unchanged),
        len(result.output.removed),
    )
    return result
