"""
Configuration loader — reads componentgen.yml into a GeneratorConfig.

The file is optional: without one, every setting keeps its default and
sources are scanned from the working directory. It reads YAML,
validates against the Pydantic schema, and resolves paths relative to
the config file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "componentgen.yml"

DEFAULT_EXCLUDE = [
    "**/.git/**",
    "**/.venv/**",
    "**/venv/**",
    "**/__pycache__/**",
    "**/node_modules/**",
]


class ConfigError(Exception):
    """Raised when the generator configuration is invalid or unreadable."""


class GeneratorConfig(BaseModel):
    """Settings for a generation run.

    ``sources`` and ``output_dir`` are relative to ``root`` (the directory
    holding the config file, or the working directory without one).
    """

    sources: list[str] = Field(default_factory=lambda: ["."])
    include: list[str] = Field(default_factory=lambda: ["**/*.py"])
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    output_dir: str | None = None
    runtime_module: str = "componentgen.runtime"
    import_scope: Literal["all", "module"] = "all"
    warnings_as_errors: bool = False

    root: Path = Field(default_factory=Path.cwd, exclude=True)

    def source_paths(self) -> list[Path]:
        return [(self.root / s).resolve() for s in self.sources]

    def output_path(self) -> Path | None:
        if self.output_dir is None:
            return None
        return (self.root / self.output_dir).resolve()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for componentgen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to componentgen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, search: bool = True) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to componentgen.yml.
        search: When no path is given, search upward from the cwd.
            Without a file, defaults are returned.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return GeneratorConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may be wrapped under a "componentgen" key or be flat
    settings = data.get("componentgen", data)
    if not isinstance(settings, dict):
        raise ConfigError(f"Expected 'componentgen' to be a mapping in {path}")

    try:
        config = GeneratorConfig.model_validate({**settings, "root": path.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration: {e}") from e

    logger.info("Loaded config %s (%d source root(s))", path, len(config.sources))
    return config
