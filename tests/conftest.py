"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from componentgen.core.models.source import SourceUnit
from componentgen.core.services.forest import DeclarationForest, parse_source


def make_unit(text: str, module: str = "game.widgets", path: Path | None = None) -> SourceUnit:
    """Parse dedented source text into a SourceUnit."""
    return parse_source(textwrap.dedent(text), module, path)


def make_forest(*texts: str) -> DeclarationForest:
    """A forest with one unit per text, modules named ``pkg.m0``, ``pkg.m1``, ..."""
    return DeclarationForest(units=[make_unit(t, module=f"pkg.m{i}") for i, t in enumerate(texts)])


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def write_package(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative path: source}`` under ``tmp_path/game`` as a package."""

    def write(files: dict[str, str]) -> Path:
        root = tmp_path / "game"
        root.mkdir(exist_ok=True)
        (root / "__init__.py").touch()
        for relative, text in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text), encoding="utf-8")
        return root

    return write
