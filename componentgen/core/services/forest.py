"""
Declaration forest — parse the Python files a generation pass looks at.

Walks the configured source roots, parses every matching file with
``ast`` and works out the dotted module name each file is importable as.
Files that cannot be read or parsed are skipped and reported; they never
abort a pass. Previously generated modules are recognized by their
marker line and left out.

Pure logic apart from reading files — no writes, no imports of user code.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path

from componentgen.core.models.source import SourceUnit
from componentgen.core.models.template import GENERATED_MARKER

logger = logging.getLogger(__name__)


@dataclass
class DeclarationForest:
    """All source units of one generation pass."""

    units: list[SourceUnit] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)       # unreadable / unparsable files
    generated: list[Path] = field(default_factory=list)   # previously generated modules

    @property
    def skipped_generated(self) -> int:
        return len(self.generated)

    def to_dict(self) -> dict:
        return {
            "files": len(self.units),
            "errors": self.errors,
            "skipped_generated": self.skipped_generated,
        }


def parse_source(text: str, module: str, path: Path | None = None) -> SourceUnit:
    """Parse one file's text into a SourceUnit.

    Raises:
        SyntaxError: If the text is not valid Python.
    """
    filename = str(path) if path is not None else f"<{module}>"
    tree = ast.parse(text, filename=filename)
    return SourceUnit(module=module, text=text, tree=tree, path=path)


def is_generated(text: str) -> bool:
    """Whether the text is a module previously written by the generator."""
    return text.startswith(GENERATED_MARKER)


def module_name_for(path: Path) -> str:
    """Dotted module name of a file, following ``__init__.py`` packages upward.

    ``pkg/sub/widgets.py`` → ``pkg.sub.widgets`` when ``pkg`` and ``sub``
    are packages; ``pkg/__init__.py`` → ``pkg``.
    """
    path = path.resolve()
    parts = [] if path.stem == "__init__" else [path.stem]
    parent = path.parent
    while (parent / "__init__.py").is_file() and parent.name:
        parts.insert(0, parent.name)
        parent = parent.parent
    return ".".join(parts) or path.parent.name


def _matches(relative: str, patterns: list[str]) -> bool:
    for pattern in patterns:
        if fnmatch(relative, pattern):
            return True
        # "**/x" also matches "x" at the root
        if pattern.startswith("**/") and fnmatch(relative, pattern[3:]):
            return True
    return False


def iter_source_files(
    roots: list[Path],
    include: list[str],
    exclude: list[str],
) -> list[Path]:
    """Files under the roots matching ``include`` and not ``exclude``, sorted per root.

    A root that is a file is taken as-is, without pattern matching.
    """
    found: list[Path] = []
    seen: set[Path] = set()

    for root in roots:
        if root.is_file():
            candidates = [root]
        elif root.is_dir():
            candidates = []
            for path in sorted(root.rglob("*")):
                if not path.is_file():
                    continue
                relative = path.relative_to(root).as_posix()
                if _matches(relative, include) and not _matches(relative, exclude):
                    candidates.append(path)
        else:
            logger.warning("Source root does not exist: %s", root)
            continue

        for path in candidates:
            resolved = path.resolve()
            if resolved not in seen:
                seen.add(resolved)
                found.append(path)

    return found


def load_forest(
    roots: list[Path],
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> DeclarationForest:
    """Read and parse every source file under the given roots.

    Args:
        roots: Directories (scanned recursively) or individual files.
        include: Glob patterns, relative to each root (default ``**/*.py``).
        exclude: Glob patterns to leave out.

    Returns:
        DeclarationForest with one SourceUnit per parsed file.
    """
    forest = DeclarationForest()

    for path in iter_source_files(roots, include or ["**/*.py"], exclude or []):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", path, e)
            forest.errors.append(f"{path}: {e}")
            continue

        if is_generated(text):
            logger.debug("Skipping generated module %s", path)
            forest.generated.append(path)
            continue

        try:
            unit = parse_source(text, module_name_for(path), path)
        except (SyntaxError, ValueError) as e:
            logger.warning("Cannot parse %s: %s", path, e)
            forest.errors.append(f"{path}: {e}")
            continue

        forest.units.append(unit)

    logger.info(
        "Loaded %d source file(s) (%d generated skipped, %d errors)",
        len(forest.units),
        forest.skipped_generated,
        len(forest.errors),
    )
    return forest


def generated_modules_in(directory: Path) -> list[Path]:
    """Previously generated modules directly inside ``directory``."""
    if not directory.is_dir():
        return []
    found = []
    for path in sorted(directory.glob("*.py")):
        try:
            with path.open(encoding="utf-8") as f:
                first_line = f.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot read %s: %s", path, e)
            continue
        if is_generated(first_line):
            found.append(path)
    return found
