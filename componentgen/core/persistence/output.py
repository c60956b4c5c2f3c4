"""
Output channels — where a generation pass registers its modules.

A channel accepts ``GeneratedSource`` objects; registering the same name
again replaces the earlier content, so repeated passes overwrite rather
than accumulate.

``DirectoryOutput`` writes each module next to the source file it was
generated from (so relative imports copied from that file still
resolve), or into one output directory when configured. Writes are
atomic (write to temp file, then rename) and unchanged files are left
untouched. ``prune`` deletes generated files a pass no longer registers.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from componentgen.core.models.template import GeneratedSource

logger = logging.getLogger(__name__)


class OutputChannel(Protocol):
    def add_source(self, source: GeneratedSource) -> None: ...


class MemoryOutput:
    """Keeps registered sources in memory, keyed by name."""

    def __init__(self) -> None:
        self.sources: dict[str, GeneratedSource] = {}

    def add_source(self, source: GeneratedSource) -> None:
        self.sources[source.name] = source

    def text(self, name: str) -> str:
        return self.sources[name].content

    def names(self) -> list[str]:
        return list(self.sources)


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to a file via temp-file-then-rename."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".componentgen_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(content, encoding="utf-8")
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class DirectoryOutput:
    """Writes registered sources to disk.

    Attributes after a pass:
        written:   Files that were created or changed.
        unchanged: Files whose content was already up to date.
        pending:   Files that would be written (dry run only).
        removed:   Generated files deleted by ``prune``.
        obsolete:  Generated files ``prune`` would delete (dry run only).
    """

    def __init__(
        self,
        output_dir: Path | None = None,
        dry_run: bool = False,
        fallback_dir: Path | None = None,
    ):
        self.output_dir = output_dir
        self.dry_run = dry_run
        self.fallback_dir = fallback_dir or Path.cwd()
        self.written: list[Path] = []
        self.unchanged: list[Path] = []
        self.pending: list[Path] = []
        self.removed: list[Path] = []
        self.obsolete: list[Path] = []
        self._registered: set[Path] = set()

    def target_path(self, source: GeneratedSource) -> Path:
        if self.output_dir is not None:
            return self.output_dir / source.name
        if source.origin is not None:
            return Path(source.origin).parent / source.name
        return self.fallback_dir / source.name

    def add_source(self, source: GeneratedSource) -> None:
        path = self.target_path(source)
        self._registered.add(path.resolve())

        if path.is_file():
            try:
                if path.read_text(encoding="utf-8") == source.content:
                    logger.debug("Up to date: %s", path)
                    self.unchanged.append(path)
                    return
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Cannot compare %s, rewriting: %s", path, e)

        if self.dry_run:
            self.pending.append(path)
            return

        try:
            atomic_write_text(path, source.content)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise
        logger.info("Wrote %s (%s)", path, source.container)
        self.written.append(path)

    def prune(self, candidates: list[Path]) -> None:
        """Delete previously generated files that this pass did not register.

        Their containers lost their annotations or were suppressed, so no
        accessor code may remain for them.
        """
        seen: set[Path] = set()
        for path in candidates:
            resolved = path.resolve()
            if resolved in self._registered or resolved in seen:
                continue
            seen.add(resolved)

            if self.dry_run:
                self.obsolete.append(path)
                continue

            try:
                path.unlink()
            except FileNotFoundError:
                continue
            logger.info("Removed obsolete %s", path)
            self.removed.append(path)

    def to_dict(self) -> dict:
        return {
            "written": [str(p) for p in self.written],
            "unchanged": [str(p) for p in self.unchanged],
            "pending": [str(p) for p in self.pending],
            "removed": [str(p) for p in self.removed],
            "obsolete": [str(p) for p in self.obsolete],
        }
