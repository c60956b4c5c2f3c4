"""
Source unit model — one parsed Python file of the declaration forest.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ImportScope = Literal["all", "module"]

_IMPORTS = (ast.Import, ast.ImportFrom)


def _import_only(node: ast.stmt) -> bool:
    """Whether a statement does nothing but import (possibly under try/if guards)."""
    if isinstance(node, (*_IMPORTS, ast.Pass)):
        return True
    if isinstance(node, ast.If):
        return all(_import_only(n) for n in node.body + node.orelse)
    if isinstance(node, ast.Try):
        statements = node.body + node.orelse + node.finalbody
        for handler in node.handlers:
            statements += handler.body
        return all(_import_only(n) for n in statements)
    return False


def _is_guarded_import(node: ast.stmt) -> bool:
    return (
        isinstance(node, (ast.If, ast.Try))
        and _import_only(node)
        and any(isinstance(n, _IMPORTS) for n in ast.walk(node))
    )


@dataclass(frozen=True)
class ImportDirective:
    """A module-level import statement (or import-only guard block) and its exact text."""

    node: ast.stmt
    text: str

    def imports(self) -> list[ast.Import | ast.ImportFrom]:
        return [n for n in ast.walk(self.node) if isinstance(n, _IMPORTS)]

    def imports_module(self, name: str) -> bool:
        """Whether any import in here names a module whose last segment is ``name``."""
        for node in self.imports():
            if isinstance(node, ast.Import):
                if any(alias.name.rsplit(".", 1)[-1] == name for alias in node.names):
                    return True
                continue
            if node.module is not None and node.module.rsplit(".", 1)[-1] == name:
                return True
            # from . import name
            if any(alias.name == name for alias in node.names):
                return True
        return False

    def bound_names(self) -> set[str]:
        """Top-level names the statement can bind (``*`` when it star-imports)."""
        names: set[str] = set()
        for node in self.imports():
            for alias in node.names:
                if alias.asname:
                    names.add(alias.asname)
                elif isinstance(node, ast.Import):
                    names.add(alias.name.split(".", 1)[0])
                else:
                    names.add(alias.name)
        return names


@dataclass
class SourceUnit:
    """A parsed source file and the module name it is importable as."""

    module: str
    text: str
    tree: ast.Module
    path: Path | None = None

    @property
    def display_path(self) -> str:
        return str(self.path) if self.path is not None else f"<{self.module}>"

    def import_directives(self, scope: ImportScope = "all") -> list[ImportDirective]:
        """The file's module-level imports, in source order.

        ``module`` returns plain top-level import statements. ``all`` also
        returns top-level ``try``/``if`` blocks that only import (fallback
        imports, ``if TYPE_CHECKING:``), whole and verbatim so their guards
        are kept. Imports inside functions and classes never bind module
        names and are not returned.
        """
        directives = []
        for node in self.tree.body:
            if isinstance(node, _IMPORTS) or (scope == "all" and _is_guarded_import(node)):
                text = ast.get_source_segment(self.text, node)
                directives.append(ImportDirective(node=node, text=text if text is not None else ast.unparse(node)))
        return directives

    def module_level_names(self) -> set[str]:
        """Names defined at module level by classes, functions and assignments."""
        names: set[str] = set()
        for node in self.tree.body:
            if isinstance(node, (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
                names.add(node.name)
            elif isinstance(node, (ast.Assign, ast.AnnAssign, ast.AugAssign)):
                targets = node.targets if isinstance(node, ast.Assign) else [node.target]
                for target in targets:
                    for sub in ast.walk(target):
                        if isinstance(sub, ast.Name):
                            names.add(sub.id)
        return names
