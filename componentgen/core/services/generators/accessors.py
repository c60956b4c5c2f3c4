"""
Accessor generator — render the ``<Container>Getters`` mixin module.

For one validated container the module contains, in this order:

1. the marker line and a header comment;
2. every module-level import of the container's source file, verbatim and
   in source order, so names resolve exactly as they do there (minus
   any import of the generated module itself; types defined in that file
   are imported lazily inside their accessors);
3. the runtime import for the accessor helpers;
4. one ``@require_component(T)`` per override, since an override implies
   the requirement even when it was never declared by hand;
5. the mixin class: a cache field and a memoizing accessor per
   auto-named required type, then per override.

Rendering is a pure function of the container: the same container
always gives byte-identical text under the same output name.
"""

from __future__ import annotations

import re

from componentgen.core.models.container import AnnotatedContainer
from componentgen.core.models.source import ImportDirective, ImportScope
from componentgen.core.models.template import GENERATED_MARKER, GeneratedSource

RUNTIME_MODULE = "componentgen.runtime"
RUNTIME_NAMES = "UNRESOLVED, component_accessor, require_component"

_WORD_BOUNDARY = re.compile(r"(.)([A-Z][a-z]+)")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


# ── Naming ──────────────────────────────────────────────────────


def default_property_name(type_name: str) -> str:
    """Accessor name for a type: its full name after the last dot.

    "some.name.space.MeshFilter" -> "MeshFilter"
    """
    return type_name[type_name.rfind(".") + 1 :]


def cache_field_name(property_name: str) -> str:
    """"MeshFilter" -> "_meshFilter", "audioSource" -> "_audioSource"."""
    return f"_{property_name[:1].lower()}{property_name[1:]}"


def mixin_name(container_name: str) -> str:
    return f"{container_name}Getters"


def module_stem(container_name: str) -> str:
    """"ExampleComponent" -> "example_component_getters"."""
    snake = _CASE_BOUNDARY.sub(r"\1_\2", _WORD_BOUNDARY.sub(r"\1_\2", container_name))
    return f"{snake.lower()}_getters"


def output_name(container_name: str) -> str:
    return f"{module_stem(container_name)}.py"


# ── Rendering ───────────────────────────────────────────────────


def _quote(value: str) -> str:
    if value.isprintable() and '"' not in value and "\\" not in value:
        return f'"{value}"'
    return repr(value)


def planned_accessors(container: AnnotatedContainer) -> list[tuple[str, str, str]]:
    """``(visibility, type_name, property_name)`` per accessor, in emission order.

    Auto-named accessors for required types come first (only with a group
    marker, and never for a type that has an override), then overrides.
    """
    planned: list[tuple[str, str, str]] = []
    if container.defaults is not None:
        for type_name in container.default_types:
            if type_name not in container.overrides:
                planned.append((container.defaults.visibility, type_name, default_property_name(type_name)))
    for type_name, entry in container.overrides.items():
        planned.append((entry.visibility, type_name, entry.name))
    return planned


def render_accessor(
    visibility: str,
    type_name: str,
    property_name: str,
    local_module: str | None = None,
) -> str:
    """One cache field plus the accessor that fills it on first read.

    With ``local_module`` the type's leading name is imported from there
    inside the accessor; that module imports this one, so it can only be
    imported once it has finished loading.
    """
    field = cache_field_name(property_name)
    lazy_import = ""
    if local_module is not None:
        lazy_import = f"            from {local_module} import {type_name.split('.', 1)[0]}\n"
    return (
        f"    {field} = UNRESOLVED\n"
        "\n"
        f"    @component_accessor({_quote(visibility)})\n"
        f'    def {property_name}(self) -> "{type_name} | None":\n'
        f"        if self.{field} is UNRESOLVED:\n"
        f"{lazy_import}"
        f"            self.{field} = self.get_component({type_name})\n"
        f"        return self.{field}\n"
    )


def render_imports(
    container: AnnotatedContainer,
    import_scope: ImportScope = "all",
) -> list[ImportDirective]:
    stem = module_stem(container.name)
    return [
        directive
        for directive in container.unit.import_directives(import_scope)
        if not directive.imports_module(stem)
    ]


def local_type_names(container: AnnotatedContainer, imports: list[ImportDirective]) -> set[str]:
    """Leading names of types defined in the container's own module, not imported."""
    bound: set[str] = set()
    for directive in imports:
        bound |= directive.bound_names()
    return container.unit.module_level_names() - bound


def render_module(
    container: AnnotatedContainer,
    import_scope: ImportScope = "all",
    runtime_module: str = RUNTIME_MODULE,
) -> str:
    parts = [
        f"{GENERATED_MARKER}\n# Component accessors for {container.full_name}. Do not edit.\n",
    ]

    imports = render_imports(container, import_scope)
    if imports:
        parts.append("\n".join(d.text for d in imports) + "\n")
    parts.append(f"from {runtime_module} import {RUNTIME_NAMES}\n\n")

    local = local_type_names(container, imports)

    def is_local(type_name: str) -> bool:
        return type_name.split(".", 1)[0] in local

    # Local types can't be named at import time; the hand-written
    # require_component_getter already records those requirements.
    header = "".join(
        f"@require_component({type_name})\n"
        for type_name in container.overrides
        if not is_local(type_name)
    )
    header += (
        f"class {mixin_name(container.name)}:\n"
        f'    """Cached component accessors for {container.name}."""\n'
    )

    accessors = [
        render_accessor(
            visibility,
            type_name,
            property_name,
            container.unit.module if is_local(type_name) else None,
        )
        for visibility, type_name, property_name in planned_accessors(container)
    ]
    parts.append(header + "".join(f"\n{accessor}" for accessor in accessors))

    return "\n".join(parts)


def generate_accessors(
    container: AnnotatedContainer,
    import_scope: ImportScope = "all",
    runtime_module: str = RUNTIME_MODULE,
) -> GeneratedSource:
    """Render the accessor module for a validated container.

    Args:
        container: A container that passed validation.
        import_scope: Which of the source file's imports to duplicate.
        runtime_module: Module providing ``UNRESOLVED``, ``component_accessor``
            and ``require_component`` to the generated code.

    Returns:
        GeneratedSource named after the container's simple name.
    """
    return GeneratedSource(
        name=output_name(container.name),
        content=render_module(container, import_scope, runtime_module),
        container=container.full_name,
        module=container.unit.module,
        origin=str(container.unit.path) if container.unit.path is not None else None,
    )
