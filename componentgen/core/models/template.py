"""
Generated source model — what the emitter registers with an output channel.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedSource(BaseModel):
    """A generated accessor module.

    Attributes:
        name:      Output name (``example_component_getters.py``).
        content:   Full module text.
        container: Fully-qualified name of the container it was built for.
        module:    Module name of the originating source file.
        origin:    Path of the originating source file, if it came from disk.
    """

    name: str
    content: str
    container: str
    module: str = ""
    origin: str | None = None


# First line of every generated module; such files are never scanned.
GENERATED_MARKER = "# <auto-generated by componentgen />"
