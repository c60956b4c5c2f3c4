"""
Tests for the generation pass — end-to-end scenarios on in-memory sources.
"""

from conftest import make_forest

from componentgen.core.models.diagnostic import (
    MALFORMED_NAME_ARGUMENT,
    MALFORMED_TYPE_ARGUMENT,
    OUTPUT_NAME_COLLISION,
)
from componentgen.core.observability.diagnostics import CollectingDiagnostics
from componentgen.core.persistence.output import MemoryOutput
from componentgen.core.services.pipeline import PassOptions, run_generation_pass


class FailingOutput(MemoryOutput):
    """Refuses to store one module name, like a full disk would."""

    def __init__(self, refused: str):
        super().__init__()
        self.refused = refused

    def add_source(self, source):
        if source.name == self.refused:
            raise OSError("disk full")
        super().add_source(source)


class TestGenerationPass:
    def test_no_annotations_no_output(self):
        output = MemoryOutput()
        result = run_generation_pass(
            make_forest("""\
                @require_component(Transform)
                class Widget:
                    pass
            """),
            output=output,
        )
        assert output.names() == []
        assert result.containers == []
        assert result.diagnostics == []

    def test_group_marker_generates(self):
        output = MemoryOutput()
        result = run_generation_pass(
            make_forest("""\
                @require_component_getters
                @require_component(Transform, Health)
                class Player:
                    pass
            """),
            output=output,
        )
        assert output.names() == ["player_getters.py"]
        text = output.text("player_getters.py")
        assert "def Transform(self)" in text
        assert "def Health(self)" in text
        assert result.error_count == 0
        assert result.suppressed == []

    def test_missing_name_suppresses_container(self):
        output = MemoryOutput()
        diagnostics = CollectingDiagnostics()
        result = run_generation_pass(
            make_forest("""\
                @require_component_getters
                @require_component(Transform)
                @require_component_getter(Renderer)
                class Player:
                    pass
            """),
            output=output,
            diagnostics=diagnostics,
        )
        assert output.names() == []
        assert [d.code for d in diagnostics.errors] == [MALFORMED_NAME_ARGUMENT]
        assert result.suppressed == ["pkg.m0.Player"]
        assert result.error_count == 1

    def test_bad_type_and_bad_name(self):
        diagnostics = CollectingDiagnostics()
        run_generation_pass(
            make_forest("""\
                @require_component_getter(lookup("Renderer"), label)
                class Player:
                    pass
            """),
            diagnostics=diagnostics,
        )
        assert [d.code for d in diagnostics.errors] == [
            MALFORMED_TYPE_ARGUMENT,
            MALFORMED_NAME_ARGUMENT,
        ]

    def test_error_does_not_affect_other_files(self):
        output = MemoryOutput()
        result = run_generation_pass(
            make_forest(
                """\
                @require_component_getter(Renderer, NAME)
                class Broken:
                    pass
                """,
                """\
                @require_component_getters
                @require_component(Transform)
                class Fine:
                    pass
                """,
            ),
            output=output,
        )
        assert output.names() == ["fine_getters.py"]
        assert result.suppressed == ["pkg.m0.Broken"]
        assert [c["full_name"] for c in result.containers] == ["pkg.m0.Broken", "pkg.m1.Fine"]

    def test_collision_later_replaces_earlier(self):
        output = MemoryOutput()
        diagnostics = CollectingDiagnostics()
        run_generation_pass(
            make_forest(
                """\
                @require_component_getters
                @require_component(Transform)
                class Widget:
                    pass
                """,
                """\
                @require_component_getters
                @require_component(Health)
                class Widget:
                    pass
                """,
            ),
            output=output,
            diagnostics=diagnostics,
        )
        assert output.names() == ["widget_getters.py"]
        assert "pkg.m1.Widget" in output.text("widget_getters.py")
        assert [d.code for d in diagnostics.warnings] == [OUTPUT_NAME_COLLISION]
        assert diagnostics.errors == []

    def test_collision_with_warnings_as_errors(self):
        output = MemoryOutput()
        result = run_generation_pass(
            make_forest(
                "@require_component_getters\nclass Widget:\n    pass\n",
                "@require_component_getters\nclass Widget:\n    pass\n",
            ),
            output=output,
            options=PassOptions(warnings_as_errors=True),
        )
        assert "pkg.m0.Widget" in output.text("widget_getters.py")
        assert result.suppressed == ["pkg.m1.Widget"]

    def test_write_failure_does_not_stop_the_pass(self):
        output = FailingOutput("first_getters.py")
        result = run_generation_pass(
            make_forest(
                "@require_component_getters\nclass First:\n    pass\n",
                "@require_component_getter(Renderer, None)\nclass Broken:\n    pass\n",
                "@require_component_getters\nclass Second:\n    pass\n",
            ),
            output=output,
        )
        assert output.names() == ["second_getters.py"]
        assert [s.name for s in result.sources] == ["second_getters.py"]
        assert result.write_errors == ["first_getters.py: disk full"]
        assert [d.code for d in result.diagnostics] == [MALFORMED_NAME_ARGUMENT]
        assert result.to_dict()["write_errors"] == ["first_getters.py: disk full"]

    def test_passes_do_not_share_state(self):
        forest = make_forest("""\
            @require_component_getters
            @require_component(Transform)
            class Widget:
                pass
        """)
        first = run_generation_pass(forest)
        second = run_generation_pass(forest)
        assert [s.content for s in first.sources] == [s.content for s in second.sources]
        assert len(second.containers) == 1

    def test_to_dict(self):
        result = run_generation_pass(
            make_forest("""\
                @require_component_getter(Renderer, "renderer")
                class Widget:
                    pass
            """)
        )
        data = result.to_dict()
        assert data["errors"] == 0
        assert data["generated"] == [
            {"name": "widget_getters.py", "container": "pkg.m0.Widget", "origin": None}
        ]
        assert data["containers"][0]["overrides"]["Renderer"]["name"] == "renderer"
