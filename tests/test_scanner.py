"""
Tests for the scanner — recognizing annotated classes and parsing decorators.
"""

import ast

from conftest import make_forest, make_unit

from componentgen.core.models import GroupMarker, SingleOverride
from componentgen.core.services.scanner import (
    decorator_kind,
    dotted_name,
    scan_forest,
    scan_unit,
)


def _expr(text: str) -> ast.expr:
    return ast.parse(text, mode="eval").body


class TestDottedName:
    def test_name(self):
        assert dotted_name(_expr("Widget")) == "Widget"

    def test_attribute_chain(self):
        assert dotted_name(_expr("a.b.Widget")) == "a.b.Widget"

    def test_not_a_reference(self):
        assert dotted_name(_expr("get_type()")) is None
        assert dotted_name(_expr("'Widget'")) is None
        assert dotted_name(_expr("types[0]")) is None
        assert dotted_name(None) is None


class TestDecoratorKind:
    def test_bare_and_called(self):
        assert decorator_kind(_expr("require_component_getters")) == "require_component_getters"
        assert decorator_kind(_expr("require_component_getters()")) == "require_component_getters"

    def test_qualified(self):
        assert decorator_kind(_expr("runtime.require_component_getter(A, 'a')")) == (
            "require_component_getter"
        )

    def test_unrelated(self):
        assert decorator_kind(_expr("dataclass")) is None
        assert decorator_kind(_expr("registry[0]")) is None


class TestScanUnit:
    def _scan(self, text: str, module: str = "game.widgets"):
        containers = {}
        scan_unit(make_unit(text, module=module), containers)
        return containers

    def test_plain_class_ignored(self):
        containers = self._scan("""\
            @require_component(Transform)
            class Widget:
                pass
        """)
        assert containers == {}

    def test_group_marker(self):
        containers = self._scan("""\
            @require_component_getters
            @require_component(Transform, physics.Body)
            class Widget:
                pass
        """)
        c = containers["game.widgets.Widget"]
        assert c.name == "Widget"
        assert c.namespace == "game.widgets"
        assert list(c.required_types) == ["Transform", "physics.Body"]
        (marker,) = c.annotations
        assert isinstance(marker, GroupMarker)
        assert marker.visibility == "public"

    def test_group_marker_visibility(self):
        containers = self._scan("""\
            @require_component_getters("protected")
            class A:
                pass

            @require_component_getters(visibility="private")
            class B:
                pass
        """)
        assert containers["game.widgets.A"].annotations[0].visibility == "protected"
        assert containers["game.widgets.B"].annotations[0].visibility == "private"

    def test_empty_visibility_is_kept(self):
        containers = self._scan("""\
            @require_component_getters("")
            @require_component_getter(Renderer, "renderer", "")
            class Widget:
                pass
        """)
        marker, override = containers["game.widgets.Widget"].annotations
        assert marker.visibility == ""
        assert override.visibility == ""

    def test_override_positional_and_keyword(self):
        containers = self._scan("""\
            @require_component_getter(Renderer, "renderer", "protected")
            @require_component_getter(name="body", type=physics.Body)
            @require_component_getter(Mesh, visibility="private", name="mesh")
            class Widget:
                pass
        """)
        overrides = containers["game.widgets.Widget"].annotations
        assert [(o.type_name, o.name, o.visibility) for o in overrides] == [
            ("Renderer", "renderer", "protected"),
            ("physics.Body", "body", "public"),
            ("Mesh", "mesh", "private"),
        ]

    def test_malformed_override(self):
        containers = self._scan("""\
            @require_component_getter(types[0], NAME)
            class Widget:
                pass
        """)
        (override,) = containers["game.widgets.Widget"].annotations
        assert isinstance(override, SingleOverride)
        assert override.type_name is None
        assert override.name is None
        assert override.source_text == "require_component_getter(types[0], NAME)"
        assert override.location.line == 1
        assert override.location.column == 1

    def test_missing_name(self):
        containers = self._scan("""\
            @require_component_getter(Renderer)
            class Widget:
                pass
        """)
        (override,) = containers["game.widgets.Widget"].annotations
        assert override.type_name == "Renderer"
        assert override.name is None

    def test_non_type_requirements_ignored(self):
        containers = self._scan("""\
            @require_component_getters
            @require_component(Transform, get_type(), "Renderer")
            class Widget:
                pass
        """)
        assert list(containers["game.widgets.Widget"].required_types) == ["Transform"]

    def test_nested_class_full_name(self):
        containers = self._scan("""\
            class Outer:
                @require_component_getters
                class Inner:
                    pass

            def factory():
                @require_component_getters
                class Local:
                    pass
        """)
        assert list(containers) == ["game.widgets.Outer.Inner", "game.widgets.factory.Local"]
        assert containers["game.widgets.Outer.Inner"].namespace == "game.widgets.Outer"

    def test_annotation_order_is_source_order(self):
        containers = self._scan("""\
            @require_component_getter(A, "first")
            @require_component_getters
            @require_component_getter(A, "second")
            class Widget:
                pass
        """)
        kinds = [a.kind for a in containers["game.widgets.Widget"].annotations]
        assert kinds == ["override", "group", "override"]


class TestScanForest:
    def test_scan_order(self):
        forest = make_forest(
            """\
            @require_component_getters
            class B:
                pass
            """,
            """\
            @require_component_getters
            class A:
                pass
            """,
        )
        assert list(scan_forest(forest)) == ["pkg.m0.B", "pkg.m1.A"]

    def test_same_simple_name_different_modules(self):
        forest = make_forest(
            "@require_component_getters\nclass Widget:\n    pass\n",
            "@require_component_getters\nclass Widget:\n    pass\n",
        )
        containers = scan_forest(forest)
        assert list(containers) == ["pkg.m0.Widget", "pkg.m1.Widget"]
