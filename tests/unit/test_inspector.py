"""Tests for the property inspector."""

import pytest

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.schema import FieldKind
from pagecraft.editor.inspector import (
    STYLE_FIELDS,
    PropertyInspector,
    Widget,
    generate_fields,
    render_field,
)
from pagecraft.editor.serialization import export_blocks, parse_blocks
from pagecraft.models.block import BlockInstance

SCHEMA = {
    "properties": {
        "title": {"type": "string"},
        "align": {"type": "string", "enum": ["left", "center"]},
        "columns": {"type": "number"},
        "count": {"type": "integer"},
        "rounded": {"type": "boolean"},
        "items": {"type": "array"},
    },
    "required": ["title"],
}


@pytest.fixture
def fields():
    return {f.name: f for f in generate_fields(SCHEMA)}


@pytest.fixture
def changes():
    """Collects values passed to on_change."""
    return []


class TestGenerateFields:
    """Tests for schema-to-field mapping."""

    def test_widgets(self, fields):
        """Test each kind maps to its widget."""
        assert fields["title"].widget == Widget.TEXT
        assert fields["align"].widget == Widget.SELECT
        assert fields["columns"].widget == Widget.NUMBER
        assert fields["count"].widget == Widget.NUMBER
        assert fields["rounded"].widget == Widget.TOGGLE
        assert fields["items"].widget == Widget.JSON

    def test_order_and_labels(self):
        """Test fields keep schema order and get readable labels."""
        result = generate_fields({"properties": {"productIds": {"type": "array"}, "title": {"type": "string"}}})

        assert [f.name for f in result] == ["productIds", "title"]
        assert result[0].label == "Product ids"

    def test_enum_options_include_empty(self, fields):
        """Test enum options start with the empty sentinel."""
        assert fields["align"].options == ("", "left", "center")

    def test_required_flag(self, fields):
        """Test required fields are flagged."""
        assert fields["title"].required is True
        assert fields["columns"].required is False

    def test_style_fields(self):
        """Test the schema-independent style fields."""
        padding, text_align = STYLE_FIELDS

        assert padding.name == "padding"
        assert padding.widget == Widget.TEXT
        assert padding.placeholder == "e.g. 2rem"
        assert text_align.options == ("", "left", "center", "right")


class TestCoercion:
    """Tests for input coercion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("3", 3), ("2.5", 2.5), ("", 0), (" 7 ", 7), (4, 4), (1.5, 1.5)],
    )
    def test_number(self, fields, changes, raw, expected):
        """Test numeric input is stored as a number, never as text."""
        control = render_field(fields["columns"], None, changes.append)

        assert control.change(raw) is True
        assert changes == [expected]
        assert type(changes[0]) is type(expected)

    def test_integer_truncates(self, fields, changes):
        """Test integer fields store ints."""
        control = render_field(fields["count"], None, changes.append)

        control.change("2.9")

        assert changes == [2]

    @pytest.mark.parametrize("raw", ["abc", "1e", True, "nan"])
    def test_non_numeric_ignored(self, fields, changes, raw):
        """Test non-numeric input is not stored."""
        control = render_field(fields["columns"], 3, changes.append)

        assert control.change(raw) is False
        assert changes == []
        assert control.value == 3

    def test_toggle(self, fields, changes):
        """Test toggles store literal booleans."""
        control = render_field(fields["rounded"], True, changes.append)

        control.change(False)
        control.change("true")
        control.change("off")

        assert changes == [False, True, False]

    def test_select(self, fields, changes):
        """Test selects accept options and the empty sentinel."""
        control = render_field(fields["align"], "left", changes.append)

        control.change("center")
        control.change("")

        assert changes == ["center", ""]

    def test_select_rejects_unknown_option(self, fields, changes):
        """Test values outside the options are ignored."""
        control = render_field(fields["align"], "left", changes.append)

        assert control.change("right") is False
        assert changes == []

    def test_json_parsed(self, fields, changes):
        """Test valid JSON is stored parsed."""
        control = render_field(fields["items"], [], changes.append)

        control.change('[{"url": "a.jpg"}]')

        assert changes == [[{"url": "a.jpg"}]]

    def test_json_invalid_kept_raw(self, fields, changes):
        """Test invalid JSON is stored as the raw text."""
        control = render_field(fields["items"], [], changes.append)

        control.change('[{"url": ')

        assert changes == ['[{"url": ']
        assert control.value == '[{"url": '

    @pytest.mark.parametrize("raw", ["[NaN, Infinity]", '{"ratio": -Infinity}'])
    def test_json_non_finite_kept_raw(self, fields, changes, raw):
        """Test NaN and Infinity count as invalid JSON."""
        control = render_field(fields["items"], [], changes.append)

        control.change(raw)

        assert changes == [raw]

    def test_json_edit_round_trips(self, fields, changes):
        """Test structured edits survive export and import unchanged."""
        control = render_field(fields["items"], [], changes.append)
        control.change("[NaN, Infinity]")
        control.change('[{"url": "a.jpg", "weight": 1.5}]')
        blocks = [BlockInstance(id=f"b{i}", type="gallery", props={"items": value}) for i, value in enumerate(changes)]

        assert parse_blocks(export_blocks(blocks)) == blocks

    def test_json_display(self, fields):
        """Test structured values display as indented JSON."""
        control = render_field(fields["items"], [1, 2], lambda value: None)

        assert control.value == "[\n  1,\n  2\n]"

    def test_text(self, fields, changes):
        """Test text fields store strings."""
        control = render_field(fields["title"], None, changes.append)

        assert control.value == ""
        control.change("Hello")
        assert changes == ["Hello"]


class TestPropertyInspector:
    """Tests for PropertyInspector."""

    @pytest.fixture
    def definition(self):
        return BlockDefinition.build(
            type="card",
            display_name="Card",
            category=BlockCategory.CUSTOM,
            description="",
            schema=SCHEMA,
            default_props={"title": "Card"},
            render=lambda props: "",
        )

    def test_edit_emits_full_props(self, definition):
        """Test each edit emits a shallow-merged full props dict."""
        emitted = []
        inspector = PropertyInspector(
            definition,
            {"title": "Card", "legacy": {"keep": True}},
            emitted.append,
        )

        inspector.control("columns").change("3")
        inspector.control("title").change("New")

        assert emitted[0] == {"title": "Card", "legacy": {"keep": True}, "columns": 3}
        assert emitted[1] == {"title": "New", "legacy": {"keep": True}, "columns": 3}

    def test_style_edit_nested(self, definition):
        """Test style fields are stored under the style key."""
        emitted = []
        inspector = PropertyInspector(
            definition,
            {"title": "Card", "style": {"padding": "1rem"}},
            emitted.append,
        )

        inspector.control("textAlign").change("center")

        assert emitted[-1] == {"title": "Card", "style": {"padding": "1rem", "textAlign": "center"}}

    def test_controls_follow_schema(self, definition):
        """Test controls are listed in schema order."""
        inspector = PropertyInspector(definition, {}, lambda props: None)

        assert [c.field.name for c in inspector.controls()] == list(SCHEMA["properties"])
        assert [c.field.name for c in inspector.style_controls()] == ["padding", "textAlign"]
        assert inspector.missing_required == ["title"]

    def test_unknown_control(self, definition):
        """Test asking for an undeclared field fails."""
        inspector = PropertyInspector(definition, {}, lambda props: None)

        with pytest.raises(KeyError):
            inspector.control("nope")

    def test_field_kind_fallback(self):
        """Test unknown kinds fall back to the JSON editor."""
        (field,) = generate_fields({"properties": {"odd": {"type": "date"}}})

        assert field.kind == FieldKind.UNKNOWN
        assert field.widget == Widget.JSON
