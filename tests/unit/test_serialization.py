"""Tests for block sequence serialization."""

import json

import pytest

from pagecraft.editor.serialization import export_blocks, parse_blocks
from pagecraft.models.block import BlockInstance
from pagecraft.utils.exceptions import ValidationError


class TestSerialization:
    """Tests for export_blocks and parse_blocks."""

    def test_round_trip(self, sample_blocks):
        """Test export then parse yields an equal sequence."""
        assert parse_blocks(export_blocks(sample_blocks)) == sample_blocks

    def test_nested_props_round_trip(self):
        """Test nested and unicode props survive the round trip."""
        blocks = [
            BlockInstance(
                id="g1",
                type="gallery",
                props={
                    "columns": 2,
                    "images": [{"url": "a.jpg", "alt": "Café"}],
                    "style": {"padding": "1rem"},
                    "extra": None,
                },
            )
        ]

        text = export_blocks(blocks)

        assert "Café" in text
        assert parse_blocks(text) == blocks

    def test_parse_decoded_list(self):
        """Test parse accepts already-decoded data."""
        blocks = parse_blocks([{"id": "b1", "type": "hero", "props": {}}])

        assert blocks == [BlockInstance(id="b1", type="hero", props={})]

    def test_export_empty(self):
        """Test an empty sequence exports as an empty array."""
        assert json.loads(export_blocks([])) == []

    def test_invalid_json(self):
        """Test malformed text raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            parse_blocks("[{")

        assert exc_info.value.errors[0]["type"] == "json_invalid"

    @pytest.mark.parametrize("data", ['{"id": "b1"}', '[{"id": "b1", "props": {}}]', '[{"type": ""}]'])
    def test_invalid_shape(self, data):
        """Test wrong shapes raise ValidationError."""
        with pytest.raises(ValidationError):
            parse_blocks(data)
