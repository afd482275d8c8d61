"""Canonical JSON export/import of block sequences."""

import json
from typing import Any, Sequence

import pydantic
from pydantic import TypeAdapter

from pagecraft.models.block import BlockInstance
from pagecraft.utils.exceptions import ValidationError

_BLOCK_LIST = TypeAdapter(list[BlockInstance])


def blocks_to_data(blocks: Sequence[BlockInstance]) -> list[dict[str, Any]]:
    """Convert blocks to plain ``{id, type, props}`` dicts."""
    return [block.model_dump(mode="json") for block in blocks]


def export_blocks(blocks: Sequence[BlockInstance]) -> str:
    """Serialize a block sequence as pretty-printed JSON.

    Args:
        blocks: Blocks in page order.

    Returns:
        JSON array text, indented by two spaces.
    """
    return json.dumps(blocks_to_data(blocks), indent=2, ensure_ascii=False)


def parse_blocks(data: str | list[Any]) -> list[BlockInstance]:
    """Parse a serialized block sequence.

    Args:
        data: JSON array text, or already-decoded list.

    Returns:
        List of BlockInstance.

    Raises:
        ValidationError: If the input is not a JSON array of blocks.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValidationError(
                message="Invalid JSON",
                errors=[{"field": "blocks", "message": str(e), "type": "json_invalid"}],
            ) from e

    try:
        return _BLOCK_LIST.validate_python(data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e
