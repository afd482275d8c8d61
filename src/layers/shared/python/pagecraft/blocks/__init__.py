"""Block definitions, registry and renderer."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition, RenderFn
from pagecraft.blocks.registry import (
    BUILTIN_DEFINITIONS,
    BlockRegistry,
    get_default_registry,
    register,
)
from pagecraft.blocks.renderer import (
    EMPTY_PLACEHOLDER,
    RenderedBlock,
    render_block,
    render_blocks,
    render_preview_document,
)
from pagecraft.blocks.schema import FieldKind, SchemaDescriptor, SchemaField

__all__ = [
    "BUILTIN_DEFINITIONS",
    "BlockCategory",
    "BlockDefinition",
    "BlockRegistry",
    "EMPTY_PLACEHOLDER",
    "FieldKind",
    "RenderFn",
    "RenderedBlock",
    "SchemaDescriptor",
    "SchemaField",
    "get_default_registry",
    "register",
    "render_block",
    "render_blocks",
    "render_preview_document",
]
