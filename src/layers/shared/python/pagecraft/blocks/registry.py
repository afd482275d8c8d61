"""Block definition registry.

The registry is built once from a fixed list of definitions and never
mutated afterwards; the set of block types is closed per deployment.
"""

from types import MappingProxyType
from typing import Iterable, Iterator

import structlog

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.cta import CTA_BLOCK
from pagecraft.blocks.gallery import GALLERY_BLOCK
from pagecraft.blocks.hero import HERO_BLOCK
from pagecraft.blocks.image import IMAGE_BLOCK
from pagecraft.blocks.product_grid import PRODUCT_GRID_BLOCK
from pagecraft.blocks.rich_text import RICH_TEXT_BLOCK
from pagecraft.blocks.video import VIDEO_BLOCK
from pagecraft.utils.exceptions import DuplicateBlockTypeError

logger = structlog.get_logger()

BUILTIN_DEFINITIONS: tuple[BlockDefinition, ...] = (
    HERO_BLOCK,
    RICH_TEXT_BLOCK,
    IMAGE_BLOCK,
    GALLERY_BLOCK,
    CTA_BLOCK,
    PRODUCT_GRID_BLOCK,
    VIDEO_BLOCK,
)


class BlockRegistry:
    """Read-only lookup of block definitions by type key."""

    def __init__(self, definitions: dict[str, BlockDefinition]):
        """Initialize the registry.

        Use ``register()`` rather than constructing directly, so duplicate
        types are rejected.

        Args:
            definitions: Definitions keyed by type, in registration order.
        """
        self._definitions = MappingProxyType(dict(definitions))

    def lookup(self, block_type: str) -> BlockDefinition | None:
        """Get the definition for a block type.

        Args:
            block_type: The block type key.

        Returns:
            BlockDefinition or None if the type is not registered.
        """
        return self._definitions.get(block_type)

    @property
    def definitions(self) -> list[BlockDefinition]:
        """All definitions in registration order."""
        return list(self._definitions.values())

    @property
    def types(self) -> list[str]:
        """All registered type keys in registration order."""
        return list(self._definitions.keys())

    def by_category(self, category: BlockCategory | str) -> list[BlockDefinition]:
        """Get the definitions in one library category."""
        category = BlockCategory(category)
        return [d for d in self._definitions.values() if d.category == category]

    def __contains__(self, block_type: object) -> bool:
        return block_type in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[BlockDefinition]:
        return iter(self._definitions.values())


def register(definitions: Iterable[BlockDefinition]) -> BlockRegistry:
    """Build a registry from a list of definitions.

    Args:
        definitions: Definitions to register.

    Returns:
        Read-only BlockRegistry.

    Raises:
        DuplicateBlockTypeError: If two definitions share a type key.
    """
    by_type: dict[str, BlockDefinition] = {}
    for definition in definitions:
        if definition.type in by_type:
            logger.error("Duplicate block type registration", block_type=definition.type)
            raise DuplicateBlockTypeError(definition.type)
        by_type[definition.type] = definition

    logger.debug("Block registry built", block_types=list(by_type))
    return BlockRegistry(by_type)


# Global registry of built-in blocks
_default_registry: BlockRegistry | None = None


def get_default_registry() -> BlockRegistry:
    """Get the registry of built-in block definitions.

    Returns:
        BlockRegistry singleton.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = register(BUILTIN_DEFINITIONS)
    return _default_registry
