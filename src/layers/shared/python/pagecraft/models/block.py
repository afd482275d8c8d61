"""Block instance model."""

import copy
from typing import Any, Mapping

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

from pagecraft.models.base import generate_ulid

# Reserved props key holding schema-independent styling (padding, textAlign)
STYLE_KEY = "style"


class BlockInstance(PydanticBaseModel):
    """One positioned occurrence of a block within a page.

    The props shape is defined by the referenced block definition's schema
    but is not enforced here; unknown keys always pass through.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=generate_ulid, min_length=1, description="Block ID")
    type: str = Field(..., min_length=1, description="Block type key")
    props: dict[str, Any] = Field(default_factory=dict, description="Block properties")

    @classmethod
    def create(cls, block_type: str, default_props: Mapping[str, Any]) -> "BlockInstance":
        """Create a fresh instance with a new ID and a deep copy of the defaults.

        Args:
            block_type: The block type key.
            default_props: The definition's default props.

        Returns:
            New BlockInstance.
        """
        return cls(type=block_type, props=copy.deepcopy(dict(default_props)))

    def with_props(self, props: dict[str, Any]) -> "BlockInstance":
        """Return a copy of this instance carrying the given props."""
        return BlockInstance(id=self.id, type=self.type, props=copy.deepcopy(props))

    @property
    def style(self) -> dict[str, Any]:
        """Get the reserved style props (empty if unset or malformed)."""
        value = self.props.get(STYLE_KEY)
        return value if isinstance(value, dict) else {}
