"""Block definition record."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from pagecraft.blocks.schema import SchemaDescriptor

# Render functions take the instance props and return an HTML fragment
RenderFn = Callable[[dict[str, Any]], str]


class BlockCategory(str, Enum):
    """Library grouping for block definitions."""

    HERO = "hero"
    CONTENT = "content"
    MEDIA = "media"
    CTA = "cta"
    COMMERCE = "commerce"
    CUSTOM = "custom"


@dataclass(frozen=True)
class BlockDefinition:
    """Registered, immutable description of one content-block kind.

    Attributes:
        type: Unique type key (e.g. "hero", "richText").
        display_name: Human-readable name shown in the block library.
        category: Library grouping.
        description: One-line description for the library.
        schema: Descriptor of the editable fields.
        default_props: Props given to newly added instances.
        render: Function rendering props to HTML.
    """

    type: str
    display_name: str
    category: BlockCategory
    description: str
    schema: SchemaDescriptor
    default_props: Mapping[str, Any]
    render: RenderFn = field(compare=False)

    def __post_init__(self):
        if not self.type:
            raise ValueError("Block definition type must not be empty")
        if not isinstance(self.default_props, MappingProxyType):
            object.__setattr__(self, "default_props", MappingProxyType(dict(self.default_props)))

    @classmethod
    def build(
        cls,
        type: str,
        display_name: str,
        category: BlockCategory,
        description: str,
        schema: dict[str, Any],
        default_props: dict[str, Any],
        render: RenderFn,
    ) -> "BlockDefinition":
        """Build a definition from a JSON-Schema-like schema dict."""
        return cls(
            type=type,
            display_name=display_name,
            category=category,
            description=description,
            schema=SchemaDescriptor.from_dict(schema),
            default_props=default_props,
            render=render,
        )

    def summary(self) -> dict[str, str]:
        """Get the library listing entry for this definition."""
        return {
            "type": self.type,
            "display_name": self.display_name,
            "category": self.category.value,
            "description": self.description,
        }
