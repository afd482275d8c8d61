"""Schema descriptors for block props.

A descriptor is parsed from a JSON-Schema-like dict. Only ``properties``,
each property's ``type`` and ``enum``, and the ``required`` list are
interpreted; every other keyword is kept on the field but ignored.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Declared kind of a schema field."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    @classmethod
    def from_schema_type(cls, value: Any) -> "FieldKind":
        """Map a JSON-Schema ``type`` value to a kind.

        Union types (lists) use their first non-null member.
        """
        if isinstance(value, list):
            value = next((v for v in value if v != "null"), None)
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SchemaField:
    """A single editable field of a block's props."""

    name: str
    kind: FieldKind
    required: bool = False
    enum: tuple[Any, ...] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def has_enum(self) -> bool:
        """Check whether the field declares a closed set of values."""
        return self.enum is not None


@dataclass(frozen=True)
class SchemaDescriptor:
    """Ordered set of editable fields for one block type."""

    fields: tuple[SchemaField, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, schema: dict[str, Any] | None) -> "SchemaDescriptor":
        """Build a descriptor from a JSON-Schema-like dict.

        Args:
            schema: Dict with ``properties`` and optional ``required``.

        Returns:
            SchemaDescriptor preserving property order.
        """
        schema = schema or {}
        properties = schema.get("properties") or {}
        required = set(schema.get("required") or [])

        fields = []
        for name, prop in properties.items():
            prop = prop if isinstance(prop, dict) else {}
            enum = prop.get("enum")
            fields.append(
                SchemaField(
                    name=name,
                    kind=FieldKind.from_schema_type(prop.get("type")),
                    required=name in required,
                    enum=tuple(enum) if isinstance(enum, list) else None,
                    raw=prop,
                )
            )

        return cls(fields=tuple(fields), raw=schema)

    @property
    def required_fields(self) -> list[str]:
        """Names of required fields."""
        return [f.name for f in self.fields if f.required]

    def get(self, name: str) -> SchemaField | None:
        """Get a field by name."""
        return next((f for f in self.fields if f.name == name), None)

    def missing_required(self, props: dict[str, Any]) -> list[str]:
        """List required fields absent from props.

        Used for operator hints only; props are never rejected.
        """
        return [name for name in self.required_fields if name not in props]

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
