"""Schema-driven property inspector.

Turns a block definition's schema into a list of form controls and coerces
operator input before it reaches the block props. Mapping rules:

- enum present: closed choice over the values plus an empty "" sentinel
- string: free text
- number / integer: numeric input stored as int or float, never as text
- boolean: toggle stored as a literal bool
- anything else: JSON text editor, stored parsed or as the raw text
"""

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import structlog

from pagecraft.blocks.base import BlockDefinition
from pagecraft.blocks.html import TEXT_ALIGNMENTS
from pagecraft.blocks.schema import FieldKind, SchemaDescriptor
from pagecraft.models.block import STYLE_KEY

logger = structlog.get_logger()

EMPTY_OPTION = ""

OnChange = Callable[[Any], None]


class Widget(str, Enum):
    """Control rendered for a field."""

    SELECT = "select"
    TEXT = "text"
    NUMBER = "number"
    TOGGLE = "toggle"
    JSON = "json"


@dataclass(frozen=True)
class FieldSpec:
    """Editable field derived from a schema property."""

    name: str
    label: str
    kind: FieldKind
    widget: Widget
    required: bool = False
    options: tuple[Any, ...] | None = None
    placeholder: str | None = None


# Schema-independent fields stored under props["style"]
STYLE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        name="padding",
        label="Padding",
        kind=FieldKind.STRING,
        widget=Widget.TEXT,
        placeholder="e.g. 2rem",
    ),
    FieldSpec(
        name="textAlign",
        label="Text align",
        kind=FieldKind.STRING,
        widget=Widget.SELECT,
        options=(EMPTY_OPTION, *TEXT_ALIGNMENTS),
    ),
)


def _label(name: str) -> str:
    """Turn a prop name like ``productIds`` into "Product ids"."""
    words = []
    current = ""
    for char in name.replace("_", " "):
        if char.isupper() and current:
            words.append(current)
            current = char.lower()
        elif char == " ":
            if current:
                words.append(current)
            current = ""
        else:
            current += char
    if current:
        words.append(current)
    label = " ".join(words)
    return label[:1].upper() + label[1:]


def _widget_for(kind: FieldKind, has_enum: bool) -> Widget:
    if has_enum:
        return Widget.SELECT
    if kind == FieldKind.STRING:
        return Widget.TEXT
    if kind in (FieldKind.NUMBER, FieldKind.INTEGER):
        return Widget.NUMBER
    if kind == FieldKind.BOOLEAN:
        return Widget.TOGGLE
    return Widget.JSON


def generate_fields(schema: SchemaDescriptor | dict[str, Any]) -> list[FieldSpec]:
    """Derive the form fields for a schema, in schema order.

    Args:
        schema: Parsed descriptor or raw JSON-Schema-like dict.

    Returns:
        List of FieldSpec.
    """
    if not isinstance(schema, SchemaDescriptor):
        schema = SchemaDescriptor.from_dict(schema)

    return [
        FieldSpec(
            name=field.name,
            label=_label(field.name),
            kind=field.kind,
            widget=_widget_for(field.kind, field.has_enum),
            required=field.required,
            options=(EMPTY_OPTION, *field.enum) if field.has_enum else None,
        )
        for field in schema
    ]


class _Ignored(Exception):
    """Raised by a coercer when input must not be stored."""


def _coerce_select(field: FieldSpec, raw: Any) -> Any:
    options = field.options or (EMPTY_OPTION,)
    if raw in options:
        return raw
    # Form controls report option values as text
    for option in options:
        if str(option) == str(raw):
            return option
    raise _Ignored(f"'{raw}' is not an option")


def _coerce_text(field: FieldSpec, raw: Any) -> str:
    return "" if raw is None else str(raw)


def _coerce_number(field: FieldSpec, raw: Any) -> int | float:
    if isinstance(raw, bool):
        raise _Ignored("boolean is not numeric")

    if isinstance(raw, (int, float)):
        number = raw
    else:
        text = "" if raw is None else str(raw).strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            raise _Ignored(f"'{text}' is not numeric") from None

    if isinstance(number, float):
        if not math.isfinite(number):
            raise _Ignored("non-finite number")
        if field.kind == FieldKind.INTEGER or number.is_integer():
            return int(number)
    return number


def _coerce_toggle(field: FieldSpec, raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1", "on", "yes")
    return bool(raw)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite constant {name}")


def _coerce_json(field: FieldSpec, raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        # NaN and Infinity do not survive export
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        # Kept verbatim so the operator can finish typing
        return raw


_COERCERS: dict[Widget, Callable[[FieldSpec, Any], Any]] = {
    Widget.SELECT: _coerce_select,
    Widget.TEXT: _coerce_text,
    Widget.NUMBER: _coerce_number,
    Widget.TOGGLE: _coerce_toggle,
    Widget.JSON: _coerce_json,
}


def _display_value(field: FieldSpec, value: Any) -> Any:
    if field.widget == Widget.TOGGLE:
        return bool(value)
    if field.widget == Widget.JSON:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return json.dumps(value, indent=2)
    if field.widget == Widget.NUMBER:
        return value if isinstance(value, (int, float)) and not isinstance(value, bool) else ""
    if field.widget == Widget.SELECT:
        return value if value is not None else EMPTY_OPTION
    return "" if value is None else str(value)


@dataclass
class FieldControl:
    """A rendered control bound to one field and a change callback."""

    field: FieldSpec
    value: Any
    on_change: OnChange

    @property
    def widget(self) -> Widget:
        return self.field.widget

    @property
    def options(self) -> tuple[Any, ...] | None:
        return self.field.options

    def change(self, raw: Any) -> bool:
        """Coerce operator input and report the stored value.

        Args:
            raw: Raw input from the control.

        Returns:
            True if on_change was called, False if the input was ignored.
        """
        try:
            value = _COERCERS[self.field.widget](self.field, raw)
        except _Ignored as e:
            logger.warning("Ignored field input", field=self.field.name, widget=self.field.widget.value, reason=str(e))
            return False

        self.value = _display_value(self.field, value)
        self.on_change(value)
        return True


def render_field(field: FieldSpec, current_value: Any, on_change: OnChange) -> FieldControl:
    """Bind a field to its current value and a change callback.

    Args:
        field: Field to render.
        current_value: Value currently stored in the props.
        on_change: Called with the coerced value on every accepted edit.

    Returns:
        FieldControl.
    """
    return FieldControl(field=field, value=_display_value(field, current_value), on_change=on_change)


class PropertyInspector:
    """Form over one block instance's props.

    Every edit produces a new full props dict (shallow merge at the top
    level) and passes it to ``on_change``. Keys the schema does not declare
    are carried over untouched.
    """

    def __init__(
        self,
        definition: BlockDefinition,
        props: dict[str, Any],
        on_change: Callable[[dict[str, Any]], None],
    ):
        """Initialize the inspector.

        Args:
            definition: Definition of the inspected block.
            props: Current props of the block instance.
            on_change: Receives the next full props dict.
        """
        self.definition = definition
        self.fields = generate_fields(definition.schema)
        self.style_fields = list(STYLE_FIELDS)
        self._props = dict(props)
        self._on_change = on_change

    @property
    def props(self) -> dict[str, Any]:
        """Props as of the latest edit."""
        return dict(self._props)

    @property
    def missing_required(self) -> list[str]:
        """Required fields absent from the props."""
        return self.definition.schema.missing_required(self._props)

    def controls(self) -> list[FieldControl]:
        """Controls for the schema fields."""
        return [
            render_field(field, self._props.get(field.name), self._setter(field.name))
            for field in self.fields
        ]

    def style_controls(self) -> list[FieldControl]:
        """Controls for the style fields."""
        style = self._style()
        return [
            render_field(field, style.get(field.name), self._style_setter(field.name))
            for field in self.style_fields
        ]

    def control(self, name: str) -> FieldControl:
        """Get the control for one schema or style field.

        Raises:
            KeyError: If no field has that name.
        """
        for control in self.controls() + self.style_controls():
            if control.field.name == name:
                return control
        raise KeyError(name)

    def set_prop(self, name: str, value: Any) -> dict[str, Any]:
        """Set one top-level prop and emit the next props."""
        next_props = {**self._props, name: value}
        return self._emit(next_props)

    def set_style(self, name: str, value: Any) -> dict[str, Any]:
        """Set one style prop and emit the next props."""
        next_style = {**self._style(), name: value}
        next_props = {**self._props, STYLE_KEY: next_style}
        return self._emit(next_props)

    def _style(self) -> dict[str, Any]:
        style = self._props.get(STYLE_KEY)
        return style if isinstance(style, dict) else {}

    def _setter(self, name: str) -> OnChange:
        return lambda value: self.set_prop(name, value)

    def _style_setter(self, name: str) -> OnChange:
        return lambda value: self.set_style(name, value)

    def _emit(self, next_props: dict[str, Any]) -> dict[str, Any]:
        self._props = next_props
        self._on_change(dict(next_props))
        return next_props
