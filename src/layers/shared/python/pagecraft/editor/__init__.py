"""Page editing session: builder, history, inspector and autosave."""

from pagecraft.editor.autosave import AutosaveStatus, AutosaveTimer
from pagecraft.editor.builder import CompositionBuilder
from pagecraft.editor.history import UndoStack
from pagecraft.editor.inspector import (
    STYLE_FIELDS,
    FieldControl,
    FieldSpec,
    PropertyInspector,
    Widget,
    generate_fields,
    render_field,
)
from pagecraft.editor.serialization import export_blocks, parse_blocks

__all__ = [
    "AutosaveStatus",
    "AutosaveTimer",
    "CompositionBuilder",
    "FieldControl",
    "FieldSpec",
    "PropertyInspector",
    "STYLE_FIELDS",
    "UndoStack",
    "Widget",
    "export_blocks",
    "generate_fields",
    "parse_blocks",
    "render_field",
]
