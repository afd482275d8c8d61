"""Composition builder - one operator's page editing session.

The session owns the undo history of block sequences, the selection, the
page's theme overrides and the autosave indicator. Every structural change
pushes a new immutable snapshot; edits never modify a snapshot in place.
"""

from typing import Any, Callable, Iterable

import structlog

from pagecraft.blocks.base import BlockDefinition
from pagecraft.blocks.registry import BlockRegistry, get_default_registry
from pagecraft.blocks.renderer import render_blocks
from pagecraft.config import get_history_limit
from pagecraft.editor.autosave import AutosaveStatus, AutosaveTimer, TimerFactory
from pagecraft.editor.history import UndoStack
from pagecraft.editor.inspector import PropertyInspector
from pagecraft.editor.serialization import export_blocks, parse_blocks
from pagecraft.models.block import BlockInstance
from pagecraft.models.page import Page, SavePageRequest
from pagecraft.models.theme import Theme
from pagecraft.themes.presets import DEFAULT_THEME
from pagecraft.themes.resolver import EffectiveTokens, resolve, seed_overrides
from pagecraft.utils.exceptions import UnknownBlockTypeError

logger = structlog.get_logger()

BlockSequence = tuple[BlockInstance, ...]


class CompositionBuilder:
    """Editing session over an ordered block sequence."""

    def __init__(
        self,
        registry: BlockRegistry | None = None,
        blocks: Iterable[BlockInstance] = (),
        theme_overrides: dict[str, str] | None = None,
        base_theme: Theme | None = None,
        history_limit: int | None = None,
        autosave_delay: float | None = None,
        timer_factory: TimerFactory | None = None,
        on_autosave: Callable[[], None] | None = None,
    ):
        """Initialize the session.

        Args:
            registry: Block registry (built-in blocks if None).
            blocks: Initial block sequence.
            theme_overrides: Initial theme overrides.
            base_theme: Base theme for previews (default theme if None).
            history_limit: Max undo snapshots (PAGECRAFT_HISTORY_LIMIT if None).
            autosave_delay: Autosave debounce in seconds.
            timer_factory: Autosave timer factory, for tests.
            on_autosave: Called when an autosave debounce completes.
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.base_theme = base_theme or DEFAULT_THEME
        self.page_id: str | None = None

        limit = history_limit if history_limit is not None else get_history_limit()
        self._history: UndoStack[BlockSequence] = UndoStack(tuple(blocks), max_size=limit)
        self._theme_overrides: dict[str, str] = dict(theme_overrides or {})
        self._selected_id: str | None = None

        self.autosave = AutosaveTimer(
            delay=autosave_delay,
            timer_factory=timer_factory,
            on_saved=on_autosave,
        )
        self.logger = logger.bind(service="composition_builder")

    # -- Block sequence -----------------------------------------------------

    @property
    def blocks(self) -> list[BlockInstance]:
        """Current block sequence."""
        return list(self._history.current)

    def get_block(self, block_id: str) -> BlockInstance | None:
        return next((b for b in self._history.current if b.id == block_id), None)

    def _index_of(self, block_id: str) -> int | None:
        return next((i for i, b in enumerate(self._history.current) if b.id == block_id), None)

    def _commit(self, blocks: Iterable[BlockInstance]) -> None:
        self._history.push(tuple(blocks))
        self.autosave.touch()

    def add_block(self, block_type: str) -> BlockInstance:
        """Append a new block with the definition's default props and select it.

        Args:
            block_type: Registered block type key.

        Returns:
            The new BlockInstance.

        Raises:
            UnknownBlockTypeError: If the type is not registered.
        """
        definition = self.registry.lookup(block_type)
        if definition is None:
            self.logger.warning("Cannot add unknown block type", block_type=block_type)
            raise UnknownBlockTypeError(block_type)

        instance = BlockInstance.create(definition.type, definition.default_props)
        self._commit((*self._history.current, instance))
        self._selected_id = instance.id

        self.logger.debug("Block added", block_id=instance.id, block_type=block_type)
        return instance

    def delete_block(self, block_id: str) -> bool:
        """Remove a block.

        If it was selected, the first remaining block (or nothing) is
        selected instead.

        Returns:
            True if a block was removed.
        """
        if self._index_of(block_id) is None:
            self.logger.debug("Delete of unknown block ignored", block_id=block_id)
            return False

        remaining = [b for b in self._history.current if b.id != block_id]
        self._commit(remaining)
        if self._selected_id == block_id:
            self._selected_id = remaining[0].id if remaining else None

        self.logger.debug("Block deleted", block_id=block_id)
        return True

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one block to a new position, keeping the others in order.

        Returns:
            True if the sequence changed.
        """
        current = list(self._history.current)
        size = len(current)
        if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
            return False

        moved = current.pop(from_index)
        current.insert(to_index, moved)
        self._commit(current)

        self.logger.debug("Block moved", block_id=moved.id, from_index=from_index, to_index=to_index)
        return True

    def move_block(self, active_id: str, over_id: str) -> bool:
        """Move a dragged block onto the position of the block it was dropped over.

        Returns:
            True if the sequence changed.
        """
        from_index = self._index_of(active_id)
        to_index = self._index_of(over_id)
        if from_index is None or to_index is None:
            return False
        return self.reorder(from_index, to_index)

    def update_props(self, block_id: str, next_props: dict[str, Any]) -> bool:
        """Replace the props of one block.

        Returns:
            True if the block exists and was updated.
        """
        index = self._index_of(block_id)
        if index is None:
            self.logger.debug("Update of unknown block ignored", block_id=block_id)
            return False

        current = list(self._history.current)
        current[index] = current[index].with_props(next_props)
        self._commit(current)
        return True

    # -- Selection ----------------------------------------------------------

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    def select(self, block_id: str | None) -> None:
        """Select a block by ID, or clear the selection with None."""
        if block_id is not None and self._index_of(block_id) is None:
            self.logger.debug("Select of unknown block ignored", block_id=block_id)
            return
        self._selected_id = block_id

    @property
    def selected_block(self) -> BlockInstance | None:
        if self._selected_id is None:
            return None
        return self.get_block(self._selected_id)

    @property
    def selected_definition(self) -> BlockDefinition | None:
        block = self.selected_block
        return self.registry.lookup(block.type) if block else None

    def inspector(self) -> PropertyInspector | None:
        """Get a property inspector for the selected block.

        Returns:
            PropertyInspector wired to update_props, or None if nothing is
            selected or the selected block's type is unknown.
        """
        block = self.selected_block
        definition = self.selected_definition
        if block is None or definition is None:
            return None

        block_id = block.id
        return PropertyInspector(
            definition,
            block.props,
            on_change=lambda props: self.update_props(block_id, props),
        )

    # -- History ------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def undo(self) -> list[BlockInstance]:
        """Step back one snapshot. No-op at the oldest."""
        if self._history.can_undo:
            self._history.undo()
            self._after_history_move()
        return self.blocks

    def redo(self) -> list[BlockInstance]:
        """Step forward one snapshot. No-op at the newest."""
        if self._history.can_redo:
            self._history.redo()
            self._after_history_move()
        return self.blocks

    def _after_history_move(self) -> None:
        if self._selected_id is not None and self._index_of(self._selected_id) is None:
            self._selected_id = None
        self.autosave.touch()

    # -- Theme --------------------------------------------------------------

    @property
    def theme_overrides(self) -> dict[str, str]:
        return dict(self._theme_overrides)

    def set_theme_override(self, key: str, value: str | None) -> None:
        """Set one override; an empty value removes the key."""
        next_overrides = dict(self._theme_overrides)
        if value:
            next_overrides[key] = value
        else:
            next_overrides.pop(key, None)
        self.set_theme_overrides(next_overrides)

    def set_theme_overrides(self, overrides: dict[str, str]) -> None:
        """Replace the whole override map."""
        self._theme_overrides = dict(overrides)
        self.autosave.touch()

    def apply_base_theme(self, theme: Theme) -> dict[str, str]:
        """Switch the base theme and seed the overrides from its tokens.

        Returns:
            The new override map.
        """
        self.base_theme = theme
        self.set_theme_overrides(seed_overrides(theme, self._theme_overrides))
        self.logger.debug("Base theme applied", theme_id=theme.id)
        return self.theme_overrides

    def effective_tokens(self, base_theme: Theme | None = None) -> EffectiveTokens:
        """Resolve the overrides over a base theme (the session's if None)."""
        return resolve(base_theme or self.base_theme, self._theme_overrides)

    # -- Autosave -----------------------------------------------------------

    @property
    def autosave_status(self) -> AutosaveStatus:
        return self.autosave.status

    def close(self) -> None:
        """End the session, cancelling any pending autosave."""
        self.autosave.close()

    def __enter__(self) -> "CompositionBuilder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -- Import / export ----------------------------------------------------

    def export_json(self) -> str:
        """Export the block sequence as pretty-printed JSON."""
        return export_blocks(self._history.current)

    def import_json(self, text: str) -> list[BlockInstance]:
        """Replace the block sequence with an exported one.

        Raises:
            ValidationError: If the text is not a valid block array.
        """
        blocks = parse_blocks(text)
        self._commit(blocks)
        if self._selected_id is not None and self._index_of(self._selected_id) is None:
            self._selected_id = None
        self.logger.debug("Blocks imported", block_count=len(blocks))
        return self.blocks

    # -- Pages --------------------------------------------------------------

    def load_page(self, page: Page) -> None:
        """Start a fresh session on a stored page.

        History, selection and overrides are reset to the page's state.
        """
        self.autosave.cancel()
        self.page_id = page.id
        self._history.reset(tuple(page.blocks))
        self._theme_overrides = dict(page.theme_overrides)
        self._selected_id = None
        self.logger.debug("Page loaded", page_id=page.id, block_count=len(page.blocks))

    def to_save_request(self, title: str, slug: str, **fields: Any) -> SavePageRequest:
        """Build the save payload for the current session state.

        Args:
            title: Page title.
            slug: Page slug.
            **fields: Other SavePageRequest fields (status, meta, ...).

        Returns:
            SavePageRequest carrying the blocks and theme overrides.
        """
        return SavePageRequest(
            id=self.page_id,
            title=title,
            slug=slug,
            blocks=self.blocks,
            theme_overrides=self.theme_overrides,
            **fields,
        )

    def preview_html(self, base_theme: Theme | None = None) -> str:
        """Render the live preview of the current sequence."""
        return render_blocks(self._history.current, self.registry, self.effective_tokens(base_theme))
