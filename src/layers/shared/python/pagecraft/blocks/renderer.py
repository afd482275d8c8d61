"""Dynamic block renderer.

Block HTML comes from exactly one place: the render function of the
definition registered for the instance's type. Unknown types (for example a
page saved by a newer deployment) render a visible fallback rather than
being dropped.
"""

from dataclasses import dataclass
from typing import Sequence

import structlog

from pagecraft.blocks.html import TEXT_ALIGNMENTS, escape_html, sanitize_length
from pagecraft.blocks.registry import BlockRegistry
from pagecraft.models.block import BlockInstance
from pagecraft.models.page import Page
from pagecraft.models.theme import Theme
from pagecraft.themes.presets import DEFAULT_THEME
from pagecraft.themes.resolver import EffectiveTokens, resolve

logger = structlog.get_logger()

EMPTY_PLACEHOLDER = "No blocks yet. Add some content in the CMS builder."


@dataclass(frozen=True)
class RenderedBlock:
    """Rendered output of one block instance."""

    block_id: str
    block_type: str
    html: str
    is_fallback: bool = False


def _fallback_html(block_type: str) -> str:
    return (
        '<div class="cms-block-fallback" role="note">'
        f"Unknown block: {escape_html(block_type)}"
        "</div>"
    )


def render_block(instance: BlockInstance, registry: BlockRegistry) -> RenderedBlock:
    """Render a block instance through its registered definition.

    Args:
        instance: Block instance to render.
        registry: Registry to resolve the instance type against.

    Returns:
        RenderedBlock; a fallback node if the type is unknown or its render
        function fails.
    """
    definition = registry.lookup(instance.type)
    if definition is None:
        logger.warning("Unknown block type", block_id=instance.id, block_type=instance.type)
        return RenderedBlock(
            block_id=instance.id,
            block_type=instance.type,
            html=_fallback_html(instance.type),
            is_fallback=True,
        )

    try:
        html = definition.render(instance.props)
    except Exception:
        logger.exception("Block render failed", block_id=instance.id, block_type=instance.type)
        return RenderedBlock(
            block_id=instance.id,
            block_type=instance.type,
            html=_fallback_html(instance.type),
            is_fallback=True,
        )

    return RenderedBlock(block_id=instance.id, block_type=instance.type, html=html)


def _style_attribute(instance: BlockInstance) -> str:
    """Build the wrapper style from the reserved style props."""
    style = instance.style
    declarations = []

    padding = sanitize_length(style.get("padding"))
    if padding:
        declarations.append(f"padding: {padding}")

    text_align = style.get("textAlign")
    if text_align in TEXT_ALIGNMENTS:
        declarations.append(f"text-align: {text_align}")

    return f' style="{"; ".join(declarations)}"' if declarations else ""


def render_blocks(
    blocks: Sequence[BlockInstance],
    registry: BlockRegistry,
    tokens: EffectiveTokens | None = None,
) -> str:
    """Render an ordered block sequence.

    Each block is wrapped in a container carrying its ID and style props;
    the effective tokens become CSS variables on the outer container.

    Args:
        blocks: Blocks in page order.
        registry: Block registry.
        tokens: Effective theme tokens, if any.

    Returns:
        HTML fragment.
    """
    declarations = tokens.css_declarations() if tokens else ""
    style_attr = f' style="{escape_html(declarations)}"' if declarations else ""

    if not blocks:
        return (
            f'<div class="cms-page"{style_attr}>'
            f'<p class="cms-page__empty">{EMPTY_PLACEHOLDER}</p>'
            "</div>"
        )

    parts = []
    for instance in blocks:
        rendered = render_block(instance, registry)
        parts.append(
            f'<div class="cms-block" data-block-id="{escape_html(rendered.block_id)}" '
            f'data-block-type="{escape_html(rendered.block_type)}"{_style_attribute(instance)}>'
            f"{rendered.html}</div>"
        )

    return f'<div class="cms-page"{style_attr}>\n' + "\n".join(parts) + "\n</div>"


def render_preview_document(
    page: Page,
    registry: BlockRegistry,
    base_theme: Theme | None = None,
) -> str:
    """Render a page to a complete HTML document for preview.

    Args:
        page: Page to render.
        registry: Block registry.
        base_theme: Base theme under the page overrides (default theme if None).

    Returns:
        Complete HTML document string.
    """
    tokens = resolve(base_theme or DEFAULT_THEME, page.theme_overrides)
    body = render_blocks(page.blocks, registry, tokens)

    meta_title = escape_html(page.meta.title or page.title)
    meta_description = escape_html(page.meta.description or "")
    og_image_url = escape_html(page.meta.og_image_url or "")
    locale = escape_html(page.locale)

    robots_html = ""
    if page.meta.no_index or not page.is_published:
        robots_html = '\n    <meta name="robots" content="noindex, nofollow">'
    og_image_html = ""
    if og_image_url:
        og_image_html = f'\n    <meta property="og:image" content="{og_image_url}">'

    return f'''<!DOCTYPE html>
<html lang="{locale}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{meta_title}</title>
    <meta name="description" content="{meta_description}">
    <meta property="og:title" content="{meta_title}">
    <meta property="og:description" content="{meta_description}">
    <meta property="og:type" content="website">{og_image_html}{robots_html}
    <style>
        body {{ margin: 0; background: var(--cms-color-background, #ffffff); color: var(--cms-color-foreground, #0f172a); }}
        .cms-page {{ font-family: var(--cms-font-body, sans-serif); }}
        .cms-block-fallback {{ padding: 1rem; border: 1px dashed #f97316; color: #9a3412; }}
    </style>
</head>
<body class="template-{escape_html(page.template)}">
{body}
</body>
</html>'''
