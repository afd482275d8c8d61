"""Rich text block - formatted paragraphs and headings."""

import re

from pagecraft.blocks.base import BlockCategory, BlockDefinition

SCHEMA = {
    "type": "object",
    "properties": {
        "content": {"type": "string"},
    },
    "required": ["content"],
}

DEFAULT_PROPS = {
    "content": (
        "<h2>Tell your story</h2>"
        "<p>Add paragraphs, lists, and inline images to describe the section.</p>"
    ),
}

# Tags and attributes that can carry script execution
_UNSAFE_TAGS = re.compile(r"<\s*(script|style|iframe|object|embed)\b[^>]*>.*?<\s*/\s*\1\s*>", re.I | re.S)
_UNSAFE_SINGLE_TAGS = re.compile(r"<\s*(script|style|iframe|object|embed)\b[^>]*/?>", re.I)
_EVENT_ATTRS = re.compile(r"\s+on[a-z]+\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s>]+)", re.I)
_JS_URLS = re.compile(r"(href|src)\s*=\s*([\"']?)\s*javascript:[^\"'\s>]*\2", re.I)


def sanitize_rich_text(content: str) -> str:
    """Strip script-bearing tags, inline event handlers and javascript: URLs."""
    content = _UNSAFE_TAGS.sub("", content)
    content = _UNSAFE_SINGLE_TAGS.sub("", content)
    content = _EVENT_ATTRS.sub("", content)
    return _JS_URLS.sub(r'\1="#"', content)


def render_rich_text(props: dict) -> str:
    """Render rich text block."""
    content = props.get("content", "")
    if not isinstance(content, str):
        content = str(content)

    return f'''
    <section class="rich-text prose" style="font-family: var(--cms-font-body);">
        {sanitize_rich_text(content)}
    </section>'''


RICH_TEXT_BLOCK = BlockDefinition.build(
    type="richText",
    display_name="Rich Text",
    category=BlockCategory.CONTENT,
    description="Formatted paragraphs, headings, and inline media.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_rich_text,
)
