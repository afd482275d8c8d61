"""Image block - single responsive image with optional caption."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import escape_html, sanitize_url

SCHEMA = {
    "type": "object",
    "properties": {
        "url": {"type": "string"},
        "alt": {"type": "string"},
        "caption": {"type": "string"},
        "rounded": {"type": "boolean"},
    },
    "required": ["url"],
}

DEFAULT_PROPS = {
    "url": "https://images.unsplash.com/photo-1523275335684-37898b6baf30",
    "alt": "Product image",
    "rounded": True,
}


def render_image(props: dict) -> str:
    """Render image block."""
    url = sanitize_url(props.get("url"))
    if url == "#":
        return '<!-- Image block with no URL -->'

    alt = escape_html(props.get("alt", ""))
    caption = escape_html(props.get("caption", ""))
    rounded_class = " image-block__img--rounded" if props.get("rounded", True) else ""
    caption_html = f'<figcaption class="image-block__caption">{caption}</figcaption>' if caption else ""

    return f'''
    <figure class="image-block">
        <img src="{url}" alt="{alt}" class="image-block__img{rounded_class}" loading="lazy">
        {caption_html}
    </figure>'''


IMAGE_BLOCK = BlockDefinition.build(
    type="image",
    display_name="Image",
    category=BlockCategory.MEDIA,
    description="Single responsive image with optional caption.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_image,
)
