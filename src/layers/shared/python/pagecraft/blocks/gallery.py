"""Gallery block - responsive image grid."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import as_list, escape_html, sanitize_url

SCHEMA = {
    "type": "object",
    "properties": {
        "columns": {"type": "number"},
        "images": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "url": {"type": "string"},
                    "alt": {"type": "string"},
                },
                "required": ["url"],
            },
        },
    },
    "required": ["images"],
}

DEFAULT_PROPS = {
    "columns": 3,
    "images": [
        {"url": "https://images.unsplash.com/photo-1489515217757-5fd1be406fef"},
        {"url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab"},
        {"url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e"},
    ],
}


def render_gallery(props: dict) -> str:
    """Render gallery block."""
    images = [img for img in as_list(props.get("images")) if isinstance(img, dict) and img.get("url")]
    if not images:
        return '<!-- Gallery block with no images -->'

    columns = props.get("columns", 3)
    grid_class = {2: "gallery--cols-2", 3: "gallery--cols-3", 4: "gallery--cols-4"}.get(columns, "gallery--cols-3")

    items_html = ""
    for index, image in enumerate(images, start=1):
        alt = escape_html(image.get("alt") or f"Gallery image {index}")
        items_html += f'''
        <img src="{sanitize_url(image["url"])}" alt="{alt}" class="gallery__image" loading="lazy">'''

    return f'''
    <div class="gallery {grid_class}">{items_html}
    </div>'''


GALLERY_BLOCK = BlockDefinition.build(
    type="gallery",
    display_name="Gallery",
    category=BlockCategory.MEDIA,
    description="Responsive image gallery.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_gallery,
)
