"""Product grid block - placeholder hydrated by the commerce catalogue."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import as_list, escape_html

SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "layout": {"type": "string", "enum": ["grid", "carousel"]},
        "limit": {"type": "number"},
        "productIds": {"type": "array", "items": {"type": "string"}},
    },
}

DEFAULT_PROPS = {
    "title": "Featured products",
    "layout": "grid",
    "limit": 4,
}

DEFAULT_LIMIT = 4


def render_product_grid(props: dict) -> str:
    """Render product grid block.

    Products come from the commerce catalogue at page load, so this emits
    the container and its query attributes only.
    """
    title = escape_html(props.get("title", ""))
    layout = "carousel" if props.get("layout") == "carousel" else "grid"

    limit = props.get("limit", DEFAULT_LIMIT)
    if isinstance(limit, bool) or not isinstance(limit, (int, float)) or limit < 1:
        limit = DEFAULT_LIMIT

    product_ids = ",".join(escape_html(pid) for pid in as_list(props.get("productIds")) if isinstance(pid, str))
    ids_attr = f' data-product-ids="{product_ids}"' if product_ids else ""
    title_html = f'<h2 class="product-grid__title" style="font-family: var(--cms-font-heading);">{title}</h2>' if title else ""

    return f'''
    <section class="product-grid product-grid--{layout}" data-limit="{int(limit)}"{ids_attr}>
        {title_html}
        <div class="product-grid__items" aria-live="polite"></div>
    </section>'''


PRODUCT_GRID_BLOCK = BlockDefinition.build(
    type="productGrid",
    display_name="Product Grid",
    category=BlockCategory.COMMERCE,
    description="Grid or carousel of catalogue products.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_product_grid,
)
