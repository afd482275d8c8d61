"""CTA block - call-to-action strip with buttons."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import as_list, escape_html, render_links

SCHEMA = {
    "type": "object",
    "properties": {
        "label": {"type": "string"},
        "description": {"type": "string"},
        "align": {"type": "string", "enum": ["left", "center"]},
        "actions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "href": {"type": "string"},
                    "variant": {"type": "string", "enum": ["default", "outline"]},
                },
                "required": ["label", "href"],
            },
        },
    },
    "required": ["label"],
}

DEFAULT_PROPS = {
    "label": "Ready to launch?",
    "description": "Bring personalized shopping to your customers today.",
    "actions": [
        {"label": "Book a demo", "href": "/demo"},
        {"label": "Talk to sales", "href": "/contact", "variant": "outline"},
    ],
    "align": "center",
}


def render_cta(props: dict) -> str:
    """Render CTA block."""
    label = escape_html(props.get("label", ""))
    description = escape_html(props.get("description", ""))
    align = "left" if props.get("align") == "left" else "center"

    description_html = f'<p class="cta__description">{description}</p>' if description else ""
    actions = render_links(as_list(props.get("actions")), "cta__action")
    actions_html = f'<div class="cta__actions">{actions}</div>' if actions else ""

    return f'''
    <section class="cta cta--{align}" style="text-align: {align};">
        <h3 class="cta__label" style="font-family: var(--cms-font-heading);">{label}</h3>
        {description_html}
        {actions_html}
    </section>'''


CTA_BLOCK = BlockDefinition.build(
    type="cta",
    display_name="CTA Strip",
    category=BlockCategory.CTA,
    description="Call-to-action section with buttons.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_cta,
)
