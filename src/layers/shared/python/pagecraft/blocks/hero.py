"""Hero block - large banner with background media and CTAs."""

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import as_dict, as_list, escape_html, render_links, sanitize_url

SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "subtitle": {"type": "string"},
        "alignment": {"type": "string", "enum": ["left", "center"]},
        "overlay": {"type": "boolean"},
        "media": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["image", "video"]},
                "url": {"type": "string"},
            },
        },
        "ctas": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "href": {"type": "string"},
                    "variant": {"type": "string", "enum": ["default", "outline"]},
                },
            },
        },
    },
    "required": ["title"],
}

DEFAULT_PROPS = {
    "title": "Enter your headline",
    "subtitle": "Add supporting copy that describes the hero.",
    "ctas": [
        {"label": "Primary CTA", "href": "#", "variant": "default"},
        {"label": "Secondary", "href": "#", "variant": "outline"},
    ],
    "alignment": "left",
    "overlay": True,
}


def render_hero(props: dict) -> str:
    """Render hero block."""
    title = escape_html(props.get("title", ""))
    subtitle = escape_html(props.get("subtitle", ""))
    alignment = "center" if props.get("alignment") == "center" else "left"
    media = as_dict(props.get("media"))

    media_html = ""
    if media.get("type") == "image" and media.get("url"):
        overlay_html = '<div class="hero__overlay"></div>' if props.get("overlay") else ""
        media_html = f'''
        <div class="hero__media">
            <img src="{sanitize_url(media["url"])}" alt="{subtitle or title}" class="hero__image">
            {overlay_html}
        </div>'''
    elif media.get("type") == "video" and media.get("url"):
        media_html = f'''
        <div class="hero__media">
            <video src="{sanitize_url(media["url"])}" class="hero__video" autoplay muted loop playsinline></video>
        </div>'''

    subtitle_html = f'<p class="hero__subtitle">{subtitle}</p>' if subtitle else ""
    ctas = render_links(as_list(props.get("ctas")), "hero__cta")
    ctas_html = f'<div class="hero__cta-group">{ctas}</div>' if ctas else ""

    return f'''
    <section class="hero hero--{alignment}" style="text-align: {alignment};">
        {media_html}
        <div class="hero__content">
            <p class="hero__eyebrow" style="color: var(--cms-color-primary);">Featured</p>
            <h1 class="hero__title" style="font-family: var(--cms-font-heading);">{title}</h1>
            {subtitle_html}
            {ctas_html}
        </div>
    </section>'''


HERO_BLOCK = BlockDefinition.build(
    type="hero",
    display_name="Hero",
    category=BlockCategory.HERO,
    description="Large hero section with background media and CTAs.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_hero,
)
