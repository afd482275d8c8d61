"""Video block - YouTube/Vimeo embed or hosted video file."""

import re

from pagecraft.blocks.base import BlockCategory, BlockDefinition
from pagecraft.blocks.html import escape_html, sanitize_url

SCHEMA = {
    "type": "object",
    "properties": {
        "url": {"type": "string"},
        "poster": {"type": "string"},
        "caption": {"type": "string"},
    },
    "required": ["url"],
}

DEFAULT_PROPS = {
    "url": "https://www.youtube.com/embed/dQw4w9WgXcQ",
}

_YOUTUBE_URL = re.compile(r"(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([a-zA-Z0-9_-]{11})")
_VIMEO_URL = re.compile(r"vimeo\.com/(?:video/)?(\d+)")
_VIDEO_FILE = re.compile(r"\.(mp4|webm|ogg)(\?.*)?$", re.I)


def get_embed_url(url: str) -> str | None:
    """Map a YouTube or Vimeo URL to its embeddable player URL.

    Args:
        url: Watch, short or embed URL.

    Returns:
        Player URL, or None for other hosts.
    """
    youtube_match = _YOUTUBE_URL.search(url)
    if youtube_match:
        return f"https://www.youtube.com/embed/{youtube_match.group(1)}"
    vimeo_match = _VIMEO_URL.search(url)
    if vimeo_match:
        return f"https://player.vimeo.com/video/{vimeo_match.group(1)}"
    return None


def render_video(props: dict) -> str:
    """Render video block."""
    url = props.get("url", "")
    if not url or not isinstance(url, str):
        return '<!-- Video block with no URL -->'

    caption = escape_html(props.get("caption", ""))
    caption_html = f'<figcaption class="video-block__caption">{caption}</figcaption>' if caption else ""

    embed_url = get_embed_url(url)
    if embed_url:
        player_html = (
            f'<iframe src="{embed_url}" title="{caption or "Video"}" class="video-block__frame" '
            'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
            'allowfullscreen></iframe>'
        )
    elif _VIDEO_FILE.search(url):
        poster = props.get("poster")
        poster_attr = f' poster="{sanitize_url(poster)}"' if poster else ""
        player_html = f'<video src="{sanitize_url(url)}"{poster_attr} class="video-block__player" controls></video>'
    else:
        return '<!-- Video block with unsupported URL -->'

    return f'''
    <figure class="video-block">
        <div class="video-block__frame-wrapper">
            {player_html}
        </div>
        {caption_html}
    </figure>'''


VIDEO_BLOCK = BlockDefinition.build(
    type="video",
    display_name="Video Embed",
    category=BlockCategory.MEDIA,
    description="Embedded YouTube, Vimeo or hosted video.",
    schema=SCHEMA,
    default_props=DEFAULT_PROPS,
    render=render_video,
)
