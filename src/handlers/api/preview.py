"""Page preview API handler."""

from typing import Any

import structlog

from pagecraft.blocks.registry import get_default_registry
from pagecraft.blocks.renderer import render_preview_document
from pagecraft.services.page_service import get_page_service
from pagecraft.utils.exceptions import PagecraftError
from pagecraft.utils.responses import error, forbidden, from_exception, html, not_found, success

logger = structlog.get_logger()

PREVIEW_UNAVAILABLE = "Preview unavailable"


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle page preview API requests.

    Routes:
        POST /pages/{page_id}/preview-token  - Issue a preview token
        GET  /preview/{slug}?token={token}  - Render a page preview
    """
    try:
        http_method = event.get("httpMethod", "").upper()
        path = event.get("path", "")
        path_params = event.get("pathParameters", {}) or {}
        query_params = event.get("queryStringParameters", {}) or {}

        page_id = path_params.get("page_id")
        slug = path_params.get("slug")

        if path.endswith("/preview-token") and http_method == "POST":
            return issue_preview_token(page_id)
        elif path.startswith("/preview/") and http_method == "GET":
            return render_preview(slug, query_params.get("token"))
        else:
            return error("Not found", 404)

    except PagecraftError as e:
        return from_exception(e)
    except Exception as e:
        logger.exception("Preview handler error", error=str(e))
        return error("Internal server error", 500)


def issue_preview_token(page_id: str | None) -> dict:
    """Issue a preview token for a page."""
    if not page_id:
        return error("Page ID is required", 400)

    service = get_page_service()
    token = service.issue_preview_token(page_id)

    return success({
        "token": token,
        "expires_in": service.preview_tokens.ttl_seconds,
    })


def render_preview(slug: str | None, token: str | None) -> dict:
    """Render a page preview as an HTML document.

    The token must be valid and issued for the page with this slug.
    """
    if not slug:
        return error("Slug is required", 400)

    service = get_page_service()
    page_id = service.verify_preview_token(token)
    if page_id is None:
        return forbidden(PREVIEW_UNAVAILABLE)

    page = service.get_page_by_slug(slug, include_draft=True)
    if page is None:
        return not_found("Page", slug)
    if page.id != page_id:
        logger.warning("Preview token issued for another page", slug=slug, page_id=page_id)
        return forbidden(PREVIEW_UNAVAILABLE)

    document = render_preview_document(page, get_default_registry())
    logger.info("Preview rendered", page_id=page.id, slug=slug)
    return html(document)
