"""Tests for page preview endpoints."""

import json

import pytest

from pagecraft.models.page import SavePageRequest
from pagecraft.services.page_service import get_page_service
from pagecraft.services.preview import PreviewTokenService


def _parse_body(response: dict) -> dict:
    return json.loads(response["body"])


@pytest.fixture
def stored_page(dynamodb_table, sample_blocks):
    """A draft page saved to the mocked table."""
    return get_page_service().save_page(
        SavePageRequest(
            title="Summer Sale",
            slug="summer-sale",
            blocks=sample_blocks,
            theme_overrides={"color-primary": "#ff0000"},
        )
    )


class TestIssuePreviewToken:
    """Tests for POST /pages/{page_id}/preview-token."""

    def test_issue_token(self, stored_page, api_gateway_event):
        """Test a token is issued for an existing page."""
        from api.preview import handler

        event = api_gateway_event(
            method="POST",
            path=f"/pages/{stored_page.id}/preview-token",
            path_params={"page_id": stored_page.id},
        )

        response = handler(event, None)

        assert response["statusCode"] == 200
        body = _parse_body(response)
        assert body["expires_in"] == 600
        assert get_page_service().verify_preview_token(body["token"]) == stored_page.id

    def test_cors_origin_from_config(self, stored_page, api_gateway_event, monkeypatch):
        """Test responses allow only the configured origin."""
        from api.preview import handler

        monkeypatch.setenv("CORS_ALLOWED_ORIGIN", "https://admin.example.com")
        event = api_gateway_event(
            method="POST",
            path=f"/pages/{stored_page.id}/preview-token",
            path_params={"page_id": stored_page.id},
        )
        event["headers"]["Origin"] = "http://localhost:5173"

        response = handler(event, None)

        assert response["headers"]["Access-Control-Allow-Origin"] == "https://admin.example.com"

    def test_issue_token_unknown_page(self, dynamodb_table, api_gateway_event):
        """Test unknown pages return 404."""
        from api.preview import handler

        event = api_gateway_event(
            method="POST",
            path="/pages/missing/preview-token",
            path_params={"page_id": "missing"},
        )

        response = handler(event, None)

        assert response["statusCode"] == 404
        assert _parse_body(response)["error_code"] == "NOT_FOUND"


class TestRenderPreview:
    """Tests for GET /preview/{slug}?token={token}."""

    def _event(self, api_gateway_event, slug, token):
        return api_gateway_event(
            method="GET",
            path=f"/preview/{slug}",
            path_params={"slug": slug},
            query_params={"token": token} if token is not None else None,
        )

    def test_valid_token(self, stored_page, api_gateway_event):
        """Test a valid token renders the draft page."""
        from api.preview import handler

        token = get_page_service().issue_preview_token(stored_page.id)

        response = handler(self._event(api_gateway_event, "summer-sale", token), None)

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"].startswith("text/html")
        assert response["headers"]["Cache-Control"] == "no-store"
        assert "Summer sale" in response["body"]
        assert "Fresh arrivals every week." in response["body"]
        assert "--cms-color-primary: #ff0000" in response["body"]
        assert 'name="robots" content="noindex' in response["body"]

    @pytest.mark.parametrize("token", [None, "", "not-a-token"])
    def test_invalid_token(self, stored_page, api_gateway_event, token):
        """Test missing or malformed tokens are refused."""
        from api.preview import handler

        response = handler(self._event(api_gateway_event, "summer-sale", token), None)

        assert response["statusCode"] == 403
        assert _parse_body(response)["message"] == "Preview unavailable"

    def test_forged_token(self, stored_page, api_gateway_event):
        """Test tokens signed with another secret are refused."""
        from api.preview import handler

        forged = PreviewTokenService(secret="someone-else").issue(stored_page.id)

        response = handler(self._event(api_gateway_event, "summer-sale", forged), None)

        assert response["statusCode"] == 403

    def test_token_for_other_page(self, stored_page, api_gateway_event):
        """Test a token only previews the page it was issued for."""
        from api.preview import handler

        service = get_page_service()
        other = service.save_page(SavePageRequest(title="Other", slug="other"))
        token = service.issue_preview_token(other.id)

        response = handler(self._event(api_gateway_event, "summer-sale", token), None)

        assert response["statusCode"] == 403
        assert _parse_body(response)["message"] == "Preview unavailable"

    def test_unknown_slug(self, stored_page, api_gateway_event):
        """Test unknown slugs return 404."""
        from api.preview import handler

        token = get_page_service().issue_preview_token(stored_page.id)

        response = handler(self._event(api_gateway_event, "no-such-page", token), None)

        assert response["statusCode"] == 404


class TestRouting:
    """Tests for unmatched routes."""

    def test_unknown_route(self, dynamodb_table, api_gateway_event):
        """Test unknown paths return 404."""
        from api.preview import handler

        response = handler(api_gateway_event(method="DELETE", path="/preview/summer-sale"), None)

        assert response["statusCode"] == 404
