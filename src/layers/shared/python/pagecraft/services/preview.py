"""Short-lived signed tokens granting preview access to unpublished pages."""

from datetime import datetime, timedelta

import jwt
import structlog

from pagecraft.config import get_preview_token_secret, get_preview_token_ttl
from pagecraft.models.base import utc_now

logger = structlog.get_logger()

ALGORITHM = "HS256"


class PreviewTokenService:
    """Issue and verify HS256 preview tokens carrying ``{page_id, exp}``."""

    def __init__(self, secret: str | None = None, ttl_seconds: int | None = None):
        """Initialize the service.

        Args:
            secret: Signing secret (PREVIEW_TOKEN_SECRET if None).
            ttl_seconds: Token lifetime (PREVIEW_TOKEN_TTL_SECONDS if None).
        """
        self.secret = secret or get_preview_token_secret()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_preview_token_ttl()
        self.logger = logger.bind(service="preview_tokens")

    def issue(self, page_id: str, now: datetime | None = None) -> str:
        """Issue a preview token for a page.

        Args:
            page_id: Page the token grants access to.
            now: Issue time (defaults to now).

        Returns:
            Encoded token.
        """
        now = now or utc_now()
        payload = {
            "page_id": page_id,
            "iat": now,
            "exp": now + timedelta(seconds=self.ttl_seconds),
        }
        token = jwt.encode(payload, self.secret, algorithm=ALGORITHM)
        self.logger.debug("Preview token issued", page_id=page_id, expires_in=self.ttl_seconds)
        return token

    def verify(self, token: str | None) -> str | None:
        """Verify a preview token.

        Fails closed: malformed, tampered or expired tokens return None.

        Args:
            token: Encoded token.

        Returns:
            The page ID the token grants, or None.
        """
        if not token or not isinstance(token, str):
            return None

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "page_id"]},
            )
        except jwt.ExpiredSignatureError:
            self.logger.warning("Preview token has expired")
            return None
        except jwt.InvalidTokenError as e:
            self.logger.warning("Invalid preview token", error=str(e))
            return None

        page_id = claims.get("page_id")
        if not isinstance(page_id, str) or not page_id:
            self.logger.warning("Preview token without page ID")
            return None
        return page_id
