"""Environment-driven configuration.

Values are read on each call so tests and Lambda cold starts pick up the
current environment.
"""

import os

DEFAULT_TABLE_NAME = "pagecraft-dev"
DEFAULT_PREVIEW_TOKEN_TTL_SECONDS = 600  # 10 minutes
DEFAULT_AUTOSAVE_DELAY_SECONDS = 0.6
DEFAULT_CORS_ALLOWED_ORIGIN = "http://localhost:3000"


def get_stage() -> str:
    """Get the deployment stage (dev, staging, prod)."""
    return os.environ.get("STAGE", "dev")


def get_table_name() -> str:
    """Get the DynamoDB table name."""
    return os.environ.get("TABLE_NAME", DEFAULT_TABLE_NAME)


def get_preview_token_secret() -> str:
    """Get the secret used to sign preview tokens.

    Falls back to a stage-scoped development secret outside prod.

    Raises:
        RuntimeError: If no secret is configured in prod.
    """
    secret = os.environ.get("PREVIEW_TOKEN_SECRET")
    if secret:
        return secret
    stage = get_stage()
    if stage == "prod":
        raise RuntimeError("PREVIEW_TOKEN_SECRET must be set in prod")
    return f"pagecraft-{stage}-preview-secret"


def get_preview_token_ttl() -> int:
    """Get the preview token lifetime in seconds."""
    return int(os.environ.get("PREVIEW_TOKEN_TTL_SECONDS", DEFAULT_PREVIEW_TOKEN_TTL_SECONDS))


def get_autosave_delay() -> float:
    """Get the autosave debounce delay in seconds."""
    return float(os.environ.get("PAGECRAFT_AUTOSAVE_DELAY", DEFAULT_AUTOSAVE_DELAY_SECONDS))


def get_history_limit() -> int | None:
    """Get the maximum number of undo snapshots kept per session.

    Returns:
        The limit, or None for an unbounded history.
    """
    raw = os.environ.get("PAGECRAFT_HISTORY_LIMIT")
    if not raw:
        return None
    limit = int(raw)
    return limit if limit > 0 else None


def get_cors_allowed_origin() -> str:
    """Get the origin allowed to call the API from a browser."""
    return os.environ.get("CORS_ALLOWED_ORIGIN", DEFAULT_CORS_ALLOWED_ORIGIN)
