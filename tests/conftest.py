"""Pytest configuration and fixtures."""

import os

import pytest

# Set environment variables before imports
os.environ["TABLE_NAME"] = "pagecraft-test"
os.environ["STAGE"] = "test"
os.environ["PREVIEW_TOKEN_SECRET"] = "test-preview-secret"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def dynamodb_table(aws_credentials):
    """Create mocked DynamoDB table."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName="pagecraft-test",
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
                {"AttributeName": "GSI1PK", "AttributeType": "S"},
                {"AttributeName": "GSI1SK", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": "GSI1",
                    "KeySchema": [
                        {"AttributeName": "GSI1PK", "KeyType": "HASH"},
                        {"AttributeName": "GSI1SK", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()

        yield table


@pytest.fixture(autouse=True)
def reset_page_service():
    """Drop the cached global PageService so each test gets fresh clients."""
    from pagecraft.services import page_service

    page_service._page_service = None
    yield
    page_service._page_service = None


@pytest.fixture
def registry():
    """Registry of the built-in blocks."""
    from pagecraft.blocks.registry import get_default_registry

    return get_default_registry()


@pytest.fixture
def sample_blocks():
    """A short block sequence with fixed IDs."""
    from pagecraft.models.block import BlockInstance

    return [
        BlockInstance(
            id="block-hero",
            type="hero",
            props={"title": "Summer sale", "subtitle": "Up to 40% off", "alignment": "center"},
        ),
        BlockInstance(
            id="block-text",
            type="richText",
            props={"content": "<p>Fresh arrivals every week.</p>"},
        ),
        BlockInstance(
            id="block-cta",
            type="cta",
            props={"label": "Shop now", "actions": [{"label": "Browse", "href": "/shop"}]},
        ),
    ]


@pytest.fixture
def sample_page(sample_blocks):
    """Create a sample draft page."""
    from pagecraft.models.page import Page, PageStatus

    return Page(
        id="test-page-123",
        title="Summer Sale",
        slug="summer-sale",
        status=PageStatus.DRAFT,
        blocks=sample_blocks,
        theme_overrides={"color-primary": "#ff0000"},
    )


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


@pytest.fixture
def fake_timers():
    """Timer factory recording every timer it builds."""
    timers: list[FakeTimer] = []

    def factory(delay, callback):
        timer = FakeTimer(delay, callback)
        timers.append(timer)
        return timer

    factory.timers = timers
    return factory


@pytest.fixture
def api_gateway_event():
    """Create a sample API Gateway event."""
    def _create_event(
        method: str = "GET",
        path: str = "/",
        path_params: dict = None,
        query_params: dict = None,
        body: dict = None,
    ):
        return {
            "httpMethod": method,
            "path": path,
            "pathParameters": path_params or {},
            "queryStringParameters": query_params or {},
            "body": body if isinstance(body, str) else (
                __import__("json").dumps(body) if body else None
            ),
            "headers": {
                "Content-Type": "application/json",
            },
            "requestContext": {},
        }

    return _create_event
