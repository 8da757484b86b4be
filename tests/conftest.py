import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from auth0cleanup.models.config import Settings


def make_client_error(code: str, status: int, operation: str = "GetObject") -> ClientError:
    """Build a botocore ClientError like the ones S3 and SSM raise."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} error"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


def s3_body(text: str) -> dict:
    """A GetObject response whose Body streams ``text``."""
    return {"Body": io.BytesIO(text.encode("utf-8"))}


@pytest.fixture
def mock_ssm():
    """Create a mock SSM client with no parameters anywhere."""
    ssm = MagicMock()
    paginator = MagicMock()
    paginator.paginate = MagicMock(return_value=[{"Parameters": []}])
    ssm.get_paginator = MagicMock(return_value=paginator)
    ssm.get_parameters = MagicMock(
        return_value={"Parameters": [], "InvalidParameters": []}
    )
    return ssm


@pytest.fixture
def mock_s3():
    """Create a mock S3 client whose ledger object does not exist yet."""
    s3 = MagicMock()
    s3.get_object = MagicMock(side_effect=make_client_error("NoSuchKey", 404))
    s3.put_object = MagicMock(return_value={})
    return s3


@pytest.fixture
def mock_auth0_client():
    """Create a mock Auth0 management client."""
    client = MagicMock()
    client.users = MagicMock()
    client.users.list = MagicMock(return_value=[])
    client.users.delete = MagicMock()
    return client


@pytest.fixture
def auth0_user_data():
    """A user as returned by GET /api/v2/users."""
    return {
        "user_id": "oauth2|sso|abc123",
        "email": "jane@example.com",
        "name": "Jane Doe",
        "nickname": "jane",
        "identities": [
            {"provider": "oauth2", "connection": "corp-sso", "user_id": "sso|abc123"},
            {"provider": "auth0", "connection": "Username-Password", "user_id": "x1"},
        ],
        "created_at": "2024-01-02T03:04:05.000Z",
        "last_login": "2025-06-07T08:09:10.000Z",
        "logins_count": 7,
    }


@pytest.fixture
def full_settings():
    """Settings with every required key present."""
    return Settings(
        {
            "AUTH0_DOMAIN": "tenant.eu.auth0.com",
            "AUTH0_CLIENT_ID": "client-id-123",
            "AUTH0_CLIENT_SECRET": "client-secret-456",
            "S3_BUCKET": "audit-bucket",
        }
    )
