"""Management API token acquisition via the client-credentials grant."""

import requests

from ..utils.logging_utils import get_logger
from ..utils.url_utils import get_base_url
from .config import TOKEN_TIMEOUT
from .exceptions import (
    AuthConfigError,
    ClientGrantMissingError,
    ConfigurationError,
    TokenTimeoutError,
)

# Module logger
logger = get_logger(__name__)


def _is_missing_client_grant(body: str) -> bool:
    return "access_denied" in body and "client-grant" in body


def get_management_token(
    domain: str,
    client_id: str,
    client_secret: str,
    audience: str,
    timeout: float = TOKEN_TIMEOUT,
) -> str:
    """Get a Management API access token using client credentials.

    Args:
        domain: Auth0 tenant domain (protocol optional)
        client_id: M2M application client ID
        client_secret: M2M application client secret
        audience: API audience, usually ``https://<domain>/api/v2/``
        timeout: Seconds to wait for the token endpoint

    Returns:
        str: Access token

    Raises:
        ConfigurationError: If an argument is empty
        TokenTimeoutError: If the token endpoint does not answer in time
        ClientGrantMissingError: If the app has no grant for the Management API
        AuthConfigError: For any other failed exchange
    """
    for key, value in (
        ("AUTH0_DOMAIN", domain),
        ("AUTH0_CLIENT_ID", client_id),
        ("AUTH0_CLIENT_SECRET", client_secret),
        ("AUTH0_AUDIENCE", audience),
    ):
        if not value:
            raise ConfigurationError(key)

    url = f"{get_base_url(domain)}/oauth/token"
    payload = {
        "grant_type": "client_credentials",
        "client_id": client_id,
        "client_secret": client_secret,
        "audience": audience,
    }

    try:
        response = requests.post(url, json=payload, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise TokenTimeoutError(
            f"Token request timed out after {timeout}s", details=url
        ) from e
    except requests.exceptions.RequestException as e:
        raise AuthConfigError(f"Token request failed: {e}") from e

    text = response.text
    if not response.ok:
        if _is_missing_client_grant(text):
            raise ClientGrantMissingError(text)
        raise AuthConfigError(
            f"Token HTTP {response.status_code} {response.reason}", details=text
        )

    try:
        data = response.json()
    except ValueError as e:
        raise AuthConfigError("Token response is not JSON", details=text) from e

    token = data.get("access_token") if isinstance(data, dict) else None
    if not token:
        raise AuthConfigError("Token response missing access_token")

    logger.info(
        "Successfully obtained management API token",
        extra={"operation": "token_request", "status": "success"},
    )
    return str(token)
