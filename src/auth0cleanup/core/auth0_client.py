"""Auth0 SDK client construction for Management API access."""

from auth0.management import Auth0
from auth0.rest import RestClientOptions

from ..utils.logging_utils import get_logger
from ..utils.url_utils import strip_protocol
from .config import API_TIMEOUT
from .exceptions import AuthConfigError

# Module logger
logger = get_logger(__name__)


def create_management_client(
    domain: str, token: str, timeout: float = API_TIMEOUT
) -> Auth0:
    """Create an Auth0 management client for one invocation.

    The client is not cached: tokens are fetched per invocation.

    Args:
        domain: Auth0 tenant domain (protocol optional)
        token: Management API access token
        timeout: Request timeout in seconds

    Returns:
        Auth0: Initialized management client

    Raises:
        AuthConfigError: If client initialization fails
    """
    try:
        client = Auth0(
            domain=strip_protocol(domain),
            token=token,
            rest_options=RestClientOptions(timeout=timeout, retries=0),
        )
    except Exception as e:
        logger.error(
            f"Failed to initialize Auth0 client: {e}",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise AuthConfigError(f"Failed to initialize Auth0 client: {e}") from e

    logger.debug(f"Initialized Auth0 management client for {strip_protocol(domain)}")
    return client
