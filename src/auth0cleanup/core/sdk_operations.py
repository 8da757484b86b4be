"""Core SDK operations wrapper for Auth0 API calls.

This module provides a clean interface between the SDK and the cleanup
logic, handling error translation and parsing responses into models.
"""

from typing import Any

from auth0.management import Auth0

from ..models.user import Account
from ..utils.logging_utils import get_logger
from ..utils.url_utils import encode_user_id
from .config import SEARCH_PAGE_SIZE
from .exceptions import UserOperationError, wrap_sdk_exception

# Module logger
logger = get_logger(__name__)


def identity_query(ssoid: str) -> str:
    """Lucene query matching an identity link with this user id."""
    return f'identities.user_id:"{ssoid}"'


def app_metadata_query(ssoid: str) -> str:
    """Lucene query matching app_metadata.ssoid."""
    return f'app_metadata.ssoid:"{ssoid}"'


class SDKUserOperations:
    """Wrapper for SDK user operations with error handling."""

    def __init__(self, client: Auth0) -> None:
        """Initialize with an Auth0 management client.

        Args:
            client: Initialized Auth0 management client
        """
        self.client = client

    def search_users(
        self, query: str, per_page: int = SEARCH_PAGE_SIZE
    ) -> list[Account]:
        """Search users using Lucene query syntax.

        Never raises: no match, an unparsable response and transport errors
        all yield an empty list, so callers can fall back to another query.

        Args:
            query: Lucene query string
            per_page: Results per page (only the first page is read)

        Returns:
            List of matching accounts
        """
        try:
            response = self.client.users.list(
                q=query,
                search_engine="v3",
                per_page=per_page,
                include_totals=False,
            )
        except Exception as e:
            wrapped = wrap_sdk_exception(e, f"search_users:{query}")
            logger.error(
                f"Error during user search for query={query}: {wrapped}",
                extra={"query": query, "error": str(wrapped)},
            )
            return []

        users = self._extract_users(response)
        if users is None:
            logger.error(
                f"User search response not understood: {response!r}",
                extra={"query": query},
            )
            return []

        accounts = [
            Account.from_auth0_data(user) for user in users if isinstance(user, dict)
        ]
        if not accounts:
            logger.info(f"Cannot find user with query: {query}", extra={"query": query})
        return accounts

    @staticmethod
    def _extract_users(response: Any) -> list[Any] | None:
        # SDK may return dict with 'users' key or list directly
        if isinstance(response, list):
            return response
        if isinstance(response, dict) and isinstance(response.get("users"), list):
            return response["users"]
        return None

    def delete_user(self, user_id: str) -> None:
        """Delete a user.

        Args:
            user_id: Auth0 user ID

        Raises:
            UserOperationError: If deletion fails
        """
        try:
            self.client.users.delete(encode_user_id(user_id))
        except Exception as e:
            wrapped = wrap_sdk_exception(e, f"delete_user:{user_id}")
            raise UserOperationError(
                message=f"Delete failed: {wrapped}",
                user_id=user_id,
                operation="delete",
            ) from e
        logger.info(
            f"Deleted Auth0 user_id={user_id}",
            extra={"user_id": user_id, "operation": "delete_user"},
        )

    def find_users_by_ssoid(self, ssoid: str) -> list[Account]:
        """Find accounts for an SSOID.

        Tries an identity-link match first and falls back to the
        app_metadata field; the first non-empty result wins.
        """
        for query in (identity_query(ssoid), app_metadata_query(ssoid)):
            accounts = self.search_users(query)
            if accounts:
                return accounts
        return []
