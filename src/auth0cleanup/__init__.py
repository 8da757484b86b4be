"""Auth0 SSOID cleanup - delete Auth0 users by SSOID and log them to S3."""

from .core.exceptions import (
    APIError,
    Auth0CleanupError,
    AuthConfigError,
    ClientGrantMissingError,
    ConfigurationError,
    LedgerWriteError,
    TokenTimeoutError,
    UserOperationError,
)
from .models.config import EXPECTED_KEYS, Settings
from .models.user import Account, CleanupResponse, DeletionResult, UserIdentity

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    "Auth0CleanupError",
    "ConfigurationError",
    "AuthConfigError",
    "ClientGrantMissingError",
    "TokenTimeoutError",
    "APIError",
    "UserOperationError",
    "LedgerWriteError",
    # Models
    "EXPECTED_KEYS",
    "Settings",
    "Account",
    "UserIdentity",
    "DeletionResult",
    "CleanupResponse",
]
