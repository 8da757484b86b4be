"""Core functionality: configuration, authentication and Auth0 SDK access."""

from .auth import get_management_token
from .exceptions import (
    APIError,
    Auth0CleanupError,
    AuthConfigError,
    ClientGrantMissingError,
    ConfigurationError,
    LedgerWriteError,
    TokenTimeoutError,
    UserOperationError,
    wrap_sdk_exception,
)

__all__ = [
    "get_management_token",
    "Auth0CleanupError",
    "ConfigurationError",
    "AuthConfigError",
    "ClientGrantMissingError",
    "TokenTimeoutError",
    "APIError",
    "UserOperationError",
    "LedgerWriteError",
    "wrap_sdk_exception",
]
