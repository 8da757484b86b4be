"""Data models for Auth0 SSOID cleanup."""

from .config import DEFAULT_S3_KEY, EXPECTED_KEYS, Settings
from .user import Account, CleanupResponse, DeletionResult, UserIdentity

__all__ = [
    "DEFAULT_S3_KEY",
    "EXPECTED_KEYS",
    "Settings",
    "Account",
    "UserIdentity",
    "DeletionResult",
    "CleanupResponse",
]
