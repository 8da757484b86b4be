"""Custom exception hierarchy for the Auth0 SSOID cleanup function."""


class Auth0CleanupError(Exception):
    """Base exception for the cleanup function.

    All other custom exceptions inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(Auth0CleanupError):
    """A required setting is missing.

    Raised lazily, at the point where the setting is first needed.
    """

    def __init__(self, key: str, details: str | None = None):
        self.key = key
        super().__init__(f"Missing {key}", details)


class AuthConfigError(Auth0CleanupError):
    """Authentication errors.

    Raised when the client-credentials exchange with Auth0 fails, such as
    rejected credentials, a malformed token response or connection failures.
    """


class ClientGrantMissingError(AuthConfigError):
    """The M2M application has no client grant for the Management API."""

    def __init__(self, body: str):
        self.body = body
        super().__init__(
            "Access denied to Management API: create a client grant for your "
            "M2M app with scopes like read:users, delete:users",
            f"Raw: {body}",
        )


class TokenTimeoutError(AuthConfigError):
    """The token endpoint did not answer within the timeout."""


class APIError(Auth0CleanupError):
    """Auth0 API-specific errors.

    Raised when Auth0 API calls fail due to invalid requests
    or server errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ):
        """Initialize the API error.

        Args:
            message: The main error message
            status_code: The HTTP status code from the API response
            endpoint: The API endpoint that failed
            details: Optional additional details about the error
        """
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with API context."""
        parts = [self.message]

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class UserOperationError(Auth0CleanupError):
    """User operation errors.

    Raised when an Auth0 user operation, such as deletion, fails.
    """

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        """Initialize the user operation error.

        Args:
            message: The main error message
            user_id: The Auth0 user ID that caused the error
            operation: The operation that failed
            details: Optional additional details about the error
        """
        self.user_id = user_id
        self.operation = operation
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with user context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.user_id:
            parts.append(f"User ID: {self.user_id}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


class LedgerWriteError(Auth0CleanupError):
    """Reading or writing the deletion ledger in S3 failed."""

    def __init__(
        self,
        message: str,
        bucket: str | None = None,
        key: str | None = None,
        details: str | None = None,
    ):
        self.bucket = bucket
        self.key = key
        super().__init__(message, details)

    def _format_message(self) -> str:
        parts = [self.message]

        if self.bucket and self.key:
            parts.append(f"Object: s3://{self.bucket}/{self.key}")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


def wrap_sdk_exception(
    exc: Exception, operation: str | None = None
) -> Auth0CleanupError:
    """Wrap Auth0 SDK exceptions into the cleanup exception hierarchy.

    Args:
        exc: The original exception from the Auth0 SDK
        operation: Optional operation context

    Returns:
        Auth0CleanupError: Wrapped exception
    """
    from auth0.exceptions import Auth0Error

    if isinstance(exc, Auth0Error):
        status_code = getattr(exc, "status_code", None)
        error_code = getattr(exc, "error_code", None)
        body = f"{error_code}: {exc.message}" if error_code else exc.message

        if status_code in (401, 403):
            return AuthConfigError(
                message=f"Authentication failed: {body}",
                details=f"Status: {status_code}",
            )

        return APIError(
            message=body,
            status_code=status_code,
            details=f"Operation: {operation}" if operation else None,
        )

    return Auth0CleanupError(
        message=f"Unexpected error: {str(exc)}",
        details=f"Operation: {operation}, Type: {type(exc).__name__}"
        if operation
        else f"Type: {type(exc).__name__}",
    )
