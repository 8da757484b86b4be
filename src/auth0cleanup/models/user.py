"""User data models for Auth0 account cleanup."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UserIdentity:
    """One identity link of an Auth0 user."""

    provider: str = ""
    connection: str = ""
    user_id: str = ""


@dataclass(frozen=True)
class Account:
    """An Auth0 user as returned by the user search endpoint.

    Timestamps are kept as the raw strings Auth0 returns; they are written
    to the ledger verbatim.
    """

    user_id: str
    email: str | None = None
    name: str | None = None
    nickname: str | None = None
    username: str | None = None
    identities: tuple[UserIdentity, ...] = ()
    created_at: str | None = None
    last_login: str | None = None
    logins_count: Any = None

    @classmethod
    def from_auth0_data(cls, data: dict[str, Any]) -> "Account":
        """Create an Account from Auth0 API response data.

        Args:
            data: Auth0 user data from API response

        Returns:
            Account: Account instance with parsed data
        """
        identities = tuple(
            UserIdentity(
                provider=identity.get("provider") or "",
                connection=identity.get("connection") or "",
                user_id=str(identity.get("user_id") or ""),
            )
            for identity in data.get("identities") or []
            if isinstance(identity, dict)
        )

        return cls(
            user_id=data.get("user_id") or "",
            email=data.get("email"),
            name=data.get("name"),
            nickname=data.get("nickname"),
            username=data.get("username"),
            identities=identities,
            created_at=data.get("created_at"),
            last_login=data.get("last_login"),
            logins_count=data.get("logins_count"),
        )

    @property
    def display_name(self) -> str:
        """First non-empty of name, nickname and username."""
        return self.name or self.nickname or self.username or ""

    @property
    def providers(self) -> list[str]:
        return [identity.provider for identity in self.identities]

    @property
    def connections(self) -> list[str]:
        return [identity.connection for identity in self.identities]


@dataclass
class DeletionResult:
    """Outcome of one delete attempt."""

    user_id: str
    deleted: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"user_id": self.user_id, "deleted": self.deleted}
        if self.error is not None:
            result["error"] = self.error
        return result

    def __str__(self) -> str:
        """String representation of the deletion result."""
        if self.deleted:
            return f"delete {self.user_id}: SUCCESS"
        return f"delete {self.user_id}: FAILED - {self.error}"


@dataclass
class CleanupResponse:
    """Status code and JSON body returned for one invocation."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
