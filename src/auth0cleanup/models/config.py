"""Configuration data models for the Auth0 SSOID cleanup function."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..core.exceptions import ConfigurationError
from ..utils.url_utils import get_default_audience, strip_protocol

# Keys recognised in the environment and in SSM Parameter Store
EXPECTED_KEYS: tuple[str, ...] = (
    "S3_BUCKET",
    "S3_KEY",  # optional; DEFAULT_S3_KEY applied at point of use
    "AUTH0_DOMAIN",
    "AUTH0_AUDIENCE",  # optional; derived from the domain
    "AUTH0_CLIENT_ID",
    "AUTH0_CLIENT_SECRET",
    "SSOID",  # optional; the event usually carries it
)

DEFAULT_S3_KEY = "output/deleted_users.csv"


@dataclass
class Settings:
    """Process-wide settings resolved from the environment and SSM.

    Values are only ever filled, never replaced: whichever source provides a
    key first wins. Empty strings count as unset.
    """

    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "Settings":
        """Seed settings with recognised keys set explicitly in ``environ``."""
        settings = cls()
        for key in EXPECTED_KEYS:
            settings.set_default(key, environ.get(key))
        return settings

    def get(self, key: str) -> str | None:
        return self.values.get(key) or None

    def is_set(self, key: str) -> bool:
        return bool(self.values.get(key))

    def set_default(self, key: str, value: str | None) -> bool:
        """Record ``value`` for ``key`` unless the key already has a value.

        Returns:
            bool: True if the value was recorded
        """
        if key not in EXPECTED_KEYS or not value or self.is_set(key):
            return False
        self.values[key] = value
        return True

    def missing_keys(self) -> list[str]:
        return [key for key in EXPECTED_KEYS if not self.is_set(key)]

    def require(self, key: str) -> str:
        """Return the value for ``key``.

        Raises:
            ConfigurationError: If the key has no value
        """
        value = self.get(key)
        if not value:
            raise ConfigurationError(key)
        return value

    @property
    def auth0_domain(self) -> str:
        return strip_protocol(self.require("AUTH0_DOMAIN"))

    @property
    def auth0_audience(self) -> str:
        return self.get("AUTH0_AUDIENCE") or get_default_audience(self.auth0_domain)

    @property
    def s3_bucket(self) -> str | None:
        return self.get("S3_BUCKET")

    @property
    def s3_key(self) -> str:
        return self.get("S3_KEY") or DEFAULT_S3_KEY

    @property
    def ssoid(self) -> str | None:
        return self.get("SSOID")

    def to_dict(self) -> dict[str, str]:
        """Return the settings with secrets redacted, for logging."""
        return {
            key: "***REDACTED***" if key == "AUTH0_CLIENT_SECRET" else value
            for key, value in self.values.items()
        }
