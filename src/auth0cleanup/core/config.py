"""Configuration constants and environment loading."""

import os
from collections.abc import Mapping

import dotenv

from ..models.config import Settings

# Hierarchical SSM path; override with PARAM_PREFIX
DEFAULT_PARAM_PREFIX = "/auth0-cleanup/"
# Flat SSM name prefix used for keys the path lookup did not provide
FLAT_PREFIX = "auth0_cleanup_"

# Used when neither the event nor the settings name an SSOID
PLACEHOLDER_SSOID = "REPLACE_WITH_SSOID"

API_TIMEOUT = 30  # request timeout in seconds
TOKEN_TIMEOUT = 10  # token request timeout in seconds
SEARCH_PAGE_SIZE = 50


def check_env_file(env_path: str = ".env") -> None:
    """Load a local .env file if present, without overriding the environment."""
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path, override=False)


def get_param_prefix(environ: Mapping[str, str] | None = None) -> str:
    """Return the SSM lookup prefix, honouring PARAM_PREFIX."""
    environ = os.environ if environ is None else environ
    return (environ.get("PARAM_PREFIX") or DEFAULT_PARAM_PREFIX).strip()


def get_region(environ: Mapping[str, str] | None = None) -> str | None:
    environ = os.environ if environ is None else environ
    return environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION") or None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build the process-wide Settings from explicitly set environment values."""
    environ = os.environ if environ is None else environ
    return Settings.from_environ(environ)
