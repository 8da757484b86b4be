"""Resolve settings from AWS SSM Parameter Store.

Lookups run in two phases, once per process:

1. Hierarchical: every parameter under the path prefix (recursive). The
   short name after the last ``/`` is matched against the recognised keys.
2. Flat: any key still unset is fetched by name as ``<flat prefix><KEY>``
   in a single ``GetParameters`` call.

Neither phase replaces a value that is already set, so explicit environment
values win over both.
"""

from typing import Any

from ..models.config import EXPECTED_KEYS, Settings
from ..utils.logging_utils import get_logger
from .config import DEFAULT_PARAM_PREFIX, FLAT_PREFIX

logger = get_logger(__name__)


class ParameterStoreResolver:
    """Fills a Settings instance from SSM exactly once."""

    def __init__(
        self,
        ssm_client: Any,
        settings: Settings,
        prefix: str = DEFAULT_PARAM_PREFIX,
        flat_prefix: str = FLAT_PREFIX,
    ) -> None:
        """Initialize the resolver.

        Args:
            ssm_client: boto3 SSM client
            settings: Settings to fill; values already present are kept
            prefix: Hierarchical path prefix (only used if it starts with "/")
            flat_prefix: Name prefix for the flat fallback lookup
        """
        self.ssm = ssm_client
        self.settings = settings
        self.prefix = prefix.strip()
        self.flat_prefix = flat_prefix
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def resolve(self) -> Settings:
        """Run both lookup phases on the first call; later calls are no-ops.

        Returns:
            Settings: The filled settings

        Raises:
            botocore.exceptions.ClientError: If an SSM call fails
        """
        if self._loaded:
            return self.settings

        if self.prefix.startswith("/"):
            self._load_by_path()

        missing = self.settings.missing_keys()
        if missing:
            self._load_by_flat_names(missing)

        self._loaded = True
        logger.debug(
            f"Resolved settings: {sorted(self.settings.values)}",
            extra={"operation": "resolve_settings"},
        )
        return self.settings

    def _load_by_path(self) -> None:
        path = self.prefix if self.prefix.endswith("/") else self.prefix + "/"
        paginator = self.ssm.get_paginator("get_parameters_by_path")
        pages = paginator.paginate(Path=path, Recursive=True, WithDecryption=True)

        found = 0
        for page in pages:
            for parameter in page.get("Parameters", []):
                key = parameter["Name"].rsplit("/", 1)[-1]
                if self.settings.set_default(key, parameter.get("Value")):
                    found += 1

        logger.info(
            f"Loaded {found} setting(s) from SSM path {path}",
            extra={"operation": "resolve_settings"},
        )

    def _load_by_flat_names(self, missing: list[str]) -> None:
        names = [self.flat_prefix + key for key in missing]
        response = self.ssm.get_parameters(Names=names, WithDecryption=True)

        for parameter in response.get("Parameters", []):
            key = self._flat_name_to_key(parameter["Name"])
            if key:
                self.settings.set_default(key, parameter.get("Value"))

        invalid = response.get("InvalidParameters") or []
        if invalid:
            # Optional keys are allowed to be absent; required ones fail on use
            logger.warning(
                f"Missing SSM params: {', '.join(invalid)}",
                extra={"operation": "resolve_settings"},
            )

    def _flat_name_to_key(self, name: str) -> str | None:
        if not name.startswith(self.flat_prefix):
            return None
        key = name[len(self.flat_prefix) :]
        return key if key in EXPECTED_KEYS else None
