"""Per-invocation cleanup flow: find the accounts for an SSOID, delete them
and record each deletion in the ledger."""

from collections.abc import Callable, Mapping
from typing import Any

from ..core.auth import get_management_token
from ..core.auth0_client import create_management_client
from ..core.config import PLACEHOLDER_SSOID
from ..core.parameter_store import ParameterStoreResolver
from ..core.sdk_operations import SDKUserOperations
from ..models.config import Settings
from ..models.user import Account, CleanupResponse, DeletionResult
from ..utils.csv_utils import LedgerRow
from ..utils.logging_utils import get_logger
from .ledger_ops import CsvLedger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Cannot find user"
COMPLETE_MESSAGE = "Delete attempt complete"

TokenProvider = Callable[[str, str, str, str], str]
UserOpsFactory = Callable[[str, str], SDKUserOperations]
LedgerFactory = Callable[[str, str], CsvLedger]


def get_ssoid(event: Mapping[str, Any] | None, settings: Settings) -> str:
    """Pick the SSOID: path parameter, query parameter, settings, placeholder."""
    event = event or {}
    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}
    return (
        path_params.get("ssoid")
        or query_params.get("ssoid")
        or settings.ssoid
        or PLACEHOLDER_SSOID
    )


def _default_user_ops(domain: str, token: str) -> SDKUserOperations:
    return SDKUserOperations(create_management_client(domain, token))


class CleanupService:
    """Runs one cleanup invocation against resolved settings.

    The resolver and the S3 client live for the whole process; a token and
    a management client are created per invocation.
    """

    def __init__(
        self,
        resolver: ParameterStoreResolver,
        s3_client: Any,
        token_provider: TokenProvider = get_management_token,
        user_ops_factory: UserOpsFactory = _default_user_ops,
        ledger_factory: LedgerFactory | None = None,
    ) -> None:
        self.resolver = resolver
        self.s3 = s3_client
        self.token_provider = token_provider
        self.user_ops_factory = user_ops_factory
        self.ledger_factory = ledger_factory or (
            lambda bucket, key: CsvLedger(self.s3, bucket, key)
        )

    def run(self, event: Mapping[str, Any] | None, deleted_by: str) -> CleanupResponse:
        """Run the cleanup for the SSOID named by ``event``.

        Unexpected errors become a 500 response; deletions that already
        happened are not rolled back.
        """
        try:
            return self._run(event, deleted_by)
        except Exception as e:
            logger.error(f"Unhandled error: {e}", exc_info=True)
            return CleanupResponse(500, {"error": str(e)})

    def _run(self, event: Mapping[str, Any] | None, deleted_by: str) -> CleanupResponse:
        settings = self.resolver.resolve()

        domain = settings.auth0_domain
        token = self.token_provider(
            domain,
            settings.require("AUTH0_CLIENT_ID"),
            settings.require("AUTH0_CLIENT_SECRET"),
            settings.auth0_audience,
        )

        ssoid = get_ssoid(event, settings)
        user_ops = self.user_ops_factory(domain, token)
        accounts = user_ops.find_users_by_ssoid(ssoid)

        if not accounts:
            logger.info(f"{NOT_FOUND_MESSAGE} for SSOID={ssoid}", extra={"ssoid": ssoid})
            return CleanupResponse(
                200, {"message": NOT_FOUND_MESSAGE, "ssoid": ssoid, "results": []}
            )

        results, rows = self._delete_accounts(user_ops, accounts, ssoid, deleted_by)
        self._write_ledger(settings, rows, ssoid)

        return CleanupResponse(
            200,
            {
                "message": COMPLETE_MESSAGE,
                "ssoid": ssoid,
                "count": len(results),
                "results": [result.to_dict() for result in results],
            },
        )

    def _delete_accounts(
        self,
        user_ops: SDKUserOperations,
        accounts: list[Account],
        ssoid: str,
        deleted_by: str,
    ) -> tuple[list[DeletionResult], list[LedgerRow]]:
        results: list[DeletionResult] = []
        rows: list[LedgerRow] = []

        for account in accounts:
            try:
                user_ops.delete_user(account.user_id)
            except Exception as e:
                logger.error(
                    f"Failed to delete user_id={account.user_id}: {e}",
                    extra={"ssoid": ssoid, "user_id": account.user_id},
                )
                results.append(DeletionResult(account.user_id, False, str(e)))
                continue

            results.append(DeletionResult(account.user_id, True))
            rows.append(LedgerRow.for_account(ssoid, account, deleted_by))

        return results, rows

    def _write_ledger(self, settings: Settings, rows: list[LedgerRow], ssoid: str) -> None:
        bucket = settings.s3_bucket
        if not bucket:
            logger.warning("S3_BUCKET not set; skipping CSV write.", extra={"ssoid": ssoid})
            return
        if not rows:
            return

        ledger = self.ledger_factory(bucket, settings.s3_key)
        try:
            ledger.append_rows(rows)
        except Exception as e:
            # The deletions are done; a lost audit row must not fail the call
            logger.error(
                f"Failed to write deleted_users.csv: {e}",
                extra={"ssoid": ssoid, "bucket": bucket, "key": settings.s3_key},
                exc_info=True,
            )
