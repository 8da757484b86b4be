"""Append-only CSV ledger of deleted accounts, stored as one S3 object.

S3 has no append, so every write is a read-modify-write of the whole
object: fetch the current body (a missing object is an empty ledger), make
sure the header is the first line, append the new rows and put the result
back. There is no conditional write: two concurrent invocations on the same
key can each read the same body and the later put drops the other's rows.
"""

from collections.abc import Sequence
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import LedgerWriteError
from ..utils.csv_utils import CSV_HEADER, LedgerRow, has_header, strip_bom
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})
CSV_CONTENT_TYPE = "text/csv"


def is_not_found(error: ClientError) -> bool:
    """True if a ClientError from GetObject means the object does not exist."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in NOT_FOUND_CODES or status == 404


def merge_ledger(existing: str, rows: Sequence[str]) -> str:
    """Return the new ledger body for ``existing`` content plus ``rows``.

    The header is prepended unless the first line already is the header.
    Rows are pre-formatted, newline-terminated CSV lines.
    """
    content = existing
    if not has_header(content):
        content = CSV_HEADER + strip_bom(content)

    if not content.endswith("\n"):
        content += "\n"

    return content + "".join(rows)


class CsvLedger:
    """The deletion ledger at ``s3://bucket/key``."""

    def __init__(self, s3_client: Any, bucket: str, key: str) -> None:
        self.s3 = s3_client
        self.bucket = bucket
        self.key = key

    def read(self) -> str:
        """Return the current ledger body, or "" if the object does not exist.

        Raises:
            ClientError: For any failure other than a missing object
        """
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=self.key)
        except ClientError as e:
            if is_not_found(e):
                logger.info(
                    f"Ledger s3://{self.bucket}/{self.key} does not exist yet",
                    extra={"bucket": self.bucket, "key": self.key},
                )
                return ""
            raise

        # Undecodable bytes are replaced so later appends still succeed
        return response["Body"].read().decode("utf-8", errors="replace")

    def append_rows(self, rows: Sequence[str | LedgerRow]) -> None:
        """Append rows to the ledger, writing the header if it is missing.

        Args:
            rows: Ledger rows, either LedgerRow instances or CSV lines

        Raises:
            LedgerWriteError: If reading or writing the object fails
        """
        if not rows:
            return

        lines = [row.to_csv_line() if isinstance(row, LedgerRow) else row for row in rows]

        try:
            existing = self.read()
            body = merge_ledger(existing, lines)
            self.s3.put_object(
                Bucket=self.bucket,
                Key=self.key,
                Body=body.encode("utf-8"),
                ContentType=CSV_CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as e:
            raise LedgerWriteError(
                "Failed to write ledger",
                bucket=self.bucket,
                key=self.key,
                details=str(e),
            ) from e

        logger.info(
            f"Appended {len(lines)} row(s) to s3://{self.bucket}/{self.key}",
            extra={"bucket": self.bucket, "key": self.key, "operation": "ledger_write"},
        )
