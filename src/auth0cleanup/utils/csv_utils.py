"""CSV formatting for the deletion ledger."""

import csv
import io
import math
from dataclasses import astuple, dataclass
from datetime import UTC, datetime
from typing import Any

from ..models.user import Account

LEDGER_COLUMNS: tuple[str, ...] = (
    "ssoid",
    "deactivation_flag",
    "last_update_timestamp",
    "user_id",
    "email",
    "name",
    "providers",
    "connections",
    "created_at",
    "last_login",
    "logins_count",
    "deleted_by",
)

CSV_HEADER_LINE = ",".join(LEDGER_COLUMNS)
CSV_HEADER = CSV_HEADER_LINE + "\n"

DEACTIVATION_FLAG = "Y"
LIST_SEPARATOR = ";"


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(UTC)
    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def safe_number(value: Any) -> str:
    """Render finite numbers; anything else (including bools) renders empty."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return ""
    if isinstance(value, float) and not math.isfinite(value):
        return ""
    return str(value)


def format_csv_line(fields: list[Any]) -> str:
    """Render one ``\\n``-terminated CSV line.

    None renders as an empty field. Fields containing a comma, a double
    quote or a line break are quoted with internal quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(["" if field is None else str(field) for field in fields])
    return buffer.getvalue()


@dataclass(frozen=True)
class LedgerRow:
    """One audit record for a deleted account."""

    ssoid: str
    deactivation_flag: str
    last_update_timestamp: str
    user_id: str
    email: str
    name: str
    providers: str
    connections: str
    created_at: str
    last_login: str
    logins_count: str
    deleted_by: str

    @classmethod
    def for_account(
        cls,
        ssoid: str,
        account: Account,
        deleted_by: str,
        now: datetime | None = None,
    ) -> "LedgerRow":
        return cls(
            ssoid=ssoid,
            deactivation_flag=DEACTIVATION_FLAG,
            last_update_timestamp=utc_timestamp(now),
            user_id=account.user_id or "",
            email=account.email or "",
            name=account.display_name,
            providers=LIST_SEPARATOR.join(account.providers),
            connections=LIST_SEPARATOR.join(account.connections),
            created_at=account.created_at or "",
            last_login=account.last_login or "",
            logins_count=safe_number(account.logins_count),
            deleted_by=deleted_by,
        )

    def to_csv_line(self) -> str:
        return format_csv_line(list(astuple(self)))


def has_header(content: str) -> bool:
    """Check whether ``content`` already starts with the ledger header.

    Only the first line is compared, case-insensitively, ignoring a leading
    byte-order mark and leading whitespace.
    """
    first_line = strip_bom(content).lstrip().split("\n", 1)[0].rstrip("\r")
    return first_line.strip().lower() == CSV_HEADER_LINE


def strip_bom(content: str) -> str:
    return content[1:] if content.startswith("\ufeff") else content
