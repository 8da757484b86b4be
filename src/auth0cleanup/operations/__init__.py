"""Operations: the cleanup flow and the S3 deletion ledger."""

from .cleanup_ops import CleanupService, get_ssoid
from .ledger_ops import CsvLedger, merge_ledger

__all__ = [
    "CleanupService",
    "get_ssoid",
    "CsvLedger",
    "merge_ledger",
]
