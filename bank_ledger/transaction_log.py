"""
Transaction Log Module

Append-only CSV log of every successful ledger operation. One row per event,
prefixed with a local timestamp. A header row is written once per session,
right before the first account-creation row.
"""

import csv
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .errors import TransactionLogError
from .logging_config import get_logger, log_action


logger = get_logger("bank_ledger.transaction_log")

HEADER = ["Date", "Account Holder", "Account Number", "Withdraw", "Deposit", "Balance"]
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogEventType(Enum):
    """Types of logged events"""
    ACCOUNT_CREATED = "account_created"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @property
    def is_transaction(self) -> bool:
        return self in (LogEventType.DEPOSIT, LogEventType.WITHDRAWAL)


class TransactionLog:
    """
    Append-only text log of account activity
    """

    def __init__(
        self,
        path: Union[str, Path],
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.path = Path(path)
        self.timestamp_format = timestamp_format
        self._clock = clock or datetime.now
        self._header_written = False
        self._lock = threading.Lock()

    def build_row(self, fields: Dict[str, str], timestamp: Optional[datetime] = None) -> List[str]:
        """Timestamp followed by the snapshot fields of an account"""
        timestamp = timestamp or self._clock()
        return [
            timestamp.strftime(self.timestamp_format),
            fields["holder_name"],
            fields["account_number"],
            fields["total_withdrawn"],
            fields["total_deposited"],
            fields["balance"],
        ]

    def append(self, fields: Dict[str, str], event_type: LogEventType) -> List[str]:
        """
        Append one row for the given event

        Args:
            fields: Account snapshot taken after the operation was applied
            event_type: What happened to the account

        Returns:
            The row that was written

        Raises:
            TransactionLogError: If the file cannot be written
        """
        with self._lock:
            row = self.build_row(fields)
            write_header = not event_type.is_transaction and not self._header_written

            try:
                with open(self.path, "a", newline="", encoding="utf-8") as handle:
                    writer = csv.writer(handle)
                    if write_header:
                        writer.writerow(HEADER)
                    writer.writerow(row)
            except OSError as e:
                logger.error("Failed to append to transaction log %s", self.path, exc_info=True)
                raise TransactionLogError(f"Failed to write transaction log: {e}")

            if write_header:
                self._header_written = True

        log_action(
            logger, "debug", "Transaction log row appended",
            action=event_type.value, resource=fields["account_number"],
            extra={"path": str(self.path)}
        )
        return row

    def read_rows(self) -> List[List[str]]:
        """Read back every row in the log file, header rows included"""
        if not self.path.exists():
            return []
        with open(self.path, newline="", encoding="utf-8") as handle:
            return [row for row in csv.reader(handle)]
