"""
Tests for the append-only transaction log
"""

import pytest
from datetime import datetime
from decimal import Decimal

from bank_ledger.accounts import LedgerEntry
from bank_ledger.errors import TransactionLogError
from bank_ledger.transaction_log import HEADER, LogEventType, TransactionLog


FIXED_TIME = datetime(2024, 3, 5, 14, 7, 9)


def fixed_clock():
    return FIXED_TIME


class TestTransactionLog:
    """Test TransactionLog behaviour"""

    def setup_method(self):
        """Set up test fixtures"""
        self.entry = LedgerEntry(holder_name="Alice", account_number=1001, balance=Decimal('100.00'))

    def test_row_layout(self, tmp_path):
        """Test a row is the timestamp followed by the account fields"""
        log = TransactionLog(tmp_path / "log.csv", clock=fixed_clock)

        row = log.build_row(self.entry.snapshot())

        assert row == ["2024-03-05 14:07:09", "Alice", "1001", "0", "0", "100.00"]

    def test_header_before_first_creation_row(self, tmp_path):
        """Test the header is written right before the first creation row"""
        log = TransactionLog(tmp_path / "log.csv", clock=fixed_clock)

        log.append(self.entry.snapshot(), LogEventType.ACCOUNT_CREATED)
        self.entry.deposit(Decimal('50.00'))
        log.append(self.entry.snapshot(), LogEventType.DEPOSIT)

        rows = log.read_rows()
        assert rows[0] == HEADER
        assert rows[1] == ["2024-03-05 14:07:09", "Alice", "1001", "0", "0", "100.00"]
        assert rows[2] == ["2024-03-05 14:07:09", "Alice", "1001", "0", "50.00", "150.00"]
        assert len(rows) == 3

    def test_header_written_once_per_session(self, tmp_path):
        """Test later creation rows in the same session skip the header"""
        log = TransactionLog(tmp_path / "log.csv", clock=fixed_clock)
        other = LedgerEntry(holder_name="Bob", account_number=2002)

        log.append(self.entry.snapshot(), LogEventType.ACCOUNT_CREATED)
        log.append(other.snapshot(), LogEventType.ACCOUNT_CREATED)

        rows = log.read_rows()
        assert [row for row in rows if row == HEADER] == [HEADER]
        assert len(rows) == 3

    def test_transactions_never_write_header(self, tmp_path):
        """Test deposit and withdrawal rows do not trigger the header"""
        log = TransactionLog(tmp_path / "log.csv", clock=fixed_clock)

        log.append(self.entry.snapshot(), LogEventType.DEPOSIT)
        log.append(self.entry.snapshot(), LogEventType.WITHDRAWAL)

        rows = log.read_rows()
        assert HEADER not in rows
        assert len(rows) == 2

    def test_new_session_appends_to_existing_file(self, tmp_path):
        """Test a second log session appends and writes its own header"""
        path = tmp_path / "log.csv"
        TransactionLog(path, clock=fixed_clock).append(self.entry.snapshot(), LogEventType.ACCOUNT_CREATED)
        TransactionLog(path, clock=fixed_clock).append(self.entry.snapshot(), LogEventType.ACCOUNT_CREATED)

        rows = TransactionLog(path).read_rows()
        assert len(rows) == 4
        assert rows[0] == HEADER
        assert rows[2] == HEADER

    def test_custom_timestamp_format(self, tmp_path):
        """Test the timestamp format is configurable"""
        log = TransactionLog(tmp_path / "log.csv", timestamp_format="%d/%m/%Y", clock=fixed_clock)

        assert log.build_row(self.entry.snapshot())[0] == "05/03/2024"

    def test_holder_name_with_comma_is_quoted(self, tmp_path):
        """Test names containing separators survive a round trip"""
        log = TransactionLog(tmp_path / "log.csv", clock=fixed_clock)
        entry = LedgerEntry(holder_name="Smith, Jane", account_number=3003)

        log.append(entry.snapshot(), LogEventType.DEPOSIT)

        assert log.read_rows()[0][1] == "Smith, Jane"

    def test_read_rows_missing_file(self, tmp_path):
        """Test reading a log that was never written"""
        assert TransactionLog(tmp_path / "missing.csv").read_rows() == []

    def test_write_failure_raises(self, tmp_path):
        """Test I/O errors surface as TransactionLogError"""
        log = TransactionLog(tmp_path / "no_such_dir" / "log.csv", clock=fixed_clock)

        with pytest.raises(TransactionLogError):
            log.append(self.entry.snapshot(), LogEventType.ACCOUNT_CREATED)

    def test_event_types(self):
        """Test which events count as transactions"""
        assert LogEventType.DEPOSIT.is_transaction
        assert LogEventType.WITHDRAWAL.is_transaction
        assert not LogEventType.ACCOUNT_CREATED.is_transaction
