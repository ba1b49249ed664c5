"""
Teller Module

Presentation-facing handler for the three teller actions: create account,
deposit and withdraw. Takes the raw text a front-end collects, drives the
registry, appends the transaction log and returns an explicit result value
instead of raising, so each front-end handles every error kind by name.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional
import threading

from .accounts import AccountRegistry, LedgerEntry, describe_fields
from .amounts import parse_account_number, parse_amount
from .config import BankLedgerConfig, get_config
from .errors import ErrorKind, LedgerError, TransactionLogError
from .logging_config import get_logger, log_action
from .transaction_log import LogEventType, TransactionLog


logger = get_logger("bank_ledger.teller")


class TellerAction(Enum):
    """Actions a teller front-end can trigger"""
    CREATE_ACCOUNT = "create_account"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


SUCCESS_MESSAGES = {
    TellerAction.CREATE_ACCOUNT: "Account created!",
    TellerAction.DEPOSIT: "Deposit Successful!",
    TellerAction.WITHDRAW: "Withdrawal Successful!",
}

LOG_EVENTS = {
    TellerAction.CREATE_ACCOUNT: LogEventType.ACCOUNT_CREATED,
    TellerAction.DEPOSIT: LogEventType.DEPOSIT,
    TellerAction.WITHDRAW: LogEventType.WITHDRAWAL,
}


@dataclass
class TellerResult:
    """Outcome of one teller action"""
    ok: bool
    action: TellerAction
    message: str
    entry: Optional[LedgerEntry] = None
    error: Optional[ErrorKind] = None
    details: str = ""
    account: Optional[Dict[str, str]] = None
    warning: Optional[str] = None

    @property
    def display_text(self) -> str:
        """Text for a result panel: message followed by the account details"""
        if self.details:
            return f"{self.message}\n{self.details}"
        return self.message


class Teller:
    """
    Runs teller actions against a registry and records them in the transaction log
    """

    def __init__(
        self,
        registry: AccountRegistry,
        transaction_log: Optional[TransactionLog] = None,
        config: Optional[BankLedgerConfig] = None
    ):
        self.registry = registry
        self.transaction_log = transaction_log
        self.config = config or get_config()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[BankLedgerConfig] = None) -> 'Teller':
        """Build a teller with a fresh registry and the configured transaction log"""
        config = config or get_config()
        registry = AccountRegistry(allow_zero_amounts=not config.reject_non_positive_amounts)
        transaction_log = None
        if config.transaction_log_enabled:
            transaction_log = TransactionLog(
                config.transaction_log_path,
                timestamp_format=config.timestamp_format
            )
        return cls(registry, transaction_log, config)

    def create_account(self, name_text: str, account_number_text: str, amount_text: str = "") -> TellerResult:
        """
        Open an account from raw form input

        An empty amount opens the account with a zero balance.
        """
        def operation() -> LedgerEntry:
            account_number = parse_account_number(account_number_text)
            initial_balance = Decimal('0')
            if amount_text and amount_text.strip():
                initial_balance = parse_amount(amount_text, self.config.amount_precision)
            return self.registry.create_account(name_text, account_number, initial_balance)

        return self._run(TellerAction.CREATE_ACCOUNT, operation)

    def deposit(self, account_number_text: str, amount_text: str) -> TellerResult:
        def operation() -> LedgerEntry:
            account_number = parse_account_number(account_number_text)
            amount = parse_amount(amount_text, self.config.amount_precision)
            return self.registry.deposit(account_number, amount)

        return self._run(TellerAction.DEPOSIT, operation)

    def withdraw(self, account_number_text: str, amount_text: str) -> TellerResult:
        def operation() -> LedgerEntry:
            account_number = parse_account_number(account_number_text)
            amount = parse_amount(amount_text, self.config.amount_precision)
            return self.registry.withdraw(account_number, amount)

        return self._run(TellerAction.WITHDRAW, operation)

    def _run(self, action: TellerAction, operation) -> TellerResult:
        # Mutation and log append happen under one lock so log order matches mutation order
        with self._lock:
            try:
                entry = operation()
            except LedgerError as e:
                log_action(
                    logger, "warning", f"Teller action rejected: {e.message}",
                    action=action.value, extra={"error": e.kind.value}
                )
                return TellerResult(ok=False, action=action, message=e.message, error=e.kind)

            account = self.registry.snapshot(entry.account_number)

            # The mutation has already been applied, so a log failure is only a warning
            warning = None
            try:
                self._record(action, account)
            except TransactionLogError as e:
                warning = e.message

        return TellerResult(
            ok=True,
            action=action,
            message=SUCCESS_MESSAGES[action],
            entry=entry,
            details=describe_fields(account),
            account=account,
            warning=warning
        )

    def _record(self, action: TellerAction, account: Dict[str, str]) -> None:
        if self.transaction_log is None:
            return
        self.transaction_log.append(account, LOG_EVENTS[action])
