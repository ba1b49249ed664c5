"""
Account Management Module

Ledger entries hold one account's identity and running totals; the registry
owns every entry for the lifetime of the process. Balances never go negative
through a withdrawal and the deposit/withdrawal totals only ever increase.
"""

from decimal import Decimal, Inexact, localcontext
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union
import threading

from .amounts import to_decimal, format_amount
from .errors import AccountNotFound, DuplicateAccount, InsufficientBalance, InvalidAmount
from .logging_config import get_logger, log_action


logger = get_logger("bank_ledger.accounts")

AmountLike = Union[Decimal, int, float, str]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validate_amount(amount: AmountLike, allow_zero: bool = False) -> Decimal:
    """
    Validate a deposit or withdrawal amount

    Negative amounts are always rejected so that the running totals can
    never decrease. Zero is rejected unless allow_zero is set.
    """
    amount = to_decimal(amount)
    if amount < Decimal('0'):
        raise InvalidAmount("Amount must not be negative")
    if amount == Decimal('0') and not allow_zero:
        raise InvalidAmount("Amount must be positive")
    return amount


def exact_totals(balance: Decimal, total: Decimal, amount: Decimal, sign: int) -> Tuple[Decimal, Decimal]:
    """
    New balance and running total for one posting, computed without rounding

    Raises:
        InvalidAmount: If either result cannot be represented exactly
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            return balance + sign * amount, total + amount
        except Inexact:
            raise InvalidAmount("Amount exceeds the supported precision")


def describe_fields(fields: Dict[str, str]) -> str:
    """Multi-line account text built from snapshot() fields"""
    return (
        f"Account Holder: {fields['holder_name']}\n"
        f"Account Number: {fields['account_number']}\n"
        f"Withdraw: {fields['total_withdrawn']}\n"
        f"Deposit: {fields['total_deposited']}\n"
        f"Balance: {fields['balance']}"
    )


@dataclass
class LedgerEntry:
    """
    One account's identity, balance and cumulative transaction totals
    """
    holder_name: str
    account_number: int
    balance: Decimal = Decimal('0')
    total_deposited: Decimal = Decimal('0')
    total_withdrawn: Decimal = Decimal('0')
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self):
        self.balance = to_decimal(self.balance)
        self.total_deposited = to_decimal(self.total_deposited)
        self.total_withdrawn = to_decimal(self.total_withdrawn)

    def deposit(self, amount: AmountLike, allow_zero: bool = False) -> Decimal:
        """
        Credit the account

        Returns:
            New balance
        """
        amount = validate_amount(amount, allow_zero)
        balance, total = exact_totals(self.balance, self.total_deposited, amount, 1)
        self.balance = balance
        self.total_deposited = total
        self.updated_at = _now()
        return self.balance

    def withdraw(self, amount: AmountLike, allow_zero: bool = False) -> Decimal:
        """
        Debit the account

        Returns:
            New balance

        Raises:
            InsufficientBalance: If amount exceeds the balance; nothing is changed
        """
        amount = validate_amount(amount, allow_zero)
        if amount > self.balance:
            raise InsufficientBalance()
        balance, total = exact_totals(self.balance, self.total_withdrawn, amount, -1)
        self.balance = balance
        self.total_withdrawn = total
        self.updated_at = _now()
        return self.balance

    def describe(self) -> str:
        """Multi-line text snapshot of the account"""
        return describe_fields(self.snapshot())

    def snapshot(self) -> Dict[str, str]:
        """Same fields as describe() as a dictionary of display strings"""
        return {
            "holder_name": self.holder_name,
            "account_number": str(self.account_number),
            "total_withdrawn": format_amount(self.total_withdrawn),
            "total_deposited": format_amount(self.total_deposited),
            "balance": format_amount(self.balance),
        }


class AccountRegistry:
    """
    In-memory map from account number to ledger entry

    Every operation runs under a single lock so balance and totals are
    always observed together. Readers outside the registry should use
    snapshot()/snapshots() rather than reading entry fields directly.
    """

    def __init__(self, allow_zero_amounts: bool = False):
        self._accounts: Dict[int, LedgerEntry] = {}
        self._lock = threading.Lock()
        self.allow_zero_amounts = allow_zero_amounts

    def create_account(
        self,
        holder_name: str,
        account_number: int,
        initial_balance: AmountLike = Decimal('0')
    ) -> LedgerEntry:
        """
        Create a new account

        Args:
            holder_name: Display name of the account holder
            account_number: Unique account number
            initial_balance: Opening balance (must not be negative)

        Returns:
            Created LedgerEntry

        Raises:
            DuplicateAccount: If the account number is already registered
            InvalidAmount: If the opening balance is negative
        """
        initial_balance = to_decimal(initial_balance)
        if initial_balance < Decimal('0'):
            raise InvalidAmount("Initial balance must not be negative")

        with self._lock:
            if account_number in self._accounts:
                raise DuplicateAccount(account_number)

            entry = LedgerEntry(
                holder_name=holder_name,
                account_number=account_number,
                balance=initial_balance
            )
            self._accounts[account_number] = entry

        log_action(
            logger, "info", "Account created",
            action="account_created", resource=str(account_number),
            extra={"holder_name": holder_name, "initial_balance": str(initial_balance)}
        )
        return entry

    def lookup(self, account_number: int) -> LedgerEntry:
        """
        Get account by number

        Raises:
            AccountNotFound: If no such account exists
        """
        with self._lock:
            return self._lookup(account_number)

    def _lookup(self, account_number: int) -> LedgerEntry:
        entry = self._accounts.get(account_number)
        if entry is None:
            raise AccountNotFound(account_number)
        return entry

    def snapshot(self, account_number: int) -> Dict[str, str]:
        """Consistent display fields for one account"""
        with self._lock:
            return self._lookup(account_number).snapshot()

    def snapshots(self) -> List[Dict[str, str]]:
        """Consistent display fields for every account, ordered by account number"""
        with self._lock:
            return [self._accounts[number].snapshot() for number in sorted(self._accounts)]

    def exists(self, account_number: int) -> bool:
        with self._lock:
            return account_number in self._accounts

    def count(self) -> int:
        with self._lock:
            return len(self._accounts)

    def deposit(self, account_number: int, amount: AmountLike) -> LedgerEntry:
        """Deposit into an existing account"""
        with self._lock:
            entry = self._lookup(account_number)
            balance = entry.deposit(amount, allow_zero=self.allow_zero_amounts)

        log_action(
            logger, "info", "Deposit posted",
            action="deposit", resource=str(account_number),
            extra={"amount": str(amount), "balance": str(balance)}
        )
        return entry

    def withdraw(self, account_number: int, amount: AmountLike) -> LedgerEntry:
        """Withdraw from an existing account"""
        with self._lock:
            entry = self._lookup(account_number)
            balance = entry.withdraw(amount, allow_zero=self.allow_zero_amounts)

        log_action(
            logger, "info", "Withdrawal posted",
            action="withdrawal", resource=str(account_number),
            extra={"amount": str(amount), "balance": str(balance)}
        )
        return entry
