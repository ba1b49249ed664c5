"""
Bank Ledger

Account ledger with deposits, withdrawals, Decimal arithmetic
and an append-only transaction log.
"""

__version__ = "1.0.0"
