"""
Exception hierarchy for account operations.

Insufficient funds is deliberately absent: a debit that would exceed the
overdraft limit returns False instead of raising.
"""


class AccountError(Exception):
    """Base exception for all account errors."""


class InvalidArgumentError(AccountError, ValueError):
    """Raised for malformed input: negative amounts or limits, missing owner,
    invalid account number, empty counterparty name or reference."""


class AccountLockedError(AccountError):
    """Raised when a debit is attempted on a locked account."""

    def __init__(self, account_number: int):
        self.account_number = account_number
        super().__init__(f"Account {account_number} is locked")
