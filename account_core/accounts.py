"""
Account Module

Base state shared by every account variant: identity, owner, balance,
lock state and currency. Balance mutation is reserved to the variants via
the protected `_set_balance`; external callers go through the variant's
transfer operations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Optional
import threading

from .currency import Currency, Money, conversion_factor, to_decimal
from .customers import Customer
from .errors import InvalidArgumentError
from .logging_config import get_logger, log_action


class AccountState(Enum):
    """Lock states of an account"""
    UNLOCKED = "unlocked"  # Normal operation
    LOCKED = "locked"      # Outgoing debits rejected


def validate_transfer(amount, name: Optional[str], reference: Optional[str]) -> Decimal:
    """
    Validate the common transfer arguments

    Args:
        amount: Transfer amount, must not be negative
        name: Counterparty name, must not be empty
        reference: Payment reference, must not be empty

    Returns:
        The amount as Decimal

    Raises:
        InvalidArgumentError: If any argument is malformed
    """
    value = to_decimal(amount)
    if value < 0:
        raise InvalidArgumentError(f"Transfer amount must not be negative: {value}")
    if not name or not str(name).strip():
        raise InvalidArgumentError("Counterparty name is required")
    if not reference or not str(reference).strip():
        raise InvalidArgumentError("Transfer reference is required")
    return value


class Account(ABC):
    """
    Abstract bank account

    The per-account RLock guards every read-modify-write; variants must hold
    it while checking and mutating the balance.
    """

    def __init__(self, owner: Customer, account_number: int,
                 currency: Currency = Currency.EUR):
        if owner is None:
            raise InvalidArgumentError("Account owner is required")
        if isinstance(account_number, bool) or not isinstance(account_number, int):
            raise InvalidArgumentError(f"Account number must be an integer, got {account_number!r}")
        if account_number < 0:
            raise InvalidArgumentError(f"Account number must not be negative: {account_number}")
        if not isinstance(currency, Currency):
            raise InvalidArgumentError(f"Unsupported currency: {currency!r}")

        self._owner = owner
        self._account_number = account_number
        self._balance = Decimal("0")
        self._state = AccountState.UNLOCKED
        self._currency = currency
        self._lock = threading.RLock()
        self.logger = get_logger("account_core.accounts")

    @property
    def account_number(self) -> int:
        return self._account_number

    @property
    def owner(self) -> Customer:
        return self._owner

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    @property
    def balance_money(self) -> Money:
        """Balance rounded to the currency precision, for display"""
        with self._lock:
            return Money(self._balance, self._currency)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def state(self) -> AccountState:
        return self._state

    @property
    def is_locked(self) -> bool:
        return self._state == AccountState.LOCKED

    def lock(self) -> None:
        """Lock the account; outgoing debits are rejected until unlocked"""
        with self._lock:
            self._state = AccountState.LOCKED
        log_action(self.logger, "info", "Account locked",
                   account_number=self._account_number, action="lock")

    def unlock(self) -> None:
        """Unlock the account"""
        with self._lock:
            self._state = AccountState.UNLOCKED
        log_action(self.logger, "info", "Account unlocked",
                   account_number=self._account_number, action="unlock")

    def _set_balance(self, value: Decimal) -> None:
        with self._lock:
            self._balance = value

    def _rescale_balance(self, target: Currency) -> Decimal:
        """
        Convert the balance into `target` and switch the currency tag

        Returns:
            The factor applied, so variants can rescale their own
            currency-denominated fields identically
        """
        if not isinstance(target, Currency):
            raise InvalidArgumentError(f"Unsupported currency: {target!r}")
        with self._lock:
            factor = conversion_factor(self._currency, target)
            self._set_balance(self._balance * factor)
            self._currency = target
            return factor

    def change_currency(self, target: Currency) -> None:
        """Switch the account to another currency, rescaling the balance"""
        with self._lock:
            source = self._currency
            self._rescale_balance(target)
        self._log_currency_change(source, target)

    def _log_currency_change(self, source: Currency, target: Currency) -> None:
        log_action(
            self.logger, "info", f"Currency changed: {source.code} -> {target.code}",
            account_number=self._account_number, action="change_currency",
            extra={"from": source.code, "to": target.code, "balance": str(self.balance)}
        )

    @abstractmethod
    def debit(self, amount, counterparty_name: str, counterparty_account_number: int,
              counterparty_bank_code: int, reference: str) -> bool:
        """Send a transfer to an external account"""

    @abstractmethod
    def credit(self, amount, counterparty_name: str, counterparty_account_number: int,
               counterparty_bank_code: int, reference: str) -> None:
        """Receive a transfer from an external account"""

    def describe(self) -> str:
        """Multi-line summary for display"""
        with self._lock:
            return (
                f"Account number: {self._account_number}\n"
                f"Owner: {self._owner}\n"
                f"Balance: {Money(self._balance, self._currency).to_string()}\n"
                f"State: {self._state.value}\n"
            )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._account_number}, balance={self._balance}, currency={self._currency.code})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return type(self) is type(other) and self._account_number == other._account_number

    def __hash__(self) -> int:
        return hash((type(self), self._account_number))
