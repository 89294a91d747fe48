"""
Checking Account Module

Checking account with an overdraft limit. Transfers go to or come from
accounts at other banks; only the local balance changes.
"""

from decimal import Decimal
from typing import Optional

from .accounts import Account, validate_transfer
from .config import get_config
from .currency import Currency, Money, to_decimal
from .customers import Customer, SAMPLE_CUSTOMER
from .errors import AccountLockedError, InvalidArgumentError
from .logging_config import log_action


def _validate_overdraft_limit(value) -> Decimal:
    limit = to_decimal(value)
    if limit < 0:
        raise InvalidArgumentError(f"Overdraft limit must not be negative: {limit}")
    return limit


class CheckingAccount(Account):
    """
    Account whose balance may go negative down to -overdraft_limit
    """

    def __init__(self, owner: Customer, account_number: int, overdraft_limit,
                 currency: Currency = Currency.EUR):
        limit = _validate_overdraft_limit(overdraft_limit)
        super().__init__(owner, account_number, currency)
        self._overdraft_limit = limit

    @classmethod
    def standard(cls, owner: Optional[Customer] = None) -> 'CheckingAccount':
        """
        Standard checking account with the configured defaults

        Owner defaults to the sample customer; account number, overdraft
        limit and currency come from the configuration.
        """
        cfg = get_config()
        return cls(
            owner or SAMPLE_CUSTOMER,
            cfg.default_account_number,
            cfg.default_overdraft_limit,
            Currency.from_code(cfg.default_currency),
        )

    @property
    def overdraft_limit(self) -> Decimal:
        with self._lock:
            return self._overdraft_limit

    @overdraft_limit.setter
    def overdraft_limit(self, value) -> None:
        self.set_overdraft_limit(value)

    def set_overdraft_limit(self, value) -> None:
        """
        Replace the overdraft limit

        Raises:
            InvalidArgumentError: If the limit is negative; the old limit stays
        """
        limit = _validate_overdraft_limit(value)
        with self._lock:
            previous = self._overdraft_limit
            self._overdraft_limit = limit
        log_action(
            self.logger, "info", "Overdraft limit changed",
            account_number=self.account_number, action="set_overdraft_limit",
            extra={"from": str(previous), "to": str(limit)}
        )

    def can_afford(self, amount) -> bool:
        """Whether debiting `amount` keeps the balance within the overdraft limit"""
        value = to_decimal(amount)
        with self._lock:
            return self._balance - value >= -self._overdraft_limit

    def debit(self, amount, counterparty_name: str, counterparty_account_number: int,
              counterparty_bank_code: int, reference: str) -> bool:
        """
        Send a transfer to an external account

        Args:
            amount: Amount to send, not negative
            counterparty_name: Recipient name
            counterparty_account_number: Recipient account number
            counterparty_bank_code: Recipient bank code
            reference: Payment reference

        Returns:
            True if the balance was reduced, False if the overdraft limit
            does not cover the amount (balance unchanged)

        Raises:
            AccountLockedError: If the account is locked, checked first
            InvalidArgumentError: If amount, name or reference is malformed
        """
        with self._lock:
            if self.is_locked:
                log_action(
                    self.logger, "warning", "Debit rejected: account locked",
                    account_number=self.account_number, action="debit",
                    extra={"reference": reference}
                )
                raise AccountLockedError(self.account_number)

            value = validate_transfer(amount, counterparty_name, reference)
            details = {
                "amount": str(value),
                "currency": self.currency.code,
                "counterparty": counterparty_name,
                "counterparty_account": counterparty_account_number,
                "counterparty_bank": counterparty_bank_code,
                "reference": reference,
            }

            if not self.can_afford(value):
                log_action(
                    self.logger, "info", "Debit declined: insufficient funds",
                    account_number=self.account_number, action="debit", extra=details
                )
                return False

            self._set_balance(self._balance - value)
            log_action(
                self.logger, "info", "Debit completed",
                account_number=self.account_number, action="debit", extra=details
            )
            return True

    def credit(self, amount, counterparty_name: str, counterparty_account_number: int,
               counterparty_bank_code: int, reference: str) -> None:
        """
        Receive a transfer from an external account

        Permitted while the account is locked.

        Raises:
            InvalidArgumentError: If amount, name or reference is malformed
        """
        value = validate_transfer(amount, counterparty_name, reference)
        with self._lock:
            self._set_balance(self._balance + value)
        log_action(
            self.logger, "info", "Credit received",
            account_number=self.account_number, action="credit",
            extra={
                "amount": str(value),
                "currency": self.currency.code,
                "counterparty": counterparty_name,
                "counterparty_account": counterparty_account_number,
                "counterparty_bank": counterparty_bank_code,
                "reference": reference,
            }
        )

    def change_currency(self, target: Currency) -> None:
        """Switch currency, rescaling the balance and the overdraft limit"""
        with self._lock:
            source = self.currency
            factor = self._rescale_balance(target)
            self._overdraft_limit = self._overdraft_limit * factor
        self._log_currency_change(source, target)

    def describe(self) -> str:
        with self._lock:
            limit = Money(self._overdraft_limit, self.currency).to_string()
            return (
                "-- CHECKING ACCOUNT --\n"
                + super().describe()
                + f"Overdraft limit: {limit}\n"
            )
