"""
Customer Module

Account owners. An account keeps a reference to its customer; it never
copies or owns the customer record.
"""

from datetime import date
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class Customer:
    """
    Account owner, compared by value
    """
    first_name: str
    last_name: str
    address: Optional[str] = None
    date_of_birth: Optional[date] = None

    def __post_init__(self):
        if not self.first_name or not self.first_name.strip():
            raise InvalidArgumentError("Customer first name is required")
        if not self.last_name or not self.last_name.strip():
            raise InvalidArgumentError("Customer last name is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return self.full_name


# Placeholder owner for the standard checking account
SAMPLE_CUSTOMER = Customer(
    first_name="Max",
    last_name="Mustermann",
    address="Musterstrasse 1, 12345 Musterstadt",
    date_of_birth=date(1976, 3, 13),
)
