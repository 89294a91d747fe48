"""
Currency Module

Fixed set of account currencies with their conversion factors against the
base currency (EUR), plus the Money value type used for display.
NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from enum import Enum
import re

from .errors import InvalidArgumentError

# Set global decimal context for financial precision
getcontext().prec = 28  # High precision for currency rescaling


class Currency(Enum):
    """Account currencies: code, display precision, units per one EUR"""
    EUR = ("EUR", 2, Decimal("1"))        # Euro, base currency
    BGN = ("BGN", 2, Decimal("1.95583"))  # Bulgarian Lev
    DKK = ("DKK", 2, Decimal("7.4604"))   # Danish Krone
    MKD = ("MKD", 2, Decimal("61.62"))    # Macedonian Denar

    def __init__(self, code: str, precision: int, units_per_base: Decimal):
        self.code = code
        self.precision = precision
        self.units_per_base = units_per_base

    @classmethod
    def base(cls) -> 'Currency':
        return cls.EUR

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by its ISO code (case-insensitive)"""
        for currency in cls:
            if currency.code == code.upper():
                return currency
        raise InvalidArgumentError(f"Unknown currency code: {code}")

    @property
    def is_base(self) -> bool:
        return self is Currency.base()

    @property
    def rate(self) -> Decimal:
        """Units of base currency per unit of this currency"""
        return Decimal("1") / self.units_per_base

    def from_base(self, amount: Decimal) -> Decimal:
        """Convert an amount in base currency into this currency"""
        return to_decimal(amount) * self.units_per_base

    def to_base(self, amount: Decimal) -> Decimal:
        """Convert an amount in this currency into base currency"""
        return to_decimal(amount) / self.units_per_base


def conversion_factor(source: Currency, target: Currency) -> Decimal:
    """
    Factor that rescales an amount in `source` into `target`

    Equals rate(source) / rate(target); expressed through units_per_base so
    the base currency (factor 1) composes without rounding.
    """
    if source is target:
        return Decimal("1")
    return target.units_per_base / source.units_per_base


def convert(amount, source: Currency, target: Currency) -> Decimal:
    """Rescale an amount from one currency to another at full precision"""
    return to_decimal(amount) * conversion_factor(source, target)


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and proper precision.
    Used for display; account state keeps full-precision Decimal.
    """
    amount: Decimal
    currency: Currency

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', to_decimal(self.amount))

        # Round to currency precision
        object.__setattr__(self, 'amount', validate_decimal_precision(self.amount, self.currency))

    def __add__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency.code} and {other.currency.code}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency.code} from {self.currency.code}")
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> 'Money':
        return Money(-self.amount, self.currency)

    def __lt__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency.code} and {other.currency.code}")
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency.code} and {other.currency.code}")
        return self.amount <= other.amount

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def convert_to(self, target: Currency) -> 'Money':
        """Convert to another account currency"""
        return Money(convert(self.amount, self.currency, target), target)

    def to_string(self) -> str:
        """Format for display"""
        if self.currency.precision == 0:
            return f"{self.currency.code} {self.amount:,.0f}"
        else:
            return f"{self.currency.code} {self.amount:,.{self.currency.precision}f}"


# Optional currency code or symbol before or after the number
_CURRENCY_AFFIX = r'(?:[A-Za-z]{3}|[€$£])'
_AMOUNT_PATTERN = re.compile(
    r'^' + _CURRENCY_AFFIX + r'?\s*([+-]?)([\d.,]+)([eE][+-]?\d+)?\s*' + _CURRENCY_AFFIX + r'?$'
)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "1,234.56", "1.234,56",
            "12,50", "EUR 10", "1e3"

    Returns:
        Decimal value

    Raises:
        InvalidArgumentError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidArgumentError("Value must be a non-empty string")

    match = _AMOUNT_PATTERN.match(value.strip())
    if not match:
        raise InvalidArgumentError(f"Cannot convert '{value}' to Decimal")
    sign, digits, exponent = match.groups()

    # The separator that appears last is the decimal point
    if ',' in digits and '.' in digits:
        if digits.rfind(',') > digits.rfind('.'):
            digits = digits.replace('.', '').replace(',', '.')
        else:
            digits = digits.replace(',', '')
    elif digits.count(',') == 1:
        # Single comma - could be decimal separator
        parts = digits.split(',')
        if len(parts[1]) <= 2:  # Likely decimal separator
            digits = digits.replace(',', '.')
        else:  # Likely thousands separator
            digits = digits.replace(',', '')
    elif digits.count(',') > 1:
        digits = digits.replace(',', '')

    try:
        result = Decimal(sign + digits + (exponent or ''))
    except InvalidOperation:
        raise InvalidArgumentError(f"Cannot convert '{value}' to Decimal")
    if not result.is_finite():
        raise InvalidArgumentError(f"Cannot convert '{value}' to Decimal")
    return result


def to_decimal(value) -> Decimal:
    """
    Normalise an amount to Decimal

    Accepts Decimal, int, float or numeric text. Floats go through str()
    so 0.1 stays 0.1.

    Raises:
        InvalidArgumentError: For None, booleans, NaN/infinity or non-numeric input
    """
    if value is None or isinstance(value, bool):
        raise InvalidArgumentError(f"Amount must be a number, got {value!r}")
    if isinstance(value, str):
        return decimal_from_string(value)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        raise InvalidArgumentError(f"Amount must be a number, got {type(value).__name__}")
    if not result.is_finite():
        raise InvalidArgumentError(f"Amount must be finite, got {value!r}")
    return result


def validate_decimal_precision(value: Decimal, currency: Currency) -> Decimal:
    """
    Round decimal to currency precision

    Args:
        value: Decimal to round
        currency: Currency defining precision

    Returns:
        Properly rounded Decimal
    """
    return value.quantize(
        Decimal('0.1') ** currency.precision,
        rounding=ROUND_HALF_UP
    )
