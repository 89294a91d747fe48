"""
Account Core

Checking accounts with an overdraft limit, a lock state that blocks outgoing
transfers, and currency change that rescales balance and limit together.
All financial calculations use Decimal.
"""

__version__ = "1.0.0"
