"""
Shared enumerations for database models.
"""

import enum


class PaymentMethod(str, enum.Enum):
    """How money moved for a bank ledger or special entry."""
    ONLINE = "Online"
    CASH = "Cash"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
