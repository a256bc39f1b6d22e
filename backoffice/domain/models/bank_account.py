"""
Bank Account Model
==================

Domain model representing a payout bank account owned by a user.
This is a pure domain object with no infrastructure dependencies.
"""
import uuid
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from backoffice.domain.exceptions import ValidationError
from backoffice.utils.datetime_utils import now


@dataclass
class BankAccount:
    """
    Bank account domain model.

    At most one account per owner carries is_default=True; the flag is only
    ever changed through the bank account use cases, which hold the owner lock.
    """
    owner_user_id: str
    account_name: str
    account_number: str
    bank_name: str
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    is_default: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    def __post_init__(self) -> None:
        self.account_name = _required(self.account_name, "Account name")
        self.account_number = _required(self.account_number, "Account number")
        self.bank_name = _required(self.bank_name, "Bank name")
        self.routing_number = _optional(self.routing_number)
        self.swift_code = _optional(self.swift_code)

    def matches(self, account_number: str, bank_name: str) -> bool:
        """True if this account has the given number at the given bank."""
        return self.account_number == account_number and self.bank_name == bank_name


def _required(value: Optional[str], label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
