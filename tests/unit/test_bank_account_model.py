"""Unit tests for the BankAccount model"""

import pytest

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.models.bank_account import BankAccount


class TestBankAccountModel:
    """Test field normalization and required fields"""

    def test_strips_fields(self):
        """Test whitespace is trimmed and blank optional fields become None"""
        account = BankAccount(
            owner_user_id="owner-1",
            account_name="  Jane Doe ",
            account_number=" 123 ",
            bank_name="Bank A ",
            routing_number="   ",
            swift_code=" BICXX ",
        )
        assert account.account_name == "Jane Doe"
        assert account.account_number == "123"
        assert account.bank_name == "Bank A"
        assert account.routing_number is None
        assert account.swift_code == "BICXX"
        assert account.is_default is False

    @pytest.mark.parametrize("field", ["account_name", "account_number", "bank_name"])
    def test_required_fields(self, field):
        """Test missing required fields raise ValidationError"""
        values = dict(account_name="Jane", account_number="123", bank_name="Bank A")
        values[field] = "  "
        with pytest.raises(ValidationError):
            BankAccount(owner_user_id="owner-1", **values)

    def test_matches(self):
        """Test number/bank matching"""
        account = BankAccount(
            owner_user_id="owner-1", account_name="Jane", account_number="123", bank_name="Bank A"
        )
        assert account.matches("123", "Bank A") is True
        assert account.matches("123", "Bank B") is False
