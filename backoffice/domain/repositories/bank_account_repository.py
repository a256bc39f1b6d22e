"""
Bank Account Repository Interface
=================================

Abstract interface for bank account data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from backoffice.domain.models.bank_account import BankAccount


class BankAccountRepository(ABC):
    """
    Abstract repository for bank account persistence operations.

    Every lookup is scoped by owner so one owner can never address
    another owner's accounts.
    """

    @abstractmethod
    def create(self, account: BankAccount) -> BankAccount:
        """
        Insert a new bank account.

        Args:
            account: BankAccount entity to insert (is_default already decided)

        Returns:
            Created bank account entity
        """
        pass

    @abstractmethod
    def find_by_id(self, owner_user_id: str, account_id: str) -> Optional[BankAccount]:
        """
        Find one of the owner's accounts by ID.

        Args:
            owner_user_id: Owner identifier
            account_id: Bank account identifier

        Returns:
            BankAccount if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_owner(self, owner_user_id: str) -> List[BankAccount]:
        """
        Find all accounts for an owner, default first, then newest first.

        Args:
            owner_user_id: Owner identifier

        Returns:
            List of bank account entities
        """
        pass

    @abstractmethod
    def find_duplicate(
        self,
        owner_user_id: str,
        account_number: str,
        bank_name: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[BankAccount]:
        """
        Find an account of the owner with the same number at the same bank.

        Args:
            owner_user_id: Owner identifier
            account_number: Account number to match
            bank_name: Bank name to match
            exclude_id: Account to ignore (the one being updated)

        Returns:
            Matching BankAccount, or None
        """
        pass

    @abstractmethod
    def count_by_owner(self, owner_user_id: str) -> int:
        """Count the owner's accounts."""
        pass

    @abstractmethod
    def update_fields(
        self,
        owner_user_id: str,
        account_id: str,
        fields: Dict[str, Any],
    ) -> Optional[BankAccount]:
        """
        Overwrite descriptive fields of an account (never is_default).

        Args:
            owner_user_id: Owner identifier
            account_id: Bank account identifier
            fields: Field name -> new value

        Returns:
            Updated BankAccount, or None if it does not exist
        """
        pass

    @abstractmethod
    def make_sole_default(self, owner_user_id: str, account_id: str) -> bool:
        """
        Mark account_id as the owner's default and clear the flag on every
        sibling, as a single store write.

        Args:
            owner_user_id: Owner identifier
            account_id: Account that becomes the default

        Returns:
            True if the target account exists, False otherwise
        """
        pass

    @abstractmethod
    def delete(self, owner_user_id: str, account_id: str) -> bool:
        """
        Delete an account.

        Returns:
            True if an account was deleted, False otherwise
        """
        pass
