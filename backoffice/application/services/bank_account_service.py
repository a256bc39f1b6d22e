"""
Bank Account Service
====================

Application service that coordinates bank account operations.
All mutating operations share one owner lock table, which keeps the
"exactly one default account per owner" rule intact under concurrency.
"""
from typing import List, Optional

from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.application.use_cases.bank_account.add_bank_account import AddBankAccountUseCase
from backoffice.application.use_cases.bank_account.update_bank_account import UpdateBankAccountUseCase
from backoffice.application.use_cases.bank_account.delete_bank_account import DeleteBankAccountUseCase
from backoffice.application.use_cases.bank_account.set_default_bank_account import (
    SetDefaultBankAccountUseCase,
)
from backoffice.utils.owner_locks import OwnerLockTable


class BankAccountService:
    """
    Application service for bank account operations.

    This service coordinates the bank account use cases and provides
    a high-level interface for payout account management.
    """

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        owner_locks: Optional[OwnerLockTable] = None,
    ):
        """
        Initialize service with repository.

        Args:
            bank_account_repository: Repository for bank account persistence
            owner_locks: Lock table (one per process; created if not given)
        """
        self._repository = bank_account_repository
        self._owner_locks = owner_locks or OwnerLockTable()
        self._add_use_case = AddBankAccountUseCase(bank_account_repository, self._owner_locks)
        self._update_use_case = UpdateBankAccountUseCase(bank_account_repository, self._owner_locks)
        self._delete_use_case = DeleteBankAccountUseCase(bank_account_repository, self._owner_locks)
        self._set_default_use_case = SetDefaultBankAccountUseCase(
            bank_account_repository, self._owner_locks
        )

    def list_accounts(self, owner_user_id: str) -> List[BankAccount]:
        """
        List the owner's accounts, default first.

        Args:
            owner_user_id: Owner identifier

        Returns:
            List of bank account entities
        """
        return self._repository.find_by_owner(owner_user_id)

    def add_account(
        self,
        owner_user_id: str,
        account_name: str,
        account_number: str,
        bank_name: str,
        routing_number: Optional[str] = None,
        swift_code: Optional[str] = None,
        is_default: bool = False,
    ) -> BankAccount:
        """
        Add a bank account. The owner's first account is always the default.

        Returns:
            Created bank account entity
        """
        return self._add_use_case.execute(
            owner_user_id=owner_user_id,
            account_name=account_name,
            account_number=account_number,
            bank_name=bank_name,
            routing_number=routing_number,
            swift_code=swift_code,
            is_default=is_default,
        )

    def update_account(
        self,
        owner_user_id: str,
        account_id: str,
        account_name: Optional[str] = None,
        account_number: Optional[str] = None,
        bank_name: Optional[str] = None,
        routing_number: Optional[str] = None,
        swift_code: Optional[str] = None,
        is_default: Optional[bool] = None,
    ) -> BankAccount:
        """
        Update a bank account and optionally make it the default.

        Returns:
            Updated bank account entity
        """
        return self._update_use_case.execute(
            owner_user_id=owner_user_id,
            account_id=account_id,
            account_name=account_name,
            account_number=account_number,
            bank_name=bank_name,
            routing_number=routing_number,
            swift_code=swift_code,
            is_default=is_default,
        )

    def delete_account(self, owner_user_id: str, account_id: str) -> Optional[BankAccount]:
        """
        Delete a bank account.

        Returns:
            The account promoted to default, if any
        """
        return self._delete_use_case.execute(owner_user_id, account_id)

    def set_default(self, owner_user_id: str, account_id: str) -> BankAccount:
        """
        Make an account the owner's default.

        Returns:
            The new default account
        """
        return self._set_default_use_case.execute(owner_user_id, account_id)
