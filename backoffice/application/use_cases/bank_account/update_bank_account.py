"""
Update Bank Account Use Case
============================

Business use case for editing a bank account and optionally making it
the owner's default.
"""
import logging
from typing import Any, Dict, Optional

from backoffice.domain.constants.bank_account_fields import BankAccountFields
from backoffice.domain.exceptions import DuplicateAccount, NotFound
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.utils.owner_locks import OwnerLockTable

logger = logging.getLogger(__name__)


class UpdateBankAccountUseCase:
    """
    Use case for updating a bank account.

    Empty or missing values leave the stored value unchanged. is_default=False
    never clears the flag: the owner would be left with no default.
    """

    def __init__(self, repository: BankAccountRepository, owner_locks: OwnerLockTable):
        self._repository = repository
        self._owner_locks = owner_locks

    def execute(
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
        Execute the update bank account use case.

        Returns:
            Updated bank account entity

        Raises:
            NotFound: If the owner has no account with this ID
            DuplicateAccount: If the new number/bank pair is already registered
        """
        provided = {
            BankAccountFields.ACCOUNT_NAME: account_name,
            BankAccountFields.ACCOUNT_NUMBER: account_number,
            BankAccountFields.BANK_NAME: bank_name,
            BankAccountFields.ROUTING_NUMBER: routing_number,
            BankAccountFields.SWIFT_CODE: swift_code,
        }
        changes: Dict[str, Any] = {
            key: value.strip()
            for key, value in provided.items()
            if value is not None and value.strip()
        }

        with self._owner_locks.hold(owner_user_id):
            existing = self._repository.find_by_id(owner_user_id, account_id)
            if not existing:
                raise NotFound("Bank account not found")

            new_number = changes.get(BankAccountFields.ACCOUNT_NUMBER, existing.account_number)
            new_bank = changes.get(BankAccountFields.BANK_NAME, existing.bank_name)
            if not existing.matches(new_number, new_bank):
                duplicate = self._repository.find_duplicate(
                    owner_user_id, new_number, new_bank, exclude_id=account_id
                )
                if duplicate:
                    raise DuplicateAccount("Bank account already exists")

            updated = existing
            if changes:
                updated = self._repository.update_fields(owner_user_id, account_id, changes)
                if updated is None:
                    raise NotFound("Bank account not found")

            if is_default and not existing.is_default:
                self._repository.make_sole_default(owner_user_id, account_id)
                updated.is_default = True
                logger.info("Bank account %s is now the default for owner %s", account_id, owner_user_id)

        return updated
