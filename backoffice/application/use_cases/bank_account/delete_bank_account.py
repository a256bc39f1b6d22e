"""
Delete Bank Account Use Case
============================

Business use case for removing a bank account.
"""
import logging
from typing import Optional

from backoffice.domain.exceptions import NotFound
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.utils.owner_locks import OwnerLockTable

logger = logging.getLogger(__name__)


class DeleteBankAccountUseCase:
    """
    Use case for deleting a bank account.

    When the default account is deleted another of the owner's accounts is
    promoted first, then the record is removed. A failure between the two
    steps leaves an extra non-default account behind, never zero defaults.
    """

    def __init__(self, repository: BankAccountRepository, owner_locks: OwnerLockTable):
        self._repository = repository
        self._owner_locks = owner_locks

    def execute(self, owner_user_id: str, account_id: str) -> Optional[BankAccount]:
        """
        Execute the delete bank account use case.

        Args:
            owner_user_id: Owner identifier
            account_id: Account to delete

        Returns:
            The account promoted to default, if the deleted one was the default
            and another account exists; None otherwise

        Raises:
            NotFound: If the owner has no account with this ID
        """
        with self._owner_locks.hold(owner_user_id):
            existing = self._repository.find_by_id(owner_user_id, account_id)
            if not existing:
                raise NotFound("Bank account not found")

            successor: Optional[BankAccount] = None
            if existing.is_default:
                successor = next(
                    (a for a in self._repository.find_by_owner(owner_user_id) if a.id != account_id),
                    None,
                )
                if successor:
                    self._repository.make_sole_default(owner_user_id, successor.id)
                    successor.is_default = True

            if not self._repository.delete(owner_user_id, account_id):
                raise NotFound("Bank account not found")

        logger.info(
            "Bank account %s deleted for owner %s (new default=%s)",
            account_id,
            owner_user_id,
            successor.id if successor else None,
        )
        return successor
