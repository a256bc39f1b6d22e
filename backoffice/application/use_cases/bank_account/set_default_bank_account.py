"""
Set Default Bank Account Use Case
=================================
"""
import logging

from backoffice.domain.exceptions import NotFound
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.utils.owner_locks import OwnerLockTable

logger = logging.getLogger(__name__)


class SetDefaultBankAccountUseCase:
    """Use case for choosing the owner's default payout account."""

    def __init__(self, repository: BankAccountRepository, owner_locks: OwnerLockTable):
        self._repository = repository
        self._owner_locks = owner_locks

    def execute(self, owner_user_id: str, account_id: str) -> BankAccount:
        with self._owner_locks.hold(owner_user_id):
            account = self._repository.find_by_id(owner_user_id, account_id)
            if not account:
                raise NotFound("Bank account not found")

            if not self._repository.make_sole_default(owner_user_id, account_id):
                raise NotFound("Bank account not found")

        account.is_default = True
        logger.info("Bank account %s is now the default for owner %s", account_id, owner_user_id)
        return account
