"""
Add Bank Account Use Case
=========================

Business use case for adding a payout bank account to an owner.
"""
import logging
from typing import Optional

from backoffice.domain.exceptions import DuplicateAccount, StoreUnavailable, ValidationError
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.utils.owner_locks import OwnerLockTable

logger = logging.getLogger(__name__)


class AddBankAccountUseCase:
    """
    Use case for adding a bank account.

    The owner's first account always becomes the default, whatever the
    caller asked for. Runs under the owner lock so two concurrent "first
    account" requests cannot both observe an empty account list.
    """

    def __init__(self, repository: BankAccountRepository, owner_locks: OwnerLockTable):
        """
        Initialize use case with repository.

        Args:
            repository: Repository for bank account persistence
            owner_locks: Lock table shared by all bank account use cases
        """
        self._repository = repository
        self._owner_locks = owner_locks

    def _discard(self, account: BankAccount) -> None:
        try:
            self._repository.delete(account.owner_user_id, account.id)
        except StoreUnavailable:
            logger.error(
                "Could not remove bank account %s after a failed default change",
                account.id,
                exc_info=True,
            )

    def execute(
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
        Execute the add bank account use case.

        Args:
            owner_user_id: Owner of the new account
            account_name: Name on the account
            account_number: Account number
            bank_name: Bank name
            routing_number: Optional routing number
            swift_code: Optional SWIFT code
            is_default: Whether the caller asked for this to be the default

        Returns:
            Created bank account entity

        Raises:
            ValidationError: If a required field is missing
            DuplicateAccount: If the owner already has this number at this bank
            StoreUnavailable: If a write fails; the new account is not kept
        """
        if not owner_user_id or not owner_user_id.strip():
            raise ValidationError("Owner user ID is required")

        account = BankAccount(
            owner_user_id=owner_user_id,
            account_name=account_name,
            account_number=account_number,
            bank_name=bank_name,
            routing_number=routing_number,
            swift_code=swift_code,
            is_default=False,
        )

        with self._owner_locks.hold(owner_user_id):
            if self._repository.find_duplicate(owner_user_id, account.account_number, account.bank_name):
                raise DuplicateAccount("Bank account already exists")

            is_first = self._repository.count_by_owner(owner_user_id) == 0

            if is_first:
                # No siblings to clear, so one insert is enough
                account.is_default = True
                created = self._repository.create(account)
            else:
                # Insert as non-default first; if moving the flag then fails the
                # previous default is still in place and the insert is undone
                created = self._repository.create(account)
                if is_default:
                    try:
                        self._repository.make_sole_default(owner_user_id, created.id)
                    except StoreUnavailable:
                        self._discard(created)
                        raise
                    created.is_default = True

        logger.info(
            "Bank account %s added for owner %s (default=%s)",
            created.id,
            owner_user_id,
            created.is_default,
        )
        return created
