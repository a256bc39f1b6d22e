from typing import TYPE_CHECKING
from ...domain.repositories.bank_account_repository import BankAccountRepository
from ...application.services.bank_account_service import BankAccountService
from ...utils.owner_locks import OwnerLockTable

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class BankAccountProvider:
    """Bank account service provider - registers the owner lock table and bank account service"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register bank account service.
        One lock table per process; every bank account command goes through it.
        """
        owner_locks = OwnerLockTable()
        container.register_singleton(OwnerLockTable, owner_locks)

        container.register_singleton(
            BankAccountService,
            BankAccountService(
                bank_account_repository=container.get(BankAccountRepository),
                owner_locks=owner_locks,
            )
        )
