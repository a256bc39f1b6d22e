from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.bank_account_repository import BankAccountRepository
from ...domain.repositories.kyc_repository import KycRepository
from ...domain.repositories.support_ticket_repository import SupportTicketRepository
from ...domain.repositories.user_directory import UserDirectory
from ...infrastructure.db.mongo_bank_account_repository import MongoBankAccountRepository
from ...infrastructure.db.mongo_kyc_repository import MongoKycRepository
from ...infrastructure.db.mongo_support_ticket_repository import MongoSupportTicketRepository
from ...infrastructure.db.mongo_user_directory import MongoUserDirectory

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets database client from database provider and creates repository instances.
        """
        mongo_client = container.get("mongo_client")
        settings = get_settings()

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            BankAccountRepository,
            MongoBankAccountRepository(
                mongo_client.get_collection(settings.bank_accounts_collection)
            )
        )

        container.register_singleton(
            KycRepository,
            MongoKycRepository(mongo_client.get_collection(settings.kyc_collection))
        )

        container.register_singleton(
            SupportTicketRepository,
            MongoSupportTicketRepository(
                mongo_client.get_collection(settings.support_tickets_collection)
            )
        )

        container.register_singleton(
            UserDirectory,
            MongoUserDirectory(mongo_client.get_collection(settings.users_collection))
        )
