# Local application imports
from typing import Optional

from .base_container import BaseContainer
from .providers import (
    DatabaseProvider,
    RepositoryProvider,
    NotificationProvider,
    BankAccountProvider,
    KycProvider,
    SupportTicketProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Database connections (DatabaseProvider)
    2. Repositories (RepositoryProvider) - depends on database
    3. Notifier and dispatcher (NotificationProvider) - depends on the user directory
    4. Services (BankAccountProvider, KycProvider, SupportTicketProvider)
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → repositories → notifications → services
        """
        DatabaseProvider.register(self)
        RepositoryProvider.register(self)
        NotificationProvider.register(self)

        BankAccountProvider.register(self)
        KycProvider.register(self)
        SupportTicketProvider.register(self)


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container
