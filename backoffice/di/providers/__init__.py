"""
Providers Package
=================

Dependency injection providers for registering dependencies.
"""
from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .notification_provider import NotificationProvider
from .bank_account_provider import BankAccountProvider
from .kyc_provider import KycProvider
from .support_ticket_provider import SupportTicketProvider

__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "NotificationProvider",
    "BankAccountProvider",
    "KycProvider",
    "SupportTicketProvider",
]
