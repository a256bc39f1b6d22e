from typing import TYPE_CHECKING
from ...domain.repositories.support_ticket_repository import SupportTicketRepository
from ...domain.repositories.notification_ports import EventPublisher
from ...domain.repositories.user_directory import UserDirectory
from ...application.services.support_ticket_service import SupportTicketService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class SupportTicketProvider:
    """Support ticket service provider - registers ticket-related services"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """Register support ticket service."""
        container.register_singleton(
            SupportTicketService,
            SupportTicketService(
                ticket_repository=container.get(SupportTicketRepository),
                user_directory=container.get(UserDirectory),
                events=container.get(EventPublisher),
            )
        )
