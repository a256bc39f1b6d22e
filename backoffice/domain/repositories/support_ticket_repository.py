"""
Support Ticket Repository Interface
===================================

Abstract interface for support ticket data access.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from backoffice.domain.models.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketMessage,
    TicketPriority,
    TicketStatus,
)


class SupportTicketRepository(ABC):
    """
    Abstract repository for support ticket persistence operations.

    Each mutating method is a single-record atomic write.
    """

    @abstractmethod
    def create(self, ticket: SupportTicket) -> SupportTicket:
        pass

    @abstractmethod
    def find_by_id(self, ticket_id: str) -> Optional[SupportTicket]:
        pass

    @abstractmethod
    def find_many(
        self,
        owner_user_id: Optional[str] = None,
        status: Optional[TicketStatus] = None,
        category: Optional[TicketCategory] = None,
        priority: Optional[TicketPriority] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[SupportTicket]:
        """List tickets, most recently updated first."""
        pass

    @abstractmethod
    def count(
        self,
        owner_user_id: Optional[str] = None,
        status: Optional[TicketStatus] = None,
        category: Optional[TicketCategory] = None,
        priority: Optional[TicketPriority] = None,
    ) -> int:
        pass

    @abstractmethod
    def append_message(
        self,
        ticket_id: str,
        message: TicketMessage,
        responder_id: Optional[str] = None,
        promote_from: Optional[TicketStatus] = None,
    ) -> Optional[SupportTicket]:
        """
        Append a message unless the ticket is closed.

        When responder_id and promote_from are both given and the ticket is
        still in promote_from, the same write moves it to in-progress and
        assigns it to responder_id if it has no assignee yet.

        Args:
            ticket_id: Ticket identifier
            message: Message to append
            responder_id: Reviewer who replied, or None for an owner reply
            promote_from: Status the caller found and may move to in-progress

        Returns:
            The updated ticket, or None if it is missing or closed
        """
        pass

    @abstractmethod
    def assign(
        self,
        ticket_id: str,
        assignee_id: str,
        promote_from: Optional[TicketStatus] = None,
    ) -> Optional[SupportTicket]:
        """
        Set the assignee and, if the ticket is still in promote_from, move it
        to in-progress in the same write.

        Returns:
            The updated ticket, or None if it does not exist
        """
        pass

    @abstractmethod
    def update(self, ticket_id: str, changes: Dict[str, Any]) -> Optional[SupportTicket]:
        """
        Unconditionally set fields on a ticket.

        Returns:
            The updated ticket, or None if it does not exist
        """
        pass
