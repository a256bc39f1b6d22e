"""
Support Ticket Service
======================

Application service for the support ticket lifecycle.
"""
from typing import List, Optional, Tuple

from backoffice.domain.exceptions import Forbidden, NotFound, ValidationError
from backoffice.domain.models.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.notification_ports import EventPublisher
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository
from backoffice.domain.repositories.user_directory import UserDirectory
from backoffice.application.use_cases.support_ticket.create_ticket import CreateTicketUseCase
from backoffice.application.use_cases.support_ticket.reply_to_ticket import ReplyToTicketUseCase
from backoffice.application.use_cases.support_ticket.update_ticket_status import (
    UpdateTicketStatusUseCase,
)
from backoffice.application.use_cases.support_ticket.assign_ticket import AssignTicketUseCase


def _parse_filter(enum_type, value: Optional[str], label: str):
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}")


class SupportTicketService:
    """
    Application service for support tickets.

    This service coordinates the ticket use cases and the read paths, which
    apply the same owner-or-reviewer visibility rule as replies.
    """

    def __init__(
        self,
        ticket_repository: SupportTicketRepository,
        user_directory: UserDirectory,
        events: EventPublisher,
    ):
        self._repository = ticket_repository
        self._create_use_case = CreateTicketUseCase(ticket_repository)
        self._reply_use_case = ReplyToTicketUseCase(ticket_repository, events)
        self._status_use_case = UpdateTicketStatusUseCase(ticket_repository, events)
        self._assign_use_case = AssignTicketUseCase(ticket_repository, user_directory)

    def create_ticket(
        self,
        owner_user_id: str,
        subject: str,
        category: str,
        message: str,
        priority: Optional[str] = None,
        attachments: Optional[List[str]] = None,
    ) -> SupportTicket:
        return self._create_use_case.execute(
            owner_user_id=owner_user_id,
            subject=subject,
            category=category,
            message=message,
            priority=priority,
            attachments=attachments,
        )

    def reply(
        self,
        actor: Principal,
        ticket_id: str,
        text: str,
        attachments: Optional[List[str]] = None,
    ) -> SupportTicket:
        return self._reply_use_case.execute(actor, ticket_id, text, attachments)

    def set_status(self, reviewer: Principal, ticket_id: str, new_status: str) -> SupportTicket:
        return self._status_use_case.execute(reviewer, ticket_id, new_status)

    def assign(self, reviewer: Principal, ticket_id: str, assignee_id: str) -> SupportTicket:
        return self._assign_use_case.execute(reviewer, ticket_id, assignee_id)

    def get_ticket(self, actor: Principal, ticket_id: str) -> SupportTicket:
        """
        Get a ticket with its full thread.

        Raises:
            NotFound: If the ticket does not exist
            Forbidden: If the actor is neither the owner nor a reviewer
        """
        ticket = self._repository.find_by_id(ticket_id)
        if ticket is None:
            raise NotFound("Ticket not found")
        if not ticket.is_owned_by(actor.user_id) and not actor.is_reviewer:
            raise Forbidden("You are not authorized to view this ticket")
        return ticket

    def list_tickets(
        self,
        actor: Principal,
        status: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[SupportTicket], int]:
        """
        List tickets, most recently updated first.

        Owners only ever see their own tickets; reviewers see everyone's.

        Returns:
            (tickets on the page, total matching tickets)
        """
        filters = dict(
            owner_user_id=None if actor.is_reviewer else actor.user_id,
            status=_parse_filter(TicketStatus, status, "status"),
            category=_parse_filter(TicketCategory, category, "category"),
            priority=_parse_filter(TicketPriority, priority, "priority"),
        )
        page = max(page, 1)
        limit = max(limit, 1)
        tickets = self._repository.find_many(skip=(page - 1) * limit, limit=limit, **filters)
        return tickets, self._repository.count(**filters)
