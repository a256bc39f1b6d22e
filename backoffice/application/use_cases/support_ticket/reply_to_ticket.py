"""
Reply To Ticket Use Case
========================

Business use case for appending a message to a ticket thread.
"""
import logging
from typing import List, Optional

from backoffice.domain.exceptions import Forbidden, NotFound, TicketClosed, ValidationError
from backoffice.domain.models.notification import NotificationEvent
from backoffice.domain.models.support_ticket import (
    SupportTicket,
    TicketMessage,
    TicketStatus,
    can_transition,
)
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.notification_ports import EventPublisher
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository

logger = logging.getLogger(__name__)


class ReplyToTicketUseCase:
    """
    Use case for replying to a ticket.

    The thread is append-only and closed tickets refuse replies. The first
    reviewer to answer an open ticket moves it to in-progress and, when it
    has no assignee yet, becomes the assignee.
    """

    def __init__(self, repository: SupportTicketRepository, events: EventPublisher):
        self._repository = repository
        self._events = events

    def execute(
        self,
        actor: Principal,
        ticket_id: str,
        text: str,
        attachments: Optional[List[str]] = None,
    ) -> SupportTicket:
        """
        Execute the reply use case.

        Args:
            actor: Ticket owner or a reviewer
            ticket_id: Ticket identifier
            text: Message text
            attachments: Stored references of uploaded attachments

        Returns:
            The ticket after the reply

        Raises:
            ValidationError: If the message text is empty
            NotFound: If the ticket does not exist
            Forbidden: If the actor is neither the owner nor a reviewer
            TicketClosed: If the ticket is closed
        """
        if not text or not text.strip():
            raise ValidationError("Message is required")

        ticket = self._repository.find_by_id(ticket_id)
        if ticket is None:
            raise NotFound("Ticket not found")
        if not ticket.is_owned_by(actor.user_id) and not actor.is_reviewer:
            raise Forbidden("You are not authorized to reply to this ticket")
        if ticket.is_closed:
            raise TicketClosed("Cannot reply to a closed ticket")

        message = TicketMessage(
            sender_id=actor.user_id,
            text=text,
            attachments=list(attachments or []),
        )
        promote_from = None
        if actor.is_reviewer and can_transition(ticket.status, TicketStatus.IN_PROGRESS):
            promote_from = ticket.status

        updated = self._repository.append_message(
            ticket_id,
            message,
            responder_id=actor.user_id if actor.is_reviewer else None,
            promote_from=promote_from,
        )
        if updated is None:
            # Closed (or removed) between the read and the write
            if self._repository.find_by_id(ticket_id) is None:
                raise NotFound("Ticket not found")
            raise TicketClosed("Cannot reply to a closed ticket")

        logger.info(
            "Reply added to ticket %s by %s (status=%s, assigned_to=%s)",
            ticket_id,
            actor.user_id,
            updated.status.value,
            updated.assigned_to,
        )

        recipient_id = updated.owner_user_id if actor.is_reviewer else updated.assigned_to
        if recipient_id and recipient_id != actor.user_id:
            self._events.publish(
                NotificationEvent(
                    recipient_user_id=recipient_id,
                    subject=f"New reply to your support ticket: {updated.subject}",
                    body="There is a new reply to your support ticket. Please log in to view the message.",
                    kind="ticket.reply",
                    reference_id=updated.id,
                )
            )
        return updated
