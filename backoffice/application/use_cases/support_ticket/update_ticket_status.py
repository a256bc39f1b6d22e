"""
Update Ticket Status Use Case
=============================

Reviewer override of a ticket's status. Any enumerated status may be set
from any current status, including reopening a closed ticket.
"""
import logging

from backoffice.domain.constants.ticket_fields import TicketFields
from backoffice.domain.exceptions import Forbidden, NotFound, ValidationError
from backoffice.domain.models.notification import NotificationEvent
from backoffice.domain.models.support_ticket import SupportTicket, TicketStatus
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.notification_ports import EventPublisher
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository
from backoffice.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class UpdateTicketStatusUseCase:
    """
    Use case for the reviewer status override.

    Bypasses the normal-path transition table and notifies the owner of the
    new status.
    """

    def __init__(self, repository: SupportTicketRepository, events: EventPublisher):
        self._repository = repository
        self._events = events

    def execute(self, reviewer: Principal, ticket_id: str, new_status: str) -> SupportTicket:
        """
        Set a ticket's status.

        closed_at / closed_by are recorded when closing and cleared for any
        other status.

        Raises:
            Forbidden: If the principal is not a reviewer
            ValidationError: If new_status is not a ticket status
            NotFound: If the ticket does not exist
        """
        if not reviewer.is_reviewer:
            raise Forbidden("Only reviewers can change ticket status")

        try:
            status = TicketStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status")

        if status == TicketStatus.CLOSED:
            changes = {
                TicketFields.STATUS: status,
                TicketFields.CLOSED_AT: now(),
                TicketFields.CLOSED_BY: reviewer.user_id,
            }
        else:
            changes = {
                TicketFields.STATUS: status,
                TicketFields.CLOSED_AT: None,
                TicketFields.CLOSED_BY: None,
            }

        updated = self._repository.update(ticket_id, changes)
        if updated is None:
            raise NotFound("Ticket not found")

        logger.info("Ticket %s set to %s by %s", ticket_id, status.value, reviewer.user_id)
        self._events.publish(
            NotificationEvent(
                recipient_user_id=updated.owner_user_id,
                subject=f"Support ticket status updated: {updated.subject}",
                body=f"Your support ticket status has been updated to: {status.value}",
                kind="ticket.status",
                reference_id=updated.id,
            )
        )
        return updated
