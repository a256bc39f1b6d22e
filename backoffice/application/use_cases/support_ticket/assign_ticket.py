"""
Assign Ticket Use Case
======================
"""
import logging

from backoffice.domain.exceptions import Forbidden, NotFound, ValidationError
from backoffice.domain.models.support_ticket import SupportTicket, TicketStatus, can_transition
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository
from backoffice.domain.repositories.user_directory import UserDirectory

logger = logging.getLogger(__name__)


class AssignTicketUseCase:
    """Use case for handing a ticket to a reviewer. Open tickets move to in-progress."""

    def __init__(self, repository: SupportTicketRepository, user_directory: UserDirectory):
        self._repository = repository
        self._user_directory = user_directory

    def execute(self, reviewer: Principal, ticket_id: str, assignee_id: str) -> SupportTicket:
        if not reviewer.is_reviewer:
            raise Forbidden("Only reviewers can assign tickets")
        if not assignee_id or not assignee_id.strip():
            raise ValidationError("Admin ID is required")

        assignee = self._user_directory.get_profile(assignee_id)
        if assignee is None or not assignee.is_reviewer:
            raise ValidationError("Invalid admin ID")

        ticket = self._repository.find_by_id(ticket_id)
        if ticket is None:
            raise NotFound("Ticket not found")

        promote_from = None
        if can_transition(ticket.status, TicketStatus.IN_PROGRESS):
            promote_from = ticket.status

        updated = self._repository.assign(ticket_id, assignee_id, promote_from=promote_from)
        if updated is None:
            raise NotFound("Ticket not found")

        logger.info("Ticket %s assigned to %s by %s", ticket_id, assignee_id, reviewer.user_id)
        return updated
