"""
Create Ticket Use Case
======================

Business use case for an owner opening a support ticket.
"""
import logging
from typing import List, Optional

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.models.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketMessage,
    TicketPriority,
)
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository

logger = logging.getLogger(__name__)


class CreateTicketUseCase:
    """Use case for creating a support ticket with its first message."""

    def __init__(self, repository: SupportTicketRepository):
        self._repository = repository

    def execute(
        self,
        owner_user_id: str,
        subject: str,
        category: str,
        message: str,
        priority: Optional[str] = None,
        attachments: Optional[List[str]] = None,
    ) -> SupportTicket:
        """
        Execute the create ticket use case.

        Args:
            owner_user_id: Owner opening the ticket
            subject: Ticket subject
            category: One of the TicketCategory values
            message: Text of the first message
            priority: One of the TicketPriority values (defaults to medium)
            attachments: Stored references of uploaded attachments

        Returns:
            Created ticket, status open

        Raises:
            ValidationError: If a required field is missing or an enum value is invalid
        """
        required = (owner_user_id, subject, category, message)
        if any(not value or not value.strip() for value in required):
            raise ValidationError("Please provide all required fields")

        try:
            parsed_category = TicketCategory(category)
        except ValueError:
            raise ValidationError("Invalid category")

        parsed_priority = TicketPriority.MEDIUM
        if priority:
            try:
                parsed_priority = TicketPriority(priority)
            except ValueError:
                raise ValidationError("Invalid priority")

        ticket = SupportTicket(
            owner_user_id=owner_user_id,
            subject=subject.strip(),
            category=parsed_category,
            priority=parsed_priority,
            messages=[
                TicketMessage(
                    sender_id=owner_user_id,
                    text=message,
                    attachments=list(attachments or []),
                )
            ],
        )
        created = self._repository.create(ticket)
        logger.info("Support ticket %s opened by %s", created.id, owner_user_id)
        return created
