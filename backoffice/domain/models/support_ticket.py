"""
Support Ticket Model
====================

Support ticket with an append-only message thread.

Normal lifecycle:
    OPEN → IN_PROGRESS → RESOLVED | CLOSED
CLOSED accepts no further messages. Reviewers may still force any status
through the admin status update (see UpdateTicketStatusUseCase).
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from backoffice.utils.datetime_utils import now


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketCategory(str, Enum):
    ACCOUNT = "account"
    PAYMENT = "payment"
    PROPERTY = "property"
    INVESTMENT = "investment"
    TECHNICAL = "technical"
    OTHER = "other"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Transitions reachable through replies and assignment
ALLOWED_TRANSITIONS: Dict[Optional[TicketStatus], List[TicketStatus]] = {
    None: [TicketStatus.OPEN],
    TicketStatus.OPEN: [TicketStatus.IN_PROGRESS],
    TicketStatus.IN_PROGRESS: [TicketStatus.RESOLVED, TicketStatus.CLOSED],
    TicketStatus.RESOLVED: [],
    TicketStatus.CLOSED: [],
}


def can_transition(from_status: Optional[TicketStatus], to_status: TicketStatus) -> bool:
    """Validate if a ticket status transition is allowed on the normal path."""
    return to_status in ALLOWED_TRANSITIONS.get(from_status, [])


@dataclass
class TicketMessage:
    """One entry in a ticket thread."""
    sender_id: str
    text: str
    attachments: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: now())


@dataclass
class SupportTicket:
    """Support ticket domain model."""
    owner_user_id: str
    subject: str
    category: TicketCategory
    priority: TicketPriority = TicketPriority.MEDIUM
    status: TicketStatus = TicketStatus.OPEN
    messages: List[TicketMessage] = field(default_factory=list)
    assigned_to: Optional[str] = None
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    @property
    def is_closed(self) -> bool:
        return self.status == TicketStatus.CLOSED

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_user_id == user_id
