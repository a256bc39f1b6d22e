"""
Notification Event
==================

Outbound event emitted by a workflow after a transition has been persisted.
Delivery is owned by the notification dispatcher, never by the workflow.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NotificationEvent:
    recipient_user_id: str
    subject: str
    body: str
    kind: str  # e.g. "kyc.approved", "ticket.reply"
    reference_id: Optional[str] = None
