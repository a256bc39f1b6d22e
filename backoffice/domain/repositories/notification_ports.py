"""
Notification Ports
==================

Contracts between the workflows, the dispatcher and the delivery channel.
"""
from abc import ABC, abstractmethod

from backoffice.domain.models.notification import NotificationEvent


class Notifier(ABC):
    """Delivery channel for a single message."""

    @abstractmethod
    def send(self, recipient_contact: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Raises:
            DeliveryError: If the message could not be handed to the channel
        """
        pass


class EventPublisher(ABC):
    """Sink for events emitted by the workflows after a successful write."""

    @abstractmethod
    def publish(self, event: NotificationEvent) -> None:
        """Accept an event for best-effort delivery. Must not raise."""
        pass
