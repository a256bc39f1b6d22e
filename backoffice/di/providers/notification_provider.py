from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.notification_ports import EventPublisher, Notifier
from ...domain.repositories.user_directory import UserDirectory
from ...application.services.notification_dispatcher import NotificationDispatcher
from ...infrastructure.messaging.kafka_notifier import KafkaNotifier

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class NotificationProvider:
    """Notification provider - registers the Kafka notifier and the dispatcher that feeds it"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the notifier and dispatcher.
        The dispatcher is registered twice: as itself (lifecycle) and as the
        EventPublisher the workflows emit into.
        """
        settings = get_settings()

        notifier = KafkaNotifier(settings)
        container.register_singleton(Notifier, notifier)

        dispatcher = NotificationDispatcher(
            notifier=notifier,
            user_directory=container.get(UserDirectory),
            max_attempts=settings.notification_max_attempts,
            retry_delay_seconds=settings.notification_retry_delay_seconds,
        )
        container.register_singleton(NotificationDispatcher, dispatcher)
        container.register_singleton(EventPublisher, dispatcher)
