"""
Notification Dispatcher
=======================

Owns delivery of the NotificationEvents emitted by the workflows.

- Resolves the recipient's contact address through the user directory
- Hands the message to the Notifier with bounded retry
- Logs and drops messages that still fail

Events are queued and delivered by a background worker thread once the
dispatcher is started; before start() (scripts, tests) they are delivered
inline. Either way a delivery problem never reaches the workflow that
emitted the event.
"""
import logging
import threading
import time
from queue import Queue
from typing import Optional

from backoffice.domain.exceptions import DeliveryError, StoreUnavailable
from backoffice.domain.models.notification import NotificationEvent
from backoffice.domain.repositories.notification_ports import EventPublisher, Notifier
from backoffice.domain.repositories.user_directory import UserDirectory

logger = logging.getLogger(__name__)

_STOP = object()


class NotificationDispatcher(EventPublisher):
    """Best-effort delivery of workflow notification events."""

    def __init__(
        self,
        notifier: Notifier,
        user_directory: UserDirectory,
        max_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        self._notifier = notifier
        self._user_directory = user_directory
        self._max_attempts = max(1, max_attempts)
        self._retry_delay_seconds = retry_delay_seconds
        self._queue: Queue = Queue()
        self._worker: Optional[threading.Thread] = None
        self.running = False

    def start(self) -> None:
        """Start the background delivery worker."""
        if self.running:
            return
        self.running = True
        self._worker = threading.Thread(
            target=self._run, name="notification-dispatcher", daemon=True
        )
        self._worker.start()
        logger.info("Notification dispatcher started")

    def stop(self, timeout: float = 5.0) -> None:
        """Deliver what is already queued, then stop the worker."""
        if not self.running:
            return
        self.running = False
        self._queue.put(_STOP)
        if self._worker is not None:
            self._worker.join(timeout=timeout)
            self._worker = None
        logger.info("Notification dispatcher stopped")

    def publish(self, event: NotificationEvent) -> None:
        if self.running:
            self._queue.put(event)
        else:
            self.deliver(event)

    def deliver(self, event: NotificationEvent) -> bool:
        """
        Deliver one event.

        Returns:
            True if the Notifier accepted the message, False if it was dropped
        """
        try:
            profile = self._user_directory.get_profile(event.recipient_user_id)
        except StoreUnavailable:
            logger.warning(
                "Dropping %s notification: recipient %s could not be looked up",
                event.kind,
                event.recipient_user_id,
            )
            return False

        if profile is None or not profile.email:
            logger.info(
                "Skipping %s notification: no contact address for user %s",
                event.kind,
                event.recipient_user_id,
            )
            return False

        for attempt in range(1, self._max_attempts + 1):
            try:
                self._notifier.send(profile.email, event.subject, event.body)
                return True
            except DeliveryError as e:
                logger.warning(
                    "Delivery attempt %d/%d for %s notification to %s failed: %s",
                    attempt,
                    self._max_attempts,
                    event.kind,
                    event.recipient_user_id,
                    e,
                )
                if attempt < self._max_attempts:
                    time.sleep(self._retry_delay_seconds)

        logger.error(
            "Giving up on %s notification for user %s (reference=%s)",
            event.kind,
            event.recipient_user_id,
            event.reference_id,
        )
        return False

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is _STOP:
                    return
                self.deliver(event)
            except Exception:
                # Keep the worker alive for the next event
                logger.exception("Unexpected error delivering notification")
            finally:
                self._queue.task_done()
