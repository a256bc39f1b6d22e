"""
Kafka Notifier
==============

Publishes outbound notification messages (recipient, subject, body) to a
Kafka topic. The mail / in-app delivery service consumes the topic and
owns the actual send.
"""
import json
import logging
import threading
from typing import Any, Dict, Optional

from kafka import KafkaProducer
from kafka.errors import KafkaError

from backoffice.core.config import Settings, get_settings
from backoffice.domain.exceptions import DeliveryError
from backoffice.domain.repositories.notification_ports import Notifier
from backoffice.utils.datetime_utils import now_iso

logger = logging.getLogger(__name__)


class KafkaNotifier(Notifier):
    """
    Notifier backed by a lazily created KafkaProducer.

    The producer is created on first send so the API can start while Kafka
    is still unreachable; a failed creation is retried on the next send.
    """

    def __init__(self, settings: Optional[Settings] = None, producer: Optional[Any] = None):
        self._settings = settings or get_settings()
        self._producer = producer
        self._lock = threading.Lock()

    def _get_producer(self) -> Any:
        """Get or create the Kafka producer."""
        with self._lock:
            if self._producer is None:
                logger.info(
                    "Connecting notification producer to Kafka: %s",
                    self._settings.kafka_bootstrap_servers,
                )
                try:
                    self._producer = KafkaProducer(
                        bootstrap_servers=self._settings.kafka_bootstrap_servers,
                        value_serializer=lambda v: json.dumps(v).encode("utf-8"),
                        # Reliability settings
                        retries=3,
                        acks="all",
                        max_in_flight_requests_per_connection=1,  # Keep per-recipient ordering
                        request_timeout_ms=30000,
                        delivery_timeout_ms=120000,
                    )
                except KafkaError as e:
                    raise DeliveryError(f"Kafka producer unavailable: {e}") from e
            return self._producer

    def _build_payload(self, recipient_contact: str, subject: str, body: str) -> Dict[str, Any]:
        return {
            "notification": {
                "channel": "email",
                "to": recipient_contact,
                "subject": subject,
                "body": body,
            },
            "metadata": {
                "source": "backoffice",
                "timestamp": now_iso(),
            },
        }

    def send(self, recipient_contact: str, subject: str, body: str) -> None:
        """Publish one message and wait for the broker acknowledgement."""
        producer = self._get_producer()
        payload = self._build_payload(recipient_contact, subject, body)

        try:
            # Recipient as key: messages for one recipient land on one partition
            future = producer.send(
                self._settings.kafka_notifications_topic,
                value=payload,
                key=recipient_contact.encode("utf-8"),
            )
            record_metadata = future.get(timeout=self._settings.kafka_send_timeout_seconds)
        except KafkaError as e:
            raise DeliveryError(f"Kafka error sending notification: {e}") from e

        logger.info(
            "Notification '%s' queued for %s (topic=%s partition=%s offset=%s)",
            subject,
            recipient_contact,
            record_metadata.topic,
            record_metadata.partition,
            record_metadata.offset,
        )

    def close(self) -> None:
        with self._lock:
            if self._producer is not None:
                self._producer.close()
                self._producer = None
