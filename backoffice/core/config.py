# Standard library imports
import os
from typing import Final, Optional
from dotenv import load_dotenv


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the back-office.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        # Timezone Configuration
        # Default to UTC, but can be set via TIMEZONE env var (e.g., "UTC", "Africa/Lagos")
        self.timezone: Final[str] = os.getenv("TIMEZONE", "UTC")

        # Logging
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("DB_NAME", "backoffice")
        self.mongo_server_selection_timeout_ms: Final[int] = int(
            os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
        )

        # Collection Names
        self.bank_accounts_collection: Final[str] = os.getenv(
            "BANK_ACCOUNTS_COLLECTION", "bank_accounts"
        )
        self.kyc_collection: Final[str] = os.getenv("KYC_COLLECTION", "kyc_submissions")
        self.support_tickets_collection: Final[str] = os.getenv(
            "SUPPORT_TICKETS_COLLECTION", "support_tickets"
        )
        self.users_collection: Final[str] = os.getenv("USERS_COLLECTION", "users")

        # Kafka Configuration (outbound notifications)
        self.kafka_bootstrap_servers: Final[str] = os.getenv(
            "KAFKA_BOOTSTRAP_SERVERS",
            "localhost:9092"
        )
        self.kafka_notifications_topic: Final[str] = os.getenv(
            "NOTIFICATIONS_TOPIC",
            "backoffice-notifications"
        )
        self.kafka_send_timeout_seconds: Final[int] = int(
            os.getenv("KAFKA_SEND_TIMEOUT_SECONDS", "10")
        )

        # Notification Delivery
        self.notification_max_attempts: Final[int] = int(
            os.getenv("NOTIFICATION_MAX_ATTEMPTS", "3")
        )
        self.notification_retry_delay_seconds: Final[float] = float(
            os.getenv("NOTIFICATION_RETRY_DELAY_SECONDS", "1.0")
        )

        # Shown in outbound message text
        self.platform_name: Final[str] = os.getenv("PLATFORM_NAME", "Esthington")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
