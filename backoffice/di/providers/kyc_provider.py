from typing import TYPE_CHECKING
from ...domain.repositories.kyc_repository import KycRepository
from ...domain.repositories.notification_ports import EventPublisher
from ...domain.repositories.user_directory import UserDirectory
from ...application.services.kyc_service import KycService

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class KycProvider:
    """KYC service provider - registers KYC-related services"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """Register KYC service."""
        container.register_singleton(
            KycService,
            KycService(
                kyc_repository=container.get(KycRepository),
                user_directory=container.get(UserDirectory),
                events=container.get(EventPublisher),
            )
        )
