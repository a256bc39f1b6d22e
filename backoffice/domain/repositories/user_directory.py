"""
User Directory Interface
========================

Read access to owner profiles plus the one profile field the KYC
workflow maintains.
"""
from abc import ABC, abstractmethod
from typing import Optional

from backoffice.domain.models.user import UserProfile, VerificationStatus


class UserDirectory(ABC):

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the user's profile, or None if unknown."""
        pass

    @abstractmethod
    def set_verification_status(self, user_id: str, status: VerificationStatus) -> bool:
        """
        Set the user's verification status.

        Returns:
            True if the user exists, False otherwise
        """
        pass
