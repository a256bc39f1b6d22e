"""
KYC Repository Interface
========================

Abstract interface for KYC submission data access.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from backoffice.domain.models.kyc_submission import KycStatus, KycSubmission


class KycRepository(ABC):
    """Abstract repository for KYC submissions (one record per owner)."""

    @abstractmethod
    def create(self, submission: KycSubmission) -> Optional[KycSubmission]:
        """
        Insert a first submission for an owner.

        Returns:
            The created submission, or None if the owner already has one
        """
        pass

    @abstractmethod
    def find_by_id(self, submission_id: str) -> Optional[KycSubmission]:
        pass

    @abstractmethod
    def find_by_owner(self, owner_user_id: str) -> Optional[KycSubmission]:
        pass

    @abstractmethod
    def find_many(
        self,
        status: Optional[KycStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[KycSubmission]:
        """List submissions, newest submitted first."""
        pass

    @abstractmethod
    def count(self, status: Optional[KycStatus] = None) -> int:
        pass

    @abstractmethod
    def transition(
        self,
        submission_id: str,
        expected_status: KycStatus,
        changes: Dict[str, Any],
    ) -> Optional[KycSubmission]:
        """
        Apply changes only if the submission is still in expected_status.

        Keys mapped to None are removed from the record.

        Args:
            submission_id: Submission identifier
            expected_status: Status the record must currently have
            changes: Field name -> new value (None clears the field)

        Returns:
            The updated submission, or None if the precondition failed
            (record missing or status changed)
        """
        pass
