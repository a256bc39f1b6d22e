"""
KYC Service
===========

Application service for the identity-verification workflow.
"""
from typing import List, Optional, Tuple

from backoffice.domain.exceptions import Forbidden, NotFound, ValidationError
from backoffice.domain.models.kyc_submission import KycStatus, KycSubmission
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.kyc_repository import KycRepository
from backoffice.domain.repositories.notification_ports import EventPublisher
from backoffice.domain.repositories.user_directory import UserDirectory
from backoffice.application.use_cases.kyc.submit_kyc import SubmitKycUseCase
from backoffice.application.use_cases.kyc.review_kyc import ApproveKycUseCase, RejectKycUseCase


class KycService:
    """Coordinates KYC submission, review and lookup."""

    def __init__(
        self,
        kyc_repository: KycRepository,
        user_directory: UserDirectory,
        events: EventPublisher,
    ):
        self._repository = kyc_repository
        self._submit_use_case = SubmitKycUseCase(kyc_repository, user_directory)
        self._approve_use_case = ApproveKycUseCase(kyc_repository, user_directory, events)
        self._reject_use_case = RejectKycUseCase(kyc_repository, user_directory, events)

    def submit(
        self,
        owner_user_id: str,
        id_type: str,
        id_number: str,
        address_proof_type: str,
        id_image_ref: str,
        selfie_image_ref: str,
        address_proof_image_ref: str,
    ) -> KycSubmission:
        return self._submit_use_case.execute(
            owner_user_id=owner_user_id,
            id_type=id_type,
            id_number=id_number,
            address_proof_type=address_proof_type,
            id_image_ref=id_image_ref,
            selfie_image_ref=selfie_image_ref,
            address_proof_image_ref=address_proof_image_ref,
        )

    def approve(self, reviewer: Principal, submission_id: str) -> KycSubmission:
        return self._approve_use_case.execute(reviewer, submission_id)

    def reject(self, reviewer: Principal, submission_id: str, reason: str) -> KycSubmission:
        return self._reject_use_case.execute(reviewer, submission_id, reason)

    def get_status(self, owner_user_id: str) -> KycSubmission:
        """
        Get the owner's submission, including reviewer metadata.

        Raises:
            NotFound: If the owner never submitted
        """
        submission = self._repository.find_by_owner(owner_user_id)
        if submission is None:
            raise NotFound("No KYC submission found")
        return submission

    def get_submission(self, reviewer: Principal, submission_id: str) -> KycSubmission:
        if not reviewer.is_reviewer:
            raise Forbidden("Only reviewers can view KYC submissions")
        submission = self._repository.find_by_id(submission_id)
        if submission is None:
            raise NotFound("KYC submission not found")
        return submission

    def list_submissions(
        self,
        reviewer: Principal,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[KycSubmission], int]:
        """
        List submissions for review, newest first.

        Returns:
            (submissions on the page, total matching submissions)
        """
        if not reviewer.is_reviewer:
            raise Forbidden("Only reviewers can view KYC submissions")

        status_filter: Optional[KycStatus] = None
        if status:
            try:
                status_filter = KycStatus(status)
            except ValueError:
                raise ValidationError("Invalid status")

        page = max(page, 1)
        limit = max(limit, 1)
        submissions = self._repository.find_many(
            status=status_filter, skip=(page - 1) * limit, limit=limit
        )
        return submissions, self._repository.count(status=status_filter)
