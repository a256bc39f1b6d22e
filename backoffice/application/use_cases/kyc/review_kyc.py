"""
Review KYC Use Cases
====================

Reviewer decisions on a pending KYC submission: approve or reject.
"""
import logging
from typing import Any, Dict, NoReturn

from backoffice.application.use_cases.kyc.profile_sync import sync_verification_status
from backoffice.domain.constants.kyc_fields import KycFields
from backoffice.domain.exceptions import AlreadyProcessed, Forbidden, NotFound, ValidationError
from backoffice.domain.models.kyc_submission import KycStatus, KycSubmission, can_transition
from backoffice.domain.models.notification import NotificationEvent
from backoffice.domain.models.user import Principal
from backoffice.domain.repositories.kyc_repository import KycRepository
from backoffice.domain.repositories.notification_ports import EventPublisher
from backoffice.domain.repositories.user_directory import UserDirectory
from backoffice.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class _ReviewKycUseCase:
    """
    Shared flow for a reviewer decision.

    1. Check the reviewer role
    2. Check the transition against the current status
    3. Apply it with a write conditioned on status=pending
    4. Update the owner's verification status and emit the notification
    """

    target_status: KycStatus

    def __init__(
        self,
        repository: KycRepository,
        user_directory: UserDirectory,
        events: EventPublisher,
    ):
        self._repository = repository
        self._user_directory = user_directory
        self._events = events

    def _already_processed(self, current: KycSubmission) -> NoReturn:
        # Repairs a profile update lost after an earlier decision committed
        sync_verification_status(self._user_directory, current.owner_user_id, current.status)
        raise AlreadyProcessed("This KYC submission has already been processed")

    def _decide(self, reviewer: Principal, submission_id: str, changes: Dict[str, Any]) -> KycSubmission:
        if not reviewer.is_reviewer:
            raise Forbidden("Only reviewers can process KYC submissions")

        current = self._repository.find_by_id(submission_id)
        if current is None:
            raise NotFound("KYC submission not found")
        if not can_transition(current.status, self.target_status):
            self._already_processed(current)

        changes = dict(changes)
        changes[KycFields.STATUS] = self.target_status
        changes[KycFields.VERIFIED_BY] = reviewer.user_id
        changes[KycFields.VERIFIED_AT] = now()

        updated = self._repository.transition(submission_id, KycStatus.PENDING, changes)
        if updated is None:
            # Lost a race with another reviewer
            current = self._repository.find_by_id(submission_id)
            if current is None:
                raise NotFound("KYC submission not found")
            self._already_processed(current)

        sync_verification_status(self._user_directory, updated.owner_user_id, updated.status)
        logger.info(
            "KYC submission %s %s by reviewer %s",
            submission_id,
            self.target_status.value,
            reviewer.user_id,
        )
        return updated


class ApproveKycUseCase(_ReviewKycUseCase):
    target_status = KycStatus.APPROVED

    def execute(self, reviewer: Principal, submission_id: str) -> KycSubmission:
        """
        Approve a pending submission.

        Raises:
            Forbidden: If the principal is not a reviewer
            NotFound: If the submission does not exist
            AlreadyProcessed: If the submission is not pending
        """
        submission = self._decide(reviewer, submission_id, {})
        self._events.publish(
            NotificationEvent(
                recipient_user_id=submission.owner_user_id,
                subject="KYC Verification Approved",
                body=(
                    "Congratulations! Your KYC verification has been approved. "
                    "You now have full access to all platform features."
                ),
                kind="kyc.approved",
                reference_id=submission.id,
            )
        )
        return submission


class RejectKycUseCase(_ReviewKycUseCase):
    target_status = KycStatus.REJECTED

    def execute(self, reviewer: Principal, submission_id: str, reason: str) -> KycSubmission:
        """
        Reject a pending submission with a reason shown to the owner.

        Raises:
            ValidationError: If the reason is empty
            Forbidden: If the principal is not a reviewer
            NotFound: If the submission does not exist
            AlreadyProcessed: If the submission is not pending
        """
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required")
        reason = reason.strip()

        submission = self._decide(reviewer, submission_id, {KycFields.REJECTION_REASON: reason})
        self._events.publish(
            NotificationEvent(
                recipient_user_id=submission.owner_user_id,
                subject="KYC Verification Rejected",
                body=(
                    f"Your KYC verification has been rejected. Reason: {reason}. "
                    "Please resubmit with the correct documents."
                ),
                kind="kyc.rejected",
                reference_id=submission.id,
            )
        )
        return submission
