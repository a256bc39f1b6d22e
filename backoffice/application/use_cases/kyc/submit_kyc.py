"""
Submit KYC Use Case
===================

Business use case for an owner submitting (or resubmitting) identity
documents for verification.
"""
import logging
from typing import Optional

from backoffice.application.use_cases.kyc.profile_sync import sync_verification_status
from backoffice.domain.constants.kyc_fields import KycFields
from backoffice.domain.exceptions import AlreadyInProgress, ValidationError
from backoffice.domain.models.kyc_submission import (
    AddressProofType,
    IdType,
    KycStatus,
    KycSubmission,
)
from backoffice.domain.repositories.kyc_repository import KycRepository
from backoffice.domain.repositories.user_directory import UserDirectory
from backoffice.utils.datetime_utils import now

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class SubmitKycUseCase:
    """
    Use case for submitting KYC documents.

    An owner has at most one submission record. A rejected record is
    reused in place (same ID) and reset to pending; a pending or approved
    one blocks the submission.
    """

    def __init__(self, repository: KycRepository, user_directory: UserDirectory):
        """
        Initialize use case with repositories.

        Args:
            repository: Repository for KYC submissions
            user_directory: Owner profiles (verification_status is updated)
        """
        self._repository = repository
        self._user_directory = user_directory

    def execute(
        self,
        owner_user_id: str,
        id_type: str,
        id_number: str,
        address_proof_type: str,
        id_image_ref: str,
        selfie_image_ref: str,
        address_proof_image_ref: str,
    ) -> KycSubmission:
        """
        Execute the submit KYC use case.

        Args:
            owner_user_id: Owner submitting the documents
            id_type: passport | nationalId | driverLicense
            id_number: Number on the identity document
            address_proof_type: utilityBill | bankStatement | rentalAgreement
            id_image_ref: Stored reference of the identity document image
            selfie_image_ref: Stored reference of the selfie image
            address_proof_image_ref: Stored reference of the address proof image

        Returns:
            The pending submission

        Raises:
            ValidationError: If a field or document reference is missing or invalid
            AlreadyInProgress: If the owner's submission is pending or approved
        """
        if any(_is_blank(v) for v in (owner_user_id, id_type, id_number, address_proof_type)):
            raise ValidationError("Please provide all required fields")

        try:
            parsed_id_type = IdType(id_type)
        except ValueError:
            raise ValidationError("Invalid ID type")

        try:
            parsed_proof_type = AddressProofType(address_proof_type)
        except ValueError:
            raise ValidationError("Invalid address proof type")

        if any(_is_blank(v) for v in (id_image_ref, selfie_image_ref, address_proof_image_ref)):
            raise ValidationError("Please upload all required documents")

        existing = self._repository.find_by_owner(owner_user_id)

        if existing is None:
            submission = self._repository.create(
                KycSubmission(
                    owner_user_id=owner_user_id,
                    id_type=parsed_id_type,
                    id_number=id_number.strip(),
                    id_image_ref=id_image_ref,
                    selfie_image_ref=selfie_image_ref,
                    address_proof_type=parsed_proof_type,
                    address_proof_image_ref=address_proof_image_ref,
                )
            )
        elif existing.is_open_for_resubmission:
            submission = self._repository.transition(
                existing.id,
                KycStatus.REJECTED,
                {
                    KycFields.ID_TYPE: parsed_id_type,
                    KycFields.ID_NUMBER: id_number.strip(),
                    KycFields.ID_IMAGE_REF: id_image_ref,
                    KycFields.SELFIE_IMAGE_REF: selfie_image_ref,
                    KycFields.ADDRESS_PROOF_TYPE: parsed_proof_type,
                    KycFields.ADDRESS_PROOF_IMAGE_REF: address_proof_image_ref,
                    KycFields.STATUS: KycStatus.PENDING,
                    KycFields.SUBMITTED_AT: now(),
                    KycFields.REJECTION_REASON: None,
                    KycFields.VERIFIED_BY: None,
                    KycFields.VERIFIED_AT: None,
                },
            )
        else:
            sync_verification_status(self._user_directory, owner_user_id, existing.status)
            submission = None

        # None here means a pending/approved record, or a concurrent submit won
        if submission is None:
            raise AlreadyInProgress("You already have a KYC submission in progress")

        sync_verification_status(self._user_directory, owner_user_id, submission.status)
        logger.info(
            "KYC submission %s is pending for owner %s (resubmission=%s)",
            submission.id,
            owner_user_id,
            existing is not None,
        )
        return submission
