"""
Profile Sync
============

Keeps the owner's profile verification_status in line with their KYC
submission. Runs after the submission write has committed, so a failure
here is logged and the next command on the submission writes it again.
"""
import logging

from backoffice.domain.exceptions import StoreUnavailable
from backoffice.domain.models.kyc_submission import KycStatus
from backoffice.domain.models.user import VerificationStatus
from backoffice.domain.repositories.user_directory import UserDirectory

logger = logging.getLogger(__name__)

PROFILE_STATUS = {
    KycStatus.PENDING: VerificationStatus.PENDING,
    KycStatus.APPROVED: VerificationStatus.VERIFIED,
    KycStatus.REJECTED: VerificationStatus.REJECTED,
}


def sync_verification_status(
    user_directory: UserDirectory,
    owner_user_id: str,
    kyc_status: KycStatus,
) -> bool:
    """
    Write the profile status matching kyc_status.

    Returns:
        True if the profile was updated, False if it is missing or the
        store could not be reached
    """
    profile_status = PROFILE_STATUS[kyc_status]
    try:
        return user_directory.set_verification_status(owner_user_id, profile_status)
    except StoreUnavailable:
        logger.error(
            "Could not set verification status %s for owner %s",
            profile_status.value,
            owner_user_id,
            exc_info=True,
        )
        return False
