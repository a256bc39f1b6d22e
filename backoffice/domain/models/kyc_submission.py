"""
KYC Submission Model
====================

Identity-verification submission and its status state machine.

State flow:
    (none) → PENDING → APPROVED | REJECTED
    REJECTED → PENDING (resubmission, same record)
    APPROVED is terminal
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from backoffice.utils.datetime_utils import now


class KycStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class IdType(str, Enum):
    PASSPORT = "passport"
    NATIONAL_ID = "nationalId"
    DRIVER_LICENSE = "driverLicense"


class AddressProofType(str, Enum):
    UTILITY_BILL = "utilityBill"
    BANK_STATEMENT = "bankStatement"
    RENTAL_AGREEMENT = "rentalAgreement"


# State transition rules
ALLOWED_TRANSITIONS: Dict[Optional[KycStatus], List[KycStatus]] = {
    None: [KycStatus.PENDING],
    KycStatus.PENDING: [KycStatus.APPROVED, KycStatus.REJECTED],
    KycStatus.REJECTED: [KycStatus.PENDING],  # Resubmission
    KycStatus.APPROVED: [],  # Terminal
}


def can_transition(from_status: Optional[KycStatus], to_status: KycStatus) -> bool:
    """Validate if a KYC status transition is allowed

    Args:
        from_status: Current status (None when the owner has no submission)
        to_status: Target status

    Returns:
        True if transition is allowed, False otherwise

    Example:
        >>> can_transition(KycStatus.REJECTED, KycStatus.PENDING)
        True
        >>> can_transition(KycStatus.APPROVED, KycStatus.PENDING)
        False
    """
    return to_status in ALLOWED_TRANSITIONS.get(from_status, [])


@dataclass
class KycSubmission:
    """KYC submission domain model. One record per owner."""
    owner_user_id: str
    id_type: IdType
    id_number: str
    id_image_ref: str
    selfie_image_ref: str
    address_proof_type: AddressProofType
    address_proof_image_ref: str
    status: KycStatus = KycStatus.PENDING
    rejection_reason: Optional[str] = None
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    submitted_at: datetime = field(default_factory=lambda: now())
    updated_at: datetime = field(default_factory=lambda: now())

    @property
    def is_open_for_resubmission(self) -> bool:
        return can_transition(self.status, KycStatus.PENDING)
