"""
KYC DTO
=======

Pydantic models for KYC API requests and responses.
Image fields carry references to already-uploaded files, not file content.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class KycSubmitRequest(BaseModel):
    """DTO for submitting (or resubmitting) identity documents."""
    id_type: str = Field(..., description="passport | nationalId | driverLicense")
    id_number: str = Field(..., description="Identity document number")
    address_proof_type: str = Field(
        ..., description="utilityBill | bankStatement | rentalAgreement"
    )
    id_image_ref: Optional[str] = Field(None, description="Reference to the ID image")
    selfie_image_ref: Optional[str] = Field(None, description="Reference to the selfie image")
    address_proof_image_ref: Optional[str] = Field(
        None, description="Reference to the address proof image"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id_type": "passport",
                "id_number": "X1234567",
                "address_proof_type": "utilityBill",
                "id_image_ref": "uploads/kyc/6928/id.jpg",
                "selfie_image_ref": "uploads/kyc/6928/selfie.jpg",
                "address_proof_image_ref": "uploads/kyc/6928/bill.pdf",
            }
        }
    )


class KycRejectRequest(BaseModel):
    """DTO for rejecting a submission."""
    reason: Optional[str] = Field(None, description="Reason shown to the owner")


class KycSubmissionResponse(BaseModel):
    """DTO for KYC submission data."""
    id: str
    owner_user_id: str
    id_type: str
    id_number: str
    id_image_ref: str
    selfie_image_ref: str
    address_proof_type: str
    address_proof_image_ref: str
    status: str
    rejection_reason: Optional[str] = None
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    submitted_at: datetime
    updated_at: datetime


class KycSubmissionListResponse(BaseModel):
    """DTO for a page of submissions."""
    submissions: List[KycSubmissionResponse]
    total: int
    page: int
    pages: int
