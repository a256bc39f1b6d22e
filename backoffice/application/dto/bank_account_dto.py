"""
Bank Account DTO
================

Pydantic models for bank account API requests and responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class BankAccountCreateRequest(BaseModel):
    """DTO for adding a bank account."""
    account_name: str = Field(..., description="Account holder name")
    account_number: str = Field(..., description="Account number")
    bank_name: str = Field(..., description="Bank name")
    routing_number: Optional[str] = Field(None, description="Optional routing number")
    swift_code: Optional[str] = Field(None, description="Optional SWIFT/BIC code")
    is_default: bool = Field(False, description="Make this the default payout account")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "account_name": "Jane Doe",
                "account_number": "000123456789",
                "bank_name": "First National",
                "routing_number": "021000021",
                "swift_code": None,
                "is_default": True,
            }
        }
    )


class BankAccountUpdateRequest(BaseModel):
    """DTO for updating a bank account. Omitted fields are left unchanged."""
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    is_default: Optional[bool] = Field(
        None, description="true makes this the default; false is ignored"
    )


class BankAccountResponse(BaseModel):
    """DTO for bank account data."""
    id: str
    owner_user_id: str
    account_name: str
    account_number: str
    bank_name: str
    routing_number: Optional[str] = None
    swift_code: Optional[str] = None
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5f0c4f1e9b1d4c47a1a3f0e2d8c6b7a4",
                "owner_user_id": "6928422b8c9933d948cfdc21",
                "account_name": "Jane Doe",
                "account_number": "000123456789",
                "bank_name": "First National",
                "routing_number": "021000021",
                "swift_code": None,
                "is_default": True,
                "created_at": "2025-12-20T09:11:50.840Z",
                "updated_at": "2025-12-20T09:11:50.840Z",
            }
        }
    )


class BankAccountListResponse(BaseModel):
    """DTO for the owner's accounts."""
    accounts: List[BankAccountResponse]
    count: int


class BankAccountDeleteResponse(BaseModel):
    """DTO for bank account deletion."""
    status: str
    account_id: str
    message: str
    new_default_account_id: Optional[str] = None
