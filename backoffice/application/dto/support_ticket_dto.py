"""
Support Ticket DTO
==================

Pydantic models for support ticket API requests and responses.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TicketCreateRequest(BaseModel):
    """DTO for opening a ticket."""
    subject: str = Field(..., description="Ticket subject")
    category: str = Field(
        ..., description="account | payment | property | investment | technical | other"
    )
    message: str = Field(..., description="First message of the thread")
    priority: Optional[str] = Field(None, description="low | medium | high | urgent")
    attachments: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subject": "Payout not received",
                "category": "payment",
                "message": "My March payout has not arrived yet.",
                "priority": "high",
                "attachments": [],
            }
        }
    )


class TicketReplyRequest(BaseModel):
    """DTO for appending a message to a ticket."""
    text: str
    attachments: List[str] = Field(default_factory=list)


class TicketStatusRequest(BaseModel):
    """DTO for the reviewer status override."""
    status: str = Field(..., description="open | in-progress | resolved | closed")


class TicketAssignRequest(BaseModel):
    """DTO for assigning a ticket to a reviewer."""
    admin_id: Optional[str] = Field(None, description="Reviewer user id")


class TicketMessageResponse(BaseModel):
    sender_id: str
    text: str
    attachments: List[str] = []
    created_at: datetime


class TicketResponse(BaseModel):
    """DTO for support ticket data, including the thread."""
    id: str
    owner_user_id: str
    subject: str
    category: str
    priority: str
    status: str
    messages: List[TicketMessageResponse]
    assigned_to: Optional[str] = None
    closed_at: Optional[datetime] = None
    closed_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TicketListResponse(BaseModel):
    """DTO for a page of tickets."""
    tickets: List[TicketResponse]
    total: int
    page: int
    pages: int
