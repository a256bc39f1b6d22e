"""
Support Ticket Controller
=========================

FastAPI controller for support tickets and their message threads.
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from backoffice.application.dto.support_ticket_dto import (
    TicketCreateRequest,
    TicketReplyRequest,
    TicketStatusRequest,
    TicketAssignRequest,
    TicketMessageResponse,
    TicketResponse,
    TicketListResponse,
)
from backoffice.api.v1.dependencies import get_principal, get_support_ticket_service
from backoffice.api.v1.errors import to_http_exception
from backoffice.application.services.support_ticket_service import SupportTicketService
from backoffice.domain.exceptions import BackOfficeError
from backoffice.domain.models.support_ticket import SupportTicket
from backoffice.domain.models.user import Principal

router = APIRouter(tags=["support-tickets"])


def _to_response(ticket: SupportTicket) -> TicketResponse:
    return TicketResponse(
        id=ticket.id,
        owner_user_id=ticket.owner_user_id,
        subject=ticket.subject,
        category=ticket.category.value,
        priority=ticket.priority.value,
        status=ticket.status.value,
        messages=[
            TicketMessageResponse(
                sender_id=message.sender_id,
                text=message.text,
                attachments=list(message.attachments),
                created_at=message.created_at,
            )
            for message in ticket.messages
        ],
        assigned_to=ticket.assigned_to,
        closed_at=ticket.closed_at,
        closed_by=ticket.closed_by,
        created_at=ticket.created_at,
        updated_at=ticket.updated_at,
    )


@router.post(
    "",
    response_model=TicketResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a support ticket",
)
def create_ticket(
    request: TicketCreateRequest,
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketResponse:
    """Open a ticket with its first message."""
    try:
        ticket = service.create_ticket(
            owner_user_id=principal.user_id,
            subject=request.subject,
            category=request.category,
            message=request.message,
            priority=request.priority,
            attachments=request.attachments,
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(ticket)


@router.get(
    "",
    response_model=TicketListResponse,
    summary="List support tickets",
    description="Owners see their own tickets; reviewers see all. Most recently updated first."
)
def list_tickets(
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    priority: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketListResponse:
    """List tickets visible to the caller."""
    try:
        tickets, total = service.list_tickets(
            principal,
            status=status_filter,
            category=category,
            priority=priority,
            page=page,
            limit=limit,
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return TicketListResponse(
        tickets=[_to_response(ticket) for ticket in tickets],
        total=total,
        page=page,
        pages=math.ceil(total / limit),
    )


@router.get(
    "/{ticket_id}",
    response_model=TicketResponse,
    summary="Get a support ticket",
)
def get_ticket(
    ticket_id: str,
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketResponse:
    """Get a ticket and its thread."""
    try:
        ticket = service.get_ticket(principal, ticket_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(ticket)


@router.post(
    "/{ticket_id}/replies",
    response_model=TicketResponse,
    summary="Reply to a support ticket",
    description="""
    Append a message to the ticket thread.

    The first reviewer reply on an open ticket moves it to in-progress and
    assigns it to that reviewer. Closed tickets reject replies (409).
    """
)
def reply_to_ticket(
    ticket_id: str,
    request: TicketReplyRequest,
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketResponse:
    """Append a reply."""
    try:
        ticket = service.reply(principal, ticket_id, request.text, request.attachments)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(ticket)


@router.patch(
    "/{ticket_id}/status",
    response_model=TicketResponse,
    summary="Set ticket status",
    description="Reviewer override; any status may be set from any status."
)
def update_ticket_status(
    ticket_id: str,
    request: TicketStatusRequest,
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketResponse:
    """Set the ticket status."""
    try:
        ticket = service.set_status(principal, ticket_id, request.status)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(ticket)


@router.patch(
    "/{ticket_id}/assign",
    response_model=TicketResponse,
    summary="Assign a support ticket",
)
def assign_ticket(
    ticket_id: str,
    request: TicketAssignRequest,
    principal: Principal = Depends(get_principal),
    service: SupportTicketService = Depends(get_support_ticket_service),
) -> TicketResponse:
    """Assign the ticket to a reviewer."""
    try:
        ticket = service.assign(principal, ticket_id, request.admin_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(ticket)
