"""
Dependency Container
====================

FastAPI dependency functions.
Services come from the DI container; the principal comes from the
identity headers set by the authenticating gateway.
"""
from typing import Optional

from fastapi import Header, HTTPException, status

from backoffice.application.services.bank_account_service import BankAccountService
from backoffice.application.services.kyc_service import KycService
from backoffice.application.services.support_ticket_service import SupportTicketService
from backoffice.domain.models.user import Principal, UserRole
from backoffice.di.container import get_container


def get_principal(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Principal:
    """
    Resolve the caller from the X-User-Id / X-User-Role headers.

    A missing role means a regular user.

    Raises:
        HTTPException: 401 if the user id is missing or the role is unknown
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    try:
        role = UserRole(x_user_role.strip().lower()) if x_user_role else UserRole.USER
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown role"
        )
    return Principal(user_id=x_user_id.strip(), role=role)


def get_bank_account_service() -> BankAccountService:
    """
    Get bank account service instance (singleton).

    Returns:
        BankAccountService instance
    """
    container = get_container()
    return container.get(BankAccountService)


def get_kyc_service() -> KycService:
    """
    Get KYC service instance (singleton).

    Returns:
        KycService instance
    """
    container = get_container()
    return container.get(KycService)


def get_support_ticket_service() -> SupportTicketService:
    """
    Get support ticket service instance (singleton).

    Returns:
        SupportTicketService instance
    """
    container = get_container()
    return container.get(SupportTicketService)
