"""
Bank Account Controller
=======================

FastAPI controller for the caller's payout bank accounts.

Handlers are plain functions so FastAPI runs them in its threadpool;
the owner lock table serializes concurrent requests per owner.
"""
from fastapi import APIRouter, Depends, status

from backoffice.application.dto.bank_account_dto import (
    BankAccountCreateRequest,
    BankAccountUpdateRequest,
    BankAccountResponse,
    BankAccountListResponse,
    BankAccountDeleteResponse,
)
from backoffice.api.v1.dependencies import get_bank_account_service, get_principal
from backoffice.api.v1.errors import to_http_exception
from backoffice.application.services.bank_account_service import BankAccountService
from backoffice.domain.exceptions import BackOfficeError
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.models.user import Principal

router = APIRouter(tags=["bank-accounts"])


def _to_response(account: BankAccount) -> BankAccountResponse:
    return BankAccountResponse(
        id=account.id,
        owner_user_id=account.owner_user_id,
        account_name=account.account_name,
        account_number=account.account_number,
        bank_name=account.bank_name,
        routing_number=account.routing_number,
        swift_code=account.swift_code,
        is_default=account.is_default,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


@router.get(
    "",
    response_model=BankAccountListResponse,
    summary="List bank accounts",
    description="List the caller's bank accounts, default account first."
)
def list_bank_accounts(
    principal: Principal = Depends(get_principal),
    service: BankAccountService = Depends(get_bank_account_service),
) -> BankAccountListResponse:
    """List the caller's accounts."""
    try:
        accounts = service.list_accounts(principal.user_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return BankAccountListResponse(
        accounts=[_to_response(account) for account in accounts],
        count=len(accounts),
    )


@router.post(
    "",
    response_model=BankAccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a bank account",
    description="""
    Add a payout bank account.

    The first account an owner adds always becomes the default.
    Adding with is_default=true moves the default flag to the new account.
    """
)
def add_bank_account(
    request: BankAccountCreateRequest,
    principal: Principal = Depends(get_principal),
    service: BankAccountService = Depends(get_bank_account_service),
) -> BankAccountResponse:
    """Add a bank account."""
    try:
        account = service.add_account(
            owner_user_id=principal.user_id,
            account_name=request.account_name,
            account_number=request.account_number,
            bank_name=request.bank_name,
            routing_number=request.routing_number,
            swift_code=request.swift_code,
            is_default=request.is_default,
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(account)


@router.put(
    "/{account_id}",
    response_model=BankAccountResponse,
    summary="Update a bank account",
    description="Update account fields. is_default=true makes it the default; false is ignored."
)
def update_bank_account(
    account_id: str,
    request: BankAccountUpdateRequest,
    principal: Principal = Depends(get_principal),
    service: BankAccountService = Depends(get_bank_account_service),
) -> BankAccountResponse:
    """Update a bank account."""
    try:
        account = service.update_account(
            owner_user_id=principal.user_id,
            account_id=account_id,
            account_name=request.account_name,
            account_number=request.account_number,
            bank_name=request.bank_name,
            routing_number=request.routing_number,
            swift_code=request.swift_code,
            is_default=request.is_default,
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(account)


@router.delete(
    "/{account_id}",
    response_model=BankAccountDeleteResponse,
    summary="Delete a bank account",
    description="""
    Delete a bank account.

    Deleting the default account promotes the most recently created
    remaining account to default.
    """
)
def delete_bank_account(
    account_id: str,
    principal: Principal = Depends(get_principal),
    service: BankAccountService = Depends(get_bank_account_service),
) -> BankAccountDeleteResponse:
    """Delete a bank account."""
    try:
        promoted = service.delete_account(principal.user_id, account_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return BankAccountDeleteResponse(
        status="deleted",
        account_id=account_id,
        message="Bank account deleted successfully",
        new_default_account_id=promoted.id if promoted else None,
    )


@router.patch(
    "/{account_id}/default",
    response_model=BankAccountResponse,
    summary="Set default bank account",
    description="Make this account the default; every other account of the owner is cleared."
)
def set_default_bank_account(
    account_id: str,
    principal: Principal = Depends(get_principal),
    service: BankAccountService = Depends(get_bank_account_service),
) -> BankAccountResponse:
    """Set the default bank account."""
    try:
        account = service.set_default(principal.user_id, account_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(account)
