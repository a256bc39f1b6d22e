"""
KYC Controller
==============

FastAPI controller for identity verification.
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from backoffice.application.dto.kyc_dto import (
    KycSubmitRequest,
    KycRejectRequest,
    KycSubmissionResponse,
    KycSubmissionListResponse,
)
from backoffice.api.v1.dependencies import get_kyc_service, get_principal
from backoffice.api.v1.errors import to_http_exception
from backoffice.application.services.kyc_service import KycService
from backoffice.domain.exceptions import BackOfficeError
from backoffice.domain.models.kyc_submission import KycSubmission
from backoffice.domain.models.user import Principal

router = APIRouter(tags=["kyc"])


def _to_response(submission: KycSubmission) -> KycSubmissionResponse:
    return KycSubmissionResponse(
        id=submission.id,
        owner_user_id=submission.owner_user_id,
        id_type=submission.id_type.value,
        id_number=submission.id_number,
        id_image_ref=submission.id_image_ref,
        selfie_image_ref=submission.selfie_image_ref,
        address_proof_type=submission.address_proof_type.value,
        address_proof_image_ref=submission.address_proof_image_ref,
        status=submission.status.value,
        rejection_reason=submission.rejection_reason,
        verified_by=submission.verified_by,
        verified_at=submission.verified_at,
        submitted_at=submission.submitted_at,
        updated_at=submission.updated_at,
    )


@router.post(
    "",
    response_model=KycSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit KYC documents",
    description="""
    Submit identity documents for verification.

    A rejected submission is reused and reset to pending. A pending or
    approved submission blocks new submissions (409).
    """
)
def submit_kyc(
    request: KycSubmitRequest,
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionResponse:
    """Submit or resubmit KYC documents."""
    try:
        submission = service.submit(
            owner_user_id=principal.user_id,
            id_type=request.id_type,
            id_number=request.id_number,
            address_proof_type=request.address_proof_type,
            id_image_ref=request.id_image_ref,
            selfie_image_ref=request.selfie_image_ref,
            address_proof_image_ref=request.address_proof_image_ref,
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(submission)


@router.get(
    "/status",
    response_model=KycSubmissionResponse,
    summary="Get own KYC status",
)
def get_kyc_status(
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionResponse:
    """Get the caller's submission."""
    try:
        submission = service.get_status(principal.user_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(submission)


@router.get(
    "/submissions",
    response_model=KycSubmissionListResponse,
    summary="List KYC submissions",
    description="Reviewer listing, newest first, optionally filtered by status."
)
def list_kyc_submissions(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionListResponse:
    """List submissions for review."""
    try:
        submissions, total = service.list_submissions(
            principal, status=status_filter, page=page, limit=limit
        )
    except BackOfficeError as e:
        raise to_http_exception(e)

    return KycSubmissionListResponse(
        submissions=[_to_response(s) for s in submissions],
        total=total,
        page=page,
        pages=math.ceil(total / limit),
    )


@router.get(
    "/submissions/{submission_id}",
    response_model=KycSubmissionResponse,
    summary="Get a KYC submission",
)
def get_kyc_submission(
    submission_id: str,
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionResponse:
    """Get one submission (reviewer only)."""
    try:
        submission = service.get_submission(principal, submission_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(submission)


@router.patch(
    "/submissions/{submission_id}/approve",
    response_model=KycSubmissionResponse,
    summary="Approve a KYC submission",
)
def approve_kyc(
    submission_id: str,
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionResponse:
    """Approve a pending submission."""
    try:
        submission = service.approve(principal, submission_id)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(submission)


@router.patch(
    "/submissions/{submission_id}/reject",
    response_model=KycSubmissionResponse,
    summary="Reject a KYC submission",
)
def reject_kyc(
    submission_id: str,
    request: KycRejectRequest,
    principal: Principal = Depends(get_principal),
    service: KycService = Depends(get_kyc_service),
) -> KycSubmissionResponse:
    """Reject a pending submission with a reason."""
    try:
        submission = service.reject(principal, submission_id, request.reason)
    except BackOfficeError as e:
        raise to_http_exception(e)

    return _to_response(submission)
