"""
API Error Mapping
=================

Translates domain exceptions into HTTP errors.
"""
from typing import Dict, Type

from fastapi import HTTPException, status

from backoffice.domain.exceptions import (
    AlreadyInProgress,
    AlreadyProcessed,
    BackOfficeError,
    DuplicateAccount,
    Forbidden,
    NotFound,
    StoreUnavailable,
    TicketClosed,
    ValidationError,
)

STATUS_CODES: Dict[Type[BackOfficeError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    AlreadyInProgress: status.HTTP_409_CONFLICT,
    AlreadyProcessed: status.HTTP_409_CONFLICT,
    TicketClosed: status.HTTP_409_CONFLICT,
    DuplicateAccount: status.HTTP_409_CONFLICT,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: BackOfficeError) -> HTTPException:
    """Map a domain error to an HTTPException; unknown kinds become 500."""
    status_code = STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=error.message)
