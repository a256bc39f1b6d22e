"""
API v1 Package
===============

Version 1 API controllers.
"""
from .bank_account_controller import router as bank_account_router
from .kyc_controller import router as kyc_router
from .support_ticket_controller import router as support_ticket_router

__all__ = ["bank_account_router", "kyc_router", "support_ticket_router"]
