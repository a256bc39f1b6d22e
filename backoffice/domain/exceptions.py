"""
Domain Exceptions
=================

Error taxonomy shared by the bank account, KYC and support ticket workflows.

- ValidationError: malformed or missing input
- NotFound: referenced entity absent
- Forbidden: role or ownership check failed
- AlreadyInProgress / AlreadyProcessed / TicketClosed: state precondition violated
- DuplicateAccount: uniqueness violation
- StoreUnavailable: the document store could not be reached
- DeliveryError: a notification could not be delivered (never surfaced to callers)
"""


class BackOfficeError(Exception):
    """Base class for all workflow errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BackOfficeError):
    pass


class NotFound(BackOfficeError):
    pass


class Forbidden(BackOfficeError):
    pass


class AlreadyInProgress(BackOfficeError):
    pass


class AlreadyProcessed(BackOfficeError):
    pass


class TicketClosed(BackOfficeError):
    pass


class DuplicateAccount(BackOfficeError):
    pass


class StoreUnavailable(BackOfficeError):
    pass


class DeliveryError(BackOfficeError):
    pass
