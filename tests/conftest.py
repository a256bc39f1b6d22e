import pytest

from backoffice.application.services.bank_account_service import BankAccountService
from backoffice.application.services.kyc_service import KycService
from backoffice.application.services.support_ticket_service import SupportTicketService
from backoffice.domain.models.user import Principal, UserRole
from backoffice.utils.owner_locks import OwnerLockTable
from tests.fakes import (
    InMemoryBankAccountRepository,
    InMemoryKycRepository,
    InMemorySupportTicketRepository,
    InMemoryUserDirectory,
    RecordingPublisher,
)

OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"
REVIEWER_ID = "admin-1"
SECOND_REVIEWER_ID = "admin-2"


@pytest.fixture
def owner() -> Principal:
    return Principal(user_id=OWNER_ID)


@pytest.fixture
def other_owner() -> Principal:
    return Principal(user_id=OTHER_OWNER_ID)


@pytest.fixture
def reviewer() -> Principal:
    return Principal(user_id=REVIEWER_ID, role=UserRole.ADMIN)


@pytest.fixture
def second_reviewer() -> Principal:
    return Principal(user_id=SECOND_REVIEWER_ID, role=UserRole.ADMIN)


@pytest.fixture
def user_directory() -> InMemoryUserDirectory:
    directory = InMemoryUserDirectory()
    directory.add(OWNER_ID)
    directory.add(OTHER_OWNER_ID)
    directory.add(REVIEWER_ID, role=UserRole.ADMIN)
    directory.add(SECOND_REVIEWER_ID, role=UserRole.ADMIN)
    return directory


@pytest.fixture
def events() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def bank_account_repository() -> InMemoryBankAccountRepository:
    return InMemoryBankAccountRepository()


@pytest.fixture
def kyc_repository() -> InMemoryKycRepository:
    return InMemoryKycRepository()


@pytest.fixture
def ticket_repository() -> InMemorySupportTicketRepository:
    return InMemorySupportTicketRepository()


@pytest.fixture
def bank_account_service(bank_account_repository) -> BankAccountService:
    return BankAccountService(bank_account_repository, OwnerLockTable())


@pytest.fixture
def kyc_service(kyc_repository, user_directory, events) -> KycService:
    return KycService(kyc_repository, user_directory, events)


@pytest.fixture
def ticket_service(ticket_repository, user_directory, events) -> SupportTicketService:
    return SupportTicketService(ticket_repository, user_directory, events)
