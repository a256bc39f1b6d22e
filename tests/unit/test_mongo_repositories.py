"""Unit tests for the MongoDB repositories against a mocked collection"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from backoffice.domain.exceptions import StoreUnavailable
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.models.kyc_submission import AddressProofType, IdType, KycStatus, KycSubmission
from backoffice.domain.models.support_ticket import TicketMessage, TicketStatus
from backoffice.domain.models.user import UserRole, VerificationStatus
from backoffice.infrastructure.db.mongo_bank_account_repository import MongoBankAccountRepository
from backoffice.infrastructure.db.mongo_kyc_repository import MongoKycRepository
from backoffice.infrastructure.db.mongo_support_ticket_repository import MongoSupportTicketRepository
from backoffice.infrastructure.db.mongo_user_directory import MongoUserDirectory
from backoffice.utils.datetime_utils import now


def _submission() -> KycSubmission:
    return KycSubmission(
        owner_user_id="owner-1",
        id_type=IdType.PASSPORT,
        id_number="X1",
        id_image_ref="id.jpg",
        selfie_image_ref="selfie.jpg",
        address_proof_type=AddressProofType.UTILITY_BILL,
        address_proof_image_ref="bill.pdf",
    )


def _ticket_doc(**overrides) -> dict:
    doc = {
        "id": "t-1",
        "owner_user_id": "owner-1",
        "subject": "Help",
        "category": "payment",
        "priority": "medium",
        "status": "in-progress",
        "messages": [{"sender_id": "owner-1", "text": "Hi", "attachments": [], "created_at": now()}],
        "assigned_to": "admin-1",
        "created_at": now(),
        "updated_at": now(),
    }
    doc.update(overrides)
    return doc


class TestMongoBankAccountRepository:
    """Test document mapping and the default-flag write"""

    def test_create_writes_document(self):
        collection = MagicMock()
        repository = MongoBankAccountRepository(collection)
        account = BankAccount(
            owner_user_id="owner-1", account_name="Jane", account_number="1", bank_name="A"
        )

        repository.create(account)

        doc = collection.insert_one.call_args[0][0]
        assert doc["id"] == account.id
        assert doc["is_default"] is False
        assert doc["owner_user_id"] == "owner-1"

    def test_make_sole_default_is_one_write(self):
        """Test the clear and the set are one pipeline update scoped to the owner"""
        collection = MagicMock()
        collection.count_documents.return_value = 1
        repository = MongoBankAccountRepository(collection)

        assert repository.make_sole_default("owner-1", "acc-2") is True

        collection.update_many.assert_called_once()
        query, pipeline = collection.update_many.call_args[0]
        assert query["owner_user_id"] == "owner-1"
        assert {"id": "acc-2"} in query["$or"]
        assert pipeline[0]["$set"]["is_default"] == {"$eq": ["$id", {"$literal": "acc-2"}]}

    def test_make_sole_default_missing_target(self):
        """Test nothing is written when the target does not exist"""
        collection = MagicMock()
        collection.count_documents.return_value = 0
        repository = MongoBankAccountRepository(collection)

        assert repository.make_sole_default("owner-1", "missing") is False
        collection.update_many.assert_not_called()

    def test_update_fields_never_touches_default(self):
        collection = MagicMock()
        collection.find_one_and_update.return_value = None
        repository = MongoBankAccountRepository(collection)

        repository.update_fields("owner-1", "acc-1", {"account_name": "New", "is_default": True})

        update = collection.find_one_and_update.call_args[0][1]
        assert "is_default" not in update["$set"]
        assert update["$set"]["account_name"] == "New"

    def test_driver_errors_become_store_unavailable(self):
        collection = MagicMock()
        collection.find_one.side_effect = ServerSelectionTimeoutError("down")
        repository = MongoBankAccountRepository(collection)

        with pytest.raises(StoreUnavailable):
            repository.find_by_id("owner-1", "acc-1")


class TestMongoKycRepository:
    """Test conditional transitions and the one-per-owner insert"""

    def test_duplicate_owner_returns_none(self):
        collection = MagicMock()
        collection.insert_one.side_effect = DuplicateKeyError("dup")
        repository = MongoKycRepository(collection)

        assert repository.create(_submission()) is None

    def test_first_insert_creates_indexes_once(self):
        """Test the unique owner index is in place before the first insert"""
        collection = MagicMock()
        repository = MongoKycRepository(collection)

        repository.create(_submission())
        repository.create(_submission())

        unique_keys = [
            c.args[0] for c in collection.create_index.call_args_list if c.kwargs.get("unique")
        ]
        assert [("owner_user_id", 1)] in unique_keys
        assert collection.create_index.call_count == 3
        assert collection.insert_one.call_count == 2

    def test_insert_refused_while_indexes_missing(self):
        """Test no insert happens when the indexes cannot be created"""
        collection = MagicMock()
        collection.create_index.side_effect = ServerSelectionTimeoutError("down")
        repository = MongoKycRepository(collection)

        with pytest.raises(StoreUnavailable):
            repository.create(_submission())
        collection.insert_one.assert_not_called()

        collection.create_index.side_effect = None
        repository.create(_submission())
        collection.insert_one.assert_called_once()

    def test_transition_is_conditional(self):
        """Test the write filters on the expected status and unsets cleared fields"""
        collection = MagicMock()
        collection.find_one_and_update.return_value = None
        repository = MongoKycRepository(collection)

        result = repository.transition(
            "sub-1",
            KycStatus.REJECTED,
            {"status": KycStatus.PENDING, "rejection_reason": None},
        )

        assert result is None
        query, update = collection.find_one_and_update.call_args[0]
        assert query == {"id": "sub-1", "status": "rejected"}
        assert update["$set"]["status"] == "pending"
        assert update["$unset"] == {"rejection_reason": ""}


class TestMongoSupportTicketRepository:
    """Test reply writes"""

    def test_owner_reply_is_a_push(self):
        collection = MagicMock()
        collection.find_one_and_update.return_value = _ticket_doc()
        repository = MongoSupportTicketRepository(collection)

        ticket = repository.append_message("t-1", TicketMessage(sender_id="owner-1", text="More"))

        query, update = collection.find_one_and_update.call_args[0][:2]
        assert query["status"] == {"$ne": "closed"}
        assert update["$push"]["messages"]["text"] == "More"
        assert ticket.assigned_to == "admin-1"

    def test_reviewer_reply_promotes_and_assigns_in_one_write(self):
        collection = MagicMock()
        collection.find_one_and_update.return_value = _ticket_doc()
        repository = MongoSupportTicketRepository(collection)

        repository.append_message(
            "t-1",
            TicketMessage(sender_id="admin-2", text="$status"),
            responder_id="admin-2",
            promote_from=TicketStatus.OPEN,
        )

        pipeline = collection.find_one_and_update.call_args[0][1]
        stage = pipeline[0]["$set"]
        assert stage["assigned_to"]["$cond"][1] == {"$ifNull": ["$assigned_to", {"$literal": "admin-2"}]}
        assert stage["assigned_to"]["$cond"][2] == "$assigned_to"
        assert stage["status"]["$cond"][1] == "in-progress"
        assert stage["messages"]["$concatArrays"][1]["$literal"][0]["text"] == "$status"

    def test_reviewer_reply_without_promotion_is_a_push(self):
        """Test a reviewer reply that may not promote only appends"""
        collection = MagicMock()
        collection.find_one_and_update.return_value = _ticket_doc()
        repository = MongoSupportTicketRepository(collection)

        repository.append_message(
            "t-1", TicketMessage(sender_id="admin-2", text="Noted"), responder_id="admin-2"
        )

        update = collection.find_one_and_update.call_args[0][1]
        assert update["$push"]["messages"]["text"] == "Noted"
        assert "status" not in update["$set"]

    def test_assign_keeps_status_without_promotion(self):
        collection = MagicMock()
        collection.find_one_and_update.return_value = _ticket_doc()
        repository = MongoSupportTicketRepository(collection)

        repository.assign("t-1", "admin-2")

        stage = collection.find_one_and_update.call_args[0][1][0]["$set"]
        assert stage["status"] == "$status"
        assert stage["assigned_to"] == {"$literal": "admin-2"}

    def test_closed_or_missing_returns_none(self):
        collection = MagicMock()
        collection.find_one_and_update.return_value = None
        repository = MongoSupportTicketRepository(collection)

        assert repository.append_message("t-1", TicketMessage(sender_id="owner-1", text="x")) is None


class TestMongoUserDirectory:
    """Test profile lookup across id styles"""

    def test_lookup_accepts_object_ids(self):
        collection = MagicMock()
        user_id = str(ObjectId())
        collection.find_one.return_value = {
            "_id": ObjectId(user_id),
            "email": "jane@example.com",
            "role": "admin",
            "verification_status": "pending",
        }
        directory = MongoUserDirectory(collection)

        profile = directory.get_profile(user_id)

        query = collection.find_one.call_args[0][0]
        assert {"_id": ObjectId(user_id)} in query["$or"]
        assert profile.id == user_id
        assert profile.role == UserRole.ADMIN
        assert profile.verification_status == VerificationStatus.PENDING

    def test_set_verification_status(self):
        collection = MagicMock()
        collection.update_one.return_value.matched_count = 1
        directory = MongoUserDirectory(collection)

        assert directory.set_verification_status("owner-1", VerificationStatus.VERIFIED) is True
        update = collection.update_one.call_args[0][1]
        assert update["$set"]["verification_status"] == "verified"
