"""
MongoDB Bank Account Repository
===============================

Concrete implementation of BankAccountRepository using MongoDB.
"""
from typing import Any, Dict, List, Optional
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection

from backoffice.core.config import get_settings
from backoffice.domain.models.bank_account import BankAccount
from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
from backoffice.domain.constants.bank_account_fields import BankAccountFields
from backoffice.infrastructure.db.errors import translate_store_errors
from backoffice.infrastructure.db.mongo_connection import get_mongo_client
from backoffice.utils.datetime_utils import now

# Fields an update may overwrite; is_default is handled by make_sole_default
_UPDATABLE_FIELDS = (
    BankAccountFields.ACCOUNT_NAME,
    BankAccountFields.ACCOUNT_NUMBER,
    BankAccountFields.BANK_NAME,
    BankAccountFields.ROUTING_NUMBER,
    BankAccountFields.SWIFT_CODE,
)


class MongoBankAccountRepository(BankAccountRepository):
    """
    MongoDB implementation of BankAccountRepository.

    Handles all bank account persistence operations using MongoDB.
    """

    def __init__(self, collection: Optional[Collection] = None):
        """Initialize repository with MongoDB client."""
        if collection is None:
            collection = get_mongo_client().get_collection(
                get_settings().bank_accounts_collection
            )
        self._collection = collection

    def _to_entity(self, doc: dict) -> BankAccount:
        """Convert MongoDB document to BankAccount entity."""
        return BankAccount(
            id=doc[BankAccountFields.ID],
            owner_user_id=doc[BankAccountFields.OWNER_USER_ID],
            account_name=doc[BankAccountFields.ACCOUNT_NAME],
            account_number=doc[BankAccountFields.ACCOUNT_NUMBER],
            bank_name=doc[BankAccountFields.BANK_NAME],
            routing_number=doc.get(BankAccountFields.ROUTING_NUMBER),
            swift_code=doc.get(BankAccountFields.SWIFT_CODE),
            is_default=bool(doc.get(BankAccountFields.IS_DEFAULT, False)),
            created_at=doc.get(BankAccountFields.CREATED_AT, now()),
            updated_at=doc.get(BankAccountFields.UPDATED_AT, now()),
        )

    def _to_document(self, account: BankAccount) -> dict:
        """Convert BankAccount entity to MongoDB document."""
        return {
            BankAccountFields.ID: account.id,
            BankAccountFields.OWNER_USER_ID: account.owner_user_id,
            BankAccountFields.ACCOUNT_NAME: account.account_name,
            BankAccountFields.ACCOUNT_NUMBER: account.account_number,
            BankAccountFields.BANK_NAME: account.bank_name,
            BankAccountFields.ROUTING_NUMBER: account.routing_number,
            BankAccountFields.SWIFT_CODE: account.swift_code,
            BankAccountFields.IS_DEFAULT: account.is_default,
            BankAccountFields.CREATED_AT: account.created_at,
            BankAccountFields.UPDATED_AT: account.updated_at,
        }

    @staticmethod
    def _owned(owner_user_id: str, account_id: str) -> dict:
        return {
            BankAccountFields.OWNER_USER_ID: owner_user_id,
            BankAccountFields.ID: account_id,
        }

    @translate_store_errors
    def create(self, account: BankAccount) -> BankAccount:
        """Create a new bank account."""
        account.created_at = now()
        account.updated_at = account.created_at

        self._collection.insert_one(self._to_document(account))
        return account

    @translate_store_errors
    def find_by_id(self, owner_user_id: str, account_id: str) -> Optional[BankAccount]:
        """Find one of the owner's accounts by ID."""
        doc = self._collection.find_one(self._owned(owner_user_id, account_id))
        if not doc:
            return None
        return self._to_entity(doc)

    @translate_store_errors
    def find_by_owner(self, owner_user_id: str) -> List[BankAccount]:
        """Find all accounts for an owner."""
        docs = self._collection.find(
            {BankAccountFields.OWNER_USER_ID: owner_user_id}
        ).sort([
            (BankAccountFields.IS_DEFAULT, DESCENDING),
            (BankAccountFields.CREATED_AT, DESCENDING),
        ])
        return [self._to_entity(doc) for doc in docs]

    @translate_store_errors
    def find_duplicate(
        self,
        owner_user_id: str,
        account_number: str,
        bank_name: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[BankAccount]:
        """Find an account with the same number at the same bank."""
        query: Dict[str, Any] = {
            BankAccountFields.OWNER_USER_ID: owner_user_id,
            BankAccountFields.ACCOUNT_NUMBER: account_number,
            BankAccountFields.BANK_NAME: bank_name,
        }
        if exclude_id:
            query[BankAccountFields.ID] = {"$ne": exclude_id}

        doc = self._collection.find_one(query)
        if not doc:
            return None
        return self._to_entity(doc)

    @translate_store_errors
    def count_by_owner(self, owner_user_id: str) -> int:
        """Count the owner's accounts."""
        return self._collection.count_documents({BankAccountFields.OWNER_USER_ID: owner_user_id})

    @translate_store_errors
    def update_fields(
        self,
        owner_user_id: str,
        account_id: str,
        fields: Dict[str, Any],
    ) -> Optional[BankAccount]:
        """Overwrite descriptive fields of an account."""
        changes = {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
        changes[BankAccountFields.UPDATED_AT] = now()

        result = self._collection.find_one_and_update(
            self._owned(owner_user_id, account_id),
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._to_entity(result)

    @translate_store_errors
    def make_sole_default(self, owner_user_id: str, account_id: str) -> bool:
        """
        Move the default flag to account_id.

        A single update_many with a pipeline recomputes is_default for the
        current default and the target together, so the clear and the set
        cannot be split by a failure between two separate writes.
        """
        target_exists = self._collection.count_documents(
            self._owned(owner_user_id, account_id), limit=1
        ) > 0
        if not target_exists:
            return False

        self._collection.update_many(
            {
                BankAccountFields.OWNER_USER_ID: owner_user_id,
                "$or": [
                    {BankAccountFields.IS_DEFAULT: True},
                    {BankAccountFields.ID: account_id},
                ],
            },
            [
                {
                    "$set": {
                        BankAccountFields.IS_DEFAULT: {
                            "$eq": [f"${BankAccountFields.ID}", {"$literal": account_id}]
                        },
                        BankAccountFields.UPDATED_AT: now(),
                    }
                }
            ],
        )
        return True

    @translate_store_errors
    def delete(self, owner_user_id: str, account_id: str) -> bool:
        """Delete an account."""
        result = self._collection.delete_one(self._owned(owner_user_id, account_id))
        return result.deleted_count > 0

    @translate_store_errors
    def ensure_indexes(self) -> None:
        """Create the indexes the workflows rely on."""
        self._collection.create_index([(BankAccountFields.ID, ASCENDING)], unique=True)
        self._collection.create_index([
            (BankAccountFields.OWNER_USER_ID, ASCENDING),
            (BankAccountFields.ACCOUNT_NUMBER, ASCENDING),
            (BankAccountFields.BANK_NAME, ASCENDING),
        ])
