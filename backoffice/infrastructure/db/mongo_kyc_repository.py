"""
MongoDB KYC Repository
======================

Concrete implementation of KycRepository using MongoDB.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from backoffice.core.config import get_settings
from backoffice.domain.models.kyc_submission import (
    AddressProofType,
    IdType,
    KycStatus,
    KycSubmission,
)
from backoffice.domain.repositories.kyc_repository import KycRepository
from backoffice.domain.constants.kyc_fields import KycFields
from backoffice.infrastructure.db.errors import translate_store_errors
from backoffice.infrastructure.db.mongo_connection import get_mongo_client
from backoffice.utils.datetime_utils import now

logger = logging.getLogger(__name__)


class MongoKycRepository(KycRepository):
    """MongoDB implementation of KycRepository."""

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_mongo_client().get_collection(get_settings().kyc_collection)
        self._collection = collection
        self._indexes_ready = False

    def _to_entity(self, doc: dict) -> KycSubmission:
        """Convert MongoDB document to KycSubmission entity."""
        return KycSubmission(
            id=doc[KycFields.ID],
            owner_user_id=doc[KycFields.OWNER_USER_ID],
            id_type=IdType(doc[KycFields.ID_TYPE]),
            id_number=doc[KycFields.ID_NUMBER],
            id_image_ref=doc[KycFields.ID_IMAGE_REF],
            selfie_image_ref=doc[KycFields.SELFIE_IMAGE_REF],
            address_proof_type=AddressProofType(doc[KycFields.ADDRESS_PROOF_TYPE]),
            address_proof_image_ref=doc[KycFields.ADDRESS_PROOF_IMAGE_REF],
            status=KycStatus(doc.get(KycFields.STATUS, KycStatus.PENDING.value)),
            rejection_reason=doc.get(KycFields.REJECTION_REASON),
            verified_by=doc.get(KycFields.VERIFIED_BY),
            verified_at=doc.get(KycFields.VERIFIED_AT),
            submitted_at=doc.get(KycFields.SUBMITTED_AT, now()),
            updated_at=doc.get(KycFields.UPDATED_AT, now()),
        )

    def _to_document(self, submission: KycSubmission) -> dict:
        """Convert KycSubmission entity to MongoDB document (unset optionals omitted)."""
        doc = {
            KycFields.ID: submission.id,
            KycFields.OWNER_USER_ID: submission.owner_user_id,
            KycFields.ID_TYPE: submission.id_type.value,
            KycFields.ID_NUMBER: submission.id_number,
            KycFields.ID_IMAGE_REF: submission.id_image_ref,
            KycFields.SELFIE_IMAGE_REF: submission.selfie_image_ref,
            KycFields.ADDRESS_PROOF_TYPE: submission.address_proof_type.value,
            KycFields.ADDRESS_PROOF_IMAGE_REF: submission.address_proof_image_ref,
            KycFields.STATUS: submission.status.value,
            KycFields.REJECTION_REASON: submission.rejection_reason,
            KycFields.VERIFIED_BY: submission.verified_by,
            KycFields.VERIFIED_AT: submission.verified_at,
            KycFields.SUBMITTED_AT: submission.submitted_at,
            KycFields.UPDATED_AT: submission.updated_at,
        }
        return {k: v for k, v in doc.items() if v is not None}

    @staticmethod
    def _status_filter(status: Optional[KycStatus]) -> dict:
        return {KycFields.STATUS: status.value} if status else {}

    @translate_store_errors
    def create(self, submission: KycSubmission) -> Optional[KycSubmission]:
        """Insert a first submission; None if the owner already has one."""
        # Inserts must not run before the unique owner index exists
        if not self._indexes_ready:
            self.ensure_indexes()
        try:
            self._collection.insert_one(self._to_document(submission))
        except DuplicateKeyError:
            logger.info("KYC submission for owner %s already exists", submission.owner_user_id)
            return None
        return submission

    @translate_store_errors
    def find_by_id(self, submission_id: str) -> Optional[KycSubmission]:
        doc = self._collection.find_one({KycFields.ID: submission_id})
        return self._to_entity(doc) if doc else None

    @translate_store_errors
    def find_by_owner(self, owner_user_id: str) -> Optional[KycSubmission]:
        doc = self._collection.find_one({KycFields.OWNER_USER_ID: owner_user_id})
        return self._to_entity(doc) if doc else None

    @translate_store_errors
    def find_many(
        self,
        status: Optional[KycStatus] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[KycSubmission]:
        docs = (
            self._collection.find(self._status_filter(status))
            .sort(KycFields.SUBMITTED_AT, DESCENDING)
            .skip(skip)
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in docs]

    @translate_store_errors
    def count(self, status: Optional[KycStatus] = None) -> int:
        return self._collection.count_documents(self._status_filter(status))

    @translate_store_errors
    def transition(
        self,
        submission_id: str,
        expected_status: KycStatus,
        changes: Dict[str, Any],
    ) -> Optional[KycSubmission]:
        """Conditional update keyed on the current status."""
        to_set: Dict[str, Any] = {KycFields.UPDATED_AT: now()}
        to_unset: Dict[str, str] = {}
        for key, value in changes.items():
            if value is None:
                to_unset[key] = ""
            else:
                to_set[key] = value.value if isinstance(value, Enum) else value

        update: Dict[str, Any] = {"$set": to_set}
        if to_unset:
            update["$unset"] = to_unset

        result = self._collection.find_one_and_update(
            {KycFields.ID: submission_id, KycFields.STATUS: expected_status.value},
            update,
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._to_entity(result)

    @translate_store_errors
    def ensure_indexes(self) -> None:
        """One submission record per owner."""
        self._collection.create_index([(KycFields.ID, ASCENDING)], unique=True)
        self._collection.create_index([(KycFields.OWNER_USER_ID, ASCENDING)], unique=True)
        self._collection.create_index([(KycFields.STATUS, ASCENDING), (KycFields.SUBMITTED_AT, DESCENDING)])
        self._indexes_ready = True
