"""
MongoDB User Directory
======================

Reads owner profiles from the platform's users collection and maintains
their verification_status field.
"""
from typing import List, Optional
from bson import ObjectId
from pymongo.collection import Collection

from backoffice.core.config import get_settings
from backoffice.domain.models.user import UserProfile, UserRole, VerificationStatus
from backoffice.domain.repositories.user_directory import UserDirectory
from backoffice.domain.constants.user_fields import UserFields
from backoffice.infrastructure.db.errors import translate_store_errors
from backoffice.infrastructure.db.mongo_connection import get_mongo_client
from backoffice.utils.datetime_utils import now


class MongoUserDirectory(UserDirectory):
    """MongoDB implementation of UserDirectory."""

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_mongo_client().get_collection(get_settings().users_collection)
        self._collection = collection

    @staticmethod
    def _by_id(user_id: str) -> dict:
        # Users created by the platform carry an ObjectId _id; imported ones an "id" field
        candidates: List[dict] = [{UserFields.ID: user_id}, {UserFields.MONGO_ID: user_id}]
        if ObjectId.is_valid(user_id):
            candidates.append({UserFields.MONGO_ID: ObjectId(user_id)})
        return {"$or": candidates}

    def _to_entity(self, doc: dict, user_id: str) -> UserProfile:
        role = doc.get(UserFields.ROLE, UserRole.USER.value)
        status = doc.get(UserFields.VERIFICATION_STATUS, VerificationStatus.NONE.value)
        return UserProfile(
            id=str(doc.get(UserFields.ID) or user_id),
            email=doc.get(UserFields.EMAIL),
            name=doc.get(UserFields.NAME),
            role=UserRole(role) if role in UserRole._value2member_map_ else UserRole.USER,
            verification_status=(
                VerificationStatus(status)
                if status in VerificationStatus._value2member_map_
                else VerificationStatus.NONE
            ),
        )

    @translate_store_errors
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        doc = self._collection.find_one(self._by_id(user_id))
        if not doc:
            return None
        return self._to_entity(doc, user_id)

    @translate_store_errors
    def set_verification_status(self, user_id: str, status: VerificationStatus) -> bool:
        result = self._collection.update_one(
            self._by_id(user_id),
            {
                "$set": {
                    UserFields.VERIFICATION_STATUS: status.value,
                    UserFields.UPDATED_AT: now(),
                }
            },
        )
        return result.matched_count > 0
