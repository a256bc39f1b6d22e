"""
MongoDB Support Ticket Repository
=================================

Concrete implementation of SupportTicketRepository using MongoDB.

Reviewer replies and assignment use pipeline updates so that the message
append, the move to in-progress and the first-responder assignment land in
one write on one document. Which status may move is decided by the caller.
"""
from enum import Enum
from typing import Any, Dict, List, Optional
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection

from backoffice.core.config import get_settings
from backoffice.domain.models.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketMessage,
    TicketPriority,
    TicketStatus,
)
from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository
from backoffice.domain.constants.ticket_fields import TicketFields, TicketMessageFields
from backoffice.infrastructure.db.errors import translate_store_errors
from backoffice.infrastructure.db.mongo_connection import get_mongo_client
from backoffice.utils.datetime_utils import now


def _still_in(status: TicketStatus) -> dict:
    return {"$eq": [f"${TicketFields.STATUS}", status.value]}


def _promoted_status(promote_from: Optional[TicketStatus]) -> Any:
    """Pipeline expression: promote_from becomes in-progress, anything else is kept."""
    if promote_from is None:
        return f"${TicketFields.STATUS}"
    return {
        "$cond": [
            _still_in(promote_from),
            TicketStatus.IN_PROGRESS.value,
            f"${TicketFields.STATUS}",
        ]
    }


class MongoSupportTicketRepository(SupportTicketRepository):
    """MongoDB implementation of SupportTicketRepository."""

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            collection = get_mongo_client().get_collection(
                get_settings().support_tickets_collection
            )
        self._collection = collection

    def _message_to_entity(self, doc: dict) -> TicketMessage:
        return TicketMessage(
            sender_id=doc[TicketMessageFields.SENDER_ID],
            text=doc[TicketMessageFields.TEXT],
            attachments=list(doc.get(TicketMessageFields.ATTACHMENTS) or []),
            created_at=doc.get(TicketMessageFields.CREATED_AT, now()),
        )

    def _message_to_document(self, message: TicketMessage) -> dict:
        return {
            TicketMessageFields.SENDER_ID: message.sender_id,
            TicketMessageFields.TEXT: message.text,
            TicketMessageFields.ATTACHMENTS: list(message.attachments),
            TicketMessageFields.CREATED_AT: message.created_at,
        }

    def _to_entity(self, doc: dict) -> SupportTicket:
        """Convert MongoDB document to SupportTicket entity."""
        return SupportTicket(
            id=doc[TicketFields.ID],
            owner_user_id=doc[TicketFields.OWNER_USER_ID],
            subject=doc[TicketFields.SUBJECT],
            category=TicketCategory(doc[TicketFields.CATEGORY]),
            priority=TicketPriority(doc.get(TicketFields.PRIORITY, TicketPriority.MEDIUM.value)),
            status=TicketStatus(doc.get(TicketFields.STATUS, TicketStatus.OPEN.value)),
            messages=[self._message_to_entity(m) for m in doc.get(TicketFields.MESSAGES) or []],
            assigned_to=doc.get(TicketFields.ASSIGNED_TO),
            closed_at=doc.get(TicketFields.CLOSED_AT),
            closed_by=doc.get(TicketFields.CLOSED_BY),
            created_at=doc.get(TicketFields.CREATED_AT, now()),
            updated_at=doc.get(TicketFields.UPDATED_AT, now()),
        )

    def _to_document(self, ticket: SupportTicket) -> dict:
        """Convert SupportTicket entity to MongoDB document."""
        return {
            TicketFields.ID: ticket.id,
            TicketFields.OWNER_USER_ID: ticket.owner_user_id,
            TicketFields.SUBJECT: ticket.subject,
            TicketFields.CATEGORY: ticket.category.value,
            TicketFields.PRIORITY: ticket.priority.value,
            TicketFields.STATUS: ticket.status.value,
            TicketFields.MESSAGES: [self._message_to_document(m) for m in ticket.messages],
            TicketFields.ASSIGNED_TO: ticket.assigned_to,
            TicketFields.CLOSED_AT: ticket.closed_at,
            TicketFields.CLOSED_BY: ticket.closed_by,
            TicketFields.CREATED_AT: ticket.created_at,
            TicketFields.UPDATED_AT: ticket.updated_at,
        }

    @staticmethod
    def _filter(
        owner_user_id: Optional[str],
        status: Optional[TicketStatus],
        category: Optional[TicketCategory],
        priority: Optional[TicketPriority],
    ) -> dict:
        query: Dict[str, Any] = {}
        if owner_user_id:
            query[TicketFields.OWNER_USER_ID] = owner_user_id
        if status:
            query[TicketFields.STATUS] = status.value
        if category:
            query[TicketFields.CATEGORY] = category.value
        if priority:
            query[TicketFields.PRIORITY] = priority.value
        return query

    @translate_store_errors
    def create(self, ticket: SupportTicket) -> SupportTicket:
        ticket.created_at = now()
        ticket.updated_at = ticket.created_at
        self._collection.insert_one(self._to_document(ticket))
        return ticket

    @translate_store_errors
    def find_by_id(self, ticket_id: str) -> Optional[SupportTicket]:
        doc = self._collection.find_one({TicketFields.ID: ticket_id})
        return self._to_entity(doc) if doc else None

    @translate_store_errors
    def find_many(
        self,
        owner_user_id: Optional[str] = None,
        status: Optional[TicketStatus] = None,
        category: Optional[TicketCategory] = None,
        priority: Optional[TicketPriority] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[SupportTicket]:
        docs = (
            self._collection.find(self._filter(owner_user_id, status, category, priority))
            .sort(TicketFields.UPDATED_AT, DESCENDING)
            .skip(skip)
            .limit(limit)
        )
        return [self._to_entity(doc) for doc in docs]

    @translate_store_errors
    def count(
        self,
        owner_user_id: Optional[str] = None,
        status: Optional[TicketStatus] = None,
        category: Optional[TicketCategory] = None,
        priority: Optional[TicketPriority] = None,
    ) -> int:
        return self._collection.count_documents(
            self._filter(owner_user_id, status, category, priority)
        )

    @translate_store_errors
    def append_message(
        self,
        ticket_id: str,
        message: TicketMessage,
        responder_id: Optional[str] = None,
        promote_from: Optional[TicketStatus] = None,
    ) -> Optional[SupportTicket]:
        """Append unless closed; a promoting reviewer reply also assigns."""
        query = {
            TicketFields.ID: ticket_id,
            TicketFields.STATUS: {"$ne": TicketStatus.CLOSED.value},
        }
        message_doc = self._message_to_document(message)

        if responder_id is None or promote_from is None:
            update: Any = {
                "$push": {TicketFields.MESSAGES: message_doc},
                "$set": {TicketFields.UPDATED_AT: now()},
            }
        else:
            # $literal keeps user text starting with "$" from being read as a field path
            update = [
                {
                    "$set": {
                        TicketFields.MESSAGES: {
                            "$concatArrays": [
                                {"$ifNull": [f"${TicketFields.MESSAGES}", []]},
                                {"$literal": [message_doc]},
                            ]
                        },
                        TicketFields.STATUS: _promoted_status(promote_from),
                        TicketFields.ASSIGNED_TO: {
                            "$cond": [
                                _still_in(promote_from),
                                {"$ifNull": [f"${TicketFields.ASSIGNED_TO}", {"$literal": responder_id}]},
                                f"${TicketFields.ASSIGNED_TO}",
                            ]
                        },
                        TicketFields.UPDATED_AT: now(),
                    }
                }
            ]

        result = self._collection.find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )
        return self._to_entity(result) if result else None

    @translate_store_errors
    def assign(
        self,
        ticket_id: str,
        assignee_id: str,
        promote_from: Optional[TicketStatus] = None,
    ) -> Optional[SupportTicket]:
        result = self._collection.find_one_and_update(
            {TicketFields.ID: ticket_id},
            [
                {
                    "$set": {
                        TicketFields.ASSIGNED_TO: {"$literal": assignee_id},
                        TicketFields.STATUS: _promoted_status(promote_from),
                        TicketFields.UPDATED_AT: now(),
                    }
                }
            ],
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(result) if result else None

    @translate_store_errors
    def update(self, ticket_id: str, changes: Dict[str, Any]) -> Optional[SupportTicket]:
        to_set = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in changes.items()
        }
        to_set[TicketFields.UPDATED_AT] = now()

        result = self._collection.find_one_and_update(
            {TicketFields.ID: ticket_id},
            {"$set": to_set},
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(result) if result else None

    @translate_store_errors
    def ensure_indexes(self) -> None:
        self._collection.create_index([(TicketFields.ID, ASCENDING)], unique=True)
        self._collection.create_index([
            (TicketFields.OWNER_USER_ID, ASCENDING),
            (TicketFields.UPDATED_AT, DESCENDING),
        ])
