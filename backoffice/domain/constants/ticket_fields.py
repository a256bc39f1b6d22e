"""Constants for SupportTicket model field names"""


class TicketFields:
    """Field name constants for SupportTicket model"""
    ID = "id"
    OWNER_USER_ID = "owner_user_id"
    SUBJECT = "subject"
    CATEGORY = "category"
    STATUS = "status"
    PRIORITY = "priority"
    MESSAGES = "messages"
    ASSIGNED_TO = "assigned_to"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    CLOSED_AT = "closed_at"
    CLOSED_BY = "closed_by"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field


class TicketMessageFields:
    """Field name constants for messages embedded in a ticket"""
    SENDER_ID = "sender_id"
    TEXT = "text"
    ATTACHMENTS = "attachments"
    CREATED_AT = "created_at"
