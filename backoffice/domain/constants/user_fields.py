"""Constants for UserProfile field names"""


class UserFields:
    """Field name constants for the users collection"""
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    VERIFICATION_STATUS = "verification_status"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
